"""HTTP backend for the metered search API. Returns BackendReply / Quote."""

import json
import logging
import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from introlink.contracts.search_v1 import Quote
from introlink.core.config import config
from introlink.observability import traceable
from introlink.orchestrators.search.errors import (
    ProtocolError,
    RejectedError,
    TransportError,
)
from introlink.orchestrators.search.interface import SearchBackend
from introlink.orchestrators.search.models import BackendReply
from introlink.orchestrators.search.surfaces import SurfaceRegistry, default_surfaces

logger = logging.getLogger(__name__)


def _decode_json(
    response: httpx.Response, parse_float: Callable[[str], Any] | None = None
) -> Any:
    text = response.text
    if not text.strip():
        raise ProtocolError(
            f"Empty response body from search backend (HTTP {response.status_code})"
        )
    try:
        return json.loads(text, parse_float=parse_float)
    except json.JSONDecodeError as e:
        raise ProtocolError(
            f"Response body is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
        ) from e


def _error_message(response: httpx.Response) -> str:
    """Server-supplied `error` string, or a generic line naming the status."""
    try:
        body = json.loads(response.text) if response.text.strip() else None
    except json.JSONDecodeError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error.strip():
            return error.strip()
    return f"Search failed (HTTP {response.status_code})"


def _parse_search_body(body: Any, items_key: str) -> BackendReply:
    if not isinstance(body, dict):
        raise ProtocolError(
            f"Response body is not a JSON object (got {type(body).__name__})"
        )
    if "items" in body:
        items = body["items"]
    elif items_key in body:
        items = body[items_key]
    else:
        raise ProtocolError(f"Response body has no 'items' list (keys: {sorted(body)})")
    if not isinstance(items, list):
        raise ProtocolError(f"'items' is not a list (got {type(items).__name__})")

    receipt = body.get("receipt")
    if receipt is not None and not isinstance(receipt, dict):
        raise ProtocolError(f"'receipt' is not an object (got {type(receipt).__name__})")
    return BackendReply(items=items, receipt=receipt)


class HttpSearchBackend(SearchBackend):
    def __init__(
        self,
        base_url: str | None = None,
        surfaces: SurfaceRegistry | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = (base_url or config.api_base_url).rstrip("/")
        self._surfaces = surfaces or default_surfaces()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout or config.http_timeout_seconds,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "HttpSearchBackend":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @traceable(name="metered_search", run_type="tool")
    async def search(self, domain: str, payload: dict[str, Any]) -> BackendReply:
        surface = self._surfaces.get(domain)
        response = await self._post(surface.search_path, payload)
        reply = _parse_search_body(_decode_json(response), surface.items_key)
        if reply.receipt is not None:
            # Re-read the receipt with Decimal floats so the amount keeps every digit sent.
            reply.receipt = _decode_json(response, parse_float=Decimal)["receipt"]
        return reply

    @traceable(name="metered_search_quote", run_type="tool")
    async def quote(self, domain: str, payload: dict[str, Any]) -> Quote:
        surface = self._surfaces.get(domain)
        body = _decode_json(await self._post(surface.quote_path, payload))
        raw = body.get("quote", body) if isinstance(body, dict) else body
        if not isinstance(raw, dict):
            raise ProtocolError(
                f"Quote response is not a JSON object (got {type(raw).__name__})"
            )
        try:
            return Quote.model_validate(raw)
        except ValidationError as e:
            raise ProtocolError(f"Invalid quote in response: {e}") from e

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self._base_url}{path}"
        t0 = time.monotonic()
        try:
            response = await self._client.post(url, json=payload)
        except httpx.TransportError as e:
            raise TransportError(
                f"Could not reach search backend at {url}: {type(e).__name__}: {e}"
            ) from e
        elapsed_ms = round((time.monotonic() - t0) * 1000, 1)
        logger.debug("POST %s -> %s in %.1fms", path, response.status_code, elapsed_ms)

        if not response.is_success:
            raise RejectedError(_error_message(response), response.status_code)
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
