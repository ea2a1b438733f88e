"""LangSmith tracing for metered backend calls.

Tracing is off unless LANGSMITH_TRACING=true; the decorator is then the identity,
`trace` yields None, and langsmith is never imported.
"""

from __future__ import annotations

import atexit
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from langsmith import Client as LangSmithClient

_PROJECT = os.getenv("LANGSMITH_PROJECT", "introlink")
_client: LangSmithClient | None = None


def tracing_enabled() -> bool:
    return os.getenv("LANGSMITH_TRACING", "").strip().lower() == "true"


def get_client() -> LangSmithClient | None:
    global _client
    if not tracing_enabled():
        return None
    if _client is None:
        from langsmith import Client

        _client = Client()
        atexit.register(flush)
    return _client


def traceable(
    name: str,
    run_type: str = "tool",
    **kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Trace the decorated coroutine as one LangSmith run when enabled."""
    if not tracing_enabled():
        return lambda fn: fn

    from langsmith import traceable as _ls_traceable

    return _ls_traceable(  # type: ignore[call-overload]
        name=name,
        run_type=run_type,
        project_name=_PROJECT,
        client=get_client(),
        tags=["introlink", *kwargs.pop("tags", [])],
        **kwargs,
    )


@contextmanager
def trace(name: str, run_type: str = "chain", **kwargs: Any) -> Iterator[Any]:
    """Open a LangSmith run around a block; yields the run, or None when disabled."""
    if not tracing_enabled():
        yield None
        return

    from langsmith import trace as _ls_trace

    with _ls_trace(
        name=name,
        run_type=run_type,
        project_name=_PROJECT,
        client=get_client(),
        tags=["introlink", *kwargs.pop("tags", [])],
        **kwargs,
    ) as run:
        yield run


def flush() -> None:
    if _client is not None:
        _client.flush()
