"""Standard interface for the metered search backend.

Implementations raise SearchError subclasses (TransportError, RejectedError,
ProtocolError) instead of returning partial data; the lifecycle controller
turns those into SearchFailure outcomes.
"""

from abc import ABC, abstractmethod
from typing import Any

from introlink.contracts.search_v1 import Quote
from introlink.orchestrators.search.models import BackendReply


class SearchBackend(ABC):
    """Base class for metered search backends."""

    @abstractmethod
    async def search(self, domain: str, payload: dict[str, Any]) -> BackendReply:
        """Run one paid search and return its items and raw receipt."""

    @abstractmethod
    async def quote(self, domain: str, payload: dict[str, Any]) -> Quote:
        """Ask for the price of a search without paying for it."""

    async def aclose(self) -> None:
        """Release transport resources."""
