"""Search outcome and lifecycle state values.

A SearchOutcome is exactly one of SearchSuccess / SearchFailure. A
LifecycleState is exactly one of Idle / InFlight / Settled.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from introlink.contracts.search_v1 import Receipt
from introlink.orchestrators.search.constants import ErrorKind
from introlink.orchestrators.search.errors import (
    FilterValidationError,
    RejectedError,
    SearchError,
)


@dataclass(frozen=True)
class SearchSuccess:
    """Results of one completed request, with the receipt that paid for them."""

    request_id: int
    items: tuple[Any, ...] = field(default_factory=tuple)
    receipt: Receipt | None = None

    @property
    def cost_per_item(self) -> Decimal | None:
        if self.receipt is None or not self.items:
            return None
        return self.receipt.amount_paid_usd / len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "success",
            "request_id": self.request_id,
            "items": list(self.items),
            "receipt": self.receipt.model_dump(mode="json") if self.receipt else None,
        }


@dataclass(frozen=True)
class SearchFailure:
    reason: ErrorKind
    message: str
    field: str | None = None
    status_code: int | None = None
    request_id: int | None = None

    @classmethod
    def from_error(cls, error: SearchError, request_id: int | None = None) -> "SearchFailure":
        return cls(
            reason=error.kind,
            message=error.message,
            field=error.field if isinstance(error, FilterValidationError) else None,
            status_code=error.status_code if isinstance(error, RejectedError) else None,
            request_id=request_id,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": "failure",
            "request_id": self.request_id,
            "reason": str(self.reason),
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


SearchOutcome = SearchSuccess | SearchFailure


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class InFlight:
    request_id: int


@dataclass(frozen=True)
class Settled:
    outcome: SearchOutcome

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, SearchSuccess)


LifecycleState = Idle | InFlight | Settled


@dataclass
class BackendReply:
    """Decoded 2xx body before its receipt has been reconciled."""

    items: list[Any] = field(default_factory=list)
    receipt: dict[str, Any] | None = None
