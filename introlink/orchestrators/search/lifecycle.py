"""Request lifecycle controller: Idle -> InFlight(id) -> Settled(outcome).

Every submission gets a fresh id from a monotonically increasing counter. A
response is accepted only if its id is still the latest submission; anything
older was superseded and is dropped. The superseded network call is not
cancelled, only ignored.
"""

import asyncio
import itertools

from introlink.contracts.search_v1 import SearchRequestBase
from introlink.core.logger import logger
from introlink.orchestrators.search.constants import ErrorKind
from introlink.orchestrators.search.errors import FilterValidationError, SearchError
from introlink.orchestrators.search.interface import SearchBackend
from introlink.orchestrators.search.models import (
    Idle,
    InFlight,
    LifecycleState,
    SearchFailure,
    SearchOutcome,
    SearchSuccess,
    Settled,
)
from introlink.orchestrators.search.receipts import ReceiptReconciler


class RequestLifecycleController:
    """Sole writer of one search surface's LifecycleState."""

    def __init__(
        self,
        domain: str,
        backend: SearchBackend,
        reconciler: ReceiptReconciler | None = None,
    ):
        self._domain = domain
        self._backend = backend
        self._reconciler = reconciler or ReceiptReconciler(domain)
        self._ids = itertools.count(1)
        self._latest_id = 0
        self._state: LifecycleState = Idle()

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def error(self) -> SearchFailure | None:
        """Failure currently surfaced to the caller; cleared by the next submission."""
        if isinstance(self._state, Settled) and isinstance(self._state.outcome, SearchFailure):
            return self._state.outcome
        return None

    @property
    def latest_id(self) -> int:
        return self._latest_id

    def _next_id(self) -> int:
        self._latest_id = next(self._ids)
        return self._latest_id

    def begin(self) -> InFlight:
        self._state = InFlight(self._next_id())
        return self._state

    def reject(self, error: FilterValidationError) -> Settled:
        """Settle a submission that never left the client.

        It still counts as the latest submission, so older in-flight responses
        are discarded when they arrive.
        """
        request_id = self._next_id()
        logger.validation_failed(self._domain, error.field, str(error.reason))
        self._state = Settled(SearchFailure.from_error(error, request_id))
        return self._state

    def settle(self, request_id: int, outcome: SearchOutcome) -> Settled | None:
        if request_id != self._latest_id:
            logger.response_discarded(self._domain, request_id, self._latest_id)
            return None
        self._state = Settled(outcome)
        if isinstance(outcome, SearchSuccess):
            logger.search_settled(
                self._domain, request_id, True, item_count=len(outcome.items)
            )
        else:
            logger.search_settled(
                self._domain,
                request_id,
                False,
                reason=str(outcome.reason),
                message=outcome.message,
            )
        return self._state

    async def perform(self, in_flight: InFlight, request: SearchRequestBase) -> Settled | None:
        """Call the backend for `in_flight` and settle, unless superseded meanwhile."""
        request_id = in_flight.request_id
        payload = request.to_payload()
        logger.search_submitted(self._domain, request_id, payload)
        try:
            reply = await self._backend.search(self._domain, payload)
            outcome: SearchOutcome = self._reconciler.reconcile(request_id, reply)
        except SearchError as e:
            outcome = SearchFailure.from_error(e, request_id)
        except asyncio.CancelledError:
            self.settle(
                request_id,
                SearchFailure(ErrorKind.TRANSPORT, "Search was cancelled", request_id=request_id),
            )
            raise
        except Exception as e:
            logger.error(f"{self._domain}#{request_id}: unexpected backend failure", exception=e)
            outcome = SearchFailure(
                ErrorKind.TRANSPORT,
                f"Unexpected backend failure: {type(e).__name__}: {e}",
                request_id=request_id,
            )
        return self.settle(request_id, outcome)
