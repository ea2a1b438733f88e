"""Search orchestrator: the single entry point each search surface uses.

Pipeline per submission:
  1. Normalize the raw form (validation failures settle at once, no network call)
  2. InFlight(id): call the metered backend
  3. Reconcile the receipt with the items it paid for
  4. Settle, unless a newer submission superseded this one
  5. Prepend accepted items to the results accumulator
"""

from collections.abc import AsyncIterator
from typing import Any

from introlink.contracts.search_v1 import Quote, SearchRequestBase
from introlink.observability import trace
from introlink.orchestrators.search.accumulator import ResultsAccumulator
from introlink.orchestrators.search.constants import SearchDomain
from introlink.orchestrators.search.errors import FilterValidationError
from introlink.orchestrators.search.interface import SearchBackend
from introlink.orchestrators.search.lifecycle import RequestLifecycleController
from introlink.orchestrators.search.models import (
    LifecycleState,
    SearchFailure,
    SearchSuccess,
    Settled,
)
from introlink.orchestrators.search.surfaces import SurfaceRegistry, default_surfaces


class SearchOrchestrator:
    """Lifecycle-tracked, receipt-annotated searches for one surface.

    Each surface (jobs, people, ...) gets its own instance; instances share no
    state, so a slow search on one surface never affects another.
    """

    def __init__(
        self,
        domain: str,
        backend: SearchBackend,
        accumulator: ResultsAccumulator | None = None,
        surfaces: SurfaceRegistry | None = None,
    ):
        self._surface = (surfaces or default_surfaces()).get(domain)
        self._backend = backend
        self._accumulator = accumulator
        self._controller = RequestLifecycleController(self._surface.domain, backend)

    @property
    def domain(self) -> str:
        return self._surface.domain

    @property
    def state(self) -> LifecycleState:
        return self._controller.state

    @property
    def error(self) -> SearchFailure | None:
        return self._controller.error

    def normalize(self, form: Any) -> SearchRequestBase:
        if not isinstance(form, self._surface.form_type):
            raise TypeError(
                f"{self.domain} search expects {self._surface.form_type.__name__}, "
                f"got {type(form).__name__}"
            )
        return self._surface.normalize(form)

    async def submit(self, form: Any) -> AsyncIterator[LifecycleState]:
        """Yield the state snapshots this submission produces.

        InFlight then Settled normally; only Settled for an invalid form; only
        InFlight when a newer submission superseded this one.
        """
        try:
            request = self.normalize(form)
        except FilterValidationError as e:
            yield self._controller.reject(e)
            return

        in_flight = self._controller.begin()
        yield in_flight

        settled = await self._controller.perform(in_flight, request)
        if settled is None:
            return
        if isinstance(settled.outcome, SearchSuccess) and self._accumulator is not None:
            self._accumulator.prepend(settled.outcome.items)
        yield settled

    async def search(self, form: Any) -> LifecycleState:
        """Run one submission to completion and return the orchestrator's state."""
        with trace(f"{self.domain}_search", inputs={"domain": self.domain}) as run:
            async for _ in self.submit(form):
                pass
            if run is not None and isinstance(self.state, Settled):
                run.end(outputs=self.state.outcome.to_dict())
        return self.state

    async def quote(self, form: Any) -> Quote:
        """Price a search without paying for it. Lifecycle state is untouched.

        Raises FilterValidationError or another SearchError.
        """
        request = self.normalize(form)
        return await self._backend.quote(self.domain, request.to_payload())


def job_search(
    backend: SearchBackend,
    accumulator: ResultsAccumulator | None = None,
) -> SearchOrchestrator:
    return SearchOrchestrator(SearchDomain.JOBS, backend, accumulator)


def people_search(
    backend: SearchBackend,
    accumulator: ResultsAccumulator | None = None,
) -> SearchOrchestrator:
    return SearchOrchestrator(SearchDomain.PEOPLE, backend, accumulator)
