"""Metered search: filter normalization, request lifecycle, receipt reconciliation."""

from introlink.orchestrators.search.accumulator import (
    InMemoryResultsAccumulator,
    ResultsAccumulator,
)
from introlink.orchestrators.search.constants import ErrorKind, SearchDomain
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
from introlink.orchestrators.search.normalizer import (
    JobSearchForm,
    PeopleSearchForm,
    normalize,
)
from introlink.orchestrators.search.orchestrator import (
    SearchOrchestrator,
    job_search,
    people_search,
)

__all__ = [
    "ErrorKind",
    "FilterValidationError",
    "Idle",
    "InFlight",
    "InMemoryResultsAccumulator",
    "JobSearchForm",
    "LifecycleState",
    "PeopleSearchForm",
    "ResultsAccumulator",
    "SearchBackend",
    "SearchDomain",
    "SearchError",
    "SearchFailure",
    "SearchOrchestrator",
    "SearchOutcome",
    "SearchSuccess",
    "Settled",
    "job_search",
    "normalize",
    "people_search",
]
