"""Search surface registry: what each domain sends, where, and how results come back.

A surface is the only per-domain knowledge the orchestrator and the HTTP
backend need. Adding a search surface means registering one SearchSurface.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from introlink.contracts.search_v1 import SearchRequestBase
from introlink.core.config import config
from introlink.orchestrators.search.constants import SearchDomain
from introlink.orchestrators.search.normalizer import (
    JobSearchForm,
    PeopleSearchForm,
    normalize_job_search,
    normalize_people_search,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchSurface:
    domain: str
    form_type: type
    normalize: Callable[[Any], SearchRequestBase]
    search_path: str
    quote_path: str
    # Key older backends use instead of "items" (e.g. "jobs").
    items_key: str = "items"


class SurfaceRegistry:
    """Stores search surfaces by domain."""

    def __init__(self) -> None:
        self._surfaces: dict[str, SearchSurface] = {}

    def register(self, surface: SearchSurface) -> None:
        self._surfaces[surface.domain] = surface
        logger.debug(
            "Registered search surface: domain=%s search=%s quote=%s",
            surface.domain,
            surface.search_path,
            surface.quote_path,
        )

    def get(self, domain: str) -> SearchSurface:
        try:
            return self._surfaces[domain]
        except KeyError:
            raise KeyError(f"No search surface registered for domain {domain!r}") from None

    def domains(self) -> list[str]:
        return list(self._surfaces.keys())

    def __contains__(self, domain: object) -> bool:
        return domain in self._surfaces


def default_surfaces() -> SurfaceRegistry:
    """Job and people search, with endpoint paths from config."""
    registry = SurfaceRegistry()
    registry.register(
        SearchSurface(
            domain=SearchDomain.JOBS,
            form_type=JobSearchForm,
            normalize=normalize_job_search,
            search_path=config.job_search_path,
            quote_path=config.job_quote_path,
            items_key="jobs",
        )
    )
    registry.register(
        SearchSurface(
            domain=SearchDomain.PEOPLE,
            form_type=PeopleSearchForm,
            normalize=normalize_people_search,
            search_path=config.people_search_path,
            quote_path=config.people_quote_path,
            items_key="contacts",
        )
    )
    return registry
