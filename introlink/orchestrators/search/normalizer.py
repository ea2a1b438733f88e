"""Filter normalizer: raw form state -> canonical, backend-ready search requests.

Free text is trimmed (whitespace-only means absent), enum labels go through the
fixed tables in constants, and the result-count bound is clamped rather than
rejected. A form that cannot become a request raises FilterValidationError.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from introlink.contracts.search_v1 import JobSearchRequest, PeopleSearchRequest
from introlink.orchestrators.search.constants import (
    ALL_LABEL,
    DATE_POSTED_LABELS,
    EMPLOYMENT_TYPE_LABELS,
    JOB_LIMIT,
    PEOPLE_LIMIT,
    SENIORITY_LEVEL_LABELS,
    WORK_ARRANGEMENT_LABELS,
    LimitBounds,
    ValidationReason,
)
from introlink.orchestrators.search.errors import FilterValidationError

E = TypeVar("E")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
# Older people-search forms call the result-count bound numResults.
_KEY_ALIASES = {"num_results": "limit"}


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


class _FormMixin:
    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]):
        """Build a form from a dict using either camelCase or snake_case keys.

        Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        values = {}
        for key, value in raw.items():
            name = _snake_case(key)
            name = _KEY_ALIASES.get(name, name)
            if name in known:
                values[name] = value
        return cls(**values)


@dataclass
class JobSearchForm(_FormMixin):
    """Raw job-search form state, exactly as the user left it."""

    keywords: str | None = ""
    location: str | None = ""
    company: str | None = ""
    work_arrangement: str | None = ALL_LABEL
    seniority_level: str | None = ALL_LABEL
    employment_type: str | None = ALL_LABEL
    date_posted: str | None = ALL_LABEL
    easy_apply_only: bool = False
    limit: Any = JOB_LIMIT.default


@dataclass
class PeopleSearchForm(_FormMixin):
    """Raw people-search form state.

    With use_custom_query set only `query` is used; otherwise `company`
    (required) and `role`.
    """

    company: str | None = ""
    role: str | None = ""
    query: str | None = ""
    use_custom_query: bool = False
    enrich_contacts: bool = False
    limit: Any = PEOPLE_LIMIT.default


SearchForm = JobSearchForm | PeopleSearchForm


def clean_text(value: Any) -> str | None:
    """Trimmed text, or None when blank. Anything that is not a string counts as blank."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def map_label(field: str, label: str | None, table: Mapping[str, E | None]) -> E | None:
    """Look up a UI label; the "All" sentinel (or no selection) maps to None."""
    key = ALL_LABEL if label is None else label
    if isinstance(key, str) and key.strip() in table:
        return table[key.strip()]
    raise FilterValidationError(
        field,
        ValidationReason.UNMAPPED,
        f"Unknown {field} option: {label!r}",
    )


def _coerce_number(raw: Any) -> int | float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return None if math.isnan(raw) else raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def clamp_limit(raw: Any, bounds: LimitBounds) -> int:
    """Clamp numeric input into bounds (truncating fractions); anything else -> default."""
    number = _coerce_number(raw)
    if number is None:
        return bounds.default
    if isinstance(number, float) and math.isinf(number):
        return bounds.maximum if number > 0 else bounds.minimum
    return bounds.clamp(int(number))


def normalize_job_search(form: JobSearchForm) -> JobSearchRequest:
    keywords = clean_text(form.keywords)
    if keywords is None:
        raise FilterValidationError(
            "keywords", ValidationReason.REQUIRED, "Please enter job keywords"
        )
    return JobSearchRequest(
        keywords=keywords,
        location=clean_text(form.location),
        company=clean_text(form.company),
        work_arrangement=map_label(
            "workArrangement", form.work_arrangement, WORK_ARRANGEMENT_LABELS
        ),
        seniority_level=map_label(
            "seniorityLevel", form.seniority_level, SENIORITY_LEVEL_LABELS
        ),
        employment_type=map_label(
            "employmentType", form.employment_type, EMPLOYMENT_TYPE_LABELS
        ),
        date_posted=map_label("datePosted", form.date_posted, DATE_POSTED_LABELS),
        easy_apply_only=True if form.easy_apply_only is True else None,
        limit=clamp_limit(form.limit, JOB_LIMIT),
    )


def normalize_people_search(form: PeopleSearchForm) -> PeopleSearchRequest:
    limit = clamp_limit(form.limit, PEOPLE_LIMIT)
    enrich_contacts = True if form.enrich_contacts is True else None

    if form.use_custom_query:
        query = clean_text(form.query)
        if query is None:
            raise FilterValidationError(
                "query", ValidationReason.REQUIRED, "Please enter a search query"
            )
        return PeopleSearchRequest(
            query=query, enrich_contacts=enrich_contacts, limit=limit
        )

    company = clean_text(form.company)
    if company is None:
        raise FilterValidationError(
            "company", ValidationReason.REQUIRED, "Please enter a company name"
        )
    return PeopleSearchRequest(
        company=company,
        role=clean_text(form.role),
        enrich_contacts=enrich_contacts,
        limit=limit,
    )


def normalize(form: SearchForm) -> JobSearchRequest | PeopleSearchRequest:
    if isinstance(form, JobSearchForm):
        return normalize_job_search(form)
    if isinstance(form, PeopleSearchForm):
        return normalize_people_search(form)
    raise TypeError(f"Unsupported search form: {type(form).__name__}")
