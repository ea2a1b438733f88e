"""Metered Search Contract v1.

Defines the canonical types exchanged with the pay-per-query backend:
  - Canonical filter tokens (WorkArrangement, SeniorityLevel, ...)
  - Search request payloads (JobSearchRequest, PeopleSearchRequest)
  - Payment metadata (Receipt, Quote)

Requests serialize with camelCase keys and omit absent fields, so the JSON body
posted to the backend is exactly `{ ...filters, limit, strategy }`.
"""

from __future__ import annotations

import json
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Canonical filter tokens
# ---------------------------------------------------------------------------


class WorkArrangement(StrEnum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ON_SITE = "on-site"


class SeniorityLevel(StrEnum):
    ENTRY = "entry"
    ASSOCIATE = "associate"
    MID_SENIOR = "mid-senior"
    DIRECTOR = "director"
    EXECUTIVE = "executive"


class EmploymentType(StrEnum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class DatePosted(StrEnum):
    PAST_24H = "past-24h"
    PAST_WEEK = "past-week"
    PAST_MONTH = "past-month"


class SearchStrategy(StrEnum):
    """Provider-selection hint. Only the cheapest offer is requested."""

    CHEAPEST = "cheapest"


# ---------------------------------------------------------------------------
# Result-count bounds
# ---------------------------------------------------------------------------

JOB_LIMIT_MIN = 1
JOB_LIMIT_MAX = 100
JOB_LIMIT_DEFAULT = 10

PEOPLE_LIMIT_MIN = 5
PEOPLE_LIMIT_MAX = 20
PEOPLE_LIMIT_DEFAULT = 5


# ---------------------------------------------------------------------------
# Search request payloads
# ---------------------------------------------------------------------------


class SearchRequestBase(BaseModel):
    """Common envelope: filters plus `limit` and `strategy`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    strategy: SearchStrategy = Field(default=SearchStrategy.CHEAPEST)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready body with wire names; absent filters are left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), sort_keys=True, separators=(",", ":"))


class JobSearchRequest(SearchRequestBase):
    """Body of POST /api/job-finder/search."""

    keywords: str = Field(min_length=1, description="Job title or keywords")
    location: str | None = Field(default=None)
    company: str | None = Field(default=None)
    work_arrangement: WorkArrangement | None = Field(default=None, alias="workArrangement")
    seniority_level: SeniorityLevel | None = Field(default=None, alias="seniorityLevel")
    employment_type: EmploymentType | None = Field(default=None, alias="employmentType")
    date_posted: DatePosted | None = Field(default=None, alias="datePosted")
    easy_apply_only: bool | None = Field(
        default=None,
        alias="easyApplyOnly",
        description="Only set when true; None keeps the key off the wire.",
    )
    limit: int = Field(default=JOB_LIMIT_DEFAULT, ge=JOB_LIMIT_MIN, le=JOB_LIMIT_MAX)


class PeopleSearchRequest(SearchRequestBase):
    """Body of POST /api/people-finder/search.

    Either `query` (custom-query mode) or `company` (with optional `role`) is set.
    """

    query: str | None = Field(default=None, description="Free-text people query")
    company: str | None = Field(default=None)
    role: str | None = Field(default=None)
    enrich_contacts: bool | None = Field(default=None, alias="enrichContacts")
    limit: int = Field(default=PEOPLE_LIMIT_DEFAULT, ge=PEOPLE_LIMIT_MIN, le=PEOPLE_LIMIT_MAX)

    @model_validator(mode="after")
    def _require_query_or_company(self) -> PeopleSearchRequest:
        if not self.query and not self.company:
            raise ValueError("either query or company is required")
        return self


# ---------------------------------------------------------------------------
# Payment metadata
# ---------------------------------------------------------------------------


class Receipt(BaseModel):
    """Payment confirmation for exactly one metered search.

    Unknown keys sent by the backend are kept so the receipt round-trips unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    provider: str = Field(min_length=1, description="Provider that was paid")
    amount_paid_usd: Decimal = Field(ge=0, allow_inf_nan=False)
    tool_id: str | None = Field(default=None)
    tool_name: str | None = Field(default=None)
    transaction_id: str | None = Field(default=None)
    execution_time_ms: float | None = Field(default=None, ge=0)

    @field_validator("amount_paid_usd", mode="before")
    @classmethod
    def _exact_amount(cls, value: Any) -> Any:
        # Amounts are kept as Decimal. A float becomes its shortest repr, which
        # is the literal the backend sent whenever that literal fits a float.
        if isinstance(value, bool):
            raise ValueError("amount_paid_usd must be a number")
        if isinstance(value, float):
            return Decimal(repr(value))
        return value


class Quote(BaseModel):
    """Price offered by a provider before a search is paid for (HTTP 402 equivalent)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    provider: str = Field(min_length=1)
    price_usd: float = Field(ge=0, allow_inf_nan=False)
    offer_id: str | None = Field(default=None)
    latency_estimate_ms: float | None = Field(default=None, ge=0)
    reliability_score: float | None = Field(default=None, ge=0, le=1)
