"""Metered search contract v1: request payloads, canonical tokens, receipts and quotes."""

from introlink.contracts.search_v1 import (
    DatePosted,
    EmploymentType,
    JobSearchRequest,
    PeopleSearchRequest,
    Quote,
    Receipt,
    SearchStrategy,
    SeniorityLevel,
    WorkArrangement,
)

__all__ = [
    "DatePosted",
    "EmploymentType",
    "JobSearchRequest",
    "PeopleSearchRequest",
    "Quote",
    "Receipt",
    "SearchStrategy",
    "SeniorityLevel",
    "WorkArrangement",
]
