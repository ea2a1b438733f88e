"""Shared typed constants for metered search orchestration."""

from dataclasses import dataclass
from enum import StrEnum

from introlink.contracts.search_v1 import (
    JOB_LIMIT_DEFAULT,
    JOB_LIMIT_MAX,
    JOB_LIMIT_MIN,
    PEOPLE_LIMIT_DEFAULT,
    PEOPLE_LIMIT_MAX,
    PEOPLE_LIMIT_MIN,
    DatePosted,
    EmploymentType,
    SeniorityLevel,
    WorkArrangement,
)


class SearchDomain(StrEnum):
    """Search surfaces served by the metered backend."""

    JOBS = "jobs"
    PEOPLE = "people"


class ErrorKind(StrEnum):
    """Failure taxonomy surfaced on SearchFailure.reason."""

    VALIDATION = "validation"
    PROTOCOL = "protocol"
    REJECTED = "rejected"
    TRANSPORT = "transport"


class ValidationReason(StrEnum):
    REQUIRED = "required"
    UNMAPPED = "unmapped"


# Selecting this label means "no filter": the key is left out of the request.
ALL_LABEL = "All"


@dataclass(frozen=True)
class LimitBounds:
    """Inclusive result-count range with the fallback used for non-numeric input."""

    minimum: int
    maximum: int
    default: int

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


JOB_LIMIT = LimitBounds(JOB_LIMIT_MIN, JOB_LIMIT_MAX, JOB_LIMIT_DEFAULT)
PEOPLE_LIMIT = LimitBounds(PEOPLE_LIMIT_MIN, PEOPLE_LIMIT_MAX, PEOPLE_LIMIT_DEFAULT)


WORK_ARRANGEMENT_LABELS: dict[str, WorkArrangement | None] = {
    ALL_LABEL: None,
    "Remote": WorkArrangement.REMOTE,
    "Hybrid": WorkArrangement.HYBRID,
    "On-site": WorkArrangement.ON_SITE,
}

SENIORITY_LEVEL_LABELS: dict[str, SeniorityLevel | None] = {
    ALL_LABEL: None,
    "Entry Level": SeniorityLevel.ENTRY,
    "Associate": SeniorityLevel.ASSOCIATE,
    "Mid-Senior": SeniorityLevel.MID_SENIOR,
    "Director": SeniorityLevel.DIRECTOR,
    "Executive": SeniorityLevel.EXECUTIVE,
}

EMPLOYMENT_TYPE_LABELS: dict[str, EmploymentType | None] = {
    ALL_LABEL: None,
    "Full-time": EmploymentType.FULL_TIME,
    "Part-time": EmploymentType.PART_TIME,
    "Contract": EmploymentType.CONTRACT,
    "Internship": EmploymentType.INTERNSHIP,
}

DATE_POSTED_LABELS: dict[str, DatePosted | None] = {
    ALL_LABEL: None,
    "Past 24 hours": DatePosted.PAST_24H,
    "Past week": DatePosted.PAST_WEEK,
    "Past month": DatePosted.PAST_MONTH,
}
