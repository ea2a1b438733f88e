import pytest

from introlink.contracts.search_v1 import (
    DatePosted,
    EmploymentType,
    SeniorityLevel,
    WorkArrangement,
)
from introlink.orchestrators.search.constants import JOB_LIMIT, PEOPLE_LIMIT, ValidationReason
from introlink.orchestrators.search.errors import FilterValidationError
from introlink.orchestrators.search.normalizer import (
    JobSearchForm,
    PeopleSearchForm,
    clamp_limit,
    clean_text,
    normalize,
    normalize_job_search,
    normalize_people_search,
)


def test_mid_senior_with_oversized_limit_is_clamped():
    request = normalize_job_search(
        JobSearchForm(keywords="engineer", seniority_level="Mid-Senior", limit=500)
    )

    assert request.to_payload() == {
        "keywords": "engineer",
        "seniorityLevel": "mid-senior",
        "limit": 100,
        "strategy": "cheapest",
    }


def test_empty_keywords_fail_as_required():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_job_search(JobSearchForm(keywords="", location="SF"))

    assert exc_info.value.field == "keywords"
    assert exc_info.value.reason == ValidationReason.REQUIRED


def test_whitespace_only_keywords_are_absent():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_job_search(JobSearchForm(keywords="   \t\n"))
    assert exc_info.value.field == "keywords"


def test_free_text_is_trimmed_and_blank_optionals_dropped():
    request = normalize_job_search(
        JobSearchForm(keywords="  data engineer ", location="  ", company=" Stripe ")
    )
    payload = request.to_payload()

    assert payload["keywords"] == "data engineer"
    assert payload["company"] == "Stripe"
    assert "location" not in payload


def test_all_labels_omit_every_filter():
    payload = normalize_job_search(JobSearchForm(keywords="pm")).to_payload()

    for key in ("workArrangement", "seniorityLevel", "employmentType", "datePosted"):
        assert key not in payload
    assert "All" not in payload.values()


@pytest.mark.parametrize(
    ("label", "token"),
    [
        ("Remote", WorkArrangement.REMOTE),
        ("Hybrid", WorkArrangement.HYBRID),
        ("On-site", WorkArrangement.ON_SITE),
    ],
)
def test_work_arrangement_labels(label, token):
    request = normalize_job_search(JobSearchForm(keywords="x", work_arrangement=label))
    assert request.to_payload()["workArrangement"] == token.value


@pytest.mark.parametrize(
    ("label", "token"),
    [
        ("Entry Level", SeniorityLevel.ENTRY),
        ("Associate", SeniorityLevel.ASSOCIATE),
        ("Mid-Senior", SeniorityLevel.MID_SENIOR),
        ("Director", SeniorityLevel.DIRECTOR),
        ("Executive", SeniorityLevel.EXECUTIVE),
    ],
)
def test_seniority_labels(label, token):
    request = normalize_job_search(JobSearchForm(keywords="x", seniority_level=label))
    assert request.to_payload()["seniorityLevel"] == token.value


def test_employment_type_and_date_posted_labels():
    payload = normalize_job_search(
        JobSearchForm(keywords="x", employment_type="Part-time", date_posted="Past week")
    ).to_payload()

    assert payload["employmentType"] == EmploymentType.PART_TIME.value
    assert payload["datePosted"] == DatePosted.PAST_WEEK.value


def test_unmapped_label_is_rejected_not_dropped():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_job_search(JobSearchForm(keywords="x", seniority_level="Intern-ish"))

    assert exc_info.value.field == "seniorityLevel"
    assert exc_info.value.reason == ValidationReason.UNMAPPED


def test_canonical_token_is_not_accepted_as_label():
    with pytest.raises(FilterValidationError):
        normalize_job_search(JobSearchForm(keywords="x", work_arrangement="remote"))


def test_easy_apply_only_sent_only_when_true():
    assert "easyApplyOnly" not in normalize_job_search(JobSearchForm(keywords="x")).to_payload()
    payload = normalize_job_search(
        JobSearchForm(keywords="x", easy_apply_only=True)
    ).to_payload()
    assert payload["easyApplyOnly"] is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (0, 1),
        (-7, 1),
        (1, 1),
        (55, 55),
        (100, 100),
        (101, 100),
        ("42", 42),
        (" 250 ", 100),
        (12.9, 12),
        ("3.7", 3),
        (float("inf"), 100),
        (float("-inf"), 1),
        ("abc", 10),
        ("", 10),
        (None, 10),
        (True, 10),
        (float("nan"), 10),
        ([5], 10),
    ],
)
def test_job_limit_clamping(raw, expected):
    assert clamp_limit(raw, JOB_LIMIT) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(1, 5), (5, 5), (12, 12), (20, 20), (21, 20), ("many", 5)],
)
def test_people_limit_clamping(raw, expected):
    assert clamp_limit(raw, PEOPLE_LIMIT) == expected


def test_people_search_requires_company():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_people_search(PeopleSearchForm(company="  ", role="Recruiter"))
    assert exc_info.value.field == "company"
    assert exc_info.value.reason == ValidationReason.REQUIRED


def test_people_search_company_mode_drops_query():
    payload = normalize_people_search(
        PeopleSearchForm(company="Stripe", role=" Recruiter ", query="ignored", limit=8)
    ).to_payload()

    assert payload == {
        "company": "Stripe",
        "role": "Recruiter",
        "limit": 8,
        "strategy": "cheapest",
    }


def test_people_search_custom_query_mode():
    payload = normalize_people_search(
        PeopleSearchForm(company="Stripe", query=" hiring managers in fintech ", use_custom_query=True)
    ).to_payload()

    assert payload == {
        "query": "hiring managers in fintech",
        "limit": 5,
        "strategy": "cheapest",
    }


def test_people_search_custom_query_mode_requires_query():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_people_search(PeopleSearchForm(company="Stripe", use_custom_query=True))
    assert exc_info.value.field == "query"


def test_enrich_contacts_flag():
    payload = normalize_people_search(
        PeopleSearchForm(company="Acme", enrich_contacts=True)
    ).to_payload()
    assert payload["enrichContacts"] is True


def test_normalize_dispatches_on_form_type():
    assert normalize(JobSearchForm(keywords="x")).to_payload()["keywords"] == "x"
    assert normalize(PeopleSearchForm(company="Acme")).to_payload()["company"] == "Acme"
    with pytest.raises(TypeError):
        normalize({"keywords": "x"})  # type: ignore[arg-type]


def test_forms_accept_camel_case_mappings():
    form = JobSearchForm.from_mapping(
        {"keywords": "engineer", "seniorityLevel": "Mid-Senior", "limit": 500, "bogus": 1}
    )
    assert form.seniority_level == "Mid-Senior"
    assert form.limit == 500

    people = PeopleSearchForm.from_mapping({"company": "Acme", "numResults": 12})
    assert people.limit == 12


def test_same_form_normalizes_to_identical_bytes():
    form = JobSearchForm(
        keywords="engineer",
        location="SF",
        work_arrangement="Hybrid",
        employment_type="Contract",
        limit="30",
    )
    assert normalize(form).to_json() == normalize(form).to_json()


@pytest.mark.parametrize("value", [True, False, 0, 12.5, ["engineer"], None])
def test_clean_text_treats_non_strings_as_blank(value):
    assert clean_text(value) is None


def test_non_string_query_fails_as_required():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_people_search(PeopleSearchForm(query=True, use_custom_query=True))
    assert exc_info.value.field == "query"
    assert exc_info.value.reason == ValidationReason.REQUIRED


@pytest.mark.parametrize("value", ["false", "true", 1])
def test_flags_are_sent_only_for_real_booleans(value):
    jobs = normalize_job_search(JobSearchForm(keywords="engineer", easy_apply_only=value))
    people = normalize_people_search(PeopleSearchForm(company="Acme", enrich_contacts=value))

    assert "easyApplyOnly" not in jobs.to_payload()
    assert "enrichContacts" not in people.to_payload()


@pytest.mark.parametrize("label", [True, 3, ["Remote"]])
def test_non_string_label_is_unmapped(label):
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_job_search(JobSearchForm(keywords="engineer", work_arrangement=label))
    assert exc_info.value.reason == ValidationReason.UNMAPPED
    assert exc_info.value.field == "workArrangement"
