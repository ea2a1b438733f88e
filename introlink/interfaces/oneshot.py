"""One-shot interface: run a single metered search, print the outcome as JSON, exit."""

from __future__ import annotations

import argparse
import asyncio
import json

from introlink.core.config import config
from introlink.orchestrators.search import (
    JobSearchForm,
    PeopleSearchForm,
    SearchDomain,
    SearchOrchestrator,
    SearchSuccess,
    Settled,
)
from introlink.orchestrators.search.backends import HttpSearchBackend


def build_parser(domain: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"introlink {domain}")
    parser.add_argument("words", nargs="*", help="keywords (jobs) or company name (people)")
    parser.add_argument("--limit", type=str, default=None)
    if domain == SearchDomain.JOBS:
        parser.add_argument("--location", type=str, default=None)
        parser.add_argument("--company", type=str, default=None)
        parser.add_argument("--work-arrangement", type=str, default=None)
        parser.add_argument("--seniority-level", type=str, default=None)
        parser.add_argument("--employment-type", type=str, default=None)
        parser.add_argument("--date-posted", type=str, default=None)
        parser.add_argument("--easy-apply-only", action="store_true")
    else:
        parser.add_argument("--role", type=str, default=None)
        parser.add_argument(
            "--query", type=str, default=None, help="free-text query instead of company/role"
        )
        parser.add_argument("--enrich-contacts", action="store_true")
    return parser


def parse_args(domain: str, args: list[str]) -> argparse.Namespace:
    """Parse argv for one search domain. Usage errors raise SystemExit(2)."""
    return build_parser(domain).parse_args(args)


def build_form(domain: str, ns: argparse.Namespace) -> JobSearchForm | PeopleSearchForm:
    text = " ".join(ns.words)
    # A missing --limit stays None, which normalizes to the domain default.
    if domain == SearchDomain.JOBS:
        return JobSearchForm(
            keywords=text,
            location=ns.location,
            company=ns.company,
            work_arrangement=ns.work_arrangement,
            seniority_level=ns.seniority_level,
            employment_type=ns.employment_type,
            date_posted=ns.date_posted,
            easy_apply_only=ns.easy_apply_only,
            limit=ns.limit,
        )
    if ns.query is not None:
        return PeopleSearchForm(
            query=ns.query,
            use_custom_query=True,
            enrich_contacts=ns.enrich_contacts,
            limit=ns.limit,
        )
    return PeopleSearchForm(
        company=text,
        role=ns.role,
        enrich_contacts=ns.enrich_contacts,
        limit=ns.limit,
    )


async def run_oneshot(domain: str, args: list[str]) -> int:
    if domain not in (SearchDomain.JOBS, SearchDomain.PEOPLE):
        print(f"Error: unknown search domain {domain!r} (expected jobs or people)")
        return 2

    problems = config.validate()
    if problems:
        for problem in problems:
            print(f"Error: {problem}")
        return 2

    try:
        ns = parse_args(domain, args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2
    form = build_form(domain, ns)

    async with HttpSearchBackend() as backend:
        orchestrator = SearchOrchestrator(domain, backend)
        state = await orchestrator.search(form)

    if not isinstance(state, Settled):
        print("Error: search did not settle")
        return 1
    print(json.dumps(state.outcome.to_dict(), indent=2, default=str))
    return 0 if isinstance(state.outcome, SearchSuccess) else 1


def main(domain: str, args: list[str]) -> int:
    return asyncio.run(run_oneshot(domain=domain, args=args))
