import os
import tempfile
from collections.abc import Sequence

import pytest

# Config and the event logger are created at import time; keep test logs out of the repo.
os.environ.setdefault("INTROLINK_LOGS_DIR", tempfile.mkdtemp(prefix="introlink-test-logs-"))
os.environ.setdefault("NO_COLOR", "1")
# Unit runs never talk to LangSmith.
os.environ["LANGSMITH_TRACING"] = "false"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration/e2e tests that need a live metered search backend.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: requires a running backend (INTROLINK_API_URL)"
    )
    config.addinivalue_line("markers", "e2e: end-to-end runtime tests")
    config.addinivalue_line("markers", "property: property-based deterministic tests")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: Sequence[pytest.Item],
) -> None:
    run_integration = config.getoption("--run-integration")
    skip_integration = pytest.mark.skip(
        reason="integration/e2e is opt-in; rerun with --run-integration"
    )

    for item in items:
        if "tests/e2e/" in item.nodeid:
            item.add_marker("integration")
            item.add_marker("e2e")
        if (
            item.get_closest_marker("integration") or item.get_closest_marker("e2e")
        ) and not run_integration:
            item.add_marker(skip_integration)
