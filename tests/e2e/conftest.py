from collections.abc import AsyncIterator

import pytest_asyncio

from introlink.orchestrators.search.backends import HttpSearchBackend


@pytest_asyncio.fixture
async def backend() -> AsyncIterator[HttpSearchBackend]:
    """Live backend at INTROLINK_API_URL, for e2e/integration suites only."""
    async with HttpSearchBackend() as instance:
        yield instance
