import pytest

from backstroke.testing.conftest import (  # noqa: F401
    bot_client,
    detector,
    diverged_client,
    mock_client,
    platforms,
    publisher,
    sample_fork,
    sample_pull_request,
    sample_upstream,
)


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only; the engine uses asyncio primitives."""
    return "asyncio"
