"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest

from factories import make_session


@pytest.fixture
def db() -> AsyncMock:
    """AsyncSession stand-in: execute/commit/rollback are awaitable mocks."""
    return make_session()
