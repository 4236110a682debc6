"""Pytest configuration for all tests."""

from collections.abc import Generator
from datetime import datetime, timedelta

import pytest
import structlog

from cmsbase.core.config import get_settings
from cmsbase.infrastructure.store import CMSStore


class FrozenClock:
    """Deterministic clock returning ISO-8601 UTC strings.

    Time only moves when ``advance`` is called.
    """

    def __init__(self, start: str = "2025-01-01T00:00:00.000Z") -> None:
        self._moment = datetime.fromisoformat(start.replace("Z", "+00:00"))

    def __call__(self) -> str:
        return self._moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def advance(self, seconds: float = 1.0) -> str:
        self._moment += timedelta(seconds=seconds)
        return self()


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging() -> Generator[None, None, None]:
    """Give every test fresh settings and default structlog configuration."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store(frozen_clock: FrozenClock) -> CMSStore:
    """Store loaded with the example collections and items."""
    return CMSStore.seeded(clock=frozen_clock)


@pytest.fixture
def empty_store(frozen_clock: FrozenClock) -> CMSStore:
    return CMSStore(seed=False, clock=frozen_clock)
