"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from orientation.services.clock import TrustedClock
from tests.factories import FakeMonotonic, FakeTimeAuthority, pht


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(pht(2025, 1, 28, 8, 45))


@pytest.fixture
def clock(authority, monotonic) -> TrustedClock:
    """A synced clock reading 2025-01-28 08:45 PHT until advanced."""
    clock = TrustedClock(authority, monotonic=monotonic)
    clock.sync()
    return clock
