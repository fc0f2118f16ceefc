"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • a fresh booking store seeded with two open matches
  • mock courts and players
  • mock geolocation and coach collaborators (no external HTTP)

The `client` fixture acts as MOCK_USER through a dependency override.
The `unauthed_client` fixture uses real session cookies, which lets a
test switch between players with `tests.mocks.session.act_as`.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from squash_match.dependencies import get_current_user
from squash_match.main import app
from squash_match.reference_data import ReferenceData
from squash_match.services.booking_store import BookingStore
from squash_match.services.registry import ServiceRegistry
from tests.mocks.models import MOCK_BOOKINGS, MOCK_COURTS, MOCK_PLAYERS, MOCK_USER
from tests.mocks.services import MockCoachAdvisor, MockGeoLocator


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def _test_env(monkeypatch):
    """
    Internal fixture that swaps the service registry for one backed by
    mock data, and disables rate limiting.
    """
    test_registry = ServiceRegistry(
        reference=ReferenceData(MOCK_COURTS, MOCK_PLAYERS),
        store=BookingStore(MOCK_BOOKINGS),
        locator=MockGeoLocator(),
        advisor=MockCoachAdvisor(),
    )

    # Patch everywhere `registry` was imported
    for mod_path in (
        "squash_match.services.registry",
        "squash_match.main",
        "squash_match.dependencies",
        "squash_match.routers.courts",
        "squash_match.routers.players",
        "squash_match.routers.bookings",
        "squash_match.routers.confirmations",
        "squash_match.routers.matches",
        "squash_match.routers.advice",
    ):
        monkeypatch.setattr(f"{mod_path}.registry", test_registry)

    # ── Disable rate limiting in tests ────────────────────────────────
    from squash_match.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return test_registry


@pytest.fixture()
def test_registry(_test_env) -> ServiceRegistry:
    """Public alias for tests that inspect the store directly."""
    return _test_env


@pytest.fixture()
def client(_test_env: ServiceRegistry) -> TestClient:
    """TestClient acting as MOCK_USER (the host of booking b1)."""
    async def _mock_current_user():
        return MOCK_USER

    app.dependency_overrides[get_current_user] = _mock_current_user

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()


@pytest.fixture()
def unauthed_client(_test_env: ServiceRegistry) -> TestClient:
    """
    TestClient without auth overrides; requests are rejected unless
    a session cookie is provided.
    """
    app.dependency_overrides.clear()

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()
