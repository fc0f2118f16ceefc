"""
Service registry – holds the booking core and its collaborators.

Provides a single place for routers to reach the booking store, the
confirmation broker, reference data and the external collaborators.
Initialized once at import; started and stopped by the app lifespan.
"""

from __future__ import annotations

from squash_match.config import CONFIRMATION_TTL_SECONDS, SEED_DEMO_BOOKINGS
from squash_match.reference_data import ReferenceData, get_demo_bookings
from squash_match.services.booking_store import BookingStore
from squash_match.services.coach import CoachAdvisor
from squash_match.services.confirmation import ConfirmationBroker
from squash_match.services.geolocation import GeoLocator


class ServiceRegistry:
    """Wires the booking store to its confirmation broker and collaborators."""

    def __init__(
        self,
        *,
        reference: ReferenceData | None = None,
        store: BookingStore | None = None,
        locator: GeoLocator | None = None,
        advisor: CoachAdvisor | None = None,
        confirmation_ttl_seconds: float = CONFIRMATION_TTL_SECONDS,
    ) -> None:
        self.reference = reference or ReferenceData.default()
        if store is None:
            store = BookingStore(get_demo_bookings() if SEED_DEMO_BOOKINGS else ())
        self.store = store
        self.confirmations = ConfirmationBroker(self.store, ttl_seconds=confirmation_ttl_seconds)
        self.locator = locator or GeoLocator()
        self.advisor = advisor or CoachAdvisor()

    async def start(self) -> None:
        """Kick off the background location lookup."""
        await self.locator.start()

    async def stop(self) -> None:
        """Cancel background work and close HTTP clients."""
        await self.locator.stop()
        await self.advisor.close()


# Module-level singleton, used by the routers
registry = ServiceRegistry()
