"""
Stand-ins for the external collaborators used in unit tests.

Neither makes any HTTP calls.
"""

from __future__ import annotations

from squash_match.models import GeoLocation
from tests.mocks.models import DEFAULT_LOCATION

CANNED_ADVICE = "Volley more and hold the T."


class MockGeoLocator:
    """Reports a fixed position (the default unless one is given)."""

    def __init__(self, location: GeoLocation | None = None) -> None:
        self._location = location
        self.started = False

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    def current(self) -> GeoLocation:
        return self._location or DEFAULT_LOCATION

    @property
    def is_default(self) -> bool:
        return self._location is None


class MockCoachAdvisor:
    """Records the calls it receives and returns canned advice."""

    def __init__(self, advice: str = CANNED_ADVICE) -> None:
        self._advice = advice
        self.calls: list[tuple[str, str | None, str]] = []

    async def get_advice(self, player_skill: str, opponent_skill: str | None, context: str) -> str:
        self.calls.append((player_skill, opponent_skill, context))
        return self._advice

    async def close(self) -> None:
        pass
