"""
Read-only reference data: squash courts, players and demo bookings.

Courts and players are supplied once at startup and never mutated by the
booking core. ``ReferenceData`` wraps them with id lookups for the routers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from squash_match.models import (
    OPEN_MATCH_LABEL,
    Booking,
    BookingStatus,
    Court,
    GeoLocation,
    Player,
    SkillLevel,
    TargetSkillLevel,
)


def get_courts() -> List[Court]:
    """The squash centres players can book."""
    return [
        Court(
            id="c1",
            name="Kallang Squash Centre",
            address="8 Stadium Blvd, Singapore",
            location=GeoLocation(lat=1.3069, lng=103.8760),
        ),
        Court(
            id="c2",
            name="Burghley Squash Centre",
            address="43 Burghley Dr, Singapore",
            location=GeoLocation(lat=1.3605, lng=103.8643),
        ),
        Court(
            id="c3",
            name="Yio Chu Kang Squash Centre",
            address="200 Ang Mo Kio Ave 9, Singapore",
            location=GeoLocation(lat=1.3820, lng=103.8450),
        ),
    ]


def get_players() -> List[Player]:
    """Registered players shown on the leaderboard."""
    return [
        Player(
            id="p1",
            name="Alex Johnson",
            skill_level=SkillLevel.ADVANCED,
            rating=4.5,
            avatar="https://picsum.photos/100/100?random=1",
        ),
        Player(
            id="p2",
            name="Sam Smith",
            skill_level=SkillLevel.INTERMEDIATE,
            rating=3.2,
            avatar="https://picsum.photos/100/100?random=2",
        ),
        Player(
            id="p3",
            name="Jordan Lee",
            skill_level=SkillLevel.PRO,
            rating=4.9,
            avatar="https://picsum.photos/100/100?random=3",
        ),
    ]


def get_demo_bookings() -> List[Booking]:
    """Open matches from other players, so the match board is not empty."""
    now = datetime.now(timezone.utc)
    return [
        Booking(
            id="b1",
            court_id="c1",
            host_id="p1",
            date="2024-11-15",
            time="18:00",
            registered_at=now,
            opponent_label=OPEN_MATCH_LABEL,
            target_skill_level=TargetSkillLevel.ADVANCED,
            status=BookingStatus.OPEN,
        ),
        Booking(
            id="b2",
            court_id="c3",
            host_id="p2",
            date="2024-11-16",
            time="10:00",
            registered_at=now,
            opponent_label=OPEN_MATCH_LABEL,
            target_skill_level=TargetSkillLevel.INTERMEDIATE,
            status=BookingStatus.OPEN,
        ),
    ]


class ReferenceData:
    """Courts and players indexed by id."""

    def __init__(self, courts: Iterable[Court], players: Iterable[Player]) -> None:
        self._courts = {c.id: c for c in courts}
        self._players = {p.id: p for p in players}

    @classmethod
    def default(cls) -> "ReferenceData":
        return cls(get_courts(), get_players())

    def list_courts(self) -> list[Court]:
        return list(self._courts.values())

    def get_court(self, court_id: str) -> Optional[Court]:
        return self._courts.get(court_id)

    def list_players(self, skill_level: SkillLevel | None = None) -> list[Player]:
        players = list(self._players.values())
        if skill_level is not None:
            players = [p for p in players if p.skill_level == skill_level]
        return players

    def get_player(self, player_id: str | None) -> Optional[Player]:
        if player_id is None:
            return None
        return self._players.get(player_id)
