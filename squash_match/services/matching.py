"""
Matching view – pure derivations over a booking snapshot.

Nothing here mutates state. Pass ``store.snapshot()`` (or any sequence of
bookings) and get the viewer-specific lists back in insertion order.
"""

from __future__ import annotations

from typing import Iterable

from squash_match.models import (
    Booking,
    BookingDetail,
    BookingStatus,
    SkillFilter,
    TargetSkillLevel,
)
from squash_match.reference_data import ReferenceData


def my_bookings(bookings: Iterable[Booking], identity: str) -> list[Booking]:
    """Non-cancelled bookings the player hosts or has joined."""
    return [
        b
        for b in bookings
        if b.status != BookingStatus.CANCELLED
        and (b.host_id == identity or b.guest_id == identity)
    ]


def matches_skill(booking: Booking, skill_filter: SkillFilter) -> bool:
    """
    "All" shows everything; otherwise the target must equal the filter
    or be "Any", so hosts happy to play anyone show under every filter.
    """
    if skill_filter == SkillFilter.ALL:
        return True
    target = booking.target_skill_level
    return target == TargetSkillLevel.ANY or (
        target is not None and target.value == skill_filter.value
    )


def open_matches(
    bookings: Iterable[Booking],
    identity: str,
    skill_filter: SkillFilter = SkillFilter.ALL,
) -> list[Booking]:
    """Open bookings the player could join (never their own)."""
    return [
        b
        for b in bookings
        if b.status == BookingStatus.OPEN
        and b.host_id != identity
        and matches_skill(b, skill_filter)
    ]


def booking_details(booking: Booking, reference: ReferenceData) -> BookingDetail:
    return BookingDetail(
        booking=booking,
        court=reference.get_court(booking.court_id),
        host=reference.get_player(booking.host_id),
        guest=reference.get_player(booking.guest_id),
    )
