"""
In-memory booking store.

Owns the authoritative, insertion-ordered collection of bookings and the
only mutation entry points (create, join, cancel, leave).

Lifecycle of a booking::

    create(specific) ──────────────► CONFIRMED ──cancel──► CANCELLED
    create(open) ──► OPEN ──join──► CONFIRMED
                      ▲  │              │
                      │  └───cancel─────┼──────────────────► CANCELLED
                      └─────leave───────┘

Cancelled bookings leave the active set and are kept as history, so a
late join on them fails with ``AlreadyTaken`` and a repeated cancel is a
no-op.

Every mutation runs under one lock and replaces the whole (frozen)
record, so readers never observe a half-applied change.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable
from uuid import uuid4

from squash_match.exceptions import (
    AlreadyTaken,
    BookingNotFound,
    IncompleteBooking,
    NotParticipant,
    SelfJoinRejected,
)
from squash_match.models import (
    JOINED_LABEL,
    OPEN_MATCH_LABEL,
    Booking,
    BookingStatus,
    GeoLocation,
    MatchType,
    TargetSkillLevel,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class BookingStore:
    """Single source of truth for match state."""

    def __init__(
        self,
        bookings: Iterable[Booking] = (),
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._lock = threading.Lock()
        self._active: dict[str, Booking] = {}
        self._cancelled: dict[str, Booking] = {}
        self._version = 0
        self._clock = clock
        self._id_factory = id_factory
        for booking in bookings:
            if booking.status == BookingStatus.CANCELLED:
                self._cancelled[booking.id] = booking
            else:
                self._active[booking.id] = booking

    # ── Read ───────────────────────────────────────────────────────────

    @property
    def version(self) -> int:
        """Increases by one on every successful mutation."""
        return self._version

    def snapshot(self) -> list[Booking]:
        """All non-cancelled bookings in insertion order."""
        with self._lock:
            return list(self._active.values())

    def history(self) -> list[Booking]:
        """Cancelled bookings, oldest cancellation first."""
        with self._lock:
            return list(self._cancelled.values())

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._active.get(booking_id) or self._cancelled.get(booking_id)

    def __len__(self) -> int:
        return len(self._active)

    # ── Create ─────────────────────────────────────────────────────────

    def create(
        self,
        host_id: str,
        *,
        court_id: str | None,
        date: str | None,
        time: str | None,
        match_type: MatchType = MatchType.SPECIFIC,
        opponent_name: str | None = None,
        target_skill_level: TargetSkillLevel | None = None,
        location: GeoLocation | None = None,
        notes: str | None = None,
    ) -> Booking:
        """
        Reserve a court slot.

        A specific-opponent booking is confirmed immediately; an open
        match waits for a guest of *target_skill_level* (default "Any").
        """
        missing = [
            name
            for name, value in (("court_id", court_id), ("date", date), ("time", time))
            if _blank(value)
        ]
        if missing:
            raise IncompleteBooking(missing)

        if match_type == MatchType.OPEN:
            status = BookingStatus.OPEN
            label = OPEN_MATCH_LABEL
            target = target_skill_level or TargetSkillLevel.ANY
        else:
            status = BookingStatus.CONFIRMED
            label = opponent_name.strip() if not _blank(opponent_name) else OPEN_MATCH_LABEL
            target = None

        with self._lock:
            booking_id = self._id_factory()
            while booking_id in self._active or booking_id in self._cancelled:
                booking_id = self._id_factory()

            booking = Booking(
                id=booking_id,
                court_id=court_id.strip(),
                host_id=host_id,
                date=date.strip(),
                time=time.strip(),
                registered_at=self._clock(),
                location_at_registration=location,
                opponent_label=label,
                target_skill_level=target,
                notes=notes,
                status=status,
            )
            self._active[booking_id] = booking
            self._version += 1

        logger.info(
            "Booking %s created by %s: court=%s %s %s status=%s",
            booking.id, host_id, booking.court_id, booking.date, booking.time, status.value,
        )
        return booking

    # ── Preconditions ──────────────────────────────────────────────────
    # Callers must hold the lock.

    def _require(self, booking_id: str) -> Booking:
        booking = self._active.get(booking_id) or self._cancelled.get(booking_id)
        if booking is None:
            raise BookingNotFound(booking_id)
        return booking

    def _check_join(self, booking_id: str, actor_id: str) -> Booking:
        booking = self._require(booking_id)
        if booking.status != BookingStatus.OPEN:
            raise AlreadyTaken(booking_id, booking.status.value)
        if booking.host_id == actor_id:
            raise SelfJoinRejected(booking_id)
        return booking

    def _check_cancel(self, booking_id: str, actor_id: str) -> Booking:
        booking = self._require(booking_id)
        if booking.host_id != actor_id:
            raise NotParticipant(
                "Only the host can cancel this booking.",
                details={"booking_id": booking_id},
            )
        return booking

    def _check_leave(self, booking_id: str, actor_id: str) -> Booking:
        booking = self._require(booking_id)
        if booking.status != BookingStatus.CONFIRMED or booking.guest_id != actor_id:
            raise NotParticipant(
                "You have not joined this match.",
                details={"booking_id": booking_id},
            )
        return booking

    def check_join(self, booking_id: str, actor_id: str) -> Booking:
        with self._lock:
            return self._check_join(booking_id, actor_id)

    def check_cancel(self, booking_id: str, actor_id: str) -> Booking:
        with self._lock:
            return self._check_cancel(booking_id, actor_id)

    def check_leave(self, booking_id: str, actor_id: str) -> Booking:
        with self._lock:
            return self._check_leave(booking_id, actor_id)

    # ── Mutations ──────────────────────────────────────────────────────

    def join(self, booking_id: str, actor_id: str) -> Booking:
        """Claim an open slot. Only the first of competing joins succeeds."""
        with self._lock:
            booking = self._check_join(booking_id, actor_id)
            joined = booking.model_copy(
                update={
                    "status": BookingStatus.CONFIRMED,
                    "guest_id": actor_id,
                    "opponent_label": JOINED_LABEL,
                }
            )
            self._active[booking_id] = joined
            self._version += 1

        logger.info("Booking %s joined by %s", booking_id, actor_id)
        return joined

    def cancel(self, booking_id: str, actor_id: str) -> Booking:
        """Cancel a booking as its host. Repeating the call is a no-op."""
        with self._lock:
            booking = self._check_cancel(booking_id, actor_id)
            if booking.status == BookingStatus.CANCELLED:
                return booking
            cancelled = booking.model_copy(update={"status": BookingStatus.CANCELLED})
            del self._active[booking_id]
            self._cancelled[booking_id] = cancelled
            self._version += 1

        logger.info(
            "Booking %s cancelled by host %s (guest=%s)",
            booking_id, actor_id, cancelled.guest_id,
        )
        return cancelled

    def leave(self, booking_id: str, actor_id: str) -> Booking:
        """Drop out as the guest; the slot reopens for the host."""
        with self._lock:
            booking = self._check_leave(booking_id, actor_id)
            reopened = booking.model_copy(
                update={
                    "status": BookingStatus.OPEN,
                    "guest_id": None,
                    "opponent_label": OPEN_MATCH_LABEL,
                    "target_skill_level": booking.target_skill_level or TargetSkillLevel.ANY,
                }
            )
            self._active[booking_id] = reopened
            self._version += 1

        logger.info("Guest %s left booking %s; slot reopened", actor_id, booking_id)
        return reopened
