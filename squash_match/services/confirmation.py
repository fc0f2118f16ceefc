"""
Two-step confirmation for join, cancel and leave.

A player first *requests* an action and gets back a pending token along
with the question to put to them ("Do you want to join this match?").
Only a later *confirm* with that token performs the mutation. Tokens are
single-use and lapse after a TTL.

Preconditions are checked at request time so the player hears about a
problem before being asked to confirm, and again by the store at confirm
time, so a match taken in between still fails with ``AlreadyTaken``.
"""

from __future__ import annotations

import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from squash_match.exceptions import ConfirmationNotFound, NotParticipant
from squash_match.models import Booking, PendingAction, PendingActionType
from squash_match.services.booking_store import BookingStore

logger = logging.getLogger(__name__)

_PROMPTS = {
    PendingActionType.JOIN: "Do you want to join this match?",
    PendingActionType.CANCEL: "Are you sure you want to cancel this booking?",
    PendingActionType.LEAVE: "Do you want to leave this match? The slot will reopen for the host.",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConfirmationBroker:
    """Holds pending actions until their player confirms or discards them."""

    def __init__(
        self,
        store: BookingStore,
        *,
        ttl_seconds: float = 300.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: dict[str, PendingAction] = {}

    def request(
        self,
        action: PendingActionType,
        booking_id: str,
        actor_id: str,
    ) -> PendingAction:
        """Validate *action* and register it for confirmation."""
        checks = {
            PendingActionType.JOIN: self._store.check_join,
            PendingActionType.CANCEL: self._store.check_cancel,
            PendingActionType.LEAVE: self._store.check_leave,
        }
        checks[action](booking_id, actor_id)

        now = self._clock()
        pending = PendingAction(
            token=secrets.token_urlsafe(16),
            action=action,
            booking_id=booking_id,
            actor_id=actor_id,
            requested_at=now,
            expires_at=now + self._ttl,
            prompt=_PROMPTS[action],
        )
        with self._lock:
            self._purge_expired(now)
            self._pending[pending.token] = pending

        logger.debug("Pending %s on %s by %s", action.value, booking_id, actor_id)
        return pending

    def confirm(self, token: str, actor_id: str) -> Booking:
        """Run the pending action. The token is spent even if the action fails."""
        pending = self._take(token, actor_id)
        if pending.action == PendingActionType.JOIN:
            return self._store.join(pending.booking_id, actor_id)
        if pending.action == PendingActionType.CANCEL:
            return self._store.cancel(pending.booking_id, actor_id)
        return self._store.leave(pending.booking_id, actor_id)

    def discard(self, token: str, actor_id: str) -> PendingAction:
        """Decline the pending action without touching the booking."""
        pending = self._take(token, actor_id)
        logger.debug("Discarded %s on %s", pending.action.value, pending.booking_id)
        return pending

    def get(self, token: str) -> PendingAction | None:
        with self._lock:
            pending = self._pending.get(token)
        if pending is None or pending.expires_at <= self._clock():
            return None
        return pending

    def _take(self, token: str, actor_id: str) -> PendingAction:
        now = self._clock()
        with self._lock:
            pending = self._pending.get(token)
            if pending is None or pending.expires_at <= now:
                self._pending.pop(token, None)
                raise ConfirmationNotFound(token)
            if pending.actor_id != actor_id:
                raise NotParticipant(
                    "This confirmation belongs to another player.",
                    details={"token": token},
                )
            del self._pending[token]
        return pending

    def _purge_expired(self, now: datetime) -> None:
        expired = [t for t, p in self._pending.items() if p.expires_at <= now]
        for token in expired:
            del self._pending[token]
