"""Tests for the booking lifecycle in BookingStore."""

import threading
from datetime import datetime, timezone
from itertools import count

import pytest

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
    BookingStatus,
    MatchType,
    TargetSkillLevel,
)
from squash_match.services.booking_store import BookingStore
from tests.mocks.models import MOCK_LOCATION, make_booking

HOST = "host"
GUEST = "guest"
OTHER = "other"

_FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def store() -> BookingStore:
    return BookingStore(clock=lambda: _FIXED_NOW)


def _open(store: BookingStore, **kwargs):
    params = dict(
        court_id="c1",
        date="2024-11-15",
        time="18:00",
        match_type=MatchType.OPEN,
        target_skill_level=TargetSkillLevel.ADVANCED,
    )
    params.update(kwargs)
    return store.create(HOST, **params)


class TestCreate:
    def test_specific_opponent_is_confirmed_immediately(self, store):
        booking = store.create(HOST, court_id="c1", date="2024-11-15", time="18:00", opponent_name="John Doe")
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.guest_id is None
        assert booking.opponent_label == "John Doe"
        assert booking.target_skill_level is None

    def test_blank_opponent_name_falls_back_to_open_match_label(self, store):
        booking = store.create(HOST, court_id="c1", date="2024-11-15", time="18:00", opponent_name="   ")
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.opponent_label == OPEN_MATCH_LABEL

    def test_open_match_waits_for_opponent(self, store):
        booking = _open(store)
        assert booking.status == BookingStatus.OPEN
        assert booking.guest_id is None
        assert booking.opponent_label == OPEN_MATCH_LABEL
        assert booking.target_skill_level == TargetSkillLevel.ADVANCED

    def test_open_match_defaults_to_any(self, store):
        booking = _open(store, target_skill_level=None)
        assert booking.target_skill_level == TargetSkillLevel.ANY

    def test_records_registration_details(self, store):
        booking = _open(store, location=MOCK_LOCATION, notes="Bring balls")
        assert booking.host_id == HOST
        assert booking.registered_at == _FIXED_NOW
        assert booking.location_at_registration == MOCK_LOCATION
        assert booking.notes == "Bring balls"

    @pytest.mark.parametrize(
        "fields, missing",
        [
            (dict(court_id=None, date="2024-11-15", time="18:00"), ["court_id"]),
            (dict(court_id="c1", date="", time="18:00"), ["date"]),
            (dict(court_id="c1", date="2024-11-15", time=" "), ["time"]),
            (dict(court_id=None, date=None, time=None), ["court_id", "date", "time"]),
        ],
    )
    def test_missing_fields_raise_incomplete_booking(self, store, fields, missing):
        with pytest.raises(IncompleteBooking) as exc_info:
            store.create(HOST, **fields)
        assert exc_info.value.missing == missing
        assert store.snapshot() == []
        assert store.version == 0

    def test_ids_are_unique_even_if_factory_repeats(self):
        ids = iter(["dup", "dup", "dup", "fresh"])
        store = BookingStore(id_factory=lambda: next(ids))
        first = store.create(HOST, court_id="c1", date="d", time="t")
        second = store.create(HOST, court_id="c1", date="d", time="t")
        assert first.id == "dup"
        assert second.id == "fresh"

    def test_snapshot_keeps_insertion_order(self):
        seq = count(1)
        store = BookingStore(id_factory=lambda: f"z{10 - next(seq)}")
        created = [store.create(HOST, court_id="c1", date="d", time=str(i)) for i in range(3)]
        assert [b.id for b in store.snapshot()] == [b.id for b in created]


class TestJoin:
    def test_join_confirms_with_guest(self, store):
        booking = _open(store)
        joined = store.join(booking.id, GUEST)
        assert joined.status == BookingStatus.CONFIRMED
        assert joined.guest_id == GUEST
        assert joined.opponent_label == JOINED_LABEL
        assert joined.host_id == HOST
        assert store.get(booking.id) == joined

    def test_second_join_is_already_taken(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        with pytest.raises(AlreadyTaken):
            store.join(booking.id, OTHER)
        assert store.get(booking.id).guest_id == GUEST

    def test_concurrent_joins_only_one_wins(self, store):
        booking = _open(store)
        winners: list[str] = []

        def attempt(actor: str) -> None:
            try:
                store.join(booking.id, actor)
            except AlreadyTaken:
                return
            winners.append(actor)

        threads = [threading.Thread(target=attempt, args=(f"g{i}",)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(winners) == 1
        assert store.get(booking.id).guest_id == winners[0]

    def test_same_guest_cannot_join_twice(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        with pytest.raises(AlreadyTaken):
            store.join(booking.id, GUEST)

    def test_host_cannot_join_own_match(self, store):
        booking = _open(store)
        version = store.version
        with pytest.raises(SelfJoinRejected):
            store.join(booking.id, HOST)
        assert store.get(booking.id) == booking
        assert store.version == version

    def test_host_joining_own_confirmed_booking_is_already_taken(self, store):
        booking = store.create(HOST, court_id="c1", date="d", time="t", opponent_name="John Doe")
        with pytest.raises(AlreadyTaken):
            store.join(booking.id, HOST)

    def test_join_specific_booking_fails(self, store):
        booking = store.create(HOST, court_id="c1", date="d", time="t", opponent_name="John Doe")
        with pytest.raises(AlreadyTaken):
            store.join(booking.id, GUEST)

    def test_join_after_cancel_fails(self, store):
        booking = _open(store)
        store.cancel(booking.id, HOST)
        with pytest.raises(AlreadyTaken):
            store.join(booking.id, GUEST)
        assert store.get(booking.id).status == BookingStatus.CANCELLED

    def test_join_unknown_booking(self, store):
        with pytest.raises(BookingNotFound):
            store.join("nope", GUEST)


class TestCancel:
    def test_host_cancel_removes_from_active_set(self, store):
        booking = _open(store)
        cancelled = store.cancel(booking.id, HOST)
        assert cancelled.status == BookingStatus.CANCELLED
        assert store.snapshot() == []
        assert store.history() == [cancelled]

    def test_cancel_confirmed_booking_with_guest(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        cancelled = store.cancel(booking.id, HOST)
        assert cancelled.guest_id == GUEST
        assert booking.id not in [b.id for b in store.snapshot()]

    def test_cancel_is_idempotent(self, store):
        booking = _open(store)
        first = store.cancel(booking.id, HOST)
        version = store.version
        second = store.cancel(booking.id, HOST)
        assert second == first
        assert store.version == version

    def test_guest_cannot_cancel(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        with pytest.raises(NotParticipant):
            store.cancel(booking.id, GUEST)
        assert store.get(booking.id).status == BookingStatus.CONFIRMED


class TestLeave:
    def test_guest_leave_reopens_slot(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        reopened = store.leave(booking.id, GUEST)
        assert reopened.status == BookingStatus.OPEN
        assert reopened.guest_id is None
        assert reopened.opponent_label == OPEN_MATCH_LABEL
        assert reopened.target_skill_level == TargetSkillLevel.ADVANCED

    def test_reopened_slot_can_be_joined_again(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        store.leave(booking.id, GUEST)
        rejoined = store.join(booking.id, OTHER)
        assert rejoined.guest_id == OTHER

    def test_non_guest_cannot_leave(self, store):
        booking = _open(store)
        store.join(booking.id, GUEST)
        for actor in (HOST, OTHER):
            with pytest.raises(NotParticipant):
                store.leave(booking.id, actor)

    def test_cannot_leave_open_booking(self, store):
        booking = _open(store)
        with pytest.raises(NotParticipant):
            store.leave(booking.id, GUEST)


class TestVersioning:
    def test_version_counts_successful_mutations_only(self, store):
        booking = _open(store)
        assert store.version == 1
        with pytest.raises(SelfJoinRejected):
            store.join(booking.id, HOST)
        assert store.version == 1
        store.join(booking.id, GUEST)
        store.leave(booking.id, GUEST)
        store.cancel(booking.id, HOST)
        assert store.version == 4

    def test_seeded_cancelled_bookings_go_to_history(self):
        live = make_booking(id="live")
        dead = make_booking(id="dead", status=BookingStatus.CANCELLED)
        store = BookingStore([live, dead])
        assert store.snapshot() == [live]
        assert store.history() == [dead]
        assert len(store) == 1
