"""Tests for the /api/matches/open board and multi-player flows."""

import pytest

from tests.mocks.session import act_as, confirm, create_booking, request_action


def _open_ids(client, skill: str = "All") -> list[str]:
    resp = client.get("/api/matches/open", params={"skill": skill})
    assert resp.status_code == 200
    return [d["booking"]["id"] for d in resp.json()["items"]]


def _my_ids(client) -> list[str]:
    return [d["booking"]["id"] for d in client.get("/api/bookings").json()["items"]]


class TestOpenMatchBoard:
    def test_hides_own_listing(self, client):
        # MOCK_USER hosts b1
        assert _open_ids(client) == ["b2"]

    def test_enriched_with_host(self, client):
        item = client.get("/api/matches/open").json()["items"][0]
        assert item["host"]["name"] == "Sam Smith"
        assert item["court"]["id"] == "c3"

    @pytest.mark.parametrize(
        "skill, expected",
        [
            ("All", ["b1", "b2"]),
            ("Advanced", ["b1"]),
            ("Intermediate", ["b2"]),
            ("Beginner", []),
        ],
    )
    def test_skill_filter(self, unauthed_client, skill, expected):
        act_as(unauthed_client, "p3")
        assert _open_ids(unauthed_client, skill) == expected

    def test_any_target_under_every_filter(self, unauthed_client):
        act_as(unauthed_client, "p3")
        created = create_booking(unauthed_client, match_type="open")
        act_as(unauthed_client, "p2")
        for skill in ("All", "Beginner", "Intermediate", "Advanced", "Pro"):
            assert created["booking"]["id"] in _open_ids(unauthed_client, skill)

    def test_invalid_skill_filter(self, client):
        resp = client.get("/api/matches/open", params={"skill": "Any"})
        assert resp.status_code == 422

    def test_requires_session(self, unauthed_client):
        resp = unauthed_client.get("/api/matches/open")
        assert resp.status_code == 401


class TestMatchFlows:
    def test_open_match_join_scenario(self, unauthed_client):
        api = unauthed_client
        act_as(api, "host")
        booking_id = create_booking(
            api, court_id="c1", date="2024-11-15", time="18:00",
            match_type="open", target_skill_level="Advanced",
        )["booking"]["id"]
        assert booking_id not in _open_ids(api)

        act_as(api, "viewer")
        assert booking_id in _open_ids(api, "All")
        assert booking_id in _open_ids(api, "Advanced")
        assert booking_id not in _open_ids(api, "Beginner")

        act_as(api, "guest")
        resp = confirm(api, request_action(api, booking_id, "join"))
        assert resp.status_code == 200
        assert booking_id in _my_ids(api)

        act_as(api, "host")
        assert booking_id in _my_ids(api)

        for viewer in ("host", "guest", "viewer"):
            act_as(api, viewer)
            assert booking_id not in _open_ids(api)

    def test_specific_booking_never_open(self, unauthed_client):
        api = unauthed_client
        act_as(api, "host")
        booking_id = create_booking(api, opponent_name="John Doe")["booking"]["id"]
        act_as(api, "viewer")
        for skill in ("All", "Beginner", "Intermediate", "Advanced", "Pro"):
            assert booking_id not in _open_ids(api, skill)

    def test_double_join_already_taken(self, unauthed_client):
        api = unauthed_client
        act_as(api, "p2")
        first = request_action(api, "b1", "join")
        act_as(api, "p3")
        second = request_action(api, "b1", "join")

        act_as(api, "p2")
        assert confirm(api, first).status_code == 200

        act_as(api, "p3")
        resp = confirm(api, second)
        assert resp.status_code == 409
        assert resp.json()["error"] == "already_taken"
        assert api.get("/api/bookings/b1").json()["booking"]["guest_id"] == "p2"

        resp = api.post("/api/bookings/b1/join")
        assert resp.status_code == 409

    def test_host_cancel_removes_for_guest(self, unauthed_client):
        api = unauthed_client
        act_as(api, "p3")
        confirm(api, request_action(api, "b1", "join"))
        assert "b1" in _my_ids(api)

        act_as(api, "p1")
        assert confirm(api, request_action(api, "b1", "cancel")).status_code == 200
        assert "b1" not in _my_ids(api)

        act_as(api, "p3")
        assert "b1" not in _my_ids(api)
        assert api.post("/api/bookings/b1/join").status_code == 409

    def test_guest_leave_reopens(self, unauthed_client):
        api = unauthed_client
        act_as(api, "p3")
        confirm(api, request_action(api, "b1", "join"))
        resp = confirm(api, request_action(api, "b1", "leave"))
        assert resp.status_code == 200
        booking = resp.json()["booking"]
        assert booking["status"] == "OPEN"
        assert booking["guest_id"] is None
        assert "b1" not in _my_ids(api)
        assert "b1" in _open_ids(api, "Advanced")

        act_as(api, "p1")
        assert "b1" in _my_ids(api)

    def test_confirmation_bound_to_requester(self, unauthed_client):
        api = unauthed_client
        act_as(api, "p3")
        pending = request_action(api, "b1", "join")
        act_as(api, "p2")
        resp = confirm(api, pending)
        assert resp.status_code == 403
        assert api.get(f"/api/confirmations/{pending['token']}").status_code == 404
