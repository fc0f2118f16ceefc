"""
Booking errors.

Every failure here is recoverable: the store is left untouched and the
HTTP layer renders the error as an ``Error`` body with the status code
carried by the exception class.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class BookingError(Exception):
    """Base class for booking lifecycle failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error: str = "booking_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class IncompleteBooking(BookingError):
    """Court, date or time missing when creating a booking."""

    status_code = 422
    error = "incomplete_booking"

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            "Please fill in all required fields and select a court.",
            details={"missing": missing},
        )
        self.missing = missing


class AlreadyTaken(BookingError):
    """Join attempted on a booking that is no longer open."""

    status_code = status.HTTP_409_CONFLICT
    error = "already_taken"

    def __init__(self, booking_id: str, current_status: str) -> None:
        super().__init__(
            "This match is no longer open.",
            details={"booking_id": booking_id, "status": current_status},
        )


class SelfJoinRejected(BookingError):
    """A host tried to join their own open booking."""

    status_code = status.HTTP_409_CONFLICT
    error = "self_join_rejected"

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            "You cannot join a match you are hosting.",
            details={"booking_id": booking_id},
        )


class BookingNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} not found", details={"booking_id": booking_id})


class NotParticipant(BookingError):
    """The acting player has no right to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "not_participant"


class ConfirmationNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "confirmation_not_found"

    def __init__(self, token: str) -> None:
        super().__init__(
            "Confirmation request not found or expired.",
            details={"token": token},
        )
