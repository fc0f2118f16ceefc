"""
Booking endpoints (session required).

Creating a booking takes effect at once. Join, cancel and leave only
register a pending action; the player must confirm it through
/api/confirmations/{token} before anything changes.
"""

from fastapi import APIRouter, Depends, Request, status

from squash_match.dependencies import CurrentUser, PaginationParams, paginate
from squash_match.exceptions import BookingNotFound
from squash_match.models import (
    BookingCreate,
    BookingDetail,
    BookingListResponse,
    PendingAction,
    PendingActionType,
)
from squash_match.rate_limit import WRITE, limiter
from squash_match.services.matching import booking_details, my_bookings
from squash_match.services.registry import registry

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingDetail,
    status_code=status.HTTP_201_CREATED,
    operation_id="createBooking",
    summary="Reserve a court with a named opponent or as an open match",
)
@limiter.limit(WRITE)
async def create_booking(
    request: Request,
    body: BookingCreate,
    current_user: CurrentUser,
) -> BookingDetail:
    booking = registry.store.create(
        current_user.player_id,
        court_id=body.court_id,
        date=body.date,
        time=body.time,
        match_type=body.match_type,
        opponent_name=body.opponent_name,
        target_skill_level=body.target_skill_level,
        location=body.location or registry.locator.current(),
        notes=body.notes,
    )
    return booking_details(booking, registry.reference)


@router.get(
    "",
    response_model=BookingListResponse,
    operation_id="listMyBookings",
    summary="Bookings the current player hosts or has joined",
)
async def list_my_bookings(
    current_user: CurrentUser,
    pagination: PaginationParams = Depends(PaginationParams),
) -> BookingListResponse:
    details = [
        booking_details(b, registry.reference)
        for b in my_bookings(registry.store.snapshot(), current_user.player_id)
    ]
    return paginate(details, pagination, BookingListResponse)


@router.get(
    "/{booking_id}",
    response_model=BookingDetail,
    operation_id="getBooking",
    summary="Get a booking, including cancelled ones",
)
async def get_booking(booking_id: str, current_user: CurrentUser) -> BookingDetail:
    booking = registry.store.get(booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)
    return booking_details(booking, registry.reference)


# ── Two-step actions ───────────────────────────────────────────────────────


def _request(action: PendingActionType, booking_id: str, player_id: str) -> PendingAction:
    return registry.confirmations.request(action, booking_id, player_id)


@router.post(
    "/{booking_id}/join",
    response_model=PendingAction,
    status_code=status.HTTP_202_ACCEPTED,
    operation_id="requestJoin",
    summary="Ask to join an open match (needs confirmation)",
)
@limiter.limit(WRITE)
async def request_join(request: Request, booking_id: str, current_user: CurrentUser) -> PendingAction:
    return _request(PendingActionType.JOIN, booking_id, current_user.player_id)


@router.post(
    "/{booking_id}/cancel",
    response_model=PendingAction,
    status_code=status.HTTP_202_ACCEPTED,
    operation_id="requestCancel",
    summary="Ask to cancel a booking you host (needs confirmation)",
)
@limiter.limit(WRITE)
async def request_cancel(request: Request, booking_id: str, current_user: CurrentUser) -> PendingAction:
    return _request(PendingActionType.CANCEL, booking_id, current_user.player_id)


@router.post(
    "/{booking_id}/leave",
    response_model=PendingAction,
    status_code=status.HTTP_202_ACCEPTED,
    operation_id="requestLeave",
    summary="Ask to leave a match you joined (needs confirmation)",
)
@limiter.limit(WRITE)
async def request_leave(request: Request, booking_id: str, current_user: CurrentUser) -> PendingAction:
    return _request(PendingActionType.LEAVE, booking_id, current_user.player_id)
