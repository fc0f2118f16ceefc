"""
Confirmation endpoints – second step of join, cancel and leave.
"""

from fastapi import APIRouter, Request

from squash_match.dependencies import CurrentUser
from squash_match.exceptions import ConfirmationNotFound
from squash_match.models import BookingDetail, PendingAction
from squash_match.rate_limit import WRITE, limiter
from squash_match.services.matching import booking_details
from squash_match.services.registry import registry

router = APIRouter(prefix="/api/confirmations", tags=["confirmations"])


@router.get(
    "/{token}",
    response_model=PendingAction,
    operation_id="getConfirmation",
    summary="Show a pending action awaiting confirmation",
)
async def get_confirmation(token: str, current_user: CurrentUser) -> PendingAction:
    pending = registry.confirmations.get(token)
    if pending is None or pending.actor_id != current_user.player_id:
        raise ConfirmationNotFound(token)
    return pending


@router.post(
    "/{token}",
    response_model=BookingDetail,
    operation_id="confirmAction",
    summary="Confirm a pending join, cancel or leave",
)
@limiter.limit(WRITE)
async def confirm_action(request: Request, token: str, current_user: CurrentUser) -> BookingDetail:
    booking = registry.confirmations.confirm(token, current_user.player_id)
    return booking_details(booking, registry.reference)


@router.delete(
    "/{token}",
    response_model=PendingAction,
    operation_id="discardAction",
    summary="Decline a pending action without changing the booking",
)
async def discard_action(token: str, current_user: CurrentUser) -> PendingAction:
    return registry.confirmations.discard(token, current_user.player_id)
