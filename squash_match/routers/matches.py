"""
Open match board – matches the current player could join.
"""

from fastapi import APIRouter, Depends, Query

from squash_match.dependencies import CurrentUser, PaginationParams, paginate
from squash_match.models import BookingListResponse, SkillFilter
from squash_match.services.matching import booking_details, open_matches
from squash_match.services.registry import registry

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get(
    "/open",
    response_model=BookingListResponse,
    operation_id="listOpenMatches",
    summary="Open matches hosted by other players",
)
async def list_open_matches(
    current_user: CurrentUser,
    pagination: PaginationParams = Depends(PaginationParams),
    skill: SkillFilter = Query(SkillFilter.ALL, description="Wanted skill level, or All"),
) -> BookingListResponse:
    matches = open_matches(registry.store.snapshot(), current_user.player_id, skill)
    details = [booking_details(b, registry.reference) for b in matches]
    return paginate(details, pagination, BookingListResponse)
