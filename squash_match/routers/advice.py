"""
Collaborator endpoints: coach advice and the resolved player location.

Neither touches booking state, and neither ever fails because the
collaborator behind it did.
"""

from fastapi import APIRouter, Request

from squash_match.dependencies import CurrentUser
from squash_match.models import AdviceRequest, AdviceResponse, LocationResponse, SkillLevel
from squash_match.rate_limit import STRICT, limiter
from squash_match.services.registry import registry

router = APIRouter(prefix="/api", tags=["assistant"])


@router.post(
    "/advice",
    response_model=AdviceResponse,
    operation_id="getAdvice",
    summary="Get a short coaching tip for an upcoming match",
)
@limiter.limit(STRICT)
async def get_advice(request: Request, body: AdviceRequest, current_user: CurrentUser) -> AdviceResponse:
    player_skill = body.player_skill or current_user.skill_level or SkillLevel.INTERMEDIATE
    advice = await registry.advisor.get_advice(
        player_skill.value,
        body.opponent_skill.value if body.opponent_skill else None,
        body.context,
    )
    return AdviceResponse(advice=advice)


@router.get(
    "/location",
    response_model=LocationResponse,
    operation_id="getLocation",
    summary="Current position used for new bookings",
)
async def get_location() -> LocationResponse:
    return LocationResponse(
        location=registry.locator.current(),
        is_default=registry.locator.is_default,
    )
