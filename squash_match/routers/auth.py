"""
Session endpoints – pick the player you are acting as.

There is no identity verification: a session cookie simply carries the
acting player's id so bookings know their host and guest.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response

from squash_match.dependencies import CurrentUser, create_session_cookie, user_info
from squash_match.models import MessageResponse, SessionRequest, UserInfo
from squash_match.rate_limit import WRITE, limiter

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/session",
    response_model=UserInfo,
    operation_id="startSession",
    summary="Act as the given player and receive a session cookie",
)
@limiter.limit(WRITE)
async def start_session(request: Request, body: SessionRequest, response: Response) -> UserInfo:
    create_session_cookie(response, body.player_id)
    return user_info(body.player_id, datetime.now(timezone.utc))


@router.post(
    "/logout",
    response_model=MessageResponse,
    operation_id="logout",
    summary="Clear the session cookie",
)
async def logout(current_user: CurrentUser, response: Response) -> MessageResponse:
    response.delete_cookie("session")
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserInfo,
    operation_id="getMe",
    summary="Get the acting player",
)
async def get_me(current_user: CurrentUser) -> UserInfo:
    return current_user
