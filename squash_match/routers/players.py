"""
Player endpoints (reference data, read-only).
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from squash_match.dependencies import PaginationParams, paginate
from squash_match.models import Player, PlayerListResponse, SkillLevel
from squash_match.services.registry import registry

router = APIRouter(prefix="/api/players", tags=["players"])


@router.get(
    "",
    response_model=PlayerListResponse,
    operation_id="listPlayers",
    summary="List players, best rated first",
)
async def list_players(
    pagination: PaginationParams = Depends(PaginationParams),
    skill_level: SkillLevel | None = Query(None, description="Filter by skill level"),
) -> PlayerListResponse:
    players = registry.reference.list_players(skill_level=skill_level)
    players = sorted(players, key=lambda p: p.rating, reverse=True)
    return paginate(players, pagination, PlayerListResponse)


@router.get(
    "/{player_id}",
    response_model=Player,
    operation_id="getPlayer",
    summary="Get a player's profile",
)
async def get_player(player_id: str) -> Player:
    player = registry.reference.get_player(player_id)
    if player is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Player {player_id} not found",
        )
    return player
