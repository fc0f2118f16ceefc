"""
Squash court endpoints (reference data, read-only).
"""

from fastapi import APIRouter, Depends, HTTPException, status

from squash_match.dependencies import PaginationParams, paginate
from squash_match.models import Court, CourtListResponse
from squash_match.services.registry import registry

router = APIRouter(prefix="/api/courts", tags=["courts"])


@router.get(
    "",
    response_model=CourtListResponse,
    operation_id="listCourts",
    summary="List bookable squash courts",
)
async def list_courts(
    pagination: PaginationParams = Depends(PaginationParams),
) -> CourtListResponse:
    return paginate(registry.reference.list_courts(), pagination, CourtListResponse)


@router.get(
    "/{court_id}",
    response_model=Court,
    operation_id="getCourt",
    summary="Get details of a specific court",
)
async def get_court(court_id: str) -> Court:
    court = registry.reference.get_court(court_id)
    if court is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Court {court_id} not found",
        )
    return court
