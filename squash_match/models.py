"""Pydantic models for the Squash Match API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

OPEN_MATCH_LABEL = "Open Match"
JOINED_LABEL = "Opponent Joined"


class SkillLevel(str, Enum):
    """Skill tier of a player."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    PRO = "Pro"


class TargetSkillLevel(str, Enum):
    """Skill tier an open-match host is willing to play against."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    PRO = "Pro"
    ANY = "Any"


class SkillFilter(str, Enum):
    """Skill filter applied when browsing open matches."""
    ALL = "All"
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    PRO = "Pro"


class BookingStatus(str, Enum):
    OPEN = "OPEN"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class MatchType(str, Enum):
    SPECIFIC = "specific"
    OPEN = "open"


class PendingActionType(str, Enum):
    JOIN = "join"
    CANCEL = "cancel"
    LEAVE = "leave"


# ── Reference data ────────────────────────────────────────────────────────


class GeoLocation(BaseModel):
    """Geographic coordinates."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")


class Court(BaseModel):
    """Squash court information."""
    id: str = Field(..., description="Unique court identifier")
    name: str = Field(..., description="Court name")
    address: str = Field(..., description="Street address")
    location: GeoLocation = Field(..., description="GPS coordinates")


class Player(BaseModel):
    """Player profile."""
    id: str = Field(..., description="Unique player identifier")
    name: str = Field(..., description="Display name")
    skill_level: SkillLevel = Field(..., description="Self-reported skill tier")
    rating: float = Field(..., ge=0, le=5, description="Average peer rating (0 to 5)")
    avatar: Optional[str] = Field(None, description="Avatar image URL")


# ── Bookings ──────────────────────────────────────────────────────────────


class Booking(BaseModel):
    """A court reservation, either confirmed or open for others to join."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique booking identifier")
    court_id: str = Field(..., description="Booked court")
    host_id: str = Field(..., description="Player who created the booking")
    guest_id: Optional[str] = Field(None, description="Player who joined an open booking")
    date: str = Field(..., description="Match date (YYYY-MM-DD)")
    time: str = Field(..., description="Match time (HH:MM)")
    registered_at: datetime = Field(..., description="Creation timestamp")
    location_at_registration: Optional[GeoLocation] = Field(
        None, description="Host position when the booking was made"
    )
    opponent_label: str = Field(default=OPEN_MATCH_LABEL, description="Opponent display label")
    target_skill_level: Optional[TargetSkillLevel] = Field(
        None, description="Skill tier wanted for an open match"
    )
    notes: Optional[str] = Field(None, description="Free-text notes from the host")
    status: BookingStatus = Field(..., description="Lifecycle state")


class BookingCreate(BaseModel):
    """Request to reserve a court slot.

    Court, date and time are declared optional here so that missing values
    are reported by the booking store as an incomplete booking rather than
    a generic validation error.
    """
    court_id: Optional[str] = Field(None, description="Court to book")
    date: Optional[str] = Field(None, description="Match date (YYYY-MM-DD)")
    time: Optional[str] = Field(None, description="Match time (HH:MM)")
    match_type: MatchType = Field(default=MatchType.SPECIFIC, description="Named opponent or open match")
    opponent_name: Optional[str] = Field(None, description="Opponent name for a specific match")
    target_skill_level: TargetSkillLevel = Field(
        default=TargetSkillLevel.ANY, description="Wanted skill tier for an open match"
    )
    notes: Optional[str] = Field(None, max_length=500, description="Free-text notes")
    location: Optional[GeoLocation] = Field(None, description="Current host position, if known")


class BookingDetail(BaseModel):
    """Booking enriched with its court and participants."""
    booking: Booking
    court: Optional[Court] = None
    host: Optional[Player] = None
    guest: Optional[Player] = None


class PendingAction(BaseModel):
    """A join/cancel/leave request waiting for the caller to confirm it."""
    token: str = Field(..., description="Token to pass to the confirmation endpoint")
    action: PendingActionType = Field(..., description="Requested mutation")
    booking_id: str = Field(..., description="Target booking")
    actor_id: str = Field(..., description="Player who requested the action")
    requested_at: datetime = Field(..., description="When the request was made")
    expires_at: datetime = Field(..., description="When the request lapses")
    prompt: str = Field(..., description="Question to put to the player")


# ── Advice ────────────────────────────────────────────────────────────────


class AdviceRequest(BaseModel):
    context: str = Field(..., min_length=1, max_length=1000, description="What the player is asking")
    player_skill: Optional[SkillLevel] = Field(None, description="Defaults to the current player's level")
    opponent_skill: Optional[SkillLevel] = Field(None, description="Opponent's level, if known")


class AdviceResponse(BaseModel):
    advice: str = Field(..., description="Short coaching tip")


# ── Session ───────────────────────────────────────────────────────────────


class SessionRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=64, pattern=r"^\S+$", description="Player to act as")


class UserInfo(BaseModel):
    player_id: str = Field(..., description="Acting player identifier")
    name: Optional[str] = Field(None, description="Display name, if the player is known")
    skill_level: Optional[SkillLevel] = Field(None, description="Skill tier, if the player is known")
    created_at: datetime = Field(..., description="Session start")


class MessageResponse(BaseModel):
    message: str


# ── Listings ──────────────────────────────────────────────────────────────


class PaginationMeta(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class CourtListResponse(BaseModel):
    items: List[Court]
    meta: PaginationMeta


class PlayerListResponse(BaseModel):
    items: List[Player]
    meta: PaginationMeta


class BookingListResponse(BaseModel):
    items: List[BookingDetail]
    meta: PaginationMeta


class LocationResponse(BaseModel):
    location: GeoLocation
    is_default: bool = Field(..., description="True when the configured fallback is in use")


class Error(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current timestamp")
