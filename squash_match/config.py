"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Environment ───────────────────────────────────────────────────────────

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")

# ── JWT ───────────────────────────────────────────────────────────────────

JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me-in-production")
JWT_ALGORITHM: str = "HS256"
JWT_EXPIRY_DAYS: int = int(os.getenv("JWT_EXPIRY_DAYS", "7"))

# ── Bookings ──────────────────────────────────────────────────────────────

# Load the two demo open matches on startup.
SEED_DEMO_BOOKINGS: bool = os.getenv("SEED_DEMO_BOOKINGS", "true").lower() == "true"

# How long a join/cancel/leave request waits for confirmation (seconds).
CONFIRMATION_TTL_SECONDS: float = float(os.getenv("CONFIRMATION_TTL_SECONDS", "300"))

# ── Geolocation ───────────────────────────────────────────────────────────

# Used whenever the player's position is unknown (Singapore).
DEFAULT_LAT: float = float(os.getenv("DEFAULT_LAT", "1.3521"))
DEFAULT_LNG: float = float(os.getenv("DEFAULT_LNG", "103.8198"))

# Empty string disables the lookup entirely.
GEOLOCATION_URL: str = os.getenv("GEOLOCATION_URL", "")
GEOLOCATION_TIMEOUT: float = float(os.getenv("GEOLOCATION_TIMEOUT", "5"))

# ── Coach advice (Gemini) ─────────────────────────────────────────────────

GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL: str = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
ADVICE_TIMEOUT: float = float(os.getenv("ADVICE_TIMEOUT", "15"))


def advice_enabled() -> bool:
    """True when an API key is configured for the coach advisor."""
    return bool(GEMINI_API_KEY)
