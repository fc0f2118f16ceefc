"""
Geolocation collaborator.

Looks up the player's approximate position once, in the background, so
booking creation never waits on it. Until a lookup succeeds (or when it
fails, times out, or is disabled) the configured default coordinate is
reported instead.

Usage::

    locator = GeoLocator(url="https://ipapi.co/json/")
    await locator.start()       # schedules the lookup, returns at once
    locator.current()           # default until the lookup lands
    await locator.stop()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import httpx

from squash_match.config import DEFAULT_LAT, DEFAULT_LNG, GEOLOCATION_TIMEOUT, GEOLOCATION_URL
from squash_match.models import GeoLocation

logger = logging.getLogger(__name__)

# Field names used by common IP-geolocation APIs, in lookup order.
_LAT_KEYS = ("lat", "latitude")
_LNG_KEYS = ("lng", "lon", "longitude")


def _first(payload: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    raise KeyError(keys[0])


def parse_coordinate(payload: dict[str, Any]) -> GeoLocation:
    """Extract a coordinate from a geolocation API response."""
    if "location" in payload and isinstance(payload["location"], dict):
        payload = payload["location"]
    return GeoLocation(
        lat=float(_first(payload, _LAT_KEYS)),
        lng=float(_first(payload, _LNG_KEYS)),
    )


class GeoLocator:
    """Resolves and caches the current position with a default fallback."""

    def __init__(
        self,
        url: str = GEOLOCATION_URL,
        *,
        timeout: float = GEOLOCATION_TIMEOUT,
        default: GeoLocation | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._default = default or GeoLocation(lat=DEFAULT_LAT, lng=DEFAULT_LNG)
        self._location: GeoLocation | None = None
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._task: asyncio.Task[GeoLocation] | None = None

    # ── Lifecycle ──────────────────────────────────────────────────────

    async def start(self) -> None:
        """Schedule the lookup without waiting for it."""
        if not self._url:
            logger.info("Geolocation disabled; using default location %s", self._default)
            return
        self._task = asyncio.create_task(self.refresh(), name="geolocation")

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await self._client.aclose()

    def _http(self) -> httpx.AsyncClient:
        # Owned clients are rebuilt after stop(); injected ones are not.
        if self._owns_client and self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    # ── Lookup ─────────────────────────────────────────────────────────

    async def refresh(self) -> GeoLocation:
        """Fetch the position now. Never raises; falls back to the default."""
        if not self._url:
            return self.current()
        try:
            resp = await self._http().get(self._url)
            resp.raise_for_status()
            self._location = parse_coordinate(resp.json())
            logger.info("Resolved location %s", self._location)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.info("Using default location. Reason: %s", exc)
        except Exception:
            logger.exception("Location lookup failed; using default location")
        return self.current()

    # ── Read ───────────────────────────────────────────────────────────

    def current(self) -> GeoLocation:
        return self._location or self._default

    @property
    def is_default(self) -> bool:
        return self._location is None
