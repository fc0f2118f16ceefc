"""
Coach advice collaborator backed by the Gemini ``generateContent`` REST API.

Advice is a nice-to-have: ``get_advice`` never raises. An empty answer and
any failure (missing key, network error, bad payload) each map to a fixed
fallback tip.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from squash_match.config import ADVICE_TIMEOUT, GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_MODEL

logger = logging.getLogger(__name__)

EMPTY_FALLBACK = "Keep your eye on the ball and dominate the T!"
ERROR_FALLBACK = "Focus on controlling the T and keeping your opponent moving to the back corners."


def build_prompt(player_skill: str, opponent_skill: str | None, context: str) -> str:
    lines = [
        "You are a world-class Squash Coach.",
        f"My skill level is {player_skill}.",
    ]
    if opponent_skill:
        lines.append(f"My opponent's skill level is {opponent_skill}.")
    lines += [
        "",
        f'The user is asking: "{context}"',
        "",
        "Provide a concise, tactical, and motivating tip (max 3 sentences) to help me win or improve.",
        "Focus on court positioning, shot selection, or mental game.",
    ]
    return "\n".join(lines)


def _extract_text(payload: dict[str, Any]) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts).strip()


class CoachAdvisor:
    """Async client for short coaching tips."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        *,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = ADVICE_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or self._new_client()

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)

    async def close(self) -> None:
        await self._client.aclose()

    def _http(self) -> httpx.AsyncClient:
        # Owned clients are rebuilt after close(); injected ones are not.
        if self._owns_client and self._client.is_closed:
            self._client = self._new_client()
        return self._client

    async def get_advice(
        self,
        player_skill: str,
        opponent_skill: str | None,
        context: str,
    ) -> str:
        if not self._api_key:
            logger.warning("Coach advice requested but no API key is configured")
            return ERROR_FALLBACK

        payload = {
            "contents": [
                {"parts": [{"text": build_prompt(player_skill, opponent_skill, context)}]}
            ]
        }
        try:
            resp = await self._http().post(
                f"/models/{self._model}:generateContent",
                params={"key": self._api_key},
                json=payload,
            )
            resp.raise_for_status()
            text = _extract_text(resp.json())
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as exc:
            logger.error("Gemini API error: %s", exc)
            return ERROR_FALLBACK
        except Exception:
            logger.exception("Coach advice failed")
            return ERROR_FALLBACK

        return text or EMPTY_FALLBACK
