"""HTTP client for the HeyGen video-generation API.

Requests are authenticated with the caller's own API key; the service never
stores one. There is no retry: a failed call is reported to the caller, who
can resubmit.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from avatar_arena.core.settings import Settings

logger = logging.getLogger(__name__)


class HeyGenError(RuntimeError):
    """Raised when the video-generation API fails or returns an unusable response."""


@dataclass(frozen=True)
class HeyGenConfig:
    """Immutable configuration for video-generation calls."""

    base_url: str
    timeout_seconds: float

    @classmethod
    def from_settings(cls, settings: Settings) -> HeyGenConfig:
        return cls(
            base_url=settings.heygen_api_url.rstrip("/"),
            timeout_seconds=float(settings.heygen_timeout_seconds),
        )


@dataclass(frozen=True)
class HeyGenVideo:
    """Result of a generate or status call."""

    video_url: str
    thumbnail_url: str | None
    video_id: str | None
    status: str
    job_id: str | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "video_url": self.video_url,
            "thumbnail_url": self.thumbnail_url,
            "video_id": self.video_id,
            "status": self.status,
            "job_id": self.job_id,
        }


def _parse_video(data: Any, *, job_id: str | None = None) -> HeyGenVideo:
    if not isinstance(data, dict):
        raise HeyGenError("HeyGen API returned an unexpected payload")
    # v2 responses wrap the payload in "data"; older ones are flat.
    payload = data.get("data") if isinstance(data.get("data"), dict) else data
    return HeyGenVideo(
        video_url=payload.get("video_url") or "",
        thumbnail_url=payload.get("thumbnail_url"),
        video_id=payload.get("video_id"),
        status=payload.get("status") or "processing",
        job_id=payload.get("job_id") or job_id,
    )


class HeyGenClient:
    """Async wrapper around the video-generation endpoints."""

    def __init__(
        self,
        config: HeyGenConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, api_key: str, **kwargs: Any) -> Any:
        if not api_key:
            raise HeyGenError("HeyGen API key not provided")

        client = await self._ensure_client()
        headers = {"Authorization": f"Bearer {api_key}"}
        try:
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as err:
            logger.warning("HeyGen request %s %s failed: %s", method, path, err)
            raise HeyGenError(f"HeyGen request failed: {err}") from err

        if response.is_error:
            logger.warning(
                "HeyGen request %s %s returned %s", method, path, response.status_code
            )
            raise HeyGenError(f"HeyGen API error: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as err:
            raise HeyGenError("HeyGen API returned invalid JSON") from err

    async def generate_video(
        self,
        *,
        script: str,
        voice_type: str,
        api_key: str,
        avatar_id: str | None = None,
    ) -> HeyGenVideo:
        """Start rendering a video of ``script`` spoken in ``voice_type``."""
        body = {
            "script": script,
            "voice": {"type": voice_type},
            "avatar": avatar_id or "default",
            "quality": "high",
        }
        data = await self._request("POST", "/video/generate", api_key, json=body)
        return _parse_video(data)

    async def get_video_status(self, job_id: str, *, api_key: str) -> HeyGenVideo:
        """Return the current render state of a previously started job."""
        data = await self._request("GET", f"/video/status/{job_id}", api_key)
        return _parse_video(data, job_id=job_id)
