"""YouTube playback-config fetcher: public player API over httpx.

Video links follow these shapes:
    https://youtu.be/{video_id}
    https://www.youtube.com/watch?v={video_id}
    https://www.youtube.com/watch?feature=share&v={video_id}
    https://www.youtube.com/embed/{video_id}
    https://www.youtube.com/v/{video_id}

The video ID is an 11-character token of word characters and hyphens.

Extraction posts the video ID to the unauthenticated player endpoint with
a mobile client context and parses ``streamingData`` / ``videoDetails``
out of the JSON response. Cipher-protected formats carry no plain
``url`` and are kept as unusable candidates.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from smartmedia.domain.entities.video import PlaybackConfig, StreamCandidate
from smartmedia.domain.errors import FetchError

log = structlog.get_logger(__name__)

_VIDEO_ID_RE = re.compile(
    r"(?:https?://(?:www\.)?|www\.)"
    r"(?:youtu\.be/|youtube\.com/(?:embed/|v/|watch\?v=|watch\?.+&v=))"
    r"([\w-]{11})(?:\S+)?",
    re.ASCII,
)

DEFAULT_PLAYER_API_URL = "https://www.youtube.com/youtubei/v1/player"
DEFAULT_CLIENT_NAME = "ANDROID"
DEFAULT_CLIENT_VERSION = "19.09.37"

# Numeric client IDs expected in the X-YouTube-Client-Name header
_CLIENT_NAME_IDS = {
    "WEB": "1",
    "ANDROID": "3",
    "IOS": "5",
}


def extract_video_id(url: str) -> str | None:
    """Extract the 11-character video ID from a YouTube URL."""
    match = _VIDEO_ID_RE.search(url)
    return match.group(1) if match else None


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _parse_candidate(fmt: dict[str, Any]) -> StreamCandidate:
    return StreamCandidate(
        bitrate=_to_int(fmt.get("bitrate")),
        url=fmt.get("url") or None,
        mime_type=str(fmt.get("mimeType", "")),
    )


def parse_player_response(data: dict[str, Any]) -> PlaybackConfig:
    """Build a PlaybackConfig from a player API response.

    Adaptive formats are restricted to video tracks; audio-only tracks
    are not playable on their own.
    """
    streaming = data.get("streamingData") or {}
    details = data.get("videoDetails") or {}

    adaptive = tuple(
        _parse_candidate(f)
        for f in streaming.get("adaptiveFormats") or []
        if isinstance(f, dict) and str(f.get("mimeType", "")).startswith("video/")
    )
    muxed = tuple(
        _parse_candidate(f)
        for f in streaming.get("formats") or []
        if isinstance(f, dict)
    )

    return PlaybackConfig(
        adaptive=adaptive,
        muxed=muxed,
        is_live_content=details.get("isLiveContent") is True,
        dash_manifest_url=streaming.get("dashManifestUrl") or None,
        hls_manifest_url=streaming.get("hlsManifestUrl") or None,
    )


class YouTubePlaybackConfigFetcher:
    """Fetches playback configuration documents from the player API.

    Implements ``PlaybackConfigFetcherPort``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_url: str = DEFAULT_PLAYER_API_URL,
        client_name: str = DEFAULT_CLIENT_NAME,
        client_version: str = DEFAULT_CLIENT_VERSION,
        timeout: float = 15.0,
    ) -> None:
        self._http = http_client
        self._api_url = api_url
        self._client_name = client_name
        self._client_version = client_version
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "youtube"

    def _payload(self, site_id: str) -> dict[str, Any]:
        client: dict[str, Any] = {
            "clientName": self._client_name,
            "clientVersion": self._client_version,
            "hl": "en",
            "gl": "US",
        }
        if self._client_name == "ANDROID":
            client["androidSdkVersion"] = 30
        return {
            "videoId": site_id,
            "context": {"client": client},
            "contentCheckOk": True,
            "racyCheckOk": True,
        }

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-YouTube-Client-Version": self._client_version,
        }
        client_id = _CLIENT_NAME_IDS.get(self._client_name)
        if client_id:
            headers["X-YouTube-Client-Name"] = client_id
        if self._client_name == "ANDROID":
            headers["User-Agent"] = (
                f"com.google.android.youtube/{self._client_version} "
                "(Linux; U; Android 11) gzip"
            )
        return headers

    async def fetch(self, site_id: str) -> PlaybackConfig:
        """Fetch and parse the playback configuration for a video ID."""
        try:
            resp = await self._http.post(
                self._api_url,
                params={"prettyPrint": "false"},
                json=self._payload(site_id),
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            log.warning("youtube_player_timeout", site_id=site_id)
            raise FetchError(f"player request timed out for {site_id}") from exc
        except httpx.HTTPError as exc:
            log.warning("youtube_player_request_failed", site_id=site_id, error=str(exc))
            raise FetchError(f"player request failed for {site_id}: {exc}") from exc

        if resp.status_code != 200:
            log.warning(
                "youtube_player_http_error",
                status=resp.status_code,
                site_id=site_id,
            )
            raise FetchError(
                f"player API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            log.warning("youtube_player_invalid_json", site_id=site_id)
            raise FetchError("player API returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise FetchError("player API returned a non-object payload")

        playability = data.get("playabilityStatus") or {}
        status = playability.get("status", "OK")
        if status != "OK":
            reason = playability.get("reason") or status
            log.info("youtube_video_unplayable", site_id=site_id, status=status)
            raise FetchError(f"video {site_id} is not playable: {reason}")

        config = parse_player_response(data)
        log.debug(
            "youtube_player_parsed",
            site_id=site_id,
            adaptive=len(config.adaptive),
            muxed=len(config.muxed),
            live=config.is_live_content,
        )
        return config
