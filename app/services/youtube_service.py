"""YouTube Data API lookups for the admin song form."""

import logging
import re
from typing import Optional

import httpx

from app.config import get_settings
from app.schemas.metadata import YouTubeVideoMetadata
from app.services.http_client import get_http_client
from app.services.metadata_errors import (
    InvalidMetadataURLError,
    MetadataConfigError,
    MetadataFetchError,
    MetadataNotFoundError,
)

logger = logging.getLogger(__name__)

VIDEO_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),  # Bare video id
]

DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

# "Artist - Title", "Artist: Title", "Artist | Title"
ARTIST_TITLE_RE = re.compile(r"^(.+?)\s*[-–—:|]\s*(.+)$")

TITLE_NOISE = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\s*\(Official\s*(Music\s*)?Video\)",
        r"\s*\[Official\s*(Music\s*)?Video\]",
        r"\s*\(Official\s*Audio\)",
        r"\s*\[Official\s*Audio\]",
        r"\s*\(Lyrics?\)",
        r"\s*\[Lyrics?\]",
        r"\s*\(Lyric\s*Video\)",
        r"\s*\[Lyric\s*Video\]",
        r"\s*\(Visualizer\)",
        r"\s*\[Visualizer\]",
        r"\s*\(Audio\)",
        r"\s*\[Audio\]",
        r"\s*\(HD\)",
        r"\s*\(HQ\)",
        r"\s*\(4K\)",
        r"\s*MV$",
        r"\s*M/V$",
    )
]

ARTIST_NOISE = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (r"\s*-\s*Topic$", r"\s*VEVO$", r"\s*Official$")
]


def extract_video_id(url: str) -> Optional[str]:
    """Get the 11-character video id from a YouTube URL or a bare id."""
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url.strip())
        if match:
            return match.group(1)
    return None


def parse_duration(duration: Optional[str]) -> Optional[int]:
    """ISO 8601 duration (PT#H#M#S) to milliseconds."""
    if not duration:
        return None
    match = DURATION_RE.match(duration)
    if not match:
        return None
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return (hours * 3600 + minutes * 60 + seconds) * 1000


def clean_title(title: str) -> str:
    for pattern in TITLE_NOISE:
        title = pattern.sub("", title)
    return title.strip()


def clean_artist(artist: str) -> str:
    for pattern in ARTIST_NOISE:
        artist = pattern.sub("", artist)
    return artist.strip()


def split_video_title(video_title: str, channel_title: str) -> tuple[str, str]:
    """
    Best-effort (artist, title) from a video title.

    Falls back to the channel name as artist when the title has no
    "Artist - Title" shape.
    """
    title = video_title or ""
    artist = channel_title or ""
    match = ARTIST_TITLE_RE.match(title)
    if match:
        artist = match.group(1).strip()
        title = match.group(2).strip()
    return clean_artist(artist), clean_title(title)


def best_thumbnail(thumbnails: dict) -> Optional[str]:
    for size in ("maxres", "high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


class YouTubeService:
    """Service for looking up video metadata on YouTube."""

    API_URL = "https://www.googleapis.com/youtube/v3/videos"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_key: Optional[str] = None):
        self._client = client
        self.api_key = api_key if api_key is not None else get_settings().youtube_api_key

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    async def get_video_metadata(self, url: str) -> YouTubeVideoMetadata:
        """
        Resolve a YouTube URL or video id to song metadata.

        Raises:
            InvalidMetadataURLError: no video id could be found
            MetadataConfigError: no API key configured
            MetadataNotFoundError: the video does not exist
            MetadataFetchError: the API could not be reached or errored
        """
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidMetadataURLError(
                "Invalid YouTube URL. Please use a valid YouTube video URL."
            )

        if not self.api_key:
            raise MetadataConfigError("YouTube API key not configured")

        try:
            response = await self.client.get(
                self.API_URL,
                params={"part": "snippet,contentDetails", "id": video_id, "key": self.api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"YouTube lookup failed for {video_id}: {e}")
            raise MetadataFetchError("Failed to fetch from YouTube API") from e

        items = data.get("items") or []
        if not items:
            raise MetadataNotFoundError("Video not found")

        video = items[0]
        snippet = video.get("snippet") or {}
        content_details = video.get("contentDetails") or {}

        artist, title = split_video_title(snippet.get("title", ""), snippet.get("channelTitle", ""))
        published_at = snippet.get("publishedAt")

        return YouTubeVideoMetadata(
            title=title,
            artist=artist,
            cover_url=best_thumbnail(snippet.get("thumbnails") or {}),
            youtube_video_id=video_id,
            duration_ms=parse_duration(content_details.get("duration")),
            release_date=published_at.split("T")[0] if published_at else None,
            channel_name=snippet.get("channelTitle"),
        )


# Singleton instance
youtube_service = YouTubeService()
