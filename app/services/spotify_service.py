import base64
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from app.config import get_settings
from app.schemas.metadata import SpotifyArtistInfo, SpotifyTrackMetadata
from app.services.http_client import get_http_client
from app.services.metadata_errors import InvalidMetadataURLError, MetadataFetchError

logger = logging.getLogger(__name__)

TRACK_ID_RE = re.compile(r"track/([a-zA-Z0-9]+)")
# oEmbed titles look like "Song - Artist"
OEMBED_TITLE_RE = re.compile(r"^(.+?)\s*[-–—]\s*(.+)$")


def extract_track_id(url: str) -> str:
    """
    Pull the track id out of an open.spotify.com track URL.

    Raises:
        InvalidMetadataURLError: not a track URL
    """
    if "open.spotify.com/track/" not in url:
        raise InvalidMetadataURLError(
            "Invalid Spotify URL. Please use a track URL (open.spotify.com/track/...)."
        )
    match = TRACK_ID_RE.search(url)
    if not match:
        raise InvalidMetadataURLError("Could not extract track ID from URL")
    return match.group(1)


def parse_oembed_title(title: str) -> tuple[str, str]:
    """Split an oEmbed title into (song title, artist); artist is empty if there is no separator."""
    match = OEMBED_TITLE_RE.match(title or "")
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return title or "", ""


class SpotifyService:
    """Service for looking up track metadata on Spotify."""

    TOKEN_URL = "https://accounts.spotify.com/api/token"
    API_BASE_URL = "https://api.spotify.com/v1"
    OEMBED_URL = "https://open.spotify.com/oembed"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
    ):
        settings = get_settings()
        self._client = client
        self.client_id = client_id if client_id is not None else settings.spotify_client_id
        self.client_secret = client_secret if client_secret is not None else settings.spotify_client_secret
        self._access_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    async def _get_access_token(self) -> str:
        """Get or refresh Spotify access token using Client Credentials flow."""
        # Return cached token if still valid
        if self._access_token and self._token_expires_at:
            if datetime.now(timezone.utc) < self._token_expires_at:
                return self._access_token

        if not self.client_id or not self.client_secret:
            raise ValueError("Spotify credentials not configured")

        credentials = f"{self.client_id}:{self.client_secret}"
        encoded_credentials = base64.b64encode(credentials.encode()).decode()

        response = await self.client.post(
            self.TOKEN_URL,
            headers={
                "Authorization": f"Basic {encoded_credentials}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data={"grant_type": "client_credentials"},
        )
        response.raise_for_status()
        data = response.json()

        access_token = data.get("access_token")
        if not access_token:
            raise ValueError("Spotify token response has no access_token")

        self._access_token = access_token
        # Set expiry 5 minutes before actual expiry for safety
        expires_in = data.get("expires_in", 3600)
        self._token_expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in - 300)

        return self._access_token

    async def get_track_metadata(self, url: str) -> SpotifyTrackMetadata:
        """
        Resolve a Spotify track URL to its metadata.

        Falls back to the public oEmbed endpoint (title, artist and cover
        only) when the Web API cannot be used.

        Raises:
            InvalidMetadataURLError: the URL is not a Spotify track URL
            MetadataFetchError: both the Web API and oEmbed failed
        """
        track_id = extract_track_id(url)

        try:
            return await self._fetch_track(track_id)
        except (ValueError, httpx.HTTPError) as e:
            logger.warning(f"Spotify Web API lookup failed for {track_id}, trying oEmbed: {e}")

        return await self._fetch_oembed(url)

    async def _fetch_track(self, track_id: str) -> SpotifyTrackMetadata:
        token = await self._get_access_token()

        response = await self.client.get(
            f"{self.API_BASE_URL}/tracks/{track_id}",
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        item = response.json()

        album = item.get("album") or {}
        images = album.get("images") or []
        cover_url = images[0]["url"] if images else None

        artists = [
            SpotifyArtistInfo(name=artist["name"], spotify_id=artist.get("id"))
            for artist in item.get("artists", [])
        ]
        await self._attach_artist_images(artists, token)

        return SpotifyTrackMetadata(
            source="api",
            title=item.get("name", ""),
            artist=", ".join(artist.name for artist in artists),
            cover_url=cover_url,
            spotify_track_id=track_id,
            album_name=album.get("name"),
            release_date=album.get("release_date"),
            duration_ms=item.get("duration_ms"),
            explicit=item.get("explicit"),
            popularity=item.get("popularity"),
            isrc=(item.get("external_ids") or {}).get("isrc"),
            track_number=item.get("track_number"),
            disc_number=item.get("disc_number"),
            album_type=album.get("album_type"),
            preview_url=item.get("preview_url"),
            artists=artists,
        )

    async def _attach_artist_images(self, artists: list[SpotifyArtistInfo], token: str) -> None:
        """Fill in artist images; a failure here leaves them empty."""
        ids = [artist.spotify_id for artist in artists if artist.spotify_id]
        if not ids:
            return

        try:
            response = await self.client.get(
                f"{self.API_BASE_URL}/artists",
                headers={"Authorization": f"Bearer {token}"},
                params={"ids": ",".join(ids[:50])},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Could not load Spotify artist images: {e}")
            return

        images = {}
        for item in data.get("artists", []):
            if item and item.get("images"):
                images[item["id"]] = item["images"][0]["url"]

        for artist in artists:
            artist.image_url = images.get(artist.spotify_id)

    async def _fetch_oembed(self, url: str) -> SpotifyTrackMetadata:
        try:
            response = await self.client.get(self.OEMBED_URL, params={"url": url})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Spotify oEmbed lookup failed: {e}")
            raise MetadataFetchError("Failed to fetch from Spotify") from e

        title, artist = parse_oembed_title(data.get("title", ""))
        return SpotifyTrackMetadata(
            source="oembed",
            title=title,
            artist=artist,
            cover_url=data.get("thumbnail_url") or None,
        )


# Singleton instance
spotify_service = SpotifyService()
