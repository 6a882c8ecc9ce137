"""Schemas for metadata lookups against Spotify and YouTube."""

from typing import Optional
from pydantic import BaseModel, Field


class MetadataLookupRequest(BaseModel):
    """A track URL, video URL or bare video id."""
    url: str = Field(..., min_length=1, max_length=500)


class SpotifyArtistInfo(BaseModel):
    """An artist credited on a Spotify track."""
    name: str
    spotify_id: Optional[str] = None
    image_url: Optional[str] = None


class SpotifyTrackMetadata(BaseModel):
    """
    Track metadata from Spotify.

    When the Web API is unavailable and the oEmbed fallback is used, only
    title, artist and cover_url are filled in (`source` is "oembed").
    """
    source: str = "api"
    title: str = ""
    artist: str = ""
    cover_url: Optional[str] = None
    spotify_track_id: Optional[str] = None
    album_name: Optional[str] = None
    release_date: Optional[str] = None
    duration_ms: Optional[int] = None
    explicit: Optional[bool] = None
    popularity: Optional[int] = None
    isrc: Optional[str] = None
    track_number: Optional[int] = None
    disc_number: Optional[int] = None
    album_type: Optional[str] = None
    preview_url: Optional[str] = None
    artists: list[SpotifyArtistInfo] = []


class YouTubeVideoMetadata(BaseModel):
    """Video metadata from YouTube, with a best-effort artist/title split."""
    title: str
    artist: str
    cover_url: Optional[str] = None
    youtube_video_id: str
    duration_ms: Optional[int] = None
    release_date: Optional[str] = None
    channel_name: Optional[str] = None
