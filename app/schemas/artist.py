"""Artist schemas for API requests and responses."""

import uuid
from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.song import SongResponse


class ArtistUpsert(BaseModel):
    """Artist metadata to insert or overwrite, keyed by name."""
    name: str = Field(..., min_length=1, max_length=255)
    image_url: Optional[str] = Field(None, max_length=500)
    spotify_id: Optional[str] = Field(None, max_length=255)


class ArtistResponse(ArtistUpsert):
    id: uuid.UUID

    model_config = {"from_attributes": True}


class ArtistRankingItem(BaseModel):
    """One row on the artist rankings page."""
    rank: int
    name: str
    average_rating: int
    song_count: int
    image_url: Optional[str] = None
    rating_color: str


class ArtistRankingsResponse(BaseModel):
    """
    A page of artist rankings.

    `query` is the canonical query string of this view; `next_query` and
    `prev_query` are the neighbouring pages (None at the ends).
    """
    artists: list[ArtistRankingItem]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    sort: str
    q: str
    query: str
    next_query: Optional[str] = None
    prev_query: Optional[str] = None


class ArtistSongsResponse(BaseModel):
    """Songs credited to one artist, best first."""
    name: str
    image_url: Optional[str] = None
    average_rating: Optional[int] = None
    songs: list[SongResponse]


class AlbumSongsResponse(BaseModel):
    """An album's tracklist."""
    album_name: str
    cover_url: Optional[str] = None
    songs: list[SongResponse]
