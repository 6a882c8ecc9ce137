import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


# ============== Song Schemas ==============

class SongFields(BaseModel):
    """Optional song metadata shared by create and update."""
    comment: Optional[str] = Field(None, max_length=5000)
    cover_url: Optional[str] = Field(None, max_length=500)
    spotify_track_id: Optional[str] = Field(None, max_length=50)
    youtube_video_id: Optional[str] = Field(None, max_length=20)
    album_name: Optional[str] = Field(None, max_length=255)
    release_date: Optional[str] = Field(None, max_length=20)
    duration_ms: Optional[int] = Field(None, ge=0)
    explicit: Optional[bool] = None
    popularity: Optional[int] = None
    isrc: Optional[str] = Field(None, max_length=20)
    track_number: Optional[int] = None
    disc_number: Optional[int] = None
    album_type: Optional[str] = Field(None, max_length=20)
    preview_url: Optional[str] = Field(None, max_length=500)


class SongCreate(SongFields):
    """Schema for adding a song."""
    title: str = Field(..., min_length=1, max_length=255)
    artist: str = Field(..., min_length=1, max_length=500)
    # Nominally 0-100; deliberately not range-checked, only display clamps
    rating: int


class SongUpdate(SongFields):
    """Schema for editing a song. Only fields that are sent are changed."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    artist: Optional[str] = Field(None, min_length=1, max_length=500)
    rating: Optional[int] = None


class SongResponse(SongFields):
    """A song as shown on list and detail pages."""
    id: uuid.UUID
    title: str
    artist: str
    rating: int
    rating_color: str
    rank: Optional[int] = None  # Position in the list it came from
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SongListResponse(BaseModel):
    """Schema for paginated song list."""
    songs: list[SongResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_next: bool
    has_prev: bool


# ============== Award Schemas ==============

class AwardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    detail: Optional[str] = Field(None, max_length=500)
    position: Optional[str] = Field(None, max_length=50)


class AwardResponse(AwardCreate):
    id: uuid.UUID
    song_id: uuid.UUID

    model_config = {"from_attributes": True}


class SongDetailResponse(SongResponse):
    """Song detail page: the song plus its awards."""
    awards: list[AwardResponse] = []


# ============== History Schemas ==============

class RatingHistoryResponse(BaseModel):
    id: uuid.UUID
    song_id: uuid.UUID
    rating: int
    changed_at: datetime

    model_config = {"from_attributes": True}
