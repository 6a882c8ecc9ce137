import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.song import SongResponse


class BlogPostCreate(BaseModel):
    """Schema for creating a blog post. The slug is derived from the title if omitted."""
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: str = Field(..., min_length=1)
    preview: Optional[str] = Field(None, max_length=1000)
    song_ids: list[uuid.UUID] = []
    published: bool = False


class BlogPostUpdate(BaseModel):
    """Schema for updating a blog post."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    preview: Optional[str] = Field(None, max_length=1000)
    song_ids: Optional[list[uuid.UUID]] = None
    published: Optional[bool] = None


class BlogPostResponse(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    content: str
    preview: Optional[str] = None
    song_ids: list[uuid.UUID] = []
    published: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BlogPostWithSongsResponse(BlogPostResponse):
    """A published post with its songs, in the order the post lists them."""
    songs: list[SongResponse] = []
