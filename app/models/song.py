import uuid as uuid_lib
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, Text, Boolean, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Song(Base):
    """A rated track. `artist` may list several collaborators separated by commas."""

    __tablename__ = "songs"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), index=True)
    artist: Mapped[str] = mapped_column(String(500), index=True)  # Comma-separated
    rating: Mapped[int] = mapped_column(Integer)  # 0-100, not enforced here
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cover_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Provider ids (for embeds)
    spotify_track_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    youtube_video_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Optional metadata, usually filled from Spotify
    album_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    release_date: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    duration_ms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    explicit: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    popularity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    isrc: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    track_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    disc_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    album_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    preview_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Timestamps (updated_at stays null until the first edit)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # Relationships
    awards: Mapped[list["Award"]] = relationship(
        back_populates="song",
        cascade="all, delete-orphan"
    )
    rating_history: Mapped[list["RatingHistory"]] = relationship(
        back_populates="song",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Song {self.title} by {self.artist} ({self.rating})>"


class Award(Base):
    """A distinction given to a song (e.g. "Song of the Year", position "1st")."""

    __tablename__ = "awards"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    song_id: Mapped[uuid_lib.UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"),
        index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    detail: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    song: Mapped["Song"] = relationship(back_populates="awards")

    def __repr__(self) -> str:
        return f"<Award {self.name} -> {self.song_id}>"


class RatingHistory(Base):
    """A previous rating of a song, stored when the rating changes."""

    __tablename__ = "rating_history"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    song_id: Mapped[uuid_lib.UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"),
        index=True
    )
    rating: Mapped[int] = mapped_column(Integer)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    song: Mapped["Song"] = relationship(back_populates="rating_history")

    def __repr__(self) -> str:
        return f"<RatingHistory {self.song_id} ({self.rating})>"


class CommentHistory(Base):
    """A previous comment of a song, with the rating it had at the time."""

    __tablename__ = "comment_history"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    song_id: Mapped[uuid_lib.UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"),
        index=True
    )
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<CommentHistory {self.song_id}>"
