"""Song persistence: queries and writes for songs, awards and history rows."""

import logging
import uuid as uuid_lib
from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.song import Song, Award, RatingHistory, CommentHistory
from app.services.ranking_service import split_artist_names

logger = logging.getLogger(__name__)


class DuplicateSongError(ValueError):
    """A song with the same title and artist already exists."""

    def __init__(self, title: str, artist: str):
        self.title = title
        self.artist = artist
        super().__init__(
            f'This song already exists: "{title}" by {artist}. Please check the music list.'
        )


class SongStore:
    """Song table access over an async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all_songs(self) -> list[Song]:
        """All songs, best rated first."""
        result = await self.db.execute(
            select(Song).order_by(Song.rating.desc(), Song.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_songs_by_ids(self, ids: Iterable[uuid_lib.UUID]) -> list[Song]:
        """Songs for the given ids, in the order of `ids`. Unknown ids are skipped."""
        ids = list(ids)
        if not ids:
            return []

        result = await self.db.execute(select(Song).where(Song.id.in_(ids)))
        by_id = {song.id: song for song in result.scalars().all()}
        return [by_id[song_id] for song_id in ids if song_id in by_id]

    async def search_songs(self, substring: str, limit: int = 10) -> list[Song]:
        """Case-insensitive substring match on title, artist or album name."""
        substring = substring.strip()
        if not substring:
            return []

        pattern = f"%{substring}%"
        result = await self.db.execute(
            select(Song)
            .where(
                or_(
                    Song.title.ilike(pattern),
                    Song.artist.ilike(pattern),
                    Song.album_name.ilike(pattern),
                )
            )
            .order_by(Song.rating.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_song(self, song_id: uuid_lib.UUID) -> Song | None:
        result = await self.db.execute(select(Song).where(Song.id == song_id))
        return result.scalar_one_or_none()

    async def find_duplicates(self, title: str, artist: str) -> list[Song]:
        result = await self.db.execute(
            select(Song).where(Song.title == title, Song.artist == artist)
        )
        return list(result.scalars().all())

    async def insert_song(self, fields: dict[str, Any]) -> Song:
        """
        Insert a song.

        Raises:
            DuplicateSongError: a song with the same title and artist exists.
                The check is advisory; two concurrent inserts can both pass it.
        """
        if await self.find_duplicates(fields["title"], fields["artist"]):
            raise DuplicateSongError(fields["title"], fields["artist"])

        song = Song(**fields)
        self.db.add(song)
        await self.db.flush()
        await self.db.refresh(song)
        logger.info(f"Inserted song {song.id}: {song.title} by {song.artist}")
        return song

    async def update_song(self, song_id: uuid_lib.UUID, fields: dict[str, Any]) -> Song | None:
        """
        Apply the given fields to a song.

        The previous rating goes to rating_history when the rating changes,
        and the previous comment to comment_history when the comment changes.

        Returns:
            The updated song, or None if it does not exist
        """
        song = await self.get_song(song_id)
        if song is None:
            return None

        new_rating = fields.get("rating", song.rating)
        new_comment = fields.get("comment", song.comment)

        if new_rating != song.rating:
            self.db.add(RatingHistory(song_id=song.id, rating=song.rating))
        if new_comment != song.comment:
            self.db.add(CommentHistory(song_id=song.id, comment=song.comment, rating=song.rating))

        for key, value in fields.items():
            setattr(song, key, value)
        song.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        await self.db.refresh(song)
        logger.info(f"Updated song {song.id} ({', '.join(sorted(fields)) or 'no fields'})")
        return song

    async def list_songs_by_artist(self, name: str) -> list[Song]:
        """
        Songs credited to `name`, best rated first.

        Matches exact names within the comma-separated artist field, so
        "A" matches "A, B" but not "AB".
        """
        result = await self.db.execute(
            select(Song)
            .where(Song.artist.contains(name, autoescape=True))
            .order_by(Song.rating.desc(), Song.created_at.desc())
        )
        return [
            song for song in result.scalars().all()
            if name in split_artist_names(song.artist)
        ]

    async def list_songs_by_album(self, album_name: str) -> list[Song]:
        """Songs on an album in tracklist order; songs without a track number go last."""
        result = await self.db.execute(
            select(Song)
            .where(Song.album_name == album_name)
            .order_by(Song.track_number.asc().nulls_last(), Song.title.asc())
        )
        return list(result.scalars().all())

    # ============== Awards ==============

    async def list_awards(self, song_id: uuid_lib.UUID) -> list[Award]:
        result = await self.db.execute(select(Award).where(Award.song_id == song_id))
        return list(result.scalars().all())

    async def add_award(self, song_id: uuid_lib.UUID, fields: dict[str, Any]) -> Award:
        award = Award(song_id=song_id, **fields)
        self.db.add(award)
        await self.db.flush()
        return award

    async def delete_award(self, award_id: uuid_lib.UUID) -> bool:
        result = await self.db.execute(select(Award).where(Award.id == award_id))
        award = result.scalar_one_or_none()
        if award is None:
            return False
        await self.db.delete(award)
        await self.db.flush()
        return True

    # ============== Rating history ==============

    async def list_rating_history(self, song_id: uuid_lib.UUID) -> list[RatingHistory]:
        result = await self.db.execute(
            select(RatingHistory)
            .where(RatingHistory.song_id == song_id)
            .order_by(RatingHistory.changed_at.desc())
        )
        return list(result.scalars().all())

    async def delete_rating_history(self, history_id: uuid_lib.UUID) -> bool:
        result = await self.db.execute(
            select(RatingHistory).where(RatingHistory.id == history_id)
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            return False
        await self.db.delete(entry)
        await self.db.flush()
        return True
