"""Artist metadata persistence, keyed by unique artist name."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.artist import Artist

logger = logging.getLogger(__name__)


class ArtistStore:
    """Artist table access over an async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all_artists(self) -> list[Artist]:
        result = await self.db.execute(select(Artist).order_by(Artist.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Artist | None:
        result = await self.db.execute(select(Artist).where(Artist.name == name))
        return result.scalar_one_or_none()

    async def upsert_artist(
        self,
        name: str,
        image_url: Optional[str] = None,
        spotify_id: Optional[str] = None,
    ) -> Artist:
        """Insert the artist, or overwrite image and Spotify id of the existing row."""
        artist = await self.get_by_name(name)
        if artist is None:
            artist = Artist(name=name, image_url=image_url, spotify_id=spotify_id)
            self.db.add(artist)
            logger.info(f"Added artist {name}")
        else:
            artist.image_url = image_url
            artist.spotify_id = spotify_id
            logger.info(f"Updated artist {name}")

        await self.db.flush()
        await self.db.refresh(artist)
        return artist
