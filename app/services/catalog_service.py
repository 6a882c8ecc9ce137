"""
Loads the full song and artist collections for the rankings page.

Both reads are independent, so they run in parallel on separate sessions
under one bounded timeout. Any failure (query error, lost connection,
timeout) is reported as CatalogUnavailableError; no partial result is
returned and nothing is cached.
"""
import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.artist import Artist
from app.models.song import Song
from app.services.artist_store import ArtistStore
from app.services.song_store import SongStore

logger = logging.getLogger(__name__)


async def _cancel_pending(tasks: list[asyncio.Task]) -> None:
    """Cancel whichever reads are still running and collect every outcome."""
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


class CatalogUnavailableError(Exception):
    """The song or artist collection could not be loaded."""


@dataclass
class Catalog:
    songs: list[Song]
    artists: list[Artist]


class CatalogLoader:
    """Fetches songs and artists concurrently from the store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], timeout: float):
        self.session_factory = session_factory
        self.timeout = timeout

    async def _load_songs(self) -> list[Song]:
        async with self.session_factory() as session:
            return await SongStore(session).list_all_songs()

    async def _load_artists(self) -> list[Artist]:
        async with self.session_factory() as session:
            return await ArtistStore(session).list_all_artists()

    async def load(self) -> Catalog:
        """
        Fetch both collections.

        Raises:
            CatalogUnavailableError: either read failed or the timeout expired
        """
        tasks = [
            asyncio.create_task(self._load_songs()),
            asyncio.create_task(self._load_artists()),
        ]
        try:
            songs, artists = await asyncio.wait_for(asyncio.gather(*tasks), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Catalog fetch timed out after {self.timeout}s")
            raise CatalogUnavailableError("Timed out loading songs and artists") from e
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Catalog fetch failed: {e}")
            raise CatalogUnavailableError(str(e)) from e
        finally:
            await _cancel_pending(tasks)

        return Catalog(songs=songs, artists=artists)
