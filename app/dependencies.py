from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.exceptions import UnauthorizedException
from app.core.security import verify_admin_token
from app.database import AsyncSessionLocal, get_db
from app.services.artist_store import ArtistStore
from app.services.blog_store import BlogStore
from app.services.catalog_service import CatalogLoader
from app.services.song_store import SongStore
from app.services.spotify_service import SpotifyService, spotify_service
from app.services.youtube_service import YouTubeService, youtube_service

DbSession = Annotated[AsyncSession, Depends(get_db)]


def is_admin_request(request: Request) -> bool:
    """Whether the request carries a valid admin session cookie."""
    settings = get_settings()
    return verify_admin_token(request.cookies.get(settings.admin_cookie_name))


async def require_admin(request: Request) -> bool:
    """
    Dependency that rejects the request unless it comes from the admin.

    Runs before the handler body, so an unauthenticated mutation never
    touches the store.

    Usage:
        @router.post("/songs")
        async def create_song(_: AdminUser, ...):
            ...
    """
    if not is_admin_request(request):
        raise UnauthorizedException("Unauthorized")
    return True


async def optional_admin(request: Request) -> bool:
    """Dependency returning whether the caller is the admin, without failing."""
    return is_admin_request(request)


async def get_song_store(db: DbSession) -> SongStore:
    return SongStore(db)


async def get_artist_store(db: DbSession) -> ArtistStore:
    return ArtistStore(db)


async def get_blog_store(db: DbSession) -> BlogStore:
    return BlogStore(db)


def get_catalog_loader() -> CatalogLoader:
    """Catalog loader with its own sessions, so songs and artists load in parallel."""
    return CatalogLoader(AsyncSessionLocal, timeout=get_settings().catalog_fetch_timeout_seconds)


def get_spotify_service() -> SpotifyService:
    return spotify_service


def get_youtube_service() -> YouTubeService:
    return youtube_service


# Type aliases for cleaner dependency injection
AdminUser = Annotated[bool, Depends(require_admin)]
IsAdmin = Annotated[bool, Depends(optional_admin)]
Songs = Annotated[SongStore, Depends(get_song_store)]
Artists = Annotated[ArtistStore, Depends(get_artist_store)]
Posts = Annotated[BlogStore, Depends(get_blog_store)]
Catalogs = Annotated[CatalogLoader, Depends(get_catalog_loader)]
Spotify = Annotated[SpotifyService, Depends(get_spotify_service)]
YouTube = Annotated[YouTubeService, Depends(get_youtube_service)]
