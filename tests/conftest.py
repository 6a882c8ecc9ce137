"""
Shared fixtures.

Settings are read from the environment on first import of the app, so the
environment is prepared here before anything under `app` is imported.
"""
import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from passlib.context import CryptContext

ADMIN_PASSWORD = "let-me-rate"

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./songrank-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault(
    "ADMIN_PASSWORD_HASH",
    CryptContext(schemes=["bcrypt"]).hash(ADMIN_PASSWORD),
)

from fastapi.testclient import TestClient  # noqa: E402

from app import dependencies  # noqa: E402
from app.core.security import create_admin_token  # noqa: E402
from app.main import app  # noqa: E402
from app.services.catalog_service import Catalog, CatalogUnavailableError  # noqa: E402


def make_song(title="Song", artist="Artist", rating=50, **fields):
    """A song-shaped object, as the stores return them."""
    values = {
        "id": uuid.uuid4(),
        "title": title,
        "artist": artist,
        "rating": rating,
        "comment": None,
        "cover_url": None,
        "spotify_track_id": None,
        "youtube_video_id": None,
        "album_name": None,
        "release_date": None,
        "duration_ms": None,
        "explicit": None,
        "popularity": None,
        "isrc": None,
        "track_number": None,
        "disc_number": None,
        "album_type": None,
        "preview_url": None,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "updated_at": None,
    }
    values.update(fields)
    return SimpleNamespace(**values)


def make_artist(name, image_url=None, spotify_id=None):
    return SimpleNamespace(id=uuid.uuid4(), name=name, image_url=image_url, spotify_id=spotify_id)


class FakeCatalogLoader:
    """Stands in for CatalogLoader; fails on demand."""

    def __init__(self, songs=(), artists=(), fail=False):
        self.songs = list(songs)
        self.artists = list(artists)
        self.fail = fail
        self.calls = 0

    async def load(self):
        self.calls += 1
        if self.fail:
            raise CatalogUnavailableError("database is down")
        return Catalog(songs=list(self.songs), artists=list(self.artists))


class FakeSongStore:
    """In-memory SongStore with the same async surface."""

    def __init__(self, songs=()):
        self.songs = list(songs)
        self.awards = []
        self.history = []
        self.calls = []

    async def list_all_songs(self):
        self.calls.append("list_all_songs")
        return sorted(self.songs, key=lambda s: -s.rating)

    async def list_songs_by_ids(self, ids):
        by_id = {song.id: song for song in self.songs}
        return [by_id[i] for i in ids if i in by_id]

    async def search_songs(self, substring, limit=10):
        needle = substring.lower()
        return [
            s for s in self.songs
            if needle in s.title.lower() or needle in s.artist.lower()
        ][:limit]

    async def get_song(self, song_id):
        return next((s for s in self.songs if s.id == song_id), None)

    async def insert_song(self, fields):
        from app.services.song_store import DuplicateSongError

        self.calls.append("insert_song")
        if any(s.title == fields["title"] and s.artist == fields["artist"] for s in self.songs):
            raise DuplicateSongError(fields["title"], fields["artist"])
        song = make_song(**fields)
        self.songs.append(song)
        return song

    async def update_song(self, song_id, fields):
        self.calls.append("update_song")
        song = await self.get_song(song_id)
        if song is None:
            return None
        for key, value in fields.items():
            setattr(song, key, value)
        song.updated_at = datetime.now(timezone.utc)
        return song

    async def list_songs_by_artist(self, name):
        from app.services.ranking_service import split_artist_names

        return sorted(
            (s for s in self.songs if name in split_artist_names(s.artist)),
            key=lambda s: -s.rating,
        )

    async def list_songs_by_album(self, album_name):
        return sorted(
            (s for s in self.songs if s.album_name == album_name),
            key=lambda s: (s.track_number is None, s.track_number or 0),
        )

    async def list_awards(self, song_id):
        return [a for a in self.awards if a.song_id == song_id]

    async def add_award(self, song_id, fields):
        award = SimpleNamespace(id=uuid.uuid4(), song_id=song_id, **fields)
        self.awards.append(award)
        return award

    async def delete_award(self, award_id):
        before = len(self.awards)
        self.awards = [a for a in self.awards if a.id != award_id]
        return len(self.awards) < before

    async def list_rating_history(self, song_id):
        return [h for h in self.history if h.song_id == song_id]

    async def delete_rating_history(self, history_id):
        before = len(self.history)
        self.history = [h for h in self.history if h.id != history_id]
        return len(self.history) < before


class FakeArtistStore:
    def __init__(self, artists=()):
        self.artists = list(artists)

    async def list_all_artists(self):
        return list(self.artists)

    async def get_by_name(self, name):
        return next((a for a in self.artists if a.name == name), None)

    async def upsert_artist(self, name, image_url=None, spotify_id=None):
        artist = await self.get_by_name(name)
        if artist is None:
            artist = make_artist(name, image_url, spotify_id)
            self.artists.append(artist)
        else:
            artist.image_url = image_url
            artist.spotify_id = spotify_id
        return artist


class FakeBlogStore:
    def __init__(self, posts=()):
        self.posts = list(posts)

    async def list_posts(self, include_unpublished=False):
        posts = sorted(self.posts, key=lambda p: p.created_at, reverse=True)
        return [p for p in posts if include_unpublished or p.published]

    async def get_post(self, post_id):
        return next((p for p in self.posts if p.id == post_id), None)

    async def get_published_post_by_slug(self, slug):
        return next((p for p in self.posts if p.slug == slug and p.published), None)

    async def create_post(self, fields):
        post = make_post(**fields)
        self.posts.append(post)
        return post

    async def update_post(self, post_id, fields):
        post = await self.get_post(post_id)
        if post is None:
            return None
        for key, value in fields.items():
            setattr(post, key, value)
        return post

    async def delete_post(self, post_id):
        post = await self.get_post(post_id)
        if post is None:
            return False
        self.posts.remove(post)
        return True


def make_post(title="Rainy days", slug="rainy-days", content="Text", published=True, **fields):
    values = {
        "id": uuid.uuid4(),
        "title": title,
        "slug": slug,
        "content": content,
        "preview": None,
        "song_ids": [],
        "published": published,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "updated_at": None,
    }
    values.update(fields)
    return SimpleNamespace(**values)


@pytest.fixture
def song_store():
    return FakeSongStore()


@pytest.fixture
def artist_store():
    return FakeArtistStore()


@pytest.fixture
def blog_store():
    return FakeBlogStore()


@pytest.fixture
def catalog_loader():
    return FakeCatalogLoader()


@pytest.fixture
def client(song_store, artist_store, blog_store, catalog_loader):
    """TestClient with every store replaced by an in-memory fake."""
    app.dependency_overrides[dependencies.get_song_store] = lambda: song_store
    app.dependency_overrides[dependencies.get_artist_store] = lambda: artist_store
    app.dependency_overrides[dependencies.get_blog_store] = lambda: blog_store
    app.dependency_overrides[dependencies.get_catalog_loader] = lambda: catalog_loader
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    """Client holding a valid admin session cookie."""
    client.cookies.set("admin-auth", create_admin_token())
    return client
