import logging
import math
from uuid import UUID

from fastapi import APIRouter, Query, status
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.core.exceptions import (
    NotFoundException,
    ConflictException,
    ServiceUnavailableException,
)
from app.dependencies import AdminUser, Songs
from app.schemas.auth import MessageResponse
from app.schemas.song import (
    SongCreate,
    SongUpdate,
    SongResponse,
    SongListResponse,
    SongDetailResponse,
    AwardCreate,
    AwardResponse,
    RatingHistoryResponse,
)
from app.services.song_store import DuplicateSongError
from app.utils.responses import build_song_response, build_ranked_song_responses

logger = logging.getLogger(__name__)

router = APIRouter()


def _matches(song, needle: str) -> bool:
    return (
        needle in song.title.lower()
        or needle in song.artist.lower()
        or (song.album_name is not None and needle in song.album_name.lower())
    )


# ============== Song list ==============

@router.get(
    "",
    response_model=SongListResponse,
    summary="List songs ranked by rating",
)
async def list_songs(
    songs: Songs,
    page: int = Query(1, ge=1, description="1-based page number"),
    q: str = Query("", max_length=200, description="Filter by title, artist or album"),
):
    """
    All songs, best rated first.

    `rank` is the position in the full list, so it stays the same while
    searching. The search is a case-insensitive substring match on title,
    artist and album name.
    """
    per_page = get_settings().songs_page_size
    try:
        all_songs = await songs.list_all_songs()
    except SQLAlchemyError as e:
        logger.error(f"Could not load songs: {e}")
        raise ServiceUnavailableException()

    ranked = build_ranked_song_responses(all_songs)

    needle = q.strip().lower()
    if needle:
        ranked = [item for item in ranked if _matches(item, needle)]

    total = len(ranked)
    total_pages = math.ceil(total / per_page)
    start = (page - 1) * per_page

    return SongListResponse(
        songs=ranked[start:start + per_page],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


@router.get(
    "/search",
    response_model=list[SongResponse],
    summary="Search songs (admin song picker)",
)
async def search_songs(
    _: AdminUser,
    songs: Songs,
    q: str = Query(..., min_length=1, max_length=200),
    limit: int = Query(10, ge=1, le=50),
):
    """Songs whose title, artist or album contains `q`, used when composing blog posts."""
    results = await songs.search_songs(q, limit=limit)
    return [build_song_response(song) for song in results]


# ============== Single song ==============

@router.get(
    "/{song_id}",
    response_model=SongDetailResponse,
    summary="Get a song with its awards",
)
async def get_song(song_id: UUID, songs: Songs):
    song = await songs.get_song(song_id)
    if song is None:
        raise NotFoundException("Song not found")

    awards = await songs.list_awards(song_id)
    return SongDetailResponse(
        **build_song_response(song).model_dump(),
        awards=[AwardResponse.model_validate(award) for award in awards],
    )


@router.post(
    "",
    response_model=SongResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a song",
)
async def create_song(_: AdminUser, request: SongCreate, songs: Songs):
    """
    Add a song to the catalog.

    A song with exactly the same title and artist is rejected with 409.
    """
    try:
        song = await songs.insert_song(request.model_dump())
    except DuplicateSongError as e:
        raise ConflictException(str(e))

    return build_song_response(song)


@router.patch(
    "/{song_id}",
    response_model=SongResponse,
    summary="Edit a song",
)
async def update_song(_: AdminUser, song_id: UUID, request: SongUpdate, songs: Songs):
    """
    Change the fields that are sent.

    Rating and comment changes are kept in the song's history.
    """
    fields = request.model_dump(exclude_unset=True)
    # title/artist/rating cannot be cleared
    for required in ("title", "artist", "rating"):
        if required in fields and fields[required] is None:
            del fields[required]

    song = await songs.update_song(song_id, fields)
    if song is None:
        raise NotFoundException("Song not found")

    return build_song_response(song)


# ============== Rating history ==============

@router.get(
    "/{song_id}/rating-history",
    response_model=list[RatingHistoryResponse],
    summary="Previous ratings of a song",
)
async def get_rating_history(song_id: UUID, songs: Songs):
    if await songs.get_song(song_id) is None:
        raise NotFoundException("Song not found")
    return await songs.list_rating_history(song_id)


# ============== Awards ==============

@router.post(
    "/{song_id}/awards",
    response_model=AwardResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Give a song an award",
)
async def add_award(_: AdminUser, song_id: UUID, request: AwardCreate, songs: Songs):
    if await songs.get_song(song_id) is None:
        raise NotFoundException("Song not found")
    return await songs.add_award(song_id, request.model_dump())


# Routes mounted at the API root rather than under /songs
history_router = APIRouter()


@history_router.delete(
    "/rating-history/{history_id}",
    response_model=MessageResponse,
    summary="Delete a rating history entry",
)
async def delete_rating_history(_: AdminUser, history_id: UUID, songs: Songs):
    if not await songs.delete_rating_history(history_id):
        raise NotFoundException("Rating history entry not found")
    return MessageResponse(message="Rating history entry deleted")


@history_router.delete(
    "/awards/{award_id}",
    response_model=MessageResponse,
    summary="Delete an award",
)
async def delete_award(_: AdminUser, award_id: UUID, songs: Songs):
    if not await songs.delete_award(award_id):
        raise NotFoundException("Award not found")
    return MessageResponse(message="Award deleted")
