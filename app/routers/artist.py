"""Artist router: power rankings, per-artist song lists and artist metadata."""

from fastapi import APIRouter, Query

from app.config import get_settings
from app.core.exceptions import NotFoundException, ServiceUnavailableException
from app.dependencies import AdminUser, Artists, Catalogs, Songs
from app.schemas.artist import (
    ArtistRankingsResponse,
    ArtistSongsResponse,
    ArtistResponse,
    ArtistUpsert,
)
from app.services.catalog_service import CatalogUnavailableError
from app.services.ranking_service import RankingQuery, RankingSort, rank_artists, round_half_up
from app.utils.responses import build_ranking_item, build_ranked_song_responses

router = APIRouter()


@router.get(
    "/rankings",
    response_model=ArtistRankingsResponse,
    summary="Artist power rankings",
)
async def get_artist_rankings(
    catalogs: Catalogs,
    page: int = Query(1, ge=1, description="1-based page number"),
    sort: RankingSort = Query(RankingSort.RATING_DESC, description="Sort order"),
    q: str = Query("", max_length=200, description="Filter artists by name"),
):
    """
    Rank every artist by the average rating of their songs.

    - Songs credited to several artists ("A, B") count for each of them
    - `rank` is the position within the current search and sort
    - Pages past the end come back empty

    The response carries the query string of this view and its neighbours
    so the page can be bookmarked and navigated.
    """
    settings = get_settings()

    try:
        catalog = await catalogs.load()
    except CatalogUnavailableError:
        raise ServiceUnavailableException("Could not load data")

    query = RankingQuery(page=page, sort=sort, q=q.strip())
    result = rank_artists(
        catalog.songs,
        catalog.artists,
        query=query,
        per_page=settings.rankings_page_size,
        min_song_count=settings.artist_min_song_count,
    )

    return ArtistRankingsResponse(
        artists=[build_ranking_item(item) for item in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_prev=result.has_prev,
        sort=query.sort.value,
        q=query.q,
        query=query.to_query_string(),
        next_query=query.with_page(page + 1).to_query_string() if result.has_next else None,
        prev_query=query.with_page(page - 1).to_query_string() if result.has_prev else None,
    )


@router.get(
    "/{name:path}/songs",
    response_model=ArtistSongsResponse,
    summary="Songs by an artist",
)
async def get_artist_songs(name: str, songs: Songs, artists: Artists):
    """
    Songs credited to the artist, including collaborations, best first.

    The name must match exactly one of the comma-separated names on a song.
    It may contain "/" (e.g. "AC/DC"), sent percent-encoded.
    """
    artist_songs = await songs.list_songs_by_artist(name)
    if not artist_songs:
        raise NotFoundException("Artist not found")

    artist = await artists.get_by_name(name)
    total = sum(song.rating for song in artist_songs)

    return ArtistSongsResponse(
        name=name,
        image_url=artist.image_url if artist else None,
        average_rating=round_half_up(total, len(artist_songs)),
        songs=build_ranked_song_responses(artist_songs),
    )


@router.post(
    "",
    response_model=ArtistResponse,
    summary="Save artist metadata",
)
async def upsert_artist(_: AdminUser, request: ArtistUpsert, artists: Artists):
    """
    Insert or overwrite an artist's image and Spotify id, keyed by name.

    Typically called with the `artists` list of a Spotify lookup.
    """
    return await artists.upsert_artist(
        name=request.name,
        image_url=request.image_url,
        spotify_id=request.spotify_id,
    )
