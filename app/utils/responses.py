"""
Builders turning ORM rows and ranking results into response schemas.
"""
from typing import Iterable, Optional

from app.models.song import Song
from app.schemas.artist import ArtistRankingItem
from app.schemas.song import SongResponse, SongFields
from app.services.ranking_service import ArtistRanking
from app.utils.display import rating_color

_SONG_FIELD_NAMES = tuple(SongFields.model_fields)


def build_song_response(song: Song, rank: Optional[int] = None) -> SongResponse:
    """SongResponse for a row, with its display colour and optional list position."""
    return SongResponse(
        id=song.id,
        title=song.title,
        artist=song.artist,
        rating=song.rating,
        rating_color=rating_color(song.rating),
        rank=rank,
        created_at=song.created_at,
        updated_at=song.updated_at,
        **{name: getattr(song, name) for name in _SONG_FIELD_NAMES},
    )


def build_ranked_song_responses(songs: Iterable[Song]) -> list[SongResponse]:
    """Number songs 1..n in the given order."""
    return [build_song_response(song, rank=i) for i, song in enumerate(songs, start=1)]


def build_ranking_item(ranking: ArtistRanking) -> ArtistRankingItem:
    return ArtistRankingItem(
        rank=ranking.rank,
        name=ranking.name,
        average_rating=ranking.average_rating,
        song_count=ranking.song_count,
        image_url=ranking.image_url,
        rating_color=rating_color(ranking.average_rating),
    )
