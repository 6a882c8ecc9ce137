"""
Artist rankings: group songs by artist, average their ratings, then
search, sort, rank and paginate the result.

Everything here is a pure function of the song and artist collections.
Rankings are recomputed from scratch on every request and never cached.
"""
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Protocol
from urllib.parse import urlencode


class SongLike(Protocol):
    artist: str
    rating: int


class ArtistLike(Protocol):
    name: str
    image_url: Optional[str]


class RankingSort(str, Enum):
    """Sort orders offered on the rankings page."""

    RATING_DESC = "rating-desc"
    RATING_ASC = "rating-asc"
    SONGS_DESC = "songs-desc"
    SONGS_ASC = "songs-asc"


DEFAULT_SORT = RankingSort.RATING_DESC


@dataclass(frozen=True)
class ArtistRanking:
    """One artist's aggregate standing in the current view."""

    name: str
    average_rating: int
    song_count: int
    image_url: Optional[str] = None
    rank: int = 0  # Position in the current (filter, sort) view, 0 = unranked


@dataclass(frozen=True)
class RankingPage:
    """A page of ranked artists plus what the caller needs for navigation."""

    items: list[ArtistRanking]
    total: int
    page: int
    per_page: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class RankingQuery:
    """
    The shareable part of a rankings view.

    Serialized to the query string the rankings endpoint accepts, so a
    view can be bookmarked. Default values are left out.
    """

    page: int = 1
    sort: RankingSort = DEFAULT_SORT
    q: str = ""

    def to_query_string(self) -> str:
        params = {}
        if self.page != 1:
            params["page"] = self.page
        if self.sort != DEFAULT_SORT:
            params["sort"] = self.sort.value
        if self.q:
            params["q"] = self.q
        return urlencode(params)

    def with_page(self, page: int) -> "RankingQuery":
        return replace(self, page=page)


def split_artist_names(artist: str) -> list[str]:
    """
    Split a song's artist field into individual names.

    "A, B" credits both A and B. Pieces are trimmed; empty pieces (e.g. from
    a trailing comma) are dropped. No case or accent normalization.
    """
    names = []
    for piece in artist.split(","):
        name = piece.strip()
        if name:
            names.append(name)
    return names


def round_half_up(total: int, count: int) -> int:
    """Integer mean of total/count, halves rounded up (floor(x + 0.5))."""
    return (2 * total + count) // (2 * count)


def accumulate_ratings(songs: Iterable[SongLike]) -> dict[str, tuple[int, int]]:
    """Map each artist name to (sum of ratings, number of songs)."""
    stats: dict[str, tuple[int, int]] = {}
    for song in songs:
        for name in split_artist_names(song.artist):
            total, count = stats.get(name, (0, 0))
            stats[name] = (total + song.rating, count + 1)
    return stats


def build_image_map(artists: Iterable[ArtistLike]) -> dict[str, str]:
    """Map artist name to image URL. Later duplicates win; null images are skipped."""
    images: dict[str, str] = {}
    for artist in artists:
        if artist.image_url:
            images[artist.name] = artist.image_url
    return images


def aggregate_artists(
    songs: Iterable[SongLike],
    artists: Iterable[ArtistLike] = (),
    min_song_count: int = 0,
) -> list[ArtistRanking]:
    """
    Build one unranked ArtistRanking per distinct artist name.

    Args:
        songs: Songs to aggregate
        artists: Artist metadata used for images, joined on exact name
        min_song_count: Artists with fewer songs are left out

    Returns:
        Rankings in first-seen order, all with rank 0
    """
    images = build_image_map(artists)
    rankings = []
    for name, (total, count) in accumulate_ratings(songs).items():
        if count < min_song_count:
            continue
        rankings.append(
            ArtistRanking(
                name=name,
                average_rating=round_half_up(total, count),
                song_count=count,
                image_url=images.get(name),
            )
        )
    return rankings


def filter_rankings(rankings: Iterable[ArtistRanking], query: Optional[str]) -> list[ArtistRanking]:
    """Keep artists whose name contains the query, case-insensitively."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(rankings)
    return [r for r in rankings if needle in r.name.lower()]


def _name_key(ranking: ArtistRanking) -> tuple[str, str]:
    return (ranking.name.casefold(), ranking.name)


def sort_rankings(rankings: Iterable[ArtistRanking], sort: RankingSort = DEFAULT_SORT) -> list[ArtistRanking]:
    """
    Order rankings by the requested key.

    Ties are broken by name (case-insensitive, then exact) so the same input
    always gives the same order.
    """
    sort = RankingSort(sort)
    if sort is RankingSort.RATING_DESC:
        key = lambda r: (-r.average_rating, _name_key(r))
    elif sort is RankingSort.RATING_ASC:
        key = lambda r: (r.average_rating, _name_key(r))
    elif sort is RankingSort.SONGS_DESC:
        key = lambda r: (-r.song_count, _name_key(r))
    else:
        key = lambda r: (r.song_count, _name_key(r))
    return sorted(rankings, key=key)


def assign_ranks(rankings: Iterable[ArtistRanking]) -> list[ArtistRanking]:
    """Number the rankings 1..n in their current order."""
    return [replace(r, rank=i) for i, r in enumerate(rankings, start=1)]


def paginate(rankings: list[ArtistRanking], page: int, per_page: int) -> RankingPage:
    """
    Slice one page out of the ranked list.

    Pages past the end are not clamped: they come back empty.
    """
    if per_page < 1:
        raise ValueError("per_page must be positive")
    total = len(rankings)
    start = (page - 1) * per_page
    items = rankings[start:start + per_page] if page >= 1 else []
    return RankingPage(
        items=items,
        total=total,
        page=page,
        per_page=per_page,
        total_pages=math.ceil(total / per_page),
    )


def rank_artists(
    songs: Iterable[SongLike],
    artists: Iterable[ArtistLike],
    query: RankingQuery = RankingQuery(),
    per_page: int = 50,
    min_song_count: int = 0,
) -> RankingPage:
    """Aggregate, search, sort, rank and paginate in one go."""
    rankings = aggregate_artists(songs, artists, min_song_count=min_song_count)
    rankings = filter_rankings(rankings, query.q)
    rankings = assign_ranks(sort_rankings(rankings, query.sort))
    return paginate(rankings, query.page, per_page)
