from fastapi import APIRouter

from app.core.exceptions import NotFoundException
from app.dependencies import Songs
from app.schemas.artist import AlbumSongsResponse
from app.utils.responses import build_ranked_song_responses

router = APIRouter()


@router.get(
    "/{album_name:path}/songs",
    response_model=AlbumSongsResponse,
    summary="Album tracklist",
)
async def get_album_songs(album_name: str, songs: Songs):
    """Rated songs from an album in track order; songs without a track number come last."""
    album_songs = await songs.list_songs_by_album(album_name)
    if not album_songs:
        raise NotFoundException("Album not found")

    cover_url = next((song.cover_url for song in album_songs if song.cover_url), None)
    return AlbumSongsResponse(
        album_name=album_name,
        cover_url=cover_url,
        songs=build_ranked_song_responses(album_songs),
    )
