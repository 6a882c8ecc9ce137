"""Metadata lookups that pre-fill the admin song form."""

from fastapi import APIRouter

from app.core.exceptions import (
    BadRequestException,
    BadGatewayException,
    NotFoundException,
    ServiceUnavailableException,
)
from app.dependencies import AdminUser, Spotify, YouTube
from app.schemas.metadata import MetadataLookupRequest, SpotifyTrackMetadata, YouTubeVideoMetadata
from app.services.metadata_errors import (
    InvalidMetadataURLError,
    MetadataConfigError,
    MetadataFetchError,
    MetadataNotFoundError,
)

router = APIRouter()


@router.post(
    "/spotify",
    response_model=SpotifyTrackMetadata,
    summary="Look up a Spotify track",
)
async def lookup_spotify(_: AdminUser, request: MetadataLookupRequest, spotify: Spotify):
    """
    Resolve an open.spotify.com track URL to song metadata.

    When the Web API is unavailable only title, artist and cover come back
    (`source` is "oembed").
    """
    try:
        return await spotify.get_track_metadata(request.url.strip())
    except InvalidMetadataURLError as e:
        raise BadRequestException(str(e))
    except MetadataFetchError:
        raise BadGatewayException("Failed to fetch Spotify data. Please check the URL and try again.")


@router.post(
    "/youtube",
    response_model=YouTubeVideoMetadata,
    summary="Look up a YouTube video",
)
async def lookup_youtube(_: AdminUser, request: MetadataLookupRequest, youtube: YouTube):
    """Resolve a YouTube URL or bare video id to song metadata."""
    try:
        return await youtube.get_video_metadata(request.url.strip())
    except InvalidMetadataURLError as e:
        raise BadRequestException(str(e))
    except MetadataNotFoundError as e:
        raise NotFoundException(str(e))
    except MetadataConfigError as e:
        raise ServiceUnavailableException(str(e))
    except MetadataFetchError:
        raise BadGatewayException("Failed to fetch YouTube data. Please check the URL and try again.")
