"""Errors raised by the Spotify and YouTube metadata lookups."""


class MetadataError(Exception):
    """Base class for metadata provider failures."""


class InvalidMetadataURLError(MetadataError, ValueError):
    """The URL (or id) does not point at something the provider can resolve."""


class MetadataNotFoundError(MetadataError):
    """The provider answered, but the track or video does not exist."""


class MetadataConfigError(MetadataError):
    """The provider is not configured (missing API key or credentials)."""


class MetadataFetchError(MetadataError):
    """The provider could not be reached or returned an error."""
