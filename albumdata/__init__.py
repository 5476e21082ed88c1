"""
Album data: one row per track of an artist's albums, combining track
listings, audio features and lyrics from independent services.
"""

from .config import AppConfig, PipelineConfig, ProviderConfig
from .engine import AlbumDataEngine, get_album_data
from .errors import (
    AlbumDataError,
    IntegrityViolation,
    InvalidInputError,
    LyricsNotFoundError,
    ProviderError,
)
from .models import ProviderMiss, ProviderResult
from .providers import (
    AlbumListingProvider,
    AudioFeatureProvider,
    GeniusService,
    LyricsProvider,
    SpotifyService,
    TrackListingProvider,
)

__all__ = [
    "AlbumDataEngine",
    "get_album_data",
    "AppConfig",
    "PipelineConfig",
    "ProviderConfig",
    "AlbumDataError",
    "IntegrityViolation",
    "InvalidInputError",
    "LyricsNotFoundError",
    "ProviderError",
    "ProviderMiss",
    "ProviderResult",
    "AlbumListingProvider",
    "AudioFeatureProvider",
    "LyricsProvider",
    "TrackListingProvider",
    "GeniusService",
    "SpotifyService",
]
