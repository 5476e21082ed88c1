"""
External service clients consumed by the album data pipeline.
"""

from .base import (
    AlbumListingProvider,
    AudioFeatureProvider,
    LyricsProvider,
    ProviderService,
    TrackListingProvider,
)
from .genius_service import GeniusService
from .spotify_service import SpotifyService

__all__ = [
    "AlbumListingProvider",
    "AudioFeatureProvider",
    "LyricsProvider",
    "ProviderService",
    "TrackListingProvider",
    "GeniusService",
    "SpotifyService",
]
