"""
Album data engine.

This module wires the pipeline stages together: resolve the artist's albums,
enumerate their tracks, fetch audio features and lyrics, and merge everything
into one row per track.
"""

import logging
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from .config import AppConfig
from .config_loader import has_credentials, load_config
from .errors import InvalidInputError
from .features import fetch_audio_features
from .lyrics import fetch_lyrics
from .merge import merge_album_data
from .providers.base import (
    AlbumListingProvider,
    AudioFeatureProvider,
    LyricsProvider,
    TrackListingProvider,
)
from .providers.genius_service import GeniusService
from .providers.spotify_service import SpotifyService
from .resolver import normalize_album_names, resolve_albums
from .scheduler import plan, resolve_strategy
from .tracks import enumerate_tracks


class AlbumDataEngine:
    """Runs the fetch-and-merge pipeline against a set of providers."""

    def __init__(
        self,
        album_provider: AlbumListingProvider,
        track_provider: TrackListingProvider,
        feature_provider: AudioFeatureProvider,
        lyrics_provider: LyricsProvider,
        config: Optional[AppConfig] = None,
    ):
        """Initialize engine with its four collaborators."""
        self.album_provider = album_provider
        self.track_provider = track_provider
        self.feature_provider = feature_provider
        self.lyrics_provider = lyrics_provider
        self.config = config or AppConfig.create_default()
        self.logger = logging.getLogger("albumdata.engine")
        self.last_run: Dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: AppConfig) -> "AlbumDataEngine":
        """Build an engine backed by Spotify and Genius."""
        if not has_credentials(config):
            raise InvalidInputError(
                "Credentials missing: set SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET and GENIUS_API_KEY"
            )

        provider = config.provider

        spotify = SpotifyService(
            provider.spotify_client_id,
            provider.spotify_client_secret,
            market=provider.market,
            timeout=provider.request_timeout,
        )
        spotify.set_rate_limit(provider.spotify_rate_limit)
        genius = GeniusService(provider.genius_api_key, timeout=provider.request_timeout)
        genius.set_rate_limit(provider.genius_rate_limit)
        return cls(spotify, spotify, spotify, genius, config=config)

    def get_album_data(
        self,
        artist: str,
        albums: Iterable[str],
        parallel: bool = True,
        concurrency_strategy: str = "default",
    ) -> pd.DataFrame:
        """Return one row per track of the requested albums of ``artist``.

        Per-album track or lyrics failures are recorded in
        ``result.attrs["provider_misses"]``; every other error propagates.
        """
        requested = normalize_album_names(albums)
        if not artist or not artist.strip():
            raise InvalidInputError("Please enter an artist name")
        artist = artist.strip()
        strategy = resolve_strategy(concurrency_strategy) if parallel else "sequential"

        self.logger.info("Fetching album data for %s: %s (%s)", artist, sorted(requested), strategy)
        with plan(strategy, self.config.pipeline.max_workers):
            album_table = resolve_albums(artist, self.album_provider)
            track_output = enumerate_tracks(album_table, self.track_provider, requested)
            features = fetch_audio_features(
                track_output.table, self.feature_provider, self.config.pipeline.feature_batch_size
            )
            lyrics_output = fetch_lyrics(track_output.table, artist, self.lyrics_provider)

        album_data = merge_album_data(track_output.table, features, lyrics_output.table)

        misses = track_output.misses + lyrics_output.misses
        album_data.attrs["provider_misses"] = [miss.to_dict() for miss in misses]
        if misses:
            self.logger.warning("%d provider misses while fetching %s", len(misses), artist)

        self.last_run = {
            "artist": artist,
            "strategy": strategy,
            "albums": len(album_table),
            "tracks": len(album_data),
            "provider_misses": len(misses),
        }
        self.logger.info("Album data for %s: %d rows", artist, len(album_data))
        return album_data


def get_album_data(
    artist: str,
    albums: Iterable[str],
    parallel: bool = True,
    concurrency_strategy: str = "default",
    engine: Optional[AlbumDataEngine] = None,
) -> pd.DataFrame:
    """Retrieve an artist's albums with audio features and lyrics per track.

    Builds a Spotify/Genius engine from ``load_config()`` unless ``engine`` is
    given. The album set is validated before anything else happens.
    """
    normalize_album_names(albums)
    if engine is None:
        engine = AlbumDataEngine.from_config(load_config())
    return engine.get_album_data(artist, albums, parallel=parallel, concurrency_strategy=concurrency_strategy)
