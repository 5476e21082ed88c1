"""
Track enumeration.

Track numbers are assigned here from the position of each track in the
listing (1-based, per album) instead of trusting the provider's numbering,
because the lyrics join needs a contiguous key.
"""

import logging
from typing import Set

import pandas as pd

from .models import TRACK_COLUMNS, ProviderResult, StageOutput, empty_tracks
from .providers.base import TrackListingProvider
from .scheduler import map_albums

logger = logging.getLogger("albumdata.tracks")

STAGE = "tracks"


def fetch_album_tracks(provider: TrackListingProvider, artist: str, album_name: str) -> pd.DataFrame:
    """List one album's tracks and number them by listing position."""
    rows = provider.list_tracks(artist, album_name)
    if not rows:
        return empty_tracks()

    return pd.DataFrame({
        "album_name": album_name,
        "track_title": [row["track_title"] for row in rows],
        "track_uri": [row["track_uri"] for row in rows],
        "track_n": pd.Series(range(1, len(rows) + 1), dtype="int64"),
    })[TRACK_COLUMNS]


def enumerate_tracks(albums: pd.DataFrame, provider: TrackListingProvider, requested: Set[str]) -> StageOutput:
    """Enumerate tracks of every album, then keep the requested albums.

    An album whose listing fails contributes no rows and one miss.
    """

    def fetch(artist: str, album_name: str) -> ProviderResult:
        return ProviderResult.capture(STAGE, album_name, fetch_album_tracks, provider, artist, album_name)

    results = map_albums(fetch, list(albums[["artist", "album_name"]].itertuples(index=False, name=None)))

    frames = []
    misses = []
    for result in results:
        if not result.ok:
            logger.warning("Track listing failed for %s: %s", result.miss.album_name, result.miss.reason)
            misses.append(result.miss)
            continue
        if not result.value.empty:
            frames.append(result.value)

    tracks = pd.concat(frames, ignore_index=True) if frames else empty_tracks()
    tracks = tracks[tracks["album_name"].str.lower().isin(requested)].reset_index(drop=True)
    tracks = tracks.astype({"track_n": "int64"})

    found = set(tracks["album_name"].str.lower())
    for name in sorted(requested - found):
        logger.warning("Requested album not found for artist: %s", name)

    logger.info("Enumerated %d tracks on %d albums", len(tracks), len(found))
    return StageOutput(table=tracks, misses=misses)
