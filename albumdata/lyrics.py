"""
Album lyrics retrieval and alignment.

Lyrics are joined to tracks on ``(album_name, track_n)``, never on titles:
the lyrics service spells titles differently from the track listing. Each
lyric row is numbered by the position of its track within the lyrics
response, the same rule the track stage uses for the listing. This assumes
both services list an album's tracks in the same order; a differing track
count is logged but not corrected.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from .models import LYRICS_COLUMNS, LyricsBlock, ProviderResult, StageOutput, empty_lyrics
from .providers.base import LyricsProvider
from .scheduler import map_albums

logger = logging.getLogger("albumdata.lyrics")

STAGE = "lyrics"


def _join_text(texts: pd.Series) -> Optional[str]:
    parts = [t for t in texts if isinstance(t, str) and t]
    return "\n".join(parts) if parts else None


def align_lyrics(blocks: List[LyricsBlock], album_name: str) -> pd.DataFrame:
    """Number lyric rows by response position and collapse them per track.

    ``track_n`` is the dense rank of each distinct ``position`` in order of
    first appearance, so gaps or offsets in the provider's numbering do not
    leak into the join key.
    """
    if not blocks:
        return empty_lyrics()

    track_numbers: Dict[int, int] = {}
    for block in blocks:
        track_numbers.setdefault(block.position, len(track_numbers) + 1)

    rows = pd.DataFrame({
        "track_title": [b.track_title for b in blocks],
        "track_n": pd.Series([track_numbers[b.position] for b in blocks], dtype="int64"),
        "album_name": album_name,
        "lyrics": [b.lyrics_text for b in blocks],
    })

    grouped = (
        rows.groupby(["track_title", "track_n", "album_name"], sort=False, dropna=False)["lyrics"]
        .agg(_join_text)
        .reset_index()
    )
    # title only disambiguated raw rows; it is not a join key
    grouped = grouped.drop(columns=["track_title"]).sort_values("track_n", kind="stable")
    return grouped[LYRICS_COLUMNS].astype({"track_n": "int64"}).reset_index(drop=True)


def fetch_album_lyrics(provider: LyricsProvider, artist: str, album_name: str) -> pd.DataFrame:
    """Fetch and align the lyrics of one album."""
    return align_lyrics(provider.get_album_lyrics(artist, album_name), album_name)


def fetch_lyrics(tracks: pd.DataFrame, artist: str, provider: LyricsProvider) -> StageOutput:
    """Fetch lyrics for every album present in ``tracks``.

    A failing album degrades to no lyrics rows for that album alone.
    """
    album_names = list(dict.fromkeys(tracks["album_name"]))

    def fetch(album_artist: str, album_name: str) -> ProviderResult:
        return ProviderResult.capture(STAGE, album_name, fetch_album_lyrics, provider, album_artist, album_name)

    results = map_albums(fetch, [(artist, name) for name in album_names])

    frames = []
    misses = []
    track_counts = tracks.groupby("album_name").size()
    for album_name, result in zip(album_names, results):
        if not result.ok:
            logger.warning("Lyrics unavailable for %s - %s: %s", artist, album_name, result.miss.reason)
            misses.append(result.miss)
        lyrics = result.unwrap_or(empty_lyrics())
        if lyrics.empty:
            continue
        if len(lyrics) != track_counts.get(album_name, 0):
            logger.debug(
                "Lyrics for %s list %d tracks, track listing has %d; alignment assumes matching order",
                album_name,
                len(lyrics),
                track_counts.get(album_name, 0),
            )
        frames.append(lyrics)

    table = pd.concat(frames, ignore_index=True) if frames else empty_lyrics()
    return StageOutput(table=table.astype({"track_n": "int64"}), misses=misses)
