"""
Merge of tracks, audio features and lyrics into the album data table.
"""

import logging
from typing import List

import pandas as pd

from .errors import IntegrityViolation
from .models import LYRICS_COLUMNS, TRACK_COLUMNS

logger = logging.getLogger("albumdata.merge")


def check_unique(table: pd.DataFrame, keys: List[str], table_name: str) -> None:
    """Raise ``IntegrityViolation`` if ``keys`` do not identify rows of ``table``."""
    duplicated = table.duplicated(keys, keep=False)
    if duplicated.any():
        duplicates = table.loc[duplicated, keys].drop_duplicates().to_dict("records")
        raise IntegrityViolation(table_name, keys, duplicates)


def merge_album_data(tracks: pd.DataFrame, features: pd.DataFrame, lyrics: pd.DataFrame) -> pd.DataFrame:
    """Left join tracks with audio features on track_uri, then lyrics on (album_name, track_n).

    The result has exactly one row per track, in track order.
    """
    check_unique(features, ["track_uri"], "audio features")
    check_unique(lyrics, ["album_name", "track_n"], "lyrics")

    # Track columns win over same-named measured fields
    clashing = [c for c in features.columns if c in TRACK_COLUMNS and c != "track_uri"]
    if clashing:
        logger.debug("Dropping audio feature columns shadowing track columns: %s", clashing)
        features = features.drop(columns=clashing)

    album_data = tracks.merge(features, on="track_uri", how="left", validate="many_to_one")
    album_data = album_data.merge(
        lyrics[LYRICS_COLUMNS], on=["album_name", "track_n"], how="left", validate="many_to_one"
    )

    logger.debug(
        "Merged %d tracks: %d with audio features, %d with lyrics",
        len(album_data),
        int(album_data["track_uri"].isin(features["track_uri"]).sum()),
        int(album_data["lyrics"].notna().sum()),
    )
    return album_data
