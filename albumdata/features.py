"""
Audio feature retrieval, batched per provider request limit.
"""

import logging
from typing import Optional

import pandas as pd

from .errors import InvalidInputError, ProviderError
from .models import empty_features
from .providers.base import AudioFeatureProvider, chunked

logger = logging.getLogger("albumdata.features")


def fetch_audio_features(
    tracks: pd.DataFrame, provider: AudioFeatureProvider, batch_size: Optional[int] = None
) -> pd.DataFrame:
    """Fetch audio features for every distinct ``track_uri`` of ``tracks``.

    Tracks the provider does not recognise are simply absent from the result.
    Errors are not caught here.
    """
    if batch_size is not None and batch_size < 1:
        raise InvalidInputError(f"feature batch size must be at least 1, got {batch_size}")
    size = min(batch_size or provider.max_batch_size, provider.max_batch_size)
    track_uris = list(dict.fromkeys(tracks["track_uri"].dropna()))
    if not track_uris:
        return empty_features()

    rows = []
    for batch in chunked(track_uris, size):
        for row in provider.get_features(batch):
            if not row.get("track_uri"):
                raise ProviderError(type(provider).__name__, f"feature row without track_uri: {row}")
            rows.append(row)

    logger.info("Audio features for %d of %d tracks", len(rows), len(track_uris))
    if not rows:
        return empty_features()

    features = pd.DataFrame(rows)
    return features[["track_uri"] + [c for c in features.columns if c != "track_uri"]]
