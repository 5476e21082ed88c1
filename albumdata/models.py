"""
Data structures shared by the pipeline stages.

Tables handed between stages are pandas DataFrames; the column layouts are
defined here so every stage builds (and empties) them the same way.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import pandas as pd

ALBUM_COLUMNS = ["artist", "album_name"]
TRACK_COLUMNS = ["album_name", "track_title", "track_uri", "track_n"]
LYRICS_COLUMNS = ["album_name", "track_n", "lyrics"]

T = TypeVar("T")


@dataclass(frozen=True)
class Album:
    """An album released by an artist."""

    artist: str
    album_name: str

    @property
    def key(self) -> tuple:
        return (self.artist.lower(), self.album_name.lower())


@dataclass(frozen=True)
class LyricsBlock:
    """One row of a lyrics service response.

    ``position`` is the provider's own ordinal for the track inside the album
    response; several rows may share it when the service answers line by line.
    """

    track_title: str
    position: int
    lyrics_text: Optional[str]


@dataclass(frozen=True)
class ProviderMiss:
    """A per-album fetch that could not be completed."""

    stage: str
    album_name: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"stage": self.stage, "album_name": self.album_name, "reason": self.reason}


@dataclass
class ProviderResult(Generic[T]):
    """Either the value a provider call produced or the miss it degraded to."""

    value: Optional[T] = None
    miss: Optional[ProviderMiss] = None

    @property
    def ok(self) -> bool:
        return self.miss is None

    def unwrap_or(self, default: T) -> T:
        """Return the value on success, ``default`` otherwise."""
        return self.value if self.ok else default

    @classmethod
    def capture(cls, stage: str, album_name: str, func: Callable[..., T], *args: Any) -> "ProviderResult[T]":
        """Run ``func`` and convert any exception into a ``ProviderMiss``."""
        try:
            return cls(value=func(*args))
        except Exception as e:
            return cls(miss=ProviderMiss(stage=stage, album_name=album_name, reason=f"{type(e).__name__}: {e}"))


@dataclass
class StageOutput:
    """Table produced by a per-album stage together with the misses it absorbed."""

    table: pd.DataFrame
    misses: List[ProviderMiss] = field(default_factory=list)


def empty_tracks() -> pd.DataFrame:
    return pd.DataFrame({
        "album_name": pd.Series(dtype="object"),
        "track_title": pd.Series(dtype="object"),
        "track_uri": pd.Series(dtype="object"),
        "track_n": pd.Series(dtype="int64"),
    })


def empty_lyrics() -> pd.DataFrame:
    return pd.DataFrame({
        "album_name": pd.Series(dtype="object"),
        "track_n": pd.Series(dtype="int64"),
        "lyrics": pd.Series(dtype="object"),
    })


def empty_features() -> pd.DataFrame:
    return pd.DataFrame({"track_uri": pd.Series(dtype="object")})
