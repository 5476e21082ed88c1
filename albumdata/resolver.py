"""
Album resolution: which albums does the artist have, and which were asked for.
"""

import logging
from typing import Iterable, Set

import pandas as pd

from .errors import InvalidInputError
from .models import ALBUM_COLUMNS, Album
from .providers.base import AlbumListingProvider

logger = logging.getLogger("albumdata.resolver")


def normalize_album_names(albums: Iterable[str]) -> Set[str]:
    """Lowercase and strip the requested album names.

    Raises ``InvalidInputError`` when nothing usable remains.
    """
    if isinstance(albums, str):
        albums = [albums]
    requested = {name.strip().lower() for name in (albums or []) if name and name.strip()}
    if not requested:
        raise InvalidInputError("Please enter at least one album name")
    return requested


def resolve_albums(artist: str, provider: AlbumListingProvider) -> pd.DataFrame:
    """List every album of ``artist``, one row per lowercase album name.

    No filtering against the requested albums happens here; the track stage
    filters on the names the track listing actually reports.
    """
    seen = set()
    albums = []
    for row in provider.list_albums(artist):
        album = Album(artist=artist, album_name=row["album_name"])
        if album.key in seen:
            continue
        seen.add(album.key)
        albums.append(album)

    logger.info("Resolved %d albums for %s", len(albums), artist)
    return pd.DataFrame([(a.artist, a.album_name) for a in albums], columns=ALBUM_COLUMNS)
