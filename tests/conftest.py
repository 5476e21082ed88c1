"""Shared fixtures for the album data tests."""

import os
import sys

import pytest

# Add the project root and this directory to the path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

from albumdata.config import AppConfig  # noqa: E402
from albumdata.engine import AlbumDataEngine  # noqa: E402
from fakes import FakeCatalog, FakeLyrics, make_features, make_tracks, lyrics_for  # noqa: E402


@pytest.fixture
def catalog_albums():
    """Three albums with differently sized track lists."""
    return {
        "Expectations": make_tracks("Expectations", 10),
        "The Runaround": make_tracks("Runaround", 4),
        "Pillow Talk": make_tracks("Pillow", 3),
    }


@pytest.fixture
def catalog(catalog_albums):
    features = {uri: make_features(uri) for tracks in catalog_albums.values() for _title, uri in tracks}
    return FakeCatalog(catalog_albums, features=features)


@pytest.fixture
def lyrics_provider(catalog_albums):
    return FakeLyrics({name: lyrics_for(tracks) for name, tracks in catalog_albums.items()})


@pytest.fixture
def engine(catalog, lyrics_provider):
    return AlbumDataEngine(catalog, catalog, catalog, lyrics_provider, config=AppConfig.create_for_testing())
