"""
Tests for the Genius lyrics service.
"""

import logging
from unittest.mock import patch

import pytest

from albumdata.engine import AlbumDataEngine
from albumdata.errors import LyricsNotFoundError
from albumdata.providers.genius_service import GeniusService
from fakes import FakeCatalog, make_tracks


def genius_routes(url, params=None, headers=None, data=None):
    """Fake Genius API for the album Expectations by Wild Child."""
    if url.endswith("/search"):
        return {"response": {"hits": [
            {"result": {"id": 9, "primary_artist": {"name": "Someone Else"}}},
            {"result": {"id": 10, "primary_artist": {"name": "Wild Child"}}},
        ]}}
    if url.endswith("/albums/500/tracks"):
        return {"response": {"tracks": [
            {"number": 1, "song": {"id": 10, "title": "Expectations"}},
            {"number": 2, "song": {"id": 11, "title": "Crazy Bird"}},
            {"number": None, "song": {"id": 12, "title": "Bonus"}},
        ]}}
    if url.endswith("/songs/10") and not params:
        return {"response": {"song": {"id": 10, "album": {"id": 500, "name": "Expectations"}}}}
    if "/songs/" in url:
        song_id = int(url.rsplit("/", 1)[-1])
        plain = None if song_id == 11 else f"lyrics {song_id}"
        return {"response": {"song": {"id": song_id, "lyrics": {"plain": plain}}}}
    return {"error": "not found"}


@pytest.fixture
def service():
    service = GeniusService("token")
    service.set_rate_limit(0.0)
    return service


def test_get_album_lyrics(service):
    with patch.object(service, "_request_json", side_effect=genius_routes):
        blocks = service.get_album_lyrics("wild child", "EXPECTATIONS")

    assert [b.track_title for b in blocks] == ["Expectations", "Crazy Bird", "Bonus"]
    assert [b.position for b in blocks] == [1, 2, 3]
    assert [b.lyrics_text for b in blocks] == ["lyrics 10", None, "lyrics 12"]


def test_album_not_found(service):
    def routes(url, params=None, headers=None, data=None):
        if url.endswith("/search"):
            return {"response": {"hits": []}}
        return genius_routes(url, params)

    with patch.object(service, "_request_json", side_effect=routes):
        with pytest.raises(LyricsNotFoundError):
            service.get_album_lyrics("Wild Child", "Expectations")


def test_logger_name(service):
    assert service.logger.name == "albumdata.genius"


def album_routes(track_pages):
    """Fake Genius API for an album whose track list spans ``track_pages``."""

    def routes(url, params=None, headers=None, data=None):
        if url.endswith("/search"):
            return {"response": {"hits": [{"result": {"id": 1, "primary_artist": {"name": "Wild Child"}}}]}}
        if url.endswith("/albums/700/tracks"):
            page = int(params["page"])
            next_page = page + 1 if page < len(track_pages) else None
            return {"response": {"tracks": track_pages[page - 1], "next_page": next_page}}
        if url.endswith("/songs/1") and not params:
            return {"response": {"song": {"id": 1, "album": {"id": 700, "name": "Expectations"}}}}
        song_id = int(url.rsplit("/", 1)[-1])
        return {"response": {"song": {"id": song_id, "lyrics": {"plain": f"lyrics {song_id}"}}}}

    return routes


def test_unnumbered_track_keeps_response_position(service, caplog):
    tracks = [
        {"number": 1, "song": {"id": 1, "title": "Expectations"}},
        {"number": None, "song": {"id": 2, "title": "Skit"}},
        {"number": 2, "song": {"id": 3, "title": "Crazy Bird"}},
    ]
    with patch.object(service, "_request_json", side_effect=album_routes([tracks])):
        with caplog.at_level(logging.DEBUG, logger="albumdata.genius"):
            blocks = service.get_album_lyrics("Wild Child", "Expectations")

    assert [b.position for b in blocks] == [1, 2, 3]
    assert "listed as number None at position 2" in caplog.text


def test_unnumbered_track_does_not_break_merge(service):
    tracks = [
        {"number": 1, "song": {"id": 1, "title": "Expectations"}},
        {"number": None, "song": {"id": 2, "title": "Skit"}},
        {"number": 2, "song": {"id": 3, "title": "Crazy Bird"}},
    ]
    catalog = FakeCatalog({"Expectations": make_tracks("Expectations", 3)})
    engine = AlbumDataEngine(catalog, catalog, catalog, service)

    with patch.object(service, "_request_json", side_effect=album_routes([tracks])):
        result = engine.get_album_data("Wild Child", ["Expectations"], parallel=False)

    assert len(result) == 3
    assert result["lyrics"].tolist() == ["lyrics 1", "lyrics 2", "lyrics 3"]


def test_album_track_list_pages_are_followed(service):
    first = [{"number": i, "song": {"id": 100 + i, "title": f"Song {i}"}} for i in range(1, 51)]
    second = [{"number": i, "song": {"id": 100 + i, "title": f"Song {i}"}} for i in range(51, 56)]
    routes = album_routes([first, second])

    with patch.object(service, "_request_json", side_effect=routes) as request:
        blocks = service.get_album_lyrics("Wild Child", "Expectations")

    assert len(blocks) == 55
    assert blocks[-1].track_title == "Song 55"
    pages = [c.args[1]["page"] for c in request.call_args_list if c.args[0].endswith("/tracks")]
    assert pages == ["1", "2"]
