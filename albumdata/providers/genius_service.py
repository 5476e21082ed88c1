"""
Genius lyrics service.

This module provides the lyrics collaborator: it locates an album on
Genius.com, walks its track list and collects plain-text lyrics per song.
"""

from typing import Any, Dict, List, Optional

from ..errors import LyricsNotFoundError, ProviderError
from ..models import LyricsBlock
from .base import LyricsProvider, ProviderService


class GeniusService(ProviderService, LyricsProvider):
    """Genius API client returning whole-album lyrics."""

    def __init__(self, api_key: str, timeout: float = 15.0):
        """Initialize Genius service."""
        super().__init__("genius", "Genius", timeout=timeout)
        self._rate_limit_delay = 0.5  # Genius rate limit (2 requests per second)
        self._base_url = "https://api.genius.com"
        self._api_key = api_key
        self._max_search_hits = 5
        self._per_page = 50

    def _make_request(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Make a request to the Genius API and return its ``response`` object."""
        data = self._request_json(
            f"{self._base_url}{endpoint}",
            params,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        if "response" not in data:
            raise ProviderError(self.service_id, f"unexpected payload for {endpoint}")
        return data["response"]

    def _find_album_id(self, artist: str, album_name: str) -> int:
        """Find the album by checking the album of the top search hits."""
        response = self._make_request("/search", {"q": f"{artist} {album_name}"})
        hits = response.get("hits") or []

        for hit in hits[: self._max_search_hits]:
            result = hit.get("result") or {}
            hit_artist = (result.get("primary_artist") or {}).get("name", "")
            if hit_artist.lower() != artist.lower() or not result.get("id"):
                continue

            song = self._make_request(f"/songs/{result['id']}").get("song") or {}
            album = song.get("album") or {}
            if (album.get("name") or "").lower() == album_name.lower():
                return album["id"]

        raise LyricsNotFoundError(self.service_id, f"album not found: {artist!r} - {album_name!r}")

    def _get_song_lyrics(self, song_id: int) -> Optional[str]:
        song = self._make_request(f"/songs/{song_id}", {"text_format": "plain"}).get("song") or {}
        lyrics = song.get("lyrics")
        if isinstance(lyrics, dict):
            return lyrics.get("plain")
        return lyrics

    def _get_album_tracks(self, album_id: int) -> List[Dict[str, Any]]:
        """Collect every page of the album track list."""
        tracks: List[Dict[str, Any]] = []
        page: Optional[int] = 1
        while page:
            response = self._make_request(
                f"/albums/{album_id}/tracks", {"per_page": str(self._per_page), "page": str(page)}
            )
            tracks.extend(response.get("tracks") or [])
            page = response.get("next_page")
        return tracks

    def get_album_lyrics(self, artist: str, album_name: str) -> List[LyricsBlock]:
        """Return one block per album track, in Genius album order.

        A block's position is its index in the track list, not the Genius
        track number, which is missing for unnumbered tracks.
        """
        album_id = self._find_album_id(artist, album_name)
        tracks = self._get_album_tracks(album_id)

        blocks = []
        for index, track in enumerate(tracks, start=1):
            song = track.get("song") or {}
            if track.get("number") != index:
                self.logger.debug(
                    "Genius track %r of %s listed as number %s at position %d",
                    song.get("title"),
                    album_name,
                    track.get("number"),
                    index,
                )
            lyrics = self._get_song_lyrics(song["id"]) if song.get("id") else None
            blocks.append(LyricsBlock(track_title=song.get("title", ""), position=index, lyrics_text=lyrics))

        self.logger.info(
            "Genius lyrics for %s - %s: %d tracks, %d with lyrics",
            artist,
            album_name,
            len(blocks),
            sum(1 for b in blocks if b.lyrics_text),
        )
        return blocks
