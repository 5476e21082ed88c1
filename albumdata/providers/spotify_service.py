"""
Spotify catalog service.

Provides the album listing, track listing and audio feature collaborators
backed by the Spotify Web API (client credentials flow).
"""

import base64
import threading
import time
import urllib.parse
from typing import Any, Dict, List, Optional

from ..errors import ProviderError
from .base import (
    AlbumListingProvider,
    AudioFeatureProvider,
    ProviderService,
    TrackListingProvider,
    chunked,
)

# Fields of an audio-features object that describe the request, not the audio
NON_MEASURED_FIELDS = ("id", "uri", "type", "track_href", "analysis_url")


class SpotifyService(ProviderService, AlbumListingProvider, TrackListingProvider, AudioFeatureProvider):
    """Spotify Web API client for albums, tracks and audio features."""

    max_batch_size = 100

    def __init__(self, client_id: str, client_secret: str, market: str = "US", timeout: float = 15.0):
        """Create a client; no request is made until the first call."""
        super().__init__("spotify", "Spotify", timeout=timeout)
        self._rate_limit_delay = 0.1
        self._base_url = "https://api.spotify.com/v1"
        self._token_url = "https://accounts.spotify.com/api/token"
        self._client_id = client_id
        self._client_secret = client_secret
        self.market = market
        self._token: Optional[str] = None
        self._token_expires = 0.0
        self._token_lock = threading.Lock()
        # (artist, album) lowercase -> album id, filled by list_albums
        self._album_ids: Dict[tuple, str] = {}

    def _get_token(self) -> str:
        """Return a valid access token, fetching a new one when expired."""
        with self._token_lock:
            if self._token and time.time() < self._token_expires - 60:
                return self._token

            credentials = f"{self._client_id}:{self._client_secret}".encode("utf-8")
            data = self._request_json(
                self._token_url,
                headers={
                    "Authorization": "Basic " + base64.b64encode(credentials).decode("ascii"),
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                data=urllib.parse.urlencode({"grant_type": "client_credentials"}).encode("utf-8"),
            )
            if "access_token" not in data:
                raise ProviderError(self.service_id, "token response without access_token")
            self._token = data["access_token"]
            self._token_expires = time.time() + float(data.get("expires_in", 3600))
            return self._token

    def _api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = endpoint if endpoint.startswith("http") else f"{self._base_url}{endpoint}"
        return self._request_json(url, params, headers={"Authorization": f"Bearer {self._get_token()}"})

    def _paginate(self, endpoint: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Follow ``next`` links of a paging object and collect its items."""
        items: List[Dict[str, Any]] = []
        page = self._api(endpoint, params)
        while True:
            items.extend(page.get("items") or [])
            next_url = page.get("next")
            if not next_url:
                return items
            page = self._api(next_url)

    def _find_artist_id(self, artist: str) -> str:
        data = self._api("/search", {"q": artist, "type": "artist", "limit": 10})
        hits = (data.get("artists") or {}).get("items") or []
        if not hits:
            raise ProviderError(self.service_id, f"artist not found: {artist!r}")
        for hit in hits:
            if (hit.get("name") or "").lower() == artist.lower():
                return hit["id"]
        return hits[0]["id"]

    def _find_album_id(self, artist: str, album_name: str) -> str:
        key = (artist.lower(), album_name.lower())
        if key in self._album_ids:
            return self._album_ids[key]

        data = self._api("/search", {"q": f"album:{album_name} artist:{artist}", "type": "album", "limit": 10})
        for hit in (data.get("albums") or {}).get("items") or []:
            if (hit.get("name") or "").lower() == album_name.lower():
                return hit["id"]
        raise ProviderError(self.service_id, f"album not found: {artist!r} - {album_name!r}")

    def list_albums(self, artist: str) -> List[Dict[str, Any]]:
        """List every album and single released by ``artist``."""
        artist_id = self._find_artist_id(artist)
        items = self._paginate(
            f"/artists/{artist_id}/albums",
            {"include_groups": "album,single", "market": self.market, "limit": 50},
        )
        albums = []
        for item in items:
            self._album_ids.setdefault((artist.lower(), item["name"].lower()), item["id"])
            albums.append({"album_name": item["name"], "album_id": item["id"]})
        self.logger.debug("Spotify listed %d albums for %s", len(albums), artist)
        return albums

    def list_tracks(self, artist: str, album_name: str) -> List[Dict[str, Any]]:
        """List the tracks of one album in the order Spotify returns them."""
        album_id = self._find_album_id(artist, album_name)
        items = self._paginate(f"/albums/{album_id}/tracks", {"market": self.market, "limit": 50})
        return [{"track_title": item["name"], "track_uri": item["uri"]} for item in items]

    def get_features(self, track_uris: List[str]) -> List[Dict[str, Any]]:
        """Fetch audio features, at most ``max_batch_size`` ids per request."""
        features = []
        for batch in chunked(track_uris, self.max_batch_size):
            ids = [uri.rsplit(":", 1)[-1] for uri in batch]
            data = self._api("/audio-features", {"ids": ",".join(ids)})
            for item in data.get("audio_features") or []:
                # Unknown ids come back as null entries
                if not item:
                    continue
                row = {k: v for k, v in item.items() if k not in NON_MEASURED_FIELDS}
                row["track_uri"] = item.get("uri") or f"spotify:track:{item['id']}"
                features.append(row)
        return features
