"""
Base classes for the external services the pipeline consumes.

Each service implements one or more of the narrow provider interfaces below.
The pipeline stages only ever talk to these interfaces, so tests can swap in
in-memory fakes.
"""

import json
import logging
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..errors import ProviderError
from ..models import LyricsBlock


class AlbumListingProvider(ABC):
    """Lists every album released by an artist."""

    @abstractmethod
    def list_albums(self, artist: str) -> List[Dict[str, Any]]:
        """Return ``[{"album_name": ...}, ...]`` for the artist."""


class TrackListingProvider(ABC):
    """Lists the tracks of one album in album order."""

    @abstractmethod
    def list_tracks(self, artist: str, album_name: str) -> List[Dict[str, Any]]:
        """Return ``[{"track_title": ..., "track_uri": ...}, ...]`` in album order."""


class AudioFeatureProvider(ABC):
    """Measures audio attributes for batches of track identifiers."""

    max_batch_size: int = 100

    @abstractmethod
    def get_features(self, track_uris: List[str]) -> List[Dict[str, Any]]:
        """Return one dict per recognised id, each carrying ``track_uri``."""


class LyricsProvider(ABC):
    """Retrieves the lyrics of a whole album."""

    @abstractmethod
    def get_album_lyrics(self, artist: str, album_name: str) -> List[LyricsBlock]:
        """Return lyric rows in album order or raise ``ProviderError``."""


class ProviderService:
    """Shared plumbing for HTTP-backed services."""

    def __init__(self, service_id: str, service_name: str, timeout: float = 15.0):
        """Initialize service with ID and name."""
        self.service_id = service_id
        self.service_name = service_name
        self.timeout = timeout
        self._rate_limit_delay = 1.0
        self._last_request_time = 0.0
        self._rate_lock = threading.Lock()
        self._user_agent = "AlbumData/0.1 (https://github.com/album-data/album-data)"
        self.logger = logging.getLogger(f"albumdata.{service_id}")

    def set_rate_limit(self, delay: float) -> None:
        """Set the minimum number of seconds between two requests."""
        self._rate_limit_delay = delay

    def _rate_limit(self) -> None:
        """Apply rate limiting across all worker threads."""
        with self._rate_lock:
            now = time.time()
            time_since_last = now - self._last_request_time
            if time_since_last < self._rate_limit_delay:
                time.sleep(self._rate_limit_delay - time_since_last)
            self._last_request_time = time.time()

    def _request_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
    ) -> Dict[str, Any]:
        """Perform one HTTP request and decode the JSON body.

        Raises ``ProviderError`` on any transport or decode failure.
        """
        if params:
            url += "?" + urllib.parse.urlencode(params)

        request_headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        self._rate_limit()
        req = urllib.request.Request(url, data=data, headers=request_headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raise ProviderError(self.service_id, f"HTTP {e.code} for {url}") from e
        except (urllib.error.URLError, OSError) as e:
            raise ProviderError(self.service_id, f"request failed for {url}: {e}") from e
        except ValueError as e:
            raise ProviderError(self.service_id, f"invalid JSON from {url}: {e}") from e

    def get_service_info(self) -> Dict[str, Any]:
        """Get service information for debugging."""
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "rate_limit_delay": self._rate_limit_delay,
            "timeout": self.timeout,
        }


def chunked(items: Iterable[str], size: int) -> List[List[str]]:
    """Split ``items`` into lists of at most ``size`` elements."""
    items = list(items)
    return [items[i:i + size] for i in range(0, len(items), size)]
