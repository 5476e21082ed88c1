"""
Error taxonomy for the album data pipeline.

Fatal errors are exceptions. Recoverable per-album failures are not raised past
the album boundary; they travel as ``ProviderMiss`` values (see ``models``).
"""


class AlbumDataError(Exception):
    """Base class for all album data errors."""


class InvalidInputError(AlbumDataError, ValueError):
    """Raised before any network access when the request itself is unusable."""


class IntegrityViolation(AlbumDataError):
    """Raised when a join key is not unique on the right-hand side of a join."""

    def __init__(self, table: str, keys, duplicates):
        self.table = table
        self.keys = list(keys)
        self.duplicates = duplicates
        super().__init__(f"Duplicate {self.keys} keys in {table}: {duplicates}")


class ProviderError(AlbumDataError):
    """Transport or decode failure talking to an external service."""

    def __init__(self, service_id: str, message: str):
        self.service_id = service_id
        super().__init__(f"{service_id}: {message}")


class LyricsNotFoundError(ProviderError):
    """The lyrics service has no album matching the request."""
