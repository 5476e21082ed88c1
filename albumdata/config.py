"""
Configuration management for the album data pipeline.
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidInputError


@dataclass
class ProviderConfig:
    """Configuration for the external services."""

    # Credentials (set these to enable real API calls)
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    genius_api_key: Optional[str] = None

    # Spotify catalog market used for album and track listings
    market: str = "US"

    # Rate limiting
    spotify_rate_limit: float = 0.1  # seconds between requests
    genius_rate_limit: float = 0.5  # seconds between requests

    # Timeouts
    request_timeout: float = 15.0  # seconds


@dataclass
class PipelineConfig:
    """Configuration for scheduling the pipeline stages."""

    parallel: bool = True
    concurrency_strategy: str = "default"
    max_workers: Optional[int] = None  # None = os.cpu_count()
    feature_batch_size: int = 100

    def __post_init__(self):
        if self.feature_batch_size < 1:
            raise InvalidInputError(f"feature_batch_size must be at least 1, got {self.feature_batch_size}")
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidInputError(f"max_workers must be at least 1, got {self.max_workers}")


@dataclass
class AppConfig:
    """Main application configuration container."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)

    # Global settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def create_default(cls) -> "AppConfig":
        """Create a default configuration instance."""
        return cls()

    @classmethod
    def create_for_testing(cls) -> "AppConfig":
        """Create a configuration suitable for testing."""
        config = cls()
        config.provider.spotify_rate_limit = 0.0
        config.provider.genius_rate_limit = 0.0
        config.provider.request_timeout = 1.0
        config.pipeline.max_workers = 2
        config.debug = True
        config.log_level = "DEBUG"
        return config
