"""
Configuration loader for the album data pipeline.

Loads configuration from a YAML file with environment variable overrides.
"""

import logging
import os
from typing import Optional

import yaml

from .config import AppConfig, PipelineConfig, ProviderConfig

logger = logging.getLogger("albumdata.config")


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. Defaults to "config.yaml"

    Returns:
        AppConfig instance with loaded settings
    """
    config = AppConfig.create_default()

    config_path = config_path or "config.yaml"
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config from %s: %s", config_path, e)
            config_data = None

        if config_data:
            if "provider" in config_data:
                provider_data = config_data["provider"] or {}
                config.provider = ProviderConfig(
                    spotify_client_id=provider_data.get("spotify_client_id"),
                    spotify_client_secret=provider_data.get("spotify_client_secret"),
                    genius_api_key=provider_data.get("genius_api_key"),
                    market=provider_data.get("market", "US"),
                    spotify_rate_limit=provider_data.get("spotify_rate_limit", 0.1),
                    genius_rate_limit=provider_data.get("genius_rate_limit", 0.5),
                    request_timeout=provider_data.get("request_timeout", 15.0),
                )

            if "pipeline" in config_data:
                pipeline_data = config_data["pipeline"] or {}
                config.pipeline = PipelineConfig(
                    parallel=pipeline_data.get("parallel", True),
                    concurrency_strategy=pipeline_data.get("concurrency_strategy", "default"),
                    max_workers=pipeline_data.get("max_workers"),
                    feature_batch_size=pipeline_data.get("feature_batch_size", 100),
                )

            config.debug = config_data.get("debug", False)
            config.log_level = config_data.get("log_level", "INFO")

    apply_env_overrides(config)

    return config


def apply_env_overrides(config: AppConfig) -> None:
    """Apply environment variable overrides to configuration."""

    # Provider credentials
    if os.getenv("SPOTIFY_CLIENT_ID"):
        config.provider.spotify_client_id = os.getenv("SPOTIFY_CLIENT_ID")

    if os.getenv("SPOTIFY_CLIENT_SECRET"):
        config.provider.spotify_client_secret = os.getenv("SPOTIFY_CLIENT_SECRET")

    if os.getenv("GENIUS_API_KEY"):
        config.provider.genius_api_key = os.getenv("GENIUS_API_KEY")

    # Scheduling
    if os.getenv("ALBUMDATA_STRATEGY"):
        config.pipeline.concurrency_strategy = os.getenv("ALBUMDATA_STRATEGY").lower()

    if os.getenv("ALBUMDATA_WORKERS"):
        config.pipeline.max_workers = int(os.getenv("ALBUMDATA_WORKERS"))

    # Global settings
    if os.getenv("DEBUG"):
        config.debug = os.getenv("DEBUG").lower() in ("true", "1", "yes")

    if os.getenv("LOG_LEVEL"):
        config.log_level = os.getenv("LOG_LEVEL").upper()


def has_credentials(config: AppConfig) -> bool:
    """Check if both external services have credentials configured."""
    return bool(
        config.provider.spotify_client_id
        and config.provider.spotify_client_secret
        and config.provider.genius_api_key
    )
