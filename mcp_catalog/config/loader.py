"""Configuration loading from environment and YAML files."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATALOG_CONFIG: dict[str, Any] = {"enabled_providers": ["example"]}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Host and port
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Catalog of providers to load at startup
    catalog_config: str = "config/catalog.yaml"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_catalog_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the provider catalog from a YAML file.

    Args:
        config_path: Path to the config file. If None, uses the path from settings
            and falls back to the repository's config directory.

    Returns:
        Dictionary with configuration data.
    """
    if config_path is None:
        possible_paths = [
            Path(get_settings().catalog_config),
            Path(__file__).parent.parent.parent / "config" / "catalog.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = path
                break
        else:
            return dict(DEFAULT_CATALOG_CONFIG)

    config_path = Path(config_path)
    if not config_path.exists():
        return dict(DEFAULT_CATALOG_CONFIG)

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def get_enabled_providers(config: dict[str, Any] | None = None) -> list[str]:
    """Get list of enabled provider names."""
    if config is None:
        config = load_catalog_config()
    return list(config.get("enabled_providers", DEFAULT_CATALOG_CONFIG["enabled_providers"]))
