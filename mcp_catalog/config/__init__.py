"""Configuration loading and management."""

from mcp_catalog.config.loader import Settings, get_settings, load_catalog_config

__all__ = ["Settings", "get_settings", "load_catalog_config"]
