"""Configuration for the embed service."""

from ao3_embed.config.settings import Settings, clear_settings_cache, get_settings

__all__ = ["Settings", "clear_settings_cache", "get_settings"]
