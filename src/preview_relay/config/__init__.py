"""Configuration for Preview Relay."""

from preview_relay.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
