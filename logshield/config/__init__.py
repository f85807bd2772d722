"""Configuration module for logshield."""

from .settings import SanitizationConfig, Settings, get_settings

__all__ = ["SanitizationConfig", "Settings", "get_settings"]
