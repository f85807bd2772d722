"""Utility modules."""

from .errors import ConfigurationError, InvalidSanitizationConfigError, LogShieldError
from .log_events import LogEvents
from .logger import SanitizingProcessor, configure_logging, get_logger, setup_logging

__all__ = [
    "LogShieldError",
    "ConfigurationError",
    "InvalidSanitizationConfigError",
    "LogEvents",
    "SanitizingProcessor",
    "configure_logging",
    "get_logger",
    "setup_logging",
]
