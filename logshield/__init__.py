"""
logshield - sanitization of credentials and PII before they reach log output.

The pipeline detects sensitive keys, credential phrases and sensitive patterns
(CPF, card numbers, e-mails) and replaces them with a mask token.
"""

from .config.settings import SanitizationConfig
from .sanitizing import SanitizingService, build_sanitizing_service
from .utils.errors import InvalidSanitizationConfigError

__version__ = "1.0.0"
__all__ = [
    "InvalidSanitizationConfigError",
    "SanitizationConfig",
    "SanitizingService",
    "build_sanitizing_service",
]
