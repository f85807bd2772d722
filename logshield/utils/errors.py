"""
Custom exceptions for logshield.

This module defines a hierarchy of exceptions for configuration problems
in the sanitization pipeline. Traversal problems (depth limit, circular
references) are never raised; they are encoded as sentinel values.
"""

from typing import Any


class LogShieldError(Exception):
    """Base exception for all logshield errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize a logshield error.

        Args:
            message: Human-readable error message
            details: Additional error context for logging/debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LogShieldError):
    """
    Exception raised when configuration is invalid or missing.

    This includes invalid environment variables, unknown log levels, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that is problematic
            details: Additional error context
        """
        config_details = {"config_key": config_key}
        if details:
            config_details.update(details)
        super().__init__(message, details=config_details)
        self.config_key = config_key


class InvalidSanitizationConfigError(ConfigurationError):
    """
    Exception raised when the sanitizer cannot be built from its configuration.

    A broken mask token, separator list or pattern set would silently stop
    protecting sensitive data, so these are always fatal to the sanitizer
    instance being constructed.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a sanitization configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that is problematic
            value: The rejected value (stored as repr in details)
            details: Additional error context
        """
        sanitization_details = {"value": repr(value)}
        if details:
            sanitization_details.update(details)
        super().__init__(message, config_key=config_key, details=sanitization_details)
        self.value = value

    @classmethod
    def for_mask_token(cls, token: Any) -> "InvalidSanitizationConfigError":
        """Mask token is empty, too long or matches the forbidden pattern."""
        return cls(
            "Invalid mask token: must be non-empty, short and free of forbidden content",
            config_key="mask_token",
            value=token,
        )

    @classmethod
    def for_separator(cls, separator: Any) -> "InvalidSanitizationConfigError":
        """Credential phrase separator is empty or contains whitespace."""
        return cls(
            f"Invalid credential phrase separator: {separator!r}",
            config_key="separators",
            value=separator,
        )

    @classmethod
    def for_pattern(
        cls, pattern: Any, reason: str | None = None
    ) -> "InvalidSanitizationConfigError":
        """Sensitive pattern does not compile."""
        return cls(
            f"Invalid sensitive pattern: {pattern!r}",
            config_key="sensitive_patterns",
            value=pattern,
            details={"reason": reason},
        )

    @classmethod
    def for_sensitive_key(cls, key: Any) -> "InvalidSanitizationConfigError":
        """Sensitive key is blank, not a string or contains control characters."""
        return cls(
            f"Invalid sensitive key: {key!r}",
            config_key="sensitive_keys",
            value=key,
        )

    @classmethod
    def for_empty_key_set(cls) -> "InvalidSanitizationConfigError":
        """No sensitive key survived preparation."""
        return cls(
            "Sensitive key set cannot be empty",
            config_key="sensitive_keys",
            value=[],
        )

    @classmethod
    def for_forbidden_pattern(
        cls, pattern: Any, reason: str | None = None
    ) -> "InvalidSanitizationConfigError":
        """Mask token forbidden pattern does not compile."""
        return cls(
            f"Invalid mask token forbidden pattern: {pattern!r}",
            config_key="mask_token_forbidden_pattern",
            value=pattern,
            details={"reason": reason},
        )
