"""
Configuration module for logshield using Pydantic Settings.

This module uses environment variables with validation, following the same
layout as the rest of the project:
- Nested models for structured configuration
- Environment variable prefixing (LOGSHIELD_)
- Type validation with defaults
- Extra fields are ignored (unknown LOGSHIELD_ env vars are logged as warning)
"""

import os
import typing
from functools import lru_cache

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.errors import ConfigurationError
from ..utils.log_events import LogEvents

log = structlog.get_logger()

DEFAULT_MASK_TOKEN_FORBIDDEN_PATTERN = r"[\x00-\x1F\x7F]|base64|script|php"


class SanitizationConfig(BaseModel):
    """
    Sanitization pipeline configuration.

    Consumed once when the sanitizing service is built and immutable afterwards.
    Custom keys, patterns and separators are merged with the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    sensitive_keys: list[str] = Field(
        default_factory=list, description="Extra sensitive key names"
    )
    sensitive_patterns: list[str] = Field(
        default_factory=list, description="Extra sensitive regex pattern bodies"
    )
    separators: list[str] = Field(
        default_factory=list, description="Extra credential phrase separators"
    )
    include_default_keys: bool = Field(default=True, description="Merge built-in keys")
    include_default_patterns: bool = Field(
        default=True, description="Merge built-in patterns (CPF, card, e-mail)"
    )
    max_depth: int = Field(default=8, ge=0, le=256, description="Maximum recursion depth")
    mask_token: str = Field(default="[MASKED]", description="Replacement for sensitive data")
    mask_token_forbidden_pattern: str = Field(
        default=DEFAULT_MASK_TOKEN_FORBIDDEN_PATTERN,
        description="Regex (case-insensitive) a mask token must not match",
    )
    mask_token_max_length: int = Field(
        default=40, ge=1, le=256, description="Maximum mask token length"
    )


class Settings(BaseSettings):
    """
    Main settings class for logshield.

    Environment variables can be prefixed with LOGSHIELD_
    Nested config uses double underscore: LOGSHIELD_SANITIZATION__MAX_DEPTH
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGSHIELD_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        validate_default=True,
        extra="ignore",  # Ignore unknown fields with LOGSHIELD_ prefix (typos)
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Application
    app_name: str = Field(default="logshield", description="Application name")
    app_env: str = Field(default="development", description="Environment: development/production")

    # Logging
    log_level: str = Field(
        default="INFO", description="Log level: DEBUG/INFO/WARNING/ERROR/CRITICAL"
    )
    log_format: str = Field(default="json", description="Log format: json/text")
    sanitize_logs: bool = Field(default=True, description="Sanitize log events before rendering")

    # Nested configurations
    sanitization: SanitizationConfig = Field(default_factory=SanitizationConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the valid values."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ConfigurationError(
                f"Invalid log level: {v}. Must be one of {valid_levels}", config_key="log_level"
            )
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in {"json", "text"}:
            raise ConfigurationError(
                f"Invalid log format: {v}. Must be json or text", config_key="log_format"
            )
        return v_lower

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate app environment."""
        valid_envs = {"development", "production", "testing"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ConfigurationError(
                f"Invalid app_env: {v}. Must be one of {valid_envs}", config_key="app_env"
            )
        return v_lower


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This function caches the settings to avoid reloading from environment
    on every call. The cache is per-process.

    Returns:
        Settings: The application settings
    """
    _warn_unknown_env_vars()

    return Settings()


def _collect_fields(model: type[BaseModel], prefix: str = "") -> set[str]:
    """Recursively collect all field names from a Pydantic model."""
    fields = set()
    for field_name, field_info in model.model_fields.items():
        full_name = f"{prefix}{field_name}" if prefix else field_name
        fields.add(full_name.upper())
        field_type = field_info.annotation
        if hasattr(field_type, "__origin__"):
            for arg in typing.get_args(field_type):
                if isinstance(arg, type) and issubclass(arg, BaseModel):
                    fields.update(_collect_fields(arg, f"{full_name}__"))
        elif isinstance(field_type, type) and issubclass(field_type, BaseModel):
            fields.update(_collect_fields(field_type, f"{full_name}__"))
    return fields


def _warn_unknown_env_vars() -> None:
    """
    Check for unknown environment variables with LOGSHIELD_ prefix.

    Logs a warning if typos are detected (e.g., LOGSHIELD_LOG_LEVLE instead of
    LOGSHIELD_LOG_LEVEL), since they would otherwise be silently ignored.
    """
    known_fields = _collect_fields(Settings)

    unknown_vars = [
        key
        for key in os.environ
        if key.upper().startswith("LOGSHIELD_")
        and key[len("LOGSHIELD_") :].upper() not in known_fields
    ]

    if unknown_vars:
        log.warning(
            LogEvents.VARIAVEIS_AMBIENTE_DESCONHECIDAS,
            vars=unknown_vars,
            hint="These environment variables will be ignored. Check for typos.",
        )
