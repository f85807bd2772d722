"""
Structured logging configuration using structlog.

Log events pass through ``SanitizingProcessor`` before they are rendered, so
credentials and PII never reach the persisted output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import merge_contextvars

from .log_events import LogEvents

if TYPE_CHECKING:
    from ..config.settings import Settings
    from ..sanitizing.service import SanitizingService


class SanitizingProcessor:
    """
    Processor que sanitiza o event dict antes de renderizar.

    Posicionar ANTES do JSONRenderer ou ConsoleRenderer. Chaves de controle
    do structlog (nível, timestamp, exceção) passam intactas; todo o resto,
    inclusive a mensagem ``event``, é sanitizado numa única chamada.
    """

    RESERVED_KEYS = frozenset({"level", "timestamp", "logger", "exc_info", "stack_info"})

    def __init__(self, sanitizer: SanitizingService) -> None:
        self.sanitizer = sanitizer

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        """
        Args:
            logger: Logger instance
            method_name: Nome do método de log (debug, info, warning...)
            event_dict: Dicionário de evento do structlog

        Returns:
            Dicionário de evento sanitizado
        """
        payload = {k: v for k, v in event_dict.items() if k not in self.RESERVED_KEYS}
        reserved = {k: v for k, v in event_dict.items() if k in self.RESERVED_KEYS}

        sanitized = self.sanitizer.sanitize(payload)
        sanitized.update(reserved)
        return sanitized


def configure_logging(
    log_level: str | None = None,
    log_format: str = "json",
    sanitizer: SanitizingService | None = None,
    cache_logger_on_first_use: bool = True,
) -> None:
    """
    Configure structlog with processors and formatters.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type (json or text)
        sanitizer: Sanitizing service; None disables sanitization
        cache_logger_on_first_use: Freeze loggers on first use (disable in tests)
    """
    level = (log_level or "INFO").upper()

    # Standard library logging configuration
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )

    processors: list[Any] = [
        # Merge context variables (must be first)
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    # Sanitize sensitive data (before renderer)
    if sanitizer is not None:
        processors.append(SanitizingProcessor(sanitizer))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Console renderer with colors only when attached to a terminal (TTY-aware)
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_logger_on_first_use,
        context_class=dict,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


def setup_logging(
    settings: Settings | None = None,
    *,
    cache_logger_on_first_use: bool = True,
) -> structlog.stdlib.BoundLogger:
    """
    Setup logging from settings and return the main logger.

    This should be called at application startup, before anything else
    that may emit logs.

    Args:
        settings: Application settings (cached settings if omitted)
        cache_logger_on_first_use: Freeze loggers on first use (disable in tests)

    Returns:
        Configured logger instance

    Raises:
        InvalidSanitizationConfigError: If the sanitization config is invalid
    """
    # Lazy imports to avoid circular dependency with config/sanitizing
    from ..config.settings import get_settings
    from ..sanitizing.kernel import build_sanitizing_service

    settings = settings or get_settings()

    sanitizer = None
    if settings.sanitize_logs:
        sanitizer = build_sanitizing_service(settings.sanitization)

    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        sanitizer=sanitizer,
        cache_logger_on_first_use=cache_logger_on_first_use,
    )
    log = get_logger("logshield")

    log.info(
        LogEvents.LOGGING_CONFIGURADO,
        app_name=settings.app_name,
        app_env=settings.app_env,
        log_format=settings.log_format,
    )
    log.info(LogEvents.SANITIZACAO_ATIVADA if sanitizer else LogEvents.SANITIZACAO_DESATIVADA)

    return log


__all__ = [
    "SanitizingProcessor",
    "configure_logging",
    "get_logger",
    "setup_logging",
]
