"""Detecção de padrões sensíveis (PII e credenciais) por expressões regulares."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

import structlog

from ..utils.errors import InvalidSanitizationConfigError
from ..utils.log_events import LogEvents

log = structlog.get_logger(__name__)

# Corpos de regex padrão; sempre aplicados sem diferenciar maiúsculas
DEFAULT_SENSITIVE_PATTERNS: tuple[str, ...] = (
    r"\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b",  # CPF
    r"\b\d{16}\b",  # Cartão de crédito (16 dígitos)
    r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}",  # Email
)


def clean_pattern(pattern: str) -> str:
    """
    Remove delimitadores e flags de um padrão na forma ``/corpo/flags``.

    Padrões sem delimitador são devolvidos como estão.

    Example:
        >>> clean_pattern("/senha=[0-9]+/i")
        'senha=[0-9]+'
    """
    if pattern.startswith("/"):
        last_slash = pattern.rfind("/")
        if last_slash != 0:
            return pattern[1:last_slash]
    return pattern


class SensitivePatternDetector:
    """
    Conjunto ordenado de padrões sensíveis.

    Padrões padrão (CPF, cartão, e-mail) são mesclados com os customizados.
    Duplicatas são toleradas e não removidas.
    """

    def __init__(
        self,
        custom_patterns: Iterable[str] | None = None,
        *,
        include_defaults: bool = True,
    ) -> None:
        """
        Args:
            custom_patterns: Padrões extras (corpo de regex ou ``/corpo/flags``)
            include_defaults: Se True, inclui os padrões padrão antes dos customizados

        Raises:
            InvalidSanitizationConfigError: Se algum padrão for vazio ou não compilar
        """
        merged = list(DEFAULT_SENSITIVE_PATTERNS) if include_defaults else []
        merged.extend(custom_patterns or [])

        self._patterns: list[str] = []
        self._compiled: list[re.Pattern[str]] = []
        for pattern in merged:
            body = self._validate(pattern)
            self._patterns.append(body)
            self._compiled.append(re.compile(body, re.IGNORECASE))

        log.debug(LogEvents.DETECTOR_PADROES_INICIALIZADO, total_padroes=len(self._patterns))

    @staticmethod
    def _validate(pattern: Any) -> str:
        if not isinstance(pattern, str) or not pattern.strip():
            raise InvalidSanitizationConfigError.for_pattern(pattern, "empty pattern")

        body = clean_pattern(pattern)
        if not body:
            raise InvalidSanitizationConfigError.for_pattern(pattern, "empty pattern")

        try:
            re.compile(body, re.IGNORECASE)
        except re.error as e:
            raise InvalidSanitizationConfigError.for_pattern(pattern, str(e)) from e
        return body

    def get_patterns(self) -> list[str]:
        """Retorna os corpos de regex configurados, na ordem de configuração."""
        return list(self._patterns)

    def matches_sensitive_patterns(self, value: Any) -> bool:
        """
        Verifica se o valor casa com algum padrão sensível.

        Args:
            value: Valor a verificar; não-strings nunca casam

        Returns:
            True se algum padrão casar
        """
        if not isinstance(value, str):
            return False
        return any(pattern.search(value) for pattern in self._compiled)
