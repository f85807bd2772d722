"""Detecção difusa de chaves sensíveis (password, senha, api_key...).

Cada chave configurada gera quatro variantes guardadas num único conjunto:
minúscula sem espaços, normalizada em Unicode, sem separadores (``_ - @``)
e sem vogais (incluindo vogais acentuadas do português). A forma sem vogais
também é guardada com letras repetidas colapsadas ("psswrd" -> "pswrd").
Uma chave candidata é sensível se qualquer uma das suas variantes estiver
no conjunto.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

import structlog

from ..utils.errors import InvalidSanitizationConfigError
from ..utils.log_events import LogEvents
from .unicode_normalizer import UnicodeNormalizer

log = structlog.get_logger(__name__)

DEFAULT_SENSITIVE_KEYS: tuple[str, ...] = (
    "password",
    "token",
    "api_key",
    "secret",
    "authorization",
    "credit_card",
    "ssn",
    "senha",
    "chave_api",
    "segredo",
    "autorizacao",
    "cartao_credito",
    "cpf",
    "cnpj",
    "acesso_token",
)

_SEPARATORS_RE = re.compile(r"[_\-@]")
_VOWELS_RE = re.compile(r"[aeiouáéíóúàèìòùãõâêîôûäëïöü]", re.IGNORECASE)
_REPEATED_RE = re.compile(r"(.)\1+")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1F\x7F]")
_MIN_SQUEEZED_LENGTH = 4


class SensitiveKeyDetector:
    """Decide se um nome de campo denota dado sensível."""

    def __init__(
        self,
        custom_keys: Iterable[str] | None = None,
        *,
        include_defaults: bool = True,
        normalizer: UnicodeNormalizer | None = None,
    ) -> None:
        """
        Args:
            custom_keys: Chaves extras, mescladas com as padrão
            include_defaults: Se True, inclui ``DEFAULT_SENSITIVE_KEYS``
            normalizer: Normalizador Unicode compartilhado

        Raises:
            InvalidSanitizationConfigError: Chave inválida ou conjunto vazio
        """
        self._normalizer = normalizer or UnicodeNormalizer()

        custom = list(custom_keys or [])
        for key in custom:
            self._validate_key(key)

        merged = (list(DEFAULT_SENSITIVE_KEYS) if include_defaults else []) + custom
        self._prepared_keys = self._prepare_sensitive_keys(merged)
        if not self._prepared_keys:
            raise InvalidSanitizationConfigError.for_empty_key_set()

        log.debug(
            LogEvents.DETECTOR_CHAVES_INICIALIZADO,
            total_chaves=len(merged),
            total_variantes=len(self._prepared_keys),
        )

    @staticmethod
    def _validate_key(key: Any) -> None:
        if not isinstance(key, str) or not key.strip() or _CONTROL_CHARS_RE.search(key):
            raise InvalidSanitizationConfigError.for_sensitive_key(key)

    def _variants(self, key: str) -> tuple[str, ...]:
        base = key.strip().lower()
        no_vowels = _VOWELS_RE.sub("", base)
        # "psswrd" -> "pswrd"; formas com menos de 4 letras são descartadas
        squeezed = _REPEATED_RE.sub(r"\1", no_vowels)
        return (
            base,
            self._normalizer.normalize(base),
            _SEPARATORS_RE.sub("", base),
            no_vowels,
            squeezed if len(squeezed) >= _MIN_SQUEEZED_LENGTH else "",
        )

    def _prepare_sensitive_keys(self, keys: Iterable[str]) -> frozenset[str]:
        prepared: set[str] = set()
        for key in keys:
            prepared.update(variant for variant in self._variants(key) if variant)
        return frozenset(prepared)

    def is_sensitive_key(self, key: Any) -> bool:
        """
        Verifica se uma chave é sensível.

        Ignora maiúsculas, acentos de compatibilidade, separadores e vogais.

        Args:
            key: Nome do campo; não-strings nunca são sensíveis

        Returns:
            True se alguma variante da chave estiver no conjunto preparado

        Examples:
            >>> detector = SensitiveKeyDetector()
            >>> detector.is_sensitive_key("Pass-Word")
            True
            >>> detector.is_sensitive_key("passenger")
            False
        """
        if not isinstance(key, str):
            return False
        return any(variant in self._prepared_keys for variant in self._variants(key))

    def get_prepared_keys(self) -> list[str]:
        """Retorna as variantes preparadas, ordenadas para uso em regex."""
        return sorted(self._prepared_keys)
