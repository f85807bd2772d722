"""Mascaramento de padrões sensíveis dentro de strings."""

from __future__ import annotations

import re

import structlog

from ..utils.errors import InvalidSanitizationConfigError
from ..utils.log_events import LogEvents
from .pattern_detector import SensitivePatternDetector
from .unicode_normalizer import UnicodeNormalizer

log = structlog.get_logger(__name__)


class SensitivePatternSanitizer:
    """
    Substitui todas as ocorrências dos padrões sensíveis pelo token de máscara.

    Os padrões do detector são unidos numa única alternação compilada uma
    vez, sem diferenciar maiúsculas. A ordem dos padrões não altera o
    resultado: toda ocorrência é mascarada, seja qual for o padrão.
    """

    def __init__(
        self,
        pattern_detector: SensitivePatternDetector,
        unicode_normalizer: UnicodeNormalizer | None = None,
    ) -> None:
        self._normalizer = unicode_normalizer or UnicodeNormalizer()
        self._unified_re = self._build_unified_regex(pattern_detector.get_patterns())

        log.debug(
            LogEvents.SANITIZADOR_PADROES_INICIALIZADO,
            ativo=self._unified_re is not None,
        )

    @staticmethod
    def _build_unified_regex(patterns: list[str]) -> re.Pattern[str] | None:
        if not patterns:
            return None

        unified = "|".join(f"(?:{pattern})" for pattern in patterns)
        try:
            return re.compile(unified, re.IGNORECASE)
        except re.error as e:
            raise InvalidSanitizationConfigError.for_pattern(unified, str(e)) from e

    def sanitize_patterns(self, value: str, mask_token: str) -> str:
        """
        Mascara todas as ocorrências de padrões sensíveis.

        Args:
            value: Texto a sanitizar
            mask_token: Token que substitui cada ocorrência

        Returns:
            Texto normalizado com as ocorrências mascaradas; sem padrões
            configurados, o texto normalizado é devolvido sem alterações
        """
        normalized = self._normalizer.normalize(value)
        if self._unified_re is None:
            return normalized

        return self._unified_re.sub(lambda _match: mask_token, normalized)
