"""Sanitização de strings: frases de credencial + padrões sensíveis."""

from __future__ import annotations

from .pattern_sanitizer import SensitivePatternSanitizer
from .phrase_sanitizer import CredentialPhraseSanitizer
from .unicode_normalizer import UnicodeNormalizer


class StringSanitizer:
    """
    Compõe normalização, mascaramento de frases e mascaramento de padrões.

    As frases são mascaradas primeiro para que os padrões não quebrem os
    limites de "chave: valor" antes da análise da frase.
    """

    def __init__(
        self,
        pattern_sanitizer: SensitivePatternSanitizer,
        phrase_sanitizer: CredentialPhraseSanitizer,
        unicode_normalizer: UnicodeNormalizer | None = None,
    ) -> None:
        self._pattern_sanitizer = pattern_sanitizer
        self._phrase_sanitizer = phrase_sanitizer
        self._normalizer = unicode_normalizer or UnicodeNormalizer()

    def sanitize_string(self, value: str, mask_token: str) -> str:
        """
        Sanitiza uma string.

        Args:
            value: Texto a sanitizar
            mask_token: Token de máscara já validado

        Returns:
            Texto normalizado com frases de credencial e padrões mascarados
        """
        normalized = self._normalizer.normalize(value)
        sanitized = self._phrase_sanitizer.sanitize_phrase(normalized, mask_token)
        return self._pattern_sanitizer.sanitize_patterns(sanitized, mask_token)
