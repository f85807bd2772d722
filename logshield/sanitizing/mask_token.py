"""Validação e normalização do token de mascaramento.

O token é sempre renderizado entre um único par de colchetes e em
maiúsculas, por exemplo ``[MASKED]``.
"""

from __future__ import annotations

import re
from typing import Any

from ..config.settings import DEFAULT_MASK_TOKEN_FORBIDDEN_PATTERN
from ..utils.errors import InvalidSanitizationConfigError
from .pattern_detector import clean_pattern

DEFAULT_MASK_TOKEN = "[MASKED]"
DEFAULT_MAX_LENGTH = 40
DEFAULT_FORBIDDEN_PATTERN = DEFAULT_MASK_TOKEN_FORBIDDEN_PATTERN

_WRAPPED_RE = re.compile(r"^\[([^\[\]]*)\]$")


def original_value_marker(mask_token: str) -> str:
    """
    Marcador para valores que já eram iguais ao token de máscara.

    Distingue "o valor era o próprio token" de "o valor foi mascarado".

    Example:
        >>> original_value_marker("[MASKED]")
        '[MASKED_ORIGINAL_VALUE]'
    """
    unwrapped = mask_token.replace("[", "").replace("]", "")
    return f"[{unwrapped}_ORIGINAL_VALUE]"


class MaskTokenValidator:
    """Valida tokens de máscara contra tamanho e conteúdo proibido."""

    def __init__(
        self,
        forbidden_pattern: str | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Args:
            forbidden_pattern: Regex (sem diferenciar maiúsculas) que o token
                não pode conter. Aceita também a forma ``/corpo/flags``.
            max_length: Tamanho máximo do token após o trim

        Raises:
            InvalidSanitizationConfigError: Se o padrão proibido não compilar
        """
        pattern = forbidden_pattern if forbidden_pattern is not None else DEFAULT_FORBIDDEN_PATTERN
        try:
            self._forbidden_re = re.compile(clean_pattern(pattern), re.IGNORECASE)
        except re.error as e:
            raise InvalidSanitizationConfigError.for_forbidden_pattern(pattern, str(e)) from e
        self.max_length = max_length if max_length is not None else DEFAULT_MAX_LENGTH

    def validate(self, token: Any) -> str:
        """
        Valida e normaliza um token de máscara.

        Args:
            token: Token bruto, com ou sem colchetes

        Returns:
            Token normalizado, ex.: ``"mask"`` -> ``"[MASK]"``

        Raises:
            InvalidSanitizationConfigError: Token vazio, longo demais ou proibido
        """
        if not isinstance(token, str):
            raise InvalidSanitizationConfigError.for_mask_token(token)

        clean = token.strip()
        if not clean or len(clean) > self.max_length or self._forbidden_re.search(clean):
            raise InvalidSanitizationConfigError.for_mask_token(token)

        unwrapped = _WRAPPED_RE.sub(r"\1", clean)
        unwrapped = unwrapped.replace("[", "").replace("]", "")
        if not unwrapped.strip():
            raise InvalidSanitizationConfigError.for_mask_token(token)

        return f"[{unwrapped.upper()}]"
