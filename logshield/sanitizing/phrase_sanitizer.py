"""Mascaramento de frases de credencial em texto livre.

Exemplos:
- ``"password: abc123"`` -> ``"password: [MASKED]"``
- ``"a senha foi abc123"`` -> ``"a senha foi [MASKED]"``
- ``"abc123 is the password"`` -> ``"[MASKED] is the password"``

Só o valor é substituído; chave, separador e espaçamento são preservados.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Protocol

import structlog

from ..utils.errors import InvalidSanitizationConfigError
from ..utils.log_events import LogEvents

log = structlog.get_logger(__name__)

DEFAULT_SEPARATORS: tuple[str, ...] = (":", "=", "-", "->", "=>", "|", "/", ";", ",", "is", "foi", "é")

# Palavras entre a chave e o separador: "password for the database: abc123"
MAX_INTERMEDIATE_WORDS = 3

_VALUE = r"""([^\s,;:."]+)"""

FORWARD_PATTERN_TEMPLATE = (
    r"\b({keys})\b"  # [1] chave sensível
    r"((?:\s+\w+){{0,{max_words}}})"  # [2] palavras intermediárias
    r"(\s*)"  # [3] espaços antes do separador
    r"({separators})"  # [4] separador
    r"(\s*)"  # [5] espaços depois do separador
    + _VALUE  # [6] valor
)

BACKWARD_PATTERN_TEMPLATE = (
    _VALUE  # [1] valor
    + r"(\s+)"  # [2] espaços depois do valor
    r"({separators})"  # [3] separador
    r"(\s*(?:\w+\s*){{0,{max_words}}})"  # [4] palavras intermediárias
    r"(\s+)"  # [5] espaços antes da chave
    r"(\b(?:{keys})\b)"  # [6] chave sensível
)

_WHITESPACE_RE = re.compile(r"\s")


class PreparedKeySource(Protocol):
    """Qualquer detector que exponha as variantes de chaves já preparadas."""

    def get_prepared_keys(self) -> list[str]: ...


def _alternation(items: Iterable[str]) -> str:
    # Mais longos primeiro: "->" antes de "-", "acesso_token" antes de "token"
    ordered = sorted(items, key=len, reverse=True)
    return "|".join(re.escape(item) for item in ordered)


class CredentialPhraseSanitizer:
    """
    Encontra frases "chave SEPARADOR valor" (ou a forma invertida) e mascara
    apenas o valor.

    A forma invertida só é tentada quando a forma direta não produziu
    nenhuma substituição no texto inteiro. Um texto com uma frase direta e
    outra invertida tem apenas a direta mascarada.
    """

    def __init__(
        self,
        key_source: PreparedKeySource,
        custom_separators: Iterable[str] | None = None,
    ) -> None:
        """
        Args:
            key_source: Detector de chaves (usa ``get_prepared_keys``)
            custom_separators: Separadores extras, mesclados com os padrão

        Raises:
            InvalidSanitizationConfigError: Separador vazio ou com espaços
        """
        self.separators = self._initialize_separators(custom_separators)
        keys = [key for key in key_source.get_prepared_keys() if key]

        self._forward_re: re.Pattern[str] | None = None
        self._backward_re: re.Pattern[str] | None = None
        if keys:
            params = {
                "keys": _alternation(keys),
                "separators": _alternation(self.separators),
                "max_words": MAX_INTERMEDIATE_WORDS,
            }
            self._forward_re = re.compile(
                FORWARD_PATTERN_TEMPLATE.format(**params), re.IGNORECASE
            )
            self._backward_re = re.compile(
                BACKWARD_PATTERN_TEMPLATE.format(**params), re.IGNORECASE
            )

        log.debug(
            LogEvents.SANITIZADOR_FRASES_INICIALIZADO,
            total_chaves=len(keys),
            total_separadores=len(self.separators),
        )

    @staticmethod
    def _validate_separator(separator: Any) -> str:
        if (
            not isinstance(separator, str)
            or not separator.strip()
            or _WHITESPACE_RE.search(separator)
        ):
            raise InvalidSanitizationConfigError.for_separator(separator)
        return separator

    @classmethod
    def _initialize_separators(cls, custom: Iterable[str] | None) -> tuple[str, ...]:
        validated = [cls._validate_separator(sep) for sep in (custom or [])]
        # dict.fromkeys preserva a ordem de inserção e remove duplicatas
        return tuple(dict.fromkeys([*validated, *DEFAULT_SEPARATORS]))

    def sanitize_phrase(self, text: str, mask_token: str) -> str:
        """
        Mascara valores de frases de credencial.

        Args:
            text: Texto livre
            mask_token: Token que substitui o valor

        Returns:
            Texto com os valores mascarados; sem chaves configuradas, o
            texto é devolvido sem alterações
        """
        if self._forward_re is None or self._backward_re is None:
            return text

        sanitized, replacements = self._forward_re.subn(
            lambda m: "".join(m.group(1, 2, 3, 4, 5)) + mask_token,
            text,
        )
        if replacements > 0:
            return sanitized

        return self._backward_re.sub(
            lambda m: mask_token + "".join(m.group(2, 3, 4, 5, 6)),
            text,
        )
