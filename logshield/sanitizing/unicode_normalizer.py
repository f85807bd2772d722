"""Normalização Unicode para comparação estável de chaves e textos."""

from __future__ import annotations

import unicodedata


class UnicodeNormalizer:
    """Aplica NFKC e remove espaços nas bordas.

    Função total: qualquer falha interna devolve a entrada original.
    """

    form = "NFKC"

    def normalize(self, value: str) -> str:
        """
        Normaliza uma string para comparação.

        Args:
            value: Texto original

        Returns:
            Texto em NFKC sem espaços nas bordas, ou a entrada original
            se a normalização não for possível
        """
        try:
            return unicodedata.normalize(self.form, value).strip()
        except (TypeError, ValueError):
            return value
