"""Detecção de referências circulares durante a travessia recursiva.

Os containers são identificados por identidade (``id``), não por igualdade
estrutural: dois dicts iguais porém distintos nunca são circulares. Uma
instância vale para uma única chamada de ``sanitize`` de nível superior.
"""

from __future__ import annotations

from typing import Any

CIRCULAR_REFERENCE_KEY = "[CIRCULAR_REFERENCE_DETECTED]"
DEPTH_LIMIT_KEY = "[SANITIZATION_HALTED]"
DEPTH_LIMIT_REASON = "MAX_DEPTH_REACHED"


def circular_reference_sentinel() -> dict[str, Any]:
    """Marcador que substitui um container revisitado."""
    return {CIRCULAR_REFERENCE_KEY: True}


def depth_limit_sentinel() -> dict[str, Any]:
    """Marcador que substitui um container além da profundidade máxima."""
    return {DEPTH_LIMIT_KEY: DEPTH_LIMIT_REASON}


class CircularReferenceDetector:
    """Containers em visita no caminho atual da travessia.

    Guarda id -> objeto: a referência mantém o objeto vivo enquanto marcado,
    então o ``id`` não pode ser reaproveitado por outro container.
    """

    def __init__(self) -> None:
        self._seen: dict[int, Any] = {}

    def reset(self) -> None:
        """Esquece todos os containers vistos."""
        self._seen.clear()

    def mark_seen(self, value: Any) -> None:
        """Registra o container como parte do caminho atual."""
        self._seen[id(value)] = value

    def unmark_seen(self, value: Any) -> None:
        """Remove o container ao sair dele, liberando ramos irmãos."""
        self._seen.pop(id(value), None)

    def is_circular_reference(self, value: Any) -> bool:
        """True se o mesmo container já está no caminho atual."""
        return id(value) in self._seen

    def handle_circular_reference(self) -> dict[str, Any]:
        """Retorna o marcador de referência circular."""
        return circular_reference_sentinel()
