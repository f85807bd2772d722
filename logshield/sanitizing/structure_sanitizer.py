"""Sanitização recursiva de estruturas compostas (dicts, listas e objetos).

Regras para cada par (chave, valor):

1. chave sensível -> valor inteiro substituído pelo token de máscara;
2. valor composto -> recursão com ``depth + 1``;
3. string igual ao token -> marcador ``[<TOKEN>_ORIGINAL_VALUE]``;
4. outra string -> ``StringSanitizer``;
5. demais escalares (números, bool, None...) -> inalterados.

Referências circulares e excesso de profundidade nunca lançam exceção:
viram marcadores no próprio resultado.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from .circular import CircularReferenceDetector, depth_limit_sentinel
from .key_detector import SensitiveKeyDetector
from .mask_token import original_value_marker
from .string_sanitizer import StringSanitizer

DEFAULT_MAX_DEPTH = 8

SEQUENCE_TYPES = (list, tuple, set, frozenset)


@runtime_checkable
class Mappable(Protocol):
    """Tipos de domínio que sabem se apresentar como mapeamento."""

    def to_dict(self) -> Mapping[str, Any]: ...


def to_mapping(obj: Any) -> dict[str, Any] | None:
    """
    Obtém a visão de mapeamento de um objeto.

    Ordem de preferência: ``to_dict()``, campos de modelo pydantic, campos de
    dataclass e atributos públicos de ``__dict__``. Objetos só com
    ``__slots__`` devem implementar ``Mappable``.
    A conversão é rasa, preservando a identidade dos valores aninhados.

    Args:
        obj: Objeto qualquer

    Returns:
        Dict com os atributos públicos, ou None se o objeto deve ser tratado
        como escalar (classes, funções, módulos, enums, exceções, datetime...)
    """
    if (
        isinstance(obj, (type, Enum, BaseException))
        or inspect.isroutine(obj)
        or inspect.ismodule(obj)
    ):
        return None

    if isinstance(obj, Mappable):
        return dict(obj.to_dict())

    if isinstance(obj, BaseModel):
        return {name: getattr(obj, name) for name in type(obj).model_fields}

    if dataclasses.is_dataclass(obj):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}

    if hasattr(obj, "__dict__"):
        return {key: value for key, value in vars(obj).items() if not key.startswith("_")}

    return None


class _StructureSanitizer:
    """Travessia compartilhada por ``ArraySanitizer`` e ``ObjectSanitizer``."""

    def __init__(
        self,
        string_sanitizer: StringSanitizer,
        key_detector: SensitiveKeyDetector,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._string_sanitizer = string_sanitizer
        self._key_detector = key_detector
        self.max_depth = max_depth

    def _sanitize_container(
        self,
        container: Any,
        depth: int,
        mask_token: str,
        detector: CircularReferenceDetector,
        view: Mapping[Any, Any] | None = None,
    ) -> Any:
        if detector.is_circular_reference(container):
            return detector.handle_circular_reference()

        if depth >= self.max_depth:
            return depth_limit_sentinel()

        detector.mark_seen(container)
        try:
            if view is not None:
                return self._sanitize_items(view, depth, mask_token, detector)
            if isinstance(container, Mapping):
                return self._sanitize_items(container, depth, mask_token, detector)

            items = [
                self._sanitize_value(item, depth, mask_token, detector) for item in container
            ]
            return tuple(items) if isinstance(container, tuple) else items
        finally:
            detector.unmark_seen(container)

    def _sanitize_items(
        self,
        mapping: Mapping[Any, Any],
        depth: int,
        mask_token: str,
        detector: CircularReferenceDetector,
    ) -> dict[Any, Any]:
        sanitized: dict[Any, Any] = {}
        for key, value in mapping.items():
            if isinstance(key, str) and self._key_detector.is_sensitive_key(key):
                sanitized[key] = mask_token
            else:
                sanitized[key] = self._sanitize_value(value, depth, mask_token, detector)
        return sanitized

    def _sanitize_value(
        self,
        value: Any,
        depth: int,
        mask_token: str,
        detector: CircularReferenceDetector,
    ) -> Any:
        if isinstance(value, str):
            if value == mask_token:
                return original_value_marker(mask_token)
            return self._string_sanitizer.sanitize_string(value, mask_token)

        if isinstance(value, (Mapping, *SEQUENCE_TYPES)):
            return self._sanitize_container(value, depth + 1, mask_token, detector)

        view = to_mapping(value)
        if view is not None:
            return self._sanitize_container(value, depth + 1, mask_token, detector, view=view)

        return value


class ArraySanitizer(_StructureSanitizer):
    """Sanitiza dicts e sequências (list, tuple, set)."""

    def sanitize_array(
        self,
        container: Mapping[Any, Any] | list[Any] | tuple[Any, ...] | set[Any] | frozenset[Any],
        mask_token: str,
        detector: CircularReferenceDetector | None = None,
    ) -> Any:
        """
        Sanitiza um container recursivamente.

        Args:
            container: Dict ou sequência
            mask_token: Token de máscara já validado
            detector: Estado de recursão da chamada atual (novo se omitido)

        Returns:
            Cópia sanitizada: dicts viram dict, tuples continuam tuple,
            listas e sets viram list
        """
        return self._sanitize_container(
            container, 0, mask_token, detector or CircularReferenceDetector()
        )


class ObjectSanitizer(_StructureSanitizer):
    """Sanitiza objetos a partir da sua visão de mapeamento."""

    def sanitize_object(
        self,
        obj: Any,
        mask_token: str,
        detector: CircularReferenceDetector | None = None,
    ) -> dict[str, Any]:
        """
        Converte o objeto em dict (``to_mapping``) e sanitiza recursivamente.

        Args:
            obj: Objeto de domínio, modelo pydantic, dataclass...
            mask_token: Token de máscara já validado
            detector: Estado de recursão da chamada atual (novo se omitido)

        Returns:
            Dict sanitizado com os atributos públicos do objeto
        """
        view = to_mapping(obj) or {}
        return self._sanitize_container(
            obj, 0, mask_token, detector or CircularReferenceDetector(), view=view
        )
