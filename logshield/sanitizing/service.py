"""
Fachada de sanitização: ponto de entrada único do pipeline.

Roteia qualquer valor para o sanitizador certo conforme o seu formato em
tempo de execução e responde se um valor é sensível.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from ..utils.log_events import LogEvents
from .circular import CircularReferenceDetector
from .key_detector import SensitiveKeyDetector
from .mask_token import DEFAULT_MASK_TOKEN, MaskTokenValidator, original_value_marker
from .pattern_detector import SensitivePatternDetector
from .string_sanitizer import StringSanitizer
from .structure_sanitizer import SEQUENCE_TYPES, ArraySanitizer, ObjectSanitizer, to_mapping

log = structlog.get_logger(__name__)


class SanitizingService:
    """
    Sanitiza valores arbitrários antes de irem para o log.

    A instância é imutável depois de construída e pode ser compartilhada
    entre threads: o estado de recursão é criado a cada chamada de
    ``sanitize``/``is_sensitive``.

    Example:
        >>> service = build_sanitizing_service()
        >>> service.sanitize({"password": "abc123", "user": "ana"})
        {'password': '[MASKED]', 'user': 'ana'}
    """

    def __init__(
        self,
        array_sanitizer: ArraySanitizer,
        object_sanitizer: ObjectSanitizer,
        string_sanitizer: StringSanitizer,
        pattern_detector: SensitivePatternDetector,
        key_detector: SensitiveKeyDetector,
        mask_token_validator: MaskTokenValidator,
        mask_token: str | None = None,
    ) -> None:
        """
        Args:
            array_sanitizer: Sanitizador de dicts e sequências
            object_sanitizer: Sanitizador de objetos
            string_sanitizer: Sanitizador de strings
            pattern_detector: Detector de padrões sensíveis
            key_detector: Detector de chaves sensíveis
            mask_token_validator: Validador do token de máscara
            mask_token: Token padrão; se ele próprio for sensível, é trocado
                por ``[MASKED]``

        Raises:
            InvalidSanitizationConfigError: Se o token não passar na validação
        """
        self._array_sanitizer = array_sanitizer
        self._object_sanitizer = object_sanitizer
        self._string_sanitizer = string_sanitizer
        self._pattern_detector = pattern_detector
        self._key_detector = key_detector
        self._mask_token_validator = mask_token_validator
        self._mask_token = self._resolve_default_mask_token(mask_token)

        log.debug(LogEvents.SERVICO_SANITIZACAO_INICIALIZADO, mask_token=self._mask_token)

    @property
    def mask_token(self) -> str:
        """Token de máscara padrão desta instância, já normalizado."""
        return self._mask_token

    def _resolve_default_mask_token(self, mask_token: str | None) -> str:
        if mask_token is None:
            return DEFAULT_MASK_TOKEN

        if isinstance(mask_token, str):
            unwrapped = mask_token.strip().replace("[", "").replace("]", "")
            if self.is_sensitive(mask_token) or self.is_sensitive(unwrapped):
                log.warning(
                    LogEvents.MASK_TOKEN_SENSIVEL_SUBSTITUIDO,
                    fallback=DEFAULT_MASK_TOKEN,
                )
                return DEFAULT_MASK_TOKEN

        return self._mask_token_validator.validate(mask_token)

    def sanitize(self, value: Any, mask_token: str | None = None) -> Any:
        """
        Sanitiza qualquer valor.

        Args:
            value: String, dict, sequência, objeto ou escalar
            mask_token: Token para esta chamada (validado); se omitido, usa o
                token padrão da instância

        Returns:
            Valor sanitizado. Escalares não-string voltam inalterados.

        Raises:
            InvalidSanitizationConfigError: Se ``mask_token`` for inválido
        """
        token = (
            self._mask_token_validator.validate(mask_token)
            if mask_token is not None
            else self._mask_token
        )

        if isinstance(value, str):
            if value == token:
                return original_value_marker(token)
            return self._string_sanitizer.sanitize_string(value, token)

        detector = CircularReferenceDetector()

        if isinstance(value, (Mapping, *SEQUENCE_TYPES)):
            return self._array_sanitizer.sanitize_array(value, token, detector)

        if to_mapping(value) is not None:
            return self._object_sanitizer.sanitize_object(value, token, detector)

        return value

    def is_sensitive(self, value: Any) -> bool:
        """
        Verifica se um valor contém dado sensível, sem alterá-lo.

        - string: casa com algum padrão ou é, inteira, uma chave sensível;
        - dict/sequência: alguma chave é sensível ou algum item é sensível;
        - objeto: algum nome de atributo é sensível ou a sua visão de
          mapeamento é sensível;
        - demais escalares: nunca.
        """
        return self._is_sensitive(value, CircularReferenceDetector())

    def _is_sensitive(self, value: Any, detector: CircularReferenceDetector) -> bool:
        if isinstance(value, str):
            return self._pattern_detector.matches_sensitive_patterns(
                value
            ) or self._key_detector.is_sensitive_key(value)

        if isinstance(value, Mapping):
            return self._is_sensitive_mapping(value, value, detector)

        if isinstance(value, SEQUENCE_TYPES):
            if detector.is_circular_reference(value):
                return False
            detector.mark_seen(value)
            try:
                return any(self._is_sensitive(item, detector) for item in value)
            finally:
                detector.unmark_seen(value)

        view = to_mapping(value)
        if view is None:
            return False

        if hasattr(value, "__dict__") and any(
            self._key_detector.is_sensitive_key(name)
            for name in vars(value)
            if not name.startswith("_")
        ):
            return True

        return self._is_sensitive_mapping(value, view, detector)

    def _is_sensitive_mapping(
        self,
        container: Any,
        mapping: Mapping[Any, Any],
        detector: CircularReferenceDetector,
    ) -> bool:
        if detector.is_circular_reference(container):
            return False

        if any(isinstance(key, str) and self._key_detector.is_sensitive_key(key) for key in mapping):
            return True

        detector.mark_seen(container)
        try:
            return any(self._is_sensitive(item, detector) for item in mapping.values())
        finally:
            detector.unmark_seen(container)
