"""Montagem dos componentes do pipeline de sanitização a partir da configuração."""

from __future__ import annotations

from ..config.settings import SanitizationConfig
from .key_detector import SensitiveKeyDetector
from .mask_token import MaskTokenValidator
from .pattern_detector import SensitivePatternDetector
from .pattern_sanitizer import SensitivePatternSanitizer
from .phrase_sanitizer import CredentialPhraseSanitizer
from .service import SanitizingService
from .string_sanitizer import StringSanitizer
from .structure_sanitizer import ArraySanitizer, ObjectSanitizer
from .unicode_normalizer import UnicodeNormalizer


def build_sanitizing_service(config: SanitizationConfig | None = None) -> SanitizingService:
    """
    Constrói o ``SanitizingService`` com todos os seus colaboradores.

    Args:
        config: Configuração de sanitização; usa os padrões se omitida

    Returns:
        Serviço pronto para uso, imutável e seguro entre threads

    Raises:
        InvalidSanitizationConfigError: Chaves, padrões, separadores ou token
            de máscara inválidos
    """
    config = config or SanitizationConfig()

    normalizer = UnicodeNormalizer()
    pattern_detector = SensitivePatternDetector(
        config.sensitive_patterns,
        include_defaults=config.include_default_patterns,
    )
    key_detector = SensitiveKeyDetector(
        config.sensitive_keys,
        include_defaults=config.include_default_keys,
        normalizer=normalizer,
    )
    token_validator = MaskTokenValidator(
        config.mask_token_forbidden_pattern,
        config.mask_token_max_length,
    )

    pattern_sanitizer = SensitivePatternSanitizer(pattern_detector, normalizer)
    phrase_sanitizer = CredentialPhraseSanitizer(key_detector, config.separators)
    string_sanitizer = StringSanitizer(pattern_sanitizer, phrase_sanitizer, normalizer)

    array_sanitizer = ArraySanitizer(string_sanitizer, key_detector, config.max_depth)
    object_sanitizer = ObjectSanitizer(string_sanitizer, key_detector, config.max_depth)

    return SanitizingService(
        array_sanitizer,
        object_sanitizer,
        string_sanitizer,
        pattern_detector,
        key_detector,
        token_validator,
        config.mask_token,
    )
