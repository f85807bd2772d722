"""Pipeline de sanitização de dados sensíveis para logs."""

from .circular import (
    CircularReferenceDetector,
    circular_reference_sentinel,
    depth_limit_sentinel,
)
from .kernel import build_sanitizing_service
from .key_detector import DEFAULT_SENSITIVE_KEYS, SensitiveKeyDetector
from .mask_token import DEFAULT_MASK_TOKEN, MaskTokenValidator, original_value_marker
from .pattern_detector import DEFAULT_SENSITIVE_PATTERNS, SensitivePatternDetector, clean_pattern
from .pattern_sanitizer import SensitivePatternSanitizer
from .phrase_sanitizer import DEFAULT_SEPARATORS, CredentialPhraseSanitizer
from .service import SanitizingService
from .string_sanitizer import StringSanitizer
from .structure_sanitizer import ArraySanitizer, Mappable, ObjectSanitizer, to_mapping
from .unicode_normalizer import UnicodeNormalizer

__all__ = [
    "ArraySanitizer",
    "CircularReferenceDetector",
    "CredentialPhraseSanitizer",
    "DEFAULT_MASK_TOKEN",
    "DEFAULT_SENSITIVE_KEYS",
    "DEFAULT_SENSITIVE_PATTERNS",
    "DEFAULT_SEPARATORS",
    "Mappable",
    "MaskTokenValidator",
    "ObjectSanitizer",
    "SanitizingService",
    "SensitiveKeyDetector",
    "SensitivePatternDetector",
    "SensitivePatternSanitizer",
    "StringSanitizer",
    "UnicodeNormalizer",
    "build_sanitizing_service",
    "circular_reference_sentinel",
    "clean_pattern",
    "depth_limit_sentinel",
    "original_value_marker",
    "to_mapping",
]
