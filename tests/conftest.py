"""
Pytest configuration and shared fixtures.
"""

import os

import pytest
import structlog
from faker import Faker

from logshield.config.settings import get_settings
from logshield.sanitizing import (
    SensitiveKeyDetector,
    SensitivePatternDetector,
    build_sanitizing_service,
)

# Initialize Faker for Brazilian Portuguese test data
fake = Faker("pt_BR")


@pytest.fixture(autouse=True)
def seed_faker():
    """Seed Faker for deterministic test data across runs."""
    Faker.seed(12345)
    yield


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration done by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_logshield_env(monkeypatch: pytest.MonkeyPatch):
    """Remove LOGSHIELD_ env vars and the cached settings around each test."""
    for key in list(os.environ):
        if key.upper().startswith("LOGSHIELD_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def faker_pt() -> Faker:
    """Faker instance with Brazilian Portuguese providers (cpf, email...)."""
    return fake


@pytest.fixture
def key_detector() -> SensitiveKeyDetector:
    """Key detector with the built-in sensitive keys."""
    return SensitiveKeyDetector()


@pytest.fixture
def pattern_detector() -> SensitivePatternDetector:
    """Pattern detector with the built-in CPF, card and e-mail patterns."""
    return SensitivePatternDetector()


@pytest.fixture
def service():
    """Sanitizing service built from the default configuration."""
    return build_sanitizing_service()
