"""Testes para a sanitização de strings (frases + padrões)."""

import pytest

from logshield.sanitizing import (
    CredentialPhraseSanitizer,
    SensitivePatternSanitizer,
    StringSanitizer,
    UnicodeNormalizer,
)

MASK = "[MASKED]"


@pytest.fixture
def string_sanitizer(key_detector, pattern_detector):
    normalizer = UnicodeNormalizer()
    return StringSanitizer(
        SensitivePatternSanitizer(pattern_detector, normalizer),
        CredentialPhraseSanitizer(key_detector),
        normalizer,
    )


@pytest.mark.unit
class TestStringSanitizer:
    """Testes para StringSanitizer.sanitize_string."""

    def test_frase_e_padrao_na_mesma_string(self, string_sanitizer):
        """Testa que frases e padrões são mascarados juntos."""
        text = "User password: abc123 and email test@example.com"

        assert string_sanitizer.sanitize_string(text, MASK) == (
            "User password: [MASKED] and email [MASKED]"
        )

    def test_normaliza_antes_de_mascarar(self, string_sanitizer):
        """Testa que texto de largura total é normalizado e mascarado."""
        assert string_sanitizer.sanitize_string("  ＰＡＳＳＷＯＲＤ: abc  ", MASK) == (
            "PASSWORD: [MASKED]"
        )

    def test_texto_comum_inalterado(self, string_sanitizer):
        """Testa que textos sem dado sensível não mudam."""
        text = "Esta é uma mensagem normal."

        assert string_sanitizer.sanitize_string(text, MASK) == text

    def test_cpf_gerado(self, string_sanitizer, faker_pt):
        """Testa mascaramento de CPF em texto livre."""
        cpf = faker_pt.cpf()

        result = string_sanitizer.sanitize_string(f"CPF do cliente {cpf}", MASK)

        assert cpf not in result
        assert result == "CPF do cliente [MASKED]"

    def test_email_gerado(self, string_sanitizer, faker_pt):
        """Testa mascaramento de e-mail em texto livre."""
        email = faker_pt.email()

        result = string_sanitizer.sanitize_string(f"enviado para {email} hoje", MASK)

        assert result == "enviado para [MASKED] hoje"

    def test_token_customizado(self, string_sanitizer):
        """Testa que o token recebido é usado nas duas etapas."""
        result = string_sanitizer.sanitize_string("senha: x1 contato ana@example.com", "[OCULTO]")

        assert result == "senha: [OCULTO] contato [OCULTO]"
