"""Testes para a fachada SanitizingService."""

import copy
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from logshield.config.settings import SanitizationConfig
from logshield.sanitizing import build_sanitizing_service
from logshield.utils.errors import InvalidSanitizationConfigError
from logshield.utils.log_events import LogEvents

MASK = "[MASKED]"


@dataclass
class Credenciais:
    usuario: str
    token: str


class Pedido:
    def to_dict(self):
        return {"id": 1}


class Embrulho:
    def __init__(self):
        self.password = "hunter2"

    def to_dict(self):
        return {"id": 1}


class Ponto:
    def __init__(self, x, y):
        self.x = x
        self.y = y


@pytest.mark.unit
class TestSanitize:
    """Testes para SanitizingService.sanitize."""

    def test_string_com_frase_e_email(self, service):
        """Testa string com frase de credencial e e-mail."""
        result = service.sanitize("User password: abc123 and email test@example.com")

        assert result == "User password: [MASKED] and email [MASKED]"

    def test_frase_invertida(self, service):
        """Testa a forma invertida de frase de credencial."""
        assert service.sanitize("abc123 is the password") == "[MASKED] is the password"

    def test_dict(self, service):
        """Testa dict com chave sensível e valor comum."""
        assert service.sanitize({"password": "abc123", "user": "ana"}) == {
            "password": MASK,
            "user": "ana",
        }

    def test_lista(self, service):
        """Testa lista com e-mail."""
        assert service.sanitize(["ok", "ana@example.com"]) == ["ok", MASK]

    def test_objeto(self, service):
        """Testa dataclass com campo sensível."""
        assert service.sanitize(Credenciais("ana", "t-1")) == {"usuario": "ana", "token": MASK}

    @pytest.mark.parametrize("value", [42, 3.5, True, None, Decimal("1.5")])
    def test_escalares_inalterados(self, service, value):
        """Testa que escalares não-string voltam inalterados."""
        assert service.sanitize(value) == value

    def test_datetime_volta_o_mesmo_objeto(self, service):
        """Testa que objetos opacos não são convertidos."""
        moment = datetime(2024, 5, 1, 12, 0)

        assert service.sanitize(moment) is moment

    def test_string_igual_ao_token(self, service):
        """Testa que o próprio token vira o marcador de valor original."""
        assert service.sanitize(MASK) == "[MASKED_ORIGINAL_VALUE]"
        assert service.sanitize({"nota": MASK}) == {"nota": "[MASKED_ORIGINAL_VALUE]"}

    def test_token_com_espacos_nao_e_o_token(self, service):
        """Testa que só o token exato vira marcador, no topo e dentro de containers."""
        assert service.sanitize("  [MASKED] ") == MASK
        assert service.sanitize({"nota": "  [MASKED] "}) == {"nota": MASK}

    def test_classe_com_to_dict_dentro_de_dict(self, service):
        """Testa que uma classe com to_dict é tratada como escalar."""
        result = service.sanitize({"model": Pedido, "token": "abc"})

        assert result == {"model": Pedido, "token": MASK}
        assert service.sanitize(Pedido) is Pedido

    def test_resanitizar_texto_mascarado_e_estavel(self, service):
        """Testa que texto já mascarado não é mascarado de novo."""
        for value in ("contato ana@example.com", "password: abc123"):
            once = service.sanitize(value)
            assert service.sanitize(once) == once

    def test_resanitizar_token_gera_marcador(self, service):
        """Testa que um valor mascarado isolado vira o marcador, não lixo."""
        once = service.sanitize("ana@example.com")
        twice = service.sanitize(once)

        assert once == MASK
        assert twice == "[MASKED_ORIGINAL_VALUE]"
        assert service.sanitize(twice) == twice

    def test_resanitizar_dict_mascarado(self, service):
        """Testa re-sanitização de dict: chaves sensíveis continuam mascaradas."""
        once = service.sanitize({"token": "abc", "nested": {"email": "ana@example.com"}})

        assert service.sanitize(once) == {
            "token": MASK,
            "nested": {"email": "[MASKED_ORIGINAL_VALUE]"},
        }

    def test_nao_altera_entrada(self, service):
        """Testa que a entrada não é modificada."""
        data = {"password": "x", "nested": {"email": "ana@example.com"}, "lista": [1, "a"]}
        original = copy.deepcopy(data)

        service.sanitize(data)

        assert data == original

    def test_referencia_circular(self, service):
        """Testa que ciclos viram sentinela sem lançar exceção."""
        data = {"nome": "ana"}
        data["self"] = data

        assert service.sanitize(data) == {
            "nome": "ana",
            "self": {"[CIRCULAR_REFERENCE_DETECTED]": True},
        }

    def test_chamadas_independentes(self, service):
        """Testa que o estado de recursão não vaza entre chamadas."""
        shared = {"a": 1}

        first = service.sanitize({"x": shared})
        second = service.sanitize({"y": shared})

        assert first == {"x": {"a": 1}}
        assert second == {"y": {"a": 1}}


@pytest.mark.unit
class TestMaskTokenOverride:
    """Testes para o token de máscara por chamada."""

    def test_token_por_chamada(self, service):
        """Testa que o token da chamada é validado e usado."""
        assert service.sanitize({"token": "x"}, "redacted") == {"token": "[REDACTED]"}
        assert service.mask_token == MASK

    def test_token_por_chamada_invalido(self, service):
        """Testa que um token inválido na chamada é rejeitado."""
        with pytest.raises(InvalidSanitizationConfigError):
            service.sanitize("texto", "<script>")

    def test_marcador_usa_token_da_chamada(self, service):
        """Testa o marcador com token customizado."""
        assert service.sanitize({"nota": "[OCULTO]"}, "oculto") == {
            "nota": "[OCULTO_ORIGINAL_VALUE]"
        }


@pytest.mark.unit
class TestDefaultMaskToken:
    """Testes para o token padrão do serviço."""

    def test_token_customizado(self):
        """Testa que um token válido é normalizado."""
        service = build_sanitizing_service(SanitizationConfig(mask_token="redacted"))

        assert service.mask_token == "[REDACTED]"
        assert service.sanitize({"senha": "x"}) == {"senha": "[REDACTED]"}

    @pytest.mark.parametrize("token", ["password", "[TOKEN]", "ana@example.com"])
    def test_token_sensivel_usa_padrao(self, token):
        """Testa que um token que seria ele próprio sensível é trocado."""
        with capture_logs() as logs:
            service = build_sanitizing_service(SanitizationConfig(mask_token=token))

        assert service.mask_token == MASK
        warnings = [
            entry
            for entry in logs
            if entry["event"] == LogEvents.MASK_TOKEN_SENSIVEL_SUBSTITUIDO
        ]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert token not in str(warnings[0])

    def test_token_invalido_e_erro(self):
        """Testa que um token padrão inválido impede a construção."""
        with pytest.raises(InvalidSanitizationConfigError):
            build_sanitizing_service(SanitizationConfig(mask_token="base64"))


@pytest.mark.unit
class TestIsSensitive:
    """Testes para SanitizingService.is_sensitive."""

    @pytest.mark.parametrize(
        "value",
        [
            "password",
            "ana@example.com",
            "123.456.789-09",
            {"token": "x"},
            {"dados": {"email": "ana@example.com"}},
            ["ok", "ana@example.com"],
            ("a", {"senha": 1}),
            Credenciais("ana", "t"),
            [Ponto(1, "ana@example.com")],
        ],
    )
    def test_valores_sensiveis(self, service, value):
        """Testa valores que contêm dado sensível."""
        assert service.is_sensitive(value) is True

    @pytest.mark.parametrize(
        "value",
        ["hello", "", {"nome": "ana"}, [1, 2, "ok"], Ponto(1, 2), 42, None, 3.5],
    )
    def test_valores_nao_sensiveis(self, service, value):
        """Testa valores sem dado sensível."""
        assert service.is_sensitive(value) is False

    def test_ciclo_sem_dado_sensivel(self, service):
        """Testa que ciclos terminam e não são sensíveis por si só."""
        data = {"nome": "ana"}
        data["self"] = data
        lista = [1]
        lista.append(lista)

        assert service.is_sensitive(data) is False
        assert service.is_sensitive(lista) is False

    def test_nao_altera_entrada(self, service):
        """Testa que a verificação não modifica o valor."""
        data = {"password": "abc"}

        service.is_sensitive(data)

        assert data == {"password": "abc"}

    def test_chave_sensivel_aninhada(self, service):
        """Testa chave sensível em dict aninhado versus dict comum."""
        assert service.is_sensitive({"user": {"password": "x"}}) is True
        assert service.is_sensitive({"user": {"name": "x"}}) is False

    def test_nome_de_atributo_sensivel_com_to_dict(self, service):
        """Testa que atributos sensíveis contam mesmo quando to_dict os omite."""
        assert service.is_sensitive(Embrulho()) is True
        assert service.is_sensitive(Pedido()) is False
