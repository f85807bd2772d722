"""Event names padronizados em português brasileiro para logging estruturado."""

from __future__ import annotations


class LogEvents:
    """Constantes de event names para logs do logshield.

    Todos os event names são em português brasileiro para consistência.
    Use estas constantes em vez de strings literais para evitar typos.
    """

    # Aplicação
    LOGGING_CONFIGURADO = "logging_configurado"
    SANITIZACAO_ATIVADA = "sanitizacao_ativada"
    SANITIZACAO_DESATIVADA = "sanitizacao_desativada"

    # Configuração
    VARIAVEIS_AMBIENTE_DESCONHECIDAS = "variaveis_ambiente_desconhecidas"

    # Detectores
    DETECTOR_CHAVES_INICIALIZADO = "detector_chaves_inicializado"
    DETECTOR_PADROES_INICIALIZADO = "detector_padroes_inicializado"

    # Sanitizadores
    SANITIZADOR_FRASES_INICIALIZADO = "sanitizador_frases_inicializado"
    SANITIZADOR_PADROES_INICIALIZADO = "sanitizador_padroes_inicializado"
    SERVICO_SANITIZACAO_INICIALIZADO = "servico_sanitizacao_inicializado"
    MASK_TOKEN_SENSIVEL_SUBSTITUIDO = "mask_token_sensivel_substituido"


__all__ = ["LogEvents"]
