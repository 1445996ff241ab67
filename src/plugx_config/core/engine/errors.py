"""Erros do Orchestrator (plugx-config)."""

from __future__ import annotations

from plugx_config.core.exceptions import PlugxConfigError


class OrchestratorError(PlugxConfigError):
    """Erro base do Orchestrator."""


class WhitelistEnvironmentError(OrchestratorError):
    """Variável de ambiente da whitelist não definida."""

    hint = "Defina a variável (mesmo vazia) ou configure a whitelist explicitamente."

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"whitelist environment variable {key!r} is not set",
            details={"key": key},
        )
