# src/plugx_config/core/config/errors.py
"""
Exceções canônicas da camada de merge de configuração do plugx-config.

Este módulo define as exceções utilizadas durante a resolução da
configuração final de cada plugin via deep-merge.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de merge herdam de `MergeError`
    - `MergeError` herda de `PlugxConfigError`

Limites explícitos:
    - Não executa pipeline
    - Não realiza fallback ou recovery
"""

from __future__ import annotations

from typing import Any

from plugx_config.core.exceptions import PlugxConfigError
from plugx_config.core.value.path import Path, render_path


class MergeError(PlugxConfigError):
    """
    Exceção base para erros relacionados ao merge de configuração.

    Limites explícitos:
        - Não representa erro de carregamento ou parsing
        - Não representa erro de validação contra schema
    """


class ConfigTypeConflictError(MergeError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge estrito.

    Este erro só é produzido quando o merge é executado com `strict=True`.
    No modo padrão, o valor da fonte mais recente sempre vence.

    Exemplo de conflito:
        - existente: {"server": {"port": 8080}}
        - entrada:   {"server": "localhost:8080"}

    Decisões arquiteturais:
        - Apenas conflitos map vs. não-map são estruturais
        - Escalares de tipos diferentes continuam sendo sobrescritos

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """

    hint = "Alinhe o formato da chave entre as fontes ou desative o merge estrito."

    def __init__(self, *, path: Path, existing: Any, incoming: Any):
        self.path = tuple(path)
        self.existing_type = type(existing).__name__
        self.incoming_type = type(incoming).__name__
        super().__init__(
            f"type conflict at {render_path(self.path)}: "
            f"{self.existing_type} vs {self.incoming_type}",
            details={
                "path": list(self.path),
                "existing": self.existing_type,
                "incoming": self.incoming_type,
            },
        )
