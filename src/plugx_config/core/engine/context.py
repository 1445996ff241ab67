# src/plugx_config/core/engine/context.py
"""
Contexto de execução de uma run do pipeline de configuração.

Este módulo define o `RunContext`, a estrutura canônica que acompanha uma
única execução do Orchestrator (load → parse → attribute → merge →
validate), isolando o estado intermediário daquela run.

Durante a run, o RunContext é o único lugar onde se:
    - acumulam as contribuições de cada plugin, fonte a fonte
    - registram os eventos estruturados da execução
    - coletam warnings não fatais (ex.: fontes puladas)

Princípios fundamentais:
    - Um contexto novo por chamada de run()
    - Nenhum estado de uma run anterior é reutilizado
    - Dataclass simples, inspecionável em testes

Invariantes:
    - Logs sempre incluem `run_id` e `stage`
    - Warnings são agrupados por origem (locator da fonte)
    - Contribuições são mantidas na ordem de registro das fontes

Limites explícitos:
    - Não executa loaders nem parsers
    - Não publica a configuração final
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from plugx_config.core.sources.types import PluginDocument

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class RunContext:
    """
    Contexto isolado de uma execução do pipeline.

    Consolida:
        - identidade da execução (run_id, created_at)
        - contribuições por plugin, em ordem de fonte
        - logs estruturados (`events`), espelhados no `logging`
        - warnings por fonte
    """
    run_id: str
    created_at: datetime
    meta: Dict[str, Any] = field(default_factory=dict)

    contributions: Dict[str, List[PluginDocument]] = field(default_factory=dict, init=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, **meta: Any) -> "RunContext":
        return cls(run_id=uuid4().hex, created_at=datetime.now(timezone.utc), meta=dict(meta))

    # -----------------------------
    # Contribuições
    # -----------------------------
    def contribute(self, document: PluginDocument) -> None:
        self.contributions.setdefault(document.plugin, []).append(document)

    def plugins(self) -> List[str]:
        """Plugins na ordem da primeira contribuição."""
        return list(self.contributions)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        logger.log(_LEVELS.get(level, logging.INFO), "[%s] %s: %s", self.run_id[:8], stage, message)

    def add_warning(self, *, origin: str, message: str) -> None:
        if origin not in self.warnings:
            self.warnings[origin] = []
        self.warnings[origin].append(message)
