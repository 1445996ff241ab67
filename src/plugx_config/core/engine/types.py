"""
Tipos canônicos do Orchestrator do plugx-config.

Componentes principais:
    - PipelineState → enum de estados da máquina de estados
    - RunResult     → registro imutável de uma execução

Invariantes:
    - Enums possuem valores textuais canônicos
    - RunResult é imutável e seguro contra mutação acidental
    - Tipos não dependem de loaders, parsers ou schema
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from plugx_config.core.errors import ErrorPayload


class PipelineState(str, Enum):
    """
    Estados do Orchestrator.

    Transições:
        BUILT → LOADING → PARSING → MERGING → (VALIDATING) → READY | FAILED

    Um novo `run()` a partir de READY ou FAILED recomeça em LOADING.
    LOADING e PARSING alternam por fonte.
    """
    BUILT = "built"
    LOADING = "loading"
    PARSING = "parsing"
    MERGING = "merging"
    VALIDATING = "validating"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class RunResult:
    """
    Resultado imutável de uma execução do pipeline.

    Campos:
        - run_id: identificador da execução
        - state: estado final (READY ou FAILED)
        - configuration: MergedConfiguration publicada (vazia em falha)
        - hashes: SHA-256 canônico por plugin
        - skipped: origens cujas falhas de carregamento foram puladas
        - events: logs estruturados da execução
        - error: payload do primeiro erro fatal, se houver
    """
    run_id: str
    state: PipelineState
    configuration: Dict[str, Any] = field(default_factory=dict)
    hashes: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[ErrorPayload] = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.READY
