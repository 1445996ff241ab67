# src/plugx_config/core/sources/types.py
"""
Tipos canônicos das fontes de configuração do plugx-config.

Este módulo define as estruturas que trafegam entre o registro de fontes,
os loaders, os parsers e o orquestrador.

Componentes principais:
    - LoadErrorKind  → enum de categorias de falha de carregamento
    - Source         → fonte configurada (locator + opções + prioridade)
    - RawDocument    → bytes carregados + dica de formato
    - PluginDocument → Value atribuído a um plugin por uma fonte

Princípios fundamentais:
    - Tipos são imutáveis após criados
    - Nenhuma lógica de I/O vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - `Source.index` reflete a ordem de registro (prioridade de merge)

Limites explícitos:
    - Não carrega fontes
    - Não interpreta conteúdo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class LoadErrorKind(str, Enum):
    """
    Categorias de falha de carregamento de uma fonte.

    Estados definidos:
        - NOT_FOUND: a fonte não existe
        - PERMISSION_DENIED: a fonte existe mas não pode ser lida
        - UNREACHABLE: a fonte remota não respondeu (conexão/timeout)
        - MALFORMED: a fonte existe mas não tem o formato esperado pelo loader
        - OTHER: qualquer outra falha

    Decisões arquiteturais:
        - Cada fonte declara quais categorias são "puláveis"
        - Erros de parsing nunca pertencem a este enum (nunca são puláveis)
    """
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"
    OTHER = "other"

    @classmethod
    def parse(cls, text: str) -> "LoadErrorKind":
        """Aceita `not-found`, `not_found` ou `NOT_FOUND`."""
        normalized = text.strip().lower().replace("-", "_")
        return cls(normalized)


ALL_LOAD_ERROR_KINDS: FrozenSet[LoadErrorKind] = frozenset(LoadErrorKind)


@dataclass(frozen=True)
class Source:
    """
    Fonte de configuração registrada.

    Campos:
        - locator: string original informada pelo chamador
        - scheme: esquema do locator (chave de dispatch do loader)
        - address: endereço específico do esquema (sem opções universais)
        - options: opções específicas do loader (query string)
        - index: posição de registro (maior índice = maior prioridade)
        - skippable: categorias de falha tratadas como contribuição vazia
        - format: override explícito de formato (opcional)
        - plugin: vínculo fixo com um plugin (opcional)

    Invariantes:
        - Uma instância nunca é alterada após criada
    """
    locator: str
    scheme: str
    address: str
    options: Dict[str, str] = field(default_factory=dict)
    index: int = 0
    skippable: FrozenSet[LoadErrorKind] = frozenset()
    format: Optional[str] = None
    plugin: Optional[str] = None

    def is_skippable(self, kind: LoadErrorKind) -> bool:
        return kind in self.skippable

    def option(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Busca uma opção aceitando `key-name` e `key_name`."""
        for candidate in (name, name.replace("_", "-"), name.replace("-", "_")):
            if candidate in self.options:
                return self.options[candidate]
        return default

    def __str__(self) -> str:
        return self.locator


@dataclass(frozen=True)
class RawDocument:
    """
    Documento bruto produzido por um loader.

    Campos:
        - contents: bytes carregados
        - origin: identificação legível da origem (ex.: caminho do arquivo)
        - format: dica de formato (override > sufixo > padrão do loader)
        - plugin: plugin vinculado (None = chaves de topo são plugins)
        - options: opções repassadas ao parser (ex.: separador de chaves)
    """
    contents: bytes
    origin: str
    format: Optional[str] = None
    plugin: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PluginDocument:
    """Value (raiz map) atribuído a um plugin por uma fonte."""
    plugin: str
    value: Dict[str, Any]
    origin: str
    source_index: int = 0
