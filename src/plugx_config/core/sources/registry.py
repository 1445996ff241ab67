# src/plugx_config/core/sources/registry.py
"""
Registro estrutural de fontes de configuração.

Este módulo define o `SourceRegistry`, responsável por registrar fontes
(locators) e a tabela de loaders por esquema, validando a configuração
antes de qualquer execução do pipeline.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada locator seja sintaticamente válido
    - cada esquema possua um loader registrado
    - a ordem de registro das fontes seja preservada explicitamente

Responsabilidades do módulo:
    - Converter locators em `Source` imutáveis
    - Manter a tabela de capacidades `esquema → Loader`
    - Preservar a ordem de registro (prioridade de merge)

Decisões arquiteturais:
    - A validação ocorre no registro, antes do orquestrador
    - Esquemas desconhecidos são sempre fatais (nunca puláveis)
    - Loaders são registrados explicitamente (sem descoberta global implícita)
    - Fontes só crescem: entradas existentes nunca são alteradas

Invariantes:
    - `Source.index` corresponde exatamente à posição na lista
    - A lista de fontes reflete exatamente a ordem de registro
    - Nenhuma fonte inválida é aceita no registry

Limites explícitos:
    - Não carrega fontes
    - Não parseia conteúdo
    - Não executa pipeline

Este módulo existe para garantir integridade estrutural,
previsibilidade e segurança na definição das fontes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .errors import DuplicateSchemeError, UnknownSchemeError
from .locator import parse_locator
from .types import Source

if TYPE_CHECKING:
    from plugx_config.core.loaders.base import Loader


@dataclass
class SourceRegistry:
    """
    Registro canônico de fontes e loaders para validação pré-execução.

    Decisões arquiteturais:
        - Um loader dedicado pode ser associado a uma única fonte
          (`register(locator, loader=...)`), sem ocupar o esquema
        - A estrutura interna não é exposta diretamente

    Invariantes:
        - Cada esquema possui no máximo um loader na tabela
        - A lista de fontes reflete exatamente a ordem de registro
    """

    _loaders: Dict[str, Loader] = field(default_factory=dict, init=False, repr=False)
    _sources: List[Source] = field(default_factory=list, init=False, repr=False)
    _dedicated: Dict[int, Loader] = field(default_factory=dict, init=False, repr=False)

    def register_loader(self, loader: Loader, *, replace_existing: bool = False) -> None:
        schemes = [s.lower() for s in getattr(loader, "schemes", []) or []]
        if not schemes:
            raise ValueError("loader.schemes must be a non-empty sequence")

        if not replace_existing:
            for scheme in schemes:
                if scheme in self._loaders:
                    raise DuplicateSchemeError(scheme)

        for scheme in schemes:
            self._loaders[scheme] = loader

    def schemes(self) -> List[str]:
        return sorted(self._loaders)

    def register(self, locator: str, *, loader: Optional[Loader] = None) -> Source:
        source = parse_locator(locator, index=len(self._sources))

        if loader is None and source.scheme not in self._loaders:
            raise UnknownSchemeError(source.scheme, source.locator)

        if loader is not None:
            self._dedicated[source.index] = loader
        self._sources.append(source)
        return source

    def resolve_loader(self, source: Source) -> Loader:
        if source.index in self._dedicated and self._is_registered(source):
            return self._dedicated[source.index]
        try:
            return self._loaders[source.scheme]
        except KeyError:
            raise UnknownSchemeError(source.scheme, source.locator) from None

    def has(self, locator: str) -> bool:
        text = locator.strip()
        return any(s.locator == text for s in self._sources)

    def get(self, index: int) -> Source:
        return self._sources[index]

    def list(self) -> List[Source]:
        return list(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def _is_registered(self, source: Source) -> bool:
        return source.index < len(self._sources) and self._sources[source.index] == source

