# src/plugx_config/core/loaders/base.py
"""
Contrato canônico de um Loader do plugx-config.

Um Loader é a capacidade que transforma uma `Source` em um ou mais
`RawDocument` (bytes + dica de formato). Loaders são colaboradores
externos do pipeline: o core conhece apenas este protocolo.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, List, Optional, Protocol, Sequence, Union, runtime_checkable

from plugx_config.core.sources.types import RawDocument, Source

# sufixo de arquivo → formato canônico
SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".env": "env",
    ".qs": "qs",
}


@runtime_checkable
class Loader(Protocol):
    """
    Contrato canônico de um Loader.

    Atributos obrigatórios:
        - name: nome legível do loader (usado em logs e erros)
        - schemes: esquemas de locator atendidos

    Decisões arquiteturais:
        - Loaders não parseiam conteúdo (apenas indicam o formato)
        - Loaders não conhecem o orquestrador nem outras fontes
        - Falhas são sinalizadas com `LoadError(kind, ...)`; a decisão de
          pular ou abortar pertence exclusivamente ao orquestrador
        - O protocolo não impõe herança, apenas conformidade estrutural

    Invariantes:
        - `load` é chamado no máximo uma vez por fonte por execução
        - Documentos vinculados (`plugin`) usam nomes em minúsculas

    Limites explícitos:
        - Não define timeout global (cada loader remoto define o seu)
        - Não realiza retry
    """
    name: str
    schemes: Sequence[str]

    def load(self, source: Source, whitelist: Optional[Iterable[str]] = None) -> List[RawDocument]:
        """Carrega a fonte e retorna os documentos brutos produzidos."""
        ...


def format_from_suffix(path: Union[str, PurePath]) -> Optional[str]:
    return SUFFIX_FORMATS.get(PurePath(path).suffix.lower())


def plugin_from_stem(path: Union[str, PurePath]) -> Optional[str]:
    stem = PurePath(path).stem.strip().lower()
    return stem or None


def allowed(plugin: Optional[str], whitelist: Optional[Iterable[str]]) -> bool:
    """Documentos não vinculados sempre passam; o filtro fino ocorre na atribuição."""
    if plugin is None or whitelist is None:
        return True
    return plugin in set(whitelist)
