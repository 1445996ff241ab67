"""Atribuição de documentos parseados a plugins.

- Documento vinculado (`RawDocument.plugin`): o Value inteiro pertence ao plugin.
- Documento livre: a raiz deve ser map; cada chave de topo é um plugin.

Todo documento de plugin precisa ter map na raiz; chave de topo vazia
(após `strip`) não nomeia plugin e é rejeitada.
"""

from __future__ import annotations

from typing import Collection, List, Optional

from plugx_config.core.loaders.base import allowed
from plugx_config.core.parsers.errors import InvalidDocumentRootError, InvalidPluginNameError
from plugx_config.core.sources.types import PluginDocument, RawDocument
from plugx_config.core.value.model import Value, is_map, type_name


def attribute(
    raw: RawDocument,
    value: Value,
    *,
    whitelist: Optional[Collection[str]] = None,
    source_index: int = 0,
) -> List[PluginDocument]:
    if raw.plugin is not None:
        entries = [(raw.plugin, value)]
    else:
        if not is_map(value):
            raise InvalidDocumentRootError(plugin="*", origin=raw.origin, actual=type_name(value))
        entries = []
        for key, doc in value.items():
            plugin = str(key).strip().lower()
            if not plugin:
                raise InvalidPluginNameError(key=str(key), origin=raw.origin)
            entries.append((plugin, doc))

    documents: List[PluginDocument] = []
    for plugin, doc in entries:
        if not allowed(plugin, whitelist):
            continue
        if not is_map(doc):
            raise InvalidDocumentRootError(plugin=plugin, origin=raw.origin, actual=type_name(doc))
        documents.append(PluginDocument(plugin=plugin, value=doc, origin=raw.origin, source_index=source_index))
    return documents
