"""
plugx-config — agregação de configuração de plugins.

Reúne a configuração de plugins nomeados a partir de várias fontes
(arquivos, variáveis de ambiente, endpoints HTTP, provedores
customizados), em formatos distintos, produzindo um documento
normalizado e validado por plugin.

Arquitetura em alto nível:
    - core.sources      → locators e registro de fontes
    - core.loaders      → Source → RawDocument
    - core.parsers      → RawDocument → Value
    - core.config       → deep-merge e hashing
    - core.schema       → SchemaNode e validação
    - core.engine       → Orchestrator

Exemplo:
    >>> orchestrator = Orchestrator()
    >>> orchestrator.add_source("env://?prefix=APP")
    >>> orchestrator.add_source("file:///etc/app/plugins?skippable=not_found")
    >>> configuration = orchestrator.run()
"""

from plugx_config.core.config.loader import load_config
from plugx_config.core.config.merge import deep_merge, merge_documents
from plugx_config.core.engine.orchestrator import Orchestrator
from plugx_config.core.engine.types import PipelineState, RunResult
from plugx_config.core.errors import ErrorPayload, error_to_payload
from plugx_config.core.exceptions import PlugxConfigError
from plugx_config.core.schema import SchemaNode, SchemaType, load_schema, parse_schema, validate
from plugx_config.core.sources.types import LoadErrorKind, RawDocument, Source

__all__ = [
    "Orchestrator",
    "PipelineState",
    "RunResult",
    "load_config",
    "deep_merge",
    "merge_documents",
    "SchemaNode",
    "SchemaType",
    "parse_schema",
    "load_schema",
    "validate",
    "LoadErrorKind",
    "RawDocument",
    "Source",
    "ErrorPayload",
    "error_to_payload",
    "PlugxConfigError",
]
