"""
plugx-config — Canonical Error Structures (v1)

Este módulo define o payload canônico de erro do plugx-config.
Falhas de uma execução do pipeline são registradas no `RunResult`
como dados, além de propagadas como exceção, devendo ser:

- explícitas
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from plugx_config.core.exceptions import PlugxConfigError


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do plugx-config.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Fontes (configuração do pipeline)
INVALID_LOCATOR = "INVALID_LOCATOR"
UNKNOWN_SCHEME = "UNKNOWN_SCHEME"

# Carregamento / parsing
LOAD_ERROR = "LOAD_ERROR"
PARSE_ERROR = "PARSE_ERROR"
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
INVALID_DOCUMENT_ROOT = "INVALID_DOCUMENT_ROOT"
INVALID_PLUGIN_NAME = "INVALID_PLUGIN_NAME"

# Merge
MERGE_TYPE_CONFLICT = "MERGE_TYPE_CONFLICT"

# Schema / validação
SCHEMA_DEFINITION_ERROR = "SCHEMA_DEFINITION_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"

# Orchestrator
ORCHESTRATOR_EXECUTION_ERROR = "ORCHESTRATOR_EXECUTION_ERROR"


_CODES_BY_CLASS = {
    "InvalidLocatorError": INVALID_LOCATOR,
    "UnknownSchemeError": UNKNOWN_SCHEME,
    "LoadError": LOAD_ERROR,
    "ParseError": PARSE_ERROR,
    "UnsupportedFormatError": UNSUPPORTED_FORMAT,
    "InvalidDocumentRootError": INVALID_DOCUMENT_ROOT,
    "InvalidPluginNameError": INVALID_PLUGIN_NAME,
    "ConfigTypeConflictError": MERGE_TYPE_CONFLICT,
    "SchemaDefinitionError": SCHEMA_DEFINITION_ERROR,
}


def error_code(exc: BaseException) -> str:
    """Código estável para uma exceção.

    Erros de validação expõem seu próprio código (`TYPE_MISMATCH`, ...);
    demais exceções do plugx-config são mapeadas pela classe mais específica
    presente no catálogo.
    """
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code:
        return code
    for cls in type(exc).__mro__:
        if cls.__name__ in _CODES_BY_CLASS:
            return _CODES_BY_CLASS[cls.__name__]
    if isinstance(exc, PlugxConfigError):
        return type(exc).__name__
    return ORCHESTRATOR_EXECUTION_ERROR


def error_to_payload(exc: BaseException) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - PlugxConfigError: já vem com message/details/hint.
    - Outras exceções: encapsular como ORCHESTRATOR_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, PlugxConfigError):
        return ErrorPayload(
            type=error_code(exc),
            message=str(exc) or "Erro de execução",
            details=dict(exc.details),
            hint=exc.hint,
        )

    return ErrorPayload(
        type=ORCHESTRATOR_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log técnico e os loaders/parsers customizados registrados",
    )
