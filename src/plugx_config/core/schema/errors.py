"""Erros canônicos do domínio de Schema (plugx-config).

Erros de validação carregam sempre o caminho completo a partir da raiz do
plugin (`[plugin][section][field]`) e uma causa legível que distingue:
tipo errado, fora do intervalo, fora do conjunto permitido, escalar
malformado e campo obrigatório ausente.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from plugx_config.core.exceptions import PlugxConfigError
from plugx_config.core.value.path import Path, render_path


class SchemaError(PlugxConfigError):
    """Erro base do domínio de schema."""


class SchemaDefinitionError(SchemaError):
    """Schema autorado não é estruturalmente válido."""

    hint = "Chaves reconhecidas: type, items/item, range{min,max}, size{min,max}, enum, default, required."

    def __init__(self, reason: str, *, path: Path = ()):
        self.path = tuple(path)
        self.reason = reason
        super().__init__(
            f"invalid schema at {render_path(self.path)}: {reason}",
            details={"path": list(self.path), "reason": reason},
        )


class ValidationError(SchemaError):
    """Valor não satisfaz o schema. Sempre fatal para a chamada de validação."""

    code = "VALIDATION_ERROR"

    def __init__(self, path: Path, cause: str, **details: Any):
        self.path = tuple(path)
        self.cause = cause
        super().__init__(
            f"{render_path(self.path)} {cause}",
            details={"path": list(self.path), "cause": cause, **details},
        )

    @property
    def rendered_path(self) -> str:
        return render_path(self.path)


class TypeMismatchError(ValidationError):
    code = "TYPE_MISMATCH"

    def __init__(self, path: Path, *, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            path,
            f"has wrong type: expected {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )


class MissingFieldError(ValidationError):
    code = "MISSING_FIELD"

    def __init__(self, path: Path, *, field: str):
        self.field = field
        super().__init__(path, "is required but missing", field=field)


class RangeViolationError(ValidationError):
    code = "RANGE_VIOLATION"

    def __init__(
        self,
        path: Path,
        *,
        value: Any,
        minimum: Optional[float],
        maximum: Optional[float],
        measure: str = "value",
    ):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        low = "-inf" if minimum is None else minimum
        high = "+inf" if maximum is None else maximum
        super().__init__(
            path,
            f"is out of range: {measure} {value!r} not in [{low}, {high}]",
            value=value,
            minimum=minimum,
            maximum=maximum,
            measure=measure,
        )


class EnumViolationError(ValidationError):
    code = "ENUM_VIOLATION"

    def __init__(self, path: Path, *, value: Any, allowed: Sequence[Any]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            path,
            f"is not in allowed set: {value!r} not in {self.allowed!r}",
            value=value,
            allowed=self.allowed,
        )


class DomainParseError(ValidationError):
    code = "DOMAIN_PARSE_FAILURE"

    def __init__(self, path: Path, *, value: Any, domain: str, reason: str = ""):
        self.value = value
        self.domain = domain
        suffix = f" ({reason})" if reason else ""
        super().__init__(
            path,
            f"is a malformed {domain}: {value!r}{suffix}",
            value=value,
            domain=domain,
        )
