"""
Schema canônico — SchemaNode v1.

Árvore declarativa de restrições usada pela validação e pelo preenchimento
de defaults de cada plugin.

Esta implementação evita dependências externas (ex.: Pydantic) para manter
o core leve: schemas são dados autorados (Value) convertidos em
`SchemaNode` imutáveis por `authoring.parse_schema`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class SchemaType(str, Enum):
    """Tipos suportados por um SchemaNode."""
    ANY = "any"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    IP = "ip"
    LOG_LEVEL = "log_level"
    ENUM = "enum"
    LIST = "list"
    STATIC_MAP = "static_map"
    DYNAMIC_MAP = "dynamic_map"


NUMERIC_TYPES = frozenset({SchemaType.INTEGER, SchemaType.FLOAT})
SIZED_TYPES = frozenset({SchemaType.STRING, SchemaType.LIST, SchemaType.STATIC_MAP, SchemaType.DYNAMIC_MAP})
ENUMERABLE_TYPES = frozenset({SchemaType.ENUM, SchemaType.STRING, SchemaType.INTEGER, SchemaType.FLOAT})


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class SchemaNode:
    """Representação interna explícita de um nó de schema.

    - `item`: schema único aplicado a cada entrada de `list`/`dynamic_map`
    - `fields`: schemas nomeados dos filhos de `static_map`
    - `default`: `MISSING` quando não declarado
    """

    type: SchemaType
    required: bool = False
    default: Any = MISSING
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None
    enum: Optional[Tuple[Any, ...]] = None
    item: Optional["SchemaNode"] = None
    fields: Dict[str, "SchemaNode"] = field(default_factory=dict)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def to_dict(self) -> Dict[str, Any]:
        """Forma autorada equivalente (útil para depuração e round-trip)."""
        out: Dict[str, Any] = {"type": self.type.value}
        if self.required:
            out["required"] = True
        if self.minimum is not None or self.maximum is not None:
            out["range"] = {k: v for k, v in (("min", self.minimum), ("max", self.maximum)) if v is not None}
        if self.min_size is not None or self.max_size is not None:
            out["size"] = {k: v for k, v in (("min", self.min_size), ("max", self.max_size)) if v is not None}
        if self.enum is not None:
            out["enum"] = list(self.enum)
        if self.item is not None:
            out["items"] = self.item.to_dict()
        if self.fields:
            out["items"] = {name: node.to_dict() for name, node in self.fields.items()}
        if self.has_default:
            out["default"] = self.default
        return out
