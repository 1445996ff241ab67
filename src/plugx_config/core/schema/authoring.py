"""
Conversão de schemas autorados (Value) em `SchemaNode`.

Schemas são documentos do próprio modelo de valores, portanto qualquer
parser registrado pode carregar um arquivo de schema.

Chaves reconhecidas:
    type, items | item, range{min,max}, size{min,max}, enum, default,
    required, description

Em `static_map`, cada entrada de `items` é um nó ou um envelope
`{schema: nó, default?, required?}`. A forma curta `"integer"` é aceita
para nós sem restrições.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from plugx_config.core.value.model import ValueKind, kind_of, to_value
from plugx_config.core.value.path import Path

from .errors import SchemaDefinitionError, ValidationError
from .model import (
    ENUMERABLE_TYPES,
    MISSING,
    NUMERIC_TYPES,
    SIZED_TYPES,
    SchemaNode,
    SchemaType,
)
from .validate import validate

_KNOWN_KEYS = {"type", "items", "item", "range", "size", "enum", "default", "required", "description"}
_ENVELOPE_KEYS = {"schema", "default", "required", "description"}

_TYPE_ALIASES = {
    "bool": SchemaType.BOOLEAN,
    "int": SchemaType.INTEGER,
    "number": SchemaType.FLOAT,
    "str": SchemaType.STRING,
    "ip_address": SchemaType.IP,
    "loglevel": SchemaType.LOG_LEVEL,
    "map": SchemaType.DYNAMIC_MAP,
}


def _expect(cond: bool, msg: str, path: Path) -> None:
    if not cond:
        raise SchemaDefinitionError(msg, path=path)


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _parse_type(raw: Any, path: Path) -> SchemaType:
    _expect(isinstance(raw, str) and bool(raw.strip()), "type is required", path)
    name = raw.strip().lower().replace("-", "_")
    if name in _TYPE_ALIASES:
        return _TYPE_ALIASES[name]
    try:
        return SchemaType(name)
    except ValueError:
        allowed = sorted(t.value for t in SchemaType)
        raise SchemaDefinitionError(f"unknown type {raw!r}, expected one of {allowed}", path=path) from None


def _parse_bounds(raw: Any, key: str, path: Path, *, integral: bool) -> Tuple[Optional[Any], Optional[Any]]:
    _expect(isinstance(raw, dict), f"{key} must be a mapping with min/max", path)
    unknown = set(raw) - {"min", "max"}
    _expect(not unknown, f"{key} has unknown keys: {sorted(unknown)}", path)
    low, high = raw.get("min"), raw.get("max")
    for bound in (low, high):
        if bound is None:
            continue
        _expect(_is_number(bound), f"{key} bounds must be numbers", path)
        if integral:
            _expect(isinstance(bound, int) and bound >= 0, f"{key} bounds must be non-negative integers", path)
    if low is not None and high is not None:
        _expect(low <= high, f"{key}.min must be <= {key}.max", path)
    return low, high


def parse_schema(data: Any, *, path: Path = ()) -> SchemaNode:
    """Valida e materializa um SchemaNode a partir de sua forma autorada.

    Raises:
        SchemaDefinitionError: se o schema não for estruturalmente válido.
    """
    if isinstance(data, SchemaNode):
        return data
    if isinstance(data, str):
        data = {"type": data}
    _expect(isinstance(data, dict), "schema node must be a mapping or a type name", path)

    unknown = set(data) - _KNOWN_KEYS
    _expect(not unknown, f"unknown schema keys: {sorted(unknown)}", path)

    stype = _parse_type(data.get("type"), path)

    required = data.get("required", False)
    _expect(isinstance(required, bool), "required must be boolean", path)

    minimum = maximum = None
    if "range" in data:
        _expect(stype in NUMERIC_TYPES, f"range is not supported for type {stype.value}", path)
        minimum, maximum = _parse_bounds(data["range"], "range", path, integral=False)

    min_size = max_size = None
    if "size" in data:
        _expect(stype in SIZED_TYPES, f"size is not supported for type {stype.value}", path)
        min_size, max_size = _parse_bounds(data["size"], "size", path, integral=True)

    enum = None
    if "enum" in data:
        _expect(stype in ENUMERABLE_TYPES, f"enum is not supported for type {stype.value}", path)
        enum = _parse_enum(data["enum"], stype, path)
    _expect(stype is not SchemaType.ENUM or enum is not None, "enum type requires an enum list", path)

    children = data.get("items", data.get("item"))
    _expect(not ("items" in data and "item" in data), "use either items or item, not both", path)

    item = None
    fields: Dict[str, SchemaNode] = {}
    if stype in (SchemaType.LIST, SchemaType.DYNAMIC_MAP):
        if children is not None:
            item = parse_schema(children, path=path + ("items",))
    elif stype is SchemaType.STATIC_MAP:
        _expect(children is None or isinstance(children, dict), "static_map items must be a mapping", path)
        for name, entry in (children or {}).items():
            fields[name] = _parse_field(entry, path + ("items", name))
    else:
        _expect(children is None, f"items is not supported for type {stype.value}", path)

    node = SchemaNode(
        type=stype,
        required=required,
        minimum=minimum,
        maximum=maximum,
        min_size=min_size,
        max_size=max_size,
        enum=enum,
        item=item,
        fields=fields,
    )

    if "default" in data:
        node = _with_default(node, data["default"], path)
    return node


def _parse_enum(raw: Any, stype: SchemaType, path: Path) -> Tuple[Any, ...]:
    _expect(isinstance(raw, list) and bool(raw), "enum must be a non-empty list", path)
    values = tuple(to_value(v) for v in raw)
    if stype is SchemaType.STRING:
        _expect(all(isinstance(v, str) for v in values), "string enum values must be strings", path)
    elif stype is SchemaType.INTEGER:
        _expect(all(kind_of(v) is ValueKind.INTEGER for v in values), "integer enum values must be integers", path)
    elif stype is SchemaType.FLOAT:
        _expect(all(_is_number(v) for v in values), "float enum values must be numbers", path)
    return values


def _parse_field(entry: Any, path: Path) -> SchemaNode:
    if isinstance(entry, dict) and "schema" in entry:
        unknown = set(entry) - _ENVELOPE_KEYS
        _expect(not unknown, f"unknown field keys: {sorted(unknown)}", path)
        node = parse_schema(entry["schema"], path=path + ("schema",))
        if "required" in entry:
            _expect(isinstance(entry["required"], bool), "required must be boolean", path)
            node = replace(node, required=entry["required"])
        if "default" in entry:
            node = _with_default(node, entry["default"], path)
        return node
    return parse_schema(entry, path=path)


def _with_default(node: SchemaNode, default: Any, path: Path) -> SchemaNode:
    try:
        normalized = validate(to_value(default), replace(node, default=MISSING), path=("default",))
    except ValidationError as e:
        raise SchemaDefinitionError(f"default does not match its schema: {e}", path=path) from e
    return replace(node, default=normalized)
