# src/plugx_config/core/schema/validate.py
"""
Motor de validação e preenchimento de defaults.

Este módulo verifica um Value (documento mesclado de um plugin) contra
um `SchemaNode`, produzindo um novo Value normalizado ou um erro
localizado.

Política de validação (v1):
    - Tipo do valor deve corresponder ao tipo do nó (`TypeMismatchError`)
    - Números respeitam `range` inclusivo (`RangeViolationError`)
    - Tamanhos (string/list/map) respeitam `size` inclusivo
    - Escalares de domínio (ip, log_level) são parseados (`DomainParseError`)
    - Enum exige pertencimento estrito (`EnumViolationError`)
    - static_map: filhos ausentes recebem default; sem default e obrigatórios
      geram `MissingFieldError`; chaves desconhecidas passam inalteradas
    - list/dynamic_map: cada entrada é validada contra o item; a primeira
      falha interrompe a validação (fail-fast)

Decisões arquiteturais:
    - Validação é pura: o input nunca é mutado
    - Defaults apenas preenchem ausências, nunca sobrescrevem valores presentes
    - Mensagens de erro são singulares e acionáveis (sem acumulação)

Normalizações aplicadas:
    - float aceita inteiros (convertidos para float)
    - ip é reescrito na forma canônica (`ipaddress`)
    - log_level é convertido para minúsculas (`warning` → `warn`)

Limites explícitos:
    - Não carrega schemas
    - Não realiza merge
"""

from __future__ import annotations

import ipaddress
from copy import deepcopy
from typing import Any, Dict, Iterable, Optional

from plugx_config.core.value.model import Value, ValueKind, kind_of
from plugx_config.core.value.path import Path

from .errors import (
    DomainParseError,
    EnumViolationError,
    MissingFieldError,
    RangeViolationError,
    TypeMismatchError,
)
from .model import SchemaNode, SchemaType

LOG_LEVELS = ("off", "error", "warn", "info", "debug", "trace")
_LOG_LEVEL_ALIASES = {"warning": "warn", "fatal": "error", "critical": "error", "none": "off"}


def _same(left: Any, right: Any) -> bool:
    # True == 1 em Python; pertencimento a enum compara também a tag
    return kind_of(left) == kind_of(right) and left == right


def _expect_kind(value: Any, path: Path, expected: SchemaType, *kinds: ValueKind) -> ValueKind:
    actual = kind_of(value)
    if actual not in kinds:
        raise TypeMismatchError(path, expected=expected.value, actual=actual.value)
    return actual


def _check_range(value: Any, schema: SchemaNode, path: Path) -> None:
    # NaN não é comparável: nunca satisfaz um intervalo declarado
    if value != value and (schema.minimum is not None or schema.maximum is not None):
        raise RangeViolationError(path, value=value, minimum=schema.minimum, maximum=schema.maximum)
    if schema.minimum is not None and value < schema.minimum:
        raise RangeViolationError(path, value=value, minimum=schema.minimum, maximum=schema.maximum)
    if schema.maximum is not None and value > schema.maximum:
        raise RangeViolationError(path, value=value, minimum=schema.minimum, maximum=schema.maximum)


def _check_size(size: int, schema: SchemaNode, path: Path) -> None:
    too_small = schema.min_size is not None and size < schema.min_size
    too_big = schema.max_size is not None and size > schema.max_size
    if too_small or too_big:
        raise RangeViolationError(
            path,
            value=size,
            minimum=schema.min_size,
            maximum=schema.max_size,
            measure="size",
        )


def _check_enum(value: Any, allowed: Optional[Iterable[Any]], path: Path) -> None:
    if allowed is None:
        return
    allowed = list(allowed)
    if not any(_same(value, option) for option in allowed):
        raise EnumViolationError(path, value=value, allowed=allowed)


def validate(value: Value, schema: SchemaNode, *, path: Path = ()) -> Value:
    """
    Valida e normaliza um Value contra um SchemaNode.

    Args:
        value (Value): Documento (ou subárvore) a validar.
        schema (SchemaNode): Nó de schema correspondente.
        path (Path): Caminho da subárvore a partir da raiz do plugin.

    Returns:
        Value: Novo Value normalizado, com defaults preenchidos.

    Raises:
        ValidationError: Na primeira violação encontrada (subclasse específica).
    """
    kind = schema.type

    if kind is SchemaType.ANY:
        return deepcopy(value)

    if kind is SchemaType.BOOLEAN:
        _expect_kind(value, path, kind, ValueKind.BOOLEAN)
        return value

    if kind is SchemaType.INTEGER:
        _expect_kind(value, path, kind, ValueKind.INTEGER)
        _check_range(value, schema, path)
        _check_enum(value, schema.enum, path)
        return value

    if kind is SchemaType.FLOAT:
        _expect_kind(value, path, kind, ValueKind.FLOAT, ValueKind.INTEGER)
        _check_range(value, schema, path)
        _check_enum(float(value), schema.enum and [float(v) for v in schema.enum], path)
        return float(value)

    if kind is SchemaType.STRING:
        _expect_kind(value, path, kind, ValueKind.STRING)
        _check_size(len(value), schema, path)
        _check_enum(value, schema.enum, path)
        return value

    if kind is SchemaType.IP:
        _expect_kind(value, path, kind, ValueKind.STRING)
        try:
            return str(ipaddress.ip_address(value.strip()))
        except ValueError as e:
            raise DomainParseError(path, value=value, domain="ip address", reason=str(e)) from None

    if kind is SchemaType.LOG_LEVEL:
        _expect_kind(value, path, kind, ValueKind.STRING)
        level = value.strip().lower()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise DomainParseError(
                path,
                value=value,
                domain="log level",
                reason=f"expected one of {', '.join(LOG_LEVELS)}",
            )
        return level

    if kind is SchemaType.ENUM:
        _check_enum(value, schema.enum or (), path)
        return deepcopy(value)

    if kind is SchemaType.LIST:
        _expect_kind(value, path, kind, ValueKind.LIST)
        _check_size(len(value), schema, path)
        if schema.item is None:
            return deepcopy(value)
        return [validate(entry, schema.item, path=path + (i,)) for i, entry in enumerate(value)]

    if kind is SchemaType.DYNAMIC_MAP:
        _expect_kind(value, path, kind, ValueKind.MAP)
        _check_size(len(value), schema, path)
        if schema.item is None:
            return deepcopy(value)
        return {key: validate(entry, schema.item, path=path + (key,)) for key, entry in value.items()}

    if kind is SchemaType.STATIC_MAP:
        _expect_kind(value, path, kind, ValueKind.MAP)
        _check_size(len(value), schema, path)
        return _validate_static_map(value, schema, path)

    raise ValueError(f"unsupported schema type: {kind!r}")  # pragma: no cover


def _validate_static_map(value: Dict[str, Any], schema: SchemaNode, path: Path) -> Dict[str, Any]:
    result: Dict[str, Any] = {}

    # chaves desconhecidas passam inalteradas, na ordem original
    for key, entry in value.items():
        child = schema.fields.get(key)
        result[key] = deepcopy(entry) if child is None else validate(entry, child, path=path + (key,))

    for name, child in schema.fields.items():
        if name in value:
            continue
        if child.has_default:
            result[name] = deepcopy(child.default)
        elif child.required:
            raise MissingFieldError(path + (name,), field=name)

    return result
