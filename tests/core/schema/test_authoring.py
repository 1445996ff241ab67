# tests/core/schema/test_authoring.py
"""
Testes da autoria de schemas (Value → SchemaNode) e do loader de schemas.

Os testes asseguram que:
- a forma autorada é convertida em `SchemaNode` imutável
- schemas malformados são rejeitados com `SchemaDefinitionError` localizado
- defaults são validados (e normalizados) já na autoria
- arquivos de schema podem ser carregados com qualquer parser registrado
"""

import json

import pytest

from plugx_config.core.schema import (
    MISSING,
    SchemaDefinitionError,
    SchemaNode,
    SchemaType,
    load_schema,
    parse_schema,
)
from plugx_config.core.schema.loader import load_schema_directory


def test_string_shorthand():
    node = parse_schema("integer")
    assert node == SchemaNode(type=SchemaType.INTEGER)
    assert node.default is MISSING
    assert not node.has_default


def test_type_aliases():
    assert parse_schema("bool").type is SchemaType.BOOLEAN
    assert parse_schema("static-map").type is SchemaType.STATIC_MAP
    assert parse_schema({"type": "Log-Level"}).type is SchemaType.LOG_LEVEL


def test_full_node():
    node = parse_schema(
        {
            "type": "static_map",
            "items": {
                "port": {"schema": {"type": "integer", "range": {"min": 1, "max": 65535}}, "default": 8080},
                "hosts": {"type": "list", "item": "ip", "size": {"min": 1}, "required": True},
            },
        }
    )
    port = node.fields["port"]
    assert (port.minimum, port.maximum, port.default) == (1, 65535, 8080)
    hosts = node.fields["hosts"]
    assert hosts.required
    assert hosts.item.type is SchemaType.IP
    assert hosts.min_size == 1


def test_default_is_normalized_at_authoring():
    node = parse_schema({"type": "log_level", "default": "WARNING"})
    assert node.default == "warn"


def test_to_dict_round_trip():
    authored = {"type": "list", "size": {"max": 3}, "items": {"type": "string", "enum": ["a", "b"]}, "default": ["a"]}
    assert parse_schema(parse_schema(authored).to_dict()) == parse_schema(authored)


@pytest.mark.parametrize(
    "schema, fragment",
    [
        ({"type": "integer", "range": {"min": 5, "max": 1}}, "range.min"),
        ({"type": "string", "range": {"min": 1}}, "range is not supported"),
        ({"type": "boolean", "size": {"max": 1}}, "size is not supported"),
        ({"type": "enum"}, "enum type requires"),
        ({"type": "string", "enum": []}, "non-empty"),
        ({"type": "integer", "enum": ["a"]}, "integer enum"),
        ({"type": "integer", "items": "string"}, "items is not supported"),
        ({"type": "integer", "colour": "red"}, "unknown schema keys"),
        ({"type": "wat"}, "unknown type"),
        ({}, "type is required"),
        ({"type": "integer", "required": "yes"}, "required must be boolean"),
        ({"type": "list", "items": "integer", "item": "integer"}, "either items or item"),
        (42, "mapping or a type name"),
    ],
)
def test_malformed_schemas(schema, fragment):
    with pytest.raises(SchemaDefinitionError) as exc:
        parse_schema(schema)
    assert fragment in str(exc.value)


def test_invalid_default_is_rejected_with_path():
    with pytest.raises(SchemaDefinitionError) as exc:
        parse_schema(
            {"type": "static_map", "items": {"port": {"schema": {"type": "integer", "range": {"max": 10}}, "default": 80}}}
        )
    assert exc.value.path == ("items", "port")


def test_load_schema_from_yaml(tmp_path):
    path = tmp_path / "web.yaml"
    path.write_text(
        "type: static_map\nitems:\n  port:\n    schema: {type: integer}\n    default: 8080\n",
        encoding="utf-8",
    )
    node = load_schema(path)
    assert node.fields["port"].default == 8080


def test_load_schema_directory(tmp_path):
    (tmp_path / "Web.json").write_text(json.dumps({"type": "static_map"}), encoding="utf-8")
    (tmp_path / "db.yaml").write_text("type: dynamic_map\nitems: string\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("ignored", encoding="utf-8")

    schemas = load_schema_directory(tmp_path)

    assert sorted(schemas) == ["db", "web"]
    assert schemas["db"].item.type is SchemaType.STRING


def test_load_schema_missing_or_empty(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema(tmp_path / "none.yaml")
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(SchemaDefinitionError):
        load_schema(empty)
