# tests/core/engine/test_orchestrator_validate.py
"""
Testes de `Orchestrator.run_and_validate`.

Os testes asseguram que:
- defaults de schema são aplicados à configuração publicada
- a primeira violação aborta a run com caminho completo `[plugin][campo]`
- plugins sem schema passam inalterados
- schemas de plugins ausentes não geram erro
- schemas inválidos falham antes de qualquer carregamento
"""

import pytest

from plugx_config.core.engine.orchestrator import Orchestrator
from plugx_config.core.engine.types import PipelineState
from plugx_config.core.schema import SchemaDefinitionError, parse_schema
from plugx_config.core.schema.errors import MissingFieldError, RangeViolationError


def _orchestrator(memory_loader, document):
    loader = memory_loader({"a": document})
    orch = Orchestrator(loaders=[loader])
    orch.add_source("mem://a")
    return orch, loader


def test_defaults_are_published(memory_loader, port_schema):
    orch, _ = _orchestrator(memory_loader, b'{"foo": {"host": "h"}, "bar": {"k": true}}')

    cfg = orch.run_and_validate({"foo": port_schema})

    assert cfg == {"foo": {"host": "h", "port": 8080}, "bar": {"k": True}}
    assert orch.configuration["foo"]["port"] == 8080
    assert orch.state is PipelineState.READY


def test_violation_has_plugin_path(memory_loader, port_schema):
    orch, _ = _orchestrator(memory_loader, b'{"foo": {"host": "h", "port": 70000}}')

    with pytest.raises(RangeViolationError) as exc:
        orch.run_and_validate({"foo": port_schema})

    assert exc.value.path == ("foo", "port")
    assert exc.value.rendered_path == "[foo][port]"
    assert orch.state is PipelineState.FAILED

    error = orch.last_run.error
    assert error.type == "RANGE_VIOLATION"
    assert error.details["path"] == ["foo", "port"]
    assert orch.last_run.events[-1]["stage"] == "validating"


def test_missing_required_field(memory_loader, port_schema):
    orch, _ = _orchestrator(memory_loader, b'{"foo": {"port": 80}}')

    with pytest.raises(MissingFieldError) as exc:
        orch.run_and_validate({"foo": port_schema})
    assert exc.value.rendered_path == "[foo][host]"


def test_schema_for_absent_plugin_is_ignored(memory_loader, port_schema):
    orch, _ = _orchestrator(memory_loader, b'{"bar": {}}')

    assert orch.run_and_validate({"foo": port_schema}) == {"bar": {}}


def test_schema_names_are_case_insensitive(memory_loader):
    orch, _ = _orchestrator(memory_loader, b'{"Foo": {}}')

    cfg = orch.run_and_validate({"FOO": {"type": "static_map", "items": {"x": {"schema": "integer", "default": 1}}}})
    assert cfg == {"foo": {"x": 1}}


def test_accepts_schema_nodes(memory_loader, port_schema):
    orch, _ = _orchestrator(memory_loader, b'{"foo": {"host": "h"}}')

    assert orch.run_and_validate({"foo": parse_schema(port_schema)})["foo"]["port"] == 8080


def test_invalid_schema_fails_before_loading(memory_loader):
    orch, loader = _orchestrator(memory_loader, b'{"foo": {}}')

    with pytest.raises(SchemaDefinitionError) as exc:
        orch.run_and_validate({"foo": {"type": "integer", "range": {"min": 3, "max": 1}}})

    assert exc.value.path == ("foo",)
    assert loader.calls == []
    assert orch.last_run.error.type == "SCHEMA_DEFINITION_ERROR"
