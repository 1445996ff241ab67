# tests/core/engine/test_orchestrator_fail_fast.py
"""
Testes da política fail-fast e de falhas puláveis do Orchestrator.

Os testes asseguram que:
- a primeira falha não pulável interrompe a run e as fontes seguintes
  não são tentadas
- falhas de carregamento declaradas como puláveis viram contribuição vazia
- em um diretório, só o arquivo com falha pulável é descartado
- erros de parsing nunca são puláveis
- uma run que falha não altera a configuração publicada anteriormente
- a falha é registrada como ErrorPayload em `last_run`

Invariantes:
    - O estado FAILED é registrado explicitamente
    - `skip_soft_errors=False` torna toda falha de carregamento fatal
"""

from pathlib import Path

import pytest

from plugx_config.core.config.errors import ConfigTypeConflictError
from plugx_config.core.engine.orchestrator import Orchestrator
from plugx_config.core.engine.types import PipelineState
from plugx_config.core.parsers.errors import InvalidDocumentRootError, InvalidPluginNameError, ParseError
from plugx_config.core.sources.errors import LoadError, UnknownSchemeError
from plugx_config.core.sources.types import LoadErrorKind


def test_first_hard_failure_stops_the_run(memory_loader):
    loader = memory_loader({"a": b'{"foo": {}}', "c": b'{"bar": {}}'})
    orch = Orchestrator(loaders=[loader])
    for locator in ("mem://a", "mem://missing", "mem://c"):
        orch.add_source(locator)

    with pytest.raises(LoadError) as exc:
        orch.run()

    assert exc.value.kind is LoadErrorKind.NOT_FOUND
    assert loader.calls == ["mem://a", "mem://missing"]
    assert orch.state is PipelineState.FAILED


def test_skippable_failure_is_empty_contribution(memory_loader):
    loader = memory_loader({"a": b'{"foo": {"x": 1}}', "c": b'{"foo": {"y": 2}}'})
    orch = Orchestrator(loaders=[loader])
    orch.add_source("mem://a")
    orch.add_source("mem://missing?skippable=not_found")
    orch.add_source("mem://c")

    assert orch.run() == {"foo": {"x": 1, "y": 2}}
    assert orch.last_run.skipped == ["mem://missing?skippable=not_found"]
    assert any(e["level"] == "warning" and e["stage"] == "load" for e in orch.last_run.events)


def test_skippable_only_for_declared_kinds(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({})])
    orch.add_source("mem://missing?skippable=unreachable")

    with pytest.raises(LoadError):
        orch.run()


def test_soft_errors_can_be_disabled(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({})])
    orch.add_source("mem://missing?soft-errors=all")

    assert orch.run() == {}
    with pytest.raises(LoadError):
        orch.run(skip_soft_errors=False)


def test_parse_errors_are_never_skippable(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({"bad": b'{"foo": '})])
    orch.add_source("mem://bad?skippable=all")

    with pytest.raises(ParseError):
        orch.run()

    assert orch.last_run.error.type == "PARSE_ERROR"
    assert orch.last_run.events[-1]["stage"] == "parsing"


def test_failed_run_keeps_previous_configuration(memory_loader):
    loader = memory_loader({"a": b'{"foo": {"x": 1}}'})
    orch = Orchestrator(loaders=[loader])
    orch.add_source("mem://a")
    orch.run()

    loader.documents["a"] = b"{broken"
    with pytest.raises(ParseError):
        orch.run()

    assert orch.state is PipelineState.FAILED
    assert dict(orch.configuration) == {"foo": {"x": 1}}
    assert isinstance(orch.last_error, ParseError)

    result = orch.last_run
    assert not result.ok
    assert result.configuration == {}
    assert result.error.details["origin"] == "mem://a"

    loader.documents["a"] = b'{"foo": {"x": 2}}'
    orch.run()
    assert orch.state is PipelineState.READY
    assert orch.last_error is None
    assert orch.configuration["foo"] == {"x": 2}


def test_plugin_document_must_be_a_map(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({"a": b'{"foo": 1}'})])
    orch.add_source("mem://a")

    with pytest.raises(InvalidDocumentRootError) as exc:
        orch.run()
    assert exc.value.plugin == "foo"
    assert orch.last_run.error.type == "INVALID_DOCUMENT_ROOT"


def test_unbound_document_must_be_a_map(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({"a": b"[1, 2]"})])
    orch.add_source("mem://a")

    with pytest.raises(InvalidDocumentRootError) as exc:
        orch.run()
    assert exc.value.plugin == "*"


def test_empty_plugin_name_fails_the_run(memory_loader):
    orch = Orchestrator(loaders=[memory_loader({"a": b'{"": {"x": 1}, "foo": {}}'})])
    orch.add_source("mem://a")

    with pytest.raises(InvalidPluginNameError):
        orch.run()
    assert orch.state is PipelineState.FAILED
    assert orch.last_run.error.type == "INVALID_PLUGIN_NAME"


def test_strict_merge_rejects_map_vs_scalar(memory_loader):
    loader = memory_loader({"a": b'{"foo": {"x": {"y": 1}}}', "b": b'{"foo": {"x": 2}}'})
    orch = Orchestrator(loaders=[loader], strict_merge=True)
    orch.add_source("mem://a")
    orch.add_source("mem://b")

    with pytest.raises(ConfigTypeConflictError) as exc:
        orch.run()
    assert exc.value.path == ("foo", "x")
    assert orch.last_run.error.type == "MERGE_TYPE_CONFLICT"


def test_unknown_scheme_is_rejected_at_registration():
    orch = Orchestrator(loaders=[])
    with pytest.raises(UnknownSchemeError):
        orch.add_source("nope://x")
    assert orch.sources == []


def test_unexpected_loader_exception_is_wrapped_in_payload():
    class _Broken:
        name = "Broken"
        schemes = ("broken",)

        def load(self, source, whitelist=None):
            raise RuntimeError("kaboom")

    orch = Orchestrator(loaders=[_Broken()])
    orch.add_source("broken://x")

    with pytest.raises(RuntimeError):
        orch.run()

    error = orch.last_run.error
    assert error.type == "ORCHESTRATOR_EXECUTION_ERROR"
    assert error.details == {"exception_class": "RuntimeError"}


@pytest.fixture
def partly_unreadable_dir(tmp_path, monkeypatch):
    (tmp_path / "a.json").write_text('{"x": 1}', encoding="utf-8")
    (tmp_path / "b.json").write_text('{"y": 2}', encoding="utf-8")
    original = Path.read_bytes

    def _read_bytes(self):
        if self.name == "b.json":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self)

    monkeypatch.setattr(Path, "read_bytes", _read_bytes)
    return tmp_path


def test_unreadable_file_keeps_rest_of_directory(partly_unreadable_dir):
    orch = Orchestrator()
    orch.add_source(f"fs://{partly_unreadable_dir}?skippable=permission_denied")

    assert orch.run() == {"a": {"x": 1}}
    assert orch.state is PipelineState.READY


def test_unreadable_file_is_fatal_without_soft_errors(partly_unreadable_dir):
    orch = Orchestrator()
    orch.add_source(f"fs://{partly_unreadable_dir}?skippable=permission_denied")

    with pytest.raises(LoadError) as exc:
        orch.run(skip_soft_errors=False)
    assert exc.value.kind is LoadErrorKind.PERMISSION_DENIED
    assert orch.state is PipelineState.FAILED
