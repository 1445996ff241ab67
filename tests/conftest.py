# tests/conftest.py
"""
Fixtures compartilhados para testes do plugx-config.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de configuração de plugins (diretórios com arquivos por plugin)
- ambientes de variáveis injetáveis (sem tocar `os.environ`)
- schemas autorados mínimos
- um loader em memória para testes do Orchestrator

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - I/O é sempre confinado a `tmp_path`
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture lê o ambiente real do processo
    - Dados retornados são determinísticos e isolados

Este módulo existe como infraestrutura de teste e não
como validação funcional da biblioteca.
"""

import json

import pytest


@pytest.fixture
def plugin_dir(tmp_path):
    """
    Diretório com um arquivo de configuração por plugin.

    Layout:
        foo.json  → {"host": "localhost", "server": {"port": 8080}}
        bar.yaml  → {"enabled": true, "tags": ["a", "b"]}
        baz.toml  → {"level": "info"}
        notes.txt → ignorado (sufixo desconhecido)

    Returns:
        Path: Diretório criado dentro de `tmp_path`.
    """
    root = tmp_path / "plugins"
    root.mkdir()
    (root / "foo.json").write_text(
        json.dumps({"host": "localhost", "server": {"port": 8080}}), encoding="utf-8"
    )
    (root / "bar.yaml").write_text("enabled: true\ntags:\n  - a\n  - b\n", encoding="utf-8")
    (root / "baz.toml").write_text('level = "info"\n', encoding="utf-8")
    (root / "notes.txt").write_text("not a configuration file", encoding="utf-8")
    return root


@pytest.fixture
def app_environ():
    """Ambiente injetável com prefixo `APP` e separador padrão `__`."""
    return {
        "APP__FOO__PORT": "9090",
        "APP__FOO__DEBUG": "false",
        "APP__BAR__NAME": "bar-from-env",
        "HOME": "/root",
        "PATH": "/usr/bin",
    }


@pytest.fixture
def port_schema():
    """Schema autorado de um plugin com porta (default 8080) e host obrigatório."""
    return {
        "type": "static_map",
        "items": {
            "host": {"schema": {"type": "string"}, "required": True},
            "port": {"schema": {"type": "integer", "range": {"min": 1, "max": 65535}}, "default": 8080},
        },
    }


@pytest.fixture
def memory_loader():
    """
    Fixture factory de loader em memória (esquema `mem://`).

    `memory_loader({"a": b'{"foo": {"x": 1}}'})` atende `mem://a`; chaves
    ausentes levantam `LoadError(not_found)`.
    """
    from plugx_config.core.sources.errors import LoadError
    from plugx_config.core.sources.types import LoadErrorKind, RawDocument

    class _MemoryLoader:
        name = "Memory"
        schemes = ("mem",)

        def __init__(self, documents):
            self.documents = dict(documents)
            self.calls = []

        def load(self, source, whitelist=None):
            self.calls.append(source.locator)
            key = source.address
            if key not in self.documents:
                raise LoadError(LoadErrorKind.NOT_FOUND, origin=source.locator, reason="no such entry", loader=self.name)
            return [
                RawDocument(
                    contents=self.documents[key],
                    origin=source.locator,
                    format=source.format or "json",
                    plugin=source.plugin,
                )
            ]

    return _MemoryLoader
