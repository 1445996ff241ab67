# tests/core/loaders/test_http_loader.py
"""
Testes do HttpLoader (`http://`, `https://`).

`requests.get` é substituído via monkeypatch: nenhum acesso de rede real.

Os testes asseguram que:
- o formato vem do locator, do Content-Type, do sufixo ou do padrão json
- códigos HTTP são mapeados para `LoadErrorKind`
- falhas de conexão/timeout são `unreachable`
"""

import pytest
import requests

from plugx_config.core.loaders.http import HttpLoader
from plugx_config.core.sources.errors import LoadError
from plugx_config.core.sources.locator import parse_locator
from plugx_config.core.sources.types import LoadErrorKind


class _FakeResponse:
    def __init__(self, status_code=200, content=b"{}", content_type=None):
        self.status_code = status_code
        self.content = content
        self.headers = {} if content_type is None else {"Content-Type": content_type}


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, exc=None):
        def _get(url, timeout=None, headers=None):
            calls.append({"url": url, "timeout": timeout, "headers": headers})
            if exc is not None:
                raise exc
            return response

        monkeypatch.setattr(requests, "get", _get)
        return calls

    return install


def test_fetch_with_content_type(fake_get):
    calls = fake_get(_FakeResponse(content=b"port: 1\n", content_type="application/x-yaml; charset=utf-8"))
    docs = HttpLoader().load(parse_locator("https://cfg.local/web?plugin=web&timeout=2.5&v=1"))

    assert calls[0]["url"] == "https://cfg.local/web?v=1"
    assert calls[0]["timeout"] == 2.5
    assert docs[0].plugin == "web"
    assert docs[0].format == "application/x-yaml"
    assert docs[0].contents == b"port: 1\n"


def test_format_precedence(fake_get):
    fake_get(_FakeResponse(content_type="text/plain"))
    assert HttpLoader().load(parse_locator("http://h/c.toml"))[0].format == "toml"
    assert HttpLoader().load(parse_locator("http://h/c"))[0].format == "json"
    assert HttpLoader().load(parse_locator("http://h/c.toml?format=yaml"))[0].format == "yaml"


@pytest.mark.parametrize(
    "status, kind",
    [
        (404, LoadErrorKind.NOT_FOUND),
        (410, LoadErrorKind.NOT_FOUND),
        (401, LoadErrorKind.PERMISSION_DENIED),
        (403, LoadErrorKind.PERMISSION_DENIED),
        (500, LoadErrorKind.OTHER),
    ],
)
def test_status_mapping(fake_get, status, kind):
    fake_get(_FakeResponse(status_code=status))
    with pytest.raises(LoadError) as exc:
        HttpLoader().load(parse_locator("http://h/c"))
    assert exc.value.kind is kind


def test_connection_error_is_unreachable(fake_get):
    fake_get(exc=requests.ConnectionError("refused"))
    with pytest.raises(LoadError) as exc:
        HttpLoader().load(parse_locator("http://h/c"))
    assert exc.value.kind is LoadErrorKind.UNREACHABLE


def test_timeout_is_unreachable(fake_get):
    fake_get(exc=requests.Timeout("slow"))
    with pytest.raises(LoadError) as exc:
        HttpLoader().load(parse_locator("http://h/c"))
    assert exc.value.kind is LoadErrorKind.UNREACHABLE


def test_invalid_timeout_option(fake_get):
    fake_get(_FakeResponse())
    with pytest.raises(LoadError) as exc:
        HttpLoader().load(parse_locator("http://h/c?timeout=soon"))
    assert exc.value.kind is LoadErrorKind.MALFORMED


def test_bound_source_outside_whitelist_is_not_fetched(fake_get):
    calls = fake_get(_FakeResponse())
    assert HttpLoader().load(parse_locator("http://h/c?plugin=web"), ["other"]) == []
    assert calls == []
