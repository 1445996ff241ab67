"""Loader HTTP(S) (`http://`, `https://`).

Mapeamento de falhas:
- 404/410 → not_found
- 401/403 → permission_denied
- conexão recusada / timeout → unreachable
- demais respostas não-2xx → other

Formato: override do locator > `Content-Type` da resposta > sufixo da URL > json.

Opções:
- timeout: segundos (padrão 10)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlencode

import requests

from plugx_config.core.sources.errors import LoadError
from plugx_config.core.sources.types import LoadErrorKind, RawDocument, Source

from .base import allowed, format_from_suffix

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
_LOADER_OPTIONS = {"timeout"}

_NOT_FOUND = {404, 410}
_DENIED = {401, 403}


def _format_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    mime = content_type.split(";", 1)[0].strip().lower()
    if not mime or mime in {"text/plain", "application/octet-stream"}:
        return None
    return mime


class HttpLoader:
    """Carrega um documento de configuração via HTTP GET."""

    name = "HTTP"
    schemes = ("http", "https")

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None):
        self.timeout = timeout
        self.headers = dict(headers or {})

    def _url(self, source: Source) -> str:
        params = {k: v for k, v in source.options.items() if k not in _LOADER_OPTIONS}
        url = f"{source.scheme}://{source.address}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _timeout(self, source: Source) -> float:
        raw = source.option("timeout")
        if raw is None:
            return self.timeout
        try:
            return float(raw)
        except ValueError:
            raise LoadError(
                LoadErrorKind.MALFORMED,
                origin=source.locator,
                reason=f"invalid timeout option {raw!r}",
                loader=self.name,
            ) from None

    def load(self, source: Source, whitelist: Optional[Iterable[str]] = None) -> List[RawDocument]:
        if not allowed(source.plugin, whitelist):
            return []

        url = self._url(source)
        try:
            response = requests.get(url, timeout=self._timeout(source), headers=self.headers)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise LoadError(LoadErrorKind.UNREACHABLE, origin=url, reason=str(e), loader=self.name) from e
        except requests.RequestException as e:
            raise LoadError(LoadErrorKind.OTHER, origin=url, reason=str(e), loader=self.name) from e

        status = response.status_code
        if status in _NOT_FOUND:
            raise LoadError(LoadErrorKind.NOT_FOUND, origin=url, reason=f"HTTP {status}", loader=self.name)
        if status in _DENIED:
            raise LoadError(LoadErrorKind.PERMISSION_DENIED, origin=url, reason=f"HTTP {status}", loader=self.name)
        if not 200 <= status < 300:
            raise LoadError(LoadErrorKind.OTHER, origin=url, reason=f"HTTP {status}", loader=self.name)

        fmt = (
            source.format
            or _format_from_content_type(response.headers.get("Content-Type"))
            or format_from_suffix(source.address)
            or "json"
        )
        logger.debug("fetched %s (%d bytes, format=%s)", url, len(response.content), fmt)
        return [RawDocument(contents=response.content, origin=url, format=fmt, plugin=source.plugin)]
