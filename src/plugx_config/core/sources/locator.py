# src/plugx_config/core/sources/locator.py
"""
Parsing de locators de fontes de configuração.

Sintaxe: `scheme://authority/path?option=value&...`

Opções universais (consumidas pelo core e removidas das opções do loader):
    - skippable: `all` ou lista separada por `.`, `,` ou `;` de
      not-found | permission-denied | unreachable | malformed | other
      (alias legado: `soft-errors`)
    - format: override de formato/content-type
    - plugin: vínculo fixo do documento a um plugin

Todas as demais opções são específicas do loader e repassadas intactas.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from .errors import InvalidLocatorError
from .types import ALL_LOAD_ERROR_KINDS, LoadErrorKind, Source

_SKIPPABLE_KEYS = ("skippable", "soft-errors", "soft_errors")
_FORMAT_KEYS = ("format", "content-type", "content_type")
_PLUGIN_KEYS = ("plugin",)
_LIST_SEPARATORS = re.compile(r"[.,;\s]+")


def parse_skippable(text: str, *, locator: str = "") -> FrozenSet[LoadErrorKind]:
    parts = [p for p in _LIST_SEPARATORS.split(text.strip()) if p]
    if any(p.lower() == "all" for p in parts):
        return ALL_LOAD_ERROR_KINDS
    kinds = set()
    for part in parts:
        try:
            kinds.add(LoadErrorKind.parse(part))
        except ValueError:
            raise InvalidLocatorError(locator, f"unknown skippable error kind {part!r}") from None
    return frozenset(kinds)


def _pop_first(options: Dict[str, str], keys: Tuple[str, ...]) -> Optional[str]:
    found = None
    for key in keys:
        if key in options:
            found = options.pop(key)
    return found


def parse_locator(locator: str, *, index: int = 0) -> Source:
    """Converte um locator em `Source` imutável.

    Raises:
        InvalidLocatorError: se o locator estiver vazio, sem esquema ou com
            query string/opções universais inválidas.
    """
    if not isinstance(locator, str) or not locator.strip():
        raise InvalidLocatorError(str(locator), "locator must be a non-empty string")

    text = locator.strip()
    try:
        parts = urlsplit(text)
    except ValueError as e:
        raise InvalidLocatorError(text, str(e)) from e

    scheme = parts.scheme.lower()
    if not scheme:
        raise InvalidLocatorError(text, "missing scheme")

    try:
        pairs = parse_qsl(parts.query, keep_blank_values=True, strict_parsing=bool(parts.query))
    except ValueError as e:
        raise InvalidLocatorError(text, f"malformed query string: {e}") from e

    options: Dict[str, str] = {}
    for key, value in pairs:
        options[key] = value

    skippable_text = _pop_first(options, _SKIPPABLE_KEYS)
    skippable = parse_skippable(skippable_text, locator=text) if skippable_text else frozenset()

    fmt = _pop_first(options, _FORMAT_KEYS)
    fmt = fmt.strip().lower() if fmt and fmt.strip() else None

    plugin = _pop_first(options, _PLUGIN_KEYS)
    if plugin is not None:
        plugin = plugin.strip().lower()
        if not plugin:
            raise InvalidLocatorError(text, "plugin option must be a non-empty name")

    return Source(
        locator=text,
        scheme=scheme,
        address=parts.netloc + parts.path,
        options=options,
        index=index,
        skippable=skippable,
        format=fmt,
        plugin=plugin,
    )
