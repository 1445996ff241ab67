"""Parser de query string (stdlib `urllib.parse`).

`server.port=8080&debug=true` → {"server": {"port": 8080}, "debug": true}
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl

from plugx_config.core.sources.types import RawDocument

from .base import build_nested, decode_scalar, decode_text, try_decode
from .errors import ParseError

DEFAULT_KEY_SEPARATOR = "."


class QueryStringParser:
    name = "Query-String"
    formats = ("qs",)

    def supports(self, contents: bytes) -> bool:
        text = (try_decode(contents) or "").strip()
        if not text or any(c.isspace() for c in text):
            return False
        try:
            return bool(parse_qsl(text, keep_blank_values=True, strict_parsing=True))
        except ValueError:
            return False

    def parse(self, raw: RawDocument) -> Any:
        text = decode_text(raw, "qs").strip()
        separator = raw.options.get("key_separator") or DEFAULT_KEY_SEPARATOR
        try:
            pairs = parse_qsl(text, keep_blank_values=True, strict_parsing=bool(text))
        except ValueError as e:
            raise ParseError(str(e), origin=raw.origin, format="qs") from e
        return build_nested(
            ((key.split(separator), decode_scalar(value)) for key, value in pairs),
            origin=raw.origin,
            fmt="qs",
        )
