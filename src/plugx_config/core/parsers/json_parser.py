"""Parser JSON (stdlib `json`)."""

from __future__ import annotations

import json
from typing import Any

from plugx_config.core.sources.types import RawDocument

from .base import decode_text, try_decode
from .errors import ParseError


class JsonParser:
    name = "JSON"
    formats = ("json",)

    def supports(self, contents: bytes) -> bool:
        text = try_decode(contents)
        if text is None:
            return False
        try:
            return isinstance(json.loads(text), dict)
        except ValueError:
            return False

    def parse(self, raw: RawDocument) -> Any:
        text = decode_text(raw, "json")
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(
                e.msg,
                origin=raw.origin,
                format="json",
                byte_offset=len(text[: e.pos].encode("utf-8")),
            ) from e
