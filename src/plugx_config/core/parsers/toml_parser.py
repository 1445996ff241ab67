"""Parser TOML (stdlib `tomllib`)."""

from __future__ import annotations

import tomllib
from typing import Any

from plugx_config.core.sources.types import RawDocument

from .base import decode_text, try_decode
from .errors import ParseError


class TomlParser:
    name = "TOML"
    formats = ("toml",)

    def supports(self, contents: bytes) -> bool:
        text = try_decode(contents)
        if text is None:
            return False
        try:
            tomllib.loads(text)
        except tomllib.TOMLDecodeError:
            return False
        return True

    def parse(self, raw: RawDocument) -> Any:
        text = decode_text(raw, "toml")
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(str(e), origin=raw.origin, format="toml") from e
