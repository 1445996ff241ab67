"""Parser YAML (PyYAML, `safe_load`)."""

from __future__ import annotations

from typing import Any

import yaml  # PyYAML

from plugx_config.core.sources.types import RawDocument

from .base import decode_text, try_decode
from .errors import ParseError


class YamlParser:
    name = "YAML"
    formats = ("yaml",)

    def supports(self, contents: bytes) -> bool:
        # texto solto também é YAML válido (escalar); exige map na raiz
        text = try_decode(contents)
        if text is None:
            return False
        try:
            return isinstance(yaml.safe_load(text), dict)
        except yaml.YAMLError:
            return False

    def parse(self, raw: RawDocument) -> Any:
        text = decode_text(raw, "yaml")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            offset = None
            if mark is not None and getattr(mark, "index", None) is not None:
                offset = len(text[: mark.index].encode("utf-8"))
            raise ParseError(
                str(getattr(e, "problem", None) or e),
                origin=raw.origin,
                format="yaml",
                byte_offset=offset,
            ) from e

        # YAML vazio -> None
        return {} if data is None else data
