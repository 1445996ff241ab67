"""Parser dotenv (python-dotenv).

Chaves são convertidas para minúsculas e divididas pelo separador de níveis
(opção `key_separator` do documento, padrão `__`) em maps aninhados.
Valores são interpretados como JSON quando possível (`"9090"` → 9090).
"""

from __future__ import annotations

import io
import re
from typing import Any

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from plugx_config.core.sources.types import RawDocument

from .base import build_nested, decode_scalar, decode_text, try_decode

DEFAULT_KEY_SEPARATOR = "__"

_ENV_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class EnvParser:
    name = "Environment-Variables"
    formats = ("env",)

    def __init__(self, *, key_separator: str = DEFAULT_KEY_SEPARATOR):
        self.key_separator = key_separator

    def supports(self, contents: bytes) -> bool:
        text = try_decode(contents)
        if text is None:
            return False
        bindings = list(parse_stream(io.StringIO(text)))
        keyed = [b for b in bindings if b.key is not None or b.error]
        if not keyed:
            return False
        return all(
            not b.error and b.value is not None and _ENV_KEY.match(b.key) for b in keyed
        )

    def parse(self, raw: RawDocument) -> Any:
        text = decode_text(raw, "env")
        separator = raw.options.get("key_separator") or self.key_separator
        values = dotenv_values(stream=io.StringIO(text), interpolate=False)

        pairs = []
        for key in sorted(values):
            value = values[key]
            keys = [k.lower() for k in key.split(separator)]
            pairs.append((keys, None if value is None else decode_scalar(value)))
        return build_nested(pairs, origin=raw.origin, fmt="env")
