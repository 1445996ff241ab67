"""Parser customizado baseado em função."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from plugx_config.core.sources.types import RawDocument

from .errors import ParseError


class CallableParser:
    """Adapta `fn(bytes) -> objeto` ao protocolo de Parser.

    Qualquer exceção que não seja `ParseError` é encapsulada em `ParseError`.
    `detect(bytes) -> bool`, quando informado, habilita a detecção de formato.
    """

    def __init__(
        self,
        fn: Callable[[bytes], Any],
        *,
        formats: Sequence[str],
        name: str = "Custom",
        detect: Optional[Callable[[bytes], bool]] = None,
    ):
        if not formats:
            raise ValueError("formats must be a non-empty sequence")
        self._fn = fn
        self.formats = tuple(f.lower() for f in formats)
        self.name = name
        self._detect = detect

    def supports(self, contents: bytes) -> bool:
        if self._detect is None:
            return False
        return bool(self._detect(contents))

    def parse(self, raw: RawDocument) -> Any:
        try:
            return self._fn(raw.contents)
        except ParseError:
            raise
        except Exception as e:
            raise ParseError(str(e) or e.__class__.__name__, origin=raw.origin, format=self.formats[0]) from e
