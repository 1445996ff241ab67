"""Loader customizado baseado em função (provedores arbitrários).

A função recebe a `Source` e pode retornar:
- `bytes` ou `str` → um documento (formato do locator, vínculo do locator)
- `RawDocument` → usado como está
- lista de `RawDocument`

Exceções `LoadError` levantadas pela função seguem a política de skip da fonte.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Union

from plugx_config.core.sources.errors import LoadError
from plugx_config.core.sources.types import LoadErrorKind, RawDocument, Source

from .base import allowed

LoaderResult = Union[bytes, str, RawDocument, Sequence[RawDocument]]


class CallableLoader:
    """Adapta uma função Python ao protocolo de Loader."""

    def __init__(self, fn: Callable[[Source], LoaderResult], *, schemes: Sequence[str], name: str = "Custom"):
        if not schemes:
            raise ValueError("schemes must be a non-empty sequence")
        self._fn = fn
        self.schemes = tuple(s.lower() for s in schemes)
        self.name = name

    def _wrap(self, source: Source, item: Union[bytes, str]) -> RawDocument:
        contents = item.encode("utf-8") if isinstance(item, str) else item
        return RawDocument(contents=contents, origin=source.locator, format=source.format, plugin=source.plugin)

    def load(self, source: Source, whitelist: Optional[Iterable[str]] = None) -> List[RawDocument]:
        result = self._fn(source)

        if isinstance(result, (bytes, str)):
            documents = [self._wrap(source, result)]
        elif isinstance(result, RawDocument):
            documents = [result]
        elif isinstance(result, (list, tuple)) and all(isinstance(d, RawDocument) for d in result):
            documents = list(result)
        else:
            raise LoadError(
                LoadErrorKind.MALFORMED,
                origin=source.locator,
                reason=f"custom loader returned {type(result).__name__}",
                loader=self.name,
            )

        wl = None if whitelist is None else set(whitelist)
        return [d for d in documents if allowed(d.plugin, wl)]
