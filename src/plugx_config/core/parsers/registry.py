# src/plugx_config/core/parsers/registry.py
"""
Despacho de parsers por formato.

Este módulo define o `ParserRegistry`, a tabela de capacidades
`formato → Parser` utilizada pelo orquestrador para interpretar cada
`RawDocument` carregado.

Responsabilidades do módulo:
    - Normalizar dicas de formato (aliases e MIME types)
    - Resolver o parser de um documento
    - Normalizar a saída dos parsers para o modelo de valores

Decisões arquiteturais:
    - Parsers são registrados explicitamente (sem descoberta global)
    - Sem dica de formato, os parsers são consultados (`supports`) na ordem
      de registro; o primeiro que reconhece o conteúdo é usado
    - Formato não detectado ou desconhecido é erro de parsing (nunca pulável)
    - Documento vazio (apenas espaços) é interpretado como map vazio

Invariantes:
    - Cada formato canônico possui no máximo um parser
    - A saída de `parse` pertence sempre ao modelo fechado de valores

Limites explícitos:
    - Não carrega documentos
    - Não atribui documentos a plugins
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from plugx_config.core.exceptions import InvalidValueError
from plugx_config.core.sources.types import RawDocument
from plugx_config.core.value.model import Value, to_value

from .base import Parser
from .errors import ParseError, UnsupportedFormatError

logger = logging.getLogger(__name__)

_ALIASES = {
    "yml": "yaml",
    "application/json": "json",
    "text/json": "json",
    "application/yaml": "yaml",
    "application/x-yaml": "yaml",
    "text/yaml": "yaml",
    "text/x-yaml": "yaml",
    "application/toml": "toml",
    "text/x-toml": "toml",
    "dotenv": "env",
    "text/x-dotenv": "env",
    "application/x-www-form-urlencoded": "qs",
    "querystring": "qs",
    "query-string": "qs",
}


def normalize_format(hint: Optional[str]) -> Optional[str]:
    """Converte uma dica de formato (extensão, alias ou MIME) no formato canônico."""
    if hint is None:
        return None
    fmt = hint.split(";", 1)[0].strip().lower().lstrip(".")
    if not fmt:
        return None
    if fmt in _ALIASES:
        return _ALIASES[fmt]
    if fmt.endswith("+json"):
        return "json"
    if fmt.endswith("+yaml"):
        return "yaml"
    return fmt


@dataclass
class ParserRegistry:
    """Registro canônico de parsers indexado por formato."""

    _parsers: Dict[str, Parser] = field(default_factory=dict, init=False, repr=False)

    def register(self, parser: Parser, *, replace_existing: bool = False) -> None:
        formats = [normalize_format(f) for f in getattr(parser, "formats", []) or []]
        formats = [f for f in formats if f]
        if not formats:
            raise ValueError("parser.formats must be a non-empty sequence")

        if not replace_existing:
            for fmt in formats:
                if fmt in self._parsers:
                    raise ValueError(f"format {fmt!r} already has a registered parser")

        for fmt in formats:
            self._parsers[fmt] = parser

    def formats(self) -> List[str]:
        return sorted(self._parsers)

    def detect(self, contents: bytes) -> Optional[Parser]:
        """Primeiro parser (em ordem de registro) que reconhece o conteúdo."""
        seen = set()
        for parser in self._parsers.values():
            if id(parser) in seen:
                continue
            seen.add(id(parser))
            supports = getattr(parser, "supports", None)
            if supports is not None and supports(contents):
                return parser
        return None

    def resolve(
        self,
        hint: Optional[str],
        *,
        origin: Optional[str] = None,
        contents: Optional[bytes] = None,
    ) -> Parser:
        fmt = normalize_format(hint)
        if fmt is None:
            parser = None if contents is None else self.detect(contents)
            if parser is None:
                raise UnsupportedFormatError("could not detect configuration format", origin=origin)
            logger.debug("detected format %s for %s", parser.formats[0], origin)
            return parser
        try:
            return self._parsers[fmt]
        except KeyError:
            raise UnsupportedFormatError(
                f"no parser registered for format {fmt!r}",
                origin=origin,
                format=fmt,
            ) from None

    def parse(self, raw: RawDocument) -> Value:
        if raw.format is None and not raw.contents.strip():
            return {}

        parser = self.resolve(raw.format, origin=raw.origin, contents=raw.contents)
        fmt = normalize_format(raw.format) or normalize_format(parser.formats[0])

        if not raw.contents.strip():
            return {}

        data = parser.parse(raw)
        try:
            return to_value(data)
        except InvalidValueError as e:
            raise ParseError(str(e), origin=raw.origin, format=fmt) from e
