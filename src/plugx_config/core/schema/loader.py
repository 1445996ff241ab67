"""Loader canônico de schemas (YAML/JSON/TOML/...).

Notas:
- Schemas são documentos do modelo de valores: qualquer parser registrado serve.
- O formato é inferido pela extensão do arquivo.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

from plugx_config.core.loaders.base import format_from_suffix
from plugx_config.core.parsers import ParserRegistry, default_parsers
from plugx_config.core.sources.types import RawDocument

from .authoring import parse_schema
from .errors import SchemaDefinitionError
from .model import SchemaNode


def load_schema(path: Union[str, Path], *, parsers: Optional[ParserRegistry] = None) -> SchemaNode:
    """Carrega e converte um arquivo de schema.

    Raises:
        FileNotFoundError: se o arquivo não existir.
        UnsupportedFormatError: se a extensão não tiver parser registrado.
        ParseError: se o conteúdo for malformado.
        SchemaDefinitionError: se o schema não for estruturalmente válido.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"schema file not found: {p}")

    registry = parsers
    if registry is None:
        registry = ParserRegistry()
        for parser in default_parsers():
            registry.register(parser)

    raw = RawDocument(contents=p.read_bytes(), origin=str(p), format=format_from_suffix(p) or p.suffix)
    data = registry.parse(raw)
    if data == {}:
        raise SchemaDefinitionError(f"schema file is empty: {p}")
    return parse_schema(data)


def load_schema_directory(path: Union[str, Path], *, parsers: Optional[ParserRegistry] = None) -> Dict[str, SchemaNode]:
    """Carrega `<plugin>.<ext>` de um diretório como schemas por plugin."""
    schemas: Dict[str, SchemaNode] = {}
    for entry in sorted(Path(path).iterdir()):
        if entry.is_file() and format_from_suffix(entry):
            plugin = entry.stem.strip().lower()
            if plugin in schemas:
                raise SchemaDefinitionError(f"duplicate schema for plugin {plugin!r}: {entry.name}")
            schemas[plugin] = load_schema(entry, parsers=parsers)
    return schemas
