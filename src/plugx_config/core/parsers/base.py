# src/plugx_config/core/parsers/base.py
"""
Contrato canônico de um Parser do plugx-config.

Um Parser transforma os bytes de um `RawDocument` em um Value. Parsers são
colaboradores externos do pipeline: o core conhece apenas este protocolo
e a tabela `formato → Parser` (ver `registry`).

Este módulo também concentra utilitários compartilhados pelos parsers de
"saco plano" de chaves (dotenv e query string), que expandem chaves com
separador em maps aninhados.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from plugx_config.core.sources.types import RawDocument
from plugx_config.core.value.model import Value
from plugx_config.core.value.path import render_path

from .errors import ParseError


@runtime_checkable
class Parser(Protocol):
    """
    Contrato canônico de um Parser.

    Atributos obrigatórios:
        - name: nome legível do parser
        - formats: formatos canônicos atendidos (ex.: ["json"])

    Atributo opcional:
        - supports(contents) -> bool: detecta se os bytes pertencem ao
          formato; usado quando o documento não traz dica de formato

    Decisões arquiteturais:
        - Parsers são puros: sem I/O, sem estado entre chamadas
        - Falhas são sinalizadas com `ParseError`
        - A saída é normalizada pelo registry (`to_value`)
    """
    name: str
    formats: Sequence[str]

    def parse(self, raw: RawDocument) -> Any:
        """Converte o documento bruto em uma árvore de valores."""
        ...


def decode_text(raw: RawDocument, fmt: str) -> str:
    try:
        return raw.contents.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(
            "could not decode contents as UTF-8",
            origin=raw.origin,
            format=fmt,
            byte_offset=e.start,
        ) from e


def try_decode(contents: bytes) -> Optional[str]:
    """Texto UTF-8 (BOM tolerado) ou None; usado pela detecção de formato."""
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError:
        return None


def _reject_constant(name: str) -> Any:
    raise ValueError(name)


def decode_scalar(text: str) -> Value:
    """Interpreta um valor textual como JSON quando possível, senão string.

    `"9090"` → 9090, `"false"` → False, `"[1, 2]"` → [1, 2], `"localhost"` → "localhost".
    NaN/Infinity não são aceitos como números.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text


def build_nested(
    pairs: Iterable[Tuple[List[str], Value]],
    *,
    origin: str,
    fmt: str,
) -> Dict[str, Any]:
    """Expande pares (lista de chaves, valor) em um map aninhado.

    Chaves vazias são ignoradas. Um caminho que atravessa um escalar já
    definido é erro de parsing.
    """
    root: Dict[str, Any] = {}
    for keys, value in pairs:
        if not keys or any(not k for k in keys):
            continue

        node = root
        walked: List[str] = []
        for key in keys[:-1]:
            walked.append(key)
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise ParseError(
                    f"{render_path(tuple(walked))} already holds a {type(child).__name__}, "
                    f"cannot nest {'.'.join(keys)}",
                    origin=origin,
                    format=fmt,
                )
            node = child
        node[keys[-1]] = value
    return root
