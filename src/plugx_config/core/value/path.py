"""Caminhos de localização dentro de um Value.

Um caminho é uma tupla de chaves de map (`str`) e índices de lista (`int`),
sempre relativo à raiz do documento de um plugin (o primeiro elemento,
quando presente, é o nome do plugin).
"""

from __future__ import annotations

from typing import Tuple, Union

PathItem = Union[str, int]
Path = Tuple[PathItem, ...]


def render_path(path: Path) -> str:
    """Renderiza um caminho no formato `[plugin][section][0]`.

    A raiz (caminho vazio) é renderizada como `[]`.
    """
    if not path:
        return "[]"
    return "".join(f"[{item}]" for item in path)
