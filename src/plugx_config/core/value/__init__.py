"""plugx-config — Value (core).

Modelo de valores recursivo compartilhado por parsers, merge e validação:
 - classificação (`ValueKind`, `kind_of`)
 - normalização de saídas de parsers (`to_value`)
 - caminhos de localização (`render_path`)
"""

from .path import Path, PathItem, render_path  # noqa: F401
from .model import (  # noqa: F401
    Value,
    ValueKind,
    is_map,
    kind_of,
    to_value,
    type_name,
)
