"""plugx-config — Sources (core).

Componentes canônicos do registro de fontes:
 - tipos imutáveis (`Source`, `RawDocument`, `PluginDocument`, `LoadErrorKind`)
 - parsing de locators (`parse_locator`)
 - registro ordenado de fontes e tabela de loaders (`SourceRegistry`)
"""

from .types import LoadErrorKind, PluginDocument, RawDocument, Source  # noqa: F401
from .errors import (  # noqa: F401
    SourceError,
    InvalidLocatorError,
    UnknownSchemeError,
    DuplicateSchemeError,
    LoadError,
)
from .locator import parse_locator, parse_skippable  # noqa: F401
from .registry import SourceRegistry  # noqa: F401
