"""plugx-config — Parsers.

Adaptadores finos `RawDocument → Value` despachados por formato:
 - json (stdlib), yaml (PyYAML), toml (tomllib), env (python-dotenv), qs (urllib)
 - `CallableParser` para formatos definidos pelo chamador
"""

from .errors import ParseError, UnsupportedFormatError, InvalidDocumentRootError, InvalidPluginNameError  # noqa: F401
from .base import Parser  # noqa: F401
from .closure import CallableParser  # noqa: F401
from .env_parser import EnvParser  # noqa: F401
from .json_parser import JsonParser  # noqa: F401
from .qs_parser import QueryStringParser  # noqa: F401
from .toml_parser import TomlParser  # noqa: F401
from .yaml_parser import YamlParser  # noqa: F401
from .registry import ParserRegistry, normalize_format  # noqa: F401


def default_parsers():
    """Parsers registrados por padrão no orquestrador."""
    return [JsonParser(), YamlParser(), TomlParser(), EnvParser(), QueryStringParser()]
