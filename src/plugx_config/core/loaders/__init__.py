"""plugx-config — Loaders.

Adaptadores finos que transformam uma `Source` em `RawDocument`:
 - `FileSystemLoader` (fs://, file://)
 - `EnvironmentLoader` (env://)
 - `HttpLoader` (http://, https://)
 - `CallableLoader` (esquemas definidos pelo chamador)
"""

from .base import Loader, format_from_suffix  # noqa: F401
from .closure import CallableLoader  # noqa: F401
from .env import EnvironmentLoader  # noqa: F401
from .fs import FileSystemLoader  # noqa: F401
from .http import HttpLoader  # noqa: F401


def default_loaders():
    """Loaders registrados por padrão no orquestrador."""
    return [FileSystemLoader(), EnvironmentLoader(), HttpLoader()]
