"""plugx-config — Schema (core).

Componentes canônicos do **SchemaNode v1**:
 - modelo declarativo (`SchemaNode`, `SchemaType`)
 - autoria a partir de Values (`parse_schema`) e arquivos (`load_schema`)
 - validação com defaults e erros localizados (`validate`)
"""

from .errors import (  # noqa: F401
    SchemaError,
    SchemaDefinitionError,
    ValidationError,
    TypeMismatchError,
    MissingFieldError,
    RangeViolationError,
    EnumViolationError,
    DomainParseError,
)

from .model import MISSING, SchemaNode, SchemaType  # noqa: F401
from .validate import validate  # noqa: F401
from .authoring import parse_schema  # noqa: F401
from .loader import load_schema, load_schema_directory  # noqa: F401
