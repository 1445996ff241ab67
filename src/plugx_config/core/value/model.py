# src/plugx_config/core/value/model.py
"""
Modelo de valores compartilhado do plugx-config.

Este módulo define o `Value`, a estrutura recursiva produzida por todos
os parsers e consumida pelo merge e pela validação.

Um Value é representado por dados Python puros, restritos ao conjunto
fechado:
    - None                  → null
    - bool                  → boolean
    - int                   → integer
    - float                 → float
    - str                   → string
    - list[Value]           → list
    - dict[str, Value]      → map

Princípios fundamentais:
    - Conjunto fechado de tipos (não existe hierarquia aberta de classes)
    - Igualdade estrutural é a igualdade nativa do Python
    - Árvores são estritamente possuídas (sem ciclos, sem referências compartilhadas)

Responsabilidades do módulo:
    - Classificar um valor em seu `ValueKind`
    - Normalizar saídas arbitrárias de parsers para o modelo fechado
    - Produzir cópias independentes de árvores de valores

Invariantes:
    - `bool` nunca é classificado como `integer`
    - Chaves de map são sempre `str`
    - `to_value` sempre retorna uma árvore nova (nenhum nó é compartilhado com a entrada)

Limites explícitos:
    - Não realiza merge
    - Não valida contra schema
    - Não realiza coerção semântica (ex.: "8080" continua string)

Este módulo existe para garantir que todas as etapas do pipeline
operem sobre a mesma representação previsível de configuração.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Set, Union

from plugx_config.core.exceptions import InvalidValueError

from .path import Path, render_path

Value = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class ValueKind(str, Enum):
    """
    Tags canônicas do modelo de valores.

    Os valores são strings para facilitar:
        - mensagens de erro (esperado vs. recebido)
        - serialização em payloads de erro
        - autoria de schemas (`type: integer`)

    Invariantes:
        - Todo Value possui exatamente um `ValueKind`
        - O valor textual do enum é estável e canônico
    """
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    MAP = "map"


def kind_of(value: Any) -> ValueKind:
    """
    Retorna a tag do Value informado.

    Raises:
        InvalidValueError: Se o objeto não pertencer ao modelo fechado.
    """
    if value is None:
        return ValueKind.NULL
    # bool precede int: bool é subclasse de int em Python
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.MAP
    raise InvalidValueError(
        f"unsupported value type: {type(value).__name__}",
        details={"python_type": type(value).__name__},
    )


def type_name(value: Any) -> str:
    return kind_of(value).value


def is_map(value: Any) -> bool:
    return isinstance(value, dict)


def to_value(obj: Any, *, path: Path = ()) -> Value:
    """
    Normaliza um objeto arbitrário (saída de parser) para o modelo fechado.

    Política de normalização (v1):
        - tuple → list
        - datetime / date / time → string ISO-8601 (YAML e TOML os produzem)
        - dict com chave não-string → erro
        - ciclos → erro
        - qualquer outro tipo → erro

    Decisões arquiteturais:
        - A saída é sempre uma árvore nova, nunca compartilhada com a entrada
        - Nenhuma coerção semântica é aplicada a escalares

    Args:
        obj (Any): Objeto produzido por um parser ou loader customizado.
        path (Path): Caminho corrente (usado apenas em mensagens de erro).

    Returns:
        Value: Árvore normalizada e independente.

    Raises:
        InvalidValueError: Se o objeto não puder ser representado como Value.
    """
    return _to_value(obj, path, set())


def _to_value(obj: Any, path: Path, active: Set[int]) -> Value:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()

    if isinstance(obj, (dict, list, tuple)):
        marker = id(obj)
        if marker in active:
            raise InvalidValueError(
                f"cyclic value at {render_path(path)}",
                details={"path": list(path)},
            )
        active.add(marker)
        try:
            if isinstance(obj, dict):
                result: Dict[str, Any] = {}
                for key, item in obj.items():
                    if not isinstance(key, str):
                        raise InvalidValueError(
                            f"map key must be a string at {render_path(path)}, "
                            f"got {type(key).__name__}",
                            details={"path": list(path), "key": repr(key)},
                        )
                    result[key] = _to_value(item, path + (key,), active)
                return result
            return [_to_value(item, path + (i,), active) for i, item in enumerate(obj)]
        finally:
            active.discard(marker)

    raise InvalidValueError(
        f"unsupported value type at {render_path(path)}: {type(obj).__name__}",
        details={"path": list(path), "python_type": type(obj).__name__},
    )
