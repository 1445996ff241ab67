# src/plugx_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
plugx-config para reconciliar as contribuições de várias fontes para o
mesmo plugin, na ordem de registro das fontes.

Política de merge (v1):
    - map + map → união por chave, merge recursivo para chaves em comum
    - list → substituição total (sem merge elemento a elemento)
    - escalar → substituição direta
    - conflito de tipos → a entrada mais recente vence
      (com `strict=True`, map vs. não-map é erro estrutural explícito)

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - Não existem heurísticas implícitas ou mágicas

Invariantes:
    - A mesma sequência de entradas sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
    - `{}` é elemento neutro: merge(x, {}) == x
    - Contribuições vazias (fontes puladas) não alteram o resultado

Limites explícitos:
    - Não carrega fontes de configuração
    - Não valida semântica de domínio
    - Não realiza coerção de tipos

Este módulo existe para garantir previsibilidade
e rastreabilidade na resolução de configuração.
"""

from copy import deepcopy
from typing import Any, Dict, Iterable

from plugx_config.core.value.model import Value
from plugx_config.core.value.path import Path

from .errors import ConfigTypeConflictError


def deep_merge(
    existing: Value,
    incoming: Value,
    *,
    strict: bool = False,
    path: Path = (),
) -> Value:
    """
    Realiza um deep-merge determinístico entre dois Values.

    Esta função combina o resultado acumulado (`existing`) com a contribuição
    de uma fonte posterior (`incoming`), produzindo uma nova estrutura sem
    mutar nenhum dos inputs.

    Política de merge (v1):
        - map + map  → merge recursivo por chave
        - list       → substituição total pela entrada
        - escalar    → substituição direta pela entrada
        - tipos diferentes → entrada vence (ou erro com `strict=True`
          quando um dos lados é map)

    Decisões arquiteturais:
        - "Fonte posterior sobrescreve" é aplicado de forma uniforme,
          inclusive em divergências de tipo
        - Listas nunca são combinadas posicionalmente

    Invariantes:
        - A estrutura retornada nunca compartilha nós com os inputs
        - O mesmo par (existing, incoming) sempre produz o mesmo resultado

    Args:
        existing (Value): Configuração acumulada até aqui.
        incoming (Value): Contribuição da próxima fonte.
        strict (bool): Se True, map vs. não-map levanta erro.
        path (Path): Caminho corrente (usado em mensagens de erro).

    Returns:
        Value: Novo Value resultante do merge.

    Raises:
        ConfigTypeConflictError: Em modo estrito, se houver conflito map vs. não-map.
    """

    if not isinstance(existing, dict) or not isinstance(incoming, dict):
        if strict and isinstance(existing, dict) != isinstance(incoming, dict):
            raise ConfigTypeConflictError(path=path, existing=existing, incoming=incoming)
        return deepcopy(incoming)

    result: Dict[str, Any] = deepcopy(existing)

    for key, incoming_value in incoming.items():
        if key not in result:
            result[key] = deepcopy(incoming_value)
            continue

        result[key] = deep_merge(
            result[key],
            incoming_value,
            strict=strict,
            path=path + (key,),
        )

    return result


def merge_documents(
    documents: Iterable[Value],
    *,
    strict: bool = False,
    path: Path = (),
) -> Dict[str, Any]:
    """Dobra (fold à esquerda) uma sequência ordenada de documentos a partir de `{}`."""
    merged: Value = {}
    for document in documents:
        merged = deep_merge(merged, document, strict=strict, path=path)
    return merged  # type: ignore[return-value]
