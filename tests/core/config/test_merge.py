# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Este módulo valida o comportamento de `deep_merge` e `merge_documents`,
responsáveis por reconciliar as contribuições de várias fontes para o
mesmo plugin, na ordem de registro das fontes.

Os testes asseguram que:
- valores escalares são sobrescritos pela fonte posterior
- dicionários são mesclados de forma recursiva
- listas são substituídas integralmente
- conflitos de tipo deixam a entrada vencer (ou falham em modo estrito)
- `{}` é elemento neutro
- objetos de entrada não são mutados durante o merge

Invariantes:
    - A estrutura resultante reflete exatamente a política declarada
    - Chaves não sobrescritas são preservadas
    - Nenhum merge parcial é produzido em caso de erro

Limites explícitos:
    - Não valida carregamento de fontes
    - Não valida hashing de configuração
"""

import pytest

try:
    from plugx_config.core.config.merge import deep_merge, merge_documents
    from plugx_config.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    merge_documents = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `ConfigTypeConflictError` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/plugx_config/core/config/merge.py (deep_merge, merge_documents)\n"
            "- src/plugx_config/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    """
    Override de escalar: `{"k": 1}` seguido de `{"k": 2}` resulta em `{"k": 2}`.

    Invariantes:
        - O valor sobrescrito reflete exatamente a fonte posterior
        - `base` e `override` não sofrem mutação
    """
    _require_imports()
    base = {"k": 1, "b": 2}
    override = {"k": 2}
    out = deep_merge(base, override)
    assert out == {"k": 2, "b": 2}
    assert base == {"k": 1, "b": 2}
    assert override == {"k": 2}


def test_merge_nested_dict():
    """
    Verifica que dicionários aninhados são mesclados recursivamente.

    `{"a": {"x": 1}}` ⊕ `{"a": {"y": 2}}` → `{"a": {"x": 1, "y": 2}}`
    """
    _require_imports()
    out = deep_merge({"a": {"x": 1}}, {"a": {"y": 2}})
    assert out == {"a": {"x": 1, "y": 2}}


def test_merge_list_override_total():
    """
    Verifica que listas são substituídas integralmente (nunca concatenadas).
    """
    _require_imports()
    out = deep_merge({"l": [1, 2]}, {"l": [3]})
    assert out == {"l": [3]}


def test_merge_empty_map_is_identity():
    _require_imports()
    doc = {"server": {"port": 8080, "hosts": ["a", "b"]}, "debug": None}
    assert deep_merge(doc, {}) == doc
    assert deep_merge({}, doc) == doc


def test_merge_type_mismatch_incoming_wins():
    """
    Conflito map vs. escalar não é erro por padrão: a fonte posterior vence.
    """
    _require_imports()
    assert deep_merge({"engine": {"fail_fast": True}}, {"engine": "DEBUG"}) == {"engine": "DEBUG"}
    assert deep_merge({"engine": "DEBUG"}, {"engine": {"fail_fast": True}}) == {"engine": {"fail_fast": True}}
    assert deep_merge({"n": 1}, {"n": "one"}) == {"n": "one"}


def test_merge_type_conflict_raises_in_strict_mode():
    """
    Com `strict=True`, map vs. não-map é erro estrutural localizado.
    """
    _require_imports()
    base = {"engine": {"fail_fast": True}}
    override = {"engine": "DEBUG"}
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge(base, override, strict=True, path=("foo",))
    assert exc.value.path == ("foo", "engine")
    assert exc.value.existing_type == "dict"
    assert exc.value.incoming_type == "str"
    assert "[foo][engine]" in str(exc.value)


def test_merge_strict_allows_scalar_type_changes():
    _require_imports()
    assert deep_merge({"n": 1}, {"n": "one"}, strict=True) == {"n": "one"}


def test_merge_result_shares_no_nodes_with_inputs():
    _require_imports()
    base = {"a": {"x": [1, 2]}}
    override = {"b": {"y": {"z": 1}}}
    out = deep_merge(base, override)
    out["a"]["x"].append(3)
    out["b"]["y"]["z"] = 99
    assert base == {"a": {"x": [1, 2]}}
    assert override == {"b": {"y": {"z": 1}}}


def test_merge_documents_is_left_fold_in_order():
    """
    Merge de `[A, B, C]` equivale a `(A ⊕ B) ⊕ C` a partir de `{}`.
    """
    _require_imports()
    a = {"server": {"host": "a", "port": 1}}
    b = {"server": {"port": 2}, "tags": ["b"]}
    c = {"server": {"host": "c"}, "tags": ["c"]}

    folded = merge_documents([a, b, c])
    pairwise = deep_merge(deep_merge(deep_merge({}, a), b), c)

    assert folded == pairwise == {"server": {"host": "c", "port": 2}, "tags": ["c"]}


def test_merge_documents_empty_sequence():
    _require_imports()
    assert merge_documents([]) == {}
