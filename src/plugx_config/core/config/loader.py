# src/plugx_config/core/config/loader.py
"""
Carregamento de configuração em uma única chamada.

Atalho sobre o `Orchestrator` para o caso comum: uma lista fixa de
locators, resolvida uma vez, opcionalmente validada.

Política de resolução:
    - Fontes são aplicadas na ordem informada (a última tem prioridade)
    - Falhas puláveis seguem a opção `skippable` de cada locator
    - Com `schemas`, cada plugin com schema é validado (fail-fast)

Limites explícitos:
    - Não mantém estado entre chamadas (para reload, use o Orchestrator)
    - Não registra loaders ou parsers além dos padrões
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from plugx_config.core.engine.orchestrator import Orchestrator, SchemaLike


def load_config(
    *,
    locators: Iterable[str],
    schemas: Optional[Mapping[str, SchemaLike]] = None,
    whitelist: Optional[Iterable[str]] = None,
    skip_soft_errors: bool = True,
    strict_merge: bool = False,
) -> Dict[str, Any]:
    """
    Carrega, mescla e (opcionalmente) valida a configuração dos plugins.

    Args:
        locators (Iterable[str]): Fontes, em ordem crescente de prioridade.
        schemas (Optional[Mapping[str, SchemaLike]]): Schema por plugin.
        whitelist (Optional[Iterable[str]]): Plugins permitidos.
        skip_soft_errors (bool): Se False, ignora `skippable` dos locators.
        strict_merge (bool): Se True, map vs. não-map é erro de merge.

    Returns:
        Dict[str, Any]: MergedConfiguration (plugin → documento).

    Raises:
        InvalidLocatorError: Se algum locator for inválido.
        UnknownSchemeError: Se algum esquema não tiver loader.
        LoadError: Se uma fonte falhar sem ser pulável.
        ParseError: Se um documento for malformado.
        ValidationError: Se algum plugin violar seu schema.
    """
    orchestrator = Orchestrator(whitelist=whitelist, strict_merge=strict_merge)
    for locator in locators:
        orchestrator.add_source(locator)

    if schemas is None:
        return orchestrator.run(skip_soft_errors=skip_soft_errors)
    return orchestrator.run_and_validate(schemas, skip_soft_errors=skip_soft_errors)
