# src/plugx_config/core/engine/orchestrator.py
"""
Orchestrator canônico do plugx-config.

Conduz o pipeline de agregação de configuração:

    para cada fonte, em ordem de registro:
        load (respeitando falhas puláveis) → parse → atribuição a plugins
    merge por plugin (fold na ordem das fontes)
    validação opcional por plugin (run_and_validate)

Máquina de estados:
    BUILT → LOADING → PARSING → MERGING → (VALIDATING) → READY | FAILED

Decisões arquiteturais:
    - Execução síncrona e sequencial: a correção do merge depende da ordem
    - O primeiro erro não pulável aborta a run (fail-fast); fontes
      seguintes não são tentadas
    - Cada run usa um `RunContext` novo; nada da run anterior é reutilizado
    - A MergedConfiguration só é publicada ao final de uma run bem-sucedida,
      substituindo a anterior por inteiro
    - Falhas são registradas como `ErrorPayload` em `last_run` e propagadas

Invariantes:
    - Leitores recebem apenas snapshots imutáveis (`configuration`)
    - Plugins sem nenhuma contribuição não aparecem no resultado
    - Plugins sem schema passam pela validação inalterados

Limites explícitos:
    - Não observa fontes (reload é um novo `run()` explícito)
    - Não persiste configuração
    - Não impõe timeout (responsabilidade de cada loader)
"""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from plugx_config.core.config.hashing import compute_plugin_hashes
from plugx_config.core.config.merge import merge_documents
from plugx_config.core.errors import error_to_payload
from plugx_config.core.loaders import default_loaders
from plugx_config.core.loaders.base import Loader
from plugx_config.core.parsers import default_parsers
from plugx_config.core.parsers.base import Parser
from plugx_config.core.parsers.registry import ParserRegistry
from plugx_config.core.schema.authoring import parse_schema
from plugx_config.core.schema.model import SchemaNode
from plugx_config.core.schema.validate import validate
from plugx_config.core.sources.errors import LoadError
from plugx_config.core.sources.registry import SourceRegistry
from plugx_config.core.sources.types import Source
from plugx_config.core.value.model import Value

from .attribution import attribute
from .context import RunContext
from .errors import WhitelistEnvironmentError
from .types import PipelineState, RunResult

logger = logging.getLogger(__name__)

SchemaLike = Union[SchemaNode, Value]


def _split_whitelist(text: str) -> List[str]:
    return [part for part in text.replace(",", " ").replace(";", " ").lower().split() if part]


class Orchestrator:
    """
    Orchestrator de configuração de plugins (caller-owned, sem singletons).

    Args:
        loaders: loaders iniciais (padrão: fs/file, env, http/https).
        parsers: parsers iniciais (padrão: json, yaml, toml, env, qs).
        whitelist: plugins permitidos (None = todos).
        strict_merge: se True, map vs. não-map no merge é erro.
    """

    def __init__(
        self,
        *,
        loaders: Optional[Sequence[Loader]] = None,
        parsers: Optional[Sequence[Parser]] = None,
        whitelist: Optional[Iterable[str]] = None,
        strict_merge: bool = False,
    ):
        self._sources = SourceRegistry()
        self._parsers = ParserRegistry()
        for loader in default_loaders() if loaders is None else loaders:
            self._sources.register_loader(loader)
        for parser in default_parsers() if parsers is None else parsers:
            self._parsers.register(parser)

        self._whitelist: Optional[List[str]] = None
        if whitelist is not None:
            self.set_whitelist(whitelist)

        self.strict_merge = strict_merge
        self._state = PipelineState.BUILT
        self._configuration: Dict[str, Value] = {}
        self._last_run: Optional[RunResult] = None
        self._last_error: Optional[BaseException] = None

    # ------------------------------------------------------------------
    # Registro
    # ------------------------------------------------------------------
    def register_loader(self, loader: Loader, *, replace_existing: bool = False) -> None:
        self._sources.register_loader(loader, replace_existing=replace_existing)

    def register_parser(self, parser: Parser, *, replace_existing: bool = False) -> None:
        self._parsers.register(parser, replace_existing=replace_existing)

    def add_source(self, locator: str) -> Source:
        """Registra uma fonte. Locator inválido ou esquema desconhecido são fatais."""
        source = self._sources.register(locator)
        logger.debug("registered source #%d %s", source.index, source)
        return source

    def add_source_with_loader(self, locator: str, loader: Loader) -> Source:
        """Registra uma fonte atendida por um loader dedicado (esquema livre)."""
        source = self._sources.register(locator, loader=loader)
        logger.debug("registered source #%d %s (loader %s)", source.index, source, loader.name)
        return source

    def has_source(self, locator: str) -> bool:
        return self._sources.has(locator)

    @property
    def sources(self) -> List[Source]:
        return self._sources.list()

    # ------------------------------------------------------------------
    # Whitelist
    # ------------------------------------------------------------------
    @property
    def whitelist(self) -> Optional[List[str]]:
        return None if self._whitelist is None else list(self._whitelist)

    def set_whitelist(self, plugins: Iterable[str]) -> None:
        self._whitelist = [p.strip().lower() for p in plugins if p.strip()]

    def add_to_whitelist(self, plugin: str) -> None:
        if self._whitelist is None:
            self._whitelist = []
        self._whitelist.append(plugin.strip().lower())

    def clear_whitelist(self) -> None:
        self._whitelist = None

    def load_whitelist_from_env(self, key: str, *, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ
        if key not in env:
            raise WhitelistEnvironmentError(key)
        plugins = _split_whitelist(env[key])
        if not plugins:
            logger.warning("whitelist environment variable %r is set to empty", key)
        self.set_whitelist(plugins)

    # ------------------------------------------------------------------
    # Estado publicado
    # ------------------------------------------------------------------
    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def configuration(self) -> Mapping[str, Value]:
        """Snapshot imutável da última MergedConfiguration publicada."""
        return MappingProxyType(deepcopy(self._configuration))

    @property
    def last_run(self) -> Optional[RunResult]:
        return self._last_run

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(self, *, skip_soft_errors: bool = True) -> Dict[str, Value]:
        """Executa load → parse → merge e publica a MergedConfiguration.

        Raises:
            LoadError: falha de carregamento não pulável.
            ParseError: conteúdo malformado (nunca pulável).
            InvalidDocumentRootError: documento de plugin sem map na raiz.
            ConfigTypeConflictError: conflito de tipos com `strict_merge`.
        """
        return self._execute(None, skip_soft_errors=skip_soft_errors)

    def run_and_validate(
        self,
        schemas: Mapping[str, SchemaLike],
        *,
        skip_soft_errors: bool = True,
    ) -> Dict[str, Value]:
        """Executa o pipeline e valida cada plugin contra seu schema.

        Schemas podem ser `SchemaNode` ou sua forma autorada (Value).
        A primeira violação aborta a chamada (fail-fast).

        Raises:
            SchemaDefinitionError: schema autorado inválido.
            ValidationError: primeira violação encontrada (com caminho completo).
        """
        return self._execute(schemas, skip_soft_errors=skip_soft_errors)

    def _execute(self, schemas: Optional[Mapping[str, SchemaLike]], *, skip_soft_errors: bool) -> Dict[str, Value]:
        ctx = RunContext.new(sources=len(self._sources), validate=schemas is not None)
        skipped: List[str] = []
        self._state = PipelineState.LOADING
        ctx.log(stage="run", level="info", message="pipeline run started", sources=len(self._sources))

        try:
            nodes = None if schemas is None else self._schema_nodes(schemas)
            self._collect(ctx, skipped, skip_soft_errors=skip_soft_errors)
            configuration = self._merge(ctx)
            if nodes is not None:
                configuration = self._validate(ctx, configuration, nodes)
        except Exception as e:
            self._fail(ctx, skipped, e)
            raise

        self._publish(ctx, skipped, configuration)
        return deepcopy(configuration)

    def _schema_nodes(self, schemas: Mapping[str, SchemaLike]) -> Dict[str, SchemaNode]:
        return {name.strip().lower(): parse_schema(schema, path=(name,)) for name, schema in schemas.items()}

    def _collect(self, ctx: RunContext, skipped: List[str], *, skip_soft_errors: bool) -> None:
        for source in self._sources.list():
            loader = self._sources.resolve_loader(source)
            # sem soft errors, nem o loader pode pular entradas internas
            request = source if skip_soft_errors else replace(source, skippable=frozenset())

            self._state = PipelineState.LOADING
            try:
                documents = loader.load(request, self._whitelist)
            except LoadError as e:
                if not (skip_soft_errors and source.is_skippable(e.kind)):
                    raise
                skipped.append(source.locator)
                ctx.add_warning(origin=source.locator, message=str(e))
                ctx.log(
                    stage="load",
                    level="warning",
                    message=f"skipped source {source}: {e.reason}",
                    source=source.locator,
                    kind=e.kind.value,
                )
                continue

            ctx.log(
                stage="load",
                level="debug",
                message=f"loaded {len(documents)} document(s) from {source}",
                source=source.locator,
                loader=loader.name,
            )

            self._state = PipelineState.PARSING
            for raw in documents:
                value = self._parsers.parse(raw)
                for document in attribute(raw, value, whitelist=self._whitelist, source_index=source.index):
                    ctx.contribute(document)

    def _merge(self, ctx: RunContext) -> Dict[str, Value]:
        self._state = PipelineState.MERGING
        configuration: Dict[str, Value] = {}
        for plugin in ctx.plugins():
            documents = ctx.contributions[plugin]
            configuration[plugin] = merge_documents(
                (d.value for d in documents),
                strict=self.strict_merge,
                path=(plugin,),
            )
            ctx.log(
                stage="merge",
                level="debug",
                message=f"merged {len(documents)} contribution(s) for plugin {plugin!r}",
                plugin=plugin,
                origins=[d.origin for d in documents],
            )
        return configuration

    def _validate(
        self,
        ctx: RunContext,
        configuration: Dict[str, Value],
        nodes: Dict[str, SchemaNode],
    ) -> Dict[str, Value]:
        self._state = PipelineState.VALIDATING
        validated: Dict[str, Value] = {}
        for plugin, value in configuration.items():
            node = nodes.get(plugin)
            if node is None:
                validated[plugin] = value
                continue
            validated[plugin] = validate(value, node, path=(plugin,))
            ctx.log(stage="validate", level="debug", message=f"plugin {plugin!r} is valid", plugin=plugin)
        return validated

    def _publish(self, ctx: RunContext, skipped: List[str], configuration: Dict[str, Value]) -> None:
        self._configuration = configuration
        self._state = PipelineState.READY
        self._last_error = None
        hashes = compute_plugin_hashes(configuration)
        ctx.log(stage="run", level="info", message="pipeline run finished", plugins=sorted(configuration))
        self._last_run = RunResult(
            run_id=ctx.run_id,
            state=PipelineState.READY,
            configuration=deepcopy(configuration),
            hashes=hashes,
            skipped=list(skipped),
            events=list(ctx.events),
        )

    def _fail(self, ctx: RunContext, skipped: List[str], exc: BaseException) -> None:
        payload = error_to_payload(exc)
        failed_at = self._state.value
        self._state = PipelineState.FAILED
        self._last_error = exc
        ctx.log(stage=failed_at, level="error", message=payload.message, error_type=payload.type)
        self._last_run = RunResult(
            run_id=ctx.run_id,
            state=PipelineState.FAILED,
            skipped=list(skipped),
            events=list(ctx.events),
            error=payload,
        )

    def __repr__(self) -> str:
        return f"Orchestrator(state={self._state.value}, sources={len(self._sources)})"

