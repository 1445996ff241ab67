# src/plugx_config/core/loaders/env.py
"""
Loader de variáveis de ambiente (`env://`).

Este módulo define o `EnvironmentLoader`, que transforma variáveis de
ambiente em um único documento dotenv não vinculado, cujas chaves de topo
(após remover o prefixo) são nomes de plugins.

Exemplo (prefix=APP, separador padrão `__`):
    APP__FOO__SERVER__PORT=9090   →   FOO__SERVER__PORT="9090"
    (o parser `env` produz {"foo": {"server": {"port": 9090}}})

Opções (locator > construtor):
    - prefix: prefixo obrigatório das variáveis (padrão: nenhum)
    - key_separator: separador de níveis (padrão: `__`)

Decisões arquiteturais:
    - O ambiente é injetável (`environ=`) para testes determinísticos
    - Variáveis sem pelo menos `PLUGIN<sep>CHAVE` são ignoradas
      (com `plugin=` no locator, basta `CHAVE`)
    - A ordem das linhas é estável (ordenada por chave)

Limites explícitos:
    - Não converte tipos (responsabilidade do parser `env`)
    - Não lê arquivos `.env` (use `file://` com formato `env`)
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Mapping, Optional

from plugx_config.core.sources.types import RawDocument, Source

from .base import allowed

logger = logging.getLogger(__name__)

DEFAULT_KEY_SEPARATOR = "__"


def _quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


class EnvironmentLoader:
    """Carrega configuração de variáveis de ambiente."""

    name = "Environment-Variables"
    schemes = ("env",)

    def __init__(
        self,
        *,
        prefix: Optional[str] = None,
        key_separator: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.prefix = prefix
        self.key_separator = key_separator
        self._environ = environ

    def load(self, source: Source, whitelist: Optional[Iterable[str]] = None) -> List[RawDocument]:
        prefix = source.option("prefix", self.prefix) or ""
        separator = source.option("key_separator", self.key_separator) or DEFAULT_KEY_SEPARATOR
        environ = os.environ if self._environ is None else self._environ
        allowed_plugins = None if whitelist is None else set(whitelist)

        min_parts = 1 if source.plugin else 2
        lines = []
        for key in sorted(environ):
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix):]
            if prefix and stripped.startswith(separator):
                stripped = stripped[len(separator):]

            parts = stripped.split(separator)
            if len(parts) < min_parts or any(not p for p in parts):
                continue

            plugin = source.plugin or parts[0].lower()
            if not allowed(plugin, allowed_plugins):
                continue
            lines.append(f"{stripped}={_quote(environ[key])}")

        logger.debug("loaded %d environment variables with prefix %r", len(lines), prefix)
        return [
            RawDocument(
                contents="\n".join(lines).encode("utf-8"),
                origin=source.locator,
                format=source.format or "env",
                plugin=source.plugin,
                options={"key_separator": separator},
            )
        ]
