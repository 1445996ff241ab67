"""Erros canônicos do domínio de fontes (plugx-config).

Falhas de configuração das fontes (locator inválido, esquema desconhecido)
são sempre fatais e ocorrem no registro. Falhas de carregamento carregam
uma `LoadErrorKind` e podem ser puladas conforme a política da fonte.
"""

from __future__ import annotations

from typing import Optional

from plugx_config.core.exceptions import PlugxConfigError

from .types import LoadErrorKind


class SourceError(PlugxConfigError):
    """Erro base do domínio de fontes."""


class InvalidLocatorError(SourceError):
    """Locator sintaticamente inválido ou com opções universais inválidas."""

    hint = "Use o formato scheme://authority/path?option=value"

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(
            f"invalid locator {locator!r}: {reason}",
            details={"locator": locator, "reason": reason},
        )


class UnknownSchemeError(SourceError):
    """Nenhum loader registrado para o esquema do locator."""

    hint = "Registre um loader para o esquema antes de adicionar a fonte."

    def __init__(self, scheme: str, locator: Optional[str] = None):
        self.scheme = scheme
        self.locator = locator
        super().__init__(
            f"no configuration loader registered for scheme {scheme!r}",
            details={"scheme": scheme, "locator": locator},
        )


class DuplicateSchemeError(SourceError):
    """Esquema já possui loader registrado."""

    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(
            f"scheme {scheme!r} already has a registered loader",
            details={"scheme": scheme},
        )


class LoadError(SourceError):
    """Falha de carregamento de uma fonte (pulável conforme `Source.skippable`)."""

    def __init__(self, kind: LoadErrorKind, *, origin: str, reason: str, loader: Optional[str] = None):
        self.kind = LoadErrorKind(kind)
        self.origin = origin
        self.reason = reason
        self.loader = loader
        prefix = f"{loader} loader" if loader else "loader"
        super().__init__(
            f"{prefix} could not load {origin!r} ({self.kind.value}): {reason}",
            details={
                "kind": self.kind.value,
                "origin": origin,
                "reason": reason,
                "loader": loader,
            },
        )
