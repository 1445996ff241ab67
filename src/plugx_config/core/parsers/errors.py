"""Erros canônicos do domínio de parsing (plugx-config).

Conteúdo malformado de uma fonte explicitamente configurada é sempre
reportado: erros de parsing nunca são puláveis.
"""

from __future__ import annotations

from typing import Optional

from plugx_config.core.exceptions import PlugxConfigError


class ParseError(PlugxConfigError):
    """Falha ao converter bytes de um documento em Value."""

    def __init__(
        self,
        reason: str,
        *,
        origin: Optional[str] = None,
        format: Optional[str] = None,
        byte_offset: Optional[int] = None,
    ):
        self.reason = reason
        self.origin = origin
        self.format = format
        self.byte_offset = byte_offset

        where = f" from {origin!r}" if origin else ""
        at = f" at byte {byte_offset}" if byte_offset is not None else ""
        fmt = f"{format} " if format else ""
        super().__init__(
            f"could not parse {fmt}configuration{where}{at}: {reason}",
            details={
                "origin": origin,
                "format": format,
                "byte_offset": byte_offset,
                "reason": reason,
            },
        )


class UnsupportedFormatError(ParseError):
    """Nenhum parser registrado para o formato do documento."""

    hint = "Declare `format=` no locator ou registre um parser para o formato."


class InvalidDocumentRootError(PlugxConfigError):
    """Documento atribuído a um plugin não possui map na raiz."""

    def __init__(self, *, plugin: str, origin: str, actual: str):
        self.plugin = plugin
        self.origin = origin
        self.actual = actual
        super().__init__(
            f"configuration of plugin {plugin!r} from {origin!r} must be a map, got {actual}",
            details={"plugin": plugin, "origin": origin, "actual": actual},
        )


class InvalidPluginNameError(PlugxConfigError):
    """Chave de topo de um documento livre não nomeia um plugin."""

    hint = "Chaves de topo de um documento sem `plugin=` devem ser nomes de plugin não vazios."

    def __init__(self, *, key: str, origin: str):
        self.key = key
        self.origin = origin
        super().__init__(
            f"document {origin!r} has an invalid plugin name {key!r}: must be non-empty",
            details={"key": key, "origin": origin},
        )
