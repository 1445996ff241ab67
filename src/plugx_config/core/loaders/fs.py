"""Loader de sistema de arquivos (`fs://`, `file://`).

- arquivo → um documento vinculado ao plugin do nome do arquivo (stem)
- diretório → um documento por arquivo com sufixo reconhecido; falha de
  leitura de um arquivo cuja categoria é pulável na fonte descarta só
  aquele arquivo

Opções:
- strip-slash: `true` torna o caminho relativo ao diretório de trabalho
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from plugx_config.core.sources.errors import LoadError
from plugx_config.core.sources.types import LoadErrorKind, RawDocument, Source

from .base import allowed, format_from_suffix, plugin_from_stem

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


class FileSystemLoader:
    """Carrega arquivos e diretórios de configuração."""

    name = "File"
    schemes = ("fs", "file")

    def _path(self, source: Source) -> Path:
        address = source.address
        if (source.option("strip_slash") or "").strip().lower() in _TRUE:
            address = address.lstrip("/")
        return Path(address or ".")

    def _error(self, kind: LoadErrorKind, path: Path, reason: str) -> LoadError:
        return LoadError(kind, origin=str(path), reason=reason, loader=self.name)

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise self._error(LoadErrorKind.NOT_FOUND, path, "file not found") from e
        except PermissionError as e:
            raise self._error(LoadErrorKind.PERMISSION_DENIED, path, "permission denied") from e
        except OSError as e:
            raise self._error(LoadErrorKind.OTHER, path, str(e)) from e

    def _document(self, path: Path, source: Source, plugin: Optional[str], fmt: Optional[str]) -> RawDocument:
        return RawDocument(
            contents=self._read(path),
            origin=str(path),
            format=source.format or fmt,
            plugin=plugin,
        )

    def load(self, source: Source, whitelist: Optional[Iterable[str]] = None) -> List[RawDocument]:
        path = self._path(source)

        if path.is_dir():
            return self._load_directory(path, source, whitelist)

        if path.is_file():
            plugin = source.plugin or plugin_from_stem(path)
            if plugin is None:
                raise self._error(LoadErrorKind.MALFORMED, path, "could not detect plugin name")
            if not allowed(plugin, whitelist):
                logger.debug("plugin %s not whitelisted, skipping %s", plugin, path)
                return []
            return [self._document(path, source, plugin, format_from_suffix(path))]

        if path.exists():
            raise self._error(LoadErrorKind.MALFORMED, path, "not a directory or regular file")

        raise self._error(LoadErrorKind.NOT_FOUND, path, "path does not exist")

    def _load_directory(
        self,
        path: Path,
        source: Source,
        whitelist: Optional[Iterable[str]],
    ) -> List[RawDocument]:
        try:
            entries = sorted(path.iterdir())
        except PermissionError as e:
            raise self._error(LoadErrorKind.PERMISSION_DENIED, path, "permission denied") from e
        except OSError as e:
            raise self._error(LoadErrorKind.OTHER, path, str(e)) from e

        found: Dict[str, Path] = {}
        for entry in entries:
            fmt = format_from_suffix(entry)
            plugin = plugin_from_stem(entry)
            if fmt is None or plugin is None:
                logger.warning("could not detect plugin name/format for %s", entry)
                continue
            if not entry.is_file():
                logger.debug("skipping non-regular file %s", entry)
                continue
            if plugin in found:
                raise self._error(
                    LoadErrorKind.MALFORMED,
                    path,
                    f"duplicate configuration for plugin {plugin!r}: "
                    f"{found[plugin].name} and {entry.name}",
                )
            found[plugin] = entry

        documents = []
        for plugin, entry in found.items():
            if not allowed(plugin, whitelist):
                continue
            logger.debug("detected configuration file %s for plugin %s", entry, plugin)
            try:
                documents.append(self._document(entry, source, plugin, format_from_suffix(entry)))
            except LoadError as e:
                if not source.is_skippable(e.kind):
                    raise
                logger.warning("skipped configuration file %s: %s", entry, e.reason)
        return documents
