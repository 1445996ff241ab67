# src/plugx_config/core/config/hashing.py
"""
Impressão digital (fingerprint) da configuração publicada.

Cada run bem-sucedida registra, no `RunResult`, um SHA-256 por plugin.
Dois reloads sobre entradas idênticas devem produzir os mesmos hashes;
qualquer mudança efetiva em um documento altera o hash daquele plugin e
apenas dele.

Forma canônica:
    - JSON com chaves ordenadas e separadores compactos
    - UTF-8 sem escape de caracteres não-ASCII
    - `1` e `1.0` permanecem distintos (a tag do Value importa)

Limites explícitos:
    - Não carrega nem resolve configuração
    - Não persiste o hash
"""


import json
import hashlib
from typing import Any, Dict, Mapping

from plugx_config.core.value.model import Value


def canonical_json(value: Value) -> str:
    """Serialização estável de um Value (base dos hashes)."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Hash SHA-256 (hex, 64 caracteres) de um documento com raiz map.

    Args:
        config (Dict[str, Any]): Documento de um plugin ou a
            MergedConfiguration inteira.

    Raises:
        TypeError: Se o documento não tiver um dict na raiz.
    """
    if not isinstance(config, dict):
        raise TypeError(f"config to hash must be a dict, got {type(config).__name__}")
    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()


def compute_plugin_hashes(configuration: Mapping[str, Dict[str, Any]]) -> Dict[str, str]:
    """Hash por plugin de uma MergedConfiguration, em ordem de nome."""
    return {name: compute_config_hash(dict(configuration[name])) for name in sorted(configuration)}
