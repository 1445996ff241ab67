# tests/core/config/test_hashing.py
"""
Testes do hashing de configuração.

Os testes asseguram que:
- alterações na configuração produzem hashes diferentes
- configurações equivalentes produzem o mesmo hash
- o hash é independente da ordem das chaves
- o algoritmo corresponde ao SHA-256 do JSON canônico
"""

import hashlib
import json

import pytest

from plugx_config.core.config.hashing import compute_config_hash, compute_plugin_hashes


def _canonical_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def test_hash_matches_sha256_of_canonical_json():
    cfg = {"server": {"port": 8080, "host": "localhost"}, "name": "ção"}
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()
    assert compute_config_hash(cfg) == expected
    assert len(compute_config_hash(cfg)) == 64


def test_hash_is_key_order_independent():
    a = {"x": 1, "y": {"b": 2, "a": 1}}
    b = {"y": {"a": 1, "b": 2}, "x": 1}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_changes_when_config_changes():
    assert compute_config_hash({"port": 8080}) != compute_config_hash({"port": 8081})
    assert compute_config_hash({"port": 1}) != compute_config_hash({"port": 1.0})


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "map"])  # type: ignore[arg-type]


def test_plugin_hashes_are_sorted_by_name():
    hashes = compute_plugin_hashes({"zeta": {"a": 1}, "alpha": {}})
    assert list(hashes) == ["alpha", "zeta"]
    assert hashes["alpha"] == compute_config_hash({})
