"""
plugx-config — Canonical Exceptions (v1)

Este módulo define a raiz da hierarquia de exceções tipadas do plugx-config.

Objetivo:
- Permitir captura genérica de qualquer falha do pipeline de configuração
- Facilitar o mapeamento determinístico para ErrorPayload (ver `core.errors`)
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Cada subpacote define suas próprias exceções em `errors.py`,
  sempre herdando de `PlugxConfigError`
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
- Mensagem deve ser curta e humana
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PlugxConfigError(Exception):
    """Base class para exceções internas do plugx-config.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - `hint` indica ao operador onde corrigir (opcional)
    """

    hint: Optional[str] = None

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message


class InvalidValueError(PlugxConfigError):
    """Objeto não pertence ao modelo de valores (null/bool/number/string/list/map)."""

    hint = "Parsers e loaders customizados devem produzir apenas tipos JSON-like."
