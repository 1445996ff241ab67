# src/plugx_config/core/__init__.py
"""
Core do plugx-config.

Este pacote contém a implementação canônica do pipeline de agregação de
configuração de plugins.

Componentes principais:
    - value   → modelo de valores recursivo compartilhado
    - sources → locators, fontes e tabela de loaders por esquema
    - loaders → adaptadores finos de I/O (fs, env, http, custom)
    - parsers → adaptadores finos de formato (json, yaml, toml, env, qs)
    - config  → deep-merge determinístico e hashing
    - schema  → SchemaNode, autoria e validação com defaults
    - engine  → Orchestrator (load → parse → merge → validate)

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Nenhum estado global: o Orchestrator pertence ao chamador

Este pacote existe como a fonte de verdade operacional do plugx-config.
"""
