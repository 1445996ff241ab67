# src/plugx_config/core/engine/__init__.py
"""
Engine do plugx-config.

Este pacote contém o Orchestrator responsável por **executar** o pipeline
de agregação de configuração de plugins, respeitando a ordem das fontes,
a política de falhas puláveis de cada fonte e os schemas informados.

Componentes principais:
    - orchestrator → máquina de estados e execução do pipeline
    - context      → estado isolado de uma run (contribuições, eventos, warnings)
    - attribution  → atribuição de documentos parseados a plugins
    - types        → `PipelineState` e `RunResult`

Princípios fundamentais:
    - A ordem de merge é a ordem de registro das fontes
    - Nenhuma decisão silenciosa é tomada durante a execução
    - Uma run falha nunca publica configuração parcial

Limites explícitos:
    - Não implementa loaders nem parsers concretos
    - Não persiste resultados
"""
