# src/plugx_config/core/config/__init__.py

"""
Camada de configuração do plugx-config.

Este pacote contém os utilitários responsáveis por mesclar e identificar
a configuração final de cada plugin.

Responsabilidades do pacote:
    - Resolução da configuração por plugin via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade entre execuções
    - Atalho de carregamento em uma chamada (`load_config`)

Princípios fundamentais:
    - Nenhuma heurística implícita durante merge
    - Fontes posteriores sempre têm prioridade
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - Cada documento de plugin é um dicionário puro (dict)
    - Inputs de merge nunca são mutados

Limites explícitos:
    - Não valida semântica de domínio (ver `core.schema`)
    - Não executa o pipeline (ver `core.engine`)
"""
