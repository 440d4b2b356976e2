"""
Core do isorender.

Componentes principais:
    - config    → resolução de settings (defaults, merge, leitura de arquivo)
    - pipeline  → tipos, registry de partials, extrator e contexto de render
    - compiler  → normalização e emissão dos perfis server e browser
    - runtime   → carregamento do bundle server e marcação estática
    - engine    → orquestração e contenção de erros

Limites explícitos:
    - Não descobre nem observa arquivos de componentes
    - Não serve páginas; produz apenas strings embutíveis
"""
