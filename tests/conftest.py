# tests/conftest.py
"""
Fixtures compartilhados para testes do isorender.

Este módulo define fixtures reutilizáveis que fornecem:
- fontes de componentes mínimos e determinísticos
- registry de partials isolado por teste
- settings resolvidos sem depender de arquivos

Decisões arquiteturais:
    - Cada teste recebe um registry novo (nenhum estado de processo)
    - Fontes de componentes ficam em strings (sem I/O), exceto quando o
      próprio teste usa `tmp_path`
    - Imports do pacote são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa uma renderização
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração do pipeline
"""

import pytest


HEADING_SOURCE = '''\
@component
def Heading(props):
    return h("h1", {"className": "heading"}, props["text"])
'''

CARD_SOURCE = '''\
Heading = import_partial("atoms-heading")


@component
def Card(props):
    return h(
        "article",
        {"className": "card"},
        h(Heading, {"text": props["title"]}),
        h("p", None, props.get("body", "")),
    )
'''

BADGE_SOURCE = '''\
@component
def Badge(props):
    return h("span", {"className": "badge"}, props["label"])
'''


# =====================================================
# Fontes de componentes
# =====================================================

@pytest.fixture
def heading_source() -> str:
    """Partial folha: não referencia outros componentes."""
    return HEADING_SOURCE


@pytest.fixture
def card_source() -> str:
    """Componente com uma referência ao partial `atoms-heading`."""
    return CARD_SOURCE


@pytest.fixture
def badge_source() -> str:
    return BADGE_SOURCE


# =====================================================
# Componentes e registry
# =====================================================

@pytest.fixture
def heading_component(heading_source):
    from isorender.core.pipeline.types import Component

    return Component(key="atoms-heading", source_path="atoms/00-heading.py", template=heading_source)


@pytest.fixture
def card_component(card_source):
    from isorender.core.pipeline.types import Component

    return Component(key="molecules-card", source_path="molecules/01-card.py", template=card_source)


@pytest.fixture
def badge_component(badge_source):
    from isorender.core.pipeline.types import Component

    return Component(key="atoms-badge", source_path="atoms/02-badge.py", template=badge_source)


@pytest.fixture
def registry(heading_component, card_component, badge_component):
    """
    Registry isolado com os três componentes de exemplo.

    Invariantes:
        - Novo a cada teste
        - Ordem de registro: heading, card, badge
    """
    from isorender.core.pipeline.registry import PartialRegistry

    reg = PartialRegistry()
    reg.register(heading_component)
    reg.register(card_component)
    reg.register(badge_component)
    return reg


# =====================================================
# Settings
# =====================================================

@pytest.fixture
def settings():
    """Settings com hidratação habilitada, resolvidos a partir de um mapa explícito."""
    from isorender.core.config.settings import resolve_settings

    return resolve_settings({"hydrate": True})


@pytest.fixture
def static_settings():
    from isorender.core.config.settings import resolve_settings

    return resolve_settings({"hydrate": False})
