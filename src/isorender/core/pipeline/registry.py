# src/isorender/core/pipeline/registry.py
"""
Registry de partials do isorender.

Este módulo define o `PartialRegistry`, o mapa chave → Component consultado
pelo extrator de dependências e pelo compilador.

O registry é um handle explícito: construído uma vez na carga do catálogo
e injetado no `RenderPipeline`, em vez de um singleton de módulo. Testes
constroem registries isolados por caso.

Decisões arquiteturais:
    - Registro é idempotente, last-write-wins (sem erro em duplicidade)
    - A ordem do primeiro registro de cada chave é preservada
    - O caminho de renderização apenas lê o registry

Invariantes:
    - No máximo uma entrada viva por chave
    - Entradas não são removidas durante a operação normal

Limites explícitos:
    - Não descobre componentes em disco
    - Não registra componentes implicitamente (sem lazy loading)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .types import Component


@dataclass
class PartialRegistry:
    """
    Registro canônico de componentes referenciáveis como partials.

    Leituras concorrentes não exigem lock: o registry é populado antes das
    renderizações e não é mutado por elas.
    """

    _entries: Dict[str, Component] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, component: Component) -> None:
        key = getattr(component, "key", None)
        if not isinstance(key, str) or not key.strip():
            raise ValueError("component.key must be a non-empty string")

        if key not in self._entries:
            self._order.append(key)
        self._entries[key] = component

    # alias do contrato de registro ("registerPartial")
    register_partial = register

    def lookup(self, key: str) -> Optional[Component]:
        return self._entries.get(key)

    def get(self, key: str) -> Component:
        return self._entries[key]

    def keys(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Component]:
        return [self._entries[k] for k in self._order]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.list())
