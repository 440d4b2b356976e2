# src/isorender/pattern_engine.py
"""
Adaptador de pattern engine para orquestradores de catálogo.

Expõe os metadados e a API de busca de partials esperados de um pattern
engine, delegando a renderização ao `RenderPipeline`.

As anotações de style modifiers, pattern parameters e list items não têm
efeito neste engine: as buscas correspondentes devolvem listas vazias.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Pattern, Union

from isorender.core.config.settings import Settings
from isorender.core.engine.engine import RenderPipeline, SettingsSource
from isorender.core.pipeline.dependencies import PARTIAL_REFERENCE_RE, candidate_key, extract_references
from isorender.core.pipeline.registry import PartialRegistry
from isorender.core.pipeline.types import Component


class PatternEngine:
    engine_name = "isorender"
    engine_file_extension = ".py"
    expand_partials = False

    def __init__(
        self,
        registry: Optional[PartialRegistry] = None,
        *,
        settings: SettingsSource = None,
        pipeline: Optional[RenderPipeline] = None,
    ):
        self.pipeline = pipeline or RenderPipeline(registry, settings=settings)
        self.registry = self.pipeline.registry

    def configure(self, settings: SettingsSource) -> Settings:
        return self.pipeline.configure(settings)

    def register_partial(self, component: Component) -> None:
        self.pipeline.register_partial(component)

    async def render_pattern(self, component: Component, data: Optional[Mapping[str, Any]] = None) -> str:
        return await self.pipeline.render(component, data)

    # -----------------------------
    # Busca de partials
    # -----------------------------
    @staticmethod
    def pattern_matcher(pattern: Union[Component, str], regex: Union[str, Pattern[str]]) -> List[str]:
        """Ocorrências de `regex` no texto (string ou fonte do componente)."""
        text = pattern if isinstance(pattern, str) else getattr(pattern, "source", "")
        compiled = re.compile(regex) if isinstance(regex, str) else regex
        return [m.group(0) for m in compiled.finditer(text or "")]

    def find_partials(self, pattern: Union[Component, str]) -> List[str]:
        return extract_references(pattern, self.registry, source_root=self.pipeline.settings.source_root)

    def find_partials_with_style_modifiers(self, pattern: Union[Component, str]) -> List[str]:
        return []

    def find_partials_with_pattern_parameters(self, pattern: Union[Component, str]) -> List[str]:
        return []

    def find_list_items(self, pattern: Union[Component, str]) -> List[str]:
        return []

    def find_partial(self, partial_string: str) -> Optional[str]:
        """Chave candidata de uma referência (`import_partial("x")` → `x`)."""
        match = PARTIAL_REFERENCE_RE.search(partial_string or "")
        return candidate_key(match.group("path")) if match else None
