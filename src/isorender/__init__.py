# src/isorender/__init__.py
"""
isorender: renderização isomórfica de componentes para catálogos de patterns.

Um componente (módulo Python com uma função `@component`) é compilado para
dois alvos a partir do mesmo fonte: um bundle avaliado no processo, que
produz a marcação estática, e um bundle JavaScript que hidrata essa mesma
marcação no browser com os dados embutidos no documento.

Uso:
    registry = PartialRegistry()
    registry.register(Component(key="atoms-heading", source_path="atoms/heading.py", template=...))
    pipeline = RenderPipeline(registry, settings={"hydrate": True})
    html = await pipeline.render(component, {"title": "Hello"})

Falhas nunca são propagadas por `render`: o retorno é o documento composto
ou um fragmento HTML de diagnóstico.
"""

from .core.config.settings import DEFAULT_SETTINGS, Settings, resolve_settings
from .core.engine.engine import RenderPipeline
from .core.errors import DiagnosticPayload
from .core.exceptions import (
    CompilationError,
    CompositionError,
    ConfigurationError,
    DependencyResolutionError,
    ExecutionError,
    IsorenderError,
    RenderError,
)
from .core.pipeline.registry import PartialRegistry
from .core.pipeline.types import CompiledArtifact, Component, RenderOutcome, RenderStatus
from .core.runtime.elements import Fragment, component, h
from .pattern_engine import PatternEngine

__all__ = [
    "CompilationError",
    "CompiledArtifact",
    "Component",
    "CompositionError",
    "ConfigurationError",
    "DEFAULT_SETTINGS",
    "DependencyResolutionError",
    "DiagnosticPayload",
    "ExecutionError",
    "Fragment",
    "IsorenderError",
    "PartialRegistry",
    "PatternEngine",
    "RenderError",
    "RenderOutcome",
    "RenderPipeline",
    "RenderStatus",
    "Settings",
    "component",
    "h",
    "resolve_settings",
]
