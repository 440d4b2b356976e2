# src/isorender/core/engine/engine.py
"""
Pipeline de renderização do isorender.

Fluxo de uma renderização:
    compile (server + browser) → render_markup → compose → documento

Contenção de erros:
    - Qualquer `Exception` levantada por extração, compilação, execução,
      renderização ou composição é convertida em `DiagnosticPayload` e
      apresentada como fragmento HTML. `render` nunca propaga essas falhas.
    - `asyncio.CancelledError` (chamador abandonou a renderização) não é
      capturado; os recursos transitórios são liberados mesmo assim.

Estados terminais:
    - RENDERED: documento composto
    - FAILED: fragmento de diagnóstico

Invariantes:
    - A saída é atômica: documento completo ou fragmento completo
    - Cada renderização tem seu próprio RenderContext e sistema de arquivos
      virtual; renderizações concorrentes não compartilham estado
    - O registry é apenas lido durante a renderização
"""

from __future__ import annotations

import asyncio
import logging
import os
import traceback
from typing import Any, Dict, List, Mapping, Optional, Union

from isorender.core.config.settings import Settings, resolve_settings, resolve_settings_file
from isorender.core.errors import (
    COMPILATION_ERROR,
    COMPOSITION_ERROR,
    CONFIGURATION_ERROR,
    DEPENDENCY_RESOLUTION_ERROR,
    EXECUTION_ERROR,
    RENDER_ERROR,
    DiagnosticPayload,
    unexpected_error,
)
from isorender.core.exceptions import (
    CompilationError,
    CompositionError,
    ConfigurationError,
    DependencyResolutionError,
    ExecutionError,
    IsorenderError,
    RenderError,
)
from isorender.core.compiler.compiler import DualTargetCompiler
from isorender.core.pipeline.context import RenderContext
from isorender.core.pipeline.registry import PartialRegistry
from isorender.core.pipeline.types import Component, RenderOutcome, RenderStatus
from isorender.core.runtime.executor import render_markup
from isorender.core.runtime.loader import InProcessModuleLoader, ModuleLoader
from isorender.output.composer import compose_document, compose_static
from isorender.output.diagnostics import render_diagnostic_fragment

log = logging.getLogger("isorender.core.engine")

SettingsSource = Union[Settings, Mapping[str, Any], str, "os.PathLike[str]", None]


ERROR_CODES = {
    CompilationError: COMPILATION_ERROR,
    DependencyResolutionError: DEPENDENCY_RESOLUTION_ERROR,
    ExecutionError: EXECUTION_ERROR,
    RenderError: RENDER_ERROR,
    CompositionError: COMPOSITION_ERROR,
    ConfigurationError: CONFIGURATION_ERROR,
}


def exception_to_diagnostic(exc: BaseException) -> DiagnosticPayload:
    """Converte exceções em DiagnosticPayload (serializável, acionável).

    Regras:
    - IsorenderError: código estável pela classe; message/details/hint preservados.
    - Outras exceções: UNEXPECTED_ERROR com a classe da exceção em details.
    """
    if isinstance(exc, IsorenderError):
        code = next(
            (code for cls, code in ERROR_CODES.items() if isinstance(exc, cls)),
            exc.__class__.__name__,
        )
        return DiagnosticPayload(
            type=code,
            message=exc.message or "Erro de renderização",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return unexpected_error(exc_type=exc.__class__.__name__, exc_message=str(exc) or None)


def _copy_warnings(ctx: RenderContext) -> Dict[str, List[str]]:
    return {stage: list(messages) for stage, messages in ctx.warnings.items()}


def format_trace(exc: BaseException) -> str:
    """Trace formatado (com causas encadeadas) para o fragmento de diagnóstico."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


class RenderPipeline:
    """
    Ponto de entrada do pipeline: `render(component, data) -> str`.

    Args:
        registry: Registry de partials (handle explícito, apenas lido).
        settings: `Settings` pronto, mapa bruto ou caminho de arquivo de
            settings (YAML/JSON); None adia a resolução até
            a primeira renderização (com warning se `configure` não for chamado).
        loader: Implementação de `ModuleLoader` para o payload server.
    """

    def __init__(
        self,
        registry: Optional[PartialRegistry] = None,
        *,
        settings: SettingsSource = None,
        loader: Optional[ModuleLoader] = None,
    ):
        self.registry = registry if registry is not None else PartialRegistry()
        self.loader: ModuleLoader = loader or InProcessModuleLoader()
        self.compiler = DualTargetCompiler(self.registry)
        self._settings: Optional[Settings] = None
        if settings is not None:
            self.configure(settings)

    # -----------------------------
    # Configuração / registro
    # -----------------------------
    def configure(self, settings: SettingsSource) -> Settings:
        if self._settings is not None:
            log.info("pipeline reconfigured")
        if isinstance(settings, Settings):
            self._settings = settings
        elif isinstance(settings, (str, os.PathLike)):
            self._settings = resolve_settings_file(settings)
        else:
            self._settings = resolve_settings(settings)
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = resolve_settings(None)
        return self._settings

    def register_partial(self, component: Component) -> None:
        self.registry.register(component)

    # -----------------------------
    # Renderização
    # -----------------------------
    async def render(self, component: Component, data: Optional[Mapping[str, Any]] = None) -> str:
        outcome = await self.render_outcome(component, data)
        return outcome.html

    async def render_outcome(self, component: Component, data: Optional[Mapping[str, Any]] = None) -> RenderOutcome:
        key = str(getattr(component, "key", "") or "<unknown>")
        ctx = RenderContext(key=key, settings=self.settings)
        try:
            document = await self._run(component, data, ctx)
            ctx.log(stage="render", level="info", message="rendered")
            return RenderOutcome(
                key=key,
                status=RenderStatus.RENDERED,
                html=document,
                events=list(ctx.events),
                warnings=_copy_warnings(ctx),
            )
        except Exception as e:
            payload = exception_to_diagnostic(e)
            ctx.log(stage="render", level="error", message=payload.message, error_type=payload.type)
            log.error("render failed for %s: %s", key, payload.message, exc_info=e)
            fragment = render_diagnostic_fragment(component, payload, format_trace(e))
            return RenderOutcome(
                key=key,
                status=RenderStatus.FAILED,
                html=fragment,
                error=payload,
                events=list(ctx.events),
                warnings=_copy_warnings(ctx),
            )
        finally:
            ctx.close()

    async def _run(self, component: Component, data: Optional[Mapping[str, Any]], ctx: RenderContext) -> str:
        artifact = await self.compiler.compile(component, ctx)

        ctx.log(stage="execute", level="info", message="rendering markup")
        markup = await asyncio.to_thread(render_markup, artifact.server, data, loader=self.loader)

        ctx.log(stage="compose", level="info", message="composing document", hydrate=ctx.settings.hydrate)
        if ctx.settings.hydrate:
            return compose_document(markup, data, artifact.browser, ctx.settings)
        return compose_static(markup, data, ctx.settings)
