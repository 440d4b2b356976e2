# src/isorender/core/compiler/compiler.py
"""
Compilador de dois alvos (server + browser).

Responsabilidades:
    - Obter o fonte do componente (template → extended_template → disco)
    - Resolver o grafo de partials via registry (extrator textual)
    - Compilar o mesmo fonte para os dois perfis, de forma independente
    - Gravar os payloads no sistema de arquivos virtual da renderização
    - Converter qualquer falha em um único CompilationError

Decisões arquiteturais:
    - Os perfis rodam concorrentemente (asyncio.gather) e nenhum depende do
      resultado do outro
    - Falha em qualquer perfil aborta a compilação inteira: nenhum payload
      parcial é gravado nem devolvido
    - Partials são incluídos pelo fechamento transitivo das referências
      resolvidas, com proteção contra ciclos; a ordem do bundle coloca cada
      partial antes de quem o referencia

Limites explícitos:
    - Não executa código compilado (responsabilidade do runtime)
    - Não faz cache de artefatos entre renderizações
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Dict, List, Optional, Sequence, Tuple

from isorender.core.errors import compilation_error
from isorender.core.exceptions import CompilationError
from isorender.core.pipeline.context import RenderContext
from isorender.core.pipeline.dependencies import candidate_key, read_component_source, referenced_keys, unresolved_keys
from isorender.core.pipeline.registry import PartialRegistry
from isorender.core.pipeline.types import CompiledArtifact, Component

from .browser import build_browser_bundle
from .normalize import NormalizedModule, normalize_module
from .server import build_server_bundle

log = logging.getLogger("isorender.core.compiler")


SERVER_PROFILE = "server"
BROWSER_PROFILE = "browser"


def server_path(key: str) -> str:
    return f"/server/{key}.py"


def browser_path(key: str) -> str:
    return f"/browser/{key}.js"


class DualTargetCompiler:
    """
    Compila um `Component` em um `CompiledArtifact`.

    O registry é apenas lido. Uma instância pode atender renderizações
    concorrentes: todo estado de uma compilação vive no `RenderContext`.
    """

    def __init__(self, registry: PartialRegistry):
        self.registry = registry

    # -----------------------------
    # Fontes
    # -----------------------------
    async def load_source(self, component: Component, ctx: RenderContext) -> str:
        path = Path(ctx.settings.source_root) / component.source_path
        try:
            return await asyncio.to_thread(read_component_source, component, ctx.settings.source_root)
        except OSError as e:
            raise CompilationError.from_payload(compilation_error(
                profile="source",
                module=component.key,
                diagnostics=[f"{path}: {type(e).__name__}: {e}"],
                message=f"Fonte do componente não encontrado: {component.source_path}",
                hint="Preencha o template do componente ou ajuste paths.source na configuração.",
            )) from e

    async def resolve_partials(self, component: Component, source: str, ctx: RenderContext) -> List[Tuple[str, str]]:
        """
        Retorna `(chave, fonte)` de cada partial do grafo, dependências primeiro.

        Referências não registradas são descartadas e anotadas como warning
        do estágio `extract`.
        """
        ordered: List[Tuple[str, str]] = []
        visited = {candidate_key(component.key)}

        async def visit(text: str) -> None:
            for key in unresolved_keys(text, self.registry):
                ctx.add_warning(stage="extract", message=f"referência não registrada descartada: {key}")
            for key in referenced_keys(text, self.registry):
                if key in visited:
                    continue
                visited.add(key)
                partial = self.registry.get(key)
                partial_source = await self.load_source(partial, ctx)
                await visit(partial_source)
                ordered.append((key, partial_source))

        await visit(source)
        return ordered

    # -----------------------------
    # Perfis
    # -----------------------------
    @staticmethod
    def _normalize_all(
        entry: Tuple[str, str], partials: Sequence[Tuple[str, str]]
    ) -> Tuple[NormalizedModule, List[NormalizedModule]]:
        normalized_partials = [normalize_module(key, text) for key, text in partials]
        return normalize_module(*entry), normalized_partials

    async def _server(self, entry: Tuple[str, str], partials: Sequence[Tuple[str, str]]) -> str:
        module, deps = await asyncio.to_thread(self._normalize_all, entry, partials)
        return build_server_bundle(module, deps)

    async def _browser(
        self, entry: Tuple[str, str], partials: Sequence[Tuple[str, str]], ctx: RenderContext
    ) -> str:
        module, deps = await asyncio.to_thread(self._normalize_all, entry, partials)
        return await build_browser_bundle(module, deps, ctx.settings)

    @staticmethod
    def _as_compilation_error(profile: str, key: str, exc: BaseException) -> CompilationError:
        if isinstance(exc, CompilationError):
            details = dict(exc.details)
            details["target"] = profile
            return CompilationError(message=exc.message, details=details, hint=exc.hint)
        return CompilationError.from_payload(compilation_error(
            profile=profile,
            module=key,
            diagnostics=[f"{type(exc).__name__}: {exc}"],
        ))

    # -----------------------------
    # API
    # -----------------------------
    async def compile(self, component: Component, ctx: RenderContext) -> CompiledArtifact:
        """
        Compila o componente para os perfis habilitados.

        Raises:
            CompilationError: Falha em qualquer perfil (sintaxe, resolução,
                arquivo ausente ou erro do compilador JavaScript).
        """
        source = await self.load_source(component, ctx)
        partials = await self.resolve_partials(component, source, ctx)
        entry = (component.key, source)
        modules = tuple(key for key, _ in partials) + (component.key,)

        ctx.log(stage="compile", level="info", message="compilation started", modules=list(modules))
        log.debug("compiling %s (partials=%s hydrate=%s)", component.key, modules[:-1], ctx.settings.hydrate)

        jobs: Dict[str, Awaitable[str]] = {SERVER_PROFILE: self._server(entry, partials)}
        if ctx.settings.hydrate:
            jobs[BROWSER_PROFILE] = self._browser(entry, partials, ctx)

        results = await asyncio.gather(*jobs.values(), return_exceptions=True)

        failure: Optional[CompilationError] = None
        payloads: Dict[str, str] = {}
        for profile, result in zip(jobs.keys(), results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                error = self._as_compilation_error(profile, component.key, result)
                ctx.log(stage="compile", level="error", message=error.message, target=profile)
                if failure is None:
                    failure = error
                    failure.__cause__ = result
                else:
                    ctx.add_warning(stage="compile", message=f"{profile}: {error.message}")
                continue
            payloads[profile] = result

        if failure is not None:
            raise failure

        ctx.vfs.write_text(server_path(component.key), payloads[SERVER_PROFILE])
        if BROWSER_PROFILE in payloads:
            ctx.vfs.write_text(browser_path(component.key), payloads[BROWSER_PROFILE])

        artifact = CompiledArtifact(
            key=component.key,
            server=ctx.vfs.read_text(server_path(component.key)),
            browser=ctx.vfs.read_text(browser_path(component.key)) if BROWSER_PROFILE in payloads else "",
            modules=modules,
        )
        ctx.log(stage="compile", level="info", message="compilation finished")
        return artifact
