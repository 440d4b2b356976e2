# src/isorender/core/pipeline/types.py
"""
Tipos canônicos do pipeline de renderização do isorender.

Este módulo define as estruturas que circulam entre registry, compilador,
executor e composer.

Componentes principais:
    - Component       → componente registrado (chave, caminho, fonte)
    - CompiledArtifact → par de payloads (server, browser) de uma renderização
    - RenderStatus    → estados terminais (RENDERED, FAILED)
    - RenderOutcome   → resultado imutável de uma renderização

Invariantes:
    - Todas as estruturas são imutáveis (frozen)
    - Um CompiledArtifact nunca é reaproveitado entre renderizações
    - Tipos não dependem de engine, compilador ou runtime
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, List, Mapping, Optional, Tuple

from isorender.core.errors import DiagnosticPayload


_ORDER_PREFIX_RE = re.compile(r"^\d+[-_]")


@dataclass(frozen=True)
class Component:
    """
    Componente de UI definido por fonte.

    A identidade é a chave de registry (`key`) mais o caminho relativo do
    fonte (`source_path`). O conteúdo é o texto do módulo em um dos dois
    formatos aceitos: `template` (fonte cru) ou `extended_template`
    (fonte após expansão externa de partials). O pipeline usa `template`
    quando não vazio, senão `extended_template`; quando ambos estão vazios,
    o compilador lê `source_root / source_path` do disco.

    `style_modifiers` e `parameters` são anotações aceitas e preservadas,
    mas não alteram a renderização (v1). `output_path` é do orquestrador
    (onde ele grava o documento) e também não é lido pelo pipeline.

    Invariantes:
        - O pipeline mantém apenas uma referência de leitura durante a render
        - A instância nunca é alterada após criada
    """
    key: str
    source_path: str
    template: str = ""
    extended_template: Optional[str] = None
    output_path: Optional[str] = None
    name: Optional[str] = None
    style_modifiers: Tuple[str, ...] = ()
    parameters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> str:
        return self.template or self.extended_template or ""

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        stem = PurePosixPath(self.source_path.replace("\\", "/")).stem or self.key
        stem = _ORDER_PREFIX_RE.sub("", stem)
        words = [w for w in re.split(r"[-_\s]+", stem) if w]
        return " ".join(w[:1].upper() + w[1:] for w in words) or self.key


@dataclass(frozen=True)
class CompiledArtifact:
    """
    Par de payloads derivados do mesmo fonte.

    Campos:
        - key: chave do componente compilado
        - server: bundle Python avaliável no processo
        - browser: bundle JavaScript de hidratação ("" quando desabilitado)
        - modules: chaves dos módulos incluídos (partials + componente)
    """
    key: str
    server: str
    browser: str
    modules: Tuple[str, ...] = ()


class RenderStatus(str, Enum):
    """
    Estados terminais de uma renderização.

    - RENDERED: documento composto retornado
    - FAILED: fragmento de diagnóstico retornado
    """
    RENDERED = "rendered"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderOutcome:
    """
    Resultado imutável de `RenderPipeline.render_outcome`.

    `html` é sempre a string entregue ao chamador: o documento composto ou o
    fragmento de diagnóstico. `error` só é preenchido quando FAILED;
    `warnings` traz, por estágio, o que foi descartado sem falhar a render
    (ex.: referências não registradas).
    """
    key: str
    status: RenderStatus
    html: str
    error: Optional[DiagnosticPayload] = None
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == RenderStatus.RENDERED
