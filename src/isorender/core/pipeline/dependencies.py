# src/isorender/core/pipeline/dependencies.py
"""
Extração textual de referências a partials.

Uma referência é uma chamada `import_partial("<chave>")` no fonte do
componente. O extrator aplica uma expressão regular fixa, deriva a chave
candidata do caminho entre aspas e mantém apenas as referências cuja chave
existe no registry, preservando a ordem relativa.

Limitação conhecida (intencional):
    - É uma heurística textual, não um parse. Referências dentro de
      comentários ou strings também casam; chamadas quebradas em várias
      linhas não casam. Trocar por um parse real altera a semântica de
      correspondência e deve ser tratado como mudança de comportamento.

Política de resolução:
    - Referências não resolvidas são descartadas silenciosamente aqui
    - Uma referência descartada que o componente ainda usa em runtime
      falha com `DependencyResolutionError` na execução do bundle
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from .registry import PartialRegistry
from .types import Component

log = logging.getLogger("isorender.core.pipeline")


PARTIAL_REFERENCE_RE = re.compile(
    r"""import_partial\(\s*(?P<quote>["'])(?P<path>[^"'\n]+)(?P=quote)\s*\)"""
)

_SOURCE_SUFFIXES = (".py",)


def candidate_key(path: str) -> str:
    """
    Deriva a chave de registry a partir do caminho entre aspas.

    `"atoms-heading"`, `"./atoms-heading"` e `"./atoms-heading.py"`
    resultam todos em `atoms-heading`.
    """
    value = path.strip()
    while value.startswith("./"):
        value = value[2:]
    for suffix in _SOURCE_SUFFIXES:
        if value.endswith(suffix):
            value = value[: -len(suffix)]
    return str(PurePosixPath(value)) if value else value


def read_component_source(component: Component, source_root: Optional[Union[str, Path]] = None) -> str:
    """
    Fonte do componente: `template`, senão `extended_template`, senão o
    arquivo `source_root / source_path`.

    Sem `source_root`, um componente sem fonte em memória tem fonte vazio.

    Raises:
        OSError: Arquivo de fonte ausente ou ilegível.
    """
    if component.source:
        return component.source
    if source_root is None:
        return ""
    return (Path(source_root) / component.source_path).read_text(encoding="utf-8")


def _text_of(component: Union[Component, str], source_root: Optional[Union[str, Path]]) -> str:
    if isinstance(component, str):
        return component
    try:
        return read_component_source(component, source_root)
    except OSError as e:
        log.warning("source of %s not readable, no references extracted: %s", component.key, e)
        return ""


def extract_references(
    component: Union[Component, str],
    registry: PartialRegistry,
    *,
    source_root: Optional[Union[str, Path]] = None,
) -> List[str]:
    """
    Retorna as referências (texto casado) resolvíveis no registry, em ordem.

    Com `source_root`, componentes sem fonte em memória são lidos do disco
    da mesma forma que o compilador os lê.

    Nenhuma referência → lista vazia (não é erro).
    """
    found: List[str] = []
    for match in PARTIAL_REFERENCE_RE.finditer(_text_of(component, source_root)):
        if registry.lookup(candidate_key(match.group("path"))) is not None:
            found.append(match.group(0))
    return found


def referenced_keys(
    component: Union[Component, str],
    registry: PartialRegistry,
    *,
    source_root: Optional[Union[str, Path]] = None,
) -> List[str]:
    """Chaves resolvidas, sem duplicatas, na ordem da primeira ocorrência."""
    keys: List[str] = []
    for reference in extract_references(component, registry, source_root=source_root):
        match = PARTIAL_REFERENCE_RE.search(reference)
        key = candidate_key(match.group("path")) if match else ""
        if key and key not in keys:
            keys.append(key)
    return keys


def unresolved_keys(source: str, registry: PartialRegistry) -> List[str]:
    """Chaves referenciadas no texto que não existem no registry (descartadas pelo extrator)."""
    keys: List[str] = []
    for match in PARTIAL_REFERENCE_RE.finditer(source):
        key = candidate_key(match.group("path"))
        if registry.lookup(key) is None and key not in keys:
            keys.append(key)
    return keys
