# src/isorender/core/compiler/server.py
"""
Emissor do perfil server.

Gera um bundle Python avaliável no processo atual a partir dos módulos
normalizados: uma fábrica por módulo, registrada em `__modules__`, e a
chave de entrada em `__entry__`. O `InProcessModuleLoader` avalia este
texto sem tocar o disco.
"""

from __future__ import annotations

from typing import List, Sequence

from .normalize import FACTORY_NAME, NormalizedModule


BUNDLE_HEADER = "# isorender server bundle: {entry!r}\n__modules__ = {{}}\n"


def build_server_bundle(entry: NormalizedModule, partials: Sequence[NormalizedModule]) -> str:
    """Concatena partials e componente em um único módulo Python (texto)."""
    chunks: List[str] = [BUNDLE_HEADER.format(entry=entry.key)]
    for module in [*partials, entry]:
        chunks.append(module.factory_source)
        chunks.append(f"__modules__[{module.module_key!r}] = {FACTORY_NAME}\n")
    chunks.append(f"__entry__ = {entry.module_key!r}\n")
    return "\n".join(chunks)
