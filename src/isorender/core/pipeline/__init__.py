"""
# Pipeline Core (isorender)

Estruturas compartilhadas por todos os estágios de uma renderização.

## Componentes

- **types**
  - `Component`: componente registrado (chave, caminho, fonte)
  - `CompiledArtifact`: par de payloads (server, browser)
  - `RenderStatus` / `RenderOutcome`: resultado terminal de uma renderização

- **registry**
  - `PartialRegistry`: chave → Component, last-write-wins

- **dependencies**
  - `extract_references`: referências `import_partial(...)` resolvíveis

- **context**
  - `RenderContext`: contexto isolado de uma renderização
  - `VirtualFileSystem`: saída em memória dos compiladores

## Limites Explícitos

- Não compila nem executa componentes
- Não descobre componentes em disco
"""

from .context import RenderContext, VirtualFileSystem
from .dependencies import PARTIAL_REFERENCE_RE, candidate_key, extract_references, referenced_keys
from .registry import PartialRegistry
from .types import CompiledArtifact, Component, RenderOutcome, RenderStatus

__all__ = [
    "CompiledArtifact",
    "Component",
    "PARTIAL_REFERENCE_RE",
    "PartialRegistry",
    "RenderContext",
    "RenderOutcome",
    "RenderStatus",
    "VirtualFileSystem",
    "candidate_key",
    "extract_references",
    "referenced_keys",
]
