# src/isorender/core/pipeline/context.py
"""
Contexto de uma renderização.

Este módulo define o `RenderContext`, a estrutura criada para cada chamada
de `RenderPipeline.render` e descartada ao final dela, e o
`VirtualFileSystem`, o destino de saída em memória dos dois compiladores.

O RenderContext concentra:
    - identidade da renderização (run_id, created_at, chave do componente)
    - settings efetivos
    - sistema de arquivos virtual isolado (nenhum byte vai para o disco)
    - eventos estruturados por estágio
    - warnings por estágio

Princípios fundamentais:
    - Isolamento por renderização (renders concorrentes nunca compartilham
      contexto nem sistema de arquivos)
    - Ausência de estado global compartilhado
    - Liberação garantida via `close()` em todos os caminhos de saída

Invariantes:
    - Eventos sempre incluem `run_id`, `key` e `stage`
    - Após `close()`, o sistema de arquivos virtual está vazio e fechado
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Dict, List

from isorender.core.config.settings import Settings


class VirtualFileSystem:
    """Sistema de arquivos em memória, privado a uma renderização."""

    def __init__(self) -> None:
        self._files: Dict[str, str] = {}
        self._closed = False

    @staticmethod
    def _normalize(path: str) -> str:
        return str(PurePosixPath("/") / path.lstrip("/"))

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed VirtualFileSystem")

    def write_text(self, path: str, text: str) -> None:
        self._ensure_open()
        self._files[self._normalize(path)] = text

    def read_text(self, path: str) -> str:
        self._ensure_open()
        normalized = self._normalize(path)
        if normalized not in self._files:
            raise FileNotFoundError(normalized)
        return self._files[normalized]

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._files

    def listdir(self, prefix: str = "/") -> List[str]:
        base = self._normalize(prefix).rstrip("/") + "/"
        return sorted(p for p in self._files if p.startswith(base))

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._files.clear()
        self._closed = True


@dataclass
class RenderContext:
    """
    Contexto de execução de uma única renderização.

    Decisões arquiteturais:
        - Compiladores escrevem apenas no `vfs` deste contexto
        - Logs estruturados ficam em `events` e acompanham o `RenderOutcome`
        - O contexto não executa estágios, apenas registra o que ocorreu
    """
    key: str
    settings: Settings
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    vfs: VirtualFileSystem = field(default_factory=VirtualFileSystem, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "key": self.key,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        self.warnings.setdefault(stage, []).append(message)

    def close(self) -> None:
        self.vfs.close()
