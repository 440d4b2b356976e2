"""
isorender: Canonical Exceptions (v1)

Este módulo define a taxonomia de exceções tipadas do pipeline de
renderização de componentes.

Objetivo:
- Permitir que cada estágio (extração, compilação, execução, composição)
  levante exceções semânticas tipadas
- Facilitar o mapeamento determinístico para DiagnosticPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras do pipeline

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Nenhuma exceção desta hierarquia atravessa `RenderPipeline.render`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from isorender.core.errors import DiagnosticPayload


@dataclass(eq=False)
class IsorenderError(Exception):
    """Base class para exceções internas do isorender.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - `hint` indica onde corrigir (opcional)
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: "DiagnosticPayload") -> "IsorenderError":
        """Constrói a exceção a partir de um payload de diagnóstico canônico."""
        return cls(message=payload.message, details=dict(payload.details), hint=payload.hint)


# ---------------------------------------------------------------------------
# Compilação / Dependências
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class CompilationError(IsorenderError):
    """O fonte não pôde ser transformado/resolvido para um dos perfis (server ou browser)."""


@dataclass(eq=False)
class DependencyResolutionError(IsorenderError):
    """Um partial solicitado em runtime não faz parte do bundle compilado."""


# ---------------------------------------------------------------------------
# Execução / Renderização
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ExecutionError(IsorenderError):
    """O payload server não pôde ser interpretado como módulo válido."""


@dataclass(eq=False)
class RenderError(IsorenderError):
    """O componente rejeitou os dados (ou falhou) durante a renderização."""


@dataclass(eq=False)
class CompositionError(IsorenderError):
    """O documento final não pôde ser composto (ex.: dados não serializáveis)."""


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConfigurationError(IsorenderError):
    """Configuração ausente ou inválida. Registrada em log e substituída por defaults."""
