"""
isorender: Canonical Diagnostic Structures (v1)

Este módulo define o payload canônico de diagnóstico do isorender.
Toda falha de renderização é convertida em um `DiagnosticPayload` antes de
ser apresentada como fragmento HTML, devendo ser:

- explícita
- serializável
- acionável

O fragmento de diagnóstico substitui o documento renderizado; nenhuma
exceção é propagada ao chamador.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiagnosticPayload:
    """
    Payload canônico de diagnóstico do isorender.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao desenvolvedor do componente
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do diagnóstico."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

COMPILATION_ERROR = "COMPILATION_ERROR"
DEPENDENCY_RESOLUTION_ERROR = "DEPENDENCY_RESOLUTION_ERROR"
EXECUTION_ERROR = "EXECUTION_ERROR"
RENDER_ERROR = "RENDER_ERROR"
COMPOSITION_ERROR = "COMPOSITION_ERROR"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def compilation_error(
    *,
    profile: str,
    module: str,
    diagnostics: List[str],
    message: str = "Falha ao compilar o componente",
    hint: str = "Corrija a sintaxe do componente ou remova construções que o compilador do perfil indicado não suporta.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=COMPILATION_ERROR,
        message=message,
        details={
            "profile": profile,
            "module": module,
            "diagnostics": list(diagnostics),
        },
        hint=hint,
    )


def dependency_resolution_error(
    *,
    key: str,
    available: List[str],
    hint: str = "Registre o partial antes da renderização ou corrija a chave usada em import_partial().",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=DEPENDENCY_RESOLUTION_ERROR,
        message=f"Partial não resolvido: {key}",
        details={"key": key, "available": list(available)},
        hint=hint,
    )


def execution_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o código de nível de módulo do componente; o bundle server não pôde ser avaliado.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=EXECUTION_ERROR,
        message="Falha ao carregar o bundle server do componente",
        details={"exc_type": exc_type, "exc_message": exc_message},
        hint=hint,
    )


def render_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Confira se os dados fornecidos contêm as chaves que o componente espera.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=RENDER_ERROR,
        message="O componente falhou ao renderizar com os dados fornecidos",
        details={"exc_type": exc_type, "exc_message": exc_message},
        hint=hint,
    )


def composition_error(
    *,
    message: str,
    reason: str,
    hint: str = "Os dados de renderização devem ser JSON puro: dict/list/str/números finitos/bool/None, com chaves string.",
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=COMPOSITION_ERROR,
        message=message,
        details={"reason": reason},
        hint=hint,
    )


def unexpected_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
) -> DiagnosticPayload:
    return DiagnosticPayload(
        type=UNEXPECTED_ERROR,
        message=exc_message or "Erro inesperado durante a renderização",
        details={"exception_class": exc_type},
        hint="Verifique o log técnico; nenhum fallback é aplicado automaticamente.",
    )
