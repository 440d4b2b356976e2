# src/isorender/output/diagnostics.py
"""
Diagnostic Fragment (v1)

Objetivo:
- Substituir o documento de uma renderização que falhou por um card HTML
  embutível, legível por quem navega no catálogo.

Conteúdo fixo do card:
- nome de exibição e caminho do componente
- código e mensagem do erro
- dica (quando houver) e detalhes estruturados
- trace formatado, com quebras de linha preservadas

Regras:
- Todo texto interpolado é escapado.
- Apresentação pura: não altera o payload, não consulta registry nem engine.
- Nunca levanta exceção; o fragmento é o último recurso do pipeline.
"""

from __future__ import annotations

import html
import json
from typing import Any, Mapping, Optional

from isorender.core.errors import DiagnosticPayload


CARD_STYLE = (
    "border:1px solid #e0b4b4; border-radius:12px; padding:12px; margin:8px 0;"
    " background:#fff6f6; color:#9f3a38; font-family:sans-serif;"
)
TRACE_STYLE = "white-space:pre-wrap; font-size:12px; background:#fff; padding:8px; border-radius:6px; overflow:auto;"


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _value_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, default=repr)
    except (TypeError, ValueError):
        return repr(value)


def _details_table(details: Mapping[str, Any]) -> str:
    if not details:
        return ""
    rows = "".join(
        f"<tr><td><code>{_escape(k)}</code></td><td>{_escape(_value_text(v))}</td></tr>"
        for k, v in details.items()
    )
    return (
        "<table style='border-collapse:collapse; margin:6px 0;'>"
        "<thead><tr><th>key</th><th>value</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )


def _trace_block(trace: Optional[str]) -> str:
    if not trace:
        return ""
    lines = "<br/>".join(_escape(line) for line in trace.rstrip().splitlines())
    return f"<pre style='{TRACE_STYLE}'>{lines}</pre>"


def render_diagnostic_fragment(component: Any, payload: DiagnosticPayload, trace: Optional[str] = None) -> str:
    """Renderiza o card de diagnóstico de uma renderização que falhou."""
    name = getattr(component, "display_name", None) or getattr(component, "key", None) or "<unknown component>"
    path = getattr(component, "source_path", None) or ""
    error_type = getattr(payload, "type", "UNEXPECTED_ERROR")
    message = getattr(payload, "message", "") or ""
    hint = getattr(payload, "hint", None)
    details = getattr(payload, "details", None)

    hint_html = f"<div style='opacity:0.85'><em>{_escape(hint)}</em></div>" if hint else ""
    return (
        f"<div class='isorender-diagnostic' data-error-type='{_escape(error_type)}' style='{CARD_STYLE}'>"
        f"<h3 style='margin:0 0 6px 0;'>{_escape(name)}</h3>"
        f"<div style='opacity:0.75'><code>{_escape(path)}</code></div>"
        f"<p><strong>{_escape(error_type)}</strong>: {_escape(message)}</p>"
        f"{hint_html}"
        f"{_details_table(details if isinstance(details, Mapping) else {})}"
        f"{_trace_block(trace)}"
        "</div>"
    )
