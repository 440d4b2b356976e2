# src/isorender/output/composer.py
"""
Output Composer (v1)

Composição determinística do documento final por substituição de template.

Pontos de substituição:
- marcação estática (inserida sem alteração no container)
- dados de renderização (JSON em bloco `application/json` com id estável)
- payload browser (script inline executado após os runtimes configurados)

Regras:
- Sem lógica condicional além da presença/ausência do payload browser.
- O JSON embutido deve desserializar no browser exatamente igual aos dados
  recebidos; valores sem round-trip fiel são rejeitados (CompositionError).
- Nenhum texto embutido pode encerrar o elemento <script> que o contém.
"""

from __future__ import annotations

import html
import json
from typing import Any, Mapping, Optional

from isorender.core.config.settings import Settings
from isorender.core.errors import composition_error
from isorender.core.exceptions import CompositionError


DOCUMENT_TEMPLATE = (
    '<div id="{container_id}">{markup}</div>\n'
    '<script id="{data_element_id}" type="application/json">{payload}</script>\n'
    "{runtime_scripts}"
    "<script>\n{browser_payload}\n</script>\n"
)

STATIC_TEMPLATE = (
    '<div id="{container_id}">{markup}</div>\n'
    '<script id="{data_element_id}" type="application/json">{payload}</script>\n'
)

RUNTIME_SCRIPT_TEMPLATE = '<script src="{src}"></script>\n'

_JSON_SCRIPT_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def _composition_error(message: str, reason: str) -> CompositionError:
    return CompositionError.from_payload(composition_error(message=message, reason=reason))


def serialize_payload(data: Optional[Mapping[str, Any]]) -> str:
    """
    Serializa os dados para o bloco JSON do documento.

    Raises:
        CompositionError: Dados não serializáveis ou sem round-trip fiel.
    """
    value = {} if data is None else data
    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise _composition_error("Dados de renderização não serializáveis em JSON", str(e)) from e

    if json.loads(text) != value:
        raise _composition_error(
            "Dados de renderização não sobrevivem ao round-trip JSON",
            "tuplas, chaves não-string ou subclasses mudam após a serialização",
        )

    for char, escaped in _JSON_SCRIPT_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def _script_safe(code: str) -> str:
    return code.replace("</script", "<\\/script").replace("<!--", "<\\!--")


def compose_document(markup: str, data: Optional[Mapping[str, Any]], browser_payload: str, settings: Settings) -> str:
    """Documento completo: marcação + dados + runtimes + hidratação."""
    return DOCUMENT_TEMPLATE.format(
        container_id=html.escape(settings.container_id),
        data_element_id=html.escape(settings.data_element_id),
        markup=markup,
        payload=serialize_payload(data),
        runtime_scripts="".join(
            RUNTIME_SCRIPT_TEMPLATE.format(src=html.escape(src)) for src in settings.runtime_scripts
        ),
        browser_payload=_script_safe(browser_payload),
    )


def compose_static(markup: str, data: Optional[Mapping[str, Any]], settings: Settings) -> str:
    """Documento sem scripts executáveis (hidratação desabilitada)."""
    return STATIC_TEMPLATE.format(
        container_id=html.escape(settings.container_id),
        data_element_id=html.escape(settings.data_element_id),
        markup=markup,
        payload=serialize_payload(data),
    )
