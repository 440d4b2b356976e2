# src/isorender/core/runtime/executor.py
"""
Execução do payload server e renderização para marcação estática.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, Optional

from isorender.core.errors import render_error
from isorender.core.exceptions import IsorenderError, RenderError

from .elements import h, render_to_static_markup
from .loader import InProcessModuleLoader, ModuleLoader

log = logging.getLogger("isorender.core.runtime")


def render_markup(server_payload: str, data: Optional[Mapping[str, Any]], *, loader: Optional[ModuleLoader] = None) -> str:
    """
    Avalia o payload server e renderiza o componente exportado com `data`.

    O componente recebe uma cópia profunda de `data`; o objeto do chamador
    nunca é exposto.

    Raises:
        ExecutionError: O payload não pôde ser avaliado como módulo.
        DependencyResolutionError: O componente pediu um partial fora do bundle.
        RenderError: O componente falhou com os dados fornecidos.
    """
    if data is not None and not isinstance(data, Mapping):
        raise RenderError.from_payload(render_error(
            exc_type="TypeError",
            exc_message=f"dados de renderização devem ser um mapa, recebido {type(data).__name__}",
        ))
    props = copy.deepcopy(dict(data or {}))

    exported = (loader or InProcessModuleLoader()).load(server_payload)

    try:
        markup = render_to_static_markup(h(exported, props))
    except IsorenderError:
        raise
    except Exception as e:
        raise RenderError.from_payload(
            render_error(exc_type=type(e).__name__, exc_message=str(e))
        ) from e

    log.debug("markup rendered (%d chars)", len(markup))
    return markup
