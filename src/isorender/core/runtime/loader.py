# src/isorender/core/runtime/loader.py
"""
Carregamento em processo do payload server.

`ModuleLoader` é a capacidade de "carregar e obter o export de um módulo
produzido há instantes, sem tocar o disco". A implementação padrão avalia o
bundle no interpretador atual; implementações alternativas (subprocesso,
execução restrita) podem ser injetadas no `RenderPipeline` sem alterar o
restante do pipeline.

Aviso:
    O código avaliado é tratado como de mesma confiança que o processo
    hospedeiro. Não há sandbox contra efeitos colaterais nem contra
    exaustão de recursos.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Protocol, Set, runtime_checkable

from isorender.core.errors import dependency_resolution_error, execution_error
from isorender.core.exceptions import DependencyResolutionError, ExecutionError, IsorenderError
from isorender.core.pipeline.dependencies import candidate_key

from .elements import Fragment, h

log = logging.getLogger("isorender.core.runtime")


@runtime_checkable
class ModuleLoader(Protocol):
    def load(self, code: str) -> Any:
        ...


def _execution_failure(exc: BaseException, hint: str = "") -> ExecutionError:
    payload = execution_error(exc_type=type(exc).__name__, exc_message=str(exc))
    if hint:
        return ExecutionError(message=payload.message, details=payload.details, hint=hint)
    return ExecutionError.from_payload(payload)


class InProcessModuleLoader:
    """
    Avalia um bundle server (`__modules__` + `__entry__`) e devolve o export
    da entrada.

    Cada chamada a `load` usa um namespace novo; nada é compartilhado entre
    bundles.
    """

    filename = "<isorender-server-bundle>"

    def load(self, code: str) -> Any:
        namespace: Dict[str, Any] = {"__name__": "isorender_bundle"}
        try:
            exec(compile(code, self.filename, "exec"), namespace)
        except Exception as e:
            raise _execution_failure(e) from e

        modules = namespace.get("__modules__")
        entry = namespace.get("__entry__")
        if not isinstance(modules, dict) or not isinstance(entry, str):
            raise ExecutionError.from_payload(execution_error(
                exc_type="InvalidBundle",
                exc_message="payload não define __modules__/__entry__",
            ))

        import_partial = self._resolver(modules)
        exported = import_partial(entry)
        if not callable(exported):
            raise _execution_failure(
                TypeError(f"export de {entry!r} não é chamável: {type(exported).__name__}"),
                hint="Decore com @component a função que renderiza o componente.",
            )
        return exported

    @staticmethod
    def _resolver(modules: Dict[str, Callable[..., Any]]) -> Callable[[str], Any]:
        exports: Dict[str, Any] = {}
        loading: Set[str] = set()

        def import_partial(path: str) -> Any:
            key = candidate_key(path)
            if key in exports:
                return exports[key]
            # import circular: o módulo ainda em carregamento é visto como None
            if key in loading:
                return None
            if key not in modules:
                raise DependencyResolutionError.from_payload(
                    dependency_resolution_error(key=key, available=sorted(modules))
                )

            loading.add(key)
            try:
                exports[key] = modules[key](import_partial, h, Fragment)
            except IsorenderError:
                raise
            except Exception as e:
                raise _execution_failure(e) from e
            finally:
                loading.discard(key)
            log.debug("module loaded: %s", key)
            return exports[key]

        return import_partial
