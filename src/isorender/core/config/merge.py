# src/isorender/core/config/merge.py
"""
Deep-merge de settings sobre os defaults do isorender.

Política de merge (v1):
    - dict   → merge recursivo por chave
    - list   → sobrescrita total
    - None   → ignorado (mantém o default)
    - escalar → sobrescrita direta
    - conflito de tipos → `ConfigTypeConflictError`

`bool` e `int` são considerados tipos distintos; caminhos (`os.PathLike`)
são normalizados para `str` antes da comparação.

O merge é puramente funcional: nenhum input é mutado.
"""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any, Dict, Mapping

from .errors import ConfigTypeConflictError


def _normalize(value: Any) -> Any:
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, tuple):
        return [_normalize(v) for v in value]
    return value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any], *, _path: str = "") -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve um novo dicionário.

    Args:
        base: Mapa de defaults.
        override: Mapa fornecido pelo chamador.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise ConfigTypeConflictError(
            f"Deep-merge requer mapas no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(dict(base))

    for key, raw in override.items():
        value = _normalize(raw)
        dotted = f"{_path}.{key}" if _path else str(key)

        if value is None:
            continue

        if key not in result:
            result[key] = deepcopy(value)
            continue

        current = result[key]

        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value, _path=dotted)
            continue

        if type(current) is not type(value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{dotted}': "
                f"{type(current).__name__} vs {type(value).__name__}"
            )

        # list e escalares -> sobrescrita total
        result[key] = deepcopy(value)

    return result
