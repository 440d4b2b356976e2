# src/isorender/core/config/settings.py
"""
Settings resolvidos do pipeline de renderização.

O chamador (orquestrador do catálogo) fornece um mapa de configuração uma
única vez via `RenderPipeline.configure(...)`. Este módulo resolve esse mapa
contra `DEFAULT_SETTINGS` e produz um `Settings` imutável.

Política de falha:
    - Configuração ausente → warning em log, defaults integrais
    - Chave desconhecida → warning em log, chave ignorada
    - Conflito de tipo ou valor inválido → warning em log, default da chave

Nenhum erro de configuração interrompe a renderização.
"""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from isorender.core.exceptions import ConfigurationError

from .errors import ConfigError, ConfigTypeConflictError
from .loader import load_settings
from .merge import deep_merge

log = logging.getLogger("isorender.core.config")


PREACT_UMD = "https://unpkg.com/preact@10/dist/preact.umd.js"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "paths": {
        "source": "source/_patterns",
        "output": "public/patterns",
    },
    "hydrate": True,
    "container_id": "patternContainer",
    "data_element_id": "patternJSON",
    "runtime_scripts": [PREACT_UMD],
}


@dataclass(frozen=True)
class Settings:
    """
    Configuração efetiva e imutável de um `RenderPipeline`.

    Campos:
        - source_root: raiz dos fontes de componentes (leitura de fallback)
        - output_root: raiz de saída do orquestrador; resolvida e repassada,
          o pipeline não grava em disco
        - hydrate: quando False, o payload browser não é compilado nem emitido
        - container_id: id do elemento que recebe a marcação estática
        - data_element_id: id do bloco JSON com os dados de renderização
        - runtime_scripts: URLs carregadas antes do script de hidratação
    """

    source_root: Path = Path(DEFAULT_SETTINGS["paths"]["source"])
    output_root: Path = Path(DEFAULT_SETTINGS["paths"]["output"])
    hydrate: bool = True
    container_id: str = DEFAULT_SETTINGS["container_id"]
    data_element_id: str = DEFAULT_SETTINGS["data_element_id"]
    runtime_scripts: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_SETTINGS["runtime_scripts"]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": {"source": str(self.source_root), "output": str(self.output_root)},
            "hydrate": self.hydrate,
            "container_id": self.container_id,
            "data_element_id": self.data_element_id,
            "runtime_scripts": list(self.runtime_scripts),
        }


def _warn(error: ConfigurationError) -> None:
    log.warning("%s details=%s hint=%s", error.message, error.details, error.hint)


def _is_identifier(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip()) and not any(c.isspace() for c in value)


def _validated(merged: Dict[str, Any]) -> Dict[str, Any]:
    """Substitui valores inválidos pelo default correspondente (chave a chave)."""
    out = deepcopy(merged)

    for section in ("source", "output"):
        value = out["paths"].get(section)
        if not isinstance(value, str) or not value.strip():
            _warn(ConfigurationError(
                message=f"paths.{section} inválido; usando default",
                details={"key": f"paths.{section}", "received": repr(value)},
                hint="Informe um caminho não vazio.",
            ))
            out["paths"][section] = DEFAULT_SETTINGS["paths"][section]

    for key in ("container_id", "data_element_id"):
        if not _is_identifier(out.get(key)):
            _warn(ConfigurationError(
                message=f"{key} inválido; usando default",
                details={"key": key, "received": repr(out.get(key))},
                hint="Ids de elemento devem ser strings não vazias e sem espaços.",
            ))
            out[key] = DEFAULT_SETTINGS[key]

    scripts = out.get("runtime_scripts")
    if not all(isinstance(s, str) and s.strip() for s in scripts):
        _warn(ConfigurationError(
            message="runtime_scripts inválido; usando default",
            details={"key": "runtime_scripts", "received": repr(scripts)},
            hint="Declare uma lista de URLs (strings).",
        ))
        out["runtime_scripts"] = list(DEFAULT_SETTINGS["runtime_scripts"])

    return out


def _merge_per_key(base: Mapping[str, Any], override: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Deep-merge chave a chave: um conflito de tipo descarta só a chave conflitante."""
    out = deepcopy(dict(base))
    for key, value in override.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        try:
            out = deep_merge(out, {key: value})
        except ConfigTypeConflictError as e:
            if isinstance(out.get(key), Mapping) and isinstance(value, Mapping):
                out[key] = _merge_per_key(out[key], value, dotted)
                continue
            _warn(ConfigurationError(
                message=f"{dotted} inválido; usando default",
                details={"key": dotted, "conflict": str(e)},
                hint="Ajuste o tipo do valor indicado para o tipo do default.",
            ))
    return out


def resolve_settings(raw: Optional[Mapping[str, Any]]) -> Settings:
    """
    Resolve o mapa fornecido pelo chamador em um `Settings`.

    Args:
        raw: Mapa de configuração (pode ser None).

    Returns:
        Settings: Configuração efetiva; nunca levanta erro de configuração.
    """
    if raw is None:
        _warn(ConfigurationError(
            message="Configuração ausente; usando defaults",
            details={"defaults": deepcopy(DEFAULT_SETTINGS)},
            hint="Chame RenderPipeline.configure(settings) antes de renderizar.",
        ))
        raw = {}

    if not isinstance(raw, Mapping):
        _warn(ConfigurationError(
            message="Configuração deve ser um mapa; usando defaults",
            details={"received": type(raw).__name__},
        ))
        raw = {}

    known = {k: v for k, v in raw.items() if k in DEFAULT_SETTINGS}
    unknown = sorted(str(k) for k in raw.keys() if k not in DEFAULT_SETTINGS)
    if unknown:
        _warn(ConfigurationError(
            message="Chaves de configuração desconhecidas ignoradas",
            details={"unknown": unknown, "known": sorted(DEFAULT_SETTINGS)},
        ))

    merged = _merge_per_key(DEFAULT_SETTINGS, known)

    effective = _validated(merged)

    return Settings(
        source_root=Path(effective["paths"]["source"]),
        output_root=Path(effective["paths"]["output"]),
        hydrate=effective["hydrate"],
        container_id=effective["container_id"],
        data_element_id=effective["data_element_id"],
        runtime_scripts=tuple(effective["runtime_scripts"]),
    )


def resolve_settings_file(path: Union[str, "os.PathLike[str]"]) -> Settings:
    """
    Lê um arquivo de settings (YAML/JSON) e o resolve como `resolve_settings`.

    Arquivo ausente, formato não suportado ou raiz inválida → warning em log
    e defaults integrais.
    """
    try:
        raw = load_settings(path)
    except ConfigError as e:
        _warn(ConfigurationError(
            message="Arquivo de settings inválido; usando defaults",
            details={"path": os.fspath(path), "error": f"{type(e).__name__}: {e}"},
            hint="Informe um arquivo .yaml/.yml/.json existente com um mapa na raiz.",
        ))
        raw = {}
    return resolve_settings(raw)
