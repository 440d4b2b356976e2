# src/isorender/core/config/loader.py
"""
Leitura de arquivos de settings do isorender.

Orquestradores que mantêm a configuração em disco podem usar
`load_settings` para obter o mapa cru e entregá-lo a
`RenderPipeline.configure(...)`. A resolução contra os defaults acontece
em `resolve_settings`, não aqui.

Formatos suportados (v1):
    - YAML (.yaml, .yml) via PyYAML `safe_load`
    - JSON (.json)

Invariantes:
    - O retorno é sempre um dicionário
    - Arquivos vazios são interpretados como dicionários vazios
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # PyYAML

from .errors import (
    InvalidConfigRootTypeError,
    SettingsNotFoundError,
    UnsupportedConfigFormatError,
)


def load_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Args:
        path: Caminho para o arquivo (.yaml, .yml ou .json).

    Returns:
        Dict[str, Any]: Conteúdo do arquivo como dicionário.

    Raises:
        SettingsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    settings_file = Path(path)
    if not settings_file.exists():
        raise SettingsNotFoundError(f"Arquivo de settings não encontrado: {settings_file}")

    suffix = settings_file.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with settings_file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with settings_file.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {settings_file.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data
