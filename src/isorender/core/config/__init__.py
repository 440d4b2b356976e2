# src/isorender/core/config/__init__.py
"""
Camada de configuração do isorender.

Responsabilidades do pacote:
    - Resolver o mapa fornecido via `configure(...)` contra os defaults
    - Deep-merge determinístico (defaults + overrides)
    - Leitura opcional de arquivos de settings (YAML/JSON)

Configuração ausente ou inválida nunca é fatal: o problema é registrado
em log como `ConfigurationError` e o default correspondente é usado.
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    SettingsNotFoundError,
    UnsupportedConfigFormatError,
)
from .loader import load_settings
from .merge import deep_merge
from .settings import DEFAULT_SETTINGS, Settings, resolve_settings, resolve_settings_file

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "SettingsNotFoundError",
    "UnsupportedConfigFormatError",
    "load_settings",
    "deep_merge",
    "DEFAULT_SETTINGS",
    "Settings",
    "resolve_settings",
    "resolve_settings_file",
]
