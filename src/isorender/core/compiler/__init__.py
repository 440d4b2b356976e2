"""Compilação de componentes para os perfis server e browser."""

from .browser import RUNTIME_PRELUDE, build_browser_bundle, compile_entry_js, compile_module_js, entry_source
from .compiler import BROWSER_PROFILE, SERVER_PROFILE, DualTargetCompiler, browser_path, server_path
from .normalize import FACTORY_NAME, NormalizedModule, normalize_module
from .server import build_server_bundle

__all__ = [
    "BROWSER_PROFILE",
    "DualTargetCompiler",
    "FACTORY_NAME",
    "NormalizedModule",
    "RUNTIME_PRELUDE",
    "SERVER_PROFILE",
    "browser_path",
    "build_browser_bundle",
    "build_server_bundle",
    "compile_entry_js",
    "compile_module_js",
    "entry_source",
    "normalize_module",
    "server_path",
]
