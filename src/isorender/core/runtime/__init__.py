"""Runtime server: elementos, carregamento do bundle e renderização estática."""

from .elements import VOID_ELEMENTS, Element, Fragment, component, h, render_to_static_markup
from .executor import render_markup
from .loader import InProcessModuleLoader, ModuleLoader

__all__ = [
    "Element",
    "Fragment",
    "InProcessModuleLoader",
    "ModuleLoader",
    "VOID_ELEMENTS",
    "component",
    "h",
    "render_markup",
    "render_to_static_markup",
]
