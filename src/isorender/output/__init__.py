"""Composição do documento final e do fragmento de diagnóstico."""

from .composer import compose_document, compose_static, serialize_payload
from .diagnostics import render_diagnostic_fragment

__all__ = [
    "compose_document",
    "compose_static",
    "render_diagnostic_fragment",
    "serialize_payload",
]
