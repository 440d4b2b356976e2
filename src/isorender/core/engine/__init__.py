"""Orquestração de uma renderização e contenção de erros."""

from .engine import RenderPipeline, exception_to_diagnostic, format_trace

__all__ = ["RenderPipeline", "exception_to_diagnostic", "format_trace"]
