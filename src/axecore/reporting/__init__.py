"""Report formatting for axe results."""

from .formatters import FORMATS, format_results

__all__ = ["FORMATS", "format_results"]
