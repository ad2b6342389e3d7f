"""
Built-in parsers. A parser module exposes ``parse(translator, data)``.
"""
from . import xmi  # noqa: F401  registers the xmi aliases

__all__ = ["xmi"]
