"""
Built-in producers. A producer module exposes ``produce(translator, data)``.
"""
from . import json  # noqa: F401  registers the json alias

__all__ = ["json"]
