"""Schema Translator - convert database schema descriptions between formats.

Input is run through a pluggable parser that builds a canonical in-memory
schema, then through a pluggable producer that renders the target format.
"""

__version__ = "0.1.0"
__author__ = "Tyler Zervas"
__email__ = "tz-dev@vectorweight.com"

from .config import Config
from .translator import TranslationResult, Translator

__all__ = ["Config", "TranslationResult", "Translator"]
