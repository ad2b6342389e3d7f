"""
Custom exceptions for the translation pipeline.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Classification of a failed translation."""
    CONFIGURATION = "configuration"
    IO = "io"
    SCHEMA = "schema"
    INPUT = "input"
    REPORTED = "reported"


class TranslatorError(Exception):
    """Base class for all translator errors."""
    kind: ErrorKind = ErrorKind.CONFIGURATION


class PluginResolutionError(TranslatorError):
    """Raised when a parser or producer identifier cannot be turned into a callable."""
    kind = ErrorKind.CONFIGURATION

    def __init__(self, role: str, identifier: Any, message: str):
        super().__init__(f"Can't load {role} {identifier!r}: {message}")
        self.role = role
        self.identifier = identifier
        self.reason = message


class SchemaError(TranslatorError):
    """Raised when the schema model rejects a table, field or key."""
    kind = ErrorKind.SCHEMA

    def __init__(self, message: str, table: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.table = table
        self.field = field


class OptionError(TranslatorError, ValueError):
    """Raised for an option value the pipeline does not understand, such as an unknown visibility."""
    kind = ErrorKind.CONFIGURATION


class InputError(TranslatorError, ValueError):
    """Raised when the input cannot be turned into text or read as a document."""
    kind = ErrorKind.INPUT


class XMIError(InputError):
    """Raised for XMI documents that cannot be read (malformed XML, no model)."""
