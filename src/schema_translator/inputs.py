"""
Explicit input variants accepted by the translator.

Callers that know what they hold should construct one of these directly;
`as_input` maps loosely typed values onto them.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Union


@dataclass(frozen=True)
class TextInput:
    """Literal schema text held in memory."""
    text: str

    def to_options(self) -> dict[str, Any]:
        return {"data": self.text}


@dataclass(frozen=True)
class BufferInput:
    """Raw bytes held in memory (bytes, bytearray or memoryview)."""
    buffer: Union[bytes, bytearray, memoryview]

    def to_options(self) -> dict[str, Any]:
        return {"data": bytes(self.buffer)}


@dataclass(frozen=True)
class StreamInput:
    """An open, readable text or binary stream. It is drained completely."""
    stream: IO[Any]

    def to_options(self) -> dict[str, Any]:
        return {"data": self.stream.read()}


@dataclass(frozen=True)
class PathInput:
    """A filesystem path whose whole contents are the input."""
    path: Union[str, os.PathLike]

    def to_options(self) -> dict[str, Any]:
        return {"filename": self.path}


@dataclass(frozen=True)
class OptionsInput:
    """A pre-assembled argument record (data/filename/parser/producer/options)."""
    options: Mapping[str, Any] = field(default_factory=dict)

    def to_options(self) -> dict[str, Any]:
        return dict(self.options)


TranslationInput = Union[TextInput, BufferInput, StreamInput, PathInput, OptionsInput]

_VARIANTS = (TextInput, BufferInput, StreamInput, PathInput, OptionsInput)


def as_input(value: Any) -> TranslationInput:
    """Map a single untagged value onto an input variant.

    Mappings are argument records, objects with ``read()`` are streams,
    bytes-like objects are buffers, strings and path objects are paths.
    """
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, Mapping):
        return OptionsInput(value)
    if callable(getattr(value, "read", None)):
        return StreamInput(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BufferInput(value)
    if isinstance(value, (str, Path, os.PathLike)):
        return PathInput(value)
    raise TypeError(f"Unsupported translation input of type {type(value).__name__}")
