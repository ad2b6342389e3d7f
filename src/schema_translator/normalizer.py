"""
Reduces caller-supplied input to a single text payload plus an options record.
"""
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from .exceptions import InputError
from .inputs import as_input

logger = structlog.get_logger(__name__)

# Keys that are read directly off the argument record and handed to parsers.
PARSER_OPTION_KEYS = ("visibility",)


class NormalizedInput(BaseModel):
    payload: Optional[str] = None
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return self.payload is not None

    @property
    def parser_override(self) -> Any:
        return self.options.get("parser") or self.options.get("from")

    @property
    def producer_override(self) -> Any:
        return self.options.get("producer") or self.options.get("to")

    @property
    def parser_options(self) -> dict[str, Any]:
        """Passthrough options for the parser: the ``options`` record plus known top-level keys."""
        parser_options = dict(self.options.get("options") or {})
        for key in PARSER_OPTION_KEYS:
            if self.options.get(key) is not None:
                parser_options.setdefault(key, self.options[key])
        return parser_options


def _decode(data: Any, encoding: str, origin: str = "data") -> str:
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode(encoding)
        except UnicodeDecodeError as e:
            raise InputError(f"Can't decode {origin} as {encoding}: {e}") from e
    return data if isinstance(data, str) else str(data)


def normalize(source: Any = None, encoding: str = "utf-8", **kwargs: Any) -> NormalizedInput:
    """Turn one input value and/or keyword arguments into a NormalizedInput.

    Payload resolution: ``data`` is used verbatim when present, otherwise the
    file named by ``filename`` or ``file`` is read whole. OSError from the read
    propagates and bytes that do not decode raise InputError. When neither
    yields anything the payload is None.
    """
    options: dict[str, Any] = {}
    if source is not None:
        options.update(as_input(source).to_options())
    options.update(kwargs)

    payload: Optional[str] = None
    if options.get("data") is not None:
        payload = _decode(options["data"], encoding)
    else:
        path = options.get("filename") or options.get("file")
        if path is not None:
            logger.debug("Reading input file.", path=str(path))
            payload = _decode(Path(path).read_bytes(), encoding, origin=f"'{path}'")
            options["data"] = payload

    if payload is None:
        logger.debug("No input data to translate.", keys=sorted(options))
    return NormalizedInput(payload=payload, options=options)
