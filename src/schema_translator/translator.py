"""
Translator: runs input through a parser, then through a producer.

    translator = Translator(parser="xmi", producer="json")
    output = translator.translate("schema.xmi")
    if not output:
        print(translator.error)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from .config import Config
from .exceptions import ErrorKind, TranslatorError
from .models.schema import Schema
from .normalizer import NormalizedInput, normalize
from .plugins import PluginResolver, PluginRole, Transform, identity


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of Translator.run: a value, no data at all, or a classified failure."""
    value: Any = None
    no_data: bool = False
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""

    @classmethod
    def success(cls, value: Any) -> "TranslationResult":
        return cls(value=value)

    @classmethod
    def nothing(cls) -> "TranslationResult":
        return cls(no_data=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "TranslationResult":
        return cls(error_kind=kind, error_message=message)

    @property
    def ok(self) -> bool:
        return self.error_kind is None and not self.no_data

    @property
    def failed(self) -> bool:
        return self.error_kind is not None


class Translator:
    """
    Owns the configured parser and producer transforms and the last reported error.

    Transforms receive the translator as their first argument, giving them
    access to `options`, `schema`, `logger` and `report_error`.
    """

    def __init__(
        self,
        parser: Any = None,
        producer: Any = None,
        *,
        config: Optional[Config] = None,
        logger: Optional[structlog.BoundLogger] = None,
        resolver: Optional[PluginResolver] = None,
        **aliases: Any,
    ):
        """
        Args:
            parser: Parser identifier or callable (alias ``from``).
            producer: Producer identifier or callable (alias ``to``).
            config: Application configuration. Defaults are used when omitted.
            logger: Optional logger receiving diagnostic records.
            resolver: Optional PluginResolver, mainly for tests.
            **aliases: Accepts ``from`` and ``to``.
        """
        unknown = set(aliases) - {"from", "to"}
        if unknown:
            raise TypeError(f"Unexpected Translator arguments: {', '.join(sorted(unknown))}")

        self.config = config or Config()
        self.logger = (logger or structlog.get_logger(__name__)).bind(component="Translator")
        self.resolver = resolver or PluginResolver(self.config.plugins, logger=self.logger)

        self.options: dict[str, Any] = {}
        self.schema = Schema()
        self._parser: Transform = identity
        self._producer: Transform = identity
        self._error = ""
        self._reports = 0

        self.set_parser(parser or aliases.get("from") or self.config.default_parser or identity)
        self.set_producer(producer or aliases.get("to") or self.config.default_producer or identity)

    # -------- Parser / producer --------
    @property
    def parser(self) -> Transform:
        return self._parser

    @property
    def producer(self) -> Transform:
        return self._producer

    def set_parser(self, identifier: Any) -> Transform:
        """Resolve and store the parser. PluginResolutionError propagates."""
        self._parser = self.resolver.resolve(PluginRole.PARSER, identifier)
        return self._parser

    def set_producer(self, identifier: Any) -> Transform:
        """Resolve and store the producer. PluginResolutionError propagates."""
        self._producer = self.resolver.resolve(PluginRole.PRODUCER, identifier)
        return self._producer

    # -------- Errors --------
    @property
    def error(self) -> str:
        """The last reported error, or an empty string."""
        return self._error

    def last_error(self) -> str:
        return self._error

    def report_error(self, message: str) -> None:
        """Record `message` as the last error and return None.

        For parser and producer writers: ``return translator.report_error("...")``.
        An empty message leaves the previous error in place.
        """
        if message:
            self._error = message
            self._reports += 1
            self.logger.warning("Translation error reported.", error=message)
        return None

    # -------- Pipeline --------
    def translate(self, source: Any = None, **kwargs: Any) -> Any:
        """
        Parse the input and produce output from the result.

        Input is either a single value (an input variant, argument record,
        stream, byte buffer or path) and/or keyword arguments: ``data``,
        ``filename``/``file``, ``parser``/``from``, ``producer``/``to``,
        ``options`` and ``visibility``.

        Returns None when there is no data to translate. Errors raised by the
        parser or producer propagate unchanged.
        """
        normalized = normalize(source, encoding=self.config.input.encoding, **kwargs)
        if not normalized.has_data:
            return None
        return self._execute(normalized)

    def run(self, source: Any = None, **kwargs: Any) -> TranslationResult:
        """Like translate, but reports the outcome as a TranslationResult.

        Translator errors (plugin resolution, schema construction, unreadable
        XMI) and OSError are returned as failures; anything else raised by a
        plugin still propagates.
        """
        reports_before = self._reports
        try:
            normalized = normalize(source, encoding=self.config.input.encoding, **kwargs)
            if not normalized.has_data:
                return TranslationResult.nothing()
            output = self._execute(normalized)
        except TranslatorError as e:
            self.report_error(str(e))
            return TranslationResult.failure(e.kind, str(e))
        except OSError as e:
            self.report_error(str(e))
            return TranslationResult.failure(ErrorKind.IO, str(e))

        if not output and self._reports != reports_before:
            return TranslationResult.failure(ErrorKind.REPORTED, self._error)
        return TranslationResult.success(output)

    def _execute(self, normalized: NormalizedInput) -> Any:
        # Overrides also become the new defaults.
        if normalized.parser_override:
            self.set_parser(normalized.parser_override)
        if normalized.producer_override:
            self.set_producer(normalized.producer_override)

        self.options = normalized.parser_options
        self.schema = Schema()

        log = self.logger.bind(parser=_describe(self._parser), producer=_describe(self._producer))
        log.debug("Running parser.", payload_length=len(normalized.payload or ""))
        intermediate = self._parser(self, normalized.payload)
        log.debug("Running producer.")
        return self._producer(self, intermediate)


def _describe(transform: Transform) -> str:
    module = getattr(transform, "__module__", None) or ""
    name = getattr(transform, "__qualname__", None) or type(transform).__name__
    return f"{module}.{name}" if module else name
