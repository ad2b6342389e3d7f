"""Global structlog configuration shared by the CLI and embedding applications."""

import logging as py_logging
from typing import Optional

import structlog

from .config import LoggingConfig


def configure_logging(logging_config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """Configure stdlib logging and structlog from a LoggingConfig.

    Returns a logger bound to the translator so callers can log straight away.
    """
    logging_config = logging_config or LoggingConfig()

    handlers = None
    if logging_config.file:
        handlers = [py_logging.FileHandler(logging_config.file, encoding="utf-8")]

    py_logging.basicConfig(
        level=getattr(py_logging, logging_config.level.upper()),
        format="%(message)s",
        handlers=handlers,
        force=True
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=logging_config.file is None) if logging_config.format.lower() == "console"
            else structlog.processors.JSONRenderer(sort_keys=True)
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logger = structlog.get_logger("schema_translator")
    logger.debug("Global logging configured.", logging_level=logging_config.level, logging_format=logging_config.format)
    return logger
