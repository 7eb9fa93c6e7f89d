"""Structured logging for the wrapbind CLI — structlog rendered through stdlib logging."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def setup_logging(verbose: bool = False) -> None:
    """Send ``wrapbind.*`` events to stderr.

    ``WRAPBIND_LOG_LEVEL`` overrides the level (INFO, or DEBUG with ``-v``);
    ``WRAPBIND_LOG_FORMAT=json`` switches to one JSON object per line.
    """
    level = os.environ.get("WRAPBIND_LOG_LEVEL", "DEBUG" if verbose else "INFO").upper()
    json_output = os.environ.get("WRAPBIND_LOG_FORMAT", "console").lower() == "json"

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdout is reserved for command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    logger = logging.getLogger("wrapbind")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
