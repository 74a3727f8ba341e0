"""
Logging utilities for the client.

This module provides utilities for logging, including:
- Redaction of credentials carried in HTTP headers
- structlog configuration with stdlib integration
"""

import logging
import sys
from collections.abc import Mapping, Sequence
from enum import Enum

import structlog


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


# Header names (lower case) whose values never reach the logs in clear text
DEFAULT_REDACTED_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
}


def redact(value: str, mask: str = "***") -> str:
    """Redact a sensitive value.

    Args:
        value: The value to redact
        mask: The mask to use

    Returns:
        The redacted value
    """
    if not value:
        return value

    # Keep the first and last two characters
    if len(value) > 6:
        return f"{value[0:2]}{mask}{value[-2:]}"
    else:
        return mask


def redact_headers(
    headers: Mapping[str, Sequence[str]],
    redacted_headers: set[str] | None = None,
    mask: str = "***",
) -> dict[str, list[str]]:
    """Redact credential-bearing headers in a multi-value header mapping.

    Args:
        headers: Header name to list of values
        redacted_headers: Lower-case header names to redact
        mask: The mask to use

    Returns:
        A new mapping with sensitive values masked
    """
    if redacted_headers is None:
        redacted_headers = DEFAULT_REDACTED_HEADERS

    result: dict[str, list[str]] = {}
    for name, values in headers.items():
        if name.lower() in redacted_headers:
            result[name] = [redact(value, mask) for value in values]
        else:
            result[name] = list(values)
    return result


def configure_logging(
    level: int = logging.INFO,
    log_format: LogFormat = LogFormat.CONSOLE,
    log_file: str | None = None,
) -> None:
    """Configure stdlib logging to render through structlog.

    Records emitted by ``logging.getLogger(...)`` loggers in this package and
    by structlog loggers share the same processors and renderer.

    Args:
        level: Logging level
        log_format: Output format
        log_file: Optional log file path
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    elif log_format == LogFormat.CONSOLE:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"]
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )
