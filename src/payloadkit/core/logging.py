# src/payloadkit/core/logging.py
"""Structured logging for payloadkit.

structlog renders every record, including records from stdlib loggers
(httpx, dynaconf, ...) which reach it through ProcessorFormatter. Output is
JSON for machines or a coloured console for humans.

Storage backends log one event per network call (backend, operation,
status, latency). Credentials and payload bodies must never reach a log
line: _redact_sensitive_fields masks them regardless of which module
emitted the event.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

REDACTED = "[redacted]"

# Event keys whose values are masked before rendering
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "access_key_id",
        "secret_access_key",
        "pinata_api_key",
        "pinata_api_secret",
        "pinata_secret_api_key",
        "content",
        "raw_content",
    }
)

# Per-request connection chatter from the HTTP and tracing stacks
_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "opentelemetry",
)


def _redact_sensitive_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask credential and payload-body values, top level and one dict deep."""
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {k: REDACTED if str(k).lower() in SENSITIVE_KEYS else v for k, v in value.items()}
    return event_dict


def _drop_formatter_meta(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Strip the bookkeeping keys ProcessorFormatter injects."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        _redact_sensitive_fields,
    ]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_drop_formatter_meta, structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging to stdout through one renderer.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: Emit one JSON object per line instead of console text
        level: Root level name (DEBUG, INFO, WARNING, ERROR)

    Raises:
        AttributeError: If level is not a logging level name
    """
    root_level: int = getattr(logging, level.upper())
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    # Noisy libraries stay at WARNING or stricter, never looser than root
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module (pass __name__)."""
    bound: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return bound
