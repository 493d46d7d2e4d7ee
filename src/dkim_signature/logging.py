"""Structured logging for the ``dkim-signature`` command line tool."""
from __future__ import annotations

import logging
import sys
from typing import IO, Any, MutableMapping

import structlog

DEFAULT_COMPONENT = "dkim-signature"

_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str | None = None, *, stream: IO[str] | None = None) -> None:
    """Emit one JSON object per record with ``level``, ``ts``, ``msg`` and ``component``.

    Records go to ``stream`` (stderr by default) so that command output on
    stdout, such as the JSON from ``parse``, stays machine readable at any
    log level. Calling this again replaces the previous setup.
    """

    numeric_level = _LEVELS.get((level or "info").lower(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            _add_component,
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _add_component(logger: Any, _name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    # Module loggers report their dotted name, e.g. "dkim_signature.parser.engine".
    event_dict.setdefault("component", getattr(logger, "name", None) or DEFAULT_COMPONENT)
    return event_dict


__all__ = ["configure_logging", "DEFAULT_COMPONENT"]
