"""
structlog setup for Based-or-Degen.

Every event carries timestamp, level, logger and event_type. Output goes to
stderr so the CLI tools can print JSON reports on stdout. LOG_FORMAT selects
json (default) or console rendering; LOG_LEVEL filters.

No backend_based imports here: config and analytics both log.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def _rename_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's 'event' key is exposed as event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    render = (fmt or os.getenv("LOG_FORMAT") or "json").strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
    ]
    if render == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors += [_rename_event, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Structured logger bound to the module name:

        logger = get_logger(__name__)
        logger.info("wallet_classified", wallet=short_wallet(addr), builder_score=10)
    """
    return structlog.get_logger(name).bind(logger=name)
