"""structlog setup for the cspolicy package loggers."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from cspolicy.config.loader import PolicySettings, get_settings

PACKAGE_LOGGER = "cspolicy"


def _rename_logger_to_module(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Report the emitting logger (e.g. cspolicy.policy) as 'module'."""
    name = event_dict.pop("logger", None)
    if name is not None:
        event_dict["module"] = name
    return event_dict


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    *,
    settings: PolicySettings | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route cspolicy.* logs through structlog and return the installed handler.

    Only the ``cspolicy`` logger is touched, so the host application's root
    logging stays as it is. Arguments left as None come from ``settings``
    (CSP_LOG_LEVEL, CSP_LOG_JSON). Records written with plain
    ``logging.getLogger("cspolicy...")`` get the same rendering.
    """
    if log_level is None or json_format is None:
        settings = settings or get_settings()
        log_level = settings.log_level if log_level is None else log_level
        json_format = settings.log_json if json_format is None else json_format

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _rename_logger_to_module,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    # Loggers are not cached so a second setup_logging() call takes effect
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(_resolve_level(log_level))
    package_logger.propagate = False
    return handler
