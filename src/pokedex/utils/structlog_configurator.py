"""Structlog-based logging configuration for the Pokédex.

Module loggers stay on the standard library; this module routes them through
structlog processors so every record gets a timestamp, level and static context,
rendered either as JSON or as human-readable console output.
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import structlog

from pokedex.config.models import PokedexConfig


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json(config: PokedexConfig) -> bool:
    """Decide between JSON and console rendering."""
    if config.logging.json_logs is not None:
        return config.logging.json_logs
    return os.environ.get("POKEDEX_JSON_LOGS", "false").lower() == "true"


def _configure_processors(config: PokedexConfig) -> list:
    """Build the shared processor chain."""
    extra_fields = {"service": "pokedex", **config.logging.extra_fields}

    processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    return processors


def configure_structlog(config: PokedexConfig) -> None:
    """Configure structlog and route standard library logging through it.

    Args:
        config: The PokedexConfig instance containing logging settings.
    """
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)
    shared_processors = _configure_processors(config)
    renderer = (
        structlog.processors.JSONRenderer()
        if _use_json(config)
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Standard library records (logging.getLogger(__name__)) get the same treatment
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.add_logger_name, *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        log_level=config.logging.level,
        json_output=_use_json(config),
    )
