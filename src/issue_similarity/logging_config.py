"""
Structured logging for the similarity engine.

Library modules only call `structlog.get_logger`; the embedding application
(or the bundled CLI) decides rendering by calling `setup_logging` once.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings
from .version import SCORING_VERSION


def add_scoring_version(logger, method_name, event_dict):
    """Stamp every record with the scoring version that produced it."""
    event_dict.setdefault("scoring_version", SCORING_VERSION)
    return event_dict


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog.

    Records go to the stderr in place when this is called, so stdout stays
    free for ranking output. `level` and `json_output` override
    `settings.log_level` and `settings.log_json`.
    """
    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            add_scoring_version,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Loggers are rebuilt per call against the current factory, so a
        # later setup_logging() or reset also reaches module-level loggers.
        cache_logger_on_first_use=False,
    )
