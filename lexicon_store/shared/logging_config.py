# lexicon_store/shared/logging_config.py
import logging
import sys

import structlog
from opentelemetry import trace

from lexicon_store.shared.config import settings

def add_open_telemetry_spans(_, __, event_dict):
    """Adds the trace and span ids of the active use-case span (None outside a span)."""
    span = trace.get_current_span()
    context = span.get_span_context() if span.is_recording() else None
    event_dict["trace_id"] = format(context.trace_id, "032x") if context else None
    event_dict["span_id"] = format(context.span_id, "016x") if context else None
    return event_dict

def _renderer():
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()

def configure_logging():
    """
    Sends structlog events and standard-library records through one renderer.

    LOG_FORMAT picks JSON lines or the console renderer; LOG_LEVEL filters both.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_open_telemetry_spans,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # pymongo logs through the standard library
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(),
        ],
    ))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
