# campground_api/shared/logging_config.py
import logging
import sys

import structlog
from opentelemetry import trace

from campground_api.shared.config import Settings

NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "urllib3")

# Event keys whose values never reach the log output.
REDACTED_KEYS = frozenset({"password", "password_hash", "access_token", "api_secret", "token"})


def add_open_telemetry_spans(_, __, event_dict):
    """
    Processor to inject the current TraceID and SpanID into the log entry.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def redact_secrets(_, __, event_dict):
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def configure_logging(settings: Settings) -> None:
    """
    Configures structlog and the standard logging library to emit
    structured JSON logs (Production) or colored text logs (Development).
    """

    # 1. Define the chain of processors
    processors = [
        structlog.contextvars.merge_contextvars,      # request_id, method, path
        add_open_telemetry_spans,
        redact_secrets,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # 2. Determine the Output Format
    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    # 3. Configure Structlog
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # 4. Standard library logging (uvicorn, sqlalchemy, httpx)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    # httpx logs every Mapbox request URL at INFO, access token included.
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if settings.DEBUG else logging.WARNING)
