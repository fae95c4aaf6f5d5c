"""structlog setup for the workflow service.

Every record, whether emitted through structlog or a stdlib
``logging.getLogger(__name__)`` call with ``extra=``, passes through the same
processor chain. Request and job identifiers bound with
``bind_request_context`` / ``bind_job_context`` ride along on every line
logged while the request is handled.
"""

import logging
import sys

import structlog

SERVICE_NAME = "brimis-workflow"

_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _add_service(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _processor_chain() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Route structlog and stdlib logging to stdout.

    Args:
        log_level: debug/info/warning/error; unknown names fall back to info.
        json_output: One JSON object per line when True, coloured console otherwise.
    """
    chain = _processor_chain()
    if json_output:
        render = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render],
            foreign_pre_chain=chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(trace_id: str, **extra: str) -> None:
    structlog.contextvars.bind_contextvars(trace_id=trace_id, **extra)


def bind_job_context(job_id: str) -> None:
    """Tag the rest of the current request's log lines with ``job_id``."""
    structlog.contextvars.bind_contextvars(job_id=job_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
