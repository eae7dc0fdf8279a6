"""
Structured logging for the API and the scheduler process.

Every line is JSON with the service name. HTTP requests carry a
correlation id and scheduler passes a job id; both are also exposed as
context variables so the database layer can tag SQL with them.
"""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

import structlog

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
job_id: ContextVar[str] = ContextVar("job_id", default="")


def configure_logging(service_name: str, debug: bool = False) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _stamp_service(service_name),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _stamp_service(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def current_trace_id() -> str:
    """The request correlation id, or the job id inside a scheduler pass."""
    return correlation_id.get() or job_id.get()


@contextmanager
def request_context(cid: str | None = None, **fields) -> Iterator[str]:
    """Bind a correlation id (generated if missing) for one HTTP request."""
    cid = cid or str(uuid4())
    token = correlation_id.set(cid)
    try:
        with structlog.contextvars.bound_contextvars(correlation_id=cid, **fields):
            yield cid
    finally:
        correlation_id.reset(token)


@contextmanager
def job_context(job_name: str) -> Iterator[str]:
    """Bind a fresh job id such as ``daily_reminders-1a2b3c4d`` for one pass."""
    jid = f"{job_name}-{uuid4().hex[:8]}"
    token = job_id.set(jid)
    try:
        with structlog.contextvars.bound_contextvars(job_id=jid, job=job_name):
            yield jid
    finally:
        job_id.reset(token)


class Timer:
    """
    Wall-clock timer for a pass or a probe.

        with Timer() as t:
            await service.execute()
        logger.info("Pass completed", duration_ms=t.duration_ms)
    """

    def __init__(self) -> None:
        self._started = 0.0
        self._stopped: float | None = None

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc) -> None:
        self._stopped = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return round((end - self._started) * 1000, 2)
