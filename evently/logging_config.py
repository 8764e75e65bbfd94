"""Logging setup. Every record carries the correlation id of the request it belongs to."""

import logging
from contextvars import ContextVar

from evently.config import Settings

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Inject the current correlation id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        # An id passed through ``extra`` wins over the context variable
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing or correlation_id_var.get() or "-"
        return True


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once at startup."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level.upper())

    # SQL echo is only useful while developing
    sql_level = logging.INFO if settings.is_development else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
