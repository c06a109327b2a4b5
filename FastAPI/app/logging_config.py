import contextvars
import logging
import sys

# Id of the HTTP request being served; "-" outside a request (startup, scripts).
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [req=%(request_id)s]: %(message)s"

QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "botocore", "urllib3", "pdfminer")


class RequestIdFilter(logging.Filter):
    """Stamp every record with the current request id so log lines can be correlated."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        try:
            from app.config import settings
            level = settings.log_level
        except Exception:
            return logging.INFO
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send all app logs to stdout in one format. Safe to call more than once."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
