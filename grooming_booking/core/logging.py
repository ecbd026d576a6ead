import logging

from grooming_booking.core.config import settings
from grooming_booking.core.request_context import request_id_ctx_var

LOG_FORMAT = "%(asctime)s %(levelname)s request_id=%(request_id)s %(name)s %(message)s"

QUIET_LOGGERS = ("uvicorn.access",)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get()
        return True


def build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def _is_configured(logger: logging.Logger) -> bool:
    return any(
        isinstance(handler_filter, RequestIdFilter)
        for handler in logger.handlers
        for handler_filter in handler.filters
    )


def setup_logging(level: str | None = None) -> None:
    root_logger = logging.getLogger()
    if _is_configured(root_logger):
        return

    root_logger.setLevel((level or settings.log_level).upper())
    root_logger.addHandler(build_handler())
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
