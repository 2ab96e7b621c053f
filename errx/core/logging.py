from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional

from errx.core.errors import context_of, custom_code_of, http_code_of


request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # log_error() sets request_id from the error's own context.
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get("-")
        return True


def set_log_context(*, request_id: Optional[str] = None) -> None:
    if request_id is not None:
        request_id_var.set(request_id)


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers to avoid duplicated logs under reload.
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_ContextFilter())

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s | request_id=%(request_id)s"
    handler.setFormatter(logging.Formatter(fmt))

    root.handlers = [handler]


def get_logger(name: str = "errx") -> logging.Logger:
    return logging.getLogger(name)


def log_error(logger: logging.Logger, err: BaseException, level: int = logging.ERROR) -> None:
    """Log err with its codes and the request id it was created under."""
    ctx = context_of(err)
    request_id = ctx.get(request_id_var, request_id_var.get("-"))
    logger.log(
        level,
        "%s | http_code=%s custom_code=%s",
        err,
        http_code_of(err),
        custom_code_of(err),
        extra={"request_id": request_id},
        exc_info=err if level >= logging.ERROR and err.__traceback__ is not None else None,
    )
