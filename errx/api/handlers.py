from __future__ import annotations

import logging
import uuid
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from errx.core.chain import as_
from errx.core.config import Settings, get_settings
from errx.core.errors import CustomError, context_of, custom_code_of, http_code_of
from errx.core.logging import get_logger, log_error, request_id_var, set_log_context, setup_logging
from errx.schemas import ErrorResponse

log = get_logger("errx.api")


def status_for(err: BaseException, default: int = 500) -> int:
    """HTTP status for err: the first http_code in its chain, else default.

    Codes outside 100-599 cannot be sent and fall back to default.
    """
    status = http_code_of(err, default=default)
    if not 100 <= status <= 599:
        return default
    return status


def _code_name(status: int, fallback: str) -> str:
    if status >= 500:
        return fallback
    try:
        return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "error"


def _error_json(err: BaseException, status: int, detail: str, settings: Settings) -> JSONResponse:
    ctx = context_of(err)
    body = ErrorResponse(
        detail=detail,
        code=_code_name(status, settings.DEFAULT_ERROR_CODE),
        custom_code=custom_code_of(err) or None,
        request_id=ctx.get(request_id_var, request_id_var.get("-")),
    )
    if settings.EXPOSE_CAUSE and getattr(err, "__cause__", None) is not None:
        body.cause = str(err.__cause__)
    resp = JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))
    if body.request_id != "-":
        resp.headers[settings.REQUEST_ID_HEADER] = body.request_id
    return resp


def _respond(err: BaseException, settings: Settings) -> JSONResponse:
    # 5xx details never leave the process; they are logged instead.
    status = status_for(err, settings.DEFAULT_HTTP_CODE)
    if status >= 500:
        log_error(log, err)
        return _error_json(err, status, "Internal server error", settings)
    log_error(log, err, level=logging.WARNING)
    detail = err.message if isinstance(err, CustomError) else str(err)
    return _error_json(err, status, detail, settings)


def register_error_handlers(
    app: FastAPI,
    settings: Optional[Settings] = None,
    *,
    configure_logging: bool = False,
) -> None:
    """Bind request ids and answer errors with their own status and codes.

    With ``configure_logging`` the root logger is set up at ``LOG_LEVEL``.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.LOG_LEVEL)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        rid = request.headers.get(settings.REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid
        set_log_context(request_id=rid)

        try:
            response = await call_next(request)
        except Exception as exc:
            # Plain wrappers around a CustomError still carry its status.
            if as_(exc, CustomError) is None:
                raise
            response = _respond(exc, settings)
        response.headers[settings.REQUEST_ID_HEADER] = rid
        return response

    @app.exception_handler(CustomError)
    async def custom_error_handler(request: Request, exc: CustomError):
        return _respond(exc, settings)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return _respond(exc, settings)
