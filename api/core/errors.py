"""
Error handling for the API.

Feature code raises `ControllerError` for expected business failures.
Everything else (DB, cache, whiteboard, programming errors) bubbles up to the
catch-all handler and is reported to the client as `ServerFail`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .responses import ErrorCode, Status, failed

logger = logging.getLogger(__name__)


class ControllerError(Exception):
    def __init__(self, code: ErrorCode, *, status: Status = Status.Failed):
        super().__init__(f"{code.name} ({int(code)})")
        self.code = code
        self.status = status


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ControllerError)
    async def controller_error_handler(request: Request, exc: ControllerError) -> JSONResponse:
        logger.info(
            "request_failed path=%s code=%s status=%s",
            request.url.path,
            exc.code.name,
            int(exc.status),
        )
        return JSONResponse(status_code=200, content=failed(exc.code, status=exc.status))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("params_check_failed path=%s errors=%s", request.url.path, exc.errors())
        return JSONResponse(status_code=200, content=failed(ErrorCode.ParamsCheckFailed))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        # Never leak internals to the client.
        logger.error("request_error path=%s error=%s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=200, content=failed(ErrorCode.ServerFail))
