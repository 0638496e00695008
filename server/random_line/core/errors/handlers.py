from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...api.request_context import request_id_var
from .base import AppError, ErrorCode

_STATUS_MAP: dict[ErrorCode, int] = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.DATA_NOT_FOUND: 404,
    ErrorCode.IO_ERROR: 500,
    ErrorCode.INTERNAL: 500,
}


def install_exception_handlers(app: FastAPI) -> None:
    async def _app_error_handler(_: Request, exc: Exception) -> JSONResponse:
        if not isinstance(exc, AppError):  # pragma: no cover
            raise exc
        payload: dict[str, str] = {
            "error": exc.code.value,
            "code": exc.code.value,
            "message": exc.message,
            "request_id": request_id_var.get(),
        }
        return JSONResponse(content=payload, status_code=_STATUS_MAP.get(exc.code, 500))

    async def _unhandled(_: Request, exc: Exception) -> JSONResponse:
        rid = request_id_var.get()
        payload: dict[str, str] = {
            "code": ErrorCode.INTERNAL.value,
            "message": str(exc),
            "request_id": rid,
        }
        return JSONResponse(content=payload, status_code=500)

    # Explicit registration instead of decorators
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(Exception, _unhandled)
