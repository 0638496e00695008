from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from random_line.api.middleware import RequestIdMiddleware
from random_line.core.errors.base import AppError, ErrorCode
from random_line.core.errors.handlers import install_exception_handlers


class _Err(BaseModel):
    code: str
    message: str
    request_id: str


@pytest.mark.parametrize(
    ("code", "status"),
    [
        (ErrorCode.INVALID_ARGUMENT, 400),
        (ErrorCode.DATA_NOT_FOUND, 404),
        (ErrorCode.IO_ERROR, 500),
        (ErrorCode.INTERNAL, 500),
    ],
)
def test_error_handler_maps_codes_and_includes_request_id(code: ErrorCode, status: int) -> None:
    app = FastAPI()
    install_exception_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    def boom() -> None:
        raise AppError(code, "nope")

    app.add_api_route("/boom", boom, methods=["GET"])  # avoid decorator type inference pitfalls

    client = TestClient(app)
    r = client.get("/boom", headers={"X-Request-ID": "abc"})
    assert r.status_code == status

    body = _Err.model_validate_json(r.text)
    assert body.code == code.value and body.request_id == "abc"


def test_non_app_error_falls_through_to_internal_handler() -> None:
    app = FastAPI()
    install_exception_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    def boom() -> None:
        raise RuntimeError("kaboom")

    app.add_api_route("/boom", boom, methods=["GET"])

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/boom", headers={"X-Request-ID": "xyz"})
    assert r.status_code == 500
    body = _Err.model_validate_json(r.text)
    assert body.code == ErrorCode.INTERNAL.value
    assert body.message == "kaboom"
