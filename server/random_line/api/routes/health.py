from __future__ import annotations

import os

from fastapi import APIRouter, Response, status

from ...core.services.container import ServiceContainer
from ..schemas.health import HealthzResponse, ReadyzResponse


def build_router(container: ServiceContainer) -> APIRouter:
    router = APIRouter()

    def healthz() -> HealthzResponse:
        container.logging.adapter(category="api", service="health").info(
            "healthz", extra={"event": "healthz"}
        )
        return HealthzResponse(status="ok")

    def readyz(response: Response) -> ReadyzResponse:
        root = container.settings.app.lines_root
        if not os.path.isdir(root):
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            container.logging.adapter(category="api", service="health", path=root).info(
                "readyz degraded", extra={"event": "readyz", "reason": "lines root missing"}
            )
            return ReadyzResponse(status="degraded", reason="lines root missing")
        container.logging.adapter(category="api", service="health").info(
            "readyz", extra={"event": "readyz"}
        )
        return ReadyzResponse(status="ready")

    router.add_api_route("/healthz", healthz, methods=["GET"], response_model=HealthzResponse)
    router.add_api_route("/readyz", readyz, methods=["GET"], response_model=ReadyzResponse)
    return router
