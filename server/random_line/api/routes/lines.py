from __future__ import annotations

from fastapi import APIRouter

from ...core.errors.base import AppError, ErrorCode
from ...core.logging.types import LoggingExtra
from ...core.services.container import ServiceContainer
from ...core.services.data.catalog import relative_names, resolve_under_root
from ...core.services.registries import normalize_algorithm
from ..schemas.lines import LinesIndexResponse, LinesResponse


def build_router(container: ServiceContainer) -> APIRouter:
    router = APIRouter()
    settings = container.settings

    def list_files() -> LinesIndexResponse:
        names = relative_names(settings.app.lines_root)
        container.logging.adapter(category="api", service="lines").info(
            "lines list", extra={"event": "lines_list", "files": len(names)}
        )
        return LinesIndexResponse(files=names)

    def sample_lines(name: str, count: int = 1, algorithm: str | None = None) -> LinesResponse:
        max_count = settings.sampler.max_count
        if count < 1 or count > max_count:
            raise AppError(
                ErrorCode.INVALID_ARGUMENT, f"count must be between 1 and {max_count}, not {count}"
            )
        algo = normalize_algorithm(algorithm or settings.sampler.algorithm)
        path = resolve_under_root(settings.app.lines_root, name)
        lines = container.pool.sample(path, count, algo)
        extra: LoggingExtra = {
            "event": "lines_sample",
            "lines_file": name,
            "algorithm": algo,
            "count": count,
        }
        container.logging.adapter(category="api", service="lines").info(
            "lines sample", extra=extra
        )
        return LinesResponse(name=name, algorithm=algo, count=len(lines), lines=lines)

    router.add_api_route("", list_files, methods=["GET"], response_model=LinesIndexResponse)
    router.add_api_route(
        "/{name:path}", sample_lines, methods=["GET"], response_model=LinesResponse
    )
    return router
