from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..core.config.settings import Settings
from ..core.errors.handlers import install_exception_handlers
from ..core.logging.setup import setup_logging
from ..core.services.container import ServiceContainer
from .middleware import RequestIdMiddleware
from .routes import health, lines


def create_app(settings: Settings | None = None) -> FastAPI:
    cfg = settings or Settings()
    setup_logging(cfg.logging.level)

    container = ServiceContainer.from_settings(cfg)

    @asynccontextmanager
    async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            container.pool.close_all()

    app = FastAPI(title="Random Line API", version="0.1.0", lifespan=_lifespan)
    # Expose container for testability and tooling
    app.state.container = container

    app.add_middleware(RequestIdMiddleware)

    # Routers (container captured in closures)
    app.include_router(health.build_router(container), prefix="")
    app.include_router(lines.build_router(container), prefix="/lines", tags=["lines"])

    # Errors
    install_exception_handlers(app)

    logging.getLogger(__name__).info("API application initialized")
    return app
