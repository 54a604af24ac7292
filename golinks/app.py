"""
FastAPI application entry point for the golinks service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from golinks import __version__
from golinks import admin, api, routes
from golinks.config import Settings, get_settings
from golinks.db import RouteStore
from golinks.dependencies import build_route_store
from golinks.errors import register_exception_handlers
from golinks.resolver import LookupExecutor


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    yield
    app.state.lookup_executor.shutdown()


def create_app(
    settings: Optional[Settings] = None, store: Optional[RouteStore] = None
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="golinks",
        version=__version__,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=None,
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )
    app.state.settings = settings
    app.state.route_store = store if store is not None else build_route_store(settings)
    app.state.lookup_executor = LookupExecutor(max_workers=settings.lookup_workers)

    register_exception_handlers(app)

    app.include_router(api.router, prefix=settings.api_prefix)
    if settings.admin:
        app.include_router(admin.router, prefix="/admin")
    app.include_router(routes.router)
    # Catch-all shortcut route goes last.
    app.include_router(routes.fallback_router)
    return app
