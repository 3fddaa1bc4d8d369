"""FastAPI application: one API in front of one database per country."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tenantdb.api import health, locations, users
from tenantdb.config import Settings, settings as default_settings
from tenantdb.database import create_session_factory, init_models
from tenantdb.logging_config import configure_logging
from tenantdb.routing import NoDefaultPool, RoutingConnectionProvider, UnknownTenant, build_registry

logger = logging.getLogger(__name__)


async def unknown_tenant_handler(request: Request, exc: UnknownTenant) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def no_default_pool_handler(request: Request, exc: NoDefaultPool) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle. Registry errors abort startup."""
        configure_logging(settings.log_level)
        registry = build_registry(settings)
        provider = RoutingConnectionProvider(registry)

        app.state.settings = settings
        app.state.registry = registry
        app.state.provider = provider
        app.state.session_factory = create_session_factory(provider)

        try:
            if settings.create_schema:
                await init_models(registry)
            yield
        finally:
            await registry.dispose()

    app = FastAPI(
        title="Tenant DB Router",
        description=(
            "Per-country data API. Each request is routed to its country's "
            "database by the tenant key it carries."
        ),
        version=health.VERSION,
        lifespan=lifespan,
    )

    app.add_exception_handler(UnknownTenant, unknown_tenant_handler)
    app.add_exception_handler(NoDefaultPool, no_default_pool_handler)

    # ── Register routers ───────────────────────────────
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api")
    app.include_router(locations.router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": "Tenant DB Router",
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


app = create_app()
