"""Health check endpoint: verifies connectivity to every tenant database."""

import logging

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from tenantdb.config import Settings
from tenantdb.routing import PoolRegistry, normalize_key
from tenantdb.schemas import DatabaseHealth, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


def _validation_query(settings: Settings, tenant: str | None) -> str:
    if tenant is None:
        source = settings.default_datasource
    else:
        source = next(
            (s for k, s in settings.datasources.items() if normalize_key(k) == tenant),
            None,
        )
    return source.validation_query if source is not None else "SELECT 1"


async def _check(engine: AsyncEngine, query: str) -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text(query))
        return "healthy"
    except Exception:
        logger.exception("Health check failed for %s", engine.url.render_as_string(hide_password=True))
        return "unhealthy"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    registry: PoolRegistry = request.app.state.registry
    settings: Settings = request.app.state.settings

    databases = [
        DatabaseHealth(tenant=key, status=await _check(engine, _validation_query(settings, key)))
        for key, engine in registry.items()
    ]

    default = registry.get_default()
    if default is not None and all(default is not engine for _, engine in registry.items()):
        databases.append(
            DatabaseHealth(tenant="default", status=await _check(default, _validation_query(settings, None)))
        )

    overall = "healthy" if all(db.status == "healthy" for db in databases) else "degraded"
    return HealthResponse(status=overall, databases=databases, version=VERSION)
