"""Routing connection provider: picks the engine for the active tenant key."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from tenantdb.routing.context import TenantContext
from tenantdb.routing.exceptions import NoDefaultPool, UnknownTenant
from tenantdb.routing.registry import PoolRegistry

logger = logging.getLogger(__name__)


class RoutingConnectionProvider:
    def __init__(self, registry: PoolRegistry) -> None:
        self.registry = registry

    @staticmethod
    def current_key() -> str | None:
        return TenantContext.get()

    def resolve(self) -> AsyncEngine:
        """
        Return the engine for the active tenant.

        An explicit key that is not registered raises UnknownTenant; it never
        falls back to the default. Without a key the default engine is used,
        and NoDefaultPool is raised when none is configured.
        """
        key = TenantContext.get()

        if key is not None:
            pool = self.registry.lookup(key)
            if pool is None:
                raise UnknownTenant(key)
            logger.debug("Routing decision: tenant '%s'", key)
            return pool

        pool = self.registry.get_default()
        if pool is None:
            logger.error("No tenant key set and no default pool configured")
            raise NoDefaultPool()
        logger.debug("Routing decision: default pool")
        return pool
