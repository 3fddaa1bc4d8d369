"""
Tenant context: the active tenant key for the current execution unit.

Backed by a ContextVar, so every thread and every asyncio task sees its own
value. The slot is single-valued: a second set() overwrites the first and
clear() drops it entirely (nested calls do not restore the outer key).
"""

import logging
from contextvars import ContextVar

logger = logging.getLogger(__name__)

_current_tenant: ContextVar[str | None] = ContextVar("current_tenant", default=None)


class TenantContext:
    @staticmethod
    def set(key: str) -> None:
        logger.debug("Tenant context set to '%s'", key)
        _current_tenant.set(key)

    @staticmethod
    def get() -> str | None:
        return _current_tenant.get()

    @staticmethod
    def clear() -> None:
        previous = _current_tenant.get()
        if previous is not None:
            logger.debug("Tenant context cleared (was '%s')", previous)
        _current_tenant.set(None)
