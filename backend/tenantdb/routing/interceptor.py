"""
Routing interceptor: wraps an operation so its tenant key is active while it runs.

    @route_by_tenant()
    async def list_users(self, country_code: str, db: AsyncSession): ...

The key is extracted from the call's arguments and installed in TenantContext
before the body runs. The context is cleared in a finally block, so an error
or a cancellation never leaves a stale key on a reused worker thread or task.
"""

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenantdb.routing.context import TenantContext
from tenantdb.routing.extractor import KeyExtractor, default_extractor

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def route_by_tenant(extractor: KeyExtractor | None = None) -> Callable[[F], F]:
    extract = extractor or default_extractor

    def decorator(func: F) -> F:
        signature = inspect.signature(func)
        name = getattr(func, "__qualname__", repr(func))

        def enter(args: tuple, kwargs: dict[str, Any]) -> None:
            key = extract(signature, args, kwargs)
            if key is not None:
                logger.debug("Routing %s to tenant '%s'", name, key)
                TenantContext.set(key)
            else:
                logger.warning("No tenant key found for %s; the default pool will be used", name)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                enter(args, kwargs)
                try:
                    return await func(*args, **kwargs)
                finally:
                    TenantContext.clear()

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            enter(args, kwargs)
            pending = False
            try:
                result = func(*args, **kwargs)
                # a lambda, partial or callable object may still hand back a coroutine
                if inspect.isawaitable(result):
                    pending = True
                    return _await_then_clear(result)
                return result
            finally:
                if not pending:
                    TenantContext.clear()

        return wrapper  # type: ignore[return-value]

    return decorator


async def _await_then_clear(awaitable: Awaitable[Any]) -> Any:
    try:
        return await awaitable
    finally:
        TenantContext.clear()


def run_routed(operation: Callable[..., Any], *args, **kwargs) -> Any:
    """Call ``operation`` once under tenant routing without decorating it."""
    return route_by_tenant()(operation)(*args, **kwargs)
