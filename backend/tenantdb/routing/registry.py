"""
Pool registry: tenant key -> AsyncEngine, built once at startup.

build_registry() is the explicit startup path:
  parse tenant list -> create one engine per tenant -> register -> set default -> freeze
Every configuration failure (duplicate key, missing datasource) is raised
synchronously, before the application accepts traffic.
"""

import logging
from collections.abc import Callable, Iterator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tenantdb.config import DataSourceSettings, Settings
from tenantdb.routing.exceptions import DefaultAlreadySet, DuplicateKey, RegistryFrozen
from tenantdb.routing.extractor import normalize_key

logger = logging.getLogger(__name__)

EngineFactory = Callable[[str, DataSourceSettings], AsyncEngine]


class PoolRegistry:
    def __init__(self) -> None:
        self._pools: dict[str, AsyncEngine] = {}
        self._default: AsyncEngine | None = None
        self._frozen = False

    # Startup-time writes

    def register(self, key: str, pool: AsyncEngine) -> None:
        self._check_writable()
        normalized = normalize_key(key)
        if normalized is None:
            raise ValueError(f"Invalid tenant key: {key!r}")
        if normalized in self._pools:
            raise DuplicateKey(normalized)
        self._pools[normalized] = pool
        logger.info("Registered pool for tenant '%s'", normalized)

    def set_default(self, pool: AsyncEngine) -> None:
        self._check_writable()
        if self._default is not None:
            raise DefaultAlreadySet()
        self._default = pool

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozen()

    # Reads

    def lookup(self, key: str) -> AsyncEngine | None:
        normalized = normalize_key(key)
        if normalized is None:
            return None
        return self._pools.get(normalized)

    def get_default(self) -> AsyncEngine | None:
        return self._default

    def keys(self) -> list[str]:
        return list(self._pools)

    def items(self) -> list[tuple[str, AsyncEngine]]:
        return list(self._pools.items())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pools)

    def engines(self) -> list[AsyncEngine]:
        """Distinct engines, tenants first; the default may also be a tenant's engine."""
        engines: list[AsyncEngine] = []
        for engine in list(self._pools.values()) + [self._default]:
            if engine is not None and all(engine is not seen for seen in engines):
                engines.append(engine)
        return engines

    # Shutdown

    async def dispose(self) -> None:
        for engine in self.engines():
            await engine.dispose()


def create_engine_for(key: str, source: DataSourceSettings) -> AsyncEngine:
    """Build the connection pool for one datasource."""
    options: dict = {
        "echo": source.echo,
        "pool_pre_ping": source.pool_pre_ping,
    }
    # in-memory SQLite uses StaticPool, which rejects sizing options
    if not source.database_url.startswith("sqlite"):
        options.update(
            pool_size=source.pool_size,
            max_overflow=source.max_overflow,
            pool_timeout=source.pool_timeout,
            pool_recycle=source.pool_recycle,
        )
    logger.debug("Creating engine for '%s'", key)
    return create_async_engine(source.database_url, **options)


def _discard(engines: list[AsyncEngine]) -> None:
    for engine in engines:
        if isinstance(engine, AsyncEngine):
            # nothing has connected yet, so the pool can be dropped without awaiting
            engine.sync_engine.dispose(close=False)


def build_registry(
    settings: Settings,
    engine_factory: EngineFactory = create_engine_for,
) -> PoolRegistry:
    registry = PoolRegistry()
    datasources = {normalize_key(k): v for k, v in settings.datasources.items()}
    built: list[AsyncEngine] = []

    def build(key: str, source: DataSourceSettings) -> AsyncEngine:
        engine = engine_factory(key, source)
        built.append(engine)
        return engine

    try:
        for raw_key in settings.tenants:
            key = normalize_key(raw_key)
            if key is None:
                raise ValueError(f"Invalid tenant key in configuration: {raw_key!r}")
            if key in registry:
                raise DuplicateKey(key)
            source = datasources.get(key)
            if source is None:
                raise ValueError(f"Tenant '{key}' has no datasource configuration")
            registry.register(key, build(key, source))

        default_key = normalize_key(settings.default_tenant)
        if default_key is not None:
            pool = registry.lookup(default_key)
            if pool is None:
                raise ValueError(f"Default tenant '{default_key}' is not a configured tenant")
            registry.set_default(pool)
        elif settings.default_datasource is not None:
            registry.set_default(build("default", settings.default_datasource))
    except Exception:
        logger.error("Pool registry build failed; discarding %d engine(s)", len(built))
        _discard(built)
        raise

    if not len(registry):
        logger.warning("No tenants configured; only the default pool can be served")
    if registry.get_default() is None:
        logger.warning("No default pool configured; calls without a tenant key will fail")

    registry.freeze()
    logger.info(
        "Pool registry ready: tenants=%s default=%s",
        registry.keys(),
        default_key or ("dedicated" if registry.get_default() is not None else None),
    )
    return registry
