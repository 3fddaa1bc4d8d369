import httpx
import pytest

from tenantdb.config import DataSourceSettings, Settings
from tenantdb.database import create_session_factory, init_models
from tenantdb.main import create_app
from tenantdb.routing import PoolRegistry, RoutingConnectionProvider, TenantContext, build_registry


class FakePool:
    """Stands in for an AsyncEngine where only identity matters."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"FakePool({self.name!r})"


@pytest.fixture(autouse=True)
def clean_tenant_context():
    TenantContext.clear()
    yield
    TenantContext.clear()


@pytest.fixture
def pools():
    return {"DE": FakePool("de"), "ES": FakePool("es"), "GB": FakePool("gb")}


@pytest.fixture
def fake_registry(pools):
    registry = PoolRegistry()
    for key, pool in pools.items():
        registry.register(key, pool)
    registry.set_default(pools["DE"])
    registry.freeze()
    return registry


@pytest.fixture
def tenant_settings(tmp_path):
    return Settings(
        _env_file=None,
        tenants=["DE", "ES", "GB"],
        datasources={
            key: DataSourceSettings(url=f"sqlite+aiosqlite:///{tmp_path / key.lower()}.db")
            for key in ("DE", "ES", "GB")
        },
        default_tenant="DE",
        create_schema=True,
        log_level="DEBUG",
    )


@pytest.fixture
async def sqlite_registry(tenant_settings):
    registry = build_registry(tenant_settings)
    await init_models(registry)
    yield registry
    await registry.dispose()


@pytest.fixture
def session_factory(sqlite_registry):
    return create_session_factory(RoutingConnectionProvider(sqlite_registry))


@pytest.fixture
def app(tenant_settings):
    return create_app(tenant_settings)


@pytest.fixture
async def client(app):
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
