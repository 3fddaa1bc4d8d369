import pytest

from tenantdb.routing import (
    NoDefaultPool,
    PoolRegistry,
    RoutingConnectionProvider,
    TenantContext,
    UnknownTenant,
    route_by_tenant,
)

from conftest import FakePool


@pytest.fixture
def provider(fake_registry):
    return RoutingConnectionProvider(fake_registry)


def test_key_routes_to_its_pool(provider, pools):
    TenantContext.set("ES")
    assert provider.resolve() is pools["ES"]
    assert provider.current_key() == "ES"


def test_absent_key_uses_default(provider, pools):
    for _ in range(3):
        assert provider.resolve() is pools["DE"]


def test_unknown_key_never_falls_back_to_default(provider):
    TenantContext.set("FR")
    with pytest.raises(UnknownTenant) as exc_info:
        provider.resolve()
    assert exc_info.value.key == "FR"


def test_no_default_pool():
    registry = PoolRegistry()
    registry.register("DE", FakePool("de"))
    registry.freeze()
    provider = RoutingConnectionProvider(registry)

    with pytest.raises(NoDefaultPool):
        provider.resolve()

    TenantContext.set("DE")
    assert provider.resolve().name == "de"


def test_empty_registry_serves_only_the_default():
    registry = PoolRegistry()
    default = FakePool("default")
    registry.set_default(default)
    provider = RoutingConnectionProvider(registry)

    assert provider.resolve() is default
    TenantContext.set("DE")
    with pytest.raises(UnknownTenant):
        provider.resolve()


def test_routing_scenario(provider, pools):
    @route_by_tenant()
    def operation(payload):
        return provider.resolve()

    assert operation({"country_code": "es"}) is pools["ES"]
    assert operation({"note": "no key"}) is pools["DE"]
    with pytest.raises(UnknownTenant) as exc_info:
        operation({"country_code": "fr"})
    assert exc_info.value.key == "FR"
    assert str(exc_info.value) == "Unknown tenant 'FR'"


def test_lower_and_upper_case_keys_route_to_the_same_pool(provider, pools):
    @route_by_tenant()
    def operation(country_code):
        return provider.resolve()

    assert operation("es") is operation("ES") is pools["ES"]
