"""Tenant-routing engine: context, key extraction, interception and pool resolution."""

from tenantdb.routing.context import TenantContext
from tenantdb.routing.exceptions import (
    DefaultAlreadySet,
    DuplicateKey,
    NoDefaultPool,
    RegistryFrozen,
    RoutingError,
    UnknownTenant,
)
from tenantdb.routing.extractor import KeyExtractor, normalize_key
from tenantdb.routing.interceptor import route_by_tenant, run_routed
from tenantdb.routing.provider import RoutingConnectionProvider
from tenantdb.routing.registry import PoolRegistry, build_registry, create_engine_for

__all__ = [
    "DefaultAlreadySet",
    "DuplicateKey",
    "KeyExtractor",
    "NoDefaultPool",
    "PoolRegistry",
    "RegistryFrozen",
    "RoutingConnectionProvider",
    "RoutingError",
    "TenantContext",
    "UnknownTenant",
    "build_registry",
    "create_engine_for",
    "normalize_key",
    "route_by_tenant",
    "run_routed",
]
