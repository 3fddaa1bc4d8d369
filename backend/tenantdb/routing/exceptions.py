"""Routing errors raised while building the pool registry or resolving a pool."""


class RoutingError(Exception):
    """Base class for every tenant-routing failure."""


class DuplicateKey(RoutingError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Tenant '{key}' is already registered")


class UnknownTenant(RoutingError):
    """An explicit tenant key has no registered pool."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown tenant '{key}'")


class NoDefaultPool(RoutingError):
    """No tenant key is active and no default pool is configured."""

    def __init__(self) -> None:
        super().__init__("No tenant key is set and no default pool is configured")


class DefaultAlreadySet(RoutingError):
    def __init__(self) -> None:
        super().__init__("A default pool is already configured")


class RegistryFrozen(RoutingError):
    def __init__(self) -> None:
        super().__init__("Pool registry is read-only after startup")
