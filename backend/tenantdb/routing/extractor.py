"""
Tenant key extraction from an operation's arguments.

Search order:
  1. A structured record (object attribute or mapping key) carrying the tenant field
  2. A str argument whose parameter name matches the tenant parameter (case-insensitive)
  3. Nothing found -> None, which routes to the default pool
"""

import inspect
from collections.abc import Mapping
from typing import Any

DEFAULT_TENANT_FIELD = "country_code"


def normalize_key(value: Any) -> str | None:
    """Strip and upper-case a candidate key. Blank or non-str values are absent."""
    if not isinstance(value, str):
        return None
    key = value.strip().upper()
    return key or None


class KeyExtractor:
    def __init__(
        self,
        field: str = DEFAULT_TENANT_FIELD,
        param: str = DEFAULT_TENANT_FIELD,
    ) -> None:
        self.field = field
        self.param = param.lower()

    def __call__(
        self,
        signature: inspect.Signature | None,
        args: tuple,
        kwargs: dict[str, Any],
    ) -> str | None:
        values = list(args) + list(kwargs.values())

        for value in values:
            key = self._from_record(value)
            if key:
                return key

        for name, value in self._named_arguments(signature, args, kwargs):
            if name.lower() == self.param and isinstance(value, str):
                key = normalize_key(value)
                if key:
                    return key

        return None

    # Helpers

    def _from_record(self, value: Any) -> str | None:
        if value is None or isinstance(value, (str, bytes, int, float, bool)):
            return None
        if isinstance(value, Mapping):
            return normalize_key(value.get(self.field))
        return normalize_key(getattr(value, self.field, None))

    @staticmethod
    def _named_arguments(
        signature: inspect.Signature | None,
        args: tuple,
        kwargs: dict[str, Any],
    ) -> list[tuple[str, Any]]:
        if signature is None:
            return list(kwargs.items())
        try:
            bound = signature.bind_partial(*args, **kwargs)
        except TypeError:
            return list(kwargs.items())
        named = []
        for name, value in bound.arguments.items():
            kind = signature.parameters[name].kind
            if kind is inspect.Parameter.VAR_KEYWORD:
                named.extend(value.items())
            elif kind is not inspect.Parameter.VAR_POSITIONAL:
                named.append((name, value))
        return named


default_extractor = KeyExtractor()
