"""
Enum Registry
=============
Maps underscore-delimited type paths (as written on selector widgets, e.g.
``Temperature_TemperatureUnit``) to the enum classes of the schema.

The table is filled at import time by the ``register_enum`` decorator in
``model.schema``. A missing key is a typed lookup failure, never a silent
``None``.
"""
from __future__ import annotations

from enum import IntEnum

_REGISTRY: dict[str, type[IntEnum]] = {}


class UnknownEnumError(LookupError):
    """Raised when a type path has no registered enum."""

    def __init__(self, type_path: str) -> None:
        super().__init__(f"No enum registered for type path '{type_path}'")
        self.type_path = type_path


def register_enum(type_path: str):
    """Class decorator to register an enum under ``type_path``."""
    def decorator(cls: type[IntEnum]) -> type[IntEnum]:
        if type_path in _REGISTRY and _REGISTRY[type_path] is not cls:
            raise ValueError(f"Type path '{type_path}' is already registered")
        _REGISTRY[type_path] = cls
        return cls
    return decorator


def lookup_enum(type_path: str) -> type[IntEnum]:
    cls = _REGISTRY.get(type_path)
    if cls is None:
        raise UnknownEnumError(type_path)
    return cls


def list_type_paths() -> list[str]:
    return sorted(_REGISTRY)
