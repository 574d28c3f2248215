from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.sections.base import SectionEditor

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine

_REGISTRY: dict[str, type[SectionEditor]] = {}


def register_section(cls: type[SectionEditor]) -> type[SectionEditor]:
    """Class decorator to register a section editor by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key or key == SectionEditor.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    _REGISTRY[key] = cls
    return cls


def create_section(key: str, engine: SyncEngine, parent=None) -> SectionEditor:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No section registered for key '{key}'")
    return cls(engine, parent)


def list_keys() -> list[str]:
    return list(_REGISTRY.keys())
