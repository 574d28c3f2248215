"""
Fragment template registry.

A template is a named builder returning a fresh Fragment in TEMPLATE state.
The engine's add_slowly() is the only place that turns one into a live entry.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from reactioneditor.app.ui.selectors import init_selectors
from reactioneditor.app.ui.widgets import Fragment, FragmentState

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine

TemplateBuilder = Callable[["SyncEngine"], Fragment]

_REGISTRY: dict[str, TemplateBuilder] = {}


def register_template(name: str):
    """Decorator to register a fragment builder under `name`."""
    def decorator(builder: TemplateBuilder) -> TemplateBuilder:
        _REGISTRY[name] = builder
        return builder
    return decorator


def create_fragment(name: str, engine: SyncEngine) -> Fragment:
    builder = _REGISTRY.get(name)
    if not builder:
        raise KeyError(f"No template registered for '{name}'")
    fragment = builder(engine)
    fragment.state = FragmentState.TEMPLATE
    init_selectors(fragment)
    return fragment


def list_templates() -> list[str]:
    return list(_REGISTRY.keys())


def connect_validation(
    fragment: Fragment, engine: SyncEngine, type_name: str, unload: Callable[[Fragment], object]
) -> None:
    """Validates the fragment's own record when its validate button is clicked."""
    panel = fragment.validation_panel
    if panel is None:
        raise ValueError(f"Fragment '{fragment.kind}' has no validation panel")

    def run(*_) -> None:
        if engine.pipeline is not None:
            engine.pipeline.validate(unload(fragment), type_name, fragment, panel)

    panel.validate_button.clicked.connect(run)
