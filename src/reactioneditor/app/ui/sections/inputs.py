from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QWidget

from reactioneditor.app.ui.metric import parse_int, read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.compounds import load_component, unload_component
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import FieldKind, Fragment, field_text, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import ReactionInput, Time

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine

logger = logging.getLogger(__name__)


@register_template("input")
def build_input(engine: SyncEngine) -> Fragment:
    fragment = Fragment("input", with_validation=True)
    fragment.add_text("input_name", "Name:", help="Unique key of this input within the reaction")
    fragment.components = fragment.add_collection(
        "input_components", "Components",
        lambda collection: engine.add_slowly("component", collection),
    )
    fragment.add_text("input_addition_order", "Addition order:", FieldKind.INTEGER)
    fragment.add_metric("input_addition_time", "Addition time:", "Time_TimeUnit")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "input"))
    connect_validation(fragment, engine, "ReactionInput", unload_input)
    return fragment


def load_input(engine: SyncEngine, fragment: Fragment, name: str, reaction_input: ReactionInput) -> None:
    set_field_text(fragment, "input_name", name)
    for compound in reaction_input.components:
        load_component(engine, engine.add_slowly("component", fragment.components), compound)
    if reaction_input.addition_order is not None:
        set_field_text(fragment, "input_addition_order", str(reaction_input.addition_order))
    write_metric("input_addition_time", reaction_input.addition_time, fragment)


def unload_input(fragment: Fragment) -> ReactionInput:
    reaction_input = ReactionInput()
    for component in fragment.components.live("component"):
        compound = unload_component(component)
        if not is_empty_message(compound):
            reaction_input.components.append(compound)
    reaction_input.addition_order = parse_int(field_text(fragment, "input_addition_order"))
    addition_time = read_metric("input_addition_time", Time(), fragment)
    if not is_empty_message(addition_time):
        reaction_input.addition_time = addition_time
    return reaction_input


@register_section
class InputsSection(SectionEditor):
    KEY = "inputs"
    TITLE = "Inputs"

    def _build_ui(self) -> None:
        self.entries = self.add_collection("inputs", "Inputs", self.add)

    def add(self, collection=None) -> Fragment:
        return self._add_entry("input", self.entries)

    def load(self, inputs: dict[str, ReactionInput]) -> None:
        for name, reaction_input in inputs.items():
            load_input(self.engine, self.add(), name, reaction_input)

    def unload(self) -> dict[str, ReactionInput]:
        inputs: dict[str, ReactionInput] = {}
        for fragment in self.entries.live("input"):
            name = field_text(fragment, "input_name")
            reaction_input = unload_input(fragment)
            if not name and is_empty_message(reaction_input):
                continue
            if name in inputs:
                logger.warning(f"Duplicate input name '{name}'; keeping the last one")
            inputs[name] = reaction_input
        return inputs

    def nav_entries(self) -> list[tuple[str, str, QWidget]]:
        entries = []
        for i, fragment in enumerate(self.entries.live("input")):
            name = field_text(fragment, "input_name") or "(unnamed input)"
            entries.append((f"input_{i}", f"  {name}", fragment))
        return entries
