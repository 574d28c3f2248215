from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.selectors import get_selector, set_selector
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import Fragment, field_text, find_field, set_field_text
from reactioneditor.model.schema import ReactionIdentifier

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


@register_template("identifier")
def build_identifier(engine: SyncEngine) -> Fragment:
    fragment = Fragment("identifier", with_validation=True)
    fragment.add_selector("identifier_type", "Type:", "ReactionIdentifier_ReactionIdentifierType")
    fragment.add_text("identifier_value", "Value:", help="e.g. a reaction SMILES")
    fragment.add_upload_button("identifier_value")
    fragment.add_text("identifier_details", "Details:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "identifier"))
    connect_validation(fragment, engine, "ReactionIdentifier", unload_identifier)
    return fragment


def load_identifier(fragment: Fragment, identifier: ReactionIdentifier) -> None:
    set_selector(find_field(fragment, "identifier_type"), identifier.type)
    set_field_text(fragment, "identifier_value", identifier.value)
    set_field_text(fragment, "identifier_details", identifier.details)


def unload_identifier(fragment: Fragment) -> ReactionIdentifier:
    identifier = ReactionIdentifier()
    identifier.type = get_selector(find_field(fragment, "identifier_type"))
    identifier.value = field_text(fragment, "identifier_value")
    identifier.details = field_text(fragment, "identifier_details")
    return identifier


@register_section
class IdentifiersSection(SectionEditor):
    KEY = "identifiers"
    TITLE = "Identifiers"

    def _build_ui(self) -> None:
        self.entries = self.add_collection("identifiers", "Identifiers", self.add)

    def add(self, collection=None) -> Fragment:
        return self._add_entry("identifier", self.entries)

    def load(self, identifiers: list[ReactionIdentifier]) -> None:
        for identifier in identifiers:
            load_identifier(self.add(), identifier)

    def unload(self) -> list[ReactionIdentifier]:
        return self._unload_entries(self.entries, unload_identifier)
