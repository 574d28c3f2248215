from __future__ import annotations

from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.selectors import get_optional_bool, set_optional_bool
from reactioneditor.app.ui.widgets import field_text, find_field, set_field_text
from reactioneditor.model.schema import ReactionNotes

# (record field, field name, label)
FLAGS = [
    ("is_heterogeneous", "notes_heterogeneous", "Heterogeneous:"),
    ("forms_precipitate", "notes_precipitate", "Forms precipitate:"),
    ("is_exothermic", "notes_exothermic", "Exothermic:"),
    ("offgasses", "notes_offgas", "Offgasses:"),
    ("is_sensitive_to_moisture", "notes_moisture", "Moisture sensitive:"),
    ("is_sensitive_to_oxygen", "notes_oxygen", "Oxygen sensitive:"),
    ("is_sensitive_to_light", "notes_light", "Light sensitive:"),
]


@register_section
class NotesSection(SectionEditor):
    KEY = "notes"
    TITLE = "Notes"
    MESSAGE_TYPE = "ReactionNotes"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        for _, name, label in FLAGS:
            self.add_optional_bool(name, label)
        self.add_text("notes_safety", "Safety notes:")
        self.add_text("notes_details", "Procedure details:")

    def load(self, notes: ReactionNotes) -> None:
        for attr, name, _ in FLAGS:
            set_optional_bool(find_field(self, name), getattr(notes, attr))
        set_field_text(self, "notes_safety", notes.safety_notes)
        set_field_text(self, "notes_details", notes.procedure_details)

    def unload(self) -> ReactionNotes:
        notes = ReactionNotes()
        for attr, name, _ in FLAGS:
            setattr(notes, attr, get_optional_bool(find_field(self, name)))
        notes.safety_notes = field_text(self, "notes_safety")
        notes.procedure_details = field_text(self, "notes_details")
        return notes
