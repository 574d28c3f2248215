from __future__ import annotations

from PySide6.QtCore import QDateTime, Qt
from PySide6.QtWidgets import QPushButton

from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.widgets import field_text, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import DateTime, Person, ReactionProvenance

PERSON_FIELDS = ["username", "name", "orcid", "organization", "email"]


@register_section
class ProvenanceSection(SectionEditor):
    KEY = "provenance"
    TITLE = "Provenance"
    MESSAGE_TYPE = "ReactionProvenance"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        for attr in PERSON_FIELDS:
            self.add_text(f"provenance_experimenter_{attr}", f"Experimenter {attr}:")
        self.add_text("provenance_city", "City:")
        self.add_text("provenance_start", "Experiment start:", help="ISO 8601, e.g. 2020-01-31T14:00:00")
        self.now_button = QPushButton("now")
        self.now_button.setObjectName("provenance_start_now")
        self.now_button.clicked.connect(self.set_start_now)
        self.form.addRow("", self.now_button)
        self.add_text("provenance_doi", "DOI:")
        self.add_text("provenance_patent", "Patent:")
        self.add_text("provenance_url", "Publication URL:")

    def set_start_now(self) -> None:
        now = QDateTime.currentDateTime().toString(Qt.DateFormat.ISODate)
        set_field_text(self, "provenance_start", now)
        self.engine.dirty()
        self.validate()

    def load(self, provenance: ReactionProvenance) -> None:
        if provenance.experimenter is not None:
            for attr in PERSON_FIELDS:
                set_field_text(self, f"provenance_experimenter_{attr}", getattr(provenance.experimenter, attr))
        set_field_text(self, "provenance_city", provenance.city)
        if provenance.experiment_start is not None:
            set_field_text(self, "provenance_start", provenance.experiment_start.value)
        set_field_text(self, "provenance_doi", provenance.doi)
        set_field_text(self, "provenance_patent", provenance.patent)
        set_field_text(self, "provenance_url", provenance.publication_url)

    def unload(self) -> ReactionProvenance:
        provenance = ReactionProvenance()
        experimenter = Person()
        for attr in PERSON_FIELDS:
            setattr(experimenter, attr, field_text(self, f"provenance_experimenter_{attr}"))
        if not is_empty_message(experimenter):
            provenance.experimenter = experimenter
        provenance.city = field_text(self, "provenance_city")
        start = DateTime(value=field_text(self, "provenance_start"))
        if not is_empty_message(start):
            provenance.experiment_start = start
        provenance.doi = field_text(self, "provenance_doi")
        provenance.patent = field_text(self, "provenance_patent")
        provenance.publication_url = field_text(self, "provenance_url")
        return provenance
