from __future__ import annotations

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Optional

from PySide6.QtWidgets import QWidget

from reactioneditor.app.ui.selectors import init_selectors
from reactioneditor.app.ui.widgets import FragmentList, Section
from reactioneditor.model.emptiness import is_empty_message

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


class SectionEditor(Section):
    """Base class for the per-section sub-editors."""
    KEY: str = "base"  # Override in subclass
    TITLE: str = "Section"
    # Codec name of the record validated by this section, if any.
    MESSAGE_TYPE: Optional[str] = None
    LIVE_VALIDATE: bool = False
    STARTS_COLLAPSED: bool = False

    def __init__(self, engine: SyncEngine, parent: QWidget | None = None):
        super().__init__(self.TITLE, self.KEY, with_validation=self.MESSAGE_TYPE is not None, parent=parent)
        self.engine = engine
        self._build_ui()  # subclass defines fields
        init_selectors(self)
        if self.validation_panel is not None:
            self.validation_panel.validate_button.clicked.connect(lambda *_: self.validate())
        if self.STARTS_COLLAPSED:
            self.set_collapsed(True)

    # ---- utilities ----

    def _add_subsection(self, key: str) -> SectionEditor:
        from reactioneditor.app.ui.sections.registry import create_section

        section = create_section(key, self.engine, parent=self.body)
        self.form.addRow(section)
        return section

    def _add_entry(self, template: str, collection: FragmentList):
        return self.engine.add_slowly(template, collection)

    @staticmethod
    def _unload_entries(collection: FragmentList, unload) -> list:
        """Unloads every live entry, dropping the ones left empty."""
        entries = []
        for fragment in collection.live():
            entry = unload(fragment)
            if not is_empty_message(entry):
                entries.append(entry)
        return entries

    def validate(self) -> Optional[Future]:
        if self.engine.pipeline is None or self.MESSAGE_TYPE is None:
            return None
        return self.engine.pipeline.validate(self.unload(), self.MESSAGE_TYPE, self, self.validation_panel)

    def nav_entries(self) -> list[tuple[str, str, QWidget]]:
        """Extra sidebar entries below this section's own."""
        return []

    # ---- abstract API for subclasses ----

    def _build_ui(self) -> None:
        """Create form widgets (use the `add_*` helpers)."""
        raise NotImplementedError("`_build_ui` must be implemented in subclass.")

    def load(self, value: Any) -> None:
        raise NotImplementedError("`load` must be implemented in subclass.")

    def unload(self) -> Any:
        raise NotImplementedError("`unload` must be implemented in subclass.")
