"""
Synchronization Engine
======================
Keeps the Reaction record and the widget tree in step.

Why is this file needed?
------------------------
1. Load/Unload: it orchestrates the per-section sub-editors in both
   directions and decides which optional sub-records are attached.
2. Fragments: repeated entries enter the tree only through add_slowly()
   and leave it only through remove_slowly(), so every live entry is wired
   for change detection and every removal is undoable.
3. Dirty tracking: every user change shows the save indicator before any
   asynchronous validation is dispatched.

Classes:
    SyncEngine: Owns the sections, the undo buffer and the save indicator.
"""
from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Callable, Optional

from PySide6.QtCore import QObject
from PySide6.QtWidgets import (
    QAbstractButton, QCheckBox, QComboBox, QPushButton, QRadioButton, QVBoxLayout, QWidget,
)
from shiboken6 import isValid

from reactioneditor.app.state import EditState, Store
from reactioneditor.app.ui.animation import Animator
from reactioneditor.app.ui.guards import check_field
from reactioneditor.app.ui.metric import format_float, parse_float
from reactioneditor.app.ui.sections import SECTION_ORDER, SectionEditor, create_section
from reactioneditor.app.ui.templates import create_fragment
from reactioneditor.app.ui.widgets import (
    EditText, FieldKind, Fragment, FragmentList, FragmentState, ancestors,
    enclosing_fragment, install_tooltips,
)
from reactioneditor.app.undo import UndoController
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import Reaction

if TYPE_CHECKING:
    from reactioneditor.app.ui.sidebar import Sidebar
    from reactioneditor.app.validation import ValidationPipeline

logger = logging.getLogger(__name__)


class SyncEngine(QObject):
    def __init__(
        self,
        store: Store,
        animator: Animator,
        save_button: QPushButton,
        reaction_id_field: EditText,
        sidebar: Optional[Sidebar] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.session = store.session
        self.animator = animator
        self.save_button = save_button
        self.reaction_id_field = reaction_id_field
        self.sidebar = sidebar
        # Set by the editor once the pipeline exists; sections validate through it.
        self.pipeline: Optional[ValidationPipeline] = None
        self.undo = UndoController(self)

        self.root = QWidget()
        self.root.setObjectName("sections")
        layout = QVBoxLayout(self.root)
        self.sections: dict[str, SectionEditor] = {}
        for key in SECTION_ORDER:
            section = create_section(key, self, parent=self.root)
            self.sections[key] = section
            layout.addWidget(section)
        layout.addStretch()

    # ---- dirty tracking ----

    def dirty(self) -> None:
        self.save_button.setVisible(True)
        self.store.mark_dirty()

    def clean(self) -> None:
        self.save_button.setVisible(False)
        self.save_button.setText("save")
        self.store.mark_clean()

    # ---- change detection ----

    def add_change_handler(self, node: QWidget, handler: Callable[[], object]) -> None:
        """
        Runs `handler` whenever the user changes data under `node`, except
        through remove, which callers handle themselves.
        """
        def fire(*_) -> None:
            handler()

        for edit in node.findChildren(EditText):
            edit.editingFinished.connect(fire)
        # `activated` is user-only; programmatic loads must not mark the form dirty.
        for combo in node.findChildren(QComboBox):
            combo.activated.connect(fire)
        for button in node.findChildren(QAbstractButton):
            if isinstance(button, (QCheckBox, QRadioButton)) or button.objectName() == "add":
                button.clicked.connect(fire)

    def listen(self, node: QWidget) -> None:
        """Wires numeric guards, dirty marking and enclosing live validation onto `node`."""
        for edit in node.findChildren(EditText):
            if edit.kind is not FieldKind.TEXT:
                edit.editingFinished.connect(partial(check_field, edit))
        self.add_change_handler(node, self.dirty)
        for target in [node, *ancestors(node)]:
            if isinstance(target, SectionEditor) and target.LIVE_VALIDATE:
                self.add_change_handler(node, target.validate)
            elif isinstance(target, Fragment) and target.validation_panel is not None:
                self.add_change_handler(node, target.validation_panel.validate_button.click)
        install_tooltips(node)

    def init_validate_handlers(self) -> None:
        """Sections that are always present revalidate themselves on every change."""
        for section in self.root.findChildren(SectionEditor):
            if section.LIVE_VALIDATE:
                self.add_change_handler(section, section.validate)

    # ---- fragments ----

    def add_slowly(self, template: str, root: FragmentList) -> Fragment:
        fragment = create_fragment(template, self)
        fragment.state = FragmentState.LIVE
        fragment.setVisible(False)
        root.append(fragment)
        self.animator.show(fragment)
        self.dirty()
        self.listen(fragment)
        return fragment

    def remove_slowly(self, button: QWidget, kind: str) -> None:
        fragment = enclosing_fragment(button, kind)
        if fragment is None:
            raise LookupError(f"No '{kind}' encloses the remove button")
        # The enclosing groups can only be found while the fragment is still attached.
        validate_buttons = [
            parent.validation_panel.validate_button
            for parent in ancestors(fragment)
            if getattr(parent, "validation_panel", None) is not None
        ]
        self.undo.make_undoable(fragment)
        self.dirty()

        def finished() -> None:
            for validate_button in validate_buttons:
                if isValid(validate_button):
                    validate_button.click()
            self.update_sidebar()

        self.animator.hide(fragment, finished)

    def undo_slowly(self) -> None:
        self.undo.undo_slowly()

    @staticmethod
    def live_fragments(container: FragmentList, kind: Optional[str] = None) -> list[Fragment]:
        return container.live(kind)

    # ---- load / unload ----

    def load_reaction(self, reaction: Reaction) -> None:
        self.store.set_state(EditState.LOADING)
        sections = self.sections
        sections["identifiers"].load(reaction.identifiers)
        # Reactions start with an input by default.
        if reaction.inputs:
            sections["inputs"].load(reaction.inputs)
        else:
            sections["inputs"].add()
        if reaction.setup is not None:
            sections["setup"].load(reaction.setup)
        if reaction.conditions is not None:
            sections["conditions"].load(reaction.conditions)
        if reaction.notes is not None:
            sections["notes"].load(reaction.notes)
        sections["observations"].load(reaction.observations)
        sections["workups"].load(reaction.workups)
        # Reactions start with an outcome by default.
        if reaction.outcomes:
            sections["outcomes"].load(reaction.outcomes)
        else:
            sections["outcomes"].add()
        if reaction.provenance is not None:
            sections["provenance"].load(reaction.provenance)
        self.reaction_id_field.setText(reaction.reaction_id or "")

        self._clean_up_floats()
        self.store.set_state(EditState.LOADED)
        logger.info(f"Loaded reaction '{reaction.reaction_id or ''}'")

    def _clean_up_floats(self) -> None:
        for edit in self.root.findChildren(EditText):
            if edit.kind is not FieldKind.FLOAT or not edit.text():
                continue
            value = parse_float(edit.text())
            if value is not None:
                edit.setText(format_float(value))

    def unload_reaction(self) -> Reaction:
        sections = self.sections
        reaction = Reaction()
        reaction.identifiers = sections["identifiers"].unload()
        # Empty inputs are dropped by the inputs section itself.
        reaction.inputs = sections["inputs"].unload()

        setup = sections["setup"].unload()
        if not is_empty_message(setup):
            reaction.setup = setup
        conditions = sections["conditions"].unload()
        if not is_empty_message(conditions):
            reaction.conditions = conditions
        notes = sections["notes"].unload()
        if not is_empty_message(notes):
            reaction.notes = notes

        reaction.observations = sections["observations"].unload()
        reaction.workups = sections["workups"].unload()
        reaction.outcomes = sections["outcomes"].unload()

        provenance = sections["provenance"].unload()
        if not is_empty_message(provenance):
            reaction.provenance = provenance

        reaction_id = self.reaction_id_field.text().strip()
        if not is_empty_message(reaction_id):
            reaction.reaction_id = reaction_id
        return reaction

    # ---- navigation ----

    def update_sidebar(self) -> None:
        if self.sidebar is None:
            return
        entries = []
        for key, section in self.sections.items():
            if section.isHidden():
                continue
            entries.append((key, section.title(), section))
            entries.extend(section.nav_entries())
        self.session.nav_selectors = self.sidebar.refresh(entries)
        self.sidebar.update_highlight()
