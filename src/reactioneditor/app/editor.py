"""
Reaction Editor Widget
======================
Assembles the header controls, the sections, the sidebar and the preview,
and bootstraps them from a dataset or a reaction id.

Why is this file needed?
------------------------
It is the composition root of one editing session:
1. It owns the Store/Session and wires the engine, the validation pipeline
   and the persistence controller together.
2. It runs the start-up sequence (handlers, load, clean, validate,
   autosave) and emits `ready` when the form can be used.
3. It provides the irreversible read-only mode (`freeze`).
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox, QFileDialog, QHBoxLayout, QLabel, QPushButton, QScrollArea, QSplitter,
    QVBoxLayout, QWidget,
)

from reactioneditor.app.engine import SyncEngine
from reactioneditor.app.persistence import PersistenceController
from reactioneditor.app.state import EditState, Session, Store
from reactioneditor.app.ui.animation import Animator
from reactioneditor.app.ui.preview import PreviewPanel
from reactioneditor.app.ui.sidebar import Sidebar
from reactioneditor.app.ui.widgets import EditText, ValidationPanel
from reactioneditor.app.validation import ValidationPipeline
from reactioneditor.config import EditorSettings
from reactioneditor.controller.service import RemoteService
from reactioneditor.controller.workers import MainThreadDispatcher
from reactioneditor.model.schema import Dataset, Reaction

logger = logging.getLogger(__name__)


class ReactionEditor(QWidget):
    ready = Signal()

    def __init__(
        self,
        service: RemoteService,
        settings: EditorSettings | None = None,
        dispatcher: MainThreadDispatcher | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("reaction_editor")
        self.settings = settings or EditorSettings()
        self.service = service
        self.dispatcher = dispatcher or MainThreadDispatcher(self)
        self.store = Store(Session())
        self.session = self.store.session
        self.is_ready = False
        self.frozen = False

        # ---- Header ----
        self.header = QWidget(self)
        self.header.setObjectName("header")
        header = QHBoxLayout(self.header)
        self.dataset_context = QLabel("", self.header)
        self.dataset_context.setObjectName("dataset_context")
        header.addWidget(self.dataset_context)
        header.addWidget(QLabel("Reaction ID:", self.header))
        self.reaction_id = EditText("reaction_id", parent=self.header)
        header.addWidget(self.reaction_id, 1)

        self.header_buttons = QWidget(self.header)
        self.header_buttons.setObjectName("header_buttons")
        buttons = QHBoxLayout(self.header_buttons)
        buttons.setContentsMargins(0, 0, 0, 0)
        self.save_button = QPushButton("save", self.header_buttons)
        self.save_button.setObjectName("save")
        self.save_button.setVisible(False)
        buttons.addWidget(self.save_button)
        self.autosave_button = QPushButton("autosave: off", self.header_buttons)
        self.autosave_button.setObjectName("autosave")
        buttons.addWidget(self.autosave_button)
        self.download_button = QPushButton("download", self.header_buttons)
        self.download_button.setObjectName("download")
        self.download_button.clicked.connect(lambda *_: self._on_download_clicked())
        buttons.addWidget(self.download_button)
        header.addWidget(self.header_buttons)

        self.reaction_panel = ValidationPanel("reaction_validate", self.header)
        header.addWidget(self.reaction_panel)

        # ---- Body: sidebar | sections | preview ----
        self.sidebar = Sidebar(self)
        self.preview = PreviewPanel(self)
        self.engine = SyncEngine(
            self.store,
            Animator(self.settings.animation_ms, self),
            self.save_button,
            self.reaction_id,
            sidebar=self.sidebar,
            parent=self,
        )
        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.engine.root)
        self.sidebar.observe(self.scroll_area)

        self.pipeline = ValidationPipeline(
            self.engine, service, self.dispatcher, self.reaction_panel, self.preview, parent=self
        )
        self.engine.pipeline = self.pipeline
        self.persistence = PersistenceController(
            self.engine, service, self.dispatcher, self.autosave_button,
            self.settings.autosave_interval_ms, parent=self,
        )

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.addWidget(self.sidebar)
        splitter.addWidget(self.scroll_area)
        splitter.addWidget(self.preview)
        splitter.setStretchFactor(1, 3)
        splitter.setStretchFactor(2, 1)

        layout = QVBoxLayout(self)
        layout.addWidget(self.header)
        layout.addWidget(splitter, 1)

    # ---- bootstrap ----

    def init(self, reaction: Reaction) -> None:
        """Start-up sequence for a fetched reaction."""
        # Show "save" on modifications, ahead of any validation handler.
        self.engine.listen(self.header)
        self.engine.listen(self.engine.root)
        self.engine.init_validate_handlers()
        self.engine.load_reaction(reaction)
        self.engine.clean()
        self.engine.update_sidebar()
        self.pipeline.validate_reaction()
        if self.settings.autosave and not self.persistence.autosave_enabled():
            self.persistence.toggle_autosave()
        self.is_ready = True
        logger.info("Editor ready")
        self.ready.emit()

    def init_from_dataset(self, file_name: str, index: int) -> Future:
        self.session.file_name = file_name
        self.session.index = index
        self.dataset_context.setText(f"{file_name} › reaction {index}")

        def on_result(dataset: Dataset) -> None:
            if not 0 <= index < len(dataset.reactions):
                logger.warning(f"Dataset '{file_name}' has no reaction {index}")
                return
            self.session.dataset = dataset
            self.init(dataset.reactions[index])

        future = self.service.fetch_dataset(file_name)
        self.store.set_state(EditState.LOADING)
        self.dispatcher.when_done(future, on_result, self._on_fetch_failed)
        return future

    def init_from_reaction_id(self, reaction_id: str) -> Future:
        def on_result(reaction: Reaction) -> None:
            self.init(reaction)
            self.dataset_context.hide()

        future = self.service.fetch_reaction(reaction_id)
        self.store.set_state(EditState.LOADING)
        self.dispatcher.when_done(future, on_result, self._on_fetch_failed)
        return future

    def _on_fetch_failed(self, error: BaseException) -> None:
        logger.warning(f"Could not load the reaction: {error}")
        self.store.set_state(EditState.UNLOADED)

    # ---- read-only mode ----

    def freeze(self) -> None:
        """Switches the form into read-only mode. This is irreversible."""
        self.frozen = True
        if self.persistence.autosave_enabled():
            self.persistence.toggle_autosave()
        # Hide the header buttons except "download".
        for button in self.header_buttons.findChildren(QPushButton):
            button.setVisible(button.objectName() == "download")
        self.reaction_panel.hide()
        root = self.engine.root
        for combo in root.findChildren(QComboBox):
            combo.setEnabled(False)
        for panel in root.findChildren(ValidationPanel):
            panel.hide()
        for button in root.findChildren(QPushButton):
            if button.objectName() in ("add", "remove", "undo", "text_upload", "provenance_start_now"):
                button.hide()
        for edit in self.findChildren(EditText):
            edit.setReadOnly(True)
            edit.setStyleSheet("background-color: #ebebe4;")
        logger.info("Editor frozen")

    # ---- downloads ----

    def _on_download_clicked(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, "Download reaction", "reaction.pbtxt")
        if path:
            self.persistence.download_reaction(path)

    def current_reaction(self) -> Optional[Reaction]:
        if self.store.state in (EditState.UNLOADED, EditState.LOADING):
            return None
        return self.engine.unload_reaction()
