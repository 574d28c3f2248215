from __future__ import annotations

from datetime import datetime

from PySide6.QtWidgets import QMainWindow, QStatusBar

from reactioneditor.app.application import VISIBLE_APP_NAME
from reactioneditor.app.editor import ReactionEditor
from reactioneditor.app.state import EditState

STATE_LABELS = {
    EditState.UNLOADED: "No reaction loaded",
    EditState.LOADING: "Loading...",
    EditState.LOADED: "All changes saved",
    EditState.DIRTY: "Unsaved changes",
}


class MainWindow(QMainWindow):
    def __init__(self, editor: ReactionEditor):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self.editor = editor
        self.setCentralWidget(editor)

        self.status = QStatusBar(self)
        self.setStatusBar(self.status)

        editor.store.state_changed.connect(self._on_state_changed)
        editor.persistence.saved.connect(self._on_saved)
        editor.ready.connect(self._on_ready)
        self._on_state_changed(int(editor.store.state))

    def _on_state_changed(self, state: int) -> None:
        self.status.showMessage(STATE_LABELS[EditState(state)])

    def _on_saved(self) -> None:
        self.status.showMessage(f"Saved at {datetime.now().strftime('%H:%M:%S')}", 5000)

    def _on_ready(self) -> None:
        reaction_id = self.editor.reaction_id.text()
        if reaction_id:
            self.setWindowTitle(f"{VISIBLE_APP_NAME}: {reaction_id}")

    def show_request_error(self, path: str, message: str) -> None:
        self.status.showMessage(f"Request failed: {message}", 8000)
