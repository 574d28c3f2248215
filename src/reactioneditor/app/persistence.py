"""
Persistence/Autosave Controller
===============================
Writes the edited reaction back into its dataset on the server.

Why is this file needed?
------------------------
1. Autosave: a periodic timer clicks the save button, but only while there
   are unsaved edits and no save is already in flight.
2. Commit: the reaction replaces its slot in the dataset, the dataset is
   written, then pending uploads are pushed.
3. Edits during a save: the indicator is cleaned only if nothing changed
   while the write was in flight.

Classes:
    PersistenceController: Save button, autosave timer, commit and downloads.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import QPushButton

from reactioneditor.controller.service import RemoteService
from reactioneditor.controller.workers import MainThreadDispatcher
from reactioneditor.model.codec import encode
from reactioneditor.model.schema import Dataset

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine

logger = logging.getLogger(__name__)


class PersistenceController(QObject):
    saved = Signal()

    def __init__(
        self,
        engine: SyncEngine,
        service: RemoteService,
        dispatcher: MainThreadDispatcher,
        autosave_button: QPushButton,
        interval_ms: int,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.engine = engine
        self.service = service
        self.dispatcher = dispatcher
        self.autosave_button = autosave_button
        self.interval_ms = interval_ms
        self.session = engine.session
        self.save_button = engine.save_button

        self.save_button.clicked.connect(lambda *_: self.commit())
        self.autosave_button.clicked.connect(lambda *_: self.toggle_autosave())
        self.autosave_button.setText("autosave: off")

    # ---- autosave ----

    def autosave_enabled(self) -> bool:
        return self.session.timers.get("short") is not None

    def toggle_autosave(self) -> None:
        timer = self.session.timers.get("short")
        if timer is None:
            timer = QTimer(self)
            timer.setInterval(self.interval_ms)
            timer.timeout.connect(self.click_save)
            timer.start()
            self.session.timers["short"] = timer
            self.autosave_button.setText("autosave: on")
            logger.info(f"Autosave on, every {self.interval_ms} ms")
        else:
            timer.stop()
            timer.deleteLater()
            self.session.timers["short"] = None
            self.autosave_button.setText("autosave: off")
            logger.info("Autosave off")

    def click_save(self) -> None:
        """Clicks save only when there is something to save and no save in flight."""
        if not self.save_button.isHidden() and self.save_button.text() == "save":
            self.save_button.click()

    # ---- saving ----

    def commit(self) -> Optional[Future]:
        session = self.session
        if session.dataset is None or session.index is None:
            # Editing a standalone reaction; there is nowhere to write it.
            return None
        reaction = self.engine.unload_reaction()
        session.dataset.reactions[session.index] = reaction

        self.save_button.setText("saving")
        generation = self.engine.store.generation
        uploads = dict(session.uploads)
        session.uploads.clear()

        future = self.service.write_dataset(session.file_name, encode(session.dataset))

        def on_result(_) -> None:
            for token, data in uploads.items():
                self.dispatcher.when_done(self.service.upload(session.file_name, token, data), lambda _: None)
            if self.engine.store.generation == generation:
                self.engine.clean()
            else:
                # Edited while saving: keep the indicator up for the next save.
                self.save_button.setText("save")
            logger.info(f"Saved reaction {session.index} of '{session.file_name}'")
            self.saved.emit()

        def on_error(error: BaseException) -> None:
            logger.warning(f"Saving '{session.file_name}' failed: {error}")
            self.save_button.setText("save")
            # Put the attachments back for the next attempt.
            for token, data in uploads.items():
                session.uploads.setdefault(token, data)

        self.dispatcher.when_done(future, on_result, on_error)
        return future

    def download_reaction(self, destination: str | Path) -> Future:
        """Writes the server's text rendering of the current reaction to `destination`."""
        reaction = self.engine.unload_reaction()
        result: Future = Future()
        result.set_running_or_notify_cancel()

        def on_result(data: bytes) -> None:
            Path(destination).write_bytes(data)
            logger.info(f"Downloaded reaction to {destination}")
            result.set_result(Path(destination))

        def on_error(error: BaseException) -> None:
            logger.warning(f"Download failed: {error}")
            result.set_exception(error)

        self.dispatcher.when_done(self.service.download_reaction(encode(reaction)), on_result, on_error)
        return result

    def compare_dataset(self, file_name: str, dataset: Dataset) -> Future:
        """Asks the server whether `dataset` matches the stored `file_name`; fails with ServiceError otherwise."""
        return self.service.compare_dataset(file_name, encode(dataset))
