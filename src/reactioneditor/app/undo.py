"""
Undo/Remove Controller
Single-slot undo buffer for the most recent removal.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from PySide6.QtWidgets import QPushButton
from shiboken6 import isValid

from reactioneditor.app.ui.widgets import Fragment, FragmentList, FragmentState

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine

logger = logging.getLogger(__name__)


class UndoController:
    def __init__(self, engine: SyncEngine) -> None:
        self.engine = engine
        self.fragment: Optional[Fragment] = None
        self.button: Optional[QPushButton] = None

    def make_undoable(self, fragment: Fragment) -> None:
        """
        Marks `fragment` as the undo buffer and puts an "undo" button right
        after it. Whatever was buffered before is deleted for good.
        """
        self._discard()
        container = fragment.parentWidget()
        if not isinstance(container, FragmentList):
            raise LookupError(f"Fragment '{fragment.kind}' is not inside a fragment list")

        fragment.state = FragmentState.PENDING_UNDO
        self.fragment = fragment

        button = QPushButton("undo")
        button.setObjectName("undo")
        button.setVisible(False)
        button.clicked.connect(lambda *_: self.undo_slowly())
        container.insert_after(fragment, button)
        self.button = button
        self.engine.animator.show(button)

    def undo_slowly(self) -> None:
        """Restores the buffered fragment. Validation is not re-triggered."""
        fragment, button = self.fragment, self.button
        self.fragment = None
        self.button = None
        if fragment is None:
            return
        logger.debug(f"Restoring removed '{fragment.kind}'")
        fragment.state = FragmentState.LIVE
        self.engine.animator.show(fragment)
        if button is not None:
            def finished() -> None:
                self._detach(button)
                self.engine.update_sidebar()
            self.engine.animator.hide(button, finished)
        else:
            self.engine.update_sidebar()
        self.engine.dirty()

    def _discard(self) -> None:
        if self.fragment is not None:
            logger.debug(f"Dropping undo buffer '{self.fragment.kind}'")
            self._detach(self.fragment)
            self.fragment = None
        if self.button is not None:
            self._detach(self.button)
            self.button = None

    def _detach(self, widget) -> None:
        if not isValid(widget):
            return
        self.engine.animator.finish(widget)
        container = widget.parentWidget()
        if isinstance(container, FragmentList):
            container.detach(widget)
        else:
            widget.setParent(None)
            widget.deleteLater()
