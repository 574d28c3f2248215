from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, Signal

if TYPE_CHECKING:
    from PySide6.QtCore import QTimer
    from PySide6.QtWidgets import QListWidgetItem

    from reactioneditor.model.schema import Dataset


class EditState(IntEnum):
    """Lifecycle of the record being edited."""
    UNLOADED = 0
    LOADING = 1
    LOADED = 2
    DIRTY = 3


@dataclass
class Session:
    """Editing context: where the record came from and the ambient UI bookkeeping."""
    file_name: Optional[str] = None
    # None when editing a standalone reaction by id.
    dataset: Optional[Dataset] = None
    # Ordinal position of the reaction in its dataset.
    index: Optional[int] = None
    nav_selectors: dict[str, QListWidgetItem] = field(default_factory=dict)
    timers: dict[str, Optional[QTimer]] = field(default_factory=lambda: {"short": None})
    # Attachments waiting to be pushed with the next commit, by token.
    uploads: dict[str, bytes] = field(default_factory=dict)


class Store(QObject):
    """Holds the session and the edit state, with a signal for state changes."""
    state_changed = Signal(int)

    def __init__(self, session: Session | None = None) -> None:
        super().__init__()
        self.session = session or Session()
        self._state = EditState.UNLOADED
        # Bumped on every edit; lets a save tell whether edits landed while it was in flight.
        self.generation = 0

    @property
    def state(self) -> EditState:
        return self._state

    def set_state(self, state: EditState) -> None:
        if state != self._state:
            self._state = state
            self.state_changed.emit(int(state))

    def mark_dirty(self) -> None:
        self.generation += 1
        if self._state != EditState.LOADING:
            self.set_state(EditState.DIRTY)

    def mark_clean(self) -> None:
        if self._state == EditState.DIRTY:
            self.set_state(EditState.LOADED)
