"""
Show/hide animations.

Completion callbacks are the continuation points for work that must wait
until a fragment is out of (or back in) view. A duration of zero applies the
change and runs the callback immediately.
"""
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QPropertyAnimation
from PySide6.QtWidgets import QWidget

_MAX_HEIGHT = 16777215  # QWIDGETSIZE_MAX


class Animator(QObject):
    def __init__(self, duration_ms: int, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.duration_ms = duration_ms
        self._running: dict[int, tuple[QPropertyAnimation, Callable[[], None]]] = {}

    def show(self, widget: QWidget, on_finished: Optional[Callable[[], object]] = None) -> None:
        self.cancel(widget)
        widget.setVisible(True)
        if self.duration_ms <= 0:
            if on_finished:
                on_finished()
            return
        self._animate(widget, 0, max(widget.sizeHint().height(), 1), True, on_finished)

    def hide(self, widget: QWidget, on_finished: Optional[Callable[[], object]] = None) -> None:
        self.cancel(widget)
        if self.duration_ms <= 0 or widget.isHidden():
            widget.setVisible(False)
            if on_finished:
                on_finished()
            return
        self._animate(widget, max(widget.height(), 1), 0, False, on_finished)

    def _animate(self, widget: QWidget, start: int, end: int, visible: bool, on_finished) -> None:
        animation = QPropertyAnimation(widget, b"maximumHeight", self)
        animation.setDuration(self.duration_ms)
        animation.setStartValue(start)
        animation.setEndValue(end)

        def finished() -> None:
            self._running.pop(id(widget), None)
            widget.setMaximumHeight(_MAX_HEIGHT)
            widget.setVisible(visible)
            animation.deleteLater()
            if on_finished:
                on_finished()

        animation.finished.connect(finished)
        self._running[id(widget)] = (animation, finished)
        animation.start()

    def is_running(self, widget: QWidget) -> bool:
        return id(widget) in self._running

    def finish(self, widget: QWidget) -> None:
        """Jumps a running animation on `widget` to its end and runs its continuation."""
        entry = self._running.get(id(widget))
        if entry is not None:
            animation, finished = entry
            animation.stop()
            finished()

    def cancel(self, widget: QWidget) -> None:
        """Stops any animation on `widget` without running its continuation."""
        entry = self._running.pop(id(widget), None)
        if entry is not None:
            animation, _ = entry
            animation.stop()
            animation.deleteLater()
            widget.setMaximumHeight(_MAX_HEIGHT)
