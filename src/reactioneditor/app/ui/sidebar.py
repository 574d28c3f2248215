"""
Navigation sidebar.

Lists the visible sections (and the inputs below "Inputs"). Clicking an entry
scrolls to it; entries whose widget intersects the scroll viewport are shown
in bold.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPoint, QRect, Qt
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QScrollArea, QWidget
from shiboken6 import isValid

logger = logging.getLogger(__name__)


class Sidebar(QListWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("navigation")
        self.setFixedWidth(180)
        self.scroll_area: Optional[QScrollArea] = None
        self._targets: dict[str, QWidget] = {}
        self.itemClicked.connect(self._scroll_to)

    def refresh(self, entries: list[tuple[str, str, QWidget]]) -> dict[str, QListWidgetItem]:
        """Rebuilds the list from (key, label, target) entries; returns the items by key."""
        self.clear()
        self._targets.clear()
        items: dict[str, QListWidgetItem] = {}
        for key, label, target in entries:
            item = QListWidgetItem(label, self)
            item.setData(Qt.ItemDataRole.UserRole, key)
            self._targets[key] = target
            items[key] = item
        return items

    def observe(self, scroll_area: QScrollArea) -> None:
        """Highlights entries as `scroll_area` scrolls."""
        self.scroll_area = scroll_area
        scroll_area.verticalScrollBar().valueChanged.connect(lambda *_: self.update_highlight())

    def target(self, item: QListWidgetItem) -> Optional[QWidget]:
        target = self._targets.get(item.data(Qt.ItemDataRole.UserRole))
        if target is None or not isValid(target):
            return None
        return target

    def is_in_view(self, target: QWidget) -> bool:
        if self.scroll_area is None or target.isHidden():
            return False
        viewport = self.scroll_area.viewport()
        top_left = target.mapTo(viewport, QPoint(0, 0))
        return QRect(top_left, target.size()).intersects(viewport.rect())

    def update_highlight(self) -> None:
        for row in range(self.count()):
            item = self.item(row)
            target = self.target(item)
            font = item.font()
            font.setBold(target is not None and self.is_in_view(target))
            item.setFont(font)

    def _scroll_to(self, item: QListWidgetItem) -> None:
        target = self.target(item)
        if target is None or self.scroll_area is None:
            logger.debug(f"Nothing to scroll to for '{item.text()}'")
            return
        self.scroll_area.ensureWidgetVisible(target)
