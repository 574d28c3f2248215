from __future__ import annotations

from PySide6.QtWidgets import QLabel, QTextBrowser, QVBoxLayout, QWidget


class PreviewPanel(QWidget):
    """Read-only HTML rendering of the reaction, as returned by the render endpoint."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName("reaction_preview")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel("Preview", self))
        self.browser = QTextBrowser(self)
        self.browser.setOpenExternalLinks(True)
        layout.addWidget(self.browser, 1)

    def set_html(self, html: str) -> None:
        # The whole panel is replaced on every render.
        self.browser.setHtml(html)

    def html(self) -> str:
        return self.browser.toHtml()
