"""
Form Widgets
============
The building blocks of the editable tree: text fields, selectors, metric
rows, repeated-entry containers, fragments and sections.

Fields are addressed by object name inside a scope (``find_field``), the way
the sub-editors read and write them. Fragments carry an explicit
``FragmentState`` instead of inferring it from attributes.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtWidgets import (
    QComboBox, QFileDialog, QFormLayout, QFrame, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QPushButton, QVBoxLayout, QWidget,
)

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    TEXT = "text"
    FLOAT = "float"
    INTEGER = "integer"


class FragmentState(Enum):
    TEMPLATE = "template"
    LIVE = "live"
    PENDING_UNDO = "pending_undo"


# ==========================================
# FIELDS
# ==========================================

class EditText(QLineEdit):
    """Editable text field addressed by its field name."""

    def __init__(self, name: str, kind: FieldKind = FieldKind.TEXT, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName(name)
        self.kind = kind
        self._invalid = False

    @property
    def invalid(self) -> bool:
        return self._invalid

    def set_invalid(self, invalid: bool) -> None:
        if invalid == self._invalid:
            return
        self._invalid = invalid
        self.setProperty("invalid", invalid)
        self.setStyleSheet("background-color: pink;" if invalid else "")

    def focusInEvent(self, event) -> None:
        super().focusInEvent(event)
        # Select everything once focus handling has settled.
        QTimer.singleShot(0, self.selectAll)


class Selector(QWidget):
    """Holds a single combo box filled from the enum registered under `type_path`."""

    def __init__(self, name: str, type_path: Optional[str] = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName(name)
        self.type_path = type_path
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.combo = QComboBox(self)
        layout.addWidget(self.combo)


class OptionalBoolSelector(Selector):
    """Three-way selector: UNSPECIFIED / TRUE / FALSE."""

    def __init__(self, name: str, parent: QWidget | None = None) -> None:
        super().__init__(name, None, parent)


# ==========================================
# VALIDATION OUTPUT
# ==========================================

class ValidationPanel(QWidget):
    """Validate button, status indicators and the error/warning lists of one target."""

    def __init__(self, name: str = "validate", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName(name)
        # Latest request token; older responses are dropped.
        self.request_token = 0

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        row = QHBoxLayout()
        layout.addLayout(row)

        self.validate_button = QPushButton("validate", self)
        self.validate_button.setObjectName(f"{name}_button")
        row.addWidget(self.validate_button)

        self.status = QPushButton("", self)
        self.status.setObjectName("validate_status")
        self.status.setFlat(True)
        self.status.clicked.connect(self.toggle_message)
        row.addWidget(self.status)

        self.warning_status = QLabel("", self)
        self.warning_status.setObjectName("validate_warning_status")
        self.warning_status.setVisible(False)
        row.addWidget(self.warning_status)
        row.addStretch()

        self.messages = QListWidget(self)
        self.messages.setObjectName("validate_message")
        self.messages.setVisible(False)
        layout.addWidget(self.messages)

        self.warnings = QListWidget(self)
        self.warnings.setObjectName("validate_warning_message")
        self.warnings.setVisible(False)
        layout.addWidget(self.warnings)

    @property
    def state(self) -> Optional[str]:
        return self.status.property("state")

    def error_items(self) -> list[str]:
        return [self.messages.item(i).text() for i in range(self.messages.count())]

    def warning_items(self) -> list[str]:
        return [self.warnings.item(i).text() for i in range(self.warnings.count())]

    def render(self, errors: list[str], warnings: list[str]) -> None:
        self.messages.clear()
        if errors:
            self.status.setProperty("state", "error")
            self.status.setText(f"⚠ {len(errors)}")
            self.status.setStyleSheet("color: red;")
            self.messages.addItems(errors)
            self.messages.setStyleSheet("background-color: pink;")
            self.messages.setVisible(True)
        else:
            self.status.setProperty("state", "ok")
            self.status.setText("✓")
            self.status.setStyleSheet("color: green;")
            self.messages.setStyleSheet("")
            self.messages.setVisible(False)

        self.warnings.clear()
        if warnings:
            self.warning_status.setText(f"ℹ {len(warnings)}")
            self.warning_status.setVisible(True)
            self.warnings.addItems(warnings)
            self.warnings.setVisible(True)
        else:
            self.warning_status.setText("")
            self.warning_status.setVisible(False)
            self.warnings.setVisible(False)

    def toggle_message(self) -> None:
        if self.messages.count():
            self.messages.setVisible(self.messages.isHidden())


# ==========================================
# CONTAINERS
# ==========================================

class FormHost:
    """
    Mixin with helpers that add labelled fields to `self.form`.

    Hosts must create `self.form` (a QFormLayout) before calling the helpers.
    """
    form: QFormLayout

    def add_text(self, name: str, label: str, kind: FieldKind = FieldKind.TEXT, help: str = "") -> EditText:
        edit = EditText(name, kind)
        if help:
            edit.setProperty("help", help)
        self.form.addRow(label, edit)
        return edit

    def add_selector(self, name: str, label: str, type_path: str) -> Selector:
        selector = Selector(name, type_path)
        self.form.addRow(label, selector)
        return selector

    def add_optional_bool(self, name: str, label: str) -> OptionalBoolSelector:
        selector = OptionalBoolSelector(name)
        self.form.addRow(label, selector)
        return selector

    def add_metric(self, prefix: str, label: str, units_path: Optional[str] = None) -> QWidget:
        """Adds `{prefix}_value`, `{prefix}_units` (when the type has units) and `{prefix}_precision`."""
        row = QWidget()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(EditText(f"{prefix}_value", FieldKind.FLOAT))
        if units_path:
            layout.addWidget(Selector(f"{prefix}_units", units_path))
        layout.addWidget(QLabel("±"))
        layout.addWidget(EditText(f"{prefix}_precision", FieldKind.FLOAT))
        self.form.addRow(label, row)
        return row

    def add_collection(self, name: str, label: str, on_add: Callable[[FragmentList], object]) -> FragmentList:
        box = QWidget()
        layout = QVBoxLayout(box)
        layout.setContentsMargins(0, 0, 0, 0)
        collection = FragmentList(name)
        layout.addWidget(collection)
        add = QPushButton(f"add {label.lower().rstrip('s')}")
        add.setObjectName("add")
        add.clicked.connect(lambda *_: on_add(collection))
        layout.addWidget(add, 0, Qt.AlignmentFlag.AlignLeft)
        self.form.addRow(label, box)
        return collection

    def add_upload_button(self, field_name: str) -> QPushButton:
        """Adds a "from file" button that fills `field_name` with a file's contents."""
        button = QPushButton("from file")
        button.setObjectName("text_upload")
        button.clicked.connect(lambda *_: set_text_from_file(self, field_name))
        self.form.addRow(button)
        return button

    def add_remove_button(self, on_remove: Callable[[QPushButton], object]) -> QPushButton:
        button = QPushButton("remove")
        button.setObjectName("remove")
        button.clicked.connect(lambda *_: on_remove(button))
        self.form.addRow(button)
        return button


class Fragment(QFrame, FormHost):
    """One entry of a repeated field (an identifier, an input, a workup...)."""

    def __init__(self, kind: str, with_validation: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.kind = kind
        self.state = FragmentState.TEMPLATE
        self.setObjectName(kind)
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QVBoxLayout(self)
        self.validation_panel: Optional[ValidationPanel] = None
        if with_validation:
            self.validation_panel = ValidationPanel(f"{kind}_validate", self)
            layout.addWidget(self.validation_panel)
        self.form = QFormLayout()
        layout.addLayout(self.form)

    def is_live(self) -> bool:
        return self.state is FragmentState.LIVE


class FragmentList(QWidget):
    """Ordered container of fragments (and the undo button, when one sits here)."""

    def __init__(self, name: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName(name)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)

    def append(self, widget: QWidget) -> None:
        self._layout.addWidget(widget)

    def insert_after(self, anchor: QWidget, widget: QWidget) -> None:
        self._layout.insertWidget(self._layout.indexOf(anchor) + 1, widget)

    def detach(self, widget: QWidget) -> None:
        """Removes `widget` permanently."""
        widget.hide()
        self._layout.removeWidget(widget)
        widget.setParent(None)
        widget.deleteLater()

    def fragments(self) -> Iterator[Fragment]:
        for i in range(self._layout.count()):
            widget = self._layout.itemAt(i).widget()
            if isinstance(widget, Fragment):
                yield widget

    def live(self, kind: Optional[str] = None) -> list[Fragment]:
        return [f for f in self.fragments() if f.is_live() and (kind is None or f.kind == kind)]


class Section(QGroupBox, FormHost):
    """A field group: legend with collapse toggle and optional validation panel, plus a form body."""

    def __init__(
        self, title: str, name: str = "section", with_validation: bool = True, parent: QWidget | None = None
    ) -> None:
        super().__init__(title, parent)
        self.setObjectName(name)
        outer = QVBoxLayout(self)

        header = QHBoxLayout()
        outer.addLayout(header)
        self.collapse_button = QPushButton("▾", self)
        self.collapse_button.setObjectName("collapse")
        self.collapse_button.setFlat(True)
        self.collapse_button.setFixedWidth(24)
        self.collapse_button.clicked.connect(self.toggle_collapse)
        header.addWidget(self.collapse_button)

        self.validation_panel: Optional[ValidationPanel] = None
        if with_validation:
            self.validation_panel = ValidationPanel(f"{name}_validate", self)
            header.addWidget(self.validation_panel, 1)
        header.addStretch()

        self.body = QWidget(self)
        self.form = QFormLayout(self.body)
        outer.addWidget(self.body)

    def is_collapsed(self) -> bool:
        return self.body.isHidden()

    def set_collapsed(self, collapsed: bool) -> None:
        self.body.setVisible(not collapsed)
        self.collapse_button.setText("▸" if collapsed else "▾")

    def toggle_collapse(self) -> None:
        self.set_collapsed(not self.is_collapsed())


# ==========================================
# TREE HELPERS
# ==========================================

def find_field(scope: QWidget, name: str) -> QWidget:
    """First descendant of `scope` named `name`."""
    widget = scope.findChild(QWidget, name)
    if widget is None:
        raise LookupError(f"No field '{name}' under '{scope.objectName()}'")
    return widget


def field_text(scope: QWidget, name: str) -> str:
    return find_field(scope, name).text().strip()


def set_field_text(scope: QWidget, name: str, text: str) -> None:
    find_field(scope, name).setText(text)


def set_text_from_file(scope: QWidget, name: str) -> bool:
    """
    Asks the user for a file and puts its text into field `name`.

    The field then reports `editingFinished`, so the change counts as a user
    edit. Returns False when nothing was loaded.
    """
    path, _ = QFileDialog.getOpenFileName(scope, "Load from file")
    if not path:
        return False
    try:
        contents = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read '{path}': {e}")
        return False
    field = find_field(scope, name)
    field.setText(contents)
    field.editingFinished.emit()
    return True


def ancestors(widget: QWidget) -> Iterator[QWidget]:
    parent = widget.parentWidget()
    while parent is not None:
        yield parent
        parent = parent.parentWidget()


def enclosing_fragment(widget: QWidget, kind: str) -> Optional[Fragment]:
    for parent in ancestors(widget):
        if isinstance(parent, Fragment) and parent.kind == kind:
            return parent
    return None


def install_tooltips(node: QWidget) -> None:
    """Shows each field's `help` property as its tooltip."""
    for widget in node.findChildren(QWidget):
        help = widget.property("help")
        if help:
            widget.setToolTip(help)


def is_template_or_undo_buffer(widget: QWidget) -> bool:
    """True when `widget` is a fragment that unload must ignore."""
    return isinstance(widget, Fragment) and not widget.is_live()


def in_live_tree(widget: QWidget) -> bool:
    """False if `widget` or any ancestor is a non-live fragment."""
    if is_template_or_undo_buffer(widget):
        return False
    return not any(is_template_or_undo_buffer(p) for p in ancestors(widget))
