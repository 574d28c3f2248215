"""
Selector Adapter
================
Converts enum selectors and tri-state boolean selectors to and from typed
values.

Enum selectors are filled from the enum registered under the selector's
type path. An unknown path is logged and leaves the selector empty; it never
aborts form initialization.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QComboBox, QWidget

from reactioneditor.app.ui.widgets import OptionalBoolSelector, Selector
from reactioneditor.model import schema  # noqa: F401  (registers the enums)
from reactioneditor.model.registry import UnknownEnumError, lookup_enum

logger = logging.getLogger(__name__)

OPTIONAL_BOOL_OPTIONS = ("UNSPECIFIED", "TRUE", "FALSE")


def _combo(node: QWidget) -> QComboBox:
    if isinstance(node, QComboBox):
        return node
    combo = node.findChild(QComboBox)
    if combo is None:
        raise LookupError(f"No selector under '{node.objectName()}'")
    return combo


def init_selector(node: QWidget, type_path: Optional[str] = None) -> None:
    """Fills the selector's options from the registered enum; UNSPECIFIED starts selected."""
    type_path = type_path or getattr(node, "type_path", None)
    combo = _combo(node)
    combo.clear()
    try:
        enum = lookup_enum(type_path or "")
    except UnknownEnumError as e:
        logger.warning(f"Missing enum for selector '{node.objectName()}': {e}")
        return
    for member in enum:
        combo.addItem(member.name, int(member))
    index = combo.findText("UNSPECIFIED")
    if index >= 0:
        combo.setCurrentIndex(index)


def set_selector(node: QWidget, value: int) -> None:
    combo = _combo(node)
    index = combo.findData(int(value))
    if index < 0:
        logger.warning(f"Value {value} is not an option of '{node.objectName()}'")
    combo.setCurrentIndex(index)


def get_selector(node: QWidget) -> int:
    """The selected value; 0 (UNSPECIFIED) when nothing is selected."""
    data = _combo(node).currentData()
    return 0 if data is None else int(data)


def get_selector_text(node: QWidget) -> str:
    return _combo(node).currentText()


def init_optional_bool(node: QWidget) -> None:
    combo = _combo(node)
    combo.clear()
    for option in OPTIONAL_BOOL_OPTIONS:
        combo.addItem(option, option)
    combo.setCurrentIndex(0)


def set_optional_bool(node: QWidget, value: Optional[bool]) -> None:
    if value is None:
        option = "UNSPECIFIED"
    else:
        option = "TRUE" if value else "FALSE"
    combo = _combo(node)
    combo.setCurrentIndex(combo.findData(option))


def get_optional_bool(node: QWidget) -> Optional[bool]:
    value = _combo(node).currentData()
    if value == "TRUE":
        return True
    if value == "FALSE":
        return False
    return None


def init_selectors(root: QWidget) -> None:
    """Populates every selector under `root` that has no options yet."""
    for selector in root.findChildren(Selector):
        if selector.combo.count():
            continue
        if isinstance(selector, OptionalBoolSelector):
            init_optional_bool(selector)
        else:
            init_selector(selector)
