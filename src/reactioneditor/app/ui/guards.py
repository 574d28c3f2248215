"""
Numeric field guards.

Run on every loss of focus of a float or integer field. They only flag the
field; the flag later turns into a synthesized validation error.
"""
from __future__ import annotations

import re

from reactioneditor.app.ui.widgets import EditText, FieldKind

FLOAT_PATTERN = re.compile(r"^-?(?:\d+|\d+\.\d+|\.\d+)(?:[eE]-?\d+)?$")
INTEGER_PATTERN = re.compile(r"^-?\d+$")


def is_valid_float(text: str) -> bool:
    text = text.strip()
    return text == "" or FLOAT_PATTERN.match(text) is not None


def is_valid_integer(text: str) -> bool:
    text = text.strip()
    return text == "" or INTEGER_PATTERN.match(text) is not None


def check_float(node: EditText) -> None:
    node.set_invalid(not is_valid_float(node.text()))


def check_integer(node: EditText) -> None:
    node.set_invalid(not is_valid_integer(node.text()))


def check_field(node: EditText) -> None:
    if node.kind is FieldKind.FLOAT:
        check_float(node)
    elif node.kind is FieldKind.INTEGER:
        check_integer(node)
