"""
Metric Codec
Reads and writes (value, units, precision) triples held in three fields
that share a prefix.
"""
from __future__ import annotations

import re
from typing import Optional, TypeVar

import numpy as np
from PySide6.QtWidgets import QWidget

from reactioneditor.app.ui.selectors import get_selector, set_selector
from reactioneditor.app.ui.widgets import field_text, find_field, set_field_text
from reactioneditor.config import DISPLAY_PRECISION
from reactioneditor.model.schema import Message, has_units

M = TypeVar("M", bound=Message)

# Leading number of a string, like a lenient parseFloat: "3.5 g" -> 3.5
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_float(text: str) -> Optional[float]:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        return None
    return float(match.group())


def parse_int(text: str) -> Optional[int]:
    match = re.match(r"^\s*[+-]?\d+", text)
    if match is None:
        return None
    return int(match.group())


def prepare_float(value: float) -> float:
    """Rounds to DISPLAY_PRECISION significant digits to hide floating point noise."""
    return float(np.format_float_scientific(value, precision=DISPLAY_PRECISION - 1, unique=False))


def format_float(value: float) -> str:
    """Display text of a float: 12.3456789 -> '12.34568', 2e10 -> '20000000000'."""
    return np.format_float_positional(prepare_float(value), trim="-")


def read_metric(prefix: str, target: M, scope: QWidget) -> M:
    """Fills `target` from the `{prefix}_*` fields under `scope`. Unparsable text leaves a field unset."""
    value = parse_float(field_text(scope, f"{prefix}_value"))
    if value is not None:
        target.value = value
    if has_units(target):
        target.units = get_selector(find_field(scope, f"{prefix}_units"))
    precision = parse_float(field_text(scope, f"{prefix}_precision"))
    if precision is not None:
        target.precision = precision
    return target


def write_metric(prefix: str, source: Optional[Message], scope: QWidget) -> None:
    if source is None:
        return
    if source.value is not None:
        set_field_text(scope, f"{prefix}_value", format_float(source.value))
    if has_units(source):
        set_selector(find_field(scope, f"{prefix}_units"), source.units)
    if source.precision is not None:
        set_field_text(scope, f"{prefix}_precision", format_float(source.precision))
