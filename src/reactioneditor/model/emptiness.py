"""
Emptiness Oracle
Decides whether an unloaded sub-record counts as "not present".
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def is_empty_message(obj: Any) -> bool:
    """
    True if `obj` is None, an empty string/collection, or a record whose full
    field dump equals that of a freshly constructed default of the same type.

    Empty strings count as unset: writing "" into a oneof-like string field
    would make the parent carry a present-but-empty marker, so no caller may
    set one.
    """
    if obj is None:
        return True
    if isinstance(obj, str):
        return obj == ""
    if isinstance(obj, (list, tuple, dict)):
        return len(obj) == 0
    if isinstance(obj, BaseModel):
        return obj.model_dump() == type(obj)().model_dump()
    return False
