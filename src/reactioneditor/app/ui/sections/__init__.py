"""
Auto-import all section modules to ensure registration side-effects run.

After importing this package, `create_section()` knows every section and
`create_fragment()` knows every entry template.
"""
from __future__ import annotations

import importlib
import pkgutil

from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import create_section, list_keys, register_section

# Top-level sections, in display and load order.
SECTION_ORDER = [
    "identifiers",
    "inputs",
    "setup",
    "conditions",
    "notes",
    "observations",
    "workups",
    "outcomes",
    "provenance",
]

for _module in pkgutil.iter_modules(__path__, __name__ + "."):
    importlib.import_module(_module.name)

__all__ = ["SECTION_ORDER", "SectionEditor", "create_section", "list_keys", "register_section"]
