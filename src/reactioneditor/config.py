"""
Configuration
=============
Central place for the remote endpoint and the editor's timing constants.

Why is this file needed?
------------------------
1. Abstraction: it keeps the server address and intervals out of the
   widgets and controllers.
2. Deployment: each constant can be overridden from the environment, and
   the CLI can override the environment.

Exports:
    DEFAULT_BASE_URL (str): Root URL of the remote service.
    AUTOSAVE_INTERVAL_MS (int): Autosave timer period.
    ANIMATION_MS (int): Duration of show/hide animations.
    DISPLAY_PRECISION (int): Significant digits shown in float fields.
"""
import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


# Global Constants
DEFAULT_BASE_URL: str = os.environ.get("REACTION_EDITOR_URL", "http://localhost:5000")
AUTOSAVE_INTERVAL_MS: int = _env_int("REACTION_EDITOR_AUTOSAVE_MS", 15 * 1000)
ANIMATION_MS: int = _env_int("REACTION_EDITOR_ANIMATION_MS", 400)
DISPLAY_PRECISION: int = 7


@dataclass
class EditorSettings:
    base_url: str = DEFAULT_BASE_URL
    autosave_interval_ms: int = AUTOSAVE_INTERVAL_MS
    animation_ms: int = ANIMATION_MS
    # Autosave starts enabled, as a freshly opened form expects.
    autosave: bool = True
