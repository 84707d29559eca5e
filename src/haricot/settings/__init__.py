"""Settings for the haricot CLI.

Provides the built-in defaults (defaults.json) and merging of a
user-supplied settings file on top of them.
"""

from __future__ import annotations

from haricot.settings.loader import (
    SettingsLoadError,
    load_settings,
    merge_settings,
)

__all__ = [
    "load_settings",
    "merge_settings",
    "SettingsLoadError",
]
