"""Settings loading for the CLI.

Built-in settings ship as defaults.json inside the package. A user file can
be merged on top: lists are extended, scalar values are replaced, and keys
starting with "_" are treated as comments.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)

_DEFAULTS_FILE = "defaults.json"

_NAME_LISTS = ("query_string_excludes", "header_excludes")


class SettingsLoadError(Exception):
    """Raised when a settings file cannot be loaded or has invalid values."""


def _get_builtin_path(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_json_file(path: Path | str) -> dict[str, Any]:
    """Load a JSON settings file with error handling.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        SettingsLoadError: If file cannot be read or parsed, or is not a JSON object
    """
    path_str = str(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SettingsLoadError(f"Settings file not found: {path_str}") from e
    except PermissionError as e:
        raise SettingsLoadError(f"Permission denied reading settings file: {path_str}") from e
    except OSError as e:
        raise SettingsLoadError(f"Cannot read settings file {path_str}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise SettingsLoadError(f"Settings file {path_str} is not valid UTF-8") from e
    except json.JSONDecodeError as e:
        raise SettingsLoadError(f"Invalid JSON in settings file {path_str}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsLoadError(f"Settings file {path_str} must contain a JSON object")
    return data


def _strip_comments(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of data without "_"-prefixed keys, at any depth."""
    return {
        key: _strip_comments(value) if isinstance(value, dict) else value
        for key, value in data.items()
        if not key.startswith("_")
    }


def merge_settings(base: dict[str, Any], custom: dict[str, Any]) -> dict[str, Any]:
    """Merge custom settings into a copy of base.

    Nested objects are merged recursively, lists are extended, everything
    else is replaced. Keys starting with "_" in custom are ignored.

    Example:
        >>> merge_settings({"a": [1], "b": 2}, {"a": [3], "b": 4, "_note": "x"})
        {'a': [1, 3], 'b': 4}
    """
    result = copy.deepcopy(base)
    for key, value in custom.items():
        if key.startswith("_"):
            continue
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = merge_settings(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = current + [v for v in value if v not in current]
        else:
            if key not in result:
                _LOGGER.warning("Unknown settings key: %s", key)
            result[key] = copy.deepcopy(value)
    return result


def _validate(settings: dict[str, Any], source: str) -> None:
    """Check the value types the CLI relies on.

    Raises:
        SettingsLoadError: If a known setting has the wrong type
    """
    overview = settings.get("overview")
    if not isinstance(overview, dict):
        raise SettingsLoadError(f"{source}: 'overview' must be an object")

    for key in _NAME_LISTS:
        names = overview.get(key, [])
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise SettingsLoadError(f"{source}: 'overview.{key}' must be a list of strings")

    preview_length = overview.get("preview_length")
    if isinstance(preview_length, bool) or not isinstance(preview_length, int) or preview_length < 0:
        raise SettingsLoadError(
            f"{source}: 'overview.preview_length' must be a non-negative integer, got {preview_length!r}"
        )


def load_settings(custom_path: Path | str | None = None) -> dict[str, Any]:
    """Load settings, merging an optional user file over the built-in defaults.

    Args:
        custom_path: Optional path to a custom settings JSON file

    Returns:
        Dict with an 'overview' section ('query_string_excludes',
        'header_excludes', 'preview_length')

    Raises:
        SettingsLoadError: If a settings file cannot be loaded or holds invalid values
    """
    settings = _strip_comments(load_json_file(_get_builtin_path(_DEFAULTS_FILE)))
    if custom_path:
        settings = merge_settings(settings, load_json_file(custom_path))
        _validate(settings, f"Settings file {custom_path}")
        _LOGGER.info("Merged settings from %s", custom_path)
    return settings
