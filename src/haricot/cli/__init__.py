"""CLI for haricot.

This module provides a Typer-based CLI for inspecting HAR files.

Requires the 'cli' optional dependency: pip install haricot[cli]
"""

from __future__ import annotations
