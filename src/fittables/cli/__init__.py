"""
Command-line interface for fit-tables.

Provides commands for checking FIT files and decoding them into
per-message tables.
"""

from .main import app, main

__all__ = ["main", "app"]
