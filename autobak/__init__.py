"""Periodic autosave with content-aware timestamped backups."""

__version__ = "1.0.0"
