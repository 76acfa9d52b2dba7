"""Backup core: settings, change tracking, archive writes and scheduling."""

from .backup_writer import BackupWriter, backup_filename
from .change_tracker import ChangeTracker
from .scheduler import AutosaveScheduler, SchedulerState, backup_metrics
from .settings import BackupSettings, ConfigStore

__all__ = [
    "AutosaveScheduler",
    "BackupSettings",
    "BackupWriter",
    "ChangeTracker",
    "ConfigStore",
    "SchedulerState",
    "backup_filename",
    "backup_metrics",
]
