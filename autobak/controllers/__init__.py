"""Controller layer wiring the backup core into a host application."""

from .session import (
    BackupPaths,
    BackupSession,
    CommandConsole,
    SessionNotStartedError,
)

__all__ = [
    "BackupPaths",
    "BackupSession",
    "CommandConsole",
    "SessionNotStartedError",
]
