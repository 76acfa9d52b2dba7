"""Exception hierarchy for autobak.

Every error raised by the backup core derives from :class:`AutobakError` so
callers can catch the whole family at the seams where failures are downgraded
to log records.
"""


class AutobakError(RuntimeError):
    """Base exception for autobak."""


class ConfigParseError(AutobakError):
    """Settings file exists but its values are missing or malformed."""


class ConfigIOError(AutobakError):
    """Settings file could not be read or written."""


class WorkingFileReadError(AutobakError):
    """Working file is missing or unreadable at backup time."""


class ArchiveWriteError(AutobakError):
    """Snapshot could not be written to the archive directory."""
