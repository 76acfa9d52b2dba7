# managers/change_tracker.py
"""
ChangeTracker: remembers the last backed-up content of the working file.
"""
from typing import Optional


class ChangeTracker:
    """Exact byte-for-byte comparison against the last accepted snapshot."""

    def __init__(self, baseline: Optional[bytes] = None):
        self._baseline = baseline

    @property
    def baseline(self) -> Optional[bytes]:
        return self._baseline

    def has_changed(self, content: bytes) -> bool:
        # No baseline yet: the first readable content always counts as new.
        if self._baseline is None:
            return True
        return content != self._baseline

    def accept(self, content: bytes) -> None:
        self._baseline = content
