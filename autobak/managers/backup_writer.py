# managers/backup_writer.py
"""Timestamped snapshot files in the archive directory.

Filenames embed a zero-padded ``YYYYMMDDHHMMSS`` stamp so a plain
lexicographic sort of the directory lists backups oldest first.  Two
snapshots taken within the same second share a name and the later one
replaces the earlier.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .. import config
from ..errors import ArchiveWriteError

LOGGER = logging.getLogger(__name__)


def backup_filename(timestamp: datetime) -> str:
    """Return the archive filename for ``timestamp``."""

    stamp = timestamp.strftime(config.BACKUP_TIMESTAMP_FORMAT)
    return f"{config.BACKUP_FILENAME_PREFIX}{stamp}{config.BACKUP_FILENAME_EXTENSION}"


class BackupWriter:
    """Writes snapshot content under the archive directory."""

    def write(
        self,
        destination_dir: Union[str, Path],
        content: bytes,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """Write ``content`` and return the filename used.

        Raises :class:`ArchiveWriteError` on any I/O failure; nothing is
        retried here.
        """

        fname = backup_filename(timestamp or datetime.now())
        full = os.path.join(destination_dir, fname)
        try:
            # Raw bytes: the archive is an exact copy of the working file
            with open(full, "wb") as handle:
                handle.write(content)
        except OSError as exc:
            raise ArchiveWriteError(f"Failed to write backup to {full}: {exc}") from exc
        LOGGER.debug("snapshot written", extra={"path": full, "bytes": len(content)})
        return fname
