# managers/scheduler.py
"""Autosave scheduler with conditional timestamped backups.

This module exposes :class:`AutosaveScheduler`, a tick-driven state machine.
Every tick subtracts the elapsed time from the autosave countdown; when the
countdown expires the injected save trigger asks the host to persist its
working file.  Each autosave may arm a backup request which either spends
one backup cycle or, once the cycle counter reaches one, snapshots the
working file into the archive directory if its content changed since the
last successful backup.

Backup failures never escape the scheduler.  They are logged with a
correlation identifier (``cid``) per attempt and leave the pending flag set,
so the attempt is retried on a later evaluation.  Counts and write durations
are recorded on the module level ``backup_metrics`` collector.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..errors import ArchiveWriteError, WorkingFileReadError
from .backup_writer import BackupWriter
from .change_tracker import ChangeTracker
from .settings import BackupSettings

LOGGER = logging.getLogger(__name__)

_MAX_DURATION_SAMPLES = 1000


class _BackupMetrics:
    """Simple in-memory metrics collector."""

    def __init__(self) -> None:
        self.counters: Counter[str] = Counter()
        self.durations: deque[float] = deque(maxlen=_MAX_DURATION_SAMPLES)

    def record(self, name: str, duration: float | None = None) -> None:
        self.counters[name] += 1
        if duration is not None:
            self.durations.append(duration)

    def reset(self) -> None:
        self.counters.clear()
        self.durations.clear()


backup_metrics = _BackupMetrics()


@dataclass
class SchedulerState:
    """Mutable counters owned by :class:`AutosaveScheduler`."""

    time_to_next_autosave: float
    cycles_to_next_backup: int
    backup_pending: bool = False
    backups_enabled: bool = True


class _AttemptLogAdapter(logging.LoggerAdapter):
    """Merge per-call ``extra`` fields with the attempt's ``cid``."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def read_working_file(path: Union[str, Path]) -> bytes:
    """Return the raw bytes of the working file, undecoded."""

    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise WorkingFileReadError(f"Cannot read working file {path}: {exc}") from exc


class AutosaveScheduler:
    """Drives periodic autosaves and the backup cycle from clock ticks."""

    def __init__(
        self,
        settings: BackupSettings,
        working_path: Union[str, Path],
        archive_dir: Union[str, Path],
        save_trigger: Optional[Callable[[], object]],
        *,
        tracker: Optional[ChangeTracker] = None,
        writer: Optional[BackupWriter] = None,
        clock: Callable[[], datetime] = datetime.now,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings.clamped()
        self.working_path = str(working_path)
        self.archive_dir = str(archive_dir)
        self.save_trigger = save_trigger
        self.tracker = tracker or ChangeTracker()
        self.writer = writer or BackupWriter()
        self._clock = clock
        self._log = logger or LOGGER
        self.state = SchedulerState(
            time_to_next_autosave=self.settings.autosave_interval_secs,
            cycles_to_next_backup=self.settings.backup_interval_cycles,
            backups_enabled=self.settings.backups_enabled,
        )
        if save_trigger is None:
            self._log.error("No save trigger available; autosave is inactive.")

    @property
    def is_active(self) -> bool:
        return self.save_trigger is not None

    def start(self) -> None:
        """Make the startup backup attempt when backups are enabled."""

        if self.state.backups_enabled:
            self.try_make_backup()

    def tick(self, elapsed: float) -> None:
        """Advance the scheduler by ``elapsed`` seconds."""

        if not self.is_active:
            return

        state = self.state
        state.time_to_next_autosave -= elapsed
        if state.time_to_next_autosave <= 0:
            self._trigger_save()
            state.backup_pending = state.backups_enabled
            state.time_to_next_autosave = self.settings.autosave_interval_secs

        if state.backup_pending:
            if state.cycles_to_next_backup > 1:
                # Skip this cycle; the next request comes with a later autosave.
                state.cycles_to_next_backup -= 1
                state.backup_pending = False
            else:
                state.backup_pending = not self.try_make_backup()
                state.cycles_to_next_backup = self.settings.backup_interval_cycles

    def _trigger_save(self) -> None:
        try:
            self.save_trigger()
        except Exception as exc:  # noqa: BLE001 - host failures must not stop the clock
            backup_metrics.record("save_trigger_failed")
            self._log.error("save trigger failed", exc_info=exc)
            return
        backup_metrics.record("autosave")
        self._log.info("Autosaved to editor file.")

    def try_make_backup(self) -> bool:
        """Snapshot the working file if its content changed.

        Returns ``True`` when the attempt resolved successfully, including
        the case where nothing needed writing, and ``False`` on any read or
        write failure.  The change baseline only moves on success.
        """

        cid = uuid.uuid4().hex
        log = _AttemptLogAdapter(self._log, {"cid": cid})
        timestamp = self._clock()

        start = time.perf_counter()
        try:
            content = read_working_file(self.working_path)
            if self.tracker.has_changed(content):
                fname = self.writer.write(self.archive_dir, content, timestamp)
                duration = (time.perf_counter() - start) * 1000
                backup_metrics.record("backup_written", duration)
                log.info(
                    "Backup written: %s",
                    fname,
                    extra={"path": os.path.join(self.archive_dir, fname), "duration_ms": duration},
                )
            else:
                backup_metrics.record("backup_unchanged")
                log.info(
                    "No backup written: Current data is the same as the previous data in the session."
                )
        except (WorkingFileReadError, ArchiveWriteError) as exc:
            backup_metrics.record("backup_failed")
            log.warning(
                "Cannot make a backup now: %s",
                exc,
                extra={"path": self.working_path, "error": str(exc)},
            )
            return False

        self.tracker.accept(content)
        return True
