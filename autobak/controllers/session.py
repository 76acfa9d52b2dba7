"""Backup session wiring for a host application.

:class:`BackupSession` is the composition root used by the entry point and by
hosts embedding autobak.  It resolves the per-user paths, creates the archive
directory, loads the interval settings, builds the
:class:`~autobak.managers.scheduler.AutosaveScheduler` and connects it to a
clock.  Hosts with a command console can pass any object exposing
``register_command(name, fn)`` and ``unregister_command(name)``; the session
registers its "backup now" command there for the lifetime of the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from .. import config
from ..managers.scheduler import AutosaveScheduler
from ..managers.settings import BackupSettings, ConfigStore
from ..managers.ticker import TickDriver

LOGGER = logging.getLogger(__name__)


class SessionNotStartedError(RuntimeError):
    """Raised when a session operation needs :meth:`BackupSession.prepare` first."""


class CommandConsole(Protocol):
    def register_command(self, name: str, fn: Callable[[], bool]) -> None: ...

    def unregister_command(self, name: str) -> None: ...


@dataclass(frozen=True)
class BackupPaths:
    """Filesystem layout below the per-user data directory."""

    data_dir: Path

    @classmethod
    def from_data_dir(cls, data_dir: Union[str, Path]) -> "BackupPaths":
        return cls(Path(data_dir).expanduser())

    @property
    def working_file(self) -> Path:
        return self.data_dir / config.DESIGNS_FOLDER / config.WORKING_FILENAME

    @property
    def archive_dir(self) -> Path:
        return self.data_dir / config.MOD_FOLDER / config.ARCHIVE_FOLDER

    @property
    def settings_file(self) -> Path:
        return self.archive_dir / config.SETTINGS_FILENAME


class BackupSession:
    """Own the scheduler, its clock and the console command."""

    def __init__(
        self,
        paths: BackupPaths,
        save_trigger: Optional[Callable[[], object]],
        *,
        console: Optional[CommandConsole] = None,
        timer=None,
        elapsed_timer=None,
        tick_interval_ms: int = config.TICK_INTERVAL_MS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.paths = paths
        self.save_trigger = save_trigger
        self.console = console
        self._timer = timer
        self._elapsed_timer = elapsed_timer
        self._tick_interval_ms = tick_interval_ms
        self._clock = clock
        self.settings: Optional[BackupSettings] = None
        self.scheduler: Optional[AutosaveScheduler] = None
        self.driver: Optional[TickDriver] = None
        self._command_registered = False

    def prepare(self) -> AutosaveScheduler:
        """Create the archive directory, load settings and build the scheduler.

        Safe to call more than once; later calls return the same scheduler.
        """

        if self.scheduler is not None:
            return self.scheduler

        self.paths.archive_dir.mkdir(parents=True, exist_ok=True)
        self.settings = ConfigStore(self.paths.settings_file).load()
        LOGGER.info(
            "Loaded settings file. Autosave every %s seconds. Back up every %s cycles.",
            self.settings.autosave_interval_secs,
            self.settings.backup_interval_cycles,
        )
        self.scheduler = AutosaveScheduler(
            self.settings,
            self.paths.working_file,
            self.paths.archive_dir,
            self.save_trigger,
            clock=self._clock,
        )
        return self.scheduler

    def start(self) -> None:
        """Register the console command, back up once and start ticking."""

        scheduler = self.prepare()
        if self.console is not None and not self._command_registered:
            self.console.register_command(config.BACKUP_COMMAND_NAME, self.backup_now)
            self._command_registered = True
        scheduler.start()
        if self.driver is None:
            self.driver = TickDriver(
                scheduler,
                timer=self._timer,
                elapsed_timer=self._elapsed_timer,
                interval_ms=self._tick_interval_ms,
            )
        self.driver.start()

    def backup_now(self) -> bool:
        """Attempt a backup immediately, independent of the timer."""

        if self.scheduler is None:
            raise SessionNotStartedError("Backup session has not been prepared")
        return self.scheduler.try_make_backup()

    def stop(self) -> None:
        if self.driver is not None:
            self.driver.stop()
        if self.console is not None and self._command_registered:
            self.console.unregister_command(config.BACKUP_COMMAND_NAME)
            self._command_registered = False
