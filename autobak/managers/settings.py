# managers/settings.py
"""Interval settings persisted in a small plain-text file.

The file holds the autosave period on its first line and the backup period
(in autosave cycles) on its second.  Everything after that is documentation
for whoever opens the file by hand and is ignored when parsing.  A missing
file is seeded with defaults; a broken one is left alone so the operator can
inspect it, and the session runs with defaults instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

from .. import config
from ..errors import ConfigIOError, ConfigParseError

LOGGER = logging.getLogger(__name__)

_INSTRUCTIONS = (
    "",
    "* In the first line, enter the autosave period in seconds [float].",
    "    - The minimum period is 15 seconds. Smaller numbers are increased to the minimum.",
    "",
    "* In the second line, enter the backup period in autosave cycles [int].",
    "    - Zero or a negative number will disable auto backups.",
    "",
    "* Close this file before entering the designer.",
    "",
    "* Delete this file and enter the designer to restore default settings.",
)


@dataclass(frozen=True)
class BackupSettings:
    """Autosave and backup intervals."""

    autosave_interval_secs: float = config.DEFAULT_AUTOSAVE_INTERVAL_SECS
    backup_interval_cycles: int = config.DEFAULT_BACKUP_INTERVAL_CYCLES

    @property
    def backups_enabled(self) -> bool:
        return self.backup_interval_cycles >= 1

    def clamped(self) -> "BackupSettings":
        """Return a copy with the autosave interval raised to the floor."""

        if self.autosave_interval_secs < config.MIN_AUTOSAVE_INTERVAL_SECS:
            return replace(self, autosave_interval_secs=config.MIN_AUTOSAVE_INTERVAL_SECS)
        return self


def parse_settings(text: str) -> BackupSettings:
    """Parse the first two lines of a settings file.

    Raises :class:`ConfigParseError` when either value is missing or not a
    number of the expected kind.
    """

    lines = text.splitlines()
    if len(lines) < 2:
        raise ConfigParseError(f"expected 2 value lines, found {len(lines)}")
    try:
        autosave = float(lines[0].strip())
        cycles = int(lines[1].strip())
    except ValueError as exc:
        raise ConfigParseError(str(exc)) from exc
    if not math.isfinite(autosave):
        raise ConfigParseError(f"autosave interval must be finite, got {lines[0].strip()!r}")
    return BackupSettings(autosave_interval_secs=autosave, backup_interval_cycles=cycles)


def format_settings(autosave: float, cycles: int) -> str:
    lines = [str(float(autosave)), str(int(cycles)), *_INSTRUCTIONS]
    return "\n".join(lines) + "\n"


class ConfigStore:
    """Reads and seeds the interval settings file."""

    def __init__(self, path: Union[str, Path], logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.log = logger or LOGGER

    def load(self) -> BackupSettings:
        """Return effective settings, never raising.

        The returned interval is clamped to
        :data:`config.MIN_AUTOSAVE_INTERVAL_SECS`; the file itself is never
        rewritten to reflect the clamp.
        """

        defaults = BackupSettings()
        if not self.path.exists():
            try:
                self.save(defaults.autosave_interval_secs, defaults.backup_interval_cycles)
            except ConfigIOError as exc:
                self.log.error("settings file could not be created", extra={"path": str(self.path), "error": str(exc)})
            else:
                self.log.warning(
                    "Settings file not found. New settings file created. Initialized with default values."
                )
            return defaults.clamped()

        try:
            settings = self._read()
        except (ConfigParseError, ConfigIOError) as exc:
            self.log.warning(
                "Exception when loading settings file. Please delete or repair settings file. "
                "Initialized with default values.",
                extra={"path": str(self.path), "error": str(exc)},
            )
            settings = defaults
        return settings.clamped()

    def _read(self) -> BackupSettings:
        try:
            with open(self.path, "r", encoding="utf-8-sig") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigIOError(f"Failed to read {self.path}: {exc}") from exc
        return parse_settings(text)

    def save(self, autosave: float, cycles: int) -> None:
        """Write ``autosave`` and ``cycles`` followed by the usage notes."""

        try:
            with open(self.path, "w", encoding="utf-8") as handle:
                handle.write(format_settings(autosave, cycles))
        except OSError as exc:
            raise ConfigIOError(f"Failed to write {self.path}: {exc}") from exc
