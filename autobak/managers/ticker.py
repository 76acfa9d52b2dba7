# managers/ticker.py
"""
TickDriver: feeds wall-clock elapsed time from a QTimer into a scheduler.
"""
import logging
from typing import Optional, Protocol

from PySide6.QtCore import QElapsedTimer, QTimer

from .. import config

LOGGER = logging.getLogger(__name__)


class Tickable(Protocol):
    def tick(self, elapsed: float) -> None: ...


class TickDriver:
    """Calls ``target.tick`` with the seconds elapsed since the previous call."""

    def __init__(
        self,
        target: Tickable,
        parent=None,
        *,
        timer: Optional[QTimer] = None,
        elapsed_timer: Optional[QElapsedTimer] = None,
        interval_ms: int = config.TICK_INTERVAL_MS,
    ):
        self.target = target
        self.interval_ms = interval_ms
        self.timer = timer or QTimer(parent)
        self._elapsed = elapsed_timer or QElapsedTimer()
        self.timer.timeout.connect(self._on_timeout)

    def start(self) -> None:
        self._elapsed.start()
        self.timer.start(self.interval_ms)
        LOGGER.info("tick driver started", extra={"interval_ms": self.interval_ms})

    def stop(self) -> None:
        self.timer.stop()

    def _on_timeout(self) -> None:
        # restart() returns the milliseconds since the last start/restart
        elapsed_ms = self._elapsed.restart()
        self.target.tick(elapsed_ms / 1000.0)
