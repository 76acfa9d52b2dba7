# main.py
"""
Entry point for the autobak backup service.
"""
import argparse
import logging
import shlex
import signal
import subprocess
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional, Sequence

from PySide6.QtCore import QCoreApplication, QStandardPaths

from . import config
from .controllers import BackupPaths, BackupSession


def configure_logging(log_dir: Path) -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent to avoid duplicate handlers when the module
    is imported multiple times (e.g., in tests). A rotating file handler limits
    on-disk log growth while mirroring output to stdout.
    """

    logger = logging.getLogger(config.LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / config.LOG_FILENAME,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger


def install_exception_hook(logger: logging.Logger) -> None:
    def global_exception_handler(exc_type, value, tb):
        logger.error("Uncaught exception", exc_info=(exc_type, value, tb))
        sys.__excepthook__(exc_type, value, tb)

    sys.excepthook = global_exception_handler


def command_save_trigger(
    command: Optional[str],
    timeout: float = config.SAVE_COMMAND_TIMEOUT_SECS,
) -> Optional[Callable[[], None]]:
    """Build a save trigger that runs ``command`` and waits for it to finish.

    The call raises ``subprocess.TimeoutExpired`` once ``timeout`` seconds pass,
    so a hung command cannot stall the tick loop.
    """

    if not command:
        return None
    argv = shlex.split(command)

    def _trigger() -> None:
        subprocess.run(argv, check=True, timeout=timeout)

    return _trigger


def default_data_dir() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    return Path(location or Path.home())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autobak",
        description="Periodically autosave a working file and keep timestamped backups of it.",
    )
    parser.add_argument("--data-dir", type=Path, help="per-user data directory (default: app data location)")
    parser.add_argument("--save-command", help="command that makes the host save its working file")
    parser.add_argument(
        "--save-timeout",
        type=float,
        default=config.SAVE_COMMAND_TIMEOUT_SECS,
        help="seconds to wait for the save command before giving up",
    )
    parser.add_argument("--backup-now", action="store_true", help="attempt one backup and exit")
    parser.add_argument("--tick-ms", type=int, default=config.TICK_INTERVAL_MS, help="clock resolution in milliseconds")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName(config.LOGGER_NAME)

    paths = BackupPaths.from_data_dir(args.data_dir or default_data_dir())
    logger = configure_logging(paths.archive_dir)
    install_exception_hook(logger)

    session = BackupSession(
        paths,
        command_save_trigger(args.save_command, args.save_timeout),
        tick_interval_ms=args.tick_ms,
    )

    if args.backup_now:
        session.prepare()
        return 0 if session.backup_now() else 1

    session.start()
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    try:
        return app.exec()
    finally:
        session.stop()


if __name__ == "__main__":
    sys.exit(main())
