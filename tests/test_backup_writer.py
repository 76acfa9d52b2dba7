"""Tests for archive filenames and snapshot writes."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from autobak.errors import ArchiveWriteError
from autobak.managers.backup_writer import BackupWriter, backup_filename
from autobak.managers.change_tracker import ChangeTracker


def test_filename_is_zero_padded() -> None:
    assert backup_filename(datetime(2024, 3, 4, 5, 6, 7)) == "backup20240304050607.xml"


def test_filenames_sort_by_creation_time() -> None:
    stamps = [
        datetime(2024, 12, 31, 23, 59, 59),
        datetime(2024, 1, 2, 3, 4, 5),
        datetime(2025, 1, 1, 0, 0, 0),
        datetime(2024, 1, 2, 3, 4, 50),
    ]
    names = [backup_filename(stamp) for stamp in stamps]
    assert sorted(names) == [backup_filename(stamp) for stamp in sorted(stamps)]


def test_write_returns_filename_and_keeps_content(tmp_path: Path) -> None:
    content = "<?xml version=\"1.0\"?>\r\n<Aircraft name=\"Ü\" />\n".encode("utf-8")

    fname = BackupWriter().write(tmp_path, content, datetime(2024, 1, 2, 3, 4, 5))

    assert fname == "backup20240102030405.xml"
    assert (tmp_path / fname).read_bytes() == content


def test_same_second_overwrites_previous_backup(tmp_path: Path) -> None:
    stamp = datetime(2024, 1, 2, 3, 4, 5)
    writer = BackupWriter()

    writer.write(tmp_path, b"first", stamp)
    writer.write(tmp_path, b"second", stamp)

    files = list(tmp_path.iterdir())
    assert len(files) == 1
    assert files[0].read_bytes() == b"second"


def test_write_failure_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ArchiveWriteError) as excinfo:
        BackupWriter().write(tmp_path / "nope", b"data", datetime(2024, 1, 2, 3, 4, 5))
    assert isinstance(excinfo.value.__cause__, OSError)


def test_change_tracker_first_content_counts_as_changed() -> None:
    tracker = ChangeTracker()
    assert tracker.baseline is None
    assert tracker.has_changed(b"") is True


def test_change_tracker_compares_full_content() -> None:
    tracker = ChangeTracker()
    tracker.accept(b"<a/>")

    assert tracker.has_changed(b"<a/>") is False
    assert tracker.has_changed(b"<a/>\n") is True
    assert tracker.baseline == b"<a/>"
