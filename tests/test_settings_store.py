"""Tests for the interval settings file."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from autobak import config
from autobak.errors import ConfigParseError
from autobak.managers.settings import BackupSettings, ConfigStore, parse_settings


def test_missing_file_is_seeded_with_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    caplog.set_level(logging.WARNING)

    settings = ConfigStore(path).load()

    assert settings == BackupSettings(300.0, 1)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "300.0"
    assert lines[1] == "1"
    assert any("restore default settings" in line for line in lines)
    assert any("Settings file not found" in r.getMessage() for r in caplog.records)


def test_second_load_does_not_rewrite(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    store = ConfigStore(path)
    store.load()
    before = path.read_text(encoding="utf-8")

    def _fail_save(*_, **__):
        raise AssertionError("existing settings must not be rewritten")

    monkeypatch.setattr(ConfigStore, "save", _fail_save)

    assert ConfigStore(path).load() == BackupSettings(300.0, 1)
    assert path.read_text(encoding="utf-8") == before


def test_short_interval_is_clamped_but_file_untouched(tmp_path: Path) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    path.write_text("10\n0\n", encoding="utf-8")

    settings = ConfigStore(path).load()

    assert settings.autosave_interval_secs == 15.0
    assert settings.backup_interval_cycles == 0
    assert settings.backups_enabled is False
    assert path.read_text(encoding="utf-8") == "10\n0\n"


def test_trailing_documentation_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    path.write_text("42.5\r\n3\r\n\r\n* whatever the operator wrote\r\n", encoding="utf-8")

    assert ConfigStore(path).load() == BackupSettings(42.5, 3)


@pytest.mark.parametrize(
    "text",
    ["abc\n1\n", "60\n", "", "60\n1.5\n", "nan\n2\n", "inf\n2\n"],
)
def test_malformed_file_falls_back_to_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, text: str
) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    path.write_text(text, encoding="utf-8")
    caplog.set_level(logging.WARNING)

    settings = ConfigStore(path).load()

    assert settings == BackupSettings(300.0, 1)
    assert path.read_text(encoding="utf-8") == text
    assert any("repair settings file" in r.getMessage() for r in caplog.records)


def test_unreadable_settings_path_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / config.SETTINGS_FILENAME
    path.mkdir()

    assert ConfigStore(path).load() == BackupSettings(300.0, 1)


def test_failed_first_write_still_returns_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "missing-dir" / config.SETTINGS_FILENAME
    caplog.set_level(logging.ERROR)

    assert ConfigStore(path).load() == BackupSettings(300.0, 1)
    assert not path.exists()
    assert any("could not be created" in r.getMessage() for r in caplog.records)


def test_negative_cycles_disable_backups() -> None:
    settings = parse_settings("30\n-4\n")
    assert settings.backup_interval_cycles == -4
    assert settings.backups_enabled is False


def test_parse_settings_reports_missing_line() -> None:
    with pytest.raises(ConfigParseError):
        parse_settings("30\n")
