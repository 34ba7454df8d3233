"""Tests for the ``cv-studio doctor`` command (cli/doctor.py).

Coverage:
* Doctor runs and returns SUCCESS when everything is present.
* Doctor returns GENERAL_ERROR when a required check fails.
* Individual check functions return correct tuples.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from cv_studio.cli import exit_codes
from cv_studio.cli.doctor import (
    _os_check,
    _package_check,
    _python_version_check,
    _status_plain,
    _storage_check,
    collect_checks,
    run_doctor,
)
from cv_studio.config import Settings


def _settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {
        "storage_path": Path("storage.json"),
        "storage_key": "cvs",
        "export_dir": Path("."),
        "log_level": "WARNING",
        "log_file": None,
    }
    defaults.update(overrides)
    return Settings(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestPackageCheck:
    def test_installed_package(self) -> None:
        label, value, status = _package_check("pytest", "pytest", required=True)
        assert label == "pytest"
        assert value != "NOT INSTALLED"
        assert "OK" in status

    def test_missing_required_package_fails(self) -> None:
        _, value, status = _package_check("ghost", "cv_studio_no_such_module", required=True)
        assert value == "NOT INSTALLED"
        assert "FAIL" in status

    def test_missing_optional_package_warns(self) -> None:
        _, _, status = _package_check("ghost", "cv_studio_no_such_module", required=False)
        assert "WARN" in status


class TestStorageCheck:
    def test_new_file_in_writable_dir(self, tmp_path: Path) -> None:
        _, value, status = _storage_check(_settings(storage_path=tmp_path / "new" / "s.json"))
        assert value.endswith("(new)")
        assert "OK" in status

    def test_existing_readable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        path.write_text('{"cvs": "[]"}', encoding="utf-8")
        _, value, status = _storage_check(_settings(storage_path=path))
        assert value == str(path)
        assert "OK" in status

    def test_corrupt_file_warns(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        path.write_text("garbage", encoding="utf-8")
        _, value, status = _storage_check(_settings(storage_path=path))
        assert "unreadable" in value
        assert "WARN" in status

    def test_undecodable_file_warns(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        path.write_bytes(b'{"cvs": "\xff\xfe"}')
        _, value, status = _storage_check(_settings(storage_path=path))
        assert "unreadable" in value
        assert "WARN" in status

    def test_unwritable_location_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        with patch("cv_studio.cli.doctor.os.access", return_value=False):
            _, value, status = _storage_check(_settings(storage_path=path))
        assert "not writable" in value
        assert "FAIL" in status


class TestOsCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _os_check()
        assert label == "OS"
        assert value
        assert "OK" in status

    def test_macos_display_name(self) -> None:
        with patch("cv_studio.cli.doctor.platform.system", return_value="Darwin"):
            _, value, _ = _os_check()
        assert value.startswith("macOS")


class TestStatusPlain:
    @pytest.mark.parametrize(
        "markup, plain",
        [
            ("[green]OK[/green]", "OK"),
            ("[yellow]WARN[/yellow]", "WARN"),
            ("[red]FAIL (>=3.10 required)[/red]", "FAIL"),
        ],
    )
    def test_strips_markup(self, markup: str, plain: str) -> None:
        assert _status_plain(markup) == plain


# ---------------------------------------------------------------------------
# run_doctor
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_collect_checks_rows(self, tmp_path: Path) -> None:
        labels = [label for label, _, _ in collect_checks(_settings(storage_path=tmp_path / "s.json"))]
        assert labels == ["cv-studio", "Python", "reportlab", "rich", "questionary", "Storage", "OS"]

    def test_all_ok(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_doctor(_settings(storage_path=tmp_path / "s.json"))
        assert code == exit_codes.SUCCESS
        assert "All checks passed." in capsys.readouterr().out

    def test_failure_returns_general_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        failing = [("reportlab", "NOT INSTALLED", "[red]FAIL[/red]")]
        with patch("cv_studio.cli.doctor.collect_checks", return_value=failing):
            code = run_doctor(_settings(storage_path=tmp_path / "s.json"))
        assert code == exit_codes.GENERAL_ERROR
        assert "Some checks failed." in capsys.readouterr().out
