"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* Commands route to their handlers and the error boundary maps
  exceptions to exit codes.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from cv_studio import __version__
from cv_studio.cli import exit_codes
from cv_studio.cli.app import cli, main
from cv_studio.exceptions import (
    CvStudioError,
    DeletionFlowError,
    EnvironmentError,
    ExportError,
    RecordValidationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)


@pytest.fixture(autouse=True)
def _no_log_sinks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("cv_studio.cli.app.setup_logger", lambda *args, **kwargs: None)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            RecordValidationError,
            StorageError,
            StorageReadError,
            StorageWriteError,
            DeletionFlowError,
            ExportError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CvStudioError]
    ) -> None:
        assert issubclass(exc_class, CvStudioError)

    def test_storage_errors_share_a_base(self) -> None:
        assert issubclass(StorageReadError, StorageError)
        assert issubclass(StorageWriteError, StorageError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(CvStudioError, Exception)

    def test_hint_is_stored(self) -> None:
        err = CvStudioError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = CvStudioError("boom")
        assert err.hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "cv-studio" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_command_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["publish"])
        assert exc_info.value.code == 2

    @patch("cv_studio.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, _mock_doc: object) -> None:
        code = main(["doctor"])
        assert code == exit_codes.SUCCESS

    def test_list_empty_storage(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["list"])
        assert code == exit_codes.SUCCESS
        assert "No CVs stored yet." in capsys.readouterr().out

    def test_list_reads_storage_flag(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "elsewhere.json"
        cvs = [
            {
                "id": "1",
                "fullName": "Alice Smith",
                "email": "alice@mail.com",
                "phone": "0501234567",
                "image": "http://x/a.png",
                "experience": "QA",
            }
        ]
        path.write_text(json.dumps({"cvs": json.dumps(cvs)}), encoding="utf-8")

        code = main(["list", "--storage", str(path)])
        assert code == exit_codes.SUCCESS
        assert "Alice Smith" in capsys.readouterr().out

    def test_list_ephemeral_ignores_storage(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(["list", "--ephemeral"])
        assert code == exit_codes.SUCCESS
        assert "No CVs stored yet." in capsys.readouterr().out
        assert not (tmp_path / "storage.json").exists()

    def test_session_routes_to_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from cv_studio.cli import app as app_module

        seen: dict[str, object] = {}

        def _fake_handle(settings: object, *, ephemeral: bool) -> int:
            seen["ephemeral"] = ephemeral
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_session", _fake_handle)
        assert main(["session", "--ephemeral"]) == exit_codes.SUCCESS
        assert seen == {"ephemeral": True}


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        from cv_studio.cli import app as app_module

        def _raise() -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", _raise)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_domain_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = self._run_cli(monkeypatch, ExportError("No CV is selected.", hint="Pick one."))
        assert code == exit_codes.GENERAL_ERROR
        out = capsys.readouterr().out
        assert "No CV is selected." in out
        assert "Pick one." in out

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = self._run_cli(monkeypatch, RuntimeError("kaboom"))
        assert code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in capsys.readouterr().out
