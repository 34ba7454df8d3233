"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands are resilient when optional UI
packages are missing, and interactive flows fail cleanly only when UI
paths are actually exercised.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from cv_studio.cli import exit_codes
from cv_studio.cli.app import main
from cv_studio.cli.console import console, escape_markup, strip_markup
from cv_studio.cli.records_view import confirm_deletion, render_preview
from cv_studio.core.models import CvRecord
from cv_studio.core.projector import project
from cv_studio.exceptions import EnvironmentError


@pytest.fixture(autouse=True)
def _no_log_sinks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("cv_studio.cli.app.setup_logger", lambda *args, **kwargs: None)


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.panel", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_list_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)

    code = main(["list", "--ephemeral"])
    assert code == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "No CVs stored yet." in out
    assert "[dim]" not in out


def test_preview_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)
    record = CvRecord(
        full_name="Jane Doe X",
        email="jane@doe.com",
        phone="0551234567",
        image="http://x/y.png",
        experience="5 years",
    )

    render_preview(project(record), has_selection=True)
    out = capsys.readouterr().out
    assert "Jane Doe X" in out
    assert "Email: jane@doe.com" in out


def test_session_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["session", "--ephemeral"])


def test_plain_console_drops_markup(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)

    console.print("[bold red]Error:[/bold red] disk full")
    console.print("\n[yellow]Interrupted.[/yellow]")
    assert capsys.readouterr().out == "Error: disk full\n\nInterrupted.\n"


@pytest.mark.parametrize(
    "markup, plain",
    [
        ("[dim]No CVs stored yet.[/dim]", "No CVs stored yet."),
        ("[#ff0000]red[/]", "red"),
        ("Price [USD]: 5", "Price [USD]: 5"),
        ("\\[b]Jane\\[/b]", "[b]Jane[/b]"),
    ],
)
def test_strip_markup(markup: str, plain: str) -> None:
    assert strip_markup(markup) == plain


def test_escaped_user_text_survives_plain_console(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)

    console.print(f"[green]Deleted[/green] {escape_markup('[b]Jane[/b] Doe')}")
    assert capsys.readouterr().out == "Deleted [b]Jane[/b] Doe\n"


def test_confirm_deletion_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _hide_rich(monkeypatch)
    fake = MagicMock()
    fake.confirm.return_value.ask.return_value = True
    record = CvRecord(
        full_name="Jane [dev] Doe",
        email="jane@doe.com",
        phone="0551234567",
        image="http://x/y.png",
        experience="5 years",
    )

    with patch("cv_studio.cli.records_view._import_questionary", return_value=fake):
        assert confirm_deletion(record) is True
    assert capsys.readouterr().out == "Confirm Delete Jane [dev] Doe\n"
