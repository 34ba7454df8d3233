"""Interactive session loop — the terminal counterpart of the CV page.

Each menu action maps onto one session operation:

* **Add CV** — form → ``CvSession.submit`` (new record becomes the preview)
* **Show CV** — pick a row → ``CvSession.show``
* **Delete CV** — pick a row → ``request_delete`` → confirm/cancel
* **Download CV** — ``CvSession.export`` (only offered with a selection)
"""

from __future__ import annotations

from pathlib import Path

from cv_studio.cli import exit_codes
from cv_studio.cli.console import console, escape_markup
from cv_studio.cli.form_prompt import _import_questionary, submit_form
from cv_studio.cli.records_view import (
    confirm_deletion,
    prompt_record_choice,
    render_preview,
    render_records_table,
)
from cv_studio.core.protocols import DocumentRenderer
from cv_studio.core.session import CvSession
from cv_studio.exceptions import CvStudioError

ADD = "add"
SHOW = "show"
DELETE = "delete"
DOWNLOAD = "download"
QUIT = "quit"


def _menu_choices(session: CvSession) -> list[tuple[str, str]]:
    """Return ``(value, title)`` pairs for the current state."""
    choices = [(ADD, "Add CV")]
    if session.records:
        choices.append((SHOW, "Show CV"))
        choices.append((DELETE, "Delete CV"))
    if session.selected is not None:
        choices.append((DOWNLOAD, "Download CV"))
    choices.append((QUIT, "Quit"))
    return choices


def _warn_if_not_persisted(session: CvSession) -> None:
    error = session.last_write_error
    if error is not None:
        console.print(
            f"[yellow]Warning:[/yellow] changes are kept for this session only ({error})"
        )


def _delete(session: CvSession) -> None:
    record = prompt_record_choice(session.records, "Select the CV to delete:")
    if record is None:
        return
    session.request_delete(record)
    if confirm_deletion(record):
        session.confirm_delete()
        console.print(f"[green]Deleted[/green] {escape_markup(record.full_name)}")
        _warn_if_not_persisted(session)
    else:
        session.cancel_delete()
        console.print("[dim]Deletion cancelled.[/dim]")


def _download(session: CvSession, renderer: DocumentRenderer, export_dir: Path) -> None:
    try:
        path = session.export(renderer, export_dir)
    except CvStudioError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        return
    console.print(f"[bold green]Saved[/bold green] {path}")


def run_session(
    session: CvSession,
    renderer: DocumentRenderer,
    export_dir: Path,
) -> int:
    """Drive the menu loop until the user quits.

    A failed export is reported and the loop carries on.
    """
    questionary = _import_questionary()

    render_records_table(session.records)
    while True:
        action: str | None = questionary.select(
            "What would you like to do?",
            choices=[
                questionary.Choice(title=title, value=value)
                for value, title in _menu_choices(session)
            ],
        ).ask()

        if action is None or action == QUIT:
            return exit_codes.SUCCESS

        if action == ADD:
            if submit_form(session) is not None:
                _warn_if_not_persisted(session)
                render_records_table(session.records)
        elif action == SHOW:
            record = prompt_record_choice(session.records, "Select the CV to preview:")
            if record is not None:
                session.show(record)
        elif action == DELETE:
            _delete(session)
            render_records_table(session.records)
        elif action == DOWNLOAD:
            _download(session, renderer, export_dir)

        render_preview(session.preview(), has_selection=session.selected is not None)
