"""Interactive CV form for the CLI layer.

This module is responsible for:

* Prompting for the five CV fields via questionary.
* Showing one message per invalid field after a rejected submission.
* Re-prompting with the rejected values pre-filled until the record is
  accepted or the user cancels.

Validation itself lives in the core; this module only displays it.
"""

from __future__ import annotations

from typing import Any

from cv_studio.cli.console import console
from cv_studio.core.models import CvRecord
from cv_studio.core.session import CvSession
from cv_studio.exceptions import EnvironmentError, RecordValidationError

# (wire name, prompt label, multiline)
FORM_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("fullName", "Full Name", False),
    ("email", "Email", False),
    ("phone", "Phone", False),
    ("image", "Image URL", False),
    ("experience", "Experience", True),
)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def empty_form() -> dict[str, str]:
    return {name: "" for name, _, _ in FORM_FIELDS}


def _render_errors(error: RecordValidationError) -> None:
    """Print one line per invalid field."""
    labels = {name: label for name, label, _ in FORM_FIELDS}
    console.print()
    for field_error in error.errors:
        console.print(
            f"[red]✗ {labels.get(field_error.field, field_error.field)}:[/red] "
            f"{field_error.message}"
        )
    console.print()


def prompt_record_fields(values: dict[str, str]) -> dict[str, str] | None:
    """Ask for every field, using *values* as defaults.

    Returns ``None`` when the user cancels a prompt (Ctrl+C / Esc).
    """
    questionary = _import_questionary()

    answers: dict[str, str] = {}
    for name, label, multiline in FORM_FIELDS:
        answer: str | None = questionary.text(
            f"{label}:",
            default=values.get(name, ""),
            multiline=multiline,
        ).ask()
        if answer is None:
            return None
        answers[name] = answer
    return answers


def submit_form(session: CvSession) -> CvRecord | None:
    """Run the form until a record is stored or the user gives up.

    Returns the stored record, or ``None`` when cancelled.  Each new
    call starts from an empty form.
    """
    values = empty_form()
    while True:
        answers = prompt_record_fields(values)
        if answers is None:
            console.print("[yellow]Form cancelled.[/yellow]")
            return None
        try:
            return session.submit(answers)
        except RecordValidationError as exc:
            _render_errors(exc)
            values = answers
