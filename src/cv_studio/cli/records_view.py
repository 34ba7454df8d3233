"""Record table, preview panel and row selection for the CLI layer.

All display-related logic lives here — no validation, no storage and
no PDF rendering.
"""

from __future__ import annotations

import sys
from typing import Any

from cv_studio.cli.console import console, escape_markup, rich_available
from cv_studio.cli.form_prompt import _import_questionary
from cv_studio.core.models import CvRecord, DocumentDescription, RecordCollection
from cv_studio.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for record rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _import_rich_panel() -> type[Any]:
    try:
        from rich.panel import Panel
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Panel


# ---------------------------------------------------------------------------
# Presentation helpers (pure, no I/O)
# ---------------------------------------------------------------------------

def _shorten(text: str, width: int = 40) -> str:
    """Collapse *text* to one line of at most *width* characters."""
    single = " ".join(text.split())
    if len(single) <= width:
        return single
    return single[: width - 3] + "..."


def _image_label(image: str) -> str:
    """Data URIs are unreadable in a table; show their media type."""
    if image.startswith("data:"):
        media_type = image[5:].split(";", 1)[0].split(",", 1)[0] or "data"
        return f"<embedded {media_type}>"
    return _shorten(image)


def _build_choice_label(index: int, record: CvRecord) -> str:
    """Single-line label shown in the questionary selector.

    Format: ``"  1.  Jane Doe X           jane@doe.com"``
    """
    return f"  {index + 1}.  {record.full_name:<20} {record.email}"


# ---------------------------------------------------------------------------
# Table display
# ---------------------------------------------------------------------------

def _print_plain_records(records: RecordCollection) -> None:
    print(f"{'#':>3}  {'Name':<20} {'Email':<28} {'Phone':<14} Image", file=sys.stdout)
    print("-" * 80, file=sys.stdout)
    for i, record in enumerate(records, start=1):
        print(
            f"{i:>3}  {record.full_name:<20} {record.email:<28} "
            f"{record.phone:<14} {_image_label(record.image)}",
            file=sys.stdout,
        )


def render_records_table(records: RecordCollection) -> None:
    """Print the full collection, in insertion order."""
    if not records:
        console.print("[dim]No CVs stored yet.[/dim]")
        return

    if not rich_available():
        _print_plain_records(records)
        return

    table_class = _import_rich_table()
    table = table_class(
        title="Stored CVs",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Name", min_width=10)
    table.add_column("Email", min_width=12)
    table.add_column("Phone", min_width=12)
    table.add_column("Image", overflow="ellipsis")

    for i, record in enumerate(records, start=1):
        table.add_row(
            str(i),
            escape_markup(record.full_name),
            escape_markup(record.email),
            escape_markup(record.phone),
            escape_markup(_image_label(record.image)),
        )

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

def _print_plain_preview(document: DocumentDescription) -> None:
    print(document.title, file=sys.stdout)
    for role in ("email", "phone"):
        print(document.line(role).rendered, file=sys.stdout)
    print(f"Image: {_image_label(document.image.source)}", file=sys.stdout)
    print(file=sys.stdout)
    print(document.line("heading").text, file=sys.stdout)
    print(document.experience, file=sys.stdout)


def render_preview(document: DocumentDescription, *, has_selection: bool) -> None:
    """Print the projected CV, or the empty-preview hint."""
    if not has_selection:
        console.print("[dim]Submit the form to preview your CV here.[/dim]")
        return

    if not rich_available():
        _print_plain_preview(document)
        return

    body = "\n".join(
        [
            f"[bold]{escape_markup(document.title)}[/bold]",
            escape_markup(document.line("email").rendered),
            escape_markup(document.line("phone").rendered),
            f"Image: {escape_markup(_image_label(document.image.source))}",
            "",
            f"[bold]{document.line('heading').text}[/bold]",
            escape_markup(document.experience),
        ]
    )
    panel_class = _import_rich_panel()
    console.print(panel_class(body, title="Preview", border_style="cyan"))


# ---------------------------------------------------------------------------
# Row selection
# ---------------------------------------------------------------------------

def prompt_record_choice(records: RecordCollection, message: str) -> CvRecord | None:
    """Let the user pick one stored record; ``None`` when cancelled."""
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(i, record), value=i)
        for i, record in enumerate(records)
    ]
    selected: int | None = questionary.select(
        message,
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

    if selected is None:
        return None
    return records[selected]


def confirm_deletion(record: CvRecord) -> bool:
    """Ask the user to confirm deleting *record*."""
    questionary = _import_questionary()

    console.print(f"[bold]Confirm Delete[/bold] {escape_markup(record.full_name)}")
    answer: bool | None = questionary.confirm(
        "Are you sure you want to delete this CV?",
        default=False,
    ).ask()
    return bool(answer)
