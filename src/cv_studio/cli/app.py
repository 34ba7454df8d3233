"""``cv-studio`` command line: argument parsing, dispatch and the error boundary.

Handlers import their UI and infrastructure modules lazily so that
``--help`` and ``--version`` work without Rich or questionary.
Settings and logging are resolved here once per process.  Every
:class:`~cv_studio.exceptions.CvStudioError` raised below is turned into
a message and an exit code by :func:`cli`.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from cv_studio.cli import exit_codes
from cv_studio.cli.console import console
from cv_studio.config import Settings, load_settings
from cv_studio.exceptions import CvStudioError
from cv_studio.logger import setup_logger
from cv_studio.version import __version__

if TYPE_CHECKING:
    from cv_studio.core.session import CvSession

COMMANDS: tuple[str, ...] = ("session", "list", "doctor")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``cv-studio session``  — interactive add / show / delete / download
    * ``cv-studio list``     — print the stored CVs
    * ``cv-studio doctor``   — environment diagnostics
    * ``cv-studio --version``
    """
    parser = argparse.ArgumentParser(
        prog="cv-studio",
        description="Author, preview, store and export short CVs.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=COMMANDS,
        help="What to run.",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help="Storage file to use instead of CV_STUDIO_STORAGE_PATH.",
    )
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="Keep CVs in memory only; nothing is read from or written to disk.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _open_session(settings: Settings, *, ephemeral: bool) -> CvSession:
    """Load stored CVs into a fresh session."""
    from cv_studio.core.session import CvSession
    from cv_studio.infra.file_slot import JsonFileSlot
    from cv_studio.infra.memory_slot import MemorySlot

    if ephemeral:
        return CvSession.open(MemorySlot(), settings.storage_key)
    return CvSession.open(JsonFileSlot(settings.storage_path), settings.storage_key)


def _handle_session(settings: Settings, *, ephemeral: bool) -> int:
    """Run the interactive session.

    Flow:
    1. Load stored CVs into a fresh session.
    2. Loop over the action menu until the user quits.
    """
    from cv_studio.cli.interactive import run_session
    from cv_studio.infra.pdf_renderer import ReportLabRenderer

    session = _open_session(settings, ephemeral=ephemeral)
    return run_session(session, ReportLabRenderer(), settings.export_dir)


def _handle_list(settings: Settings, *, ephemeral: bool) -> int:
    from cv_studio.cli.records_view import render_records_table

    session = _open_session(settings, ephemeral=ephemeral)
    render_records_table(session.records)
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from cv_studio.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Parse *argv* (``sys.argv[1:]`` when ``None``) and run the command.

    Returns the process exit code.  Domain errors propagate to :func:`cli`.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = load_settings(storage_path=args.storage)
    setup_logger(settings.log_level, settings.log_file)

    if args.command == "doctor":
        return _handle_doctor(settings)
    if args.command == "list":
        return _handle_list(settings, ephemeral=args.ephemeral)
    return _handle_session(settings, ephemeral=args.ephemeral)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: run :func:`main` and exit with its code."""
    try:
        code = main()
        sys.exit(code)
    except CvStudioError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Something went wrong inside cv-studio.[/bold red]\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
