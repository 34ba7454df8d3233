"""``cv-studio doctor``: can this machine store and export CVs?

Each check yields a ``(component, value, status)`` row.  Missing
required packages or an unusable storage location are failures;
missing UI packages only warn, since ``list`` and ``doctor`` run
without them.
"""

from __future__ import annotations

import importlib
import os
import platform
import sys

from cv_studio.cli import exit_codes
from cv_studio.cli.console import console, rich_available
from cv_studio.config import Settings
from cv_studio.exceptions import StorageReadError
from cv_studio.infra.file_slot import JsonFileSlot
from cv_studio.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    supported = sys.version_info[:2] >= (3, 10)
    status = OK if supported else f"{FAIL} (>=3.10 required)"
    return "Python", platform.python_version(), status


def _package_check(label: str, module: str, *, required: bool) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable dependency.

    A missing *required* package is a FAIL, an optional one a WARN.
    """
    try:
        imported = importlib.import_module(module)
    except ImportError:
        return label, "NOT INSTALLED", FAIL if required else WARN
    version = getattr(imported, "__version__", None) or getattr(imported, "Version", None)
    return label, str(version) if version else "unknown", OK


def _storage_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the storage file row."""
    path = settings.storage_path
    if not path.exists():
        parent = next((p for p in path.parents if p.exists()), None)
        if parent is not None and os.access(parent, os.W_OK):
            return "Storage", f"{path} (new)", OK
        return "Storage", f"{path} (not writable)", FAIL

    try:
        JsonFileSlot(path).get_item(settings.storage_key)
    except StorageReadError:
        return "Storage", f"{path} (unreadable)", WARN
    return "Storage", str(path), OK


_SYSTEM_NAMES = {"Darwin": "macOS"}


def _os_check() -> tuple[str, str, str]:
    system = platform.system()
    name = _SYSTEM_NAMES.get(system, system)
    return "OS", f"{name} {platform.release()} ({platform.machine()})", OK


def _cvstudio_version_check() -> tuple[str, str, str]:
    return "cv-studio", __version__, OK


def _status_plain(status: str) -> str:
    """Drop Rich markup, keeping the status word."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    print("cv-studio doctor", file=sys.stdout)
    for label, value, status in checks:
        print(f"  {_status_plain(status):<5} {label:<12} {value}", file=sys.stdout)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    from rich.table import Table

    table = Table(title="cv-studio doctor", header_style="bold magenta", border_style="dim")
    table.add_column("Component", style="bold")
    table.add_column("Value")
    table.add_column("Status", justify="center")
    for row in checks:
        table.add_row(*row)
    console.print(table)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks(settings: Settings) -> list[tuple[str, str, str]]:
    return [
        _cvstudio_version_check(),
        _python_version_check(),
        _package_check("reportlab", "reportlab", required=True),
        _package_check("rich", "rich", required=False),
        _package_check("questionary", "questionary", required=False),
        _storage_check(settings),
        _os_check(),
    ]


def run_doctor(settings: Settings) -> int:
    """Run every check and print the results.

    Returns :data:`exit_codes.GENERAL_ERROR` when any row failed,
    :data:`exit_codes.SUCCESS` otherwise.  Warnings do not fail.
    """
    checks = collect_checks(settings)

    if rich_available():
        _print_rich_doctor_table(checks)
    else:
        _print_plain_doctor_table(checks)

    if any(_status_plain(status) == "FAIL" for _, _, status in checks):
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
