"""Runtime settings resolved from the environment.

Values are read from process environment variables, after loading a
``.env`` file from the working directory when one exists.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_STORAGE_PATH = Path.home() / ".cv_studio" / "storage.json"
DEFAULT_STORAGE_KEY = "cvs"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for one process."""

    storage_path: Path
    """JSON key-value file backing the persisted slot."""

    storage_key: str
    """Name of the slot holding the serialized collection."""

    export_dir: Path
    """Directory the exported PDF is written into."""

    log_level: str
    """Minimum level for the stderr log sink."""

    log_file: Path | None
    """Optional DEBUG-level log file."""


def _path_from_env(name: str) -> Path | None:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw).expanduser()


def load_settings(*, storage_path: Path | None = None) -> Settings:
    """Build :class:`Settings` from the environment.

    *storage_path*, when given, overrides ``CV_STUDIO_STORAGE_PATH``
    (used by the ``--storage`` CLI flag).
    """
    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        storage_path=(
            storage_path
            or _path_from_env("CV_STUDIO_STORAGE_PATH")
            or DEFAULT_STORAGE_PATH
        ),
        storage_key=os.getenv("CV_STUDIO_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
        export_dir=_path_from_env("CV_STUDIO_EXPORT_DIR") or Path.cwd(),
        log_level=(os.getenv("CV_STUDIO_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        log_file=_path_from_env("CV_STUDIO_LOG_FILE"),
    )
