"""On-disk implementation of :class:`~cv_studio.core.protocols.StorageSlot`.

The backing file is a single JSON object mapping key → string value,
the terminal counterpart of a browser's local storage.  Writes go to a
temporary file in the same directory and are moved into place with
:func:`os.replace`, so a crash never leaves a half-written file.

Every ``OSError`` or decoding failure is re-raised as a
:class:`~cv_studio.exceptions.StorageError` subclass.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger

from cv_studio.exceptions import StorageReadError, StorageWriteError


class JsonFileSlot:
    """Key-value slot persisted as a JSON object file.

    Usage::

        slot = JsonFileSlot(Path("~/.cv_studio/storage.json").expanduser())
        slot.set_item("cvs", "[]")
        slot.get_item("cvs")  # -> "[]"
    """

    def __init__(self, path: Path) -> None:
        self.path: Path = path

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageReadError(f"Stored value for '{key}' is not a string.")
        return value

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_update()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_for_update()
        if key in items:
            del items[key]
            self._write_all(items)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read_all(self) -> dict[str, Any]:
        """Return the decoded file, ``{}`` when it does not exist yet."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(
                f"Cannot read storage file {self.path}: {exc}",
                hint="Delete or repair the file to start over.",
            ) from exc

        if not text.strip():
            return {}

        try:
            data: Any = json.loads(text)
        except ValueError as exc:
            raise StorageReadError(
                f"Storage file {self.path} is not valid JSON.",
                hint="Delete or repair the file to start over.",
            ) from exc

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Storage file {self.path} does not hold a JSON object.",
                hint="Delete or repair the file to start over.",
            )
        return data

    def _read_for_update(self) -> dict[str, Any]:
        # A corrupt file cannot be merged into; it is replaced.
        try:
            return self._read_all()
        except StorageReadError as exc:
            logger.warning(f"Overwriting unreadable storage file: {exc}")
            return {}

    def _write_all(self, items: dict[str, Any]) -> None:
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(self.path.parent),
                prefix=".storage_",
                suffix=".json",
            ) as tmp:
                temp_path = Path(tmp.name)
                json.dump(items, tmp, ensure_ascii=False, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(temp_path, self.path)
            temp_path = None
        except OSError as exc:
            raise StorageWriteError(
                f"Cannot write storage file {self.path}: {exc}",
                hint="Check that the directory exists and is writable.",
            ) from exc
        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
