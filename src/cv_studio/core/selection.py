"""Selection state — which single record is currently previewed.

The selection lives for one session only and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from cv_studio.core.models import CvRecord

# 1x1 PNG shown when a record has no usable picture.
DEFAULT_IMAGE = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@dataclass(frozen=True, slots=True)
class Placeholders:
    """Values rendered in place of missing record fields."""

    full_name: str = "Your Name"
    email: str = "your-email@example.com"
    phone: str = "+994 55 555 55 55"
    image: str = DEFAULT_IMAGE
    experience: str = "Describe your experience..."


PLACEHOLDERS = Placeholders()


class SelectionState:
    """Holds at most one selected :class:`CvRecord`."""

    def __init__(self) -> None:
        self._current: CvRecord | None = None

    def select(self, record: CvRecord) -> None:
        """Make *record* the previewed record.  No validation is done."""
        self._current = record

    def current(self) -> CvRecord | None:
        return self._current

    @property
    def has_selection(self) -> bool:
        return self._current is not None

    def clear(self) -> None:
        self._current = None

    def discard(self, record: CvRecord) -> None:
        """Clear the selection if it is exactly *record*.

        Identity is compared by ``record_id``; a different record with
        the same content stays selected.
        """
        current = self._current
        if current is None:
            return
        if current.record_id is not None and record.record_id is not None:
            same = current.record_id == record.record_id
        else:
            same = current is record
        if same:
            self._current = None
