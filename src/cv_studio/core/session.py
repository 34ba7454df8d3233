"""Application state for one cv-studio session.

:class:`CvSession` bundles the record store, the selection state and
the deletion flow behind a single object handed to every UI action.
It is created with :meth:`CvSession.open`, which loads the persisted
collection, and needs no teardown: the selection and any pending
deletion simply end with the session.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from loguru import logger

from cv_studio.core.deletion_flow import DeletionFlow
from cv_studio.core.models import CvRecord, DocumentDescription, RecordCollection
from cv_studio.core.projector import project
from cv_studio.core.protocols import DocumentRenderer, StorageSlot
from cv_studio.core.record_store import DEFAULT_KEY, RecordStore
from cv_studio.core.selection import SelectionState
from cv_studio.core.validator import validate_fields
from cv_studio.exceptions import ExportError, StorageWriteError


class CvSession:
    """Store, selection and deletion flow for one session."""

    def __init__(self, store: RecordStore) -> None:
        self.store: RecordStore = store
        self.selection: SelectionState = SelectionState()
        self.deletion: DeletionFlow = DeletionFlow(store, self.selection)

    @classmethod
    def open(cls, slot: StorageSlot, key: str = DEFAULT_KEY) -> CvSession:
        """Create a session over *slot* and load the stored records."""
        store = RecordStore(slot, key)
        store.load()
        return cls(store)

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    @property
    def records(self) -> RecordCollection:
        return self.store.list()

    @property
    def last_write_error(self) -> StorageWriteError | None:
        return self.store.last_write_error

    def submit(self, raw_fields: Mapping[str, str]) -> CvRecord:
        """Validate and store a form submission, then preview it.

        Raises
        ------
        RecordValidationError
            Listing every invalid field.  Nothing is stored.
        """
        validate_fields(raw_fields).raise_for_errors()

        record = CvRecord.from_fields(dict(raw_fields))
        self.store.add(record)
        self.selection.select(record)
        logger.info(f"Stored CV '{record.full_name}'")
        return record

    # ------------------------------------------------------------------
    # Selection / preview
    # ------------------------------------------------------------------

    def show(self, record: CvRecord) -> None:
        self.selection.select(record)

    @property
    def selected(self) -> CvRecord | None:
        return self.selection.current()

    def preview(self) -> DocumentDescription:
        """Project the selected record, placeholders when none."""
        return project(self.selection.current())

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def request_delete(self, record: CvRecord) -> None:
        self.deletion.request_delete(record)

    def confirm_delete(self) -> RecordCollection:
        return self.deletion.confirm()

    def cancel_delete(self) -> None:
        self.deletion.cancel()

    @property
    def pending_deletion(self) -> CvRecord | None:
        return self.deletion.pending

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, renderer: DocumentRenderer, directory: Path) -> Path:
        """Render the selected record to ``<directory>/my-cv.pdf``.

        Raises
        ------
        ExportError
            When nothing is selected, or the renderer fails.
        """
        record = self.selection.current()
        if record is None:
            raise ExportError(
                "No CV is selected for export.",
                hint="Submit a CV or pick one from the list first.",
            )
        document = project(record)
        path = renderer.render(document, directory / document.file_name)
        logger.info(f"Exported CV '{record.full_name}' to {path}")
        return path
