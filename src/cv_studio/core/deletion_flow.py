"""Two-state confirmation gate in front of destructive store operations.

::

    IDLE --request_delete(r)--> PENDING_CONFIRM(r)
    PENDING_CONFIRM --confirm--> IDLE      (store.delete(r))
    PENDING_CONFIRM --cancel---> IDLE      (no side effect)

The store is mutated from :meth:`DeletionFlow.confirm` only.
"""

from __future__ import annotations

import enum

from loguru import logger

from cv_studio.core.models import CvRecord, RecordCollection
from cv_studio.core.record_store import RecordStore
from cv_studio.core.selection import SelectionState
from cv_studio.exceptions import DeletionFlowError


class FlowState(enum.Enum):
    IDLE = "idle"
    PENDING_CONFIRM = "pending_confirm"


class DeletionFlow:
    """Gate record deletion behind an explicit confirmation.

    Parameters
    ----------
    store:
        The store to delete from on confirmation.
    selection:
        Optional selection state; a confirmed deletion of the selected
        record clears it.
    """

    def __init__(
        self,
        store: RecordStore,
        selection: SelectionState | None = None,
    ) -> None:
        self._store = store
        self._selection = selection
        self._pending: CvRecord | None = None

    @property
    def state(self) -> FlowState:
        if self._pending is None:
            return FlowState.IDLE
        return FlowState.PENDING_CONFIRM

    @property
    def pending(self) -> CvRecord | None:
        """The record awaiting confirmation, if any."""
        return self._pending

    def request_delete(self, record: CvRecord) -> None:
        """Ask for confirmation before deleting *record*.

        While a request is already pending the new record replaces it.
        Nothing is removed yet.
        """
        self._pending = record

    def confirm(self) -> RecordCollection:
        """Delete the pending record and return to idle."""
        record = self._pending
        if record is None:
            raise DeletionFlowError(
                "There is no deletion awaiting confirmation.",
                hint="Pick a CV to delete first.",
            )
        self._pending = None
        records = self._store.delete(record)
        if self._selection is not None:
            self._selection.discard(record)
        logger.info(f"Deleted CV '{record.full_name}'")
        return records

    def cancel(self) -> None:
        """Abandon the pending deletion.  A no-op when idle."""
        self._pending = None
