"""Record store — owns the CV collection and its persisted slot.

The store depends on a :class:`~cv_studio.core.protocols.StorageSlot`
injected at construction time.  The whole collection is serialized on
every mutation; there is no incremental persistence and no schema
migration.

Guarantees
----------
* ``load`` never raises: an absent, empty or corrupt slot degrades to
  an empty collection.
* The in-memory collection is the source of truth.  A failed write is
  logged and remembered in :attr:`RecordStore.last_write_error`, but an
  applied change is never rolled back.
* Records are appended in submission order and never mutated.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

from loguru import logger

from cv_studio.core.models import WIRE_FIELDS, CvRecord, RecordCollection, new_record_id
from cv_studio.core.protocols import StorageSlot
from cv_studio.exceptions import StorageReadError, StorageWriteError

DEFAULT_KEY = "cvs"


class RecordStore:
    """Insertion-ordered CV collection with write-through persistence.

    Parameters
    ----------
    slot:
        Any object satisfying the :class:`StorageSlot` protocol.
    key:
        Name of the slot entry holding the serialized collection.
    """

    def __init__(self, slot: StorageSlot, key: str = DEFAULT_KEY) -> None:
        self._slot: StorageSlot = slot
        self._key: str = key
        self._records: RecordCollection = RecordCollection()
        self.last_write_error: StorageWriteError | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> RecordCollection:
        """Replace the in-memory collection with the persisted one."""
        try:
            raw = self._slot.get_item(self._key)
        except StorageReadError as exc:
            logger.warning(f"Could not read stored CVs, starting empty: {exc}")
            raw = None

        self._records = self._decode(raw)
        logger.debug(f"Loaded {len(self._records)} CV record(s) from '{self._key}'")
        return self._records

    def add(self, record: CvRecord) -> RecordCollection:
        """Append an already-validated *record* and persist the collection.

        The record is not re-validated here.  A record without an
        identifier is given one before it is stored.
        """
        if record.record_id is None:
            record = replace(record, record_id=new_record_id())
        self._commit(self._records.appended(record))
        logger.debug(f"Added CV record {record.record_id}")
        return self._records

    def delete(self, record: CvRecord) -> RecordCollection:
        """Remove the first entry matching *record* and persist.

        A record carrying an identifier matches the stored entry with
        that identifier only.  A record without one matches the first
        entry equal across all five visible fields.  No match leaves the
        collection unchanged (it is still written back).
        """
        index = self._find(record)
        if index is None:
            logger.debug("Delete requested for a CV record that is not stored")
            self._commit(self._records)
        else:
            removed = self._records[index]
            self._commit(self._records.without_index(index))
            logger.debug(f"Deleted CV record {removed.record_id}")
        return self._records

    def list(self) -> RecordCollection:
        """Return the in-memory collection without touching storage."""
        return self._records

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _find(self, record: CvRecord) -> int | None:
        if record.record_id is not None:
            return next(
                (
                    index
                    for index, stored in enumerate(self._records)
                    if stored.record_id == record.record_id
                ),
                None,
            )
        return next(
            (index for index, stored in enumerate(self._records) if stored == record),
            None,
        )

    # ------------------------------------------------------------------
    # Persistence (write-through)
    # ------------------------------------------------------------------

    def _commit(self, records: RecordCollection) -> None:
        """Swap in *records*, then write the full collection."""
        self._records = records
        payload = json.dumps(
            [self._encode_record(record) for record in records],
            ensure_ascii=False,
        )
        try:
            self._slot.set_item(self._key, payload)
        except StorageWriteError as exc:
            logger.warning(f"Could not persist CVs, keeping them in memory: {exc}")
            self.last_write_error = exc
        else:
            self.last_write_error = None

    # ------------------------------------------------------------------
    # Raw JSON → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _encode_record(record: CvRecord) -> dict[str, str]:
        return {"id": record.record_id or "", **record.to_fields()}

    @classmethod
    def _decode(cls, raw: str | None) -> RecordCollection:
        if not raw:
            return RecordCollection()

        try:
            data: Any = json.loads(raw)
        except ValueError as exc:
            logger.warning(f"Stored CVs are not valid JSON, ignoring them: {exc}")
            return RecordCollection()

        if not isinstance(data, list):
            logger.warning("Stored CVs are not a list, ignoring them")
            return RecordCollection()

        records: list[CvRecord] = []
        for entry in data:
            record = cls._decode_record(entry)
            if record is None:
                logger.warning("Stored CVs contain a malformed entry, ignoring them")
                return RecordCollection()
            records.append(record)
        return RecordCollection(records=tuple(records))

    @staticmethod
    def _decode_record(entry: object) -> CvRecord | None:
        """Convert one stored object to a :class:`CvRecord`.

        Entries written before identifiers existed get a fresh one.
        """
        if not isinstance(entry, dict):
            return None
        fields = {wire: entry.get(wire) for wire in WIRE_FIELDS}
        if not all(isinstance(value, str) for value in fields.values()):
            return None
        record_id = entry.get("id")
        return CvRecord.from_fields(
            fields,  # type: ignore[arg-type]
            record_id=record_id if isinstance(record_id, str) and record_id else None,
        )
