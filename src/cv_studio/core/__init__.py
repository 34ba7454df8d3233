"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; persistence and rendering go through
  the protocols in :mod:`cv_studio.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from cv_studio.core.deletion_flow import DeletionFlow, FlowState
from cv_studio.core.models import (
    CvRecord,
    DocumentDescription,
    ImageBlock,
    Invalid,
    RecordCollection,
    TextBlock,
    Valid,
)
from cv_studio.core.projector import project
from cv_studio.core.protocols import DocumentRenderer, StorageSlot
from cv_studio.core.record_store import RecordStore
from cv_studio.core.selection import PLACEHOLDERS, SelectionState
from cv_studio.core.session import CvSession
from cv_studio.core.validator import ValidationReport, validate_fields

__all__: list[str] = [
    "PLACEHOLDERS",
    "CvRecord",
    "CvSession",
    "DeletionFlow",
    "DocumentDescription",
    "DocumentRenderer",
    "FlowState",
    "ImageBlock",
    "Invalid",
    "RecordCollection",
    "RecordStore",
    "SelectionState",
    "StorageSlot",
    "TextBlock",
    "Valid",
    "ValidationReport",
    "project",
    "validate_fields",
]
