"""Custom exception hierarchy for cv-studio.

All exceptions that cross layer boundaries must inherit from
:class:`CvStudioError`.  Raw third-party or OS exceptions (e.g. from
ReportLab or the filesystem) must NEVER propagate beyond the
infrastructure layer — they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
CvStudioError
├── RecordValidationError
├── StorageError
│   ├── StorageReadError
│   └── StorageWriteError
├── DeletionFlowError
├── ExportError
└── EnvironmentError
"""

from __future__ import annotations

from dataclasses import dataclass


class CvStudioError(Exception):
    """Base exception for all cv-studio errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Validation ------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FieldError:
    """A single failed field check."""

    field: str
    """Wire name of the offending field (e.g. ``"fullName"``)."""

    code: str
    """Failure kind: ``"required"``, ``"length"`` or ``"format"``."""

    message: str
    """User-facing explanation."""


class RecordValidationError(CvStudioError):
    """Raised when a submitted record fails one or more field checks.

    Carries every failing field at once so the caller can highlight all
    of them in a single pass.
    """

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        fields = ", ".join(err.field for err in errors)
        super().__init__(
            f"Record is not valid ({fields}).",
            hint="Correct the highlighted fields and submit again.",
        )
        self.errors: tuple[FieldError, ...] = errors

    def for_field(self, field: str) -> FieldError | None:
        """Return the error reported for *field*, if any."""
        return next((err for err in self.errors if err.field == field), None)


# --- Storage ---------------------------------------------------------------

class StorageError(CvStudioError):
    """Base class for persisted-slot failures."""


class StorageReadError(StorageError):
    """Raised when the persisted slot cannot be read or decoded."""


class StorageWriteError(StorageError):
    """Raised when the persisted slot cannot be written."""


# --- Record lifecycle ------------------------------------------------------

class DeletionFlowError(CvStudioError):
    """Raised on a deletion-flow transition that is not allowed."""


class ExportError(CvStudioError):
    """Raised when the previewed record cannot be exported."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CvStudioError):
    """Raised when a required runtime dependency is not available."""
