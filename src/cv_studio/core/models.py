"""Domain models for cv-studio.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field

# Wire names used by the form surface and the persisted slot, mapped to
# the attribute holding each value on :class:`CvRecord`.
WIRE_FIELDS: dict[str, str] = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "image": "image",
    "experience": "experience",
}


def new_record_id() -> str:
    """Return a fresh, collision-resistant record identifier."""
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# CV record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CvRecord:
    """A single CV entry.

    Equality compares the five visible fields only; two records with the
    same content but different ``record_id`` are ``==``.
    """

    full_name: str
    email: str
    phone: str
    image: str
    """Remote URL or embedded ``data:`` URI."""

    experience: str

    record_id: str | None = field(default=None, compare=False)
    """Identity token assigned when the record enters the store."""

    @classmethod
    def from_fields(cls, raw: dict[str, str], *, record_id: str | None = None) -> CvRecord:
        """Build a record from a wire-keyed mapping (``fullName`` etc.)."""
        return cls(
            **{attr: raw[wire] for wire, attr in WIRE_FIELDS.items()},
            record_id=record_id if record_id is not None else new_record_id(),
        )

    def to_fields(self) -> dict[str, str]:
        """Return the five visible fields keyed by wire name."""
        return {wire: getattr(self, attr) for wire, attr in WIRE_FIELDS.items()}


# ---------------------------------------------------------------------------
# Typed collection wrapper
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RecordCollection:
    """Immutable, insertion-ordered collection of :class:`CvRecord`.

    The tuple guarantees immutability; every store mutation produces a
    new collection.
    """

    records: tuple[CvRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return len(self.records) > 0

    def __iter__(self) -> Iterator[CvRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> CvRecord:
        return self.records[index]

    def appended(self, record: CvRecord) -> RecordCollection:
        return RecordCollection(records=(*self.records, record))

    def without_index(self, index: int) -> RecordCollection:
        return RecordCollection(
            records=self.records[:index] + self.records[index + 1:],
        )


# ---------------------------------------------------------------------------
# Validation verdicts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Valid:
    """Verdict for a field that passed its check."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """Verdict for a field that failed its check."""

    code: str
    """``"required"``, ``"length"`` or ``"format"``."""

    message: str

    def __bool__(self) -> bool:
        return False


ValidationResult = Valid | Invalid

VALID = Valid()


# ---------------------------------------------------------------------------
# Document description
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ImageBlock:
    """Profile picture at the top of the page."""

    source: str
    """URL, local path or ``data:`` URI."""

    is_placeholder: bool


@dataclass(frozen=True, slots=True)
class TextBlock:
    """One line (or paragraph) of text on the page."""

    role: str
    """``"title"``, ``"email"``, ``"phone"``, ``"heading"`` or ``"experience"``."""

    text: str

    label: str | None = None
    """Prefix rendered before the text, e.g. ``"Email"``."""

    @property
    def rendered(self) -> str:
        """Text as it appears on the page, label included."""
        if self.label is None:
            return self.text
        return f"{self.label}: {self.text}"


@dataclass(frozen=True, slots=True)
class DocumentDescription:
    """Fixed-layout, single-page description of an exported CV."""

    image: ImageBlock
    lines: tuple[TextBlock, ...]
    page_size: str = "A4"
    file_name: str = "my-cv.pdf"

    def line(self, role: str) -> TextBlock:
        """Return the first text block with *role*."""
        for block in self.lines:
            if block.role == role:
                return block
        raise KeyError(role)

    @property
    def title(self) -> str:
        return self.line("title").text

    @property
    def email(self) -> str:
        return self.line("email").text

    @property
    def phone(self) -> str:
        return self.line("phone").text

    @property
    def experience(self) -> str:
        return self.line("experience").text
