"""Projection of a CV record onto a fixed single-page layout.

:func:`project` is pure and total: any missing field falls back to its
placeholder, so a document can always be produced.

Layout order
------------
1. Image (record picture or the built-in default).
2. Title — the full name.
3. ``Email:`` line.
4. ``Phone:`` line.
5. Literal ``Experience:`` heading.
6. Experience text.
"""

from __future__ import annotations

from cv_studio.core.models import CvRecord, DocumentDescription, ImageBlock, TextBlock
from cv_studio.core.selection import PLACEHOLDERS, Placeholders

EXPORT_FILE_NAME = "my-cv.pdf"
PAGE_SIZE = "A4"


def project(
    record: CvRecord | None,
    placeholders: Placeholders = PLACEHOLDERS,
) -> DocumentDescription:
    """Map *record* (or nothing) to a :class:`DocumentDescription`."""
    full_name = record.full_name if record is not None else ""
    email = record.email if record is not None else ""
    phone = record.phone if record is not None else ""
    image = record.image if record is not None else ""
    experience = record.experience if record is not None else ""

    return DocumentDescription(
        image=ImageBlock(
            source=image or placeholders.image,
            is_placeholder=not image,
        ),
        lines=(
            TextBlock("title", full_name or placeholders.full_name),
            TextBlock("email", email or placeholders.email, label="Email"),
            TextBlock("phone", phone or placeholders.phone, label="Phone"),
            TextBlock("heading", "Experience:"),
            TextBlock("experience", experience or placeholders.experience),
        ),
        page_size=PAGE_SIZE,
        file_name=EXPORT_FILE_NAME,
    )
