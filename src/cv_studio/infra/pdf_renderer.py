"""ReportLab implementation of :class:`~cv_studio.core.protocols.DocumentRenderer`.

This module is the **only** place in the codebase that imports
``reportlab``.  ReportLab and image-loading failures are caught here
and re-raised as :class:`~cv_studio.exceptions.ExportError`; nothing
raw escapes the infrastructure boundary.

Page layout (points): the document's page size (A4 by default), 20pt
padding, 100x100 picture, 24pt bold title, 14pt body lines.
"""

from __future__ import annotations

import base64
import binascii
import io
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import unquote_to_bytes
from xml.sax.saxutils import escape

from loguru import logger

from cv_studio.core.models import DocumentDescription, TextBlock
from cv_studio.core.selection import DEFAULT_IMAGE
from cv_studio.exceptions import EnvironmentError, ExportError

PAGE_PADDING = 20
IMAGE_SIZE = 100
IMAGE_SPACE_AFTER = 20
TITLE_FONT_SIZE = 24
TITLE_SPACE_AFTER = 10
TEXT_FONT_SIZE = 14
TEXT_SPACE_AFTER = 4


def _import_reportlab() -> dict[str, Any]:
    """Import the ReportLab pieces lazily."""
    try:
        from reportlab.lib import pagesizes
        from reportlab.lib.styles import ParagraphStyle
        from reportlab.lib.utils import ImageReader
        from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "reportlab is not installed. Install with: pip install reportlab",
        ) from exc
    return {
        "pagesizes": pagesizes,
        "ParagraphStyle": ParagraphStyle,
        "ImageReader": ImageReader,
        "Image": Image,
        "Paragraph": Paragraph,
        "SimpleDocTemplate": SimpleDocTemplate,
        "Spacer": Spacer,
    }


# ---------------------------------------------------------------------------
# Image loading
# ---------------------------------------------------------------------------

def decode_data_uri(uri: str) -> bytes:
    """Return the payload of a ``data:`` URI.

    Raises
    ------
    ValueError
        If *uri* is not a well-formed data URI.
    """
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:"):
        raise ValueError("not a data URI")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"bad base64 payload: {exc}") from exc
    return unquote_to_bytes(payload)


def _read_image_bytes(source: str) -> bytes:
    if source.startswith("data:"):
        return decode_data_uri(source)
    from reportlab.lib.utils import open_for_read

    with open_for_read(source, "b") as handle:
        return handle.read()


class ReportLabRenderer:
    """Concrete :class:`DocumentRenderer` producing a one-page PDF.

    Parameters
    ----------
    image_loader:
        Callable returning the raw bytes of an image source.  Defaults
        to decoding data URIs and reading paths/URLs through ReportLab.
    """

    def __init__(self, image_loader: Callable[[str], bytes] | None = None) -> None:
        self._load_image: Callable[[str], bytes] = image_loader or _read_image_bytes

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def render(self, document: DocumentDescription, destination: Path) -> Path:
        """Write *document* as a PDF to *destination*.

        Raises
        ------
        ExportError
            If the page size is unknown or the PDF cannot be built or
            written.
        """
        rl = _import_reportlab()
        pagesize = _page_size(document.page_size, rl["pagesizes"])

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            template = rl["SimpleDocTemplate"](
                str(destination),
                pagesize=pagesize,
                leftMargin=PAGE_PADDING,
                rightMargin=PAGE_PADDING,
                topMargin=PAGE_PADDING,
                bottomMargin=PAGE_PADDING,
                title=document.title,
            )
            template.build(self._story(document, rl))
        except OSError as exc:
            raise ExportError(
                f"Cannot write {destination}: {exc}",
                hint="Check that the export directory is writable.",
            ) from exc
        except Exception as exc:
            raise ExportError(f"Unexpected PDF rendering error: {exc}") from exc

        return destination

    # ------------------------------------------------------------------
    # Story construction
    # ------------------------------------------------------------------

    def _story(self, document: DocumentDescription, rl: dict[str, Any]) -> list[Any]:
        title_style = rl["ParagraphStyle"](
            "CvTitle",
            fontName="Helvetica-Bold",
            fontSize=TITLE_FONT_SIZE,
            leading=TITLE_FONT_SIZE * 1.2,
            spaceAfter=TITLE_SPACE_AFTER,
        )
        text_style = rl["ParagraphStyle"](
            "CvText",
            fontName="Helvetica",
            fontSize=TEXT_FONT_SIZE,
            leading=TEXT_FONT_SIZE * 1.2,
            spaceAfter=TEXT_SPACE_AFTER,
        )

        story: list[Any] = [
            self._image_flowable(document.image.source, rl),
            rl["Spacer"](1, IMAGE_SPACE_AFTER),
        ]
        for block in document.lines:
            style = title_style if block.role == "title" else text_style
            story.append(rl["Paragraph"](_markup(block), style))
        return story

    def _image_flowable(self, source: str, rl: dict[str, Any]) -> Any:
        """Build the picture, falling back to the default image."""
        try:
            data = self._load_image(source)
            # ImageReader fails fast on bytes that are not an image.
            rl["ImageReader"](io.BytesIO(data))
        except Exception as exc:
            logger.warning(f"Could not load CV image, using the default: {exc}")
            data = decode_data_uri(DEFAULT_IMAGE)
        image = rl["Image"](io.BytesIO(data), width=IMAGE_SIZE, height=IMAGE_SIZE)
        image.hAlign = "LEFT"
        return image


def _markup(block: TextBlock) -> str:
    """Escape *block* text for a ReportLab paragraph, keeping line breaks."""
    return escape(block.rendered).replace("\n", "<br/>")


def _page_size(name: str, pagesizes: Any) -> tuple[float, float]:
    """Look up *name* (``"A4"``, ``"letter"``...) in ``reportlab.lib.pagesizes``."""
    size = getattr(pagesizes, name.upper(), None)
    if not isinstance(size, tuple):
        raise ExportError(
            f"Unknown page size: {name!r}",
            hint="Use a ReportLab page size name such as A4 or LETTER.",
        )
    return size
