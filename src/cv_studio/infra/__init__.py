"""Infrastructure layer — external system integration.

This layer wraps the filesystem and ReportLab.  Every raw third-party
or OS exception must be caught here and re-raised as a
:class:`~cv_studio.exceptions.CvStudioError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from cv_studio.infra.file_slot import JsonFileSlot
from cv_studio.infra.memory_slot import MemorySlot
from cv_studio.infra.pdf_renderer import ReportLabRenderer

__all__: list[str] = [
    "JsonFileSlot",
    "MemorySlot",
    "ReportLabRenderer",
]
