"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from cv_studio.core.models import DocumentDescription


class StorageSlot(Protocol):
    """Contract for string key-value persistence.

    Mirrors the ``getItem``/``setItem``/``removeItem`` surface of a
    browser's local storage.  Any object implementing these methods
    satisfies the protocol structurally.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored string for *key*, or ``None`` when absent.

        Raises
        ------
        StorageReadError
            When the backing store exists but cannot be read or decoded.
        """
        ...  # pragma: no cover

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises
        ------
        StorageWriteError
            When the backing store cannot be written.
        """
        ...  # pragma: no cover

    def remove_item(self, key: str) -> None:
        """Delete *key*; a no-op when it is absent.

        Raises
        ------
        StorageWriteError
            When the backing store cannot be written.
        """
        ...  # pragma: no cover


class DocumentRenderer(Protocol):
    """Contract for backends that paint a :class:`DocumentDescription`."""

    def render(self, document: DocumentDescription, destination: Path) -> Path:
        """Write *document* to *destination* and return the written path.

        Raises
        ------
        ExportError
            When the document cannot be produced.
        """
        ...  # pragma: no cover
