"""In-process :class:`~cv_studio.core.protocols.StorageSlot`.

Nothing survives the process; used for ``--ephemeral`` sessions and as
a test double.
"""

from __future__ import annotations


class MemorySlot:
    """Dict-backed key-value slot."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
