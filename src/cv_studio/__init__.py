"""cv-studio — author, preview, store and export short CV records.

Records are validated on entry, persisted to a local key-value slot and
projected into a single-page PDF on demand.
"""

from cv_studio.version import __version__

__all__: list[str] = ["__version__"]
