"""Process exit codes returned by :func:`cv_studio.cli.app.main`."""

from __future__ import annotations

SUCCESS: int = 0

GENERAL_ERROR: int = 1
"""A :class:`~cv_studio.exceptions.CvStudioError` was reported, or doctor found a failure."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Any other exception reached :func:`cv_studio.cli.app.cli`."""
