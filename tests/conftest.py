"""Shared pytest fixtures and configuration for the cv-studio test suite.

Guidelines
----------
* No internet access in any test.
* questionary and Rich are mocked at the CLI boundary.
* Core tests run against an in-memory slot — no filesystem.
* Every test gets its own storage path; the user's home is never touched.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CV_STUDIO_STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setenv("CV_STUDIO_EXPORT_DIR", str(tmp_path / "exports"))
    for name in ("CV_STUDIO_STORAGE_KEY", "CV_STUDIO_LOG_LEVEL", "CV_STUDIO_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output as ``"LEVEL message"`` strings."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(f"{msg.record['level'].name} {msg.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)

