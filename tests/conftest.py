"""Shared pytest fixtures for msgguard tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from msgguard.config.settings import GuardSettings, reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test from an empty directory with no MSGGUARD_* env vars.

    Keeps a developer's own msgguard.toml or environment out of the
    default settings the validators pick up.
    """
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("MSGGUARD_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> GuardSettings:
    """Default settings, independent of any config file."""
    return GuardSettings()


@pytest.fixture
def ctx() -> dict[str, Any]:
    """Request context carrying an authenticated caller."""
    return {"caller_id": "caller-1"}
