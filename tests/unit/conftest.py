"""Fixtures for the example-based unit tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clear_itwin_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's ITWIN_* environment out of settings-based tests."""
    for key in list(os.environ):
        if key.startswith("ITWIN_"):
            monkeypatch.delenv(key)
