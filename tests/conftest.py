# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from xcp.config.settings import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop XCP_* variables from the environment and reset the settings cache."""
    for key in list(os.environ):
        if key.upper().startswith("XCP_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
