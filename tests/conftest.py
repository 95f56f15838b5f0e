"""Shared pytest fixtures for target-dylibs tests."""

from __future__ import annotations

import pytest

from target_dylibs.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _quiet_logging():
    setup_logging("WARNING")


@pytest.fixture
def pkg_id() -> str:
    return "path+file:///work/app#0.1.0"
