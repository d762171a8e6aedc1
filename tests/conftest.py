"""Pytest configuration.

`CropState` is a QObject and its signal tests use pytest-qt's `qtbot`, so a
single `QApplication` is created for the session (offscreen platform) and
shut down at the end.

The project logger binds its handler to whatever `sys.stderr` is when it is
first set up; pytest swaps stderr per test, so the handler is re-bound before
each test.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import pytest

from crop_aspect.logger import setup_logger

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    # Import lazily so collection still works where Qt widgets are missing.
    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    global _APP
    # Keep a strong ref so it isn't GC'd mid-session.
    _APP = QApplication.instance() or QApplication([])


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    app = QApplication.instance()
    if app is None:
        return
    app.quit()
    app.processEvents()


@pytest.fixture(autouse=True)
def _project_logger():
    base = logging.getLogger("crop_aspect")
    for h in list(base.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is not sys.stderr:
            base.removeHandler(h)
    setup_logger()
    yield


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Location of a not-yet-written settings file."""
    return tmp_path / "settings.json"
