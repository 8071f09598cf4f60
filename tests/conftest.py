"""
Shared test configuration.
Fixtures build the reference monitor used across the suite and keep the
process environment from leaking configuration into tests.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from signal_monitor.core.domain.models import Range  # noqa: E402
from signal_monitor.core.services.monitor import Monitor  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop SIGNAL_MONITOR_* variables so only the test's own overrides apply."""
    for key in list(os.environ):
        if key.startswith("SIGNAL_MONITOR_"):
            monkeypatch.delenv(key)


@pytest.fixture
def monitor() -> Monitor:
    """8-bit counts mapped onto [0, 1] with a healthy band of [0.2, 0.7]."""
    return Monitor.new(
        Range.new(0, 256),
        Range.new(0.0, 1.0),
        Range.new(0.2, 0.7),
    )
