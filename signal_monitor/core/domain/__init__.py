"""Core domain layer for the signal monitor."""

from signal_monitor.core.domain.models import (
    Deviation,
    DeviationDirection,
    HealthStatus,
    Range,
    Sample,
    State,
)
from signal_monitor.core.domain.history import SampleHistory

__all__ = [
    "Range",
    "Sample",
    "Deviation",
    "DeviationDirection",
    "State",
    "HealthStatus",
    "SampleHistory",
]
