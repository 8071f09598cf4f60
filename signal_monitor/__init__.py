"""Signal Monitor - single-channel health classification of scalar readings.

Readings from a measured domain (e.g. raw sensor counts) are rescaled into a
normalized destination range and classified against a nominal sub-range as
Nominal, Alert (new excursion) or Error (sustained excursion), annotated with
the direction and magnitude of the deviation.

Architecture:
- core: immutable Range/Sample/State values and the stateless Monitor
- application: per-channel history and logging around the Monitor
- config: pydantic settings loaded from INI files and environment variables
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from signal_monitor.core.domain.models import (
    Range,
    Sample,
    Deviation,
    DeviationDirection,
    State,
    HealthStatus,
)
from signal_monitor.core.domain.history import SampleHistory
from signal_monitor.core.services.monitor import Monitor
from signal_monitor.core.exceptions import (
    SignalMonitorError,
    InvalidRangeError,
    NominalOutOfDestinationError,
    DegenerateDomainError,
    DataValidationError,
    ConfigurationError,
    MonitoringError,
)

__all__ = [
    "Range",
    "Sample",
    "Deviation",
    "DeviationDirection",
    "State",
    "HealthStatus",
    "SampleHistory",
    "Monitor",
    "SignalMonitorError",
    "InvalidRangeError",
    "NominalOutOfDestinationError",
    "DegenerateDomainError",
    "DataValidationError",
    "ConfigurationError",
    "MonitoringError",
]
