"""Custom exceptions for the signal monitor."""

from typing import Any, Dict, Optional


class SignalMonitorError(Exception):
    """Base exception for all signal monitor errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause


class InvalidRangeError(SignalMonitorError):
    """Raised when a range is built with min > max."""

    def __init__(self, min: Any, max: Any) -> None:
        self.min = min
        self.max = max
        self.predicate = "min <= max"
        super().__init__(
            f"invalid range: min:={min}, max:={max}, {self.predicate} is false!",
            details={'min': min, 'max': max, 'predicate': self.predicate}
        )


class NominalOutOfDestinationError(SignalMonitorError):
    """Raised when the nominal range is not contained in the destination range."""

    def __init__(self, nominal: Any, destination: Any) -> None:
        self.nominal = nominal
        self.destination = destination
        super().__init__(
            f"nominal:={nominal!r} is not contained in destination:={destination!r}",
            details={
                'nominal': {'min': nominal.min, 'max': nominal.max},
                'destination': {'min': destination.min, 'max': destination.max},
            }
        )


class DegenerateDomainError(SignalMonitorError):
    """Raised when mapping through a domain of zero size."""

    def __init__(self, domain: Any) -> None:
        self.domain = domain
        super().__init__(
            f"degenerate domain:={domain!r}, size is zero",
            details={'domain': {'min': domain.min, 'max': domain.max}}
        )


class DataValidationError(SignalMonitorError):
    """Raised when data validation fails."""
    pass


class ConfigurationError(SignalMonitorError):
    """Raised when configuration is invalid or missing."""
    pass


class MonitoringError(SignalMonitorError):
    """Raised when monitoring operations fail."""
    pass
