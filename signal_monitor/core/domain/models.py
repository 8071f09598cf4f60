"""Domain models for the signal monitor."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from signal_monitor.core.exceptions import DataValidationError, InvalidRangeError

T = TypeVar("T")


class DeviationDirection(str, Enum):
    """Side of a reference range a value fell out of."""
    LOW = "low"
    HIGH = "high"


class HealthStatus(str, Enum):
    """Tri-level health of a monitored channel."""
    NOMINAL = "nominal"
    ALERT = "alert"
    ERROR = "error"


@dataclass(frozen=True)
class Range(Generic[T]):
    """Inclusive numeric interval [min, max].

    Bounds are checked once, at construction. Any ordered scalar with
    subtraction works (int, float, Decimal, Fraction).
    """

    min: T
    max: T

    def __post_init__(self) -> None:
        # NaN bounds fail here too, `<=` is never true for them
        if not self.min <= self.max:
            raise InvalidRangeError(self.min, self.max)

    @classmethod
    def new(cls, min: T, max: T) -> Range[T]:
        """Build a range, raising InvalidRangeError when min > max."""
        return cls(min, max)

    def contains(self, other: Range[T]) -> bool:
        """True when `other` lies entirely within this range (bounds inclusive)."""
        return self.min <= other.min and other.max <= self.max

    def size(self) -> T:
        return self.max - self.min

    def deviation(self, x: T) -> Optional[T]:
        """Signed distance of `x` outside the range, None when inside.

        Negative below `min`, positive above `max`.
        """
        if x < self.min:
            return x - self.min
        if x > self.max:
            return x - self.max
        return None


@dataclass(frozen=True)
class Sample(Generic[T]):
    """One scalar reading and the monotonic instant it was captured."""

    value: T
    time: float = field(default_factory=time.monotonic, init=False)

    @classmethod
    def new(cls, value: T) -> Sample[T]:
        return cls(value)

    def age(self) -> float:
        """Seconds elapsed since capture."""
        return time.monotonic() - self.time


@dataclass(frozen=True)
class Deviation:
    """Direction and signed magnitude of an excursion outside a range."""

    direction: DeviationDirection
    magnitude: float

    def __post_init__(self) -> None:
        if self.magnitude == 0:
            raise DataValidationError("Deviation magnitude cannot be zero")
        expected = DeviationDirection.LOW if self.magnitude < 0 else DeviationDirection.HIGH
        if self.direction != expected:
            raise DataValidationError(
                f"Deviation direction {self.direction.value} does not match magnitude {self.magnitude}",
                details={'direction': self.direction.value, 'magnitude': self.magnitude}
            )

    @classmethod
    def from_magnitude(cls, magnitude: float) -> Deviation:
        """Tag a signed magnitude: negative is LOW, positive is HIGH."""
        direction = DeviationDirection.LOW if magnitude < 0 else DeviationDirection.HIGH
        return cls(direction, magnitude)

    @classmethod
    def low(cls, magnitude: float) -> Deviation:
        return cls(DeviationDirection.LOW, magnitude)

    @classmethod
    def high(cls, magnitude: float) -> Deviation:
        return cls(DeviationDirection.HIGH, magnitude)

    @property
    def is_low(self) -> bool:
        return self.direction is DeviationDirection.LOW

    @property
    def is_high(self) -> bool:
        return self.direction is DeviationDirection.HIGH


@dataclass(frozen=True)
class State:
    """Classification of one reading.

    NOMINAL never carries a deviation; ALERT and ERROR always do.
    """

    status: HealthStatus
    value: float
    deviation: Optional[Deviation] = None

    def __post_init__(self) -> None:
        if self.status is HealthStatus.NOMINAL and self.deviation is not None:
            raise DataValidationError("Nominal state cannot carry a deviation")
        if self.status is not HealthStatus.NOMINAL and self.deviation is None:
            raise DataValidationError(f"{self.status.value.capitalize()} state requires a deviation")

    @classmethod
    def nominal(cls, value: float) -> State:
        return cls(HealthStatus.NOMINAL, value)

    @classmethod
    def alert(cls, value: float, deviation: Deviation) -> State:
        return cls(HealthStatus.ALERT, value, deviation)

    @classmethod
    def error(cls, value: float, deviation: Deviation) -> State:
        return cls(HealthStatus.ERROR, value, deviation)

    @property
    def is_nominal(self) -> bool:
        return self.status is HealthStatus.NOMINAL

    @property
    def is_alert(self) -> bool:
        return self.status is HealthStatus.ALERT

    @property
    def is_error(self) -> bool:
        return self.status is HealthStatus.ERROR

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'status': self.status.value, 'value': self.value}
        if self.deviation is not None:
            result['deviation'] = {
                'direction': self.deviation.direction.value,
                'magnitude': self.deviation.magnitude,
            }
        return result
