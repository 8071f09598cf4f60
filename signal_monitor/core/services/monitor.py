"""
Range mapping and health classification for a single channel
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from signal_monitor.core.domain.models import Deviation, Range, Sample, State
from signal_monitor.core.exceptions import (
    DataValidationError,
    DegenerateDomainError,
    NominalOutOfDestinationError,
)


def _as_float_range(r: Range) -> Range:
    return Range(float(r.min), float(r.max))


@dataclass(frozen=True)
class Monitor:
    """Maps raw domain readings into destination units and classifies them.

    The monitor holds no sample history. Callers pass the previous sample of
    the channel explicitly, so one instance can be shared by any number of
    threads.

    Args:
        domain: range of raw input values
        destination: range the inputs are rescaled into
        nominal: healthy sub-range of destination
        error_threshold: when set, a deviation larger than
            `error_threshold * nominal.size()` is an Error even on the first
            sample outside nominal
    """

    domain: Range
    destination: Range
    nominal: Range
    error_threshold: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.destination.contains(self.nominal):
            raise NominalOutOfDestinationError(self.nominal, self.destination)
        # Destination units are float, deviations mix mapped values with these bounds
        object.__setattr__(self, 'destination', _as_float_range(self.destination))
        object.__setattr__(self, 'nominal', _as_float_range(self.nominal))
        if self.error_threshold is not None and not self.error_threshold > 0:
            raise DataValidationError(
                f"error_threshold must be positive, got {self.error_threshold}",
                details={'error_threshold': self.error_threshold}
            )

    @classmethod
    def new(
        cls,
        domain: Range,
        destination: Range,
        nominal: Range,
        error_threshold: Optional[float] = None
    ) -> "Monitor":
        return cls(domain, destination, nominal, error_threshold)

    def _scale(self) -> float:
        domain_size = self.domain.size()
        if domain_size == 0:
            raise DegenerateDomainError(self.domain)
        return float(self.destination.size()) / float(domain_size)

    def map(self, x: Any) -> float:
        """Linearly rescale a domain value into destination units."""
        scale = self._scale()
        y = float(self.destination.min) + float(x - self.domain.min) * scale
        if not math.isfinite(y):
            raise DataValidationError(
                f"Mapped value of {x!r} is not finite",
                details={'value': x, 'mapped': y}
            )
        return y

    def map_array(self, values: Sequence[Any]) -> np.ndarray:
        """Vectorized `map` over a batch of domain values."""
        scale = self._scale()
        raw = np.asarray(values, dtype=np.float64)
        mapped = float(self.destination.min) + (raw - float(self.domain.min)) * scale
        finite = np.isfinite(mapped)
        if not np.all(finite):
            bad = np.flatnonzero(~finite).tolist()
            raise DataValidationError(
                f"Mapped values at positions {bad} are not finite",
                details={'positions': bad}
            )
        return mapped

    def classify(self, current: Sample, previous: Optional[Sample] = None) -> State:
        """Classify `current` against nominal, using `previous` for hysteresis.

        A missing previous sample counts as a reading inside nominal.
        """
        mapped_current = self.map(current.value)
        mapped_previous = self.map(previous.value) if previous is not None else None
        return self._classify_mapped(mapped_current, mapped_previous)

    def classify_series(
        self,
        values: Sequence[Any],
        previous: Optional[Sample] = None
    ) -> List[State]:
        """Classify raw readings in order, each against the one before it."""
        mapped = self.map_array(values)
        last = self.map(previous.value) if previous is not None else None
        states = []
        for y in mapped.tolist():
            states.append(self._classify_mapped(y, last))
            last = y
        return states

    def _classify_mapped(self, current: float, previous: Optional[float]) -> State:
        dev = self.nominal.deviation(current)
        if dev is None:
            return State.nominal(current)

        deviation = Deviation.from_magnitude(dev)
        if self._exceeds_threshold(dev):
            return State.error(current, deviation)

        previous_dev = self.nominal.deviation(previous) if previous is not None else None
        if previous_dev is not None and (previous_dev < 0) == (dev < 0):
            return State.error(current, deviation)
        return State.alert(current, deviation)

    def _exceeds_threshold(self, dev: float) -> bool:
        if self.error_threshold is None:
            return False
        return abs(dev) > self.error_threshold * float(self.nominal.size())
