"""Caller-owned sample history for a single channel."""

from collections import deque
from typing import Deque, Iterator, Optional

from signal_monitor.core.domain.models import Sample
from signal_monitor.core.exceptions import DataValidationError


class SampleHistory:
    """Ring buffer of the most recent samples of one channel, newest last.

    Not synchronized: callers sharing a history across threads must serialize
    access themselves.
    """

    def __init__(self, depth: int = 2):
        if depth < 2:
            raise DataValidationError(
                f"History depth must be at least 2, got {depth}",
                details={'depth': depth}
            )
        self.depth = depth
        self._samples: Deque[Sample] = deque(maxlen=depth)

    def push(self, sample: Sample) -> None:
        self._samples.append(sample)

    @property
    def current(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None

    @property
    def previous(self) -> Optional[Sample]:
        return self._samples[-2] if len(self._samples) >= 2 else None

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)
