"""
Channel monitoring use case for the signal monitor
"""

import logging
import threading
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from signal_monitor.config.settings import ChannelSettings
from signal_monitor.core.domain.history import SampleHistory
from signal_monitor.core.domain.models import HealthStatus, Sample, State
from signal_monitor.core.exceptions import SignalMonitorError
from signal_monitor.core.services.monitor import Monitor
from signal_monitor.utils.logger import log_performance

logger = logging.getLogger(__name__)


class ChannelMonitoringUseCase:
    """Feeds the readings of one channel through a shared Monitor.

    Owns the channel's sample history and serializes access to it, so
    several producers may report readings for the same channel.
    """

    def __init__(self, monitor: Monitor, channel_name: str = "channel", history_depth: int = 2):
        self.monitor = monitor
        self.channel_name = channel_name
        self.history = SampleHistory(history_depth)
        self.last_state: Optional[State] = None
        self._counts: Counter = Counter()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: ChannelSettings) -> "ChannelMonitoringUseCase":
        return cls(settings.build_monitor(), settings.name, settings.history_depth)

    def observe(self, value: Any) -> State:
        """Capture a reading and classify it against the previous one"""
        with self._lock:
            sample = Sample.new(value)
            previous = self.history.current
            try:
                state = self.monitor.classify(sample, previous)
            except SignalMonitorError as e:
                logger.error(f"[{self.channel_name}] Failed to classify reading {value!r}: {e}")
                raise
            self.history.push(sample)
            self._record(state)
            return state

    @log_performance
    def observe_series(self, values: Sequence[Any]) -> List[State]:
        """Classify a batch of readings in arrival order"""
        samples = [Sample.new(value) for value in values]
        with self._lock:
            previous = self.history.current
            try:
                states = self.monitor.classify_series([s.value for s in samples], previous)
            except SignalMonitorError as e:
                logger.error(f"[{self.channel_name}] Failed to classify {len(samples)} readings: {e}")
                raise
            for sample, state in zip(samples, states):
                self.history.push(sample)
                self._record(state)
            return states

    def _record(self, state: State) -> None:
        previous_status = self.last_state.status if self.last_state else None
        self.last_state = state
        self._counts[state.status] += 1

        if state.status == previous_status:
            logger.debug(f"[{self.channel_name}] {state.status.value}: {state.value:.6g}")
            return

        if state.is_error:
            logger.error(
                f"[{self.channel_name}] Sustained {state.deviation.direction.value} deviation "
                f"{state.deviation.magnitude:+.6g} at {state.value:.6g}"
            )
        elif state.is_alert:
            logger.warning(
                f"[{self.channel_name}] {state.deviation.direction.value.capitalize()} excursion "
                f"{state.deviation.magnitude:+.6g} at {state.value:.6g}"
            )
        elif previous_status is not None:
            logger.info(f"[{self.channel_name}] Back to nominal at {state.value:.6g}")

    def reset(self) -> None:
        """Forget the channel history and statistics"""
        with self._lock:
            self.history.clear()
            self.last_state = None
            self._counts.clear()
            logger.info(f"[{self.channel_name}] Channel history reset")

    def get_channel_status(self) -> Dict[str, Any]:
        """Get current channel status"""
        with self._lock:
            return {
                'name': self.channel_name,
                'last_state': self.last_state.to_dict() if self.last_state else None,
                'samples_observed': sum(self._counts.values()),
                'counts': {status.value: self._counts[status] for status in HealthStatus},
                'domain': (self.monitor.domain.min, self.monitor.domain.max),
                'destination': (self.monitor.destination.min, self.monitor.destination.max),
                'nominal': (self.monitor.nominal.min, self.monitor.nominal.max),
            }
