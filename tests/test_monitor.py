"""
Unit tests for Monitor mapping and classification.
The reference monitor maps counts in [0, 256] onto [0, 1] with nominal [0.2, 0.7].
"""

import math
from decimal import Decimal

import numpy as np
import pytest

from signal_monitor.core.domain.models import DeviationDirection, HealthStatus, Range, Sample
from signal_monitor.core.exceptions import (
    DataValidationError,
    DegenerateDomainError,
    NominalOutOfDestinationError,
)
from signal_monitor.core.services.monitor import Monitor


def test_new_monitor_keeps_ranges(monitor: Monitor) -> None:
    assert monitor.domain == Range(0, 256)
    assert monitor.destination == Range(0.0, 1.0)
    assert monitor.nominal == Range(0.2, 0.7)
    assert monitor.error_threshold is None


@pytest.mark.parametrize("nominal", [(0.1, 0.7), (0.3, 1.1), (-0.5, 1.5)])
def test_nominal_outside_destination_is_rejected(nominal) -> None:
    with pytest.raises(NominalOutOfDestinationError) as exc:
        Monitor.new(Range(0, 255), Range(0.2, 1.0), Range(*nominal))

    assert exc.value.details['nominal'] == {'min': nominal[0], 'max': nominal[1]}
    assert exc.value.details['destination'] == {'min': 0.2, 'max': 1.0}


def test_nominal_error_message_names_both_ranges() -> None:
    with pytest.raises(NominalOutOfDestinationError) as exc:
        Monitor.new(Range(0, 255), Range(0.2, 1.0), Range(0.1, 0.7))

    assert str(exc.value) == (
        "nominal:=Range(min=0.1, max=0.7) is not contained in destination:=Range(min=0.2, max=1.0)"
    )


def test_nominal_equal_to_destination_is_accepted() -> None:
    Monitor.new(Range(0, 10), Range(0.0, 1.0), Range(0.0, 1.0))


def test_map(monitor: Monitor) -> None:
    assert monitor.map(128) == 0.5
    assert monitor.map(0) == 0.0
    assert monitor.map(256) == 1.0
    assert monitor.map(230) == pytest.approx(0.8984375)


def test_map_with_offset_ranges() -> None:
    m = Monitor.new(Range(100, 200), Range(-1.0, 1.0), Range(-0.5, 0.5))
    assert m.map(150) == pytest.approx(0.0)
    assert m.map(100) == pytest.approx(-1.0)


def test_degenerate_domain_fails_map_and_classify() -> None:
    m = Monitor.new(Range(5, 5), Range(0.0, 1.0), Range(0.2, 0.7))

    with pytest.raises(DegenerateDomainError) as exc:
        m.map(5)
    assert exc.value.details == {'domain': {'min': 5, 'max': 5}}

    with pytest.raises(DegenerateDomainError):
        m.classify(Sample.new(5), Sample.new(5))


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -math.inf])
def test_non_finite_readings_are_rejected(monitor: Monitor, value) -> None:
    with pytest.raises(DataValidationError):
        monitor.map(value)


def test_steady_reading_is_nominal(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(128), Sample.new(128))

    assert state.status is HealthStatus.NOMINAL
    assert state.value == 0.5
    assert state.deviation is None


def test_first_excursion_is_alert(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(230), Sample.new(128))

    assert state.status is HealthStatus.ALERT
    assert state.value == pytest.approx(0.8984375)
    assert state.deviation.direction is DeviationDirection.HIGH
    assert state.deviation.magnitude == pytest.approx(0.1984375)


def test_sustained_high_excursion_is_error(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(240), Sample.new(230))

    assert state.status is HealthStatus.ERROR
    assert state.deviation.direction is DeviationDirection.HIGH
    assert state.deviation.magnitude == pytest.approx(240 / 256 - 0.7)


def test_sustained_low_excursion_is_error(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(10), Sample.new(20))

    assert state.status is HealthStatus.ERROR
    assert state.deviation.direction is DeviationDirection.LOW
    assert state.deviation.magnitude == pytest.approx(10 / 256 - 0.2)
    assert state.deviation.magnitude < 0


def test_crossing_through_nominal_is_alert(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(10), Sample.new(250))

    assert state.status is HealthStatus.ALERT
    assert state.deviation.direction is DeviationDirection.LOW


def test_missing_previous_counts_as_nominal(monitor: Monitor) -> None:
    assert monitor.classify(Sample.new(250)).status is HealthStatus.ALERT
    assert monitor.classify(Sample.new(128)).status is HealthStatus.NOMINAL


def test_return_to_nominal(monitor: Monitor) -> None:
    state = monitor.classify(Sample.new(128), Sample.new(250))
    assert state.status is HealthStatus.NOMINAL


def test_classify_is_pure(monitor: Monitor) -> None:
    current, previous = Sample.new(240), Sample.new(230)
    assert monitor.classify(current, previous) == monitor.classify(current, previous)


def test_error_threshold_escalates_large_first_excursion() -> None:
    m = Monitor.new(Range(0, 256), Range(0.0, 1.0), Range(0.2, 0.7), error_threshold=0.5)

    # 0.25 past the nominal edge is the limit
    assert m.classify(Sample.new(255), Sample.new(128)).status is HealthStatus.ERROR
    assert m.classify(Sample.new(230), Sample.new(128)).status is HealthStatus.ALERT


@pytest.mark.parametrize("threshold", [0, -1.0])
def test_error_threshold_must_be_positive(threshold) -> None:
    with pytest.raises(DataValidationError):
        Monitor.new(Range(0, 256), Range(0.0, 1.0), Range(0.2, 0.7), error_threshold=threshold)


def test_map_array(monitor: Monitor) -> None:
    mapped = monitor.map_array([0, 128, 256])
    np.testing.assert_allclose(mapped, [0.0, 0.5, 1.0])


def test_map_array_rejects_non_finite(monitor: Monitor) -> None:
    with pytest.raises(DataValidationError) as exc:
        monitor.map_array([128, float("nan"), 64])
    assert exc.value.details == {'positions': [1]}


def test_classify_series_matches_pairwise_classification(monitor: Monitor) -> None:
    values = [128, 230, 240, 10, 5, 128]
    states = monitor.classify_series(values)

    assert [s.status for s in states] == [
        HealthStatus.NOMINAL,
        HealthStatus.ALERT,
        HealthStatus.ERROR,
        HealthStatus.ALERT,
        HealthStatus.ERROR,
        HealthStatus.NOMINAL,
    ]
    pairwise = [monitor.classify(Sample.new(values[0]))] + [
        monitor.classify(Sample.new(cur), Sample.new(prev))
        for prev, cur in zip(values, values[1:])
    ]
    assert states == pairwise


def test_classify_series_uses_previous_sample(monitor: Monitor) -> None:
    states = monitor.classify_series([240], previous=Sample.new(230))
    assert states[0].status is HealthStatus.ERROR


def test_decimal_destination_is_classified_in_float_units() -> None:
    m = Monitor.new(
        Range(0, 256),
        Range(Decimal("0"), Decimal("1")),
        Range(Decimal("0.2"), Decimal("0.7")),
    )

    assert m.destination == Range(0.0, 1.0)
    assert m.nominal == Range(0.2, 0.7)

    state = m.classify(Sample.new(230), Sample.new(128))
    assert state.status is HealthStatus.ALERT
    assert state.deviation.direction is DeviationDirection.HIGH
    assert state.deviation.magnitude == pytest.approx(0.1984375)
    assert m.classify(Sample.new(240), Sample.new(230)).status is HealthStatus.ERROR
