from __future__ import annotations

import pytest

from ordeal.domain.metrics import MetricsDelta, PlayerMetrics


def test_clamped_forces_every_bound() -> None:
    metrics = PlayerMetrics(
        energy=140,
        body_temperature=25,
        hydration=-10,
        injury_severity=120,
        morale=-5,
        shelter=101,
        fire_quality=-1,
        signal_effectiveness=200,
        cumulative_risk=-3,
        survival_probability=100,
    ).clamped()

    assert metrics.energy == 100
    assert metrics.body_temperature == 30
    assert metrics.hydration == 0
    assert metrics.injury_severity == 100
    assert metrics.morale == 0
    assert metrics.shelter == 100
    assert metrics.fire_quality == 0
    assert metrics.signal_effectiveness == 100
    assert metrics.cumulative_risk == 0
    assert metrics.survival_probability == 99


def test_cumulative_risk_has_no_upper_clamp_but_displays_clamped() -> None:
    metrics = PlayerMetrics(cumulative_risk=130).clamped()
    assert metrics.cumulative_risk == 130
    assert metrics.clamped_risk == 100


def test_delta_addition_and_scaling() -> None:
    total = MetricsDelta(energy=-10, morale=5) + MetricsDelta(energy=-5, injury_severity=3)
    assert total == MetricsDelta(energy=-15, morale=5, injury_severity=3)
    assert total.scaled(2) == MetricsDelta(energy=-30, morale=10, injury_severity=6)


def test_delta_as_dict_omits_untouched_fields() -> None:
    assert MetricsDelta(hydration=-2).as_dict() == {"hydration": -2}
    assert MetricsDelta().is_zero


def test_from_mapping_rejects_unknown_names() -> None:
    assert MetricsDelta.from_mapping({"energy": 4}).energy == 4
    with pytest.raises(ValueError):
        MetricsDelta.from_mapping({"stamina": 4})


def test_with_delta_does_not_clamp() -> None:
    updated = PlayerMetrics(energy=95).with_delta(MetricsDelta(energy=20))
    assert updated.energy == 115
