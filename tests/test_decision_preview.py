from __future__ import annotations

import pytest

from ordeal.domain.metrics import PlayerMetrics
from ordeal.services.decision_preview import (
    assess_risk,
    condition_multiplier,
    effort_level,
    environment_multiplier,
    preview_decision,
    success_label,
)
from tests.helpers.builders import build_decision, build_scenario, build_state


def test_rested_player_builds_shelter_cheaply() -> None:
    preview = preview_decision(build_decision("shelter", energy_cost=20), build_state())

    assert preview.environment_multiplier == pytest.approx(1.0)
    assert preview.condition_multiplier == pytest.approx(0.6)
    assert preview.energy_change == -12
    assert preview.hydration_change == -1
    assert preview.temperature_change == 0
    assert preview.success_probability == pytest.approx(0.99)
    assert preview.risk_level == "safe"
    assert preview.success_label == "VERY LIKELY"
    assert preview.effort == "light"
    assert preview.warnings == ()


def test_exhausted_storm_navigation_is_flagged_critical() -> None:
    scenario = build_scenario(weather="storm", temperature=-5, wind_speed=35, time_of_day="night")
    state = build_state(
        scenario=scenario,
        metrics=PlayerMetrics(energy=25, hydration=35, body_temperature=35.5),
    )
    decision = build_decision("navigate-camp", energy_cost=30, risk_level=7, time_required=4)

    preview = preview_decision(decision, state)

    assert preview.environment_multiplier == pytest.approx(2.05)
    assert preview.condition_multiplier == pytest.approx(1.6)
    assert preview.energy_change == -98
    assert preview.post_energy == 0
    assert preview.hydration_change == -12
    assert preview.post_temperature == pytest.approx(35.0)
    assert preview.success_probability == pytest.approx(0.05)
    assert preview.risk_level == "critical"
    assert preview.effort == "extreme"
    assert preview.warnings == (
        "CRITICAL: Energy would drop to collapse risk levels",
        "WARNING: Hydration would become critically low",
        "CAUTION: Body temperature dropping into danger zone",
        "VERY RISKY: Less than 30% chance of success",
    )
    assert preview.critical_thresholds == (
        "Crosses CRITICAL energy threshold (20)",
        "Crosses CRITICAL hydration threshold (25)",
    )


def test_recovery_actions_raise_energy() -> None:
    state = build_state(metrics=PlayerMetrics(energy=50))
    preview = preview_decision(build_decision("rest", energy_cost=-20, time_required=3), state)
    assert preview.energy_change == 20
    assert preview.post_energy == 70
    assert preview.success_probability == pytest.approx(0.99)


def test_safe_is_reachable_ahead_of_manageable() -> None:
    assert assess_risk(0.8, 10, 80, 80, 37) == "safe"
    assert assess_risk(0.6, 10, 80, 80, 37) == "manageable"
    assert assess_risk(0.45, 10, 80, 80, 37) == "risky"
    assert assess_risk(0.2, 45, 80, 80, 37) == "dangerous"


def test_multipliers_respond_to_conditions() -> None:
    dusk = build_state(scenario=build_scenario(weather="rain", temperature=5, time_of_day="dusk"))
    assert environment_multiplier(dusk) == pytest.approx(1.55)
    assert condition_multiplier(PlayerMetrics(energy=60, hydration=45, injury_severity=40)) == pytest.approx(1.35)
    assert condition_multiplier(PlayerMetrics()) == pytest.approx(0.6)


def test_labels() -> None:
    assert [success_label(p) for p in (0.9, 0.75, 0.55, 0.35, 0.1)] == [
        "VERY LIKELY",
        "LIKELY",
        "CHALLENGING",
        "RISKY",
        "VERY RISKY",
    ]
    assert [effort_level(c) for c in (-10, -30, -45)] == ["light", "moderate", "extreme"]
