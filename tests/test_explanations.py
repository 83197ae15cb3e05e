from __future__ import annotations

from typing import Tuple

from ordeal.domain.decisions import Decision
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics
from ordeal.domain.state import GameState
from ordeal.services.explanations import explain_outcome
from tests.helpers.builders import build_decision, build_scenario, build_state


def _night_storm_navigation() -> Tuple[Decision, GameState, MetricsDelta]:
    scenario = build_scenario(weather="storm", temperature=2, wind_speed=20, time_of_day="night")
    state = build_state(scenario=scenario, metrics=PlayerMetrics(energy=30, shelter=10))
    decision = build_decision(
        "navigate-camp", text="Navigate back to camp", energy_cost=40, risk_level=7, time_required=4
    )
    change = MetricsDelta(energy=-50, hydration=-6, cumulative_risk=20)
    return decision, state, change


def test_exhausting_failure_is_explained_as_critical() -> None:
    decision, state, change = _night_storm_navigation()

    explanation = explain_outcome(decision, state, change, "You stumble through the dark.", "poor", "Stay put.")

    assert explanation.outcome_type == "failure"
    assert explanation.risk_assessment == "critical"
    assert explanation.summary == (
        "You stumble through the dark. This was an EXTREMELY dangerous decision with your current condition."
    )
    assert explanation.lesson == "Stay put."
    assert set(explanation.breakdowns) == {"energy", "hydration", "cumulative_risk"}


def test_narrative_walks_through_conditions_and_result() -> None:
    decision, state, change = _night_storm_navigation()
    narrative = explain_outcome(decision, state, change, "", "poor").narrative

    assert narrative.startswith("You attempted to navigate back to camp in severe whiteout conditions.")
    assert "This 4-hour effort" in narrative
    assert "already low (30/100)" in narrative
    assert "The freezing temperature (2°C) and 20 km/h wind" in narrative
    assert "The attempt did not succeed" in narrative
    assert "significantly increased your overall danger level" in narrative


def test_energy_breakdown_separates_base_weather_and_condition() -> None:
    decision, state, change = _night_storm_navigation()
    energy = explain_outcome(decision, state, change, "", "poor").breakdowns["energy"]

    assert energy.final_change == -50
    assert [(reason.amount, reason.category) for reason in energy.reasons] == [
        (-40, "base"),
        (-34, "environmental"),
        (-24, "condition"),
    ]
    assert energy.reasons[0].reason == "Extreme navigation effort base energy requirement"
    assert energy.calculation == "Base 40 x 1.85 environment x 1.20 condition = 50"


def test_hydration_and_risk_breakdowns() -> None:
    decision, state, change = _night_storm_navigation()
    breakdowns = explain_outcome(decision, state, change, "", "poor").breakdowns

    assert [reason.amount for reason in breakdowns["hydration"].reasons] == [-2, -6, -6]
    assert [reason.amount for reason in breakdowns["cumulative_risk"].reasons] == [12, 10]


def test_recommendations_follow_the_situation() -> None:
    decision, state, change = _night_storm_navigation()
    recommendations = explain_outcome(decision, state, change, "", "poor").recommendations

    assert len(recommendations) == 5
    assert recommendations[0].startswith("Rest to restore energy above 60")
    assert recommendations[1].startswith("Wait for clearer weather")
    assert recommendations[2].startswith("Improve shelter before risking travel")
    assert recommendations[3].startswith("Consider lower-risk options")
    assert recommendations[4].startswith("Avoid navigation and travel at night")


def test_sound_shelter_work_reads_as_safe() -> None:
    state = build_state()
    change = MetricsDelta(shelter=25, morale=5)

    explanation = explain_outcome(build_decision("shelter"), state, change, "You improve your shelter.", "excellent")

    assert explanation.outcome_type == "success"
    assert explanation.risk_assessment == "safe"
    assert explanation.summary.endswith("This was a sound decision that improved your situation.")
    assert explanation.breakdowns["morale"].reasons[0].reason == "Success and sense of accomplishment"
    assert explanation.recommendations == ()


def test_recovery_is_not_broken_down_as_a_cost() -> None:
    rest = build_decision("rest", energy_cost=-20, time_required=3)
    explanation = explain_outcome(rest, build_state(), MetricsDelta(energy=20), "You rest.", "good")

    energy = explanation.breakdowns["energy"]
    assert energy.final_change == 20
    assert [reason.reason for reason in energy.reasons] == ["Recovery from rest"]
    assert explanation.outcome_type == "partial-success"
    assert explanation.summary == "You rest. The outcome was mixed."
