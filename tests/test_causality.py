from __future__ import annotations

from ordeal.domain.causality import ThresholdCrossing, detect_crossing, detect_crossings
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome
from ordeal.services.causality_tracker import (
    alternative_path,
    build_causality_chain,
    fatal_metric,
    identify_root_cause,
    step_severity,
)
from tests.helpers.builders import build_decision, build_state


def _turn(decision_id: str, **change: float) -> DecisionOutcome:
    return DecisionOutcome(
        decision=build_decision(decision_id), immediate_effect="", metrics_change=MetricsDelta(**change)
    )


def test_only_the_most_severe_level_is_reported() -> None:
    assert detect_crossing("energy", 60, 5) == ("fatal", 10)
    assert detect_crossing("energy", 60, 45) == ("danger", 50)
    assert detect_crossing("energy", 50, 45) is None
    assert detect_crossing("injury_severity", 20, 55) == ("danger", 50)


def test_body_temperature_crosses_both_ways() -> None:
    assert detect_crossing("body_temperature", 36.0, 34.5) == ("danger", 35)
    assert detect_crossing("body_temperature", 37.0, 38.2) == ("danger", 38)
    assert detect_crossing("body_temperature", 37.0, 37.2) is None


def test_crossings_carry_the_decision() -> None:
    crossings = detect_crossings(
        PlayerMetrics(energy=75, hydration=80),
        PlayerMetrics(energy=65, hydration=28),
        turn=4,
        decision_id="scout",
        decision_text="Scout",
    )
    assert [(c.metric, c.level) for c in crossings] == [("energy", "warning"), ("hydration", "critical")]
    assert all(c.turn == 4 and c.decision_id == "scout" for c in crossings)


def test_first_danger_crossing_is_the_root_cause() -> None:
    danger = ThresholdCrossing(2, "energy", 55, 45, 50, "danger", "scout", "Scout")
    state = build_state(
        history=(_turn("rest", energy=-2), _turn("scout", energy=-12), _turn("descend", energy=-30)),
        threshold_crossings=(danger,),
    )
    assert identify_root_cause(state, "energy") == 2


def test_root_cause_falls_back_to_the_worst_turn() -> None:
    state = build_state(history=(_turn("rest", injury_severity=-5), _turn("panic-move", injury_severity=25)))
    assert identify_root_cause(state, "injury_severity") == 2
    assert identify_root_cause(build_state(), "energy") is None


def test_fatal_metric_prefers_the_death_reason() -> None:
    crossing = ThresholdCrossing(3, "energy", 20, 8, 10, "fatal")
    state = build_state(threshold_crossings=(crossing,))
    assert fatal_metric(state, "Severe hypothermia") == "body_temperature"
    assert fatal_metric(state, "Your condition deteriorated beyond recovery.") == "energy"
    assert fatal_metric(build_state(), "Your condition deteriorated beyond recovery.") is None


def test_step_severity_scales_with_change() -> None:
    warning = ThresholdCrossing(1, "energy", 75, 65, 70, "warning")
    assert step_severity(-3, warning) == "medium"
    assert step_severity(-20, None) == "high"
    assert step_severity(-10, None) == "medium"
    assert step_severity(-2, None) == "low"


def test_alternative_path_depends_on_metric_and_direction() -> None:
    cold, _ = alternative_path("body_temperature", "scout", 33.0)
    heat, _ = alternative_path("body_temperature", "scout", 40.5)
    assert cold == "Neglected shelter and fire in freezing temperatures"
    assert heat == "Overexertion in extreme heat"

    _, after_navigating = alternative_path("energy", "navigate-camp", 2)
    _, after_resting = alternative_path("energy", "rest", 2)
    assert after_navigating[-1] == "Wait for better conditions before attempting navigation"
    assert len(after_resting) == 3


def test_chain_skips_turns_that_left_the_metric_alone() -> None:
    history = (_turn("rest", energy=5), _turn("scout", energy=-20), _turn("signal-fire"), _turn("descend", energy=-40))
    state = build_state(history=history, metrics=PlayerMetrics(energy=2), turn_number=5)

    chain = build_causality_chain(state, "Fatal exhaustion")

    assert chain is not None
    assert chain.root_turn == 4
    assert [step.decision_id for step in chain.cascade] == ["descend"]
