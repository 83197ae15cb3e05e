from __future__ import annotations

from ordeal.domain.equipment import make_item
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome
from ordeal.services.debrief import (
    analyze_performance,
    build_lessons,
    identify_key_moments,
    missed_opportunities,
    pattern_lessons,
)
from tests.helpers.builders import build_decision, build_scenario, build_state


def _history(*decision_ids: str, **delta: float) -> tuple[DecisionOutcome, ...]:
    return tuple(
        DecisionOutcome(decision=build_decision(decision_id), immediate_effect="", metrics_change=MetricsDelta(**delta))
        for decision_id in decision_ids
    )


def test_shelter_neglect_in_harsh_weather() -> None:
    state = build_state(
        scenario=build_scenario(weather="storm"),
        metrics=PlayerMetrics(shelter=20),
        history=_history("scout", "scout", "rest", "call-out", "rest", "scout"),
        outcome="died",
    )
    lessons = pattern_lessons(state)
    assert any(lesson.startswith("Shelter Priority: You ignored shelter in harsh weather 3 times.") for lesson in lessons)


def test_fundamentals_lesson_when_nothing_else_applies() -> None:
    state = build_state(history=_history("rest"), outcome="died")
    assert pattern_lessons(state)[0].startswith("Survival Fundamentals")


def test_unused_fire_starter_is_a_missed_opportunity() -> None:
    state = build_state(equipment=(make_item("Lighter"),), history=_history("rest", "scout"))
    missed = missed_opportunities(state)
    assert any("never built a fire" in line for line in missed)


def test_lessons_start_with_end_reason_and_have_no_repeats() -> None:
    state = build_state(history=_history("rest"), outcome="died", end_reason="Fatal dehydration")
    lessons = build_lessons(state, "Fatal dehydration")
    assert lessons[0] == "Fatal dehydration"
    assert len(lessons) == len(set(lessons))
    assert all(lesson.strip() for lesson in lessons)


def test_missing_reason_is_dropped() -> None:
    lessons = build_lessons(build_state(history=_history("rest"), outcome="survived"), None)
    assert "" not in lessons


def test_performance_rewards_shelter_focus() -> None:
    state = build_state(history=_history("shelter", "fortify", "shelter", "rest", "rest"), outcome="survived")
    analysis = analyze_performance(state)
    assert "You prioritized protection from the elements" in analysis.strengths
    assert "You resisted the urge to move unnecessarily" in analysis.strengths
    assert "You understood the value of conserving energy" in analysis.strengths


def test_key_moments_are_capped_at_five() -> None:
    state = build_state(history=_history(*["panic-move"] * 7))
    moments = identify_key_moments(state)
    assert len(moments) == 5
    assert moments[0].impact == "critical"
    assert [moment.turn for moment in moments] == [1, 2, 3, 4, 5]


def test_early_shelter_is_a_positive_moment() -> None:
    moments = identify_key_moments(build_state(history=_history("shelter")))
    assert [(moment.turn, moment.impact) for moment in moments] == [(1, "positive")]
