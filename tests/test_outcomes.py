"""Outcome resolution: roll adjustments, resolvers and outcome flags."""
from __future__ import annotations

import pytest

from ordeal.data.repositories import DecisionsRepository
from ordeal.domain.equipment import make_item
from ordeal.domain.metrics import PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome
from ordeal.services.outcomes import (
    RESOLVERS,
    apply_decision,
    heat_penalty,
    is_navigation_success,
    is_successful_signal,
    navigation_threshold,
    resolves,
    scale_energy_cost,
    success_bonus,
)
from tests.helpers.builders import FixedRNG, build_decision, build_scenario, build_state


def _past(decision_id: str) -> DecisionOutcome:
    return DecisionOutcome(decision=build_decision(decision_id), immediate_effect="")


def test_shelter_adds_full_gain_below_seventy() -> None:
    state = build_state(metrics=PlayerMetrics(shelter=40))
    outcome = apply_decision(build_decision("shelter"), state, FixedRNG(0.9))
    assert outcome.metrics_change.shelter == 25
    assert outcome.immediate_effect == "You gather materials and improve your shelter."


def test_shelter_gain_tapers_when_already_solid() -> None:
    state = build_state(metrics=PlayerMetrics(shelter=80))
    outcome = apply_decision(build_decision("shelter"), state, FixedRNG(0.9))
    assert outcome.metrics_change.shelter == 15


def test_untreated_water_can_schedule_sickness() -> None:
    untreated = make_item("Water bottle (untreated)")
    state = build_state(equipment=(untreated,), metrics=PlayerMetrics(hydration=30), turn_number=4)
    decision = build_decision("drink-untreated-water", energy_cost=2, risk_level=5, time_required=1)

    outcome = apply_decision(decision, state, FixedRNG(0.1, randint_value=3))

    assert len(outcome.delayed_effects) == 1
    effect = outcome.delayed_effects[0]
    assert effect.turn == 7
    assert effect.metrics_change.hydration == -25
    assert outcome.equipment_changes is not None
    assert outcome.equipment_changes.removed == ("Water bottle (untreated)",)
    assert [item.name for item in outcome.equipment_changes.added] == ["Water bottle (empty)"]


def test_untreated_water_is_safe_on_a_high_roll() -> None:
    state = build_state(equipment=(make_item("Water bottle (untreated)"),), metrics=PlayerMetrics(hydration=30))
    decision = build_decision("drink-untreated-water", energy_cost=2, risk_level=5, time_required=1)
    outcome = apply_decision(decision, state, FixedRNG(0.9))
    assert outcome.delayed_effects == ()


def test_panic_move_fall_is_critical() -> None:
    state = build_state(metrics=PlayerMetrics(morale=70), turn_number=6)
    decision = build_decision("panic-move", energy_cost=50, risk_level=9, time_required=4)
    outcome = apply_decision(decision, state, FixedRNG(0.1))
    assert outcome.decision_quality == "critical-error"
    assert outcome.metrics_change.injury_severity == 25
    assert [effect.turn for effect in outcome.delayed_effects] == [7]
    assert any(line.startswith("Consider: ") for line in outcome.consequences)


def test_unknown_decision_gets_neutral_outcome() -> None:
    outcome = apply_decision(build_decision("whittle-spoon"), build_state(), FixedRNG(0.5))
    assert outcome.immediate_effect == "You take action."


def test_resolver_ids_cannot_be_registered_twice() -> None:
    with pytest.raises(ValueError):
        resolves("shelter")(RESOLVERS["shelter"])


def test_success_bonus_tiers() -> None:
    assert success_bonus(85) == 0.15
    assert success_bonus(70) == 0.10
    assert success_bonus(50) == 0.05
    assert success_bonus(40) == 0.0
    assert success_bonus(20) == -0.08


def test_energy_cost_scaling() -> None:
    fresh = build_state()
    spent = build_state(metrics=PlayerMetrics(energy=25))
    assert scale_energy_cost(-25, 1, spent) == -25
    assert scale_energy_cost(15, 1, fresh) == pytest.approx(9)
    assert scale_energy_cost(5, 1, fresh) == 5
    assert scale_energy_cost(40, 7, spent) == pytest.approx(56)


def test_heat_penalty_in_the_desert_midday() -> None:
    scenario = build_scenario(environment="desert", weather="heat", temperature=38, time_of_day="midday")
    state = build_state(scenario=scenario)
    assert heat_penalty(20, state) == -8
    assert heat_penalty(10, state) == 0


def test_navigation_needs_late_turn_and_prior_attempts() -> None:
    decision = build_decision("search-trail", energy_cost=35, risk_level=5, time_required=3)
    history = (_past("search-trail"), _past("retrace-trail"))

    assert is_navigation_success(decision, build_state(history=history, turn_number=9), 0.9)
    assert not is_navigation_success(decision, build_state(history=history, turn_number=7), 0.99)
    assert not is_navigation_success(decision, build_state(history=history[:1], turn_number=9), 0.99)
    assert not is_navigation_success(build_decision("rest"), build_state(history=history, turn_number=9), 0.99)


def test_navigation_threshold_floor() -> None:
    assert navigation_threshold(2) == pytest.approx(0.85)
    assert navigation_threshold(10) == pytest.approx(0.70)


def test_signal_success_rules() -> None:
    whistle = build_decision("use-whistle")
    weak = build_state(metrics=PlayerMetrics(signal_effectiveness=50))
    strong = build_state(metrics=PlayerMetrics(signal_effectiveness=70))
    assert is_successful_signal(whistle, weak, 0.65)
    assert not is_successful_signal(whistle, weak, 0.45)
    assert is_successful_signal(whistle, strong, 0.45)
    assert is_successful_signal(build_decision("signal-fire"), weak, 0.55)


def test_signal_attempt_flags() -> None:
    state = build_state(equipment=(make_item("Whistle"),))
    outcome = apply_decision(build_decision("use-whistle", energy_cost=10), state, FixedRNG(0.9))
    assert outcome.was_signal_attempt
    assert outcome.was_successful_signal
    assert not outcome.was_navigation_success


def test_every_offered_decision_has_a_resolver() -> None:
    missing = {definition.id for definition in DecisionsRepository().all()} - set(RESOLVERS)
    assert not missing


def test_single_early_navigation_attempt_never_reaches_safety() -> None:
    decision = build_decision("search-trail", energy_cost=35, risk_level=5, time_required=3)
    state = build_state(history=(_past("search-trail"),), turn_number=3)

    assert not is_navigation_success(decision, state, 0.99)
    assert not apply_decision(decision, state, FixedRNG(0.99)).was_navigation_success


def test_good_decisions_teach_a_principle_only_sometimes() -> None:
    state = build_state(turn_number=5)
    shelter = build_decision("shelter")

    quiet = apply_decision(shelter, state, FixedRNG(0.9))
    taught = apply_decision(shelter, state, FixedRNG(0.5))

    assert quiet.decision_quality == taught.decision_quality == "good"
    assert not any(line.startswith("Survival principle: ") for line in quiet.consequences)
    assert f"Survival principle: {taught.survival_principle_alignment}" in taught.consequences


def test_poor_decisions_always_get_a_caution() -> None:
    state = build_state(scenario=build_scenario(weather="storm"))
    outcome = apply_decision(build_decision("descend", risk_level=7), state, FixedRNG(0.9))
    assert outcome.decision_quality == "poor"
    assert f"Consider: {outcome.survival_principle_alignment}" in outcome.consequences


def test_outcome_carries_an_explanation() -> None:
    state = build_state(scenario=build_scenario(weather="storm"))
    outcome = apply_decision(build_decision("descend", risk_level=7), state, FixedRNG(0.9))

    explanation = outcome.explanation
    assert explanation is not None
    assert explanation.outcome_type == "failure"
    assert explanation.summary.startswith(outcome.immediate_effect)
    assert explanation.lesson == outcome.survival_principle_alignment
    assert "Consider lower-risk options that conserve energy while improving position" in explanation.recommendations


def test_eating_describes_the_food_consumed() -> None:
    decision = build_decision("eat-food", energy_cost=2, time_required=1)

    supplies = build_state(equipment=(make_item("Emergency supplies"),))
    berries = build_state(equipment=(make_item("Berries (handful)"),))
    empty = build_state()

    assert apply_decision(decision, supplies, FixedRNG(0.5)).immediate_effect == (
        "You ration out some of your emergency supplies. They provide nourishment."
    )
    assert apply_decision(decision, berries, FixedRNG(0.5)).immediate_effect == (
        "You eat the berries. They provide nourishment."
    )
    assert apply_decision(decision, empty, FixedRNG(0.5)).immediate_effect == (
        "You scrape together what little food you can find."
    )
