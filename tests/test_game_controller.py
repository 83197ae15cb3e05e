"""Game controller is UI-agnostic and drives a run end to end."""
from __future__ import annotations

from dataclasses import replace

import pytest

from ordeal.core.rng import RNG
from ordeal.data.knowledge_store import InMemoryKnowledgeStore
from ordeal.domain.equipment import make_item
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome, DelayedEffect
from ordeal.services.controllers import GameController
from ordeal.services.knowledge_tracker import KnowledgeTracker
from tests.helpers.builders import FixedRNG, build_decision, build_scenario


def _build_controller(rng=None) -> tuple[GameController, KnowledgeTracker]:
    tracker = KnowledgeTracker(InMemoryKnowledgeStore())
    return GameController(rng or RNG(42), knowledge_tracker=tracker), tracker


def test_new_game_starts_active_with_a_session() -> None:
    controller, tracker = _build_controller()
    state = controller.create_new_game()

    assert state.is_active
    assert state.turn_number == 1
    assert state.game_id.startswith("game")
    assert state.current_environment == state.scenario.environment
    assert tracker.get_current_session_principles() == []


def test_supplied_loadout_is_used() -> None:
    controller, _ = _build_controller()
    equipment = (make_item("Whistle"), make_item("Knife"))
    state = controller.create_new_game(build_scenario(), equipment)
    assert state.equipment == equipment


def test_excellent_shelter_turn() -> None:
    controller, tracker = _build_controller(FixedRNG(0.5))
    state = controller.create_new_game(build_scenario(), ())

    next_state = controller.make_decision(state, build_decision("shelter"))

    assert next_state.turn_number == 2
    assert len(next_state.history) == 1
    assert next_state.principle_alignment_score == 58
    assert len(next_state.good_decisions) == 1
    assert len(next_state.discovered_principles) == 1
    assert next_state.last_outcome is not None
    assert any(line.startswith("New principle discovered: ") for line in next_state.last_outcome.consequences)
    assert tracker.get_current_session_principles() == list(next_state.discovered_principles)
    assert next_state.metrics.shelter > state.metrics.shelter


def test_time_advances_with_the_decision() -> None:
    controller, _ = _build_controller(FixedRNG(0.5))
    state = controller.create_new_game(build_scenario(time_of_day="morning"), ())
    next_state = controller.make_decision(state, build_decision("gather-firewood", time_required=4))
    assert next_state.current_time_of_day == "midday"
    assert next_state.hours_elapsed == 4


def test_delayed_effects_land_on_their_turn() -> None:
    controller, _ = _build_controller(FixedRNG(0.5))
    state = controller.create_new_game(build_scenario(), ())
    state = replace(state, metrics=PlayerMetrics(hydration=60), turn_number=3)
    sickness = DelayedEffect(turn=3, effect="Stomach cramps grip you.", metrics_change=MetricsDelta(hydration=-25))
    earlier = DecisionOutcome(decision=build_decision("drink-untreated-water"), immediate_effect="", delayed_effects=(sickness,))

    with_effect = controller.make_decision(replace(state, history=(earlier,)), build_decision("rest", energy_cost=-25))
    without_effect = controller.make_decision(
        replace(state, history=(replace(earlier, delayed_effects=()),)), build_decision("rest", energy_cost=-25)
    )

    assert "Stomach cramps grip you." in with_effect.last_outcome.consequences
    assert without_effect.metrics.hydration - with_effect.metrics.hydration == pytest.approx(25)


def test_ended_game_is_returned_unchanged() -> None:
    controller, _ = _build_controller()
    state = replace(controller.create_new_game(), status="ended", outcome="died")
    assert controller.make_decision(state, build_decision("rest")) is state
    assert controller.get_available_decisions(state) == []


def test_a_full_run_always_ends() -> None:
    controller, tracker = _build_controller(RNG(7))
    state = controller.create_new_game()

    for _ in range(30):
        if not state.is_active:
            break
        decisions = controller.get_available_decisions(state)
        assert 1 <= len(decisions) <= 6
        state = controller.make_decision(state, decisions[0])

    assert state.status == "ended"
    assert state.outcome in ("survived", "barely_survived", "died")
    assert state.lessons
    assert len(state.key_moments) <= 5
    assert tracker.get_total_stats().total_sessions == 1


def test_same_seed_same_run() -> None:
    def play(seed: int) -> list[str]:
        controller, _ = _build_controller(RNG(seed))
        state = controller.create_new_game()
        taken = []
        while state.is_active:
            decision = controller.get_available_decisions(state)[-1]
            taken.append(decision.id)
            state = controller.make_decision(state, decision)
        return taken

    assert play(11) == play(11)


def test_exhausted_night_storm_leads_with_critical_moments_and_no_panic() -> None:
    controller, _ = _build_controller(FixedRNG(0.5))
    scenario = build_scenario(environment="mountains", weather="storm", time_of_day="night")
    state = controller.create_new_game(scenario, ())
    exhausted = replace(state, metrics=PlayerMetrics(energy=20, morale=30), turn_number=5)

    ids = [decision.id for decision in controller.get_available_decisions(exhausted)]

    assert ids[0] == "brace-for-storm"
    assert "panic-move" not in ids
    later = replace(exhausted, turn_number=6)
    assert "panic-move" not in [decision.id for decision in controller.get_available_decisions(later)]


def test_threshold_crossings_are_recorded_with_their_decision() -> None:
    controller, _ = _build_controller(FixedRNG(0.5))
    state = controller.create_new_game(build_scenario(), ())
    state = replace(state, metrics=PlayerMetrics(hydration=51))

    next_state = controller.make_decision(state, build_decision("whittle-spoon", text="Whittle a spoon"))

    crossing = next_state.threshold_crossings[-1]
    assert (crossing.metric, crossing.level, crossing.threshold) == ("hydration", "danger", 50)
    assert (crossing.turn, crossing.decision_id, crossing.decision_text) == (1, "whittle-spoon", "Whittle a spoon")
    assert next_state.causality_chain is None


def test_death_is_traced_back_to_its_root_decision() -> None:
    controller, _ = _build_controller(FixedRNG(0.5))
    state = controller.create_new_game(build_scenario(), ())
    sickness = DelayedEffect(turn=3, effect="Stomach cramps grip you.", metrics_change=MetricsDelta(hydration=-25))
    history = (
        DecisionOutcome(
            decision=build_decision("drink-untreated-water"),
            immediate_effect="",
            metrics_change=MetricsDelta(hydration=-30),
            delayed_effects=(sickness,),
        ),
        DecisionOutcome(decision=build_decision("rest"), immediate_effect="", metrics_change=MetricsDelta(hydration=-5)),
    )
    state = replace(state, metrics=PlayerMetrics(hydration=20), turn_number=3, history=history)

    ended = controller.make_decision(state, build_decision("whittle-spoon"))

    assert (ended.outcome, ended.end_reason) == ("died", "Fatal dehydration")
    fatal = ended.threshold_crossings[-1]
    assert (fatal.metric, fatal.level, fatal.turn) == ("hydration", "fatal", 3)

    chain = ended.causality_chain
    assert chain is not None
    assert chain.fatal_metric == "hydration"
    assert (chain.root_turn, chain.root_decision_id) == (1, "drink-untreated-water")
    assert [step.turn for step in chain.cascade] == [1, 2, 3]
    assert [step.severity for step in chain.cascade] == ["high", "low", "critical"]
    assert chain.pattern == "Delayed water-finding until critical dehydration"
    assert ended.lessons[1].startswith('Critical Mistake (Turn 1): "Drink untreated water"')
