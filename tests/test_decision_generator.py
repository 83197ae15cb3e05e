from __future__ import annotations

from ordeal.data.repositories import DecisionsRepository
from ordeal.domain.equipment import make_item
from ordeal.domain.metrics import PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome
from ordeal.services.decision_generator import MAX_DECISIONS, eligible_definitions, generate_decisions
from tests.helpers.builders import build_decision, build_scenario, build_state

_repo = DecisionsRepository()


def _eligible_ids(state) -> set[str]:
    return {definition.id for definition in eligible_definitions(state, _repo)}


def _taken(*decision_ids: str) -> tuple[DecisionOutcome, ...]:
    return tuple(DecisionOutcome(decision=build_decision(decision_id), immediate_effect="") for decision_id in decision_ids)


def test_panic_move_needs_energy_to_panic_with() -> None:
    drained = build_state(metrics=PlayerMetrics(energy=20, morale=30), turn_number=6)
    rested = build_state(metrics=PlayerMetrics(energy=60, morale=30), turn_number=6)
    assert "panic-move" not in _eligible_ids(drained)
    assert "panic-move" in _eligible_ids(rested)


def test_at_most_six_decisions() -> None:
    equipment = tuple(make_item(name) for name in ("Whistle", "Signal mirror", "Flashlight", "Knife", "Energy bar"))
    state = build_state(equipment=equipment, metrics=PlayerMetrics(injury_severity=30))
    assert len(_eligible_ids(state)) > MAX_DECISIONS
    assert len(generate_decisions(state, _repo)) == MAX_DECISIONS


def test_critical_moments_come_first() -> None:
    state = build_state(scenario=build_scenario(weather="storm"), turn_number=5)
    decisions = generate_decisions(state, _repo)
    assert decisions[0].id == "brace-for-storm"


def test_environment_decisions_lead_the_list() -> None:
    decisions = generate_decisions(build_state(scenario=build_scenario(environment="coast")), _repo)
    assert decisions[0].id == "shelter"
    assert decisions[0].text == "Build shelter above tide line"


def test_no_duplicate_ids() -> None:
    ids = [decision.id for decision in generate_decisions(build_state(), _repo)]
    assert len(ids) == len(set(ids))


def test_ended_game_offers_nothing() -> None:
    assert generate_decisions(build_state(status="ended"), _repo) == []


def test_cascading_decision_requires_prior_actions_once() -> None:
    metrics = PlayerMetrics(shelter=60, fire_quality=40)
    ready = build_state(metrics=metrics, history=_taken("shelter", "start-fire-lighter"))
    done = build_state(metrics=metrics, history=_taken("shelter", "start-fire-lighter", "establish-base-camp"))
    missing_fire = build_state(metrics=metrics, history=_taken("shelter"))

    assert "establish-base-camp" in _eligible_ids(ready)
    assert "establish-base-camp" not in _eligible_ids(done)
    assert "establish-base-camp" not in _eligible_ids(missing_fire)


def test_expert_decisions_need_alignment() -> None:
    novice = build_state(principle_alignment_score=55)
    expert = build_state(principle_alignment_score=60)
    assert "build-ground-signal" not in _eligible_ids(novice)
    assert "build-ground-signal" in _eligible_ids(expert)


def test_equipment_gates_decisions() -> None:
    assert "use-whistle" not in _eligible_ids(build_state())
    assert "use-whistle" in _eligible_ids(build_state(equipment=(make_item("Whistle"),)))


def test_generation_is_pure() -> None:
    state = build_state(equipment=(make_item("Lighter"), make_item("Tinder bundle")))
    assert generate_decisions(state, _repo) == generate_decisions(state, _repo)
