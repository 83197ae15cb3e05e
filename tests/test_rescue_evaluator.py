from __future__ import annotations

import math

from ordeal.domain.metrics import PlayerMetrics
from ordeal.services.rescue_evaluator import (
    calculate_rescue_status,
    describe_rescue_probability,
    estimate_turns_to_rescue,
    rescue_probability,
)
from tests.helpers.builders import build_scenario, build_state


def test_no_signals_means_no_rescue() -> None:
    state = build_state(scenario=build_scenario(time_of_day="midday"), turn_number=14)
    assert rescue_probability(state) == 0


def test_search_starts_at_turn_ten() -> None:
    early = build_state(successful_signals=3, turn_number=9)
    searching = build_state(successful_signals=2, turn_number=10, metrics=PlayerMetrics(signal_effectiveness=50))
    assert rescue_probability(early) == 9
    assert rescue_probability(searching) == 45


def test_more_signals_never_lower_probability() -> None:
    values = [rescue_probability(build_state(successful_signals=count, turn_number=12)) for count in range(8)]
    assert values == sorted(values)


def test_night_and_storms_hurt_visibility() -> None:
    clear_day = build_state(scenario=build_scenario(time_of_day="midday"), successful_signals=3, turn_number=12)
    stormy_night = build_state(
        scenario=build_scenario(weather="storm", time_of_day="night"), successful_signals=3, turn_number=12
    )
    assert rescue_probability(stormy_night) == rescue_probability(clear_day) - 45


def test_navigate_condition_appears_after_turn_five() -> None:
    kinds_early = [condition.kind for condition in calculate_rescue_status(build_state(turn_number=3)).win_conditions]
    kinds_late = [condition.kind for condition in calculate_rescue_status(build_state(turn_number=6)).win_conditions]
    assert kinds_early == ["signal", "endure"]
    assert kinds_late == ["signal", "navigate", "endure"]


def test_estimate_after_enough_signals() -> None:
    state = build_state(successful_signals=5, turn_number=12)
    probability = rescue_probability(state)
    assert estimate_turns_to_rescue(state, probability) == math.ceil((100 - probability) / 15)


def test_estimate_unknown_late_without_signals() -> None:
    assert estimate_turns_to_rescue(build_state(turn_number=16), 0) is None


def test_status_mirrors_state_counters() -> None:
    status = calculate_rescue_status(build_state(signal_attempts=4, successful_signals=2, turn_number=4))
    assert (status.signal_attempts, status.successful_signals, status.required_signals) == (4, 2, 5)


def test_probability_labels() -> None:
    assert describe_rescue_probability(90) == "Imminent"
    assert describe_rescue_probability(55) == "Good"
    assert describe_rescue_probability(0) == "Very Low"


def test_endure_countdown_stops_at_zero_past_the_target_turn() -> None:
    state = build_state(metrics=PlayerMetrics(survival_probability=80), turn_number=18)
    endure = calculate_rescue_status(state).win_conditions[-1]
    assert endure.kind == "endure"
    assert endure.turns_remaining == 0
    assert endure.description == "Survive 0 more turns (18/15)"
    assert endure.progress == 100
