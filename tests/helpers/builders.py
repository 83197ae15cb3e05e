from __future__ import annotations

from dataclasses import replace
from typing import Any, MutableSequence, Sequence, TypeVar

from ordeal.domain.decisions import Decision
from ordeal.domain.equipment import Equipment
from ordeal.domain.metrics import PlayerMetrics
from ordeal.domain.scenario import INITIAL_CONDITIONS, Scenario
from ordeal.domain.state import GameState

T = TypeVar("T")


class FixedRNG:
    """RandomSource returning a constant roll; randint gives the lower bound unless told otherwise."""

    def __init__(self, value: float = 0.5, randint_value: int | None = None) -> None:
        self.value = value
        self.randint_value = randint_value

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        if self.randint_value is None:
            return a
        return max(a, min(b, self.randint_value))

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[0]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        return None


def build_scenario(**overrides: Any) -> Scenario:
    values: dict[str, Any] = {
        "environment": "forest",
        "weather": "clear",
        "time_of_day": "morning",
        "temperature": 20,
        "wind_speed": 5,
        "terrain_difficulty": 5,
        "initial_condition": INITIAL_CONDITIONS[0],
        "distance_to_safety": "Unknown. You lost your bearings.",
        "wetness": "dry",
        "backpack_capacity_liters": 30,
        "available_equipment": (),
    }
    values.update(overrides)
    return Scenario(**values)


def build_state(
    *,
    scenario: Scenario | None = None,
    metrics: PlayerMetrics | None = None,
    equipment: Sequence[Equipment] = (),
    **overrides: Any,
) -> GameState:
    scenario = scenario or build_scenario()
    state = GameState(
        game_id="game_test",
        scenario=scenario,
        metrics=metrics or PlayerMetrics(),
        equipment=tuple(equipment),
        current_environment=scenario.environment,
        current_time_of_day=scenario.time_of_day,
        backpack_capacity_liters=scenario.backpack_capacity_liters,
    )
    return replace(state, **overrides) if overrides else state


def build_decision(decision_id: str, **overrides: Any) -> Decision:
    values: dict[str, Any] = {
        "id": decision_id,
        "text": decision_id.replace("-", " ").capitalize(),
        "energy_cost": 15,
        "risk_level": 1,
        "time_required": 2,
    }
    values.update(overrides)
    return Decision(**values)
