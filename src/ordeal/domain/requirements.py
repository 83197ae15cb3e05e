"""Declarative eligibility predicates for decisions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ordeal.core.types import Environment, TimeOfDay, Weather
from ordeal.domain.equipment import has_capability

if TYPE_CHECKING:
    from ordeal.domain.state import GameState


@dataclass(frozen=True, slots=True)
class Requirements:
    """Conditions a GameState must satisfy before a decision is offered.

    Numeric bounds are strict (`energy_above=40` means energy > 40) except
    `alignment_at_least`. Unset fields impose nothing.
    """

    energy_above: float | None = None
    energy_below: float | None = None
    morale_above: float | None = None
    morale_below: float | None = None
    hydration_above: float | None = None
    hydration_below: float | None = None
    injury_above: float | None = None
    fire_above: float | None = None
    fire_below: float | None = None
    shelter_above: float | None = None
    signal_above: float | None = None
    temperature_below: float | None = None
    alignment_at_least: float | None = None
    turn_above: int | None = None
    turn_below: int | None = None
    turn_equals: int | None = None
    environments: Tuple[Environment, ...] = ()
    weather: Tuple[Weather, ...] = ()
    not_weather: Tuple[Weather, ...] = ()
    times: Tuple[TimeOfDay, ...] = ()
    not_times: Tuple[TimeOfDay, ...] = ()
    items: Tuple[str, ...] = ()
    any_items: Tuple[str, ...] = ()
    without_items: Tuple[str, ...] = ()
    after: Tuple[Tuple[str, ...], ...] = ()
    once: bool = False
    any_of: Tuple["Requirements", ...] = ()

    def is_met(self, state: "GameState", decision_id: str | None = None) -> bool:
        metrics = state.metrics
        if not _above(metrics.energy, self.energy_above) or not _below(metrics.energy, self.energy_below):
            return False
        if not _above(metrics.morale, self.morale_above) or not _below(metrics.morale, self.morale_below):
            return False
        if not _above(metrics.hydration, self.hydration_above) or not _below(metrics.hydration, self.hydration_below):
            return False
        if not _above(metrics.injury_severity, self.injury_above):
            return False
        if not _above(metrics.fire_quality, self.fire_above) or not _below(metrics.fire_quality, self.fire_below):
            return False
        if not _above(metrics.shelter, self.shelter_above):
            return False
        if not _above(metrics.signal_effectiveness, self.signal_above):
            return False
        if not _below(state.scenario.temperature, self.temperature_below):
            return False
        if self.alignment_at_least is not None and state.principle_alignment_score < self.alignment_at_least:
            return False

        if not _above(state.turn_number, self.turn_above) or not _below(state.turn_number, self.turn_below):
            return False
        if self.turn_equals is not None and state.turn_number != self.turn_equals:
            return False

        if self.environments and state.current_environment not in self.environments:
            return False
        if self.weather and state.scenario.weather not in self.weather:
            return False
        if state.scenario.weather in self.not_weather:
            return False
        if self.times and state.current_time_of_day not in self.times:
            return False
        if state.current_time_of_day in self.not_times:
            return False

        equipment = state.equipment
        if not all(has_capability(equipment, capability) for capability in self.items):
            return False
        if self.any_items and not any(has_capability(equipment, capability) for capability in self.any_items):
            return False
        if any(has_capability(equipment, capability) for capability in self.without_items):
            return False

        if self.after or self.once:
            taken = {outcome.decision.id for outcome in state.history}
            if not all(taken.intersection(group) for group in self.after):
                return False
            if self.once and decision_id is not None and decision_id in taken:
                return False

        if self.any_of and not any(option.is_met(state, decision_id) for option in self.any_of):
            return False
        return True


def _above(value: float, bound: float | None) -> bool:
    return bound is None or value > bound


def _below(value: float, bound: float | None) -> bool:
    return bound is None or value < bound


NO_REQUIREMENTS = Requirements()
