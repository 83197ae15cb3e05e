"""Resolver registry and the values passed to and returned from resolvers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from ordeal.core.rng import RandomSource
from ordeal.core.types import Environment, TimeOfDay
from ordeal.domain.decisions import Decision
from ordeal.domain.equipment import Equipment, EquipmentChanges, find_item
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics
from ordeal.domain.outcome import DelayedEffect
from ordeal.domain.scenario import Scenario
from ordeal.domain.state import GameState
from ordeal.domain.time_of_day import is_dark


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Everything a resolver may read. `roll` is already adjusted and may leave [0, 1)."""

    state: GameState
    decision: Decision
    rng: RandomSource
    roll: float
    actual_energy_cost: float

    @property
    def metrics(self) -> PlayerMetrics:
        return self.state.metrics

    @property
    def scenario(self) -> Scenario:
        return self.state.scenario

    @property
    def turn(self) -> int:
        return self.state.turn_number

    @property
    def time_of_day(self) -> TimeOfDay:
        return self.state.current_time_of_day

    @property
    def environment(self) -> Environment:
        return self.state.current_environment

    @property
    def in_the_dark(self) -> bool:
        return is_dark(self.state.current_time_of_day)

    @property
    def base_cost(self) -> float:
        return self.decision.energy_cost

    def item(self, capability: str) -> Equipment | None:
        return find_item(self.state.equipment, capability)


@dataclass(slots=True)
class Resolution:
    """What a resolver decided; the resolver wrapper turns it into a DecisionOutcome."""

    metrics: MetricsDelta
    immediate_effect: str
    consequences: List[str] = field(default_factory=list)
    delayed_effects: List[DelayedEffect] = field(default_factory=list)
    equipment_changes: EquipmentChanges = field(default_factory=EquipmentChanges)
    environment_change: Environment | None = None

    def note(self, *lines: str) -> "Resolution":
        self.consequences.extend(lines)
        return self

    def change_equipment(self, changes: EquipmentChanges) -> "Resolution":
        self.equipment_changes = self.equipment_changes.merge(changes)
        return self


Resolver = Callable[[ResolutionContext], Resolution]

RESOLVERS: Dict[str, Resolver] = {}


def resolves(*decision_ids: str) -> Callable[[Resolver], Resolver]:
    """Register a resolver for one or more decision ids."""

    def register(func: Resolver) -> Resolver:
        for decision_id in decision_ids:
            if decision_id in RESOLVERS:
                raise ValueError(f"Decision '{decision_id}' already has a resolver.")
            RESOLVERS[decision_id] = func
        return func

    return register


def neutral_resolution(ctx: ResolutionContext) -> Resolution:
    return Resolution(metrics=MetricsDelta(), immediate_effect="You take action.")
