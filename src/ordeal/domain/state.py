"""Domain-level game state."""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Literal, Tuple

from ordeal.core.types import Environment, GameOutcome, GameStatus, TimeOfDay
from ordeal.domain.causality import CausalityChain, ThresholdCrossing
from ordeal.domain.equipment import Equipment, total_volume
from ordeal.domain.metrics import PlayerMetrics
from ordeal.domain.outcome import DecisionOutcome
from ordeal.domain.scenario import Scenario

MomentImpact = Literal["positive", "negative", "critical"]


@dataclass(frozen=True, slots=True)
class DecisionLogEntry:
    turn: int
    description: str
    principle: str


@dataclass(frozen=True, slots=True)
class KeyMoment:
    turn: int
    description: str
    impact: MomentImpact


@dataclass(frozen=True, slots=True)
class GameState:
    """Snapshot of a run. Replaced, never mutated, on every turn."""

    game_id: str
    scenario: Scenario
    metrics: PlayerMetrics
    equipment: Tuple[Equipment, ...]
    current_environment: Environment
    current_time_of_day: TimeOfDay
    backpack_capacity_liters: float
    turn_number: int = 1
    status: GameStatus = "active"
    outcome: GameOutcome = "undefined"
    hours_elapsed: float = 0.0
    history: Tuple[DecisionOutcome, ...] = ()
    signal_attempts: int = 0
    successful_signals: int = 0
    principle_alignment_score: float = 50.0
    discovered_principles: FrozenSet[str] = frozenset()
    good_decisions: Tuple[DecisionLogEntry, ...] = ()
    poor_decisions: Tuple[DecisionLogEntry, ...] = ()
    end_reason: str | None = None
    lessons: Tuple[str, ...] = ()
    key_moments: Tuple[KeyMoment, ...] = ()
    threshold_crossings: Tuple[ThresholdCrossing, ...] = ()
    causality_chain: CausalityChain | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def last_outcome(self) -> DecisionOutcome | None:
        return self.history[-1] if self.history else None

    @property
    def current_volume_used(self) -> float:
        return total_volume(self.equipment)
