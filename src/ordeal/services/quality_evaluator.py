"""Judges how well a decision fits the situation it was made in."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ordeal.core.types import DecisionQuality, PrincipleCategory
from ordeal.data.repositories import Principle, PrinciplesRepository
from ordeal.domain.decisions import Decision
from ordeal.domain.outcome import DecisionOutcome
from ordeal.domain.state import GameState

FALLBACK_PRINCIPLE = "Responding appropriately to the situation is key to survival."

SIGNAL_DECISIONS = frozenset(
    {
        "use-whistle",
        "use-mirror",
        "use-flashlight-signal",
        "signal-fire",
        "triangle-signal-fires",
        "build-ground-signal",
        "signal-passing-aircraft",
    }
)
TREATMENT_DECISIONS = frozenset({"treat-injury-full", "treat-injury-partial"})
FIRE_STARTING_DECISIONS = frozenset(
    {"start-fire-lighter", "start-fire-matches", "start-fire-friction", "gather-start-fire"}
)
ALWAYS_EXCELLENT = frozenset({"establish-base-camp", "brace-for-storm"})

STORM_TRAVEL_DECISIONS = frozenset({"descend", "use-rope-descend", "travel-west"})
NIGHT_TRAVEL_DECISIONS = STORM_TRAVEL_DECISIONS | {"navigate-camp"}


@dataclass(frozen=True, slots=True)
class QualityAssessment:
    quality: DecisionQuality
    principle: str
    category: PrincipleCategory | None = None


def determine_quality(decision: Decision, state: GameState) -> DecisionQuality:
    """Rate a decision against the state it was taken from."""
    metrics = state.metrics
    scenario = state.scenario
    decision_id = decision.id

    if decision_id == "panic-move":
        return "critical-error"

    if decision_id == "shelter" and state.turn_number <= 3:
        return "excellent"
    if decision_id in SIGNAL_DECISIONS and metrics.signal_effectiveness > 60:
        return "excellent"
    if decision_id in TREATMENT_DECISIONS and metrics.injury_severity > 50:
        return "excellent"
    if decision_id in FIRE_STARTING_DECISIONS and (scenario.temperature < 10 or metrics.body_temperature < 36):
        return "excellent"
    if decision_id == "use-blanket" and metrics.body_temperature < 35.5:
        return "excellent"
    if decision_id in ALWAYS_EXCELLENT:
        return "excellent"

    if decision.risk_level >= 8 and (metrics.energy < 50 or metrics.injury_severity > 30):
        return "poor"
    if state.current_time_of_day == "night" and decision_id in NIGHT_TRAVEL_DECISIONS:
        return "poor"
    if scenario.weather in ("storm", "snow") and decision_id in STORM_TRAVEL_DECISIONS:
        return "poor"
    if decision_id == "scout" and metrics.energy < 35:
        return "poor"

    return "good"


class QualityEvaluator:
    """Attaches a quality rating and the most relevant principle to a decision."""

    def __init__(self, principles: PrinciplesRepository | None = None) -> None:
        self._principles = principles or PrinciplesRepository()

    @property
    def principles(self) -> PrinciplesRepository:
        return self._principles

    def evaluate(self, decision: Decision, state: GameState, outcome: DecisionOutcome) -> QualityAssessment:
        """Rate `decision` and find the principle to teach alongside `outcome`.

        Quality follows the situation the decision was made in, not the luck of
        the roll. The outcome only steers the principle search toward the terrain
        the player ends up in.
        """
        quality = determine_quality(decision, state)
        principle = self._pick_mapped(decision, state, quality) or self._search(decision, state, outcome, quality)
        if principle is None:
            return QualityAssessment(quality, FALLBACK_PRINCIPLE)
        return QualityAssessment(quality, principle.text, principle.category)

    def _pick_mapped(self, decision: Decision, state: GameState, quality: DecisionQuality) -> Principle | None:
        candidates = self._principles.for_decision(decision.id)
        if not candidates:
            return None
        if quality in ("excellent", "good"):
            return candidates[state.turn_number % min(3, len(candidates))]
        return candidates[0]

    def _search(
        self, decision: Decision, state: GameState, outcome: DecisionOutcome, quality: DecisionQuality
    ) -> Principle | None:
        environment = outcome.environment_change or state.current_environment
        keywords: Sequence[str] = [*decision.id.split("-"), environment, quality]
        matches = self._principles.search(keywords)
        return matches[0] if matches else None


__all__ = [
    "FALLBACK_PRINCIPLE",
    "NIGHT_TRAVEL_DECISIONS",
    "QualityAssessment",
    "QualityEvaluator",
    "STORM_TRAVEL_DECISIONS",
    "determine_quality",
]
