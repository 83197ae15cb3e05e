"""Turns a chosen decision into a DecisionOutcome."""
from __future__ import annotations

import logging
from dataclasses import replace
from functools import lru_cache

from ordeal.core.rng import RandomSource
from ordeal.domain.decisions import Decision
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import DecisionOutcome
from ordeal.domain.state import GameState
from ordeal.services.explanations import explain_outcome
from ordeal.services.metrics_system import apply_environmental_effects
from ordeal.services.outcomes.base import RESOLVERS, ResolutionContext, neutral_resolution
from ordeal.services.quality_evaluator import QualityEvaluator

logger = logging.getLogger(__name__)

SIGNAL_ACTIONS = frozenset(
    {
        "use-whistle",
        "use-mirror",
        "use-flashlight-signal",
        "signal-water",
        "signal-urban",
        "signal-fire",
        "build-ground-signal",
        "triangle-signal-fires",
        "flag-down-vehicle",
        "signal-passing-aircraft",
    }
)
FIRE_SIGNALS = frozenset({"signal-fire", "triangle-signal-fires"})
FIRE_SIGNAL_BONUS = 0.1

NAVIGATION_ACTIONS = frozenset(
    {
        "retrace-trail",
        "search-trail",
        "follow-coast",
        "find-exit",
        "navigate-camp",
        "backtrack-vehicle",
        "confident-traverse",
        "night-dash-highway",
        "read-terrain",
    }
)
NAVIGATION_MIN_TURN = 8
NAVIGATION_MIN_ATTEMPTS = 2

EDUCATIONAL_NOTE_CHANCE = 0.6


def success_bonus(alignment: float) -> float:
    """Roll bonus earned by acting on survival principles."""
    if alignment >= 80:
        return 0.15
    if alignment >= 65:
        return 0.10
    if alignment >= 50:
        return 0.05
    if alignment < 35:
        return -0.08
    return 0.0


def morale_adjustment(morale: float) -> float:
    return (morale - 50) / 100 * 0.2


def scale_energy_cost(base_cost: float, risk_level: int, state: GameState) -> float:
    """Energy an action really costs given the player's condition."""
    m = state.metrics
    if base_cost < 0:
        return base_cost

    if risk_level <= 2 and base_cost <= 20:
        if m.energy >= 70 and m.hydration >= 60 and m.injury_severity < 20:
            return max(5.0, base_cost * 0.6)
        if m.energy >= 50 and m.hydration >= 50:
            return base_cost * 0.8

    if m.energy < 30 or m.hydration < 30 or m.injury_severity > 50:
        return base_cost * 1.4
    if m.energy < 50 or m.hydration < 50 or m.injury_severity > 30:
        return base_cost * 1.2
    return base_cost


def heat_penalty(actual_energy_cost: float, state: GameState) -> float:
    """Extra hydration lost to hard work in hot conditions; zero or negative."""
    if actual_energy_cost <= 15:
        return 0.0
    scenario = state.scenario
    penalty = 0.0
    if state.current_time_of_day in ("midday", "afternoon"):
        if scenario.weather == "heat" or scenario.temperature > 30:
            penalty = -6.0
        elif scenario.temperature > 20:
            penalty = -3.0
    if state.current_environment == "desert":
        penalty -= 2
    return penalty


def navigation_threshold(prior_attempts: int) -> float:
    return max(0.70, 0.85 - 0.03 * (prior_attempts - NAVIGATION_MIN_ATTEMPTS))


def prior_navigation_attempts(state: GameState) -> int:
    return sum(1 for outcome in state.history if outcome.decision.id in NAVIGATION_ACTIONS)


def is_navigation_success(decision: Decision, state: GameState, roll: float) -> bool:
    if decision.id not in NAVIGATION_ACTIONS or state.turn_number < NAVIGATION_MIN_TURN:
        return False
    attempts = prior_navigation_attempts(state)
    if attempts < NAVIGATION_MIN_ATTEMPTS:
        return False
    return roll > navigation_threshold(attempts)


def is_successful_signal(decision: Decision, state: GameState, roll: float) -> bool:
    bonus = FIRE_SIGNAL_BONUS if decision.id in FIRE_SIGNALS else 0.0
    if roll > 0.6 - bonus:
        return True
    return state.metrics.signal_effectiveness > 60 and roll > 0.4 - bonus


@lru_cache(maxsize=1)
def _default_evaluator() -> QualityEvaluator:
    return QualityEvaluator()


def apply_decision(
    decision: Decision,
    state: GameState,
    rng: RandomSource,
    evaluator: QualityEvaluator | None = None,
) -> DecisionOutcome:
    """Resolve one decision against the current state. Pure apart from rng draws."""
    metrics = state.metrics
    roll = rng.random() + success_bonus(state.principle_alignment_score) + morale_adjustment(metrics.morale)
    actual_cost = scale_energy_cost(decision.energy_cost, decision.risk_level, state)
    penalty = heat_penalty(actual_cost, state)

    ctx = ResolutionContext(state=state, decision=decision, rng=rng, roll=roll, actual_energy_cost=actual_cost)
    resolver = RESOLVERS.get(decision.id)
    if resolver is None:
        logger.debug("No resolver for decision '%s'; using neutral outcome", decision.id)
        resolver = neutral_resolution
    resolution = resolver(ctx)

    consequences = list(resolution.consequences)
    if penalty < -4:
        consequences.append("Hard work in the heat causes severe dehydration.")
    elif penalty < -2:
        consequences.append("The heat makes this work more taxing on your hydration.")

    passive = apply_environmental_effects(metrics, state.scenario, state.turn_number, state.current_time_of_day)
    metrics_change = resolution.metrics + passive + MetricsDelta(hydration=penalty)

    signal_attempt = decision.id in SIGNAL_ACTIONS
    changes = resolution.equipment_changes
    outcome = DecisionOutcome(
        decision=decision,
        immediate_effect=resolution.immediate_effect,
        metrics_change=metrics_change,
        delayed_effects=tuple(resolution.delayed_effects),
        equipment_changes=None if changes.is_empty else changes,
        environment_change=resolution.environment_change,
        was_signal_attempt=signal_attempt,
        was_successful_signal=signal_attempt and is_successful_signal(decision, state, roll),
        was_navigation_success=is_navigation_success(decision, state, roll),
    )

    assessment = (evaluator or _default_evaluator()).evaluate(decision, state, outcome)
    if assessment.quality in ("excellent", "good"):
        if rng.random() < EDUCATIONAL_NOTE_CHANCE:
            consequences.append(f"Survival principle: {assessment.principle}")
    else:
        consequences.append(f"Consider: {assessment.principle}")

    explanation = explain_outcome(
        decision,
        state,
        resolution.metrics,
        resolution.immediate_effect,
        assessment.quality,
        assessment.principle,
    )
    return replace(
        outcome,
        consequences=tuple(consequences),
        decision_quality=assessment.quality,
        survival_principle_alignment=assessment.principle,
        principle_category=assessment.category,
        explanation=explanation,
    )
