"""Passive metric drift, clamping and end-of-game detection."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from ordeal.core.types import Environment, GameOutcome, TimeOfDay
from ordeal.domain.causality import ThresholdCrossing, detect_crossings
from ordeal.domain.decisions import Decision
from ordeal.domain.equipment import Equipment, has_capability
from ordeal.domain.metrics import MetricsDelta, PlayerMetrics, clamp
from ordeal.domain.scenario import Scenario
from ordeal.domain.state import GameState
from ordeal.domain.wind import calculate_wind_effect

logger = logging.getLogger(__name__)

FIRE_DECAY = 8.0
FIRE_DECAY_WET = 15.0
FIRE_WARMTH = 0.2
FIRE_WARMTH_THRESHOLD = 30.0

_WET_WEATHER = ("rain", "storm", "snow")


@dataclass(frozen=True, slots=True)
class EndCheck:
    ended: bool
    outcome: GameOutcome | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class MetricsUpdate:
    metrics: PlayerMetrics
    threshold_crossings: Tuple[ThresholdCrossing, ...] = ()


def initialize_metrics(scenario: Scenario, equipment: Iterable[Equipment] = ()) -> PlayerMetrics:
    """Starting metrics for a scenario and the loadout carried into it."""
    condition = scenario.initial_condition
    energy = 100.0 + condition.energy
    if condition.energy_override is not None:
        energy = condition.energy_override
    hydration = condition.hydration_override if condition.hydration_override is not None else 100.0
    body_temperature = (
        condition.body_temperature_override if condition.body_temperature_override is not None else 37.0
    )
    if has_capability(tuple(equipment), "water"):
        hydration = min(hydration + 10, 100.0)

    morale = 70.0 + condition.morale
    metrics = PlayerMetrics(
        energy=energy,
        body_temperature=body_temperature,
        hydration=hydration,
        injury_severity=condition.injury_severity,
        morale=morale,
        shelter=condition.starting_shelter,
        fire_quality=0.0,
        signal_effectiveness=calculate_signal_effectiveness(scenario, morale),
        cumulative_risk=0.0,
    )
    return _with_survival(metrics, scenario, scenario.time_of_day)


def apply_environmental_effects(
    metrics: PlayerMetrics,
    scenario: Scenario,
    turn_number: int,
    time_of_day: TimeOfDay | None = None,
) -> MetricsDelta:
    """Passive per-turn drift caused by weather, temperature and condition.

    Deterministic. `time_of_day` defaults to the scenario's starting period.
    """
    period = time_of_day or scenario.time_of_day
    sheltered = metrics.shelter / 100
    exposure = 1 - sheltered * 0.85

    energy = 0.0
    body_temperature = 0.0
    hydration = 0.0
    morale = 0.0
    shelter = 0.0
    fire_quality = 0.0
    risk = 0.0

    weather = scenario.weather
    if weather in ("storm", "snow"):
        body_temperature = -0.2 * exposure
        energy = -1.4 * exposure
        morale = -1.5 * (1 - sheltered * 0.5)
        if metrics.shelter < 50:
            shelter = -2.0
    elif weather == "rain":
        body_temperature = -0.15 * exposure
        energy = -1.0 * exposure
        if metrics.shelter < 60:
            shelter = -1.5
    elif weather == "heat":
        hydration = -3 * (1 - sheltered * 0.6)
        energy = -1.4 * (1 - sheltered * 0.4)

    temperature_gap = calculate_wind_effect(scenario.temperature, scenario.wind_speed).effective_temperature - 20
    if temperature_gap < -15:
        body_temperature -= 0.3 * exposure
        energy -= 2 * exposure
    elif temperature_gap < -5:
        body_temperature -= 0.15 * exposure
        energy -= 1 * exposure
    elif temperature_gap > 15:
        hydration -= 2 * (1 - sheltered * 0.5)
        energy -= 1.4 * (1 - sheltered * 0.3)

    if period == "night":
        body_temperature -= 0.15 * exposure
        morale -= 0.5 * (1 - sheltered * 0.5)

    hydration -= 1.5
    energy -= 0.3

    if metrics.injury_severity > 0:
        energy -= metrics.injury_severity * 0.03

    if metrics.hydration < 40:
        energy -= 2
        morale -= 1.5
    elif metrics.hydration < 60:
        energy -= 0.5

    if metrics.body_temperature < 35:
        morale -= 3
        energy -= 3
    elif metrics.body_temperature > 39:
        morale -= 2
        energy -= 2

    if metrics.morale < 30:
        risk = 5.0

    if metrics.fire_quality > 0:
        fire_quality = -(FIRE_DECAY_WET if weather in _WET_WEATHER else FIRE_DECAY)
        if metrics.fire_quality > FIRE_WARMTH_THRESHOLD:
            body_temperature += FIRE_WARMTH

    return MetricsDelta(
        energy=energy,
        body_temperature=body_temperature,
        hydration=hydration,
        morale=morale,
        shelter=shelter,
        fire_quality=fire_quality,
        cumulative_risk=risk,
    )


def update_metrics(
    current: PlayerMetrics,
    delta: MetricsDelta,
    scenario: Scenario,
    time_of_day: TimeOfDay | None = None,
    environment: Environment | None = None,
    turn: int = 0,
    decision: Decision | None = None,
) -> MetricsUpdate:
    """Add a delta, clamp every bound, then recompute the derived fields.

    Level boundaries passed on the way are reported as threshold crossings
    attributed to `decision` on `turn`.
    """
    period = time_of_day or scenario.time_of_day
    updated = current.with_delta(delta).clamped()
    signal = calculate_signal_effectiveness(scenario, updated.morale, period, environment)
    metrics = _with_survival(replace(updated, signal_effectiveness=signal), scenario, period)
    crossings = detect_crossings(
        current,
        metrics,
        turn,
        decision.id if decision is not None else None,
        decision.text if decision is not None else None,
    )
    for crossing in crossings:
        logger.debug(
            "Turn %d: %s crossed %s level %.1f (%.1f -> %.1f)",
            turn,
            crossing.metric,
            crossing.level,
            crossing.threshold,
            crossing.previous_value,
            crossing.new_value,
        )
    return MetricsUpdate(metrics, crossings)


def calculate_signal_effectiveness(
    scenario: Scenario,
    morale: float,
    time_of_day: TimeOfDay | None = None,
    environment: Environment | None = None,
) -> float:
    period = time_of_day or scenario.time_of_day
    place = environment or scenario.environment
    effectiveness = 50.0

    if scenario.weather == "clear":
        effectiveness += 30
    if scenario.weather == "storm":
        effectiveness -= 40
    if scenario.weather in ("rain", "snow"):
        effectiveness -= 20

    if period == "midday":
        effectiveness += 20
    if period == "night":
        effectiveness -= 30

    if place in ("mountains", "desert"):
        effectiveness += 15
    if place == "forest":
        effectiveness -= 25

    effectiveness += (morale - 50) * 0.3
    return clamp(effectiveness, 0, 100)


def calculate_survival_probability(
    metrics: PlayerMetrics,
    scenario: Scenario,
    time_of_day: TimeOfDay | None = None,
) -> float:
    period = time_of_day or scenario.time_of_day
    probability = 50.0
    probability += (metrics.energy - 50) * 0.3
    probability += (metrics.hydration - 50) * 0.4
    probability += (metrics.morale - 50) * 0.2
    probability -= abs(metrics.body_temperature - 37) * 8
    probability -= metrics.injury_severity * 0.6
    probability -= metrics.cumulative_risk * 0.3

    if scenario.weather == "storm":
        probability -= 15
    if scenario.weather == "snow" and scenario.temperature < -5:
        probability -= 20
    if scenario.weather == "heat" and scenario.temperature > 35:
        probability -= 15
    if period == "night":
        probability -= 10

    probability -= (scenario.terrain_difficulty - 5) * 3
    return clamp(probability, 1, 99)


def _with_survival(metrics: PlayerMetrics, scenario: Scenario, period: TimeOfDay) -> PlayerMetrics:
    return replace(metrics, survival_probability=calculate_survival_probability(metrics, scenario, period))


def check_end_conditions(state: GameState) -> EndCheck:
    """Evaluate death and rescue on a state whose turn counter already advanced."""
    m = state.metrics

    if m.body_temperature <= 31.5 or m.body_temperature >= 41.5:
        return EndCheck(True, "died", "Severe hypothermia" if m.body_temperature <= 31.5 else "Hyperthermia")
    if m.energy <= 5 and m.hydration <= 10:
        return EndCheck(True, "died", "Complete physical collapse from exhaustion and dehydration")
    if m.energy <= 3:
        return EndCheck(True, "died", "Fatal exhaustion")
    if m.hydration <= 5:
        return EndCheck(True, "died", "Fatal dehydration")
    if m.injury_severity >= 90:
        return EndCheck(True, "died", "Injury complications")

    last = state.last_outcome
    if last is not None and last.was_navigation_success:
        return EndCheck(True, "survived", "You successfully navigated to safety!")

    poor_heavy = len(state.poor_decisions) > len(state.good_decisions)
    if state.turn_number >= 12 and state.successful_signals >= 5 and m.survival_probability > 45:
        if m.injury_severity > 50 or poor_heavy:
            return EndCheck(
                True,
                "barely_survived",
                "Your signals were finally answered. Rescuers reached you, but only just in time.",
            )
        return EndCheck(
            True,
            "survived",
            "Your persistent signaling paid off. A rescue team spotted you and extracted you safely.",
        )

    if state.turn_number >= 15 and m.survival_probability > 55:
        if m.injury_severity > 50 or m.hydration < 30 or m.body_temperature < 35 or poor_heavy:
            return EndCheck(True, "barely_survived", "Rescue arrived. You survived, but with serious consequences.")
        return EndCheck(True, "survived", "You maintained discipline. Rescue found you.")

    if state.turn_number >= 20:
        if m.survival_probability > 40:
            return EndCheck(True, "barely_survived", "You endured until rescue. Recovery will take months.")
        return EndCheck(True, "died", "The accumulation of poor decisions proved fatal.")

    if m.survival_probability < 5 and state.turn_number > 5:
        return EndCheck(True, "died", "Your condition deteriorated beyond recovery.")

    return EndCheck(False)


__all__ = [
    "EndCheck",
    "MetricsUpdate",
    "apply_environmental_effects",
    "calculate_signal_effectiveness",
    "calculate_survival_probability",
    "check_end_conditions",
    "initialize_metrics",
    "update_metrics",
]
