"""Estimated cost and odds of a decision, shown before the player commits."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

from ordeal.domain.decisions import Decision
from ordeal.domain.metrics import PERCENT_BOUNDS, PlayerMetrics, clamp
from ordeal.domain.state import GameState

RiskLevel = Literal["safe", "manageable", "risky", "dangerous", "critical"]
EffortLevel = Literal["light", "moderate", "extreme"]

DEFAULT_SUCCESS_RATE = 0.70
BASE_SUCCESS_RATES: Dict[str, float] = {
    "rest": 1.0,
    "shelter": 0.95,
    "use-knife-shelter": 0.90,
    "use-blanket": 0.90,
    "use-whistle": 0.90,
    "use-mirror": 0.90,
    "improvise-treatment": 0.80,
    "signal-fire": 0.75,
    "signal-water": 0.75,
    "signal-urban": 0.75,
    "signal-passing-aircraft": 0.75,
    "triangle-signal-fires": 0.75,
    "find-landmark": 0.65,
    "navigate-camp": 0.60,
    "travel-west": 0.60,
    "descend": 0.65,
    "use-rope-descend": 0.65,
    "climb-vantage": 0.65,
    "climb-tall-tree": 0.65,
}

VISIBILITY_BOUND_TRAVEL = frozenset(
    {"navigate-camp", "travel-west", "retrace-trail", "retrace-tracks", "descend", "use-rope-descend"}
)
SCOUTING_DECISIONS = frozenset({"scout", "scout-inland", "scout-shade", "search-trail", "use-flashlight-scout"})
# Actions that keep the player out of the weather while they last.
SHELTERED_DECISIONS = frozenset({"shelter", "use-knife-shelter", "insulate-shelter", "rest"})

SUCCESS_FLOOR = 0.05
SUCCESS_CEILING = 0.99


@dataclass(frozen=True, slots=True)
class DecisionPreview:
    """What a decision is expected to cost and how likely it is to work."""

    energy_change: float
    hydration_change: float
    temperature_change: float
    risk_change: int
    base_cost: float
    environment_multiplier: float
    condition_multiplier: float
    success_probability: float
    base_rate: float
    environment_modifier: float
    condition_modifier: float
    post_energy: float
    post_hydration: float
    post_temperature: float
    risk_level: RiskLevel
    warnings: Tuple[str, ...] = ()
    critical_thresholds: Tuple[str, ...] = ()

    @property
    def effort(self) -> EffortLevel:
        return effort_level(self.energy_change)

    @property
    def success_label(self) -> str:
        return success_label(self.success_probability)


def environment_multiplier(state: GameState) -> float:
    """How much harder weather, cold, wind and darkness make physical work."""
    scenario = state.scenario
    multiplier = 1.0

    if scenario.weather in ("storm", "snow"):
        multiplier += 0.4
    elif scenario.weather == "rain":
        multiplier += 0.2
    elif scenario.weather == "wind":
        multiplier += 0.15

    if scenario.temperature < 0:
        multiplier += 0.3
    elif scenario.temperature < 10:
        multiplier += 0.2
    elif scenario.temperature > 35:
        multiplier += 0.25

    if scenario.wind_speed > 30:
        multiplier += 0.2
    elif scenario.wind_speed > 15:
        multiplier += 0.1

    if state.current_time_of_day in ("night", "dusk"):
        multiplier += 0.15
    return multiplier


def condition_multiplier(metrics: PlayerMetrics) -> float:
    """Penalty for exhaustion, thirst and injury; a rested player works cheaper."""
    multiplier = 1.0

    if metrics.energy < 30:
        multiplier += 0.4
    elif metrics.energy < 50:
        multiplier += 0.2
    elif metrics.energy >= 70 and metrics.hydration >= 60 and metrics.injury_severity < 20:
        multiplier -= 0.4

    if metrics.hydration < 30:
        multiplier += 0.4
    elif metrics.hydration < 50:
        multiplier += 0.2

    if metrics.injury_severity > 50:
        multiplier += 0.3
    elif metrics.injury_severity > 30:
        multiplier += 0.15

    return max(0.6, multiplier)


def environment_success_modifier(decision_id: str, state: GameState) -> float:
    scenario = state.scenario
    period = state.current_time_of_day
    modifier = 0.0

    if decision_id in VISIBILITY_BOUND_TRAVEL:
        if scenario.weather in ("storm", "snow"):
            modifier -= 0.45
        elif scenario.weather == "rain":
            modifier -= 0.20
        elif scenario.weather == "wind":
            modifier -= 0.10
        if period == "night":
            modifier -= 0.15
        elif period == "dusk":
            modifier -= 0.10

    if decision_id in SCOUTING_DECISIONS:
        if scenario.weather in ("storm", "snow"):
            modifier -= 0.25
        elif scenario.weather == "rain":
            modifier -= 0.10
        if period == "night":
            modifier -= 0.20

    if decision_id == "shelter" and scenario.weather == "storm":
        modifier -= 0.05
    return modifier


def condition_success_modifier(metrics: PlayerMetrics) -> float:
    modifier = 0.0

    if metrics.energy > 70:
        modifier += 0.10
    elif metrics.energy < 30:
        modifier -= 0.25
    elif metrics.energy < 50:
        modifier -= 0.15

    if metrics.hydration < 40:
        modifier -= 0.15
    elif metrics.hydration < 70:
        modifier -= 0.05

    if metrics.body_temperature < 35:
        modifier -= 0.20
    elif metrics.body_temperature < 36.5:
        modifier -= 0.10
    elif metrics.body_temperature > 38:
        modifier -= 0.10
    return modifier


def success_probability(decision: Decision, state: GameState) -> Tuple[float, float, float, float]:
    """Probability plus the base rate and the two modifiers it came from."""
    base = BASE_SUCCESS_RATES.get(decision.id, DEFAULT_SUCCESS_RATE)
    environment = environment_success_modifier(decision.id, state)
    condition = condition_success_modifier(state.metrics)
    probability = max(SUCCESS_FLOOR, min(SUCCESS_CEILING, base + environment + condition))
    return probability, base, environment, condition


def assess_risk(probability: float, cost: float, energy: float, hydration: float, temperature: float) -> RiskLevel:
    if energy < 10 or hydration < 15 or temperature < 34:
        return "critical"
    if probability < 0.35 and cost > 40:
        return "dangerous"
    if energy < 20 or hydration < 25 or temperature < 35:
        return "dangerous"
    if probability < 0.50 or (cost > 30 and energy < 35):
        return "risky"
    if probability >= 0.70 and energy >= 50 and hydration >= 50:
        return "safe"
    return "manageable"


def preview_warnings(energy: float, hydration: float, temperature: float, probability: float) -> List[str]:
    warnings: List[str] = []

    if energy < 10:
        warnings.append("CRITICAL: Energy would drop to collapse risk levels")
    elif energy < 20:
        warnings.append("WARNING: Energy would become critically low")
    elif energy < 30:
        warnings.append("CAUTION: Energy would drop into dangerous range")

    if hydration < 15:
        warnings.append("CRITICAL: Severe dehydration risk, organ failure possible")
    elif hydration < 25:
        warnings.append("WARNING: Hydration would become critically low")
    elif hydration < 40:
        warnings.append("CAUTION: Dehydration would worsen significantly")

    if temperature < 34:
        warnings.append("CRITICAL: Hypothermia imminent")
    elif temperature < 35:
        warnings.append("WARNING: Body temperature approaching hypothermia threshold")
    elif temperature < 36:
        warnings.append("CAUTION: Body temperature dropping into danger zone")

    if probability < 0.30:
        warnings.append("VERY RISKY: Less than 30% chance of success")
    elif probability < 0.50:
        warnings.append("RISKY: Less than 50% chance of success")
    return warnings


def crossed_thresholds(metrics: PlayerMetrics, energy: float, hydration: float, temperature: float) -> List[str]:
    crossed: List[str] = []
    if metrics.energy >= 20 > energy:
        crossed.append("Crosses CRITICAL energy threshold (20)")
    elif metrics.energy >= 30 > energy:
        crossed.append("Crosses DANGEROUS energy threshold (30)")

    if metrics.hydration >= 25 > hydration:
        crossed.append("Crosses CRITICAL hydration threshold (25)")
    elif metrics.hydration >= 40 > hydration:
        crossed.append("Crosses DANGEROUS hydration threshold (40)")

    if metrics.body_temperature >= 35 > temperature:
        crossed.append("Crosses HYPOTHERMIA threshold (35°C)")
    elif metrics.body_temperature >= 36 > temperature:
        crossed.append("Crosses DANGEROUS temperature threshold (36°C)")
    return crossed


def preview_decision(decision: Decision, state: GameState) -> DecisionPreview:
    """Estimate a decision's effect on the current state without drawing from the rng."""
    metrics = state.metrics
    temperature = state.scenario.temperature
    env = environment_multiplier(state)
    cond = condition_multiplier(metrics)
    cost = round(abs(decision.energy_cost) * env * cond)
    energy_change = float(cost if decision.energy_cost < 0 else -cost)

    intensity = 3 if cost > 35 else 2 if cost > 20 else 1
    hydration_cost = math.ceil(decision.time_required / 2) * intensity
    if temperature < 10:
        hydration_cost += math.ceil(decision.time_required * 1.5)
    if temperature > 30:
        hydration_cost += math.ceil(decision.time_required * 2)

    temperature_change = 0.0
    if decision.id not in SHELTERED_DECISIONS:
        if temperature < 10:
            temperature_change = -0.5
        elif temperature > 35:
            temperature_change = -0.3

    probability, base, env_modifier, cond_modifier = success_probability(decision, state)
    post_energy = clamp(metrics.energy + energy_change, *PERCENT_BOUNDS)
    post_hydration = clamp(metrics.hydration - hydration_cost, *PERCENT_BOUNDS)
    post_temperature = metrics.body_temperature + temperature_change

    return DecisionPreview(
        energy_change=energy_change,
        hydration_change=-float(hydration_cost),
        temperature_change=temperature_change,
        risk_change=decision.risk_level,
        base_cost=abs(decision.energy_cost),
        environment_multiplier=env,
        condition_multiplier=cond,
        success_probability=probability,
        base_rate=base,
        environment_modifier=env_modifier,
        condition_modifier=cond_modifier,
        post_energy=post_energy,
        post_hydration=post_hydration,
        post_temperature=post_temperature,
        risk_level=assess_risk(probability, cost, post_energy, post_hydration, post_temperature),
        warnings=tuple(preview_warnings(post_energy, post_hydration, post_temperature, probability)),
        critical_thresholds=tuple(crossed_thresholds(metrics, post_energy, post_hydration, post_temperature)),
    )


def effort_level(energy_change: float) -> EffortLevel:
    cost = abs(energy_change)
    if cost < 25:
        return "light"
    if cost < 40:
        return "moderate"
    return "extreme"


def success_label(probability: float) -> str:
    if probability >= 0.85:
        return "VERY LIKELY"
    if probability >= 0.70:
        return "LIKELY"
    if probability >= 0.50:
        return "CHALLENGING"
    if probability >= 0.30:
        return "RISKY"
    return "VERY RISKY"


__all__ = [
    "BASE_SUCCESS_RATES",
    "DEFAULT_SUCCESS_RATE",
    "DecisionPreview",
    "EffortLevel",
    "RiskLevel",
    "SCOUTING_DECISIONS",
    "SHELTERED_DECISIONS",
    "VISIBILITY_BOUND_TRAVEL",
    "assess_risk",
    "condition_multiplier",
    "condition_success_modifier",
    "crossed_thresholds",
    "effort_level",
    "environment_multiplier",
    "environment_success_modifier",
    "preview_decision",
    "preview_warnings",
    "success_label",
    "success_probability",
]
