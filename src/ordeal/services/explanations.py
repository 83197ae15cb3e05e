"""Layered explanations of a resolved turn: summary, narrative, per-metric causes and advice."""
from __future__ import annotations

import math
from typing import Dict, List, Literal

from ordeal.core.types import DecisionQuality, Weather
from ordeal.domain.decisions import Decision
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import (
    ChangeReason,
    ConsequenceExplanation,
    MetricBreakdown,
    OutcomeType,
    RiskAssessment,
)
from ordeal.domain.state import GameState
from ordeal.services.decision_preview import SHELTERED_DECISIONS, condition_multiplier, environment_multiplier

Intensity = Literal["rest", "light", "moderate", "extreme"]

TRAVEL_DECISIONS = frozenset({"navigate-camp", "travel-west"})

OUTCOME_TYPES: Dict[DecisionQuality, OutcomeType] = {
    "excellent": "success",
    "good": "partial-success",
    "poor": "failure",
    "critical-error": "critical-failure",
}

_WEATHER_DESCRIPTIONS: Dict[Weather, str] = {
    "storm": "severe whiteout conditions",
    "snow": "severe whiteout conditions",
    "rain": "rainy, low-visibility conditions",
    "wind": "high wind conditions",
    "heat": "intense heat",
    "clear": "clear conditions",
}

_OUTCOME_SENTENCES: Dict[OutcomeType, str] = {
    "critical-failure": "After significant effort you achieved nothing, wasting critical energy reserves.",
    "failure": "The attempt did not succeed, though you gained some understanding of the situation.",
    "success": "Your effort paid off, achieving the objective successfully.",
    "partial-success": "You made some progress, though not as much as hoped.",
}

_SUMMARY_TAILS: Dict[RiskAssessment, str] = {
    "critical": "This was an EXTREMELY dangerous decision with your current condition.",
    "dangerous": "This was a high-risk decision that incurred significant costs.",
    "safe": "This was a sound decision that improved your situation.",
}


def intensity(decision: Decision) -> Intensity:
    if decision.energy_cost > 35:
        return "extreme"
    if decision.energy_cost > 20:
        return "moderate"
    if decision.energy_cost > 10:
        return "light"
    return "rest"


def assess_outcome_risk(change: MetricsDelta, outcome_type: OutcomeType, energy: float) -> RiskAssessment:
    if change.energy < -40 and energy < 50:
        return "critical"
    if change.cumulative_risk > 15 or outcome_type == "critical-failure":
        return "dangerous"
    if change.cumulative_risk > 8:
        return "risky"
    if outcome_type == "success":
        return "safe"
    return "manageable"


def energy_breakdown(decision: Decision, state: GameState, change: float) -> MetricBreakdown:
    if change > 0:
        return MetricBreakdown(change, (ChangeReason(change, f"Recovery from {decision.text.lower()}", "base"),))

    scenario = state.scenario
    base = abs(decision.energy_cost)
    actual = abs(change)
    env = environment_multiplier(state)
    cond = condition_multiplier(state.metrics)
    energy = state.metrics.energy
    activity = "Extreme navigation effort" if decision.id in TRAVEL_DECISIONS else "Physical activity"

    reasons = [ChangeReason(-base, f"{activity} base energy requirement", "base")]
    env_penalty = round(base * (env - 1))
    if env_penalty > 0:
        reasons.append(
            ChangeReason(
                -env_penalty,
                f"Harsh conditions ({scenario.weather}, {scenario.temperature:g}°C, {scenario.wind_speed:g} km/h wind)",
                "environmental",
            )
        )
    condition_penalty = round(actual - base - env_penalty)
    if condition_penalty:
        if energy < 30:
            reasons.append(
                ChangeReason(
                    -abs(condition_penalty),
                    f"Exhaustion penalty (energy at {energy:.0f}%, body overcompensating)",
                    "condition",
                )
            )
        elif energy < 50:
            reasons.append(
                ChangeReason(-abs(condition_penalty), "Low energy penalty (below optimal performance)", "condition")
            )
        elif condition_penalty < 0:
            reasons.append(ChangeReason(-condition_penalty, "Well-rested efficiency bonus", "condition"))

    calculation = f"Base {base:g} x {env:.2f} environment x {cond:.2f} condition = {actual:g}"
    return MetricBreakdown(change, tuple(reasons), calculation)


def hydration_breakdown(decision: Decision, state: GameState, change: float) -> MetricBreakdown:
    hours = decision.time_required
    effort = intensity(decision)
    temperature = state.scenario.temperature
    base_drain = -math.ceil(hours / 2)

    reasons = [ChangeReason(base_drain, f"Baseline metabolic water loss over {hours:g}h", "base")]
    if effort == "extreme":
        reasons.append(ChangeReason(base_drain * 3, "Extreme physical exertion (high metabolism and sweating)", "base"))
    elif effort == "moderate":
        reasons.append(ChangeReason(base_drain * 2, "Moderate physical activity", "base"))
    if effort != "rest" and temperature < 10:
        reasons.append(
            ChangeReason(-math.ceil(hours * 1.5), "Cold, dry air respiratory evaporation", "environmental")
        )
    if effort != "rest" and temperature > 30:
        reasons.append(
            ChangeReason(-math.ceil(hours * 2), "Heat-induced sweating and thermoregulation", "environmental")
        )
    return MetricBreakdown(change, tuple(reasons))


def temperature_breakdown(decision: Decision, state: GameState, change: float) -> MetricBreakdown:
    scenario = state.scenario
    sheltered = decision.id in SHELTERED_DECISIONS
    effort = intensity(decision)
    reasons: List[ChangeReason] = []
    if change < 0:
        if sheltered:
            reasons.append(ChangeReason(change, "Gradual heat loss despite shelter", "environmental"))
        else:
            reasons.append(
                ChangeReason(
                    change,
                    f"Cold exposure ({scenario.temperature:g}°C ambient, {scenario.wind_speed:g} km/h wind)",
                    "environmental",
                )
            )
    elif change > 0:
        if effort in ("extreme", "moderate"):
            reasons.append(ChangeReason(change, "Metabolic heat generation from physical activity", "base"))
        elif sheltered:
            reasons.append(ChangeReason(change, "Gradual warming in protected shelter", "base"))
    return MetricBreakdown(change, tuple(reasons))


def morale_breakdown(change: float, outcome_type: OutcomeType) -> MetricBreakdown:
    succeeded = outcome_type in ("success", "partial-success")
    if succeeded:
        reason = ChangeReason(change, "Success and sense of accomplishment", "base")
    elif change < 0 and outcome_type == "critical-failure":
        reason = ChangeReason(change, "Severe failure, exhausting effort with no progress", "base")
    elif change < 0:
        reason = ChangeReason(change, "Frustration from failed attempt", "base")
    else:
        reason = ChangeReason(change, "Small boost from taking action and staying productive", "base")
    return MetricBreakdown(change, (reason,))


def risk_breakdown(decision: Decision, state: GameState, change: float, outcome_type: OutcomeType) -> MetricBreakdown:
    metrics = state.metrics
    reasons: List[ChangeReason] = []
    if change > 0:
        if outcome_type in ("critical-failure", "failure"):
            reasons.append(ChangeReason(math.ceil(change * 0.6), "Failed objective, no progress toward safety", "base"))
        if metrics.energy < 30 or metrics.hydration < 30:
            reasons.append(
                ChangeReason(math.floor(change * 0.4), "Exhausted body in harsh conditions", "condition")
            )
        if decision.id in TRAVEL_DECISIONS:
            reasons.append(
                ChangeReason(
                    math.floor(change * 0.5), "Movement in challenging terrain without confirmed progress", "base"
                )
            )
    elif change < 0:
        if "shelter" in decision.id:
            reasons.append(ChangeReason(change, "Improved protection reduces exposure risks", "base"))
        elif outcome_type == "success":
            reasons.append(ChangeReason(change, "Successful progress toward safety", "base"))
    return MetricBreakdown(change, tuple(reasons))


def build_narrative(decision: Decision, state: GameState, change: MetricsDelta, outcome_type: OutcomeType) -> str:
    scenario = state.scenario
    energy = state.metrics.energy
    hours = decision.time_required
    parts = [f"You attempted to {decision.text.lower()} in {_WEATHER_DESCRIPTIONS[scenario.weather]}."]

    if hours >= 4:
        parts.append(f"This {hours:g}-hour effort required intense focus and continuous physical exertion.")
    elif hours >= 2:
        parts.append(f"Over {hours:g} hours, you worked steadily at this task.")

    if energy < 40:
        parts.append(
            f"Your energy reserves were already low ({energy:.0f}/100), forcing your body to burn additional resources."
        )

    if scenario.temperature < 5 and "shelter" not in decision.id:
        parts.append(
            f"The freezing temperature ({scenario.temperature:g}°C) and {scenario.wind_speed:g} km/h wind "
            "created dangerous exposure during the attempt."
        )
    elif scenario.temperature > 35:
        parts.append(f"The brutal heat ({scenario.temperature:g}°C) accelerated dehydration and exhaustion.")

    parts.append(_OUTCOME_SENTENCES[outcome_type])
    if change.cumulative_risk > 15:
        parts.append(
            "This significantly increased your overall danger level. Exhausted bodies in harsh conditions "
            "are vulnerable to injury and hypothermia."
        )
    return " ".join(parts)


def build_recommendations(decision: Decision, state: GameState, outcome_type: OutcomeType) -> List[str]:
    scenario = state.scenario
    metrics = state.metrics
    recommendations: List[str] = []

    if metrics.energy < 40 and decision.energy_cost > 30:
        recommendations.append("Rest to restore energy above 60 before attempting high-effort actions")
    if scenario.weather in ("storm", "snow") and decision.id in TRAVEL_DECISIONS:
        recommendations.append("Wait for clearer weather before attempting navigation, whiteout means near-zero success")
    if metrics.shelter < 50 and scenario.temperature < 10:
        recommendations.append("Improve shelter before risking travel, it provides critical protection")
    if outcome_type in ("critical-failure", "failure"):
        recommendations.append("Consider lower-risk options that conserve energy while improving position")
    if state.current_time_of_day in ("dusk", "night"):
        recommendations.append("Avoid navigation and travel at night, visibility and safety drop dramatically")
    return recommendations


def explain_outcome(
    decision: Decision,
    state: GameState,
    change: MetricsDelta,
    immediate_effect: str,
    quality: DecisionQuality | None = None,
    lesson: str | None = None,
) -> ConsequenceExplanation:
    """
    Explain a turn from the state it was taken in.

    `change` is the decision's own effect, before passive drift is added.
    Only metrics the decision actually moved get a breakdown.
    """
    outcome_type = OUTCOME_TYPES[quality or "good"]
    risk = assess_outcome_risk(change, outcome_type, state.metrics.energy)

    breakdowns: Dict[str, MetricBreakdown] = {}
    if change.energy:
        breakdowns["energy"] = energy_breakdown(decision, state, change.energy)
    if change.hydration:
        breakdowns["hydration"] = hydration_breakdown(decision, state, change.hydration)
    if change.body_temperature:
        breakdowns["body_temperature"] = temperature_breakdown(decision, state, change.body_temperature)
    if change.morale:
        breakdowns["morale"] = morale_breakdown(change.morale, outcome_type)
    if change.cumulative_risk:
        breakdowns["cumulative_risk"] = risk_breakdown(decision, state, change.cumulative_risk, outcome_type)

    tail = _SUMMARY_TAILS.get(risk, "The outcome was mixed.")
    return ConsequenceExplanation(
        summary=f"{immediate_effect} {tail}",
        outcome_type=outcome_type,
        risk_assessment=risk,
        narrative=build_narrative(decision, state, change, outcome_type),
        breakdowns=breakdowns,
        recommendations=tuple(build_recommendations(decision, state, outcome_type)),
        lesson=lesson,
    )


__all__ = [
    "OUTCOME_TYPES",
    "TRAVEL_DECISIONS",
    "assess_outcome_risk",
    "build_narrative",
    "build_recommendations",
    "energy_breakdown",
    "explain_outcome",
    "hydration_breakdown",
    "intensity",
    "morale_breakdown",
    "risk_breakdown",
    "temperature_breakdown",
]
