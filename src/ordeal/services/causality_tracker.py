"""Traces a death back to the decision that started the slide."""
from __future__ import annotations

from typing import Dict, List, Tuple

from ordeal.domain.causality import (
    TRACKED_METRICS,
    CascadeStep,
    CausalityChain,
    StepSeverity,
    ThresholdCrossing,
    TrackedMetric,
)
from ordeal.domain.state import GameState

# Death reasons from check_end_conditions and the metric each one traces back to.
REASON_METRICS: Dict[str, TrackedMetric] = {
    "Severe hypothermia": "body_temperature",
    "Hyperthermia": "body_temperature",
    "Complete physical collapse from exhaustion and dehydration": "energy",
    "Fatal exhaustion": "energy",
    "Fatal dehydration": "hydration",
    "Injury complications": "injury_severity",
}

_LEVEL_SEVERITY: Dict[str, StepSeverity] = {
    "fatal": "critical",
    "critical": "critical",
    "danger": "high",
    "warning": "medium",
}
_LEVEL_RANK = {"warning": 1, "danger": 2, "critical": 3, "fatal": 4}
_NAVIGATION_HINTS = ("navigate", "backtrack")


def fatal_metric(state: GameState, reason: str | None) -> TrackedMetric | None:
    """Metric that killed the player, by death reason or by the worst crossing on record."""
    if reason in REASON_METRICS:
        return REASON_METRICS[reason]
    if not state.threshold_crossings:
        return None
    worst = max(state.threshold_crossings, key=lambda c: (_LEVEL_RANK[c.level], c.turn))
    return worst.metric


def _metric_change(state: GameState, index: int, metric: TrackedMetric) -> float:
    return state.history[index].metrics_change.get(metric)


def _rising(state: GameState, metric: TrackedMetric) -> bool:
    if metric == "body_temperature":
        return state.metrics.body_temperature > 37
    return metric == "injury_severity"


def identify_root_cause(state: GameState, metric: TrackedMetric) -> int | None:
    """Turn of the decision that started the decline of `metric`.

    The first danger or critical crossing wins. Without one, the turn whose
    own change hurt the metric most is used.
    """
    relevant = sorted(
        (c for c in state.threshold_crossings if c.metric == metric and c.level in ("danger", "critical")),
        key=lambda c: c.turn,
    )
    if relevant:
        return relevant[0].turn
    if not state.history:
        return None

    rising = _rising(state, metric)
    worst_turn = 1
    worst = 0.0
    for index in range(len(state.history)):
        change = _metric_change(state, index, metric)
        if (change > worst) if rising else (change < worst):
            worst = change
            worst_turn = index + 1
    return worst_turn


def step_severity(change: float, crossing: ThresholdCrossing | None) -> StepSeverity:
    if crossing is not None:
        return _LEVEL_SEVERITY[crossing.level]
    if abs(change) > 15:
        return "high"
    if abs(change) > 8:
        return "medium"
    return "low"


def alternative_path(metric: TrackedMetric, decision_id: str, final_value: float) -> Tuple[str, Tuple[str, ...]]:
    """Recurring pattern behind the death and what would have broken it."""
    if metric == "energy":
        steps = [
            "Rest in shelter to restore energy above 60",
            "Avoid high-effort actions while exhausted",
            "Maintain shelter and fire to reduce passive energy loss",
        ]
        if any(hint in decision_id for hint in _NAVIGATION_HINTS):
            steps.append("Wait for better conditions before attempting navigation")
        return "High-effort decisions while exhausted in harsh conditions", tuple(steps)
    if metric == "hydration":
        return "Delayed water-finding until critical dehydration", (
            "Prioritize finding water as soon as hydration drops below 60",
            "Use a water bottle or container if you carry one",
            "Avoid high-exertion activities that increase water loss",
            "Seek shelter to reduce dehydration from heat and exertion",
        )
    if metric == "body_temperature" and final_value < 35:
        return "Neglected shelter and fire in freezing temperatures", (
            "Build or improve shelter immediately to block wind and precipitation",
            "Start and maintain a fire for warmth",
            "Avoid getting wet, wetness amplifies heat loss",
            "Rest in shelter rather than attempting high-effort actions in the cold",
        )
    if metric == "body_temperature":
        return "Overexertion in extreme heat", (
            "Seek shade and shelter from direct sun",
            "Avoid exertion during peak heat",
            "Prioritize hydration to support cooling",
            "Rest during the hottest periods",
        )
    return "Took high-risk actions while injured", (
        "Treat injuries immediately using first aid equipment",
        "Avoid high-risk actions while injured",
        "Rest to prevent the injury worsening",
        "Do not attempt risky navigation or panic moves",
    )


def build_causality_chain(state: GameState, reason: str | None) -> CausalityChain | None:
    """Root cause, cascade and alternative path for a run that ended in death."""
    metric = fatal_metric(state, reason)
    if metric is None or metric not in TRACKED_METRICS:
        return None
    root_turn = identify_root_cause(state, metric)
    if root_turn is None:
        return None

    crossings = {c.turn: c for c in state.threshold_crossings if c.metric == metric}
    cascade: List[CascadeStep] = []
    for index in range(root_turn - 1, len(state.history)):
        change = _metric_change(state, index, metric)
        if not change:
            continue
        outcome = state.history[index]
        turn = index + 1
        crossing = crossings.get(turn)
        cascade.append(
            CascadeStep(
                turn=turn,
                decision_id=outcome.decision.id,
                decision_text=outcome.decision.text,
                change=change,
                severity=step_severity(change, crossing),
                crossing=crossing,
            )
        )

    root = state.history[root_turn - 1].decision
    pattern, alternatives = alternative_path(metric, root.id, getattr(state.metrics, metric))
    return CausalityChain(
        fatal_metric=metric,
        root_turn=root_turn,
        root_decision_id=root.id,
        root_decision_text=root.text,
        cascade=tuple(cascade),
        pattern=pattern,
        alternatives=alternatives,
    )


__all__ = [
    "REASON_METRICS",
    "alternative_path",
    "build_causality_chain",
    "fatal_metric",
    "identify_root_cause",
    "step_severity",
]
