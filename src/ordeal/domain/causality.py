"""Threshold crossings and the cause-and-effect chain behind a death."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

from ordeal.domain.metrics import MetricName, PlayerMetrics

CrossingLevel = Literal["warning", "danger", "critical", "fatal"]
StepSeverity = Literal["low", "medium", "high", "critical"]
TrackedMetric = Literal["energy", "hydration", "body_temperature", "injury_severity"]

TRACKED_METRICS: Tuple[TrackedMetric, ...] = ("energy", "hydration", "body_temperature", "injury_severity")
LEVELS_BY_SEVERITY: Tuple[CrossingLevel, ...] = ("fatal", "critical", "danger", "warning")


@dataclass(frozen=True, slots=True)
class Thresholds:
    """
    Level boundaries for one metric.

    `falling` metrics cross a level when they drop to it or below, rising ones
    when they reach it or climb past it. Body temperature has both directions.
    """

    falling: Dict[CrossingLevel, float] | None = None
    rising: Dict[CrossingLevel, float] | None = None


THRESHOLDS: Dict[TrackedMetric, Thresholds] = {
    "energy": Thresholds(falling={"warning": 70, "danger": 50, "critical": 30, "fatal": 10}),
    "hydration": Thresholds(falling={"warning": 70, "danger": 50, "critical": 30, "fatal": 15}),
    "body_temperature": Thresholds(
        falling={"warning": 36.5, "danger": 35, "critical": 34, "fatal": 32},
        rising={"warning": 37.5, "danger": 38, "critical": 39, "fatal": 40},
    ),
    "injury_severity": Thresholds(rising={"warning": 30, "danger": 50, "critical": 70, "fatal": 85}),
}


@dataclass(frozen=True, slots=True)
class ThresholdCrossing:
    """A metric moving past a level boundary on a given turn."""

    turn: int
    metric: TrackedMetric
    previous_value: float
    new_value: float
    threshold: float
    level: CrossingLevel
    decision_id: str | None = None
    decision_text: str | None = None


@dataclass(frozen=True, slots=True)
class CascadeStep:
    turn: int
    decision_id: str
    decision_text: str
    change: float
    severity: StepSeverity
    crossing: ThresholdCrossing | None = None


@dataclass(frozen=True, slots=True)
class CausalityChain:
    """How one early decision led, turn by turn, to a fatal condition."""

    fatal_metric: TrackedMetric
    root_turn: int
    root_decision_id: str
    root_decision_text: str
    cascade: Tuple[CascadeStep, ...]
    pattern: str
    alternatives: Tuple[str, ...]


def detect_crossing(metric: TrackedMetric, previous: float, new: float) -> Tuple[CrossingLevel, float] | None:
    """Most severe level boundary passed between two readings, if any."""
    bounds = THRESHOLDS[metric]
    for level in LEVELS_BY_SEVERITY:
        if bounds.falling is not None:
            limit = bounds.falling[level]
            if previous > limit >= new:
                return level, limit
        if bounds.rising is not None:
            limit = bounds.rising[level]
            if previous < limit <= new:
                return level, limit
    return None


def detect_crossings(
    before: PlayerMetrics,
    after: PlayerMetrics,
    turn: int,
    decision_id: str | None = None,
    decision_text: str | None = None,
) -> Tuple[ThresholdCrossing, ...]:
    crossings = []
    for metric in TRACKED_METRICS:
        previous = getattr(before, metric)
        new = getattr(after, metric)
        found = detect_crossing(metric, previous, new)
        if found is None:
            continue
        level, limit = found
        crossings.append(
            ThresholdCrossing(
                turn=turn,
                metric=metric,
                previous_value=previous,
                new_value=new,
                threshold=limit,
                level=level,
                decision_id=decision_id,
                decision_text=decision_text,
            )
        )
    return tuple(crossings)


def metric_label(metric: MetricName) -> str:
    return metric.replace("_", " ")


__all__ = [
    "CascadeStep",
    "CausalityChain",
    "CrossingLevel",
    "LEVELS_BY_SEVERITY",
    "THRESHOLDS",
    "TRACKED_METRICS",
    "ThresholdCrossing",
    "Thresholds",
    "TrackedMetric",
    "detect_crossing",
    "detect_crossings",
    "metric_label",
]
