"""Resolved decision outcomes: the permanent per-turn record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Tuple

from ordeal.core.types import DecisionQuality, Environment, PrincipleCategory
from ordeal.domain.decisions import Decision
from ordeal.domain.equipment import EquipmentChanges
from ordeal.domain.metrics import MetricsDelta

OutcomeType = Literal["success", "partial-success", "failure", "critical-failure"]
RiskAssessment = Literal["safe", "manageable", "risky", "dangerous", "critical"]
ReasonCategory = Literal["base", "environmental", "condition"]


@dataclass(frozen=True, slots=True)
class DelayedEffect:
    """A metric change scheduled for a later turn."""

    turn: int
    effect: str
    metrics_change: MetricsDelta


@dataclass(frozen=True, slots=True)
class ChangeReason:
    amount: float
    reason: str
    category: ReasonCategory


@dataclass(frozen=True, slots=True)
class MetricBreakdown:
    final_change: float
    reasons: Tuple[ChangeReason, ...] = ()
    calculation: str | None = None


@dataclass(frozen=True, slots=True)
class ConsequenceExplanation:
    """Why a turn went the way it did, from headline down to per-metric causes."""

    summary: str
    outcome_type: OutcomeType
    risk_assessment: RiskAssessment
    narrative: str
    breakdowns: Dict[str, MetricBreakdown] = field(default_factory=dict)
    recommendations: Tuple[str, ...] = ()
    lesson: str | None = None


@dataclass(frozen=True, slots=True)
class DecisionOutcome:
    decision: Decision
    immediate_effect: str
    consequences: Tuple[str, ...] = ()
    metrics_change: MetricsDelta = field(default_factory=MetricsDelta)
    delayed_effects: Tuple[DelayedEffect, ...] = ()
    equipment_changes: EquipmentChanges | None = None
    environment_change: Environment | None = None
    decision_quality: DecisionQuality | None = None
    survival_principle_alignment: str | None = None
    principle_category: PrincipleCategory | None = None
    was_signal_attempt: bool = False
    was_successful_signal: bool = False
    was_navigation_success: bool = False
    explanation: ConsequenceExplanation | None = None
