"""Severity classification for the message shown after each turn."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ordeal.core.types import NotificationSeverity
from ordeal.domain.outcome import DecisionOutcome

DANGER_RISK_LEVEL = 7


@dataclass(frozen=True, slots=True)
class Notification:
    severity: NotificationSeverity
    title: str
    message: str
    details: Tuple[str, ...] = ()


def classify_severity(outcome: DecisionOutcome) -> NotificationSeverity:
    """Pure function of the outcome's quality, risk and flags."""
    quality = outcome.decision_quality
    if quality == "critical-error":
        return "danger"
    if quality == "poor":
        return "danger" if outcome.decision.risk_level >= DANGER_RISK_LEVEL else "warning"
    if quality == "excellent":
        return "success"
    if outcome.was_successful_signal or outcome.was_navigation_success:
        return "success"
    return "info"


_TITLES = {
    "danger": "Dangerous choice",
    "warning": "Questionable choice",
    "success": "Well done",
    "info": "Turn resolved",
}


def build_notification(outcome: DecisionOutcome) -> Notification:
    severity = classify_severity(outcome)
    return Notification(
        severity=severity,
        title=_TITLES[severity],
        message=outcome.immediate_effect,
        details=outcome.consequences,
    )


__all__ = ["DANGER_RISK_LEVEL", "Notification", "build_notification", "classify_severity"]
