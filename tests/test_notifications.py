from __future__ import annotations

from ordeal.domain.outcome import DecisionOutcome
from ordeal.services.notifications import build_notification, classify_severity
from tests.helpers.builders import build_decision


def _outcome(quality, risk: int = 1, **flags: bool) -> DecisionOutcome:
    return DecisionOutcome(
        decision=build_decision("scout", risk_level=risk),
        immediate_effect="You look around.",
        consequences=("You find little.",),
        decision_quality=quality,
        **flags,
    )


def test_critical_errors_are_danger() -> None:
    assert classify_severity(_outcome("critical-error")) == "danger"


def test_poor_choices_escalate_with_risk() -> None:
    assert classify_severity(_outcome("poor", risk=7)) == "danger"
    assert classify_severity(_outcome("poor", risk=6)) == "warning"


def test_successes() -> None:
    assert classify_severity(_outcome("excellent")) == "success"
    assert classify_severity(_outcome("good", was_successful_signal=True)) == "success"
    assert classify_severity(_outcome("good", was_navigation_success=True)) == "success"


def test_ordinary_turn_is_info() -> None:
    assert classify_severity(_outcome("good")) == "info"


def test_notification_carries_outcome_text() -> None:
    notification = build_notification(_outcome("poor", risk=3))
    assert notification.severity == "warning"
    assert notification.message == "You look around."
    assert notification.details == ("You find little.",)
