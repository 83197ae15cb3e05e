"""Player-selectable decisions."""
from __future__ import annotations

from dataclasses import dataclass

from ordeal.domain.requirements import NO_REQUIREMENTS, Requirements


@dataclass(frozen=True, slots=True)
class Decision:
    """A selectable action with static cost, risk and duration.

    `energy_cost` may be negative for recovery actions. `risk_level` runs 1-10
    and `time_required` is in hours.
    """

    id: str
    text: str
    energy_cost: float
    risk_level: int
    time_required: float
    environmental_hint: str | None = None


@dataclass(frozen=True, slots=True)
class DecisionDefinition:
    """A decision template plus the conditions under which it is offered."""

    decision: Decision
    group: str
    requires: Requirements = NO_REQUIREMENTS

    @property
    def id(self) -> str:
        return self.decision.id
