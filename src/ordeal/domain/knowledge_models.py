"""Cross-session knowledge ledger models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ordeal.core.types import PRINCIPLE_CATEGORIES, PrincipleCategory


@dataclass(slots=True)
class PrincipleRecord:
    """How often a principle has been surfaced to the player."""

    principle: str
    category: PrincipleCategory
    first_seen: str
    last_seen: str
    view_count: int = 1


@dataclass(slots=True)
class SessionRecord:
    session_id: str
    start_time: str
    environment: str
    outcome: str = "in_progress"
    end_time: str | None = None
    principles_learned: List[str] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.outcome != "in_progress"


def empty_category_totals() -> Dict[str, int]:
    return {category: 0 for category in PRINCIPLE_CATEGORIES}


@dataclass(slots=True)
class KnowledgeLedger:
    """The whole persisted learning record; loaded, mutated and saved as one unit."""

    principles: Dict[str, PrincipleRecord] = field(default_factory=dict)
    sessions: List[SessionRecord] = field(default_factory=list)
    current_session_id: str | None = None
    total_principles_discovered: int = 0
    category_strengths: Dict[str, int] = field(default_factory=empty_category_totals)

    def current_session(self) -> SessionRecord | None:
        if self.current_session_id is None:
            return None
        for session in self.sessions:
            if session.session_id == self.current_session_id:
                return session
        return None


@dataclass(frozen=True, slots=True)
class CategoryStrength:
    category: PrincipleCategory
    count: int


@dataclass(frozen=True, slots=True)
class KnowledgeStrengths:
    strongest: tuple[CategoryStrength, ...]
    weakest: tuple[CategoryStrength, ...]


@dataclass(frozen=True, slots=True)
class KnowledgeStats:
    total_principles: int
    total_sessions: int
    survival_rate: float
    category_breakdown: Dict[str, int]
