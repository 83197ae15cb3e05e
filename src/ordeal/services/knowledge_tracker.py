"""Cross-session learning ledger.

Every write loads the whole ledger from the store, mutates it and saves it
back. Store failures are logged and gameplay carries on.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List

from ordeal.core.types import PRINCIPLE_CATEGORIES, GameOutcome, PrincipleCategory
from ordeal.data.errors import DataError
from ordeal.data.knowledge_store import InMemoryKnowledgeStore, KnowledgeStore
from ordeal.domain.knowledge_models import (
    CategoryStrength,
    KnowledgeLedger,
    KnowledgeStats,
    KnowledgeStrengths,
    PrincipleRecord,
    SessionRecord,
)

logger = logging.getLogger(__name__)

STRENGTH_WINDOW = 3


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class KnowledgeTracker:
    """Records which principles a player has seen and how their runs ended."""

    def __init__(self, store: KnowledgeStore | None = None, clock: Callable[[], str] = _utc_now) -> None:
        self._store: KnowledgeStore = store if store is not None else InMemoryKnowledgeStore()
        self._clock = clock

    def _load(self) -> KnowledgeLedger:
        return self._store.load()

    def _save(self, ledger: KnowledgeLedger) -> None:
        try:
            self._store.save(ledger)
        except DataError as exc:
            logger.warning("Knowledge ledger not saved: %s", exc)

    def start_session(self, session_id: str, environment: str) -> None:
        ledger = self._load()
        ledger.sessions.append(SessionRecord(session_id=session_id, start_time=self._clock(), environment=environment))
        ledger.current_session_id = session_id
        self._save(ledger)
        logger.info("Knowledge session %s started in %s", session_id, environment)

    def end_session(self, outcome: GameOutcome) -> None:
        """Close the current session. Without one this does nothing."""
        ledger = self._load()
        if ledger.current_session_id is None:
            return
        session = ledger.current_session()
        if session is not None:
            session.end_time = self._clock()
            session.outcome = outcome
        logger.info("Knowledge session %s ended: %s", ledger.current_session_id, outcome)
        ledger.current_session_id = None
        self._save(ledger)

    def record_principle_view(self, principle: str, category: PrincipleCategory) -> None:
        ledger = self._load()
        now = self._clock()
        record = ledger.principles.get(principle)
        if record is not None:
            record.view_count += 1
            record.last_seen = now
        else:
            ledger.principles[principle] = PrincipleRecord(
                principle=principle,
                category=category,
                first_seen=now,
                last_seen=now,
            )
            ledger.total_principles_discovered += 1
            ledger.category_strengths[category] = ledger.category_strengths.get(category, 0) + 1

        session = ledger.current_session()
        if session is not None and principle not in session.principles_learned:
            session.principles_learned.append(principle)
        self._save(ledger)

    def get_principle_view_count(self, principle: str) -> int:
        record = self._load().principles.get(principle)
        return record.view_count if record is not None else 0

    def get_current_session_principles(self) -> List[str]:
        session = self._load().current_session()
        return list(session.principles_learned) if session is not None else []

    def get_knowledge_strengths(self) -> KnowledgeStrengths:
        """Top three and bottom three categories by discovered principles."""
        strengths = self._load().category_strengths
        ranked = sorted(
            (CategoryStrength(category, strengths.get(category, 0)) for category in PRINCIPLE_CATEGORIES),
            key=lambda entry: entry.count,
            reverse=True,
        )
        return KnowledgeStrengths(
            strongest=tuple(ranked[:STRENGTH_WINDOW]),
            weakest=tuple(reversed(ranked[-STRENGTH_WINDOW:])),
        )

    def get_total_stats(self) -> KnowledgeStats:
        ledger = self._load()
        completed = [session for session in ledger.sessions if session.is_completed]
        survived = sum(1 for session in completed if session.outcome in ("survived", "barely_survived"))
        rate = survived / len(completed) * 100 if completed else 0.0
        return KnowledgeStats(
            total_principles=ledger.total_principles_discovered,
            total_sessions=len(completed),
            survival_rate=rate,
            category_breakdown=dict(ledger.category_strengths),
        )

    def get_recommended_categories(self) -> List[PrincipleCategory]:
        return [entry.category for entry in self.get_knowledge_strengths().weakest]

    def reset(self) -> None:
        self._save(KnowledgeLedger())
        logger.info("Knowledge ledger reset")


__all__ = ["KnowledgeTracker"]
