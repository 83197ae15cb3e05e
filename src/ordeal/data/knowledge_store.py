"""Persistence backends for the cross-session knowledge ledger."""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol

from ordeal.core.types import PRINCIPLE_CATEGORIES
from ordeal.data.errors import DataLoadError, KnowledgeStoreError
from ordeal.data.json_loader import load_json, write_json_atomic
from ordeal.domain.knowledge_models import (
    KnowledgeLedger,
    PrincipleRecord,
    SessionRecord,
    empty_category_totals,
)

logger = logging.getLogger(__name__)

LEDGER_VERSION = 1
_SESSION_OUTCOMES = ("survived", "barely_survived", "died", "in_progress")


class KnowledgeStore(Protocol):
    """Load/save contract for the ledger. `load` never raises."""

    def load(self) -> KnowledgeLedger: ...

    def save(self, ledger: KnowledgeLedger) -> None: ...


class InMemoryKnowledgeStore:
    """Keeps the ledger in memory; used by tests and when no disk is wanted."""

    def __init__(self, ledger: KnowledgeLedger | None = None) -> None:
        self._ledger = copy.deepcopy(ledger) if ledger is not None else KnowledgeLedger()
        self.save_count = 0

    def load(self) -> KnowledgeLedger:
        return copy.deepcopy(self._ledger)

    def save(self, ledger: KnowledgeLedger) -> None:
        self._ledger = copy.deepcopy(ledger)
        self.save_count += 1


class JsonFileKnowledgeStore:
    """Stores the ledger as a single JSON document."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> KnowledgeLedger:
        if not self._path.exists():
            return KnowledgeLedger()
        try:
            raw = load_json(self._path)
            return ledger_from_payload(raw)
        except (DataLoadError, ValueError, TypeError, KeyError) as exc:
            logger.warning("Ignoring unreadable knowledge ledger at %s: %s", self._path, exc)
            return KnowledgeLedger()

    def save(self, ledger: KnowledgeLedger) -> None:
        try:
            write_json_atomic(self._path, ledger_to_payload(ledger))
        except OSError as exc:
            raise KnowledgeStoreError(f"Unable to write knowledge ledger: {self._path}") from exc


def ledger_to_payload(ledger: KnowledgeLedger) -> Dict[str, Any]:
    return {
        "version": LEDGER_VERSION,
        "principles": [
            {
                "principle": record.principle,
                "category": record.category,
                "first_seen": record.first_seen,
                "last_seen": record.last_seen,
                "view_count": record.view_count,
            }
            for record in ledger.principles.values()
        ],
        "sessions": [
            {
                "session_id": session.session_id,
                "start_time": session.start_time,
                "end_time": session.end_time,
                "environment": session.environment,
                "outcome": session.outcome,
                "principles_learned": list(session.principles_learned),
            }
            for session in ledger.sessions
        ],
        "current_session_id": ledger.current_session_id,
        "stats": {
            "total_principles_discovered": ledger.total_principles_discovered,
            "category_strengths": dict(ledger.category_strengths),
        },
    }


def ledger_from_payload(raw: object) -> KnowledgeLedger:
    """Rebuild a ledger from JSON, raising ValueError on a malformed document."""
    if not isinstance(raw, Mapping):
        raise ValueError("ledger must be a JSON object")

    principles: Dict[str, PrincipleRecord] = {}
    for entry in _as_list(raw.get("principles", []), "principles"):
        if not isinstance(entry, Mapping):
            raise ValueError("principle records must be objects")
        category = entry["category"]
        if category not in PRINCIPLE_CATEGORIES:
            raise ValueError(f"unknown category {category!r}")
        record = PrincipleRecord(
            principle=str(entry["principle"]),
            category=category,
            first_seen=str(entry["first_seen"]),
            last_seen=str(entry["last_seen"]),
            view_count=int(entry["view_count"]),
        )
        principles[record.principle] = record

    sessions: List[SessionRecord] = []
    for entry in _as_list(raw.get("sessions", []), "sessions"):
        if not isinstance(entry, Mapping):
            raise ValueError("session records must be objects")
        outcome = entry.get("outcome", "in_progress")
        if outcome not in _SESSION_OUTCOMES:
            raise ValueError(f"unknown session outcome {outcome!r}")
        end_time = entry.get("end_time")
        sessions.append(
            SessionRecord(
                session_id=str(entry["session_id"]),
                start_time=str(entry["start_time"]),
                environment=str(entry["environment"]),
                outcome=outcome,
                end_time=str(end_time) if end_time is not None else None,
                principles_learned=[str(text) for text in _as_list(entry.get("principles_learned", []), "principles_learned")],
            )
        )

    current = raw.get("current_session_id")
    stats = raw.get("stats")
    if isinstance(stats, Mapping):
        total = int(stats.get("total_principles_discovered", len(principles)))
        strengths = empty_category_totals()
        raw_strengths = stats.get("category_strengths", {})
        if not isinstance(raw_strengths, Mapping):
            raise ValueError("category_strengths must be an object")
        for category, count in raw_strengths.items():
            if category in strengths:
                strengths[category] = int(count)
    else:
        total = len(principles)
        strengths = empty_category_totals()
        for record in principles.values():
            strengths[record.category] += 1

    return KnowledgeLedger(
        principles=principles,
        sessions=sessions,
        current_session_id=str(current) if current is not None else None,
        total_principles_discovered=total,
        category_strengths=strengths,
    )


def _as_list(value: object, context: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{context} must be a list")
    return value
