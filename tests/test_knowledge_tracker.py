from __future__ import annotations

import logging

import pytest

from ordeal.data.errors import KnowledgeStoreError
from ordeal.data.knowledge_store import InMemoryKnowledgeStore
from ordeal.domain.knowledge_models import KnowledgeLedger
from ordeal.services.knowledge_tracker import KnowledgeTracker


def _build_tracker() -> tuple[KnowledgeTracker, InMemoryKnowledgeStore]:
    store = InMemoryKnowledgeStore()
    return KnowledgeTracker(store, clock=lambda: "2026-01-01T00:00:00+00:00"), store


class _FailingStore(InMemoryKnowledgeStore):
    def save(self, ledger: KnowledgeLedger) -> None:
        raise KnowledgeStoreError("disk full")


def test_session_lifecycle() -> None:
    tracker, _ = _build_tracker()
    tracker.start_session("game_1", "forest")
    tracker.record_principle_view("Shelter first.", "shelter")
    assert tracker.get_current_session_principles() == ["Shelter first."]

    tracker.end_session("survived")

    stats = tracker.get_total_stats()
    assert stats.total_sessions == 1
    assert stats.survival_rate == 100
    assert tracker.get_current_session_principles() == []


def test_end_session_without_current_session_is_a_no_op() -> None:
    tracker, store = _build_tracker()
    tracker.start_session("game_1", "desert")
    tracker.end_session("died")
    saves = store.save_count
    ledger = store.load()
    assert ledger.current_session_id is None
    assert len(ledger.sessions) == 1

    tracker.end_session("survived")

    assert store.save_count == saves
    after = store.load()
    assert after.current_session_id is None
    assert len(after.sessions) == 1
    assert after.sessions[0].outcome == "died"
    assert tracker.get_total_stats().survival_rate == 0


def test_repeat_views_count_once_toward_strengths() -> None:
    tracker, _ = _build_tracker()
    tracker.record_principle_view("Boil water.", "water")
    tracker.record_principle_view("Boil water.", "water")

    assert tracker.get_principle_view_count("Boil water.") == 2
    assert tracker.get_total_stats().total_principles == 1
    assert tracker.get_total_stats().category_breakdown["water"] == 1


def test_strengths_and_recommendations() -> None:
    tracker, _ = _build_tracker()
    for index in range(3):
        tracker.record_principle_view(f"Fire {index}", "fire")
    tracker.record_principle_view("Signal 1", "signaling")

    strengths = tracker.get_knowledge_strengths()

    assert [entry.category for entry in strengths.strongest[:2]] == ["fire", "signaling"]
    assert strengths.strongest[0].count == 3
    assert len(strengths.weakest) == 3
    assert all(entry.count == 0 for entry in strengths.weakest)
    assert "fire" not in tracker.get_recommended_categories()


def test_survival_rate_counts_barely_survived() -> None:
    tracker, _ = _build_tracker()
    for index, outcome in enumerate(("survived", "barely_survived", "died", "died")):
        tracker.start_session(f"game_{index}", "coast")
        tracker.end_session(outcome)
    tracker.start_session("game_open", "coast")

    stats = tracker.get_total_stats()
    assert stats.total_sessions == 4
    assert stats.survival_rate == 50


def test_reset_clears_everything() -> None:
    tracker, _ = _build_tracker()
    tracker.record_principle_view("Stay put.", "priorities")
    tracker.reset()
    assert tracker.get_total_stats().total_principles == 0


def test_store_failures_are_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    tracker = KnowledgeTracker(_FailingStore())
    with caplog.at_level(logging.WARNING, logger="ordeal.services.knowledge_tracker"):
        tracker.start_session("game_1", "tundra")
    assert "Knowledge ledger not saved" in caplog.text
