from __future__ import annotations

import json
from pathlib import Path

import pytest

from ordeal.data.errors import KnowledgeStoreError
from ordeal.data.knowledge_store import JsonFileKnowledgeStore, ledger_from_payload
from ordeal.domain.knowledge_models import KnowledgeLedger
from ordeal.services.knowledge_tracker import KnowledgeTracker


def test_missing_file_loads_empty_ledger(tmp_path: Path) -> None:
    ledger = JsonFileKnowledgeStore(tmp_path / "knowledge.json").load()
    assert ledger.principles == {}
    assert ledger.sessions == []


def test_ledger_survives_a_restart(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "knowledge.json"
    tracker = KnowledgeTracker(JsonFileKnowledgeStore(path))
    tracker.start_session("game_1", "mountains")
    tracker.record_principle_view("Stay dry.", "shelter")
    tracker.end_session("barely_survived")

    reloaded = KnowledgeTracker(JsonFileKnowledgeStore(path))

    assert reloaded.get_principle_view_count("Stay dry.") == 1
    assert reloaded.get_total_stats().total_sessions == 1
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["sessions"][0]["outcome"] == "barely_survived"
    assert payload["current_session_id"] is None


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "knowledge.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileKnowledgeStore(path).load().total_principles_discovered == 0


def test_unwritable_path_raises_store_error(tmp_path: Path) -> None:
    directory = tmp_path / "knowledge.json"
    directory.mkdir()
    with pytest.raises(KnowledgeStoreError):
        JsonFileKnowledgeStore(directory).save(KnowledgeLedger())


def test_strengths_rebuilt_when_stats_missing() -> None:
    ledger = ledger_from_payload(
        {
            "principles": [
                {
                    "principle": "Boil water.",
                    "category": "water",
                    "first_seen": "a",
                    "last_seen": "b",
                    "view_count": 3,
                }
            ],
            "sessions": [],
        }
    )
    assert ledger.total_principles_discovered == 1
    assert ledger.category_strengths["water"] == 1


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValueError):
        ledger_from_payload(
            {"principles": [{"principle": "x", "category": "magic", "first_seen": "", "last_seen": "", "view_count": 1}]}
        )
