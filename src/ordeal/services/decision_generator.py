"""Builds the list of decisions currently open to the player."""
from __future__ import annotations

from typing import List

from ordeal.data.repositories import DecisionsRepository
from ordeal.domain.decisions import Decision, DecisionDefinition
from ordeal.domain.state import GameState

MAX_DECISIONS = 6


def eligible_definitions(state: GameState, repository: DecisionsRepository) -> List[DecisionDefinition]:
    """Every definition whose requirements the state satisfies, in composition order, deduplicated."""
    seen: set[str] = set()
    eligible: List[DecisionDefinition] = []
    for definition in repository.in_composition_order(state.current_environment):
        if definition.id in seen:
            continue
        if definition.requires.is_met(state, definition.id):
            eligible.append(definition)
            seen.add(definition.id)
    return eligible


def generate_decisions(state: GameState, repository: DecisionsRepository | None = None) -> List[Decision]:
    """Ordered decisions for this turn, critical moments first, at most six."""
    if not state.is_active:
        return []
    repo = repository or DecisionsRepository()
    eligible = eligible_definitions(state, repo)
    critical = [definition for definition in eligible if definition.group == "critical"]
    regular = [definition for definition in eligible if definition.group != "critical"]
    return [definition.decision for definition in critical + regular][:MAX_DECISIONS]
