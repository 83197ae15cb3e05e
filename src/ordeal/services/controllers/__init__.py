"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .game_controller import ALIGNMENT_DELTAS, GameController

__all__ = [
    "ALIGNMENT_DELTAS",
    "GameController",
]
