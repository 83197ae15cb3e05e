"""Repository exports."""

from .decisions_repo import DECISION_GROUPS, DecisionsRepository
from .principles_repo import Principle, PrinciplesRepository

__all__ = [
    "DECISION_GROUPS",
    "DecisionsRepository",
    "Principle",
    "PrinciplesRepository",
]
