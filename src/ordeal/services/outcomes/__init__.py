"""Decision outcome resolution.

Importing this package registers every resolver module with the registry.
"""

from . import camp, care, fire, navigation, scripted, signals, water  # noqa: F401
from .base import RESOLVERS, Resolution, ResolutionContext, resolves
from .resolver import (
    NAVIGATION_ACTIONS,
    SIGNAL_ACTIONS,
    apply_decision,
    heat_penalty,
    is_navigation_success,
    is_successful_signal,
    morale_adjustment,
    navigation_threshold,
    scale_energy_cost,
    success_bonus,
)

__all__ = [
    "NAVIGATION_ACTIONS",
    "RESOLVERS",
    "Resolution",
    "ResolutionContext",
    "SIGNAL_ACTIONS",
    "apply_decision",
    "heat_penalty",
    "is_navigation_success",
    "is_successful_signal",
    "morale_adjustment",
    "navigation_threshold",
    "resolves",
    "scale_energy_cost",
    "success_bonus",
]
