"""Shared type aliases for the core and domain layers."""
from typing import Literal

Environment = Literal["mountains", "desert", "forest", "coast", "tundra", "urban-edge"]
Weather = Literal["clear", "rain", "wind", "snow", "heat", "storm"]
TimeOfDay = Literal["dawn", "morning", "midday", "afternoon", "dusk", "night"]
GameStatus = Literal["active", "ended"]
GameOutcome = Literal["survived", "barely_survived", "died", "undefined"]
DecisionQuality = Literal["excellent", "good", "poor", "critical-error"]
EquipmentCondition = Literal["good", "worn", "damaged"]
PrincipleCategory = Literal[
    "shelter",
    "water",
    "fire",
    "food",
    "navigation",
    "signaling",
    "firstAid",
    "priorities",
    "psychology",
    "weather",
]
NotificationSeverity = Literal["success", "warning", "danger", "info"]

ENVIRONMENTS: tuple[Environment, ...] = ("mountains", "desert", "forest", "coast", "tundra", "urban-edge")
TIMES_OF_DAY: tuple[TimeOfDay, ...] = ("dawn", "morning", "midday", "afternoon", "dusk", "night")
PRINCIPLE_CATEGORIES: tuple[PrincipleCategory, ...] = (
    "shelter",
    "water",
    "fire",
    "food",
    "navigation",
    "signaling",
    "firstAid",
    "priorities",
    "psychology",
    "weather",
)

__all__ = [
    "DecisionQuality",
    "ENVIRONMENTS",
    "Environment",
    "EquipmentCondition",
    "GameOutcome",
    "GameStatus",
    "NotificationSeverity",
    "PRINCIPLE_CATEGORIES",
    "PrincipleCategory",
    "TIMES_OF_DAY",
    "TimeOfDay",
    "Weather",
]
