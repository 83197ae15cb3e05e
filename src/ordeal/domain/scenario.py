"""Scenario definitions produced once per run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from ordeal.core.types import Environment, TimeOfDay, Weather
from ordeal.domain.equipment import Equipment

Wetness = Literal["soaked", "damp", "dry"]


@dataclass(frozen=True, slots=True)
class InitialCondition:
    """How the player starts the run, with its starting metric adjustments."""

    key: str
    description: str
    energy: float = 0.0
    morale: float = 0.0
    injury_severity: float = 0.0
    energy_override: float | None = None
    hydration_override: float | None = None
    body_temperature_override: float | None = None
    starting_shelter: float = 20.0


INITIAL_CONDITIONS: Tuple[InitialCondition, ...] = (
    InitialCondition("disoriented", "You are uninjured but disoriented."),
    InitialCondition(
        "sprained_ankle",
        "Your ankle is sprained. Movement is painful.",
        energy=-15,
        injury_severity=25,
    ),
    InitialCondition(
        "head_injury",
        "You have a minor head injury. Your thinking feels slow.",
        energy=-10,
        morale=-20,
        injury_severity=30,
    ),
    InitialCondition(
        "exhausted",
        "You are exhausted from hours of hiking.",
        morale=-15,
        energy_override=45,
    ),
    InitialCondition(
        "bruised_ribs",
        "You slipped and bruised your ribs. Breathing deeply hurts.",
        energy=-10,
        injury_severity=15,
    ),
    InitialCondition(
        "cold",
        "You are cold and beginning to shiver.",
        energy=-10,
        body_temperature_override=36.2,
    ),
    InitialCondition(
        "dehydrated",
        "You are slightly dehydrated and your head aches.",
        energy=-15,
        hydration_override=65,
    ),
)


@dataclass(frozen=True, slots=True)
class Scenario:
    """Immutable starting conditions of a run."""

    environment: Environment
    weather: Weather
    time_of_day: TimeOfDay
    temperature: float
    wind_speed: float
    terrain_difficulty: int
    initial_condition: InitialCondition
    distance_to_safety: str
    wetness: Wetness
    backpack_capacity_liters: float
    available_equipment: Tuple[Equipment, ...] = ()


_ENVIRONMENT_TEXT = {
    "mountains": "steep mountain terrain",
    "desert": "arid desert landscape",
    "forest": "dense forest",
    "coast": "rocky coastline",
    "tundra": "frozen tundra",
    "urban-edge": "abandoned industrial area on the city outskirts",
}
_WEATHER_TEXT = {
    "clear": "The sky is clear",
    "rain": "Rain is falling steadily",
    "wind": "Strong winds blow across the landscape",
    "snow": "Snow is falling",
    "heat": "The heat is oppressive",
    "storm": "A storm is building",
}
_TIME_TEXT = {
    "dawn": "First light is breaking",
    "morning": "It is mid-morning",
    "midday": "The sun is directly overhead",
    "afternoon": "It is late afternoon",
    "dusk": "The light is fading",
    "night": "It is full dark",
}


def describe_scenario(scenario: Scenario) -> str:
    return (
        f"You are alone in {_ENVIRONMENT_TEXT[scenario.environment]}. "
        f"{_WEATHER_TEXT[scenario.weather]}. {_TIME_TEXT[scenario.time_of_day]}. "
        f"The temperature is {scenario.temperature:g}°C. "
        f"{scenario.initial_condition.description} {scenario.distance_to_safety}"
    )
