"""Procedural scenario generation biased toward the player's weakest knowledge."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Mapping, Sequence, Tuple

from ordeal.core.rng import RandomSource
from ordeal.core.types import ENVIRONMENTS, TIMES_OF_DAY, Environment, PrincipleCategory, TimeOfDay, Weather
from ordeal.domain.equipment import Equipment, make_item
from ordeal.domain.scenario import INITIAL_CONDITIONS, Scenario, Wetness

if TYPE_CHECKING:
    from ordeal.services.knowledge_tracker import KnowledgeTracker

logger = logging.getLogger(__name__)

WEATHER_BY_ENVIRONMENT: Dict[Environment, Tuple[Weather, ...]] = {
    "mountains": ("clear", "wind", "snow", "storm"),
    "desert": ("clear", "heat", "wind", "storm"),
    "forest": ("clear", "rain", "wind", "storm"),
    "coast": ("clear", "rain", "wind", "storm"),
    "tundra": ("clear", "wind", "snow", "storm"),
    "urban-edge": ("clear", "rain", "wind", "storm"),
}

# Environments whose conditions exercise each knowledge category.
CATEGORY_ENVIRONMENTS: Dict[PrincipleCategory, Tuple[Environment, ...]] = {
    "shelter": ("mountains", "tundra", "forest"),
    "water": ("desert", "coast", "tundra"),
    "fire": ("tundra", "mountains", "forest"),
    "food": ("forest", "coast", "desert"),
    "navigation": ("desert", "forest", "tundra"),
    "signaling": ("coast", "mountains", "urban-edge"),
    "firstAid": ("mountains", "urban-edge", "forest"),
    "priorities": ("desert", "tundra", "mountains"),
    "psychology": ("tundra", "desert", "urban-edge"),
    "weather": ("mountains", "coast", "tundra"),
}

EQUIPMENT_POOL: Tuple[str, ...] = (
    "Water bottle (half full)",
    "Emergency blanket",
    "Torn tarp",
    "Lighter",
    "Matches",
    "Tinder bundle",
    "Kindling sticks",
    "Fuel logs",
    "Signal mirror",
    "Whistle",
    "Flashlight",
    "Knife",
    "Rope (10ft)",
    "First aid kit (partial)",
    "Bandages",
    "Antiseptic wipes",
    "Energy bar",
    "Phone (no signal, 15% battery)",
)

_BASE_TEMPERATURE: Dict[Environment, Tuple[int, int]] = {
    "mountains": (0, 15),
    "desert": (25, 45),
    "forest": (10, 25),
    "coast": (12, 22),
    "tundra": (-15, 5),
    "urban-edge": (8, 28),
}
_WEATHER_TEMPERATURE_SHIFT: Dict[Weather, Tuple[int, int]] = {
    "snow": (-15, -5),
    "heat": (10, 20),
    "wind": (-8, -3),
    "storm": (-10, -5),
}
_BACKPACK_CAPACITY: Dict[Environment, Tuple[int, int]] = {
    "urban-edge": (18, 25),
    "coast": (28, 38),
    "forest": (28, 38),
    "mountains": (35, 50),
    "desert": (35, 50),
    "tundra": (45, 65),
}
_HARSH_WEATHER: Tuple[Weather, ...] = ("snow", "storm", "wind")
_DRY_WEATHER: Tuple[Weather, ...] = ("heat", "clear")
_WEATHER_BIAS_CHANCE = 0.6

DISTANCE_DESCRIPTIONS: Tuple[str, ...] = (
    "Unknown. You lost your bearings.",
    "You think you are 5-10 km from the trailhead.",
    "You estimate 15-20 km to the nearest road.",
    "Uncertain. You have not seen landmarks in hours.",
    "You believe civilization is within 3-5 km.",
    "You are far from help. Perhaps 30+ km.",
    "You passed a ranger station roughly 8 km back.",
)
_WETNESS: Tuple[Wetness, ...] = ("soaked", "damp", "dry")


def environment_weights(weak_categories: Sequence[PrincipleCategory]) -> Dict[Environment, int]:
    """Selection weight per environment: 1, plus 2 for every weak category it exercises."""
    weights: Dict[Environment, int] = {environment: 1 for environment in ENVIRONMENTS}
    for category in weak_categories:
        for environment in CATEGORY_ENVIRONMENTS.get(category, ()):
            weights[environment] += 2
    return weights


def pick_weighted_environment(weights: Mapping[Environment, int], rng: RandomSource) -> Environment:
    pool: List[Environment] = []
    for environment in ENVIRONMENTS:
        pool.extend([environment] * weights.get(environment, 0))
    return rng.choice(pool)


def pick_weather(
    environment: Environment,
    weak_categories: Sequence[PrincipleCategory],
    rng: RandomSource,
) -> Weather:
    options = WEATHER_BY_ENVIRONMENT[environment]
    weather = rng.choice(options)

    if "fire" in weak_categories or "shelter" in weak_categories:
        harsh = [option for option in options if option in _HARSH_WEATHER]
        if harsh and rng.random() < _WEATHER_BIAS_CHANCE:
            weather = rng.choice(harsh)

    if "water" in weak_categories and environment in ("desert", "coast"):
        if rng.random() < _WEATHER_BIAS_CHANCE:
            dry = [option for option in options if option in _DRY_WEATHER]
            if dry:
                weather = rng.choice(dry)
    return weather


def roll_temperature(environment: Environment, weather: Weather, time_of_day: TimeOfDay, rng: RandomSource) -> int:
    low, high = _BASE_TEMPERATURE[environment]
    temperature = rng.randint(low, high)
    if weather in _WEATHER_TEMPERATURE_SHIFT:
        low, high = _WEATHER_TEMPERATURE_SHIFT[weather]
        temperature += rng.randint(low, high)
    if time_of_day in ("night", "dawn"):
        temperature -= rng.randint(5, 12)
    elif time_of_day == "midday":
        temperature += rng.randint(3, 8)
    return temperature


def roll_wind_speed(environment: Environment, weather: Weather, rng: RandomSource) -> int:
    if weather == "wind":
        wind = rng.randint(25, 45)
    elif weather == "storm":
        wind = rng.randint(35, 60)
    elif weather == "clear":
        wind = rng.randint(0, 10)
    else:
        wind = rng.randint(5, 20)

    if environment in ("coast", "tundra", "mountains"):
        wind += rng.randint(0, 10)
    elif environment == "forest":
        wind = max(0, wind - rng.randint(5, 15))
    return max(0, wind)


def roll_backpack_capacity(environment: Environment, rng: RandomSource) -> int:
    low, high = _BACKPACK_CAPACITY.get(environment, (35, 35))
    return rng.randint(low, high)


def roll_available_equipment(rng: RandomSource) -> Tuple[Equipment, ...]:
    """A shuffled subset of 10-14 items from the equipment pool."""
    names = list(EQUIPMENT_POOL)
    rng.shuffle(names)
    count = rng.randint(10, 14)
    return tuple(make_item(name) for name in names[:count])


class ScenarioGenerator:
    """Builds scenarios, consulting the knowledge ledger when one is supplied."""

    def __init__(self, rng: RandomSource, knowledge_tracker: "KnowledgeTracker | None" = None) -> None:
        self._rng = rng
        self._knowledge = knowledge_tracker

    def weak_categories(self) -> List[PrincipleCategory]:
        """Categories to bias toward, empty until a session has been completed."""
        if self._knowledge is None:
            return []
        if self._knowledge.get_total_stats().total_sessions == 0:
            return []
        return self._knowledge.get_recommended_categories()

    def generate(self) -> Scenario:
        rng = self._rng
        weak = self.weak_categories()
        if weak:
            weights = environment_weights(weak)
            logger.debug("Adaptive environment weights %s for weak categories %s", weights, weak)
            environment = pick_weighted_environment(weights, rng)
        else:
            environment = rng.choice(ENVIRONMENTS)

        weather = pick_weather(environment, weak, rng)
        time_of_day = rng.choice(TIMES_OF_DAY)
        temperature = roll_temperature(environment, weather, time_of_day, rng)
        wind_speed = roll_wind_speed(environment, weather, rng)
        capacity = roll_backpack_capacity(environment, rng)
        available = roll_available_equipment(rng)

        return Scenario(
            environment=environment,
            weather=weather,
            time_of_day=time_of_day,
            temperature=temperature,
            wind_speed=wind_speed,
            terrain_difficulty=rng.randint(3, 8),
            initial_condition=rng.choice(INITIAL_CONDITIONS),
            distance_to_safety=rng.choice(DISTANCE_DESCRIPTIONS),
            wetness=rng.choice(_WETNESS),
            backpack_capacity_liters=capacity,
            available_equipment=available,
        )


__all__ = [
    "CATEGORY_ENVIRONMENTS",
    "EQUIPMENT_POOL",
    "ScenarioGenerator",
    "WEATHER_BY_ENVIRONMENT",
    "environment_weights",
    "pick_weather",
    "pick_weighted_environment",
    "roll_available_equipment",
    "roll_backpack_capacity",
    "roll_temperature",
    "roll_wind_speed",
]
