"""Wind chill model used for ambient temperature effects."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WindEffect:
    wind_speed: float
    wind_level: int
    delta_temperature: float
    effective_temperature: float


def wind_level(wind_speed: float) -> int:
    """Bucket a wind speed (km/h) into levels 0-4."""
    if wind_speed < 5:
        return 0
    if wind_speed <= 15:
        return 1
    if wind_speed <= 30:
        return 2
    if wind_speed <= 50:
        return 3
    return 4


# (minimum air temperature, chill per level, floor)
_CHILL_BANDS: tuple[tuple[float, float, float], ...] = (
    (10.0, 1.0, 4.0),
    (0.0, 2.0, 8.0),
    (-10.0, 3.0, 12.0),
    (-20.0, 4.0, 16.0),
)
_COLDEST_BAND: tuple[float, float] = (5.0, 20.0)


def wind_temperature_effect(air_temperature: float, level: int) -> float:
    if level == 0:
        return 0.0
    for minimum, per_level, floor in _CHILL_BANDS:
        if air_temperature >= minimum:
            return max(-per_level * level, -floor)
    per_level, floor = _COLDEST_BAND
    return max(-per_level * level, -floor)


def calculate_wind_effect(air_temperature: float, wind_speed: float) -> WindEffect:
    level = wind_level(wind_speed)
    delta = wind_temperature_effect(air_temperature, level)
    return WindEffect(
        wind_speed=wind_speed,
        wind_level=level,
        delta_temperature=delta,
        effective_temperature=air_temperature + delta,
    )


def describe_wind(wind_speed: float) -> str:
    return ("Calm", "Light breeze", "Moderate wind", "Strong wind", "Gale force")[wind_level(wind_speed)]
