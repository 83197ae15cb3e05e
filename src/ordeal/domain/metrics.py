"""Player survival metrics and additive metric deltas."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Dict, Literal, Mapping

MetricName = Literal[
    "energy",
    "body_temperature",
    "hydration",
    "injury_severity",
    "morale",
    "shelter",
    "fire_quality",
    "signal_effectiveness",
    "cumulative_risk",
    "survival_probability",
]

PERCENT_BOUNDS: tuple[float, float] = (0.0, 100.0)
BODY_TEMPERATURE_BOUNDS: tuple[float, float] = (30.0, 42.0)
SURVIVAL_PROBABILITY_BOUNDS: tuple[float, float] = (1.0, 99.0)

_PERCENT_FIELDS: tuple[str, ...] = (
    "energy",
    "hydration",
    "injury_severity",
    "morale",
    "shelter",
    "fire_quality",
    "signal_effectiveness",
)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass(frozen=True, slots=True)
class PlayerMetrics:
    """Snapshot of the player's condition after a turn."""

    energy: float = 100.0
    body_temperature: float = 37.0
    hydration: float = 100.0
    injury_severity: float = 0.0
    morale: float = 70.0
    shelter: float = 0.0
    fire_quality: float = 0.0
    signal_effectiveness: float = 50.0
    cumulative_risk: float = 0.0
    survival_probability: float = 50.0

    @property
    def clamped_risk(self) -> float:
        """Cumulative risk as used by display and decision logic."""
        return clamp(self.cumulative_risk, *PERCENT_BOUNDS)

    def clamped(self) -> "PlayerMetrics":
        """Return a copy with every bounded field forced into its range."""
        values = {name: clamp(getattr(self, name), *PERCENT_BOUNDS) for name in _PERCENT_FIELDS}
        return replace(
            self,
            **values,
            body_temperature=clamp(self.body_temperature, *BODY_TEMPERATURE_BOUNDS),
            cumulative_risk=max(0.0, self.cumulative_risk),
            survival_probability=clamp(self.survival_probability, *SURVIVAL_PROBABILITY_BOUNDS),
        )

    def with_delta(self, delta: "MetricsDelta") -> "PlayerMetrics":
        """Add a delta without clamping."""
        return replace(
            self,
            **{name: getattr(self, name) + getattr(delta, name) for name in METRIC_NAMES},
        )


@dataclass(frozen=True, slots=True)
class MetricsDelta:
    """Additive change to PlayerMetrics; zero means untouched."""

    energy: float = 0.0
    body_temperature: float = 0.0
    hydration: float = 0.0
    injury_severity: float = 0.0
    morale: float = 0.0
    shelter: float = 0.0
    fire_quality: float = 0.0
    signal_effectiveness: float = 0.0
    cumulative_risk: float = 0.0
    survival_probability: float = 0.0

    def __add__(self, other: "MetricsDelta") -> "MetricsDelta":
        if not isinstance(other, MetricsDelta):
            return NotImplemented
        return MetricsDelta(**{name: getattr(self, name) + getattr(other, name) for name in METRIC_NAMES})

    def scaled(self, factor: float) -> "MetricsDelta":
        return MetricsDelta(**{name: getattr(self, name) * factor for name in METRIC_NAMES})

    def get(self, name: MetricName) -> float:
        return getattr(self, name)

    def updated(self, **changes: float) -> "MetricsDelta":
        """Return a copy with the given fields overwritten."""
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, float]:
        """Return only the non-zero entries."""
        return {name: getattr(self, name) for name in METRIC_NAMES if getattr(self, name) != 0}

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "MetricsDelta":
        unknown = set(values) - set(METRIC_NAMES)
        if unknown:
            raise ValueError(f"Unknown metric names: {sorted(unknown)}")
        return cls(**{name: float(value) for name, value in values.items()})

    @property
    def is_zero(self) -> bool:
        return not self.as_dict()


METRIC_NAMES: tuple[str, ...] = tuple(field.name for field in fields(PlayerMetrics))

__all__ = [
    "BODY_TEMPERATURE_BOUNDS",
    "METRIC_NAMES",
    "MetricName",
    "MetricsDelta",
    "PERCENT_BOUNDS",
    "PlayerMetrics",
    "SURVIVAL_PROBABILITY_BOUNDS",
    "clamp",
]
