"""Repository for decision definitions."""
from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Dict, List, Tuple, get_args

from ordeal.core.types import ENVIRONMENTS, TIMES_OF_DAY, Environment, Weather
from ordeal.data.errors import DataReferenceError, DataValidationError
from ordeal.data.repositories.base import RepositoryBase
from ordeal.domain.decisions import Decision, DecisionDefinition
from ordeal.domain.equipment import KNOWN_CAPABILITIES
from ordeal.domain.requirements import Requirements

# Composition order of the decision list.
DECISION_GROUPS: Tuple[str, ...] = (
    "environment",
    "equipment",
    "fire",
    "water",
    "expert",
    "universal",
    "morale",
    "scripted",
    "cascading",
    "critical",
)

_WEATHERS: Tuple[str, ...] = get_args(Weather)
_FLOAT_BOUNDS = {
    "energy_above",
    "energy_below",
    "morale_above",
    "morale_below",
    "hydration_above",
    "hydration_below",
    "injury_above",
    "fire_above",
    "fire_below",
    "shelter_above",
    "signal_above",
    "temperature_below",
    "alignment_at_least",
}
_INT_BOUNDS = {"turn_above", "turn_below", "turn_equals"}
_CAPABILITY_LISTS = {"items", "any_items", "without_items"}
_REQUIREMENT_FIELDS = {field.name for field in fields(Requirements)}


class DecisionsRepository(RepositoryBase[Tuple[DecisionDefinition, ...]]):
    """Loads decisions.json, keyed by group (environment groups as `environment:<name>`)."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("decisions.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, Tuple[DecisionDefinition, ...]]:
        unknown = set(raw) - set(DECISION_GROUPS)
        if unknown:
            raise DataValidationError(f"Unknown decision groups: {sorted(unknown)}")

        groups: Dict[str, Tuple[DecisionDefinition, ...]] = {}
        environments = self._require_mapping(raw.get("environment", {}), "decisions.environment")
        for environment, entries in environments.items():
            if environment not in ENVIRONMENTS:
                raise DataReferenceError(f"decisions.environment: unknown environment '{environment}'.")
            groups[f"environment:{environment}"] = self._build_group(entries, "environment", f"environment.{environment}")

        for group in DECISION_GROUPS[1:]:
            groups[group] = self._build_group(raw.get(group, []), group, group)
        return groups

    def _build_group(self, entries: object, group: str, context: str) -> Tuple[DecisionDefinition, ...]:
        definitions: List[DecisionDefinition] = []
        for index, entry in enumerate(self._require_list(entries, f"decisions.{context}")):
            definitions.append(self._build_definition(entry, group, f"decisions.{context}[{index}]"))
        return tuple(definitions)

    def _build_definition(self, entry: object, group: str, context: str) -> DecisionDefinition:
        data = self._require_mapping(entry, context)
        decision_id = self._require_str(data.get("id"), f"{context}.id")
        hint = data.get("environmental_hint")
        if hint is not None:
            hint = self._require_str(hint, f"{context}.environmental_hint")
        risk = self._require_int(data.get("risk_level"), f"{context}.risk_level")
        if not 1 <= risk <= 10:
            raise DataValidationError(f"{context}.risk_level must be between 1 and 10.")
        decision = Decision(
            id=decision_id,
            text=self._require_str(data.get("text"), f"{context}.text"),
            energy_cost=self._require_number(data.get("energy_cost"), f"{context}.energy_cost"),
            risk_level=risk,
            time_required=self._require_number(data.get("time_required"), f"{context}.time_required"),
            environmental_hint=hint,
        )
        requires = self._build_requirements(data.get("requires", {}), f"{context}.requires")
        return DecisionDefinition(decision=decision, group=group, requires=requires)

    def _build_requirements(self, value: object, context: str) -> Requirements:
        data = self._require_mapping(value, context)
        unknown = set(data) - _REQUIREMENT_FIELDS
        if unknown:
            raise DataValidationError(f"{context}: unknown keys {sorted(unknown)}")

        kwargs: Dict[str, object] = {}
        for key, raw_value in data.items():
            field_context = f"{context}.{key}"
            if key in _FLOAT_BOUNDS:
                kwargs[key] = self._require_number(raw_value, field_context)
            elif key in _INT_BOUNDS:
                kwargs[key] = self._require_int(raw_value, field_context)
            elif key == "once":
                if not isinstance(raw_value, bool):
                    raise DataValidationError(f"{field_context} must be a boolean.")
                kwargs[key] = raw_value
            elif key == "environments":
                kwargs[key] = self._require_members(raw_value, ENVIRONMENTS, field_context)
            elif key in ("weather", "not_weather"):
                kwargs[key] = self._require_members(raw_value, _WEATHERS, field_context)
            elif key in ("times", "not_times"):
                kwargs[key] = self._require_members(raw_value, TIMES_OF_DAY, field_context)
            elif key in _CAPABILITY_LISTS:
                kwargs[key] = self._require_members(raw_value, tuple(KNOWN_CAPABILITIES), field_context)
            elif key == "after":
                kwargs[key] = tuple(
                    tuple(self._require_str_list(group, f"{field_context}[{index}]"))
                    for index, group in enumerate(self._require_list(raw_value, field_context))
                )
            elif key == "any_of":
                kwargs[key] = tuple(
                    self._build_requirements(option, f"{field_context}[{index}]")
                    for index, option in enumerate(self._require_list(raw_value, field_context))
                )
        return Requirements(**kwargs)

    def _require_members(self, value: object, allowed: Tuple[str, ...], context: str) -> Tuple[str, ...]:
        members = self._require_str_list(value, context)
        for member in members:
            if member not in allowed:
                raise DataReferenceError(f"{context}: unknown value '{member}'.")
        return tuple(members)

    def environment_group(self, environment: Environment) -> Tuple[DecisionDefinition, ...]:
        return self._ensure_loaded().get(f"environment:{environment}", ())

    def group(self, name: str) -> Tuple[DecisionDefinition, ...]:
        if name not in DECISION_GROUPS[1:]:
            raise KeyError(name)
        return self._ensure_loaded().get(name, ())

    def in_composition_order(self, environment: Environment) -> List[DecisionDefinition]:
        """Environment decisions first, then every other group in order."""
        ordered = list(self.environment_group(environment))
        for name in DECISION_GROUPS[1:]:
            ordered.extend(self.group(name))
        return ordered

    def all(self) -> List[DecisionDefinition]:
        definitions = self._ensure_loaded()
        return [definition for key in sorted(definitions) for definition in definitions[key]]
