"""Carried equipment, item kinds and their capabilities."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from ordeal.core.types import EquipmentCondition


class ItemKind(Enum):
    """Every item the simulation knows how to use."""

    WHISTLE = "whistle"
    SIGNAL_MIRROR = "signal_mirror"
    FLASHLIGHT = "flashlight"
    EMERGENCY_BLANKET = "emergency_blanket"
    TARP = "tarp"
    LIGHTER = "lighter"
    MATCHES = "matches"
    TINDER = "tinder"
    KINDLING = "kindling"
    FUEL_LOGS = "fuel_logs"
    FIREWOOD_BUNDLE = "firewood_bundle"
    KNIFE = "knife"
    ROPE = "rope"
    FIRST_AID_KIT = "first_aid_kit"
    BANDAGES = "bandages"
    ANTISEPTIC = "antiseptic"
    ENERGY_BAR = "energy_bar"
    BERRIES = "berries"
    EMERGENCY_SUPPLIES = "emergency_supplies"
    PHONE = "phone"
    CLEAN_WATER = "clean_water"
    UNTREATED_WATER = "untreated_water"
    EMPTY_BOTTLE = "empty_bottle"


ITEM_CAPABILITIES: Dict[ItemKind, FrozenSet[str]] = {
    ItemKind.WHISTLE: frozenset({"whistle", "signal"}),
    ItemKind.SIGNAL_MIRROR: frozenset({"mirror", "signal"}),
    ItemKind.FLASHLIGHT: frozenset({"flashlight", "light", "signal"}),
    ItemKind.EMERGENCY_BLANKET: frozenset({"blanket", "insulation"}),
    ItemKind.TARP: frozenset({"tarp", "insulation"}),
    ItemKind.LIGHTER: frozenset({"lighter", "fire_starter"}),
    ItemKind.MATCHES: frozenset({"matches", "fire_starter"}),
    ItemKind.TINDER: frozenset({"tinder"}),
    ItemKind.KINDLING: frozenset({"kindling"}),
    ItemKind.FUEL_LOGS: frozenset({"fuel_log"}),
    ItemKind.FIREWOOD_BUNDLE: frozenset({"firewood", "kindling"}),
    ItemKind.KNIFE: frozenset({"knife", "cutting"}),
    ItemKind.ROPE: frozenset({"rope"}),
    ItemKind.FIRST_AID_KIT: frozenset({"first_aid", "medical"}),
    ItemKind.BANDAGES: frozenset({"bandage", "medical"}),
    ItemKind.ANTISEPTIC: frozenset({"antiseptic", "medical"}),
    ItemKind.ENERGY_BAR: frozenset({"food", "energy_bar"}),
    ItemKind.BERRIES: frozenset({"food"}),
    ItemKind.EMERGENCY_SUPPLIES: frozenset({"food", "medical_supplies"}),
    ItemKind.PHONE: frozenset({"phone", "light"}),
    ItemKind.CLEAN_WATER: frozenset({"clean_water", "water"}),
    ItemKind.UNTREATED_WATER: frozenset({"untreated_water", "water"}),
    ItemKind.EMPTY_BOTTLE: frozenset({"empty_bottle"}),
}

KNOWN_CAPABILITIES: FrozenSet[str] = frozenset().union(*ITEM_CAPABILITIES.values())


def capabilities_for(kind: ItemKind) -> FrozenSet[str]:
    return ITEM_CAPABILITIES.get(kind, frozenset())


@dataclass(frozen=True, slots=True)
class Equipment:
    """A stack of one kind of item carried by the player."""

    kind: ItemKind
    name: str
    quantity: int = 1
    condition: EquipmentCondition = "good"
    volume_liters: float | None = None

    def has(self, capability: str) -> bool:
        return capability in capabilities_for(self.kind)


@dataclass(frozen=True, slots=True)
class EquipmentChanges:
    """Equipment delta produced by a single outcome."""

    added: Tuple[Equipment, ...] = ()
    removed: Tuple[str, ...] = ()
    updated: Tuple[Equipment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.updated)

    def merge(self, other: "EquipmentChanges") -> "EquipmentChanges":
        return EquipmentChanges(
            added=self.added + other.added,
            removed=self.removed + other.removed,
            updated=self.updated + other.updated,
        )


# Name -> (kind, default quantity, condition, volume). Items produced by
# outcomes during play are built from this catalog.
ITEM_CATALOG: Dict[str, Tuple[ItemKind, int, EquipmentCondition, float]] = {
    "Water bottle (half full)": (ItemKind.CLEAN_WATER, 1, "good", 1.0),
    "Water bottle (full)": (ItemKind.CLEAN_WATER, 1, "good", 1.0),
    "Water bottle (clean)": (ItemKind.CLEAN_WATER, 1, "good", 1.0),
    "Water bottle (untreated)": (ItemKind.UNTREATED_WATER, 1, "good", 1.0),
    "Water bottle (empty)": (ItemKind.EMPTY_BOTTLE, 1, "good", 1.0),
    "Emergency blanket": (ItemKind.EMERGENCY_BLANKET, 1, "good", 0.5),
    "Torn tarp": (ItemKind.TARP, 1, "damaged", 3.5),
    "Lighter": (ItemKind.LIGHTER, 1, "worn", 0.05),
    "Matches": (ItemKind.MATCHES, 1, "good", 0.1),
    "Tinder bundle": (ItemKind.TINDER, 2, "good", 0.3),
    "Kindling sticks": (ItemKind.KINDLING, 3, "good", 1.5),
    "Fuel logs": (ItemKind.FUEL_LOGS, 1, "good", 2.0),
    "Firewood bundle": (ItemKind.FIREWOOD_BUNDLE, 1, "good", 2.0),
    "Signal mirror": (ItemKind.SIGNAL_MIRROR, 1, "good", 0.15),
    "Whistle": (ItemKind.WHISTLE, 1, "good", 0.05),
    "Flashlight": (ItemKind.FLASHLIGHT, 1, "worn", 0.3),
    "Knife": (ItemKind.KNIFE, 1, "good", 0.2),
    "Rope (10ft)": (ItemKind.ROPE, 1, "worn", 1.2),
    "First aid kit (partial)": (ItemKind.FIRST_AID_KIT, 1, "worn", 1.5),
    "Bandages": (ItemKind.BANDAGES, 2, "good", 0.2),
    "Antiseptic wipes": (ItemKind.ANTISEPTIC, 1, "good", 0.1),
    "Energy bar": (ItemKind.ENERGY_BAR, 2, "good", 0.2),
    "Berries (handful)": (ItemKind.BERRIES, 1, "good", 0.2),
    "Emergency supplies": (ItemKind.EMERGENCY_SUPPLIES, 1, "good", 1.0),
    "Phone (no signal, 15% battery)": (ItemKind.PHONE, 1, "good", 0.15),
}


def make_item(
    name: str,
    *,
    quantity: int | None = None,
    condition: EquipmentCondition | None = None,
) -> Equipment:
    """Build an Equipment stack from the catalog."""
    try:
        kind, default_quantity, default_condition, volume = ITEM_CATALOG[name]
    except KeyError as exc:
        raise KeyError(name) from exc
    return Equipment(
        kind=kind,
        name=name,
        quantity=default_quantity if quantity is None else quantity,
        condition=default_condition if condition is None else condition,
        volume_liters=volume,
    )


def find_item(equipment: Sequence[Equipment], capability: str) -> Equipment | None:
    """Return the first carried stack offering the capability."""
    for item in equipment:
        if item.quantity > 0 and item.has(capability):
            return item
    return None


def find_kind(equipment: Sequence[Equipment], kind: ItemKind) -> Equipment | None:
    for item in equipment:
        if item.quantity > 0 and item.kind is kind:
            return item
    return None


def has_capability(equipment: Sequence[Equipment], capability: str) -> bool:
    return find_item(equipment, capability) is not None


def consume_one(item: Equipment | None) -> EquipmentChanges:
    """Decrement a stack by one, removing it when it runs out."""
    if item is None:
        return EquipmentChanges()
    if item.quantity > 1:
        return EquipmentChanges(updated=(replace(item, quantity=item.quantity - 1),))
    return EquipmentChanges(removed=(item.name,))


def convert(item: Equipment | None, new_name: str) -> EquipmentChanges:
    """Swap one unit of a stack for a different catalog item (e.g. boiling water)."""
    if item is None:
        return EquipmentChanges()
    return consume_one(item).merge(EquipmentChanges(added=(make_item(new_name, quantity=1),)))


def degrade(item: Equipment | None, condition: EquipmentCondition) -> EquipmentChanges:
    if item is None or item.condition == condition:
        return EquipmentChanges()
    return EquipmentChanges(updated=(replace(item, condition=condition),))


def apply_equipment_changes(equipment: Iterable[Equipment], changes: EquipmentChanges | None) -> Tuple[Equipment, ...]:
    """Fold an outcome's equipment delta into the carried list.

    Removals drop the first stack with the given name, additions merge into an
    existing stack of the same name, updates replace by name. Stacks whose
    quantity ends at or below zero are dropped.
    """
    items: List[Equipment] = list(equipment)
    if changes is None:
        return tuple(items)

    for name in changes.removed:
        for index, existing in enumerate(items):
            if existing.name == name:
                del items[index]
                break

    for updated in changes.updated:
        for index, existing in enumerate(items):
            if existing.name == updated.name:
                items[index] = updated
                break

    for added in changes.added:
        for index, existing in enumerate(items):
            if existing.name == added.name:
                items[index] = replace(existing, quantity=existing.quantity + added.quantity)
                break
        else:
            items.append(added)

    return tuple(item for item in items if item.quantity > 0)


def total_volume(equipment: Iterable[Equipment]) -> float:
    return sum(item.volume_liters or 0.0 for item in equipment)


__all__ = [
    "Equipment",
    "EquipmentChanges",
    "ITEM_CAPABILITIES",
    "ITEM_CATALOG",
    "ItemKind",
    "KNOWN_CAPABILITIES",
    "apply_equipment_changes",
    "capabilities_for",
    "consume_one",
    "convert",
    "degrade",
    "find_item",
    "find_kind",
    "has_capability",
    "make_item",
    "total_volume",
]
