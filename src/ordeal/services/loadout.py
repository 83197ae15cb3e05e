"""Choosing what goes into the backpack before a run starts."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ordeal.core.rng import RandomSource
from ordeal.domain.equipment import Equipment, ItemKind, total_volume
from ordeal.domain.scenario import Scenario
from ordeal.services.errors import LoadoutError

_GOOD_STARTERS = (ItemKind.LIGHTER, ItemKind.MATCHES)
_SIGNAL_KINDS = (ItemKind.SIGNAL_MIRROR, ItemKind.WHISTLE, ItemKind.FLASHLIGHT)


def select_loadout(scenario: Scenario, names: Iterable[str]) -> Tuple[Equipment, ...]:
    """Validate a player's picks against the offered pool and the backpack size."""
    available = {item.name: item for item in scenario.available_equipment}
    chosen: List[Equipment] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        item = available.get(name)
        if item is None:
            raise LoadoutError(f"'{name}' is not available in this scenario.")
        chosen.append(item)
        seen.add(name)

    volume = total_volume(chosen)
    if volume > scenario.backpack_capacity_liters:
        raise LoadoutError(
            f"Loadout needs {volume:.2f} L but the backpack holds {scenario.backpack_capacity_liters:g} L."
        )
    return tuple(chosen)


def quick_start_loadout(scenario: Scenario, rng: RandomSource) -> Tuple[Equipment, ...]:
    """A balanced loadout: a fire starter, water and a signalling device when offered, plus extras."""
    pool = list(scenario.available_equipment)
    capacity = scenario.backpack_capacity_liters
    chosen: List[Equipment] = []

    def fits(item: Equipment) -> bool:
        return total_volume(chosen) + (item.volume_liters or 0.0) <= capacity

    def take_from(candidates: Sequence[Equipment]) -> None:
        candidates = [item for item in candidates if item not in chosen and fits(item)]
        if candidates:
            chosen.append(rng.choice(candidates))

    starters = [item for item in pool if item.kind in _GOOD_STARTERS]
    tinder = [item for item in pool if item.kind is ItemKind.TINDER]
    if starters and (rng.random() > 0.2 or not tinder):
        take_from(starters)
    else:
        take_from(tinder)

    take_from([item for item in pool if item.kind is ItemKind.CLEAN_WATER])
    take_from([item for item in pool if item.kind in _SIGNAL_KINDS])

    remaining = [item for item in pool if item not in chosen]
    rng.shuffle(remaining)
    extras = rng.randint(1, 2)
    for item in remaining:
        if extras == 0:
            break
        if fits(item):
            chosen.append(item)
            extras -= 1
    return tuple(chosen)
