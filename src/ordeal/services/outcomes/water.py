"""Finding, purifying and drinking water."""
from __future__ import annotations

from typing import Dict, Tuple

from ordeal.core.types import Environment
from ordeal.domain.equipment import EquipmentChanges, ItemKind, convert, find_kind, make_item
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import DelayedEffect
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves

# environment -> (failure threshold, quality bonus, extra energy, hydration cost, description)
WATER_SOURCES: Dict[Environment, Tuple[float, float, float, float, str]] = {
    "mountains": (0.2, 0.3, 0, -3, "Mountain streams are clear and cold."),
    "forest": (0.3, 0.2, 0, -3, "Forest streams and pools are available."),
    "coast": (0.25, -0.2, 0, -3, "Coastal water sources must be carefully checked for salt content."),
    "tundra": (0.4, 0.1, 5, -5, "You must melt snow or break through ice."),
    "desert": (0.7, -0.3, 3, -6, "Water is scarce in the desert."),
    "urban-edge": (0.35, -0.15, 0, -3, "Urban runoff may contaminate natural water sources."),
}

CONTAMINATION_CHANCE = 0.4


@resolves("collect-water")
def collect_water(ctx: ResolutionContext) -> Resolution:
    threshold, bonus, extra_energy, hydration, feedback = WATER_SOURCES[ctx.environment]
    base = MetricsDelta(energy=-(ctx.base_cost + extra_energy), hydration=hydration)
    if extra_energy == 0:
        base = base.updated(morale=5)

    adjusted = ctx.roll + bonus
    if ctx.roll < threshold:
        result = Resolution(
            base.updated(morale=-10),
            f"You search extensively but find no drinkable water. {feedback}",
            ["Your search was unsuccessful."],
        )
    elif adjusted > 0.75:
        result = Resolution(
            base.updated(morale=12),
            f"You find a clear, flowing water source. {feedback}",
            ["The water looks clean but should still be purified."],
            equipment_changes=EquipmentChanges(added=(make_item("Water bottle (untreated)", quantity=1),)),
        )
    elif adjusted > 0.45:
        result = Resolution(
            base,
            f"You locate a water source. {feedback}",
            ["The water is murky but will help if purified."],
            equipment_changes=EquipmentChanges(added=(make_item("Water bottle (untreated)", quantity=1),)),
        )
    else:
        result = Resolution(
            base.updated(morale=2),
            f"After searching, you find only a questionable water source. {feedback}",
            ["The water quality is poor even for wilderness standards."],
            equipment_changes=EquipmentChanges(
                added=(make_item("Water bottle (untreated)", quantity=1, condition="worn"),)
            ),
        )

    empty = find_kind(ctx.state.equipment, ItemKind.EMPTY_BOTTLE)
    if empty is not None and not result.equipment_changes.is_empty:
        result.change_equipment(EquipmentChanges(removed=(empty.name,)))
    return result


@resolves("boil-water")
def boil_water(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, fire_quality=-10, morale=8),
        "You boil the water over the fire. Steam rises as pathogens die.",
        ["The water is now safe to drink.", "Boiling consumed some of your fire."],
        equipment_changes=convert(ctx.item("untreated_water"), "Water bottle (clean)"),
    )


@resolves("drink-clean-water")
def drink_clean_water(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, hydration=40, morale=8),
        "You drink the clean water. It tastes amazing.",
        ["Your hydration increases significantly."],
        equipment_changes=convert(ctx.item("clean_water"), "Water bottle (empty)"),
    )


@resolves("drink-untreated-water")
def drink_untreated_water(ctx: ResolutionContext) -> Resolution:
    result = Resolution(
        MetricsDelta(energy=-ctx.base_cost, hydration=35, morale=2),
        "You drink the untreated water. It helps, but you worry about contaminants.",
        ["Your hydration improves, but there may be consequences..."],
        equipment_changes=convert(ctx.item("untreated_water"), "Water bottle (empty)"),
    )
    if ctx.roll < CONTAMINATION_CHANCE:
        result.delayed_effects.append(
            DelayedEffect(
                turn=ctx.turn + ctx.rng.randint(2, 4),
                effect="Stomach cramps grip you. The untreated water was contaminated.",
                metrics_change=MetricsDelta(energy=-20, morale=-15, injury_severity=12, hydration=-25),
            )
        )
    return result
