"""First aid, food and the outcomes of desperation."""
from __future__ import annotations

from ordeal.domain.equipment import EquipmentChanges, ItemKind, consume_one, make_item
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import DelayedEffect
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


@resolves("treat-injury-full")
def treat_injury_full(ctx: ResolutionContext) -> Resolution:
    healing = -25 if ctx.metrics.injury_severity > 50 else -20
    return Resolution(
        MetricsDelta(energy=-ctx.actual_energy_cost, injury_severity=healing, morale=8),
        "You carefully treat your injuries with the first aid kit.",
        [
            "The wound is properly cleaned, disinfected, and bandaged.",
            "Pain and infection risk are significantly reduced.",
        ],
        equipment_changes=consume_one(ctx.item("first_aid")),
    )


@resolves("treat-injury-partial")
def treat_injury_partial(ctx: ResolutionContext) -> Resolution:
    bandage = ctx.item("bandage")
    antiseptic = ctx.item("antiseptic")
    both = bandage is not None and antiseptic is not None
    delta = MetricsDelta(
        energy=-ctx.actual_energy_cost,
        injury_severity=-15 if both else -10,
        morale=6 if both else 4,
    )

    if both:
        result = Resolution(
            delta,
            "You clean the wound with antiseptic and apply fresh bandages.",
            ["The treatment is effective with the supplies you have."],
        )
        result.change_equipment(consume_one(bandage))
        return result.change_equipment(consume_one(antiseptic))
    if antiseptic is not None:
        return Resolution(
            delta,
            "You disinfect the wound but lack proper bandages.",
            ["The antiseptic helps prevent infection."],
            equipment_changes=consume_one(antiseptic),
        )
    return Resolution(
        delta,
        "You apply bandages to your injuries.",
        ["The bleeding is controlled but the wound needs cleaning."],
        equipment_changes=consume_one(bandage),
    )


@resolves("improvise-treatment")
def improvise_treatment(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=4 if ctx.roll > 0.6 else 2)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(injury_severity=-12),
            "You improvise bandages from clean clothing and create a compress.",
            [
                "Your makeshift treatment is surprisingly effective.",
                "The bleeding stops and pressure helps with the pain.",
            ],
        )
    if ctx.roll > 0.4:
        return Resolution(
            base.updated(injury_severity=-7),
            "You do what you can with available materials.",
            [
                "The makeshift treatment provides some relief.",
                "It is better than nothing but far from ideal.",
            ],
        )
    return Resolution(
        base.updated(injury_severity=-3, morale=0),
        "Your improvised treatment is barely effective.",
        ["Without proper supplies, you can only manage basic care."],
    )


_MEAL_TEXT = {
    ItemKind.ENERGY_BAR: "You eat an energy bar. Your energy increases significantly.",
    ItemKind.BERRIES: "You eat the berries. They provide nourishment.",
    ItemKind.EMERGENCY_SUPPLIES: "You ration out some of your emergency supplies. They provide nourishment.",
}


@resolves("eat-food")
def eat_food(ctx: ResolutionContext) -> Resolution:
    food = ctx.item("food")
    energy_bar = food is not None and food.kind is ItemKind.ENERGY_BAR
    gain = 30 if energy_bar else 18
    if food is None:
        meal = "You scrape together what little food you can find."
    else:
        meal = _MEAL_TEXT[food.kind]

    result = Resolution(
        MetricsDelta(
            energy=gain - ctx.base_cost,
            morale=8 if energy_bar else 5,
            hydration=0 if energy_bar else -2,
        ),
        meal,
        [f"You gain {gain} energy."],
    )
    if food is not None:
        result.change_equipment(consume_one(food))
        if food.quantity > 1:
            result.note(f"You have {food.quantity - 1} remaining.")
        else:
            result.note("That was your last food.")
    return result


@resolves("desperate-forage")
def desperate_forage(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-5, cumulative_risk=6)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=8),
            "You find a patch of edible berries after a long search.",
            ["Finding food lifts your spirits a little."],
            equipment_changes=EquipmentChanges(added=(make_item("Berries (handful)", quantity=1),)),
        )
    if ctx.roll < 0.25:
        result = Resolution(
            base.updated(morale=-8, injury_severity=5),
            "Hunger pushes you to eat something you should not have.",
            ["Your stomach turns almost immediately."],
        )
        result.delayed_effects.append(
            DelayedEffect(
                turn=ctx.turn + 1,
                effect="Nausea from what you ate leaves you weak.",
                metrics_change=MetricsDelta(energy=-10, hydration=-10, morale=-5),
            )
        )
        return result
    return Resolution(
        base.updated(morale=-5),
        "You search frantically but find nothing worth eating.",
        ["Desperation burns energy you cannot spare."],
    )


@resolves("panic-move")
def panic_move(ctx: ResolutionContext) -> Resolution:
    result = Resolution(
        MetricsDelta(energy=-ctx.base_cost, hydration=-12, morale=-15, cumulative_risk=20),
        "Desperation drives you forward. You move recklessly.",
        ["You push past exhaustion."],
    )
    if ctx.roll < 0.5:
        result.metrics = result.metrics.updated(injury_severity=25)
        result.note("You fall hard. Something might be broken.")
        result.delayed_effects.append(
            DelayedEffect(
                turn=ctx.turn + 1,
                effect="The injury from your fall is worse than you realized.",
                metrics_change=MetricsDelta(energy=-15, morale=-10, injury_severity=15),
            )
        )
    else:
        result.note("You cover ground but have no idea if you are heading the right direction.")
    return result
