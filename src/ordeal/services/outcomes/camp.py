"""Shelter, insulation and recovery outcomes."""
from __future__ import annotations

from math import floor

from ordeal.domain.equipment import degrade
from ordeal.domain.metrics import MetricsDelta
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


@resolves("shelter")
def shelter(ctx: ResolutionContext) -> Resolution:
    gain = 25 if ctx.metrics.shelter < 70 else 15
    return Resolution(
        MetricsDelta(
            energy=-ctx.actual_energy_cost,
            body_temperature=0.3 if ctx.scenario.temperature < 15 else 0.1,
            morale=5,
            shelter=gain,
            cumulative_risk=-2,
        ),
        "You gather materials and improve your shelter.",
        ["Your protection from the elements increases.", "You feel slightly more in control."],
    )


@resolves("fortify")
def fortify(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, body_temperature=0.5, morale=8, shelter=30, cumulative_risk=-5),
        "You reinforce your shelter against the harsh conditions.",
        ["Your protection improves significantly."],
    )


@resolves("use-knife-shelter")
def use_knife_shelter(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, body_temperature=0.4, morale=8, shelter=35, cumulative_risk=-5),
        "You use the knife to cut branches and improve your shelter structure.",
        [
            "Your protection from the elements increases significantly.",
            "The knife makes construction much more efficient.",
        ],
    )


@resolves("insulate-shelter")
def insulate_shelter(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, body_temperature=0.5, morale=6, shelter=20, cumulative_risk=-4),
        "You pile dry leaves and boughs under and around you.",
        ["Insulation from the ground stops the cold leaching into your body."],
    )


@resolves("rest")
def rest(ctx: ResolutionContext) -> Resolution:
    energy = -ctx.base_cost + floor(ctx.metrics.shelter / 20)
    if ctx.metrics.shelter > 50:
        result = Resolution(
            MetricsDelta(energy=energy, morale=5),
            "You rest in your shelter. Your energy recovers well.",
            ["Good shelter allows for effective rest."],
        )
    else:
        result = Resolution(
            MetricsDelta(energy=energy, morale=5),
            "You rest and focus on staying calm.",
            ["Your energy recovers, but conditions are challenging."],
        )

    if ctx.scenario.weather == "storm" and ctx.metrics.shelter < 40:
        result.metrics = result.metrics.updated(body_temperature=-0.3)
        result.note("The harsh weather makes rest difficult.")
    return result


@resolves("use-blanket")
def use_blanket(ctx: ResolutionContext) -> Resolution:
    result = Resolution(
        MetricsDelta(
            energy=-ctx.actual_energy_cost,
            body_temperature=0.8,
            morale=10,
            shelter=20,
            cumulative_risk=-6,
        ),
        "You wrap yourself in the emergency blanket. Heat retention improves dramatically.",
        ["Your body temperature stabilizes.", "The reflective blanket provides crucial insulation."],
    )
    blanket = ctx.item("blanket")
    if blanket is not None and ctx.roll < 0.3:
        changes = degrade(blanket, "worn")
        if not changes.is_empty:
            result.change_equipment(changes)
            result.note("The blanket is showing wear from use.")
    return result


@resolves("establish-base-camp")
def establish_base_camp(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, body_temperature=0.4, morale=15, shelter=15, cumulative_risk=-10),
        "You organise shelter, fire and supplies into a proper camp.",
        ["A stable camp makes every later task easier.", "Staying put makes you easier to find."],
    )


@resolves("brace-for-storm")
def brace_for_storm(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, morale=6, shelter=20, cumulative_risk=-8),
        "You weigh down your shelter and pull everything inside before the front hits.",
        ["When the storm arrives, you are ready for it."],
    )


@resolves("seek-shade-until-dusk")
def seek_shade_until_dusk(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, hydration=6, body_temperature=-0.3, morale=4, cumulative_risk=-5),
        "You stop moving and wait out the heat in deep shade.",
        ["Resting through the hottest hours saves the water in your body."],
    )
