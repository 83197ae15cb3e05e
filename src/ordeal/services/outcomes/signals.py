"""Attracting rescuers: sound, light, mirrors, markers and fire."""
from __future__ import annotations

from ordeal.domain.metrics import MetricsDelta
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


@resolves("use-whistle")
def use_whistle(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=8 if ctx.roll > 0.6 else 3)
    if ctx.roll > 0.75 and ctx.turn < 10:
        return Resolution(
            base.updated(morale=20, cumulative_risk=-12),
            "You blow the whistle in three sharp bursts. A faint response echoes back.",
            ["Someone heard you. Help might be coming."],
        )
    if ctx.roll > 0.4:
        return Resolution(
            base.updated(cumulative_risk=-4),
            "You signal with the whistle. The sound carries well.",
            ["If anyone is nearby, they will hear it."],
        )
    return Resolution(
        base.updated(morale=-2),
        "You blow the whistle but hear no response.",
        ["The area seems empty."],
    )


@resolves("use-mirror")
def use_mirror(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=5)
    if ctx.metrics.signal_effectiveness > 60 and ctx.roll > 0.65:
        return Resolution(
            base.updated(morale=25, cumulative_risk=-20),
            "You flash the signal mirror toward the sky. A helicopter banks toward you.",
            ["They saw your signal! Rescue is coming!"],
        )
    if ctx.roll > 0.5:
        return Resolution(
            base.updated(cumulative_risk=-6),
            "You reflect sunlight with the mirror across the landscape.",
            ["The signal is visible from a great distance."],
        )
    return Resolution(
        base.updated(morale=-1),
        "You use the signal mirror but clouds obscure the sun.",
        ["The timing was not ideal."],
    )


@resolves("use-flashlight-signal")
def use_flashlight_signal(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=4)
    if ctx.roll > 0.7 and ctx.in_the_dark:
        return Resolution(
            base.updated(morale=18, cumulative_risk=-10),
            "You signal SOS with the flashlight. A light blinks back in response!",
            ["Someone saw your signal."],
        )
    return Resolution(
        base.updated(cumulative_risk=-3),
        "You flash SOS patterns with the flashlight repeatedly.",
        ["In darkness, the signal could be visible from far away."],
    )


@resolves("signal-water")
def signal_water(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=4)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(cumulative_risk=-4),
            "You arrange rocks and debris into a visible pattern.",
            ["It might be seen from the water or air."],
        )
    return Resolution(
        base,
        "You create a signal but conditions limit visibility.",
        ["It may not help."],
    )


@resolves("signal-urban")
def signal_urban(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=3)
    if ctx.roll > 0.65:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-8),
            "You hear a distant response. Someone heard you.",
            ["Help might be coming."],
        )
    return Resolution(
        base,
        "You make noise and set up markers. No response.",
        ["The area seems deserted."],
    )


@resolves("call-out")
def call_out(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=2)
    if ctx.roll > 0.8 and ctx.turn < 6:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-10),
            "You hear a faint response in the distance.",
            ["Your group might be nearby."],
        )
    return Resolution(
        base.updated(morale=-2),
        "You call out. Only silence answers.",
        ["No one is within earshot."],
    )


@resolves("signal-fire")
def signal_fire(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, fire_quality=-15, morale=8)
    visibility = ctx.metrics.signal_effectiveness + 20

    if ctx.in_the_dark:
        if ctx.roll > 0.65 and visibility > 60:
            return Resolution(
                base.updated(morale=30, cumulative_risk=-20),
                "You build up the fire to create a bright beacon. A distant light flashes in response!",
                ["Someone saw your signal! Help is coming!"],
            )
        if ctx.roll > 0.45:
            return Resolution(
                base.updated(cumulative_risk=-8),
                "You stoke the fire high. The flames are visible for miles in the darkness.",
                ["This fire beacon is a strong signal at night."],
            )
        return Resolution(
            base.updated(cumulative_risk=-4),
            "You build up the fire, though clouds or terrain may obstruct the view.",
            ["The signal may still attract attention."],
        )

    if ctx.roll > 0.7 and visibility > 60:
        return Resolution(
            base.updated(morale=30, cumulative_risk=-20),
            "You add green branches. Thick white smoke billows up. You hear a helicopter!",
            ["Your smoke signal was spotted! Rescue is en route!"],
        )
    if ctx.roll > 0.5:
        return Resolution(
            base.updated(cumulative_risk=-8),
            "Green branches create excellent smoke. The signal is visible from far away.",
            ["The smoke column rises high into the sky."],
        )
    return Resolution(
        base.updated(cumulative_risk=-3),
        "You add green branches to create smoke, but wind disperses it quickly.",
        ["The signal is weaker than hoped but may still be seen."],
    )


@resolves("triangle-signal-fires")
def triangle_signal_fires(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, fire_quality=-25, hydration=-4, morale=10)
    if ctx.roll > 0.55:
        return Resolution(
            base.updated(morale=25, cumulative_risk=-18),
            "Three fires burn in a wide triangle. An aircraft circles overhead and dips its wings.",
            ["The international distress pattern was recognized."],
        )
    return Resolution(
        base.updated(cumulative_risk=-8),
        "You keep three fires burning in a triangle as long as your fuel allows.",
        ["The pattern is unmistakable to anyone who sees it."],
    )


@resolves("build-ground-signal")
def build_ground_signal(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, hydration=-3, morale=6)
    if ctx.roll > 0.6 and ctx.metrics.signal_effectiveness > 40:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-10),
            "You lay out three long lines of rocks and branches in open ground.",
            ["The signal will keep working while you rest."],
        )
    return Resolution(
        base.updated(cumulative_risk=-4),
        "You mark out a ground signal, though cover makes it hard to see from above.",
        ["It is better than nothing."],
    )


@resolves("flag-down-vehicle")
def flag_down_vehicle(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=3)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=20, cumulative_risk=-15),
            "A maintenance truck slows and the driver leans out the window.",
            ["The driver radios for help."],
        )
    return Resolution(
        base.updated(morale=-4, body_temperature=-0.2),
        "You wait by the road for hours. Nothing comes.",
        ["Waiting exposed cost you warmth."],
    )


@resolves("signal-passing-aircraft")
def signal_passing_aircraft(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.actual_energy_cost, morale=6)
    if ctx.roll > 0.5 or ctx.metrics.signal_effectiveness > 60:
        return Resolution(
            base.updated(morale=20, cumulative_risk=-15),
            "You wave and flash everything you have. The aircraft rocks its wings.",
            ["You have been seen."],
        )
    return Resolution(
        base.updated(morale=-5),
        "The aircraft passes over without turning.",
        ["Visibility was against you this time."],
    )
