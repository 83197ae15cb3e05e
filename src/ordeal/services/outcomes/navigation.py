"""Movement, route-finding and scouting outcomes."""
from __future__ import annotations

from ordeal.domain.equipment import EquipmentChanges, degrade, make_item
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import DelayedEffect
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


def _found(*names: str) -> EquipmentChanges:
    return EquipmentChanges(added=tuple(make_item(name, quantity=1) for name in names))


@resolves("retrace-trail")
def retrace_trail(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-7, cumulative_risk=8)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-10),
            "You find markers you recognize. You are getting closer to the trail.",
            ["Your navigation is paying off."],
        )
    if ctx.roll > 0.4:
        return Resolution(
            base.updated(morale=-2),
            "You move carefully but cannot be certain you are heading the right way.",
            ["The terrain all looks similar."],
        )
    return Resolution(
        base.updated(morale=-8, cumulative_risk=5),
        "You lose more elevation than intended. This does not feel right.",
        ["You may have gone the wrong direction."],
    )


@resolves("descend")
def descend(ctx: ResolutionContext) -> Resolution:
    penalty = 1.5 if ctx.in_the_dark else 1.0
    base = MetricsDelta(energy=-ctx.base_cost, cumulative_risk=12).scaled(penalty) + MetricsDelta(hydration=-10)
    result = Resolution(base, "")
    if ctx.in_the_dark:
        result.note("Descending in low light is extremely dangerous.")

    if ctx.roll < (0.40 if ctx.in_the_dark else 0.25):
        result.metrics = base.updated(injury_severity=30 if ctx.in_the_dark else 20, morale=-15)
        result.immediate_effect = (
            "You cannot see the terrain clearly and fall hard in the darkness."
            if ctx.in_the_dark
            else "You slip on loose rock. The fall is hard."
        )
        result.note("You are injured and shaken.")
        result.delayed_effects.append(
            DelayedEffect(
                turn=ctx.turn + 2,
                effect="The injury from your fall is worsening.",
                metrics_change=MetricsDelta(energy=-12, morale=-8),
            )
        )
    elif ctx.roll > 0.8 and ctx.turn > 6:
        result.metrics = base.updated(morale=12, cumulative_risk=-8)
        result.immediate_effect = "You descend carefully and spot signs of a trail below."
        result.note("You might have found a way down.")
        if ctx.roll > 0.9:
            result.environment_change = "forest"
            result.note("The elevation drops into forested terrain.")
    else:
        result.metrics = base.updated(morale=-4)
        result.immediate_effect = "You descend slowly. The terrain is challenging."
        result.note("Progress is exhausting but steady.")
        if ctx.roll > 0.6 and ctx.turn > 4:
            result.environment_change = "forest"
            result.note("You reach lower elevation among trees.")
    return result


@resolves("find-landmark")
def find_landmark(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-6, cumulative_risk=3)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=10, cumulative_risk=-6),
            "From higher ground you spot a valley you recognize.",
            ["You now have better sense of direction."],
        )
    if ctx.roll > 0.3:
        return Resolution(
            base.updated(morale=-4),
            "You climb but visibility is poor. No useful landmarks visible.",
            ["The effort did not help much."],
        )
    return Resolution(
        base.updated(body_temperature=-0.5, morale=-6),
        "The climb exposes you to wind. You see nothing helpful.",
        ["You are colder and no better oriented."],
    )


@resolves("follow-coast")
def follow_coast(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-8, cumulative_risk=10)
    if ctx.roll > 0.75:
        result = Resolution(
            base.updated(morale=18, cumulative_risk=-15),
            "You navigate the coast and spot the trail access point ahead.",
            ["You are close to safety."],
        )
        if ctx.roll > 0.85:
            result.environment_change = "forest"
            result.note("The landscape transitions to coastal forest.")
        return result
    if ctx.roll < 0.3:
        return Resolution(
            base.updated(energy=-15, morale=-10),
            "The tide cuts off your route. You must backtrack.",
            ["You lost time and energy."],
        )
    return Resolution(
        base.updated(morale=2),
        "You make progress along the rocky coast.",
        ["The route is slow but passable."],
    )


@resolves("scout-inland")
def scout_inland(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-5, cumulative_risk=5)
    if ctx.roll > 0.6:
        result = Resolution(
            base.updated(morale=8),
            "You find a gentler route inland that bypasses the rocks.",
            ["This route looks more promising."],
        )
        if ctx.roll > 0.75:
            result.environment_change = "forest"
            result.note("You move into the treeline.")
        return result
    return Resolution(
        base.updated(morale=-3),
        "The inland route is thick with brush. No advantage.",
        ["You return to the coast."],
    )


@resolves("travel-west")
def travel_west(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-15, cumulative_risk=15)
    if ctx.roll > 0.8 and ctx.turn > 5:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-12),
            "Through heat haze you spot structures in the distance.",
            ["The highway might be within reach."],
        )
    if ctx.roll < 0.3:
        return Resolution(
            base.updated(energy=-15, hydration=-10, morale=-12),
            "The heat is brutal. You make little progress.",
            ["You are severely dehydrated."],
        )
    return Resolution(
        base.updated(morale=-5),
        "You walk west. Landmarks remain distant and unclear.",
        ["You are not sure if this helps."],
    )


@resolves("backtrack-vehicle")
def backtrack_vehicle(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-9, cumulative_risk=8)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=10, cumulative_risk=-8),
            "You recognize terrain features. The vehicle is this direction.",
            ["You are retracing your path correctly."],
        )
    return Resolution(
        base.updated(morale=-7),
        "You walk back but nothing looks familiar.",
        ["You may be going the wrong way."],
    )


@resolves("scout-shade")
def scout_shade(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-7, cumulative_risk=6)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=8, body_temperature=-0.4),
            "You find a rock overhang with shade.",
            ["You can rest out of the sun."],
        )
    if ctx.roll > 0.5:
        return Resolution(
            base.updated(morale=-2),
            "You find scattered cacti but no water source.",
            ["The search was not fruitful."],
        )
    return Resolution(
        base.updated(morale=-6),
        "The search exhausts you with no reward.",
        ["You found nothing useful."],
    )


@resolves("search-trail")
def search_trail(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-7, cumulative_risk=7)
    if ctx.roll > 0.75:
        return Resolution(
            base.updated(morale=20, cumulative_risk=-15),
            "You find trail markers through the trees.",
            ["You have found the trail."],
        )
    if ctx.roll > 0.4:
        result = Resolution(
            base.updated(morale=-4),
            "You search methodically but find no clear trail.",
            ["The forest remains confusing."],
        )
        if ctx.roll > 0.55 and ctx.environment == "mountains":
            result.environment_change = "forest"
            result.note("Your search brings you into denser woods.")
        return result
    return Resolution(
        base.updated(morale=-10, cumulative_risk=5),
        "You become more disoriented during the search.",
        ["You are not sure where you are now."],
    )


@resolves("follow-stream")
def follow_stream(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-6, cumulative_risk=5)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=12),
            "You follow terrain down and find a stream.",
            ["Fresh water and a landmark."],
            equipment_changes=_found("Water bottle (full)"),
        )
    return Resolution(
        base.updated(morale=-3),
        "You descend but find no water.",
        ["The terrain is difficult."],
    )


@resolves("navigate-camp")
def navigate_camp(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-12, body_temperature=-0.8, cumulative_risk=18)
    if ctx.roll > 0.75 and ctx.turn > 4:
        return Resolution(
            base.updated(morale=25, cumulative_risk=-20),
            "Through a break in weather you spot camp structures.",
            ["You navigated correctly. Safety is ahead."],
        )
    if ctx.roll < 0.35:
        return Resolution(
            base.updated(morale=-18, body_temperature=-0.5, injury_severity=10),
            "Visibility drops to zero. You stop, disoriented and freezing.",
            ["You may have walked past camp."],
        )
    return Resolution(
        base.updated(morale=-8),
        "You travel through whiteout. Direction is uncertain.",
        ["You cannot confirm you are heading the right way."],
    )


@resolves("retrace-tracks")
def retrace_tracks(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-8, body_temperature=-0.4, cumulative_risk=10)
    if ctx.roll > 0.65:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-8),
            "You find your earlier tracks and follow them back.",
            ["You are retracing your path."],
        )
    return Resolution(
        base.updated(morale=-6),
        "Wind has erased most tracks. You guess at direction.",
        ["You are not confident in your heading."],
    )


@resolves("find-exit")
def find_exit(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-7, cumulative_risk=8)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=20, cumulative_risk=-15),
            "You find a gap in the fencing that leads to streets.",
            ["You can see people and traffic ahead."],
        )
    if ctx.roll < 0.3:
        result = Resolution(
            base.updated(morale=-10, energy=-10),
            "You encounter a barrier you cannot pass. Must backtrack.",
            ["You wasted time and energy."],
        )
        if ctx.roll < 0.15:
            result.environment_change = "forest"
            result.note("You end up in overgrown wasteland.")
        return result
    return Resolution(
        base.updated(morale=4),
        "You navigate through debris toward populated areas.",
        ["Progress is slow but you are moving the right direction."],
    )


@resolves("climb-vantage")
def climb_vantage(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-4, cumulative_risk=8)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=10, cumulative_risk=-6),
            "From elevation you spot active streets to the west.",
            ["You now know which direction to go."],
        )
    if ctx.roll < 0.25:
        return Resolution(
            base.updated(morale=-8, injury_severity=8),
            "The structure shifts under you. You barely avoid falling.",
            ["That was dangerous."],
        )
    return Resolution(
        base.updated(morale=-2),
        "You climb up but buildings block most sightlines.",
        ["You learned little."],
    )


@resolves("use-rope-descend")
def use_rope_descend(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-8, cumulative_risk=-3)
    if ctx.roll > 0.7:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-8),
            "Using the rope, you safely descend the steep section.",
            ["The rope made a dangerous passage manageable."],
        )
    if ctx.roll > 0.4:
        return Resolution(
            base.updated(morale=4),
            "You descend carefully with the rope as an anchor.",
            ["Progress is slow but safe."],
        )
    return Resolution(
        base.updated(morale=-6, injury_severity=8),
        "The rope slips on loose rock. You catch yourself but it was close.",
        ["That was dangerous. You are shaken."],
    )


@resolves("scout")
def scout(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-4)
    if ctx.roll > 0.75:
        return Resolution(
            base.updated(morale=10),
            "You find a stream with fresh water!",
            ["You can refill your water supply."],
            equipment_changes=_found("Water bottle (full)"),
        )
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=6),
            "You find some dry firewood and tinder.",
            ["This could help with warmth."],
            equipment_changes=_found("Firewood bundle"),
        )
    if ctx.roll > 0.4:
        return Resolution(
            base.updated(morale=4),
            "You find some edible berries.",
            ["A small food source helps morale."],
            equipment_changes=_found("Berries (handful)"),
        )
    if ctx.roll > 0.2:
        return Resolution(
            base.updated(morale=-3),
            "You scout the area but find little of value.",
            ["At least you know what is nearby."],
        )
    return Resolution(
        base.updated(morale=-6, cumulative_risk=3),
        "The scouting effort yields nothing useful.",
        ["You wasted energy for no gain."],
    )


@resolves("use-flashlight-scout")
def use_flashlight_scout(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-4)
    if ctx.roll > 0.7:
        result = Resolution(
            base.updated(morale=12),
            "Using the flashlight, you discover a shelter or resource cache.",
            ["The darkness concealed something valuable."],
            equipment_changes=_found("Emergency supplies"),
        )
    elif ctx.roll > 0.4:
        result = Resolution(
            base.updated(morale=4),
            "You carefully explore with the flashlight. Nothing dangerous nearby.",
            ["You understand your immediate surroundings better."],
        )
    else:
        result = Resolution(
            base.updated(morale=-5),
            "The flashlight reveals difficult terrain in all directions.",
            ["Your situation is more challenging than you hoped."],
        )

    flashlight = ctx.item("flashlight")
    if flashlight is not None and flashlight.condition != "good" and ctx.roll < 0.3:
        result.change_equipment(degrade(flashlight, "damaged"))
        result.note("The flashlight batteries are running low.")
    return result


@resolves("read-terrain")
def read_terrain(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-6, cumulative_risk=4)
    if ctx.roll > 0.55:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-12),
            "You follow the drainage lines downhill and pick up a worn path.",
            ["Water runs toward people. The land is showing you the way out."],
        )
    return Resolution(
        base.updated(morale=-3),
        "The ridgelines are ambiguous from here. You hold your position.",
        ["You did not commit to a bad route, but you gained little."],
    )


@resolves("confident-traverse")
def confident_traverse(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-10, cumulative_risk=10)
    if ctx.roll > 0.65:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-10),
            "You move with purpose and cover real ground toward safety.",
            ["Your confidence is backed by good progress."],
        )
    if ctx.roll < 0.25:
        return Resolution(
            base.updated(morale=-10, injury_severity=10),
            "Overconfidence carries you onto ground you should have avoided.",
            ["You twist a knee on the descent."],
        )
    return Resolution(
        base.updated(morale=-2),
        "You push on steadily, but the terrain slows you more than expected.",
        ["Confidence alone does not shorten the distance."],
    )
