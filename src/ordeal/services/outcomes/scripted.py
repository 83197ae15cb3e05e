"""One-off, high-stakes moves that only appear once per run."""
from __future__ import annotations

from ordeal.domain.equipment import degrade
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.outcome import DelayedEffect
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


@resolves("rappel-cliff")
def rappel_cliff(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-6, cumulative_risk=10)
    if ctx.roll > 0.55:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-10),
            "You lower yourself down the cliff band and reach the valley floor.",
            ["Hours of detour avoided in minutes."],
            environment_change="forest",
        )
    result = Resolution(
        base.updated(morale=-12, injury_severity=15),
        "The rope jerks as an anchor shifts. You drop the last few metres.",
        ["You land badly on the scree."],
        equipment_changes=degrade(ctx.item("rope"), "damaged"),
    )
    result.delayed_effects.append(
        DelayedEffect(
            turn=ctx.turn + 2,
            effect="Your ankle has swollen badly since the fall.",
            metrics_change=MetricsDelta(energy=-8, morale=-5),
        )
    )
    return result


@resolves("swim-headland")
def swim_headland(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, body_temperature=-1.0, cumulative_risk=15)
    if ctx.roll > 0.6:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-5),
            "You round the headland and drag yourself onto a sheltered beach.",
            ["You are cold, but past the obstacle."],
        )
    return Resolution(
        base.updated(body_temperature=-1.5, morale=-15, injury_severity=10),
        "The swell throws you against the rocks before you crawl back ashore.",
        ["Cold water stole more heat than you expected."],
    )


@resolves("cross-frozen-lake")
def cross_frozen_lake(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, cumulative_risk=15)
    if ctx.roll > 0.5:
        return Resolution(
            base.updated(morale=10, cumulative_risk=-5),
            "The ice holds. You cross in half the time the shoreline would take.",
            ["You were lucky. Ice thickness is never certain."],
        )
    return Resolution(
        base.updated(body_temperature=-2.0, morale=-20, injury_severity=10),
        "The ice gives way under one leg. You haul yourself out soaked to the hip.",
        ["Wet and freezing, you need warmth urgently."],
    )


@resolves("night-dash-highway")
def night_dash_highway(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-6, cumulative_risk=10)
    if ctx.roll > 0.65:
        return Resolution(
            base.updated(morale=15, cumulative_risk=-12),
            "Travelling in the cool of the night, you close on the highway lights.",
            ["The lights are noticeably nearer."],
        )
    return Resolution(
        base.updated(morale=-10, injury_severity=8),
        "The lights never seem to get closer, and you stumble in a wash.",
        ["Distances are deceptive in the desert at night."],
    )


@resolves("climb-tall-tree")
def climb_tall_tree(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-3, cumulative_risk=8)
    if ctx.roll > 0.55:
        return Resolution(
            base.updated(morale=12, cumulative_risk=-8),
            "From the crown you see a clearing and a road to the east.",
            ["You now have a heading."],
        )
    if ctx.roll < 0.2:
        return Resolution(
            base.updated(morale=-10, injury_severity=15),
            "A branch snaps and you slide down through the limbs.",
            ["You are scraped and bruised."],
        )
    return Resolution(
        base.updated(morale=-3),
        "The canopy around you is too dense to see anything.",
        ["The climb was wasted effort."],
    )
