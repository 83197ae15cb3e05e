"""Gathering fuel, lighting and maintaining a fire."""
from __future__ import annotations

from ordeal.domain.equipment import EquipmentChanges, consume_one, make_item
from ordeal.domain.metrics import MetricsDelta
from ordeal.services.outcomes.base import Resolution, ResolutionContext, resolves


def _weather_threshold(ctx: ResolutionContext, base: float, rain: float, storm: float, wind: float) -> float:
    weather = ctx.scenario.weather
    if weather == "rain":
        return rain
    if weather in ("storm", "snow"):
        return storm
    if weather == "wind" and ctx.scenario.wind_speed > 30:
        return wind
    return base


@resolves("gather-tinder")
def gather_tinder(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-2, morale=3)
    if ctx.roll > 0.7:
        return Resolution(
            base,
            "You find excellent dry tinder - grass, bark, and pine needles.",
            ["This tinder will catch fire easily."],
            equipment_changes=EquipmentChanges(added=(make_item("Tinder bundle", quantity=2),)),
        )
    return Resolution(
        base,
        "You gather some usable tinder from the area.",
        ["It should be enough to start a fire."],
        equipment_changes=EquipmentChanges(added=(make_item("Tinder bundle", quantity=1),)),
    )


@resolves("gather-firewood")
def gather_firewood(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-4, morale=5)
    if ctx.roll > 0.6:
        return Resolution(
            base,
            "You gather quality firewood - both kindling and larger fuel.",
            ["You collect a good supply of dry wood."],
            equipment_changes=EquipmentChanges(
                added=(make_item("Kindling sticks", quantity=3), make_item("Fuel logs", quantity=1))
            ),
        )
    return Resolution(
        base,
        "You find some firewood, though not as much as you hoped.",
        ["The wood quality is acceptable."],
        equipment_changes=EquipmentChanges(added=(make_item("Kindling sticks", quantity=2),)),
    )


@resolves("start-fire-lighter")
def start_fire_lighter(ctx: ResolutionContext) -> Resolution:
    threshold = _weather_threshold(ctx, base=0.05, rain=0.35, storm=0.55, wind=0.25)
    if ctx.metrics.shelter > 60:
        threshold *= 0.5

    base = MetricsDelta(energy=-ctx.base_cost, fire_quality=75, morale=18, cumulative_risk=-10)
    if ctx.roll < threshold:
        result = Resolution(
            base.updated(fire_quality=0, morale=-12, cumulative_risk=5),
            "The lighter sparks but the wind/rain snuffs out every attempt.",
            ["The conditions are too harsh. The fire will not catch."],
        )
    elif ctx.roll > 0.95:
        result = Resolution(
            base.updated(fire_quality=85),
            "The lighter sparks perfectly. The tinder catches and flames quickly spread.",
            ["You have a strong fire burning."],
        )
    elif ctx.roll > threshold + 0.3:
        result = Resolution(
            base,
            "The lighter ignites the tinder. Soon you have a good fire.",
            ["The fire is burning steadily."],
        )
    else:
        result = Resolution(
            base.updated(fire_quality=60, morale=12),
            "After many attempts, the lighter finally lights the damp tinder.",
            ["The fire starts weakly but should build."],
        )
    return result.change_equipment(consume_one(ctx.item("tinder")))


@resolves("start-fire-matches")
def start_fire_matches(ctx: ResolutionContext) -> Resolution:
    threshold = _weather_threshold(ctx, base=0.15, rain=0.50, storm=0.70, wind=0.40)
    if ctx.metrics.shelter > 60:
        threshold *= 0.4

    base = MetricsDelta(energy=-ctx.base_cost, fire_quality=70, morale=15, cumulative_risk=-8)
    if ctx.roll < threshold:
        result = Resolution(
            base.updated(fire_quality=0, morale=-15, cumulative_risk=8),
            "The matches are too damp or the wind is too strong. They burn out uselessly.",
            ["You wasted your matches. The fire did not catch."],
        )
    elif ctx.roll > 0.85:
        result = Resolution(
            base.updated(fire_quality=80),
            "The match strikes true and the tinder catches immediately.",
            ["You have a solid fire going."],
        )
    elif ctx.roll > threshold + 0.2:
        result = Resolution(
            base,
            "After a couple tries, the match lights the tinder successfully.",
            ["The fire is building nicely."],
        )
    else:
        result = Resolution(
            base.updated(fire_quality=50, morale=8),
            "You use several matches before one finally catches the damp tinder.",
            ["The fire is weak but alive."],
        )
    result.change_equipment(consume_one(ctx.item("tinder")))
    return result.change_equipment(consume_one(ctx.item("matches")))


@resolves("start-fire-friction")
def start_fire_friction(ctx: ResolutionContext) -> Resolution:
    base = MetricsDelta(energy=-ctx.base_cost, hydration=-8, cumulative_risk=8)

    success_rate = 0.4 + (ctx.metrics.energy / 100) * 0.2
    weather = ctx.scenario.weather
    if weather in ("rain", "storm", "snow"):
        success_rate *= 0.3
    elif weather == "wind" and ctx.scenario.wind_speed > 25:
        success_rate *= 0.6
    if ctx.metrics.shelter > 60:
        success_rate = min(0.75, success_rate * 1.5)

    if ctx.roll > 1 - success_rate:
        return Resolution(
            base.updated(fire_quality=65, morale=25, cumulative_risk=-5),
            "After exhausting effort, you create an ember. You nurse it into flames.",
            ["The friction method worked! You have fire."],
        )
    if ctx.roll > 0.3:
        return Resolution(
            base.updated(morale=-10),
            "You create smoke but cannot sustain the ember long enough.",
            ["Despite your effort, the fire fails to catch."],
        )
    return Resolution(
        base.updated(morale=-15, injury_severity=5),
        "Your hands blister and the wood never even smokes properly.",
        ["The attempt was a complete failure."],
    )


@resolves("gather-start-fire")
def gather_start_fire(ctx: ResolutionContext) -> Resolution:
    """Gather fuel and light it in one go; slower and less reliable than staged fire-building."""
    threshold = _weather_threshold(ctx, base=0.15, rain=0.45, storm=0.65, wind=0.35)
    if ctx.metrics.shelter > 60:
        threshold *= 0.5

    base = MetricsDelta(energy=-ctx.base_cost, hydration=-4, cumulative_risk=2)
    if ctx.roll < threshold:
        result = Resolution(
            base.updated(morale=-10),
            "You scrape together damp fuel, but it smoulders and dies.",
            ["Without dry tinder the fire never takes hold."],
        )
    elif ctx.roll > threshold + 0.3:
        result = Resolution(
            base.updated(fire_quality=60, morale=12, cumulative_risk=-6),
            "You gather dead wood and coax a fire to life.",
            ["The fire is small but steady."],
        )
    else:
        result = Resolution(
            base.updated(fire_quality=40, morale=6, cumulative_risk=-3),
            "The fire catches on the third attempt. It will need tending.",
            ["The flames are weak."],
        )
    return result.change_equipment(consume_one(ctx.item("tinder")))


def _feed_fire(ctx: ResolutionContext, capability: str, last_line: str, result: Resolution) -> Resolution:
    fuel = ctx.item(capability)
    if fuel is not None:
        result.change_equipment(consume_one(fuel))
        if fuel.quantity <= 1:
            result.note(last_line)
    return result


@resolves("add-fuel-small")
def add_fuel_small(ctx: ResolutionContext) -> Resolution:
    result = Resolution(
        MetricsDelta(energy=-ctx.base_cost, fire_quality=15, morale=4),
        "You add kindling to the fire. The flames grow brighter.",
        ["The fire will burn steadily for a while."],
    )
    return _feed_fire(ctx, "kindling", "That was your last kindling.", result)


@resolves("add-fuel-large")
def add_fuel_large(ctx: ResolutionContext) -> Resolution:
    result = Resolution(
        MetricsDelta(energy=-ctx.base_cost, fire_quality=35, morale=8),
        "You place a large log on the fire. It catches and burns strongly.",
        ["This fuel should last for several hours."],
    )
    return _feed_fire(ctx, "fuel_log", "That was your last fuel log.", result)


@resolves("tend-fire")
def tend_fire(ctx: ResolutionContext) -> Resolution:
    return Resolution(
        MetricsDelta(energy=-ctx.base_cost, fire_quality=8, morale=2),
        "You rearrange the coals and add air flow to the fire.",
        ["The fire burns more efficiently."],
    )
