"""Narrative summary of the player's condition at the start of a turn."""
from __future__ import annotations

from typing import List

from ordeal.core.types import TimeOfDay
from ordeal.domain.state import GameState
from ordeal.domain.time_of_day import PERIOD_HOURS, hours_until_dark


def describe_daylight(period: TimeOfDay) -> str:
    if period != "night":
        hours = hours_until_dark(period)
        if hours <= 1:
            return "Less than an hour of daylight remains"
        if hours <= 2:
            return "Approximately two hours of daylight left"
        if hours <= 4:
            return f"Roughly {hours} hours of daylight remaining"
        return f"Perhaps {hours} hours until darkness"

    hours = PERIOD_HOURS["night"]
    if hours <= 2:
        return "Dawn is approaching within the next two hours"
    if hours <= 4:
        return "Dawn is still several hours away"
    return f"Approximately {hours} hours until first light"


def describe_situation(state: GameState) -> str:
    if state.turn_number == 1:
        return "You assess your situation and consider your options."

    m = state.metrics
    period = state.current_time_of_day
    parts: List[str] = []

    if m.shelter > 60:
        parts.append("Your shelter provides solid protection.")
    elif m.shelter > 30:
        parts.append("Your shelter offers basic protection.")
    elif m.shelter > 0:
        parts.append("Your makeshift shelter is minimal.")
    elif period in ("dusk", "night"):
        parts.append("You remain exposed to the elements.")

    if m.energy < 15:
        parts.append("You are on the verge of complete exhaustion. Every movement is agony.")
    elif m.energy < 30:
        parts.append("You are becoming dangerously exhausted.")
    elif m.energy < 50:
        parts.append("Fatigue is setting in.")

    if m.hydration < 15:
        parts.append("Extreme dehydration is affecting your consciousness. Your tongue is swollen.")
    elif m.hydration < 30:
        parts.append("Severe thirst clouds your thinking.")
    elif m.hydration < 50:
        parts.append("You are getting thirsty.")

    if m.body_temperature < 33:
        parts.append("Severe hypothermia. Your body is shutting down.")
    elif m.body_temperature < 35:
        parts.append("You are shivering uncontrollably.")
    elif m.body_temperature > 40:
        parts.append("Dangerous hyperthermia. Your vision swims.")
    elif m.body_temperature > 39:
        parts.append("You feel feverish and disoriented.")
    elif m.body_temperature < 36:
        parts.append("The cold is affecting you.")

    if m.injury_severity > 70:
        parts.append("Your injuries are life-threatening.")
    elif m.injury_severity > 50:
        parts.append("Your injuries are severe.")
    elif m.injury_severity > 25:
        parts.append("Pain from your injuries persists.")

    if m.morale < 30:
        parts.append("Despair is taking hold.")
    elif m.morale < 50:
        parts.append("Your spirits are low.")

    if state.scenario.weather == "storm":
        parts.append("The storm continues to rage.")
    elif state.scenario.weather == "snow":
        parts.append("Snow falls steadily.")

    if not parts:
        parts.append("You maintain awareness of your surroundings and remain alert.")
    return " ".join([f"{describe_daylight(period)}.", *parts])


__all__ = ["describe_daylight", "describe_situation"]
