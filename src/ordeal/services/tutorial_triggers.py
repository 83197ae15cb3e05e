"""Teaching-moment predicates a host can use to intercept a turn."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Callable, Tuple

from ordeal.domain.state import GameState

TriggerPredicate = Callable[[GameState], bool]


@dataclass(frozen=True, slots=True)
class TutorialTrigger:
    id: str
    title: str
    concept: str
    predicate: TriggerPredicate

    def fires(self, state: GameState) -> bool:
        return self.predicate(state)


def _stay_or_go(state: GameState) -> bool:
    return 2 <= state.turn_number <= 4 and state.current_time_of_day == "dusk" and state.metrics.morale < 70


def _wet_is_death(state: GameState) -> bool:
    return state.metrics.body_temperature < 36 and state.turn_number >= 3 and state.scenario.temperature < 15


def _signaling_paradox(state: GameState) -> bool:
    return (
        state.turn_number >= 6
        and state.metrics.signal_effectiveness > 40
        and state.current_time_of_day == "midday"
    )


def _hydration_myth(state: GameState) -> bool:
    return state.metrics.hydration < 50 and state.turn_number >= 5 and state.scenario.temperature > 25


def _energy_vs_shelter(state: GameState) -> bool:
    m = state.metrics
    return (
        m.energy < 35
        and m.shelter < 20
        and state.current_time_of_day == "afternoon"
        and state.scenario.temperature < 5
    )


TUTORIAL_TRIGGERS: Tuple[TutorialTrigger, ...] = (
    TutorialTrigger("stayOrGo", 'The "Stay or Go" Trap', "S.T.O.P. Principle (Sit, Think, Observe, Plan)", _stay_or_go),
    TutorialTrigger(
        "wetIsDeath",
        'The "Wet is Death" Dilemma',
        "Thermoregulation - Moisture is the Enemy of Body Heat",
        _wet_is_death,
    ),
    TutorialTrigger(
        "signalingParadox",
        "The Signaling Paradox",
        "Being Seen vs. Moving Fast - Geometry and Contrast",
        _signaling_paradox,
    ),
    TutorialTrigger(
        "hydrationMyth",
        "The Hydration Myth",
        "Resource Management - Store Water in Your Belly, Not Your Bottle",
        _hydration_myth,
    ),
    TutorialTrigger(
        "energyVsShelter",
        'The "Energy vs. Shelter" Race',
        "Rule of 3s - 3 Hours Without Shelter in Extreme Conditions",
        _energy_vs_shelter,
    ),
)


def find_triggered_tutorial(
    state: GameState,
    completed: AbstractSet[str] = frozenset(),
) -> TutorialTrigger | None:
    """First trigger whose predicate holds and that the player has not already seen."""
    if not state.is_active:
        return None
    for trigger in TUTORIAL_TRIGGERS:
        if trigger.id not in completed and trigger.fires(state):
            return trigger
    return None


__all__ = ["TUTORIAL_TRIGGERS", "TriggerPredicate", "TutorialTrigger", "find_triggered_tutorial"]
