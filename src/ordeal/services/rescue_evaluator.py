"""Derived rescue outlook: probability, win-condition progress and an ETA."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Tuple

from ordeal.domain.metrics import clamp
from ordeal.domain.state import GameState

WinConditionKind = Literal["signal", "navigate", "endure"]

REQUIRED_SIGNALS = 5
SIGNAL_RESCUE_TURN = 12
SEARCH_START_TURN = 10
ENDURE_TURNS = 15
ENDURE_SURVIVAL_THRESHOLD = 55


@dataclass(frozen=True, slots=True)
class WinCondition:
    kind: WinConditionKind
    progress: float
    description: str
    turns_remaining: int | None = None


@dataclass(frozen=True, slots=True)
class RescueStatus:
    signal_attempts: int
    successful_signals: int
    required_signals: int
    rescue_probability: float
    estimated_turns_to_rescue: int | None
    win_conditions: Tuple[WinCondition, ...]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("" if count == 1 else "s")


def rescue_probability(state: GameState) -> float:
    signals = state.successful_signals
    if signals <= 0:
        return 0.0
    m = state.metrics
    if state.turn_number >= SEARCH_START_TURN:
        probability = min(85.0, signals * 15 + m.signal_effectiveness * 0.3)
    else:
        # Searchers have not been dispatched yet.
        probability = float(min(15, signals * 3))

    weather = state.scenario.weather
    period = state.current_time_of_day
    if weather == "clear" and period == "midday":
        probability += 10
    elif weather in ("storm", "snow"):
        probability -= 15
    if period == "night":
        probability -= 20
    if state.current_environment == "mountains" and m.shelter > 50:
        probability += 5
    return clamp(probability, 0, 100)


def _signal_condition(state: GameState) -> WinCondition:
    signals = state.successful_signals
    turn = state.turn_number
    signal_progress = min(100.0, signals / REQUIRED_SIGNALS * 100)
    turn_progress = min(100.0, turn / SIGNAL_RESCUE_TURN * 100)
    if turn < SIGNAL_RESCUE_TURN:
        description = (
            f"Survive to turn {SIGNAL_RESCUE_TURN}, then send {REQUIRED_SIGNALS} signals "
            f"({signals}/{REQUIRED_SIGNALS} signals, turn {turn}/{SIGNAL_RESCUE_TURN})"
        )
    else:
        remaining = max(0, REQUIRED_SIGNALS - signals)
        description = (
            f"Send {remaining} more successful signal{'' if remaining == 1 else 's'} ({signals}/{REQUIRED_SIGNALS})"
        )
    done = signals >= REQUIRED_SIGNALS and turn >= SIGNAL_RESCUE_TURN
    return WinCondition(
        kind="signal",
        progress=min(100.0, (signal_progress + turn_progress) / 2),
        description=description,
        turns_remaining=0 if done else None,
    )


def _endure_condition(state: GameState) -> WinCondition:
    turn = state.turn_number
    survival = state.metrics.survival_probability
    remaining = max(0, ENDURE_TURNS - turn)
    if survival > ENDURE_SURVIVAL_THRESHOLD:
        description = f"Survive {_plural(remaining, 'more turn')} ({turn}/{ENDURE_TURNS})"
    else:
        description = (
            f"Survive to turn {ENDURE_TURNS} with {ENDURE_SURVIVAL_THRESHOLD}+ survival probability "
            f"(currently {survival:.0f}%)"
        )
    return WinCondition(
        kind="endure",
        progress=min(100.0, turn / ENDURE_TURNS * 100),
        description=description,
        turns_remaining=remaining,
    )


def estimate_turns_to_rescue(state: GameState, probability: float) -> int | None:
    signals = state.successful_signals
    turn = state.turn_number
    until_minimum = max(0, SIGNAL_RESCUE_TURN - turn)
    if signals >= REQUIRED_SIGNALS and turn >= SIGNAL_RESCUE_TURN:
        return math.ceil((100 - probability) / 15)
    if signals >= 3 and state.metrics.signal_effectiveness > 60:
        return until_minimum + math.ceil((REQUIRED_SIGNALS - signals) * 1.5)
    if turn < ENDURE_TURNS:
        return max(until_minimum, ENDURE_TURNS - turn)
    return None


def calculate_rescue_status(state: GameState) -> RescueStatus:
    """Recompute the rescue outlook; never stored on the state."""
    probability = rescue_probability(state)
    conditions = [_signal_condition(state)]
    if state.turn_number > 5:
        conditions.append(
            WinCondition(
                kind="navigate",
                progress=min(100.0, state.turn_number * 8.0),
                description="Successfully navigate to safety through decisive action",
            )
        )
    conditions.append(_endure_condition(state))
    return RescueStatus(
        signal_attempts=state.signal_attempts,
        successful_signals=state.successful_signals,
        required_signals=REQUIRED_SIGNALS,
        rescue_probability=probability,
        estimated_turns_to_rescue=estimate_turns_to_rescue(state, probability),
        win_conditions=tuple(conditions),
    )


def describe_rescue_probability(probability: float) -> str:
    if probability >= 85:
        return "Imminent"
    if probability >= 70:
        return "Very High"
    if probability >= 50:
        return "Good"
    if probability >= 30:
        return "Moderate"
    if probability >= 15:
        return "Low"
    return "Very Low"


__all__ = [
    "REQUIRED_SIGNALS",
    "RescueStatus",
    "WinCondition",
    "calculate_rescue_status",
    "describe_rescue_probability",
    "estimate_turns_to_rescue",
    "rescue_probability",
]
