"""End-of-run analysis: strengths, weaknesses, lessons and key moments."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ordeal.domain.causality import CausalityChain, metric_label
from ordeal.domain.equipment import has_capability
from ordeal.domain.outcome import DecisionOutcome
from ordeal.domain.state import GameState, KeyMoment

SHELTER_DECISIONS = frozenset({"shelter", "fortify"})
MOVEMENT_DECISIONS = frozenset(
    {
        "retrace-trail",
        "search-trail",
        "follow-coast",
        "find-exit",
        "navigate-camp",
        "backtrack-vehicle",
        "confident-traverse",
        "night-dash-highway",
        "read-terrain",
        "panic-move",
    }
)
MAX_KEY_MOMENTS = 5


@dataclass(frozen=True, slots=True)
class PerformanceAnalysis:
    strengths: Tuple[str, ...]
    weaknesses: Tuple[str, ...]
    lessons: Tuple[str, ...]


def _count(history: Sequence[DecisionOutcome], ids: frozenset[str]) -> int:
    return sum(1 for outcome in history if outcome.decision.id in ids)


def analyze_performance(state: GameState) -> PerformanceAnalysis:
    history = state.history
    strengths: List[str] = []
    weaknesses: List[str] = []
    lessons: List[str] = []

    shelter_count = _count(history, SHELTER_DECISIONS)
    movement_count = _count(history, MOVEMENT_DECISIONS)
    rest_count = sum(1 for outcome in history if outcome.decision.id == "rest")
    high_risk_count = sum(1 for outcome in history if outcome.decision.risk_level > 6)

    if shelter_count >= 3:
        strengths.append("You prioritized protection from the elements")
    elif shelter_count == 0:
        weaknesses.append("You never improved your shelter")
        lessons.append("Shelter is more important than movement in most scenarios")

    if movement_count == 0:
        strengths.append("You resisted the urge to move unnecessarily")
    elif movement_count > 3:
        weaknesses.append("You moved too much when staying put was safer")
        lessons.append("Unnecessary movement burns energy and increases risk")

    if rest_count >= 2:
        strengths.append("You understood the value of conserving energy")

    if high_risk_count > 2:
        weaknesses.append("You took too many high-risk actions")
        lessons.append("Desperation leads to poor decisions")

    average_energy = sum(outcome.metrics_change.energy for outcome in history) / max(len(history), 1)
    if average_energy > -20:
        strengths.append("You managed energy consumption well")
    else:
        weaknesses.append("Your decisions depleted energy too quickly")
        lessons.append("Energy conservation is critical to survival")

    risk = state.metrics.cumulative_risk
    if risk > 40:
        weaknesses.append("You accumulated excessive risk")
        lessons.append("Each decision has consequences that compound over time")
    elif risk < 15:
        strengths.append("You minimized unnecessary risk")

    if state.outcome == "survived" and len(strengths) < 2:
        lessons.append("You survived despite poor choices. Luck played a role.")
    elif state.outcome == "died" and not weaknesses:
        lessons.append("Sometimes the scenario is not survivable from the start.")
        lessons.append("Recognize when the odds are against you.")

    if not lessons:
        if state.outcome == "survived":
            lessons.append("Discipline and restraint are survival tools.")
        else:
            lessons.append("Small mistakes compound into fatal outcomes.")

    return PerformanceAnalysis(tuple(strengths), tuple(weaknesses), tuple(lessons))


def pattern_lessons(state: GameState) -> List[str]:
    """Lessons drawn from recurring habits across the run."""
    history = state.history
    scenario = state.scenario
    lessons: List[str] = []

    if scenario.weather in ("storm", "snow", "rain") and state.metrics.shelter < 40:
        neglected = sum(
            1
            for turn, outcome in enumerate(history, start=1)
            if turn > 3 and "shelter" not in outcome.decision.id and "fortify" not in outcome.decision.id
        )
        if neglected >= 3:
            lessons.append(
                f"Shelter Priority: You ignored shelter in harsh weather {neglected} times. "
                "Shelter is your first line of defense against the elements. Build or improve shelter "
                "within the first 3 turns in cold/wet conditions."
            )

    first_injury = next(
        (index for index, outcome in enumerate(history) if outcome.metrics_change.injury_severity >= 10),
        None,
    )
    if first_injury is not None and state.metrics.injury_severity > 30:
        risky = sum(
            1
            for outcome in history[first_injury + 1:]
            if outcome.decision.risk_level > 5 or outcome.decision.id == "panic-move"
        )
        if risky >= 2:
            lessons.append(
                f"Risk Management: You took {risky} high-risk actions while injured. "
                "Injuries compound risk. Treat injuries immediately and avoid risky "
                "decisions until injury severity is below 30."
            )

    cold = scenario.temperature < 5 or scenario.weather == "snow"
    fire_attempts = sum(1 for outcome in history if "fire" in outcome.decision.id)
    if cold and state.turn_number > 5 and fire_attempts <= 1 and state.metrics.fire_quality < 30:
        lessons.append(
            f"Fire Maintenance: You neglected fire in {scenario.temperature}°C conditions. Fire provides "
            "warmth, morale and a signal. In temperatures below 10°C, keep fire quality above 50."
        )

    if not lessons and state.outcome == "died":
        lessons.append(
            "Survival Fundamentals: Focus on the survival priorities of shelter, water, fire, food "
            "and signaling, in that order. Establishing these basics within the first 5 turns "
            "significantly improves survival probability."
        )
    return lessons


def missed_opportunities(state: GameState) -> List[str]:
    history = state.history
    equipment = state.equipment
    missed: List[str] = []

    if has_capability(equipment, "fire_starter"):
        first_fire = next(
            (index for index, outcome in enumerate(history) if "fire" in outcome.decision.id),
            None,
        )
        if first_fire is None:
            missed.append(
                "You had fire-starting equipment but never built a fire. "
                "Fire should be established within first 3 turns in cold conditions."
            )
        elif first_fire > 5:
            missed.append(
                f"You had fire-starting equipment but waited until turn {first_fire + 1} to build fire. "
                "Fire should be established within first 3 turns in cold conditions."
            )

    if has_capability(equipment, "whistle") or has_capability(equipment, "mirror"):
        if state.signal_attempts < 3 and state.turn_number > 10:
            missed.append(
                f"You had signaling equipment but only attempted {state.signal_attempts} signals. "
                "Persistent signaling (5+ attempts) in favorable conditions is key to rescue."
            )
        elif 2 <= state.successful_signals < 5 and state.outcome == "died":
            missed.append(
                f"You had {state.successful_signals} successful signals but died before rescue. "
                "You needed to survive longer while continuing to signal."
            )

    if has_capability(equipment, "knife") and state.turn_number > 4:
        if not any(outcome.decision.id in ("use-knife-shelter", "fortify") for outcome in history):
            missed.append(
                "You had a cutting tool but never built advanced shelter. "
                "Knives make sturdier shelters that provide superior protection."
            )
    return missed


def causality_lesson(chain: CausalityChain) -> str:
    """One-paragraph account of the decision that started a fatal decline."""
    label = metric_label(chain.fatal_metric)
    turns = len(chain.cascade)
    spread = f" Over {turns} turns the damage compounded." if turns > 2 else ""
    instead = "; ".join(chain.alternatives)
    return (
        f"Critical Mistake (Turn {chain.root_turn}): \"{chain.root_decision_text}\" started the decline "
        f"in your {label}.{spread} Your pattern: {chain.pattern}. "
        f"Instead: {instead}."
    )


def build_lessons(state: GameState, reason: str | None) -> Tuple[str, ...]:
    """End reason and fatal chain first, then patterns, missed chances and general lessons, without repeats."""
    chain = state.causality_chain
    candidates = [
        reason or "",
        causality_lesson(chain) if chain is not None else "",
        *pattern_lessons(state),
        *missed_opportunities(state),
        *analyze_performance(state).lessons,
    ]
    lessons: List[str] = []
    for lesson in candidates:
        if lesson.strip() and lesson not in lessons:
            lessons.append(lesson)
    return tuple(lessons)


def identify_key_moments(state: GameState) -> Tuple[KeyMoment, ...]:
    moments: List[KeyMoment] = []
    for turn, outcome in enumerate(state.history, start=1):
        change = outcome.metrics_change
        if outcome.decision.id == "panic-move":
            moments.append(KeyMoment(turn, "You panicked and moved recklessly", "critical"))
        elif change.energy < -40:
            moments.append(KeyMoment(turn, "A decision cost far more energy than expected", "negative"))
        elif change.cumulative_risk > 15:
            moments.append(KeyMoment(turn, "You took a high-risk action", "negative"))
        elif change.injury_severity > 20:
            moments.append(KeyMoment(turn, "You sustained a serious injury", "critical"))
        elif outcome.decision.id in SHELTER_DECISIONS and turn <= 3:
            moments.append(KeyMoment(turn, "You prioritized shelter early", "positive"))
    return tuple(moments[:MAX_KEY_MOMENTS])


__all__ = [
    "PerformanceAnalysis",
    "analyze_performance",
    "build_lessons",
    "causality_lesson",
    "identify_key_moments",
    "missed_opportunities",
    "pattern_lessons",
]
