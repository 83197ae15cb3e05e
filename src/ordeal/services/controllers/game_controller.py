"""UI-agnostic controller driving a run from scenario to debrief."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import AbstractSet, Dict, List, Sequence, Tuple

from ordeal.core.rng import RandomSource
from ordeal.core.types import DecisionQuality
from ordeal.data.repositories import DecisionsRepository, Principle, PrinciplesRepository
from ordeal.domain.decisions import Decision
from ordeal.domain.equipment import Equipment, apply_equipment_changes
from ordeal.domain.metrics import MetricsDelta
from ordeal.domain.scenario import Scenario
from ordeal.domain.state import DecisionLogEntry, GameState
from ordeal.domain.time_of_day import advance_time
from ordeal.services.causality_tracker import build_causality_chain
from ordeal.services.debrief import build_lessons, identify_key_moments
from ordeal.services.decision_generator import generate_decisions
from ordeal.services.factories import make_instance_id
from ordeal.services.knowledge_tracker import KnowledgeTracker
from ordeal.services.loadout import quick_start_loadout
from ordeal.services.metrics_system import check_end_conditions, initialize_metrics, update_metrics
from ordeal.services.outcomes import apply_decision
from ordeal.services.quality_evaluator import FALLBACK_PRINCIPLE, QualityEvaluator
from ordeal.services.scenario_generator import ScenarioGenerator
from ordeal.services.tutorial_triggers import TutorialTrigger, find_triggered_tutorial

logger = logging.getLogger(__name__)

ALIGNMENT_DELTAS: Dict[DecisionQuality, float] = {
    "excellent": 8,
    "good": 3,
    "poor": -5,
    "critical-error": -12,
}
_GOOD = ("excellent", "good")
_POOR = ("poor", "critical-error")


class GameController:
    """
    Orchestrates a single run.

    Responsibilities:
    - Build a new GameState from a generated or supplied scenario
    - Offer the decisions open on the current turn
    - Apply a decision and return the next GameState, ending the run when due
    - Keep the knowledge ledger informed of sessions and discoveries

    Rendering and input are left to the presentation layer.
    """

    def __init__(
        self,
        rng: RandomSource,
        knowledge_tracker: KnowledgeTracker | None = None,
        decisions_repo: DecisionsRepository | None = None,
        principles_repo: PrinciplesRepository | None = None,
        scenario_generator: ScenarioGenerator | None = None,
    ) -> None:
        self._rng = rng
        self._knowledge = knowledge_tracker or KnowledgeTracker()
        self._decisions = decisions_repo or DecisionsRepository()
        self._evaluator = QualityEvaluator(principles_repo or PrinciplesRepository())
        self._scenarios = scenario_generator or ScenarioGenerator(rng, self._knowledge)

    @property
    def rng(self) -> RandomSource:
        return self._rng

    @property
    def knowledge(self) -> KnowledgeTracker:
        return self._knowledge

    def generate_scenario(self) -> Scenario:
        """Roll a scenario so the host can offer loadout selection before the run starts."""
        return self._scenarios.generate()

    def create_new_game(
        self,
        scenario: Scenario | None = None,
        equipment: Sequence[Equipment] | None = None,
    ) -> GameState:
        scenario = scenario or self._scenarios.generate()
        loadout = tuple(equipment) if equipment is not None else quick_start_loadout(scenario, self._rng)
        state = GameState(
            game_id=make_instance_id("game", self._rng),
            scenario=scenario,
            metrics=initialize_metrics(scenario, loadout),
            equipment=loadout,
            current_environment=scenario.environment,
            current_time_of_day=scenario.time_of_day,
            backpack_capacity_liters=scenario.backpack_capacity_liters,
        )
        self._knowledge.start_session(state.game_id, scenario.environment)
        logger.info(
            "New game %s: %s, %s, %s", state.game_id, scenario.environment, scenario.weather, scenario.time_of_day
        )
        return state

    def get_available_decisions(self, state: GameState) -> List[Decision]:
        return generate_decisions(state, self._decisions)

    def pending_tutorial(
        self,
        state: GameState,
        completed: AbstractSet[str] = frozenset(),
    ) -> TutorialTrigger | None:
        """Teaching moment a host may show instead of the normal decision list."""
        return find_triggered_tutorial(state, completed)

    def make_decision(self, state: GameState, decision: Decision) -> GameState:
        """Resolve one turn. An ended state is returned unchanged."""
        if not state.is_active:
            return state

        outcome = apply_decision(decision, state, self._rng, self._evaluator)
        consequences = list(outcome.consequences)

        delayed = MetricsDelta()
        for past in state.history:
            for effect in past.delayed_effects:
                if effect.turn == state.turn_number:
                    delayed = delayed + effect.metrics_change
                    consequences.append(effect.effect)

        environment = outcome.environment_change or state.current_environment
        period, hours = advance_time(state.current_time_of_day, decision.time_required)
        update = update_metrics(
            state.metrics,
            outcome.metrics_change + delayed,
            state.scenario,
            period,
            environment,
            turn=state.turn_number,
            decision=decision,
        )
        equipment = apply_equipment_changes(state.equipment, outcome.equipment_changes)

        quality = outcome.decision_quality
        principle = outcome.survival_principle_alignment or ""
        entry = DecisionLogEntry(turn=state.turn_number, description=decision.text, principle=principle)
        good_log: Tuple[DecisionLogEntry, ...] = state.good_decisions + ((entry,) if quality in _GOOD else ())
        poor_log: Tuple[DecisionLogEntry, ...] = state.poor_decisions + ((entry,) if quality in _POOR else ())

        alignment = state.principle_alignment_score
        if quality is not None:
            alignment = max(0.0, min(100.0, alignment + ALIGNMENT_DELTAS[quality]))

        discovered = state.discovered_principles
        if quality in _GOOD and principle and principle != FALLBACK_PRINCIPLE and principle not in discovered:
            discovered = discovered | {principle}
            category = outcome.principle_category
            title = Principle(text=principle, category=category).title if category else principle[:30]
            consequences.append(f"New principle discovered: {title}")
            if category is not None:
                self._knowledge.record_principle_view(principle, category)

        recorded = replace(outcome, consequences=tuple(consequences))
        next_state = replace(
            state,
            metrics=update.metrics,
            equipment=equipment,
            current_environment=environment,
            current_time_of_day=period,
            hours_elapsed=state.hours_elapsed + hours,
            history=state.history + (recorded,),
            signal_attempts=state.signal_attempts + int(outcome.was_signal_attempt),
            successful_signals=state.successful_signals + int(outcome.was_successful_signal),
            principle_alignment_score=alignment,
            discovered_principles=discovered,
            good_decisions=good_log,
            poor_decisions=poor_log,
            threshold_crossings=state.threshold_crossings + update.threshold_crossings,
            turn_number=state.turn_number + 1,
        )
        return self._finish_if_over(next_state)

    def _finish_if_over(self, state: GameState) -> GameState:
        check = check_end_conditions(state)
        if not check.ended or check.outcome is None:
            return state
        ended = replace(state, status="ended", outcome=check.outcome, end_reason=check.reason)
        if check.outcome == "died":
            ended = replace(ended, causality_chain=build_causality_chain(ended, check.reason))
        ended = replace(
            ended,
            lessons=build_lessons(ended, check.reason),
            key_moments=identify_key_moments(ended),
        )
        self._knowledge.end_session(check.outcome)
        logger.info("Game %s ended on turn %d: %s", state.game_id, state.turn_number, check.outcome)
        return ended


__all__ = ["ALIGNMENT_DELTAS", "GameController"]
