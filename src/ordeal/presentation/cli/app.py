"""Console-driven UI loops for Wilderness Ordeal."""
from __future__ import annotations

import logging
import secrets
from typing import List, Literal, Sequence, Set, Tuple

from ordeal.core.rng import RNG
from ordeal.data.knowledge_store import JsonFileKnowledgeStore
from ordeal.domain.equipment import Equipment, total_volume
from ordeal.domain.outcome import DecisionOutcome
from ordeal.domain.scenario import Scenario
from ordeal.domain.state import GameState
from ordeal.presentation.cli.config import get_knowledge_path
from ordeal.presentation.cli.render import (
    debug_enabled,
    format_metrics,
    format_preview,
    render_bullet_lines,
    render_heading,
    render_menu,
    render_paragraph,
)
from ordeal.services import KnowledgeTracker, LoadoutError, build_notification, calculate_rescue_status
from ordeal.services.controllers import GameController
from ordeal.services.decision_preview import preview_decision
from ordeal.services.loadout import quick_start_loadout, select_loadout
from ordeal.services.rescue_evaluator import describe_rescue_probability
from ordeal.services.situation import describe_situation
from ordeal.services.tutorial_triggers import TutorialTrigger

MenuAction = Literal["new_game", "knowledge", "reset", "quit"]
_MAX_RANDOM_SEED = 2**31 - 1
_SEVERITY_MARKERS = {"danger": "!!", "warning": "!", "success": "+", "info": "*"}


def main() -> None:
    """Start the interactive CLI session."""
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    tracker = _build_knowledge_tracker()
    print("=== Wilderness Ordeal ===")
    running = True
    while running:
        action = _main_menu_loop()
        if action == "quit":
            running = False
        elif action == "knowledge":
            _render_knowledge_summary(tracker)
        elif action == "reset":
            if _confirm("Erase everything you have learned so far? (y/n): "):
                tracker.reset()
                print("Knowledge ledger cleared.")
        else:
            controller = GameController(RNG(_prompt_seed()), knowledge_tracker=tracker)
            state = _start_new_game(controller)
            _run_turn_loop(controller, state)
    print("Goodbye!")


def _main_menu_loop() -> MenuAction:
    options: List[Tuple[MenuAction, str]] = [
        ("new_game", "New Game"),
        ("knowledge", "Knowledge Summary"),
        ("reset", "Reset Knowledge"),
        ("quit", "Quit"),
    ]
    while True:
        render_menu("Main Menu", [label for _, label in options])
        choice = input("Select an option: ").strip()
        try:
            index = int(choice) - 1
        except ValueError:
            index = -1
        if 0 <= index < len(options):
            return options[index][0]
        print(f"Invalid selection. Please enter 1-{len(options)}.")


def _build_knowledge_tracker() -> KnowledgeTracker:
    """Construct the tracker backed by the per-user ledger file."""
    return KnowledgeTracker(JsonFileKnowledgeStore(get_knowledge_path()))


def _prompt_seed() -> int:
    while True:
        raw_value = input("Enter seed (blank for random): ").strip()
        if not raw_value:
            seed = secrets.randbelow(_MAX_RANDOM_SEED)
            print(f"Using seed: {seed}")
            return seed
        try:
            return int(raw_value)
        except ValueError:
            print("Invalid seed. Please enter a valid integer.")


def _confirm(prompt: str) -> bool:
    return input(prompt).strip().lower() in ("y", "yes")


def _start_new_game(controller: GameController) -> GameState:
    scenario = controller.generate_scenario()
    _render_scenario(scenario)
    equipment = _prompt_loadout(controller, scenario)
    return controller.create_new_game(scenario, equipment)


def _render_scenario(scenario: Scenario) -> None:
    render_heading("Your Situation")
    render_paragraph(
        f"You are stranded in the {scenario.environment}. It is {scenario.time_of_day}, "
        f"{scenario.temperature:g} C with {scenario.weather} weather and winds of {scenario.wind_speed:g} km/h."
    )
    render_paragraph(scenario.initial_condition.description)
    render_paragraph(f"Distance to safety: {scenario.distance_to_safety}")


def _prompt_loadout(controller: GameController, scenario: Scenario) -> Tuple[Equipment, ...]:
    render_menu("Pack Your Backpack", ["Quick start (balanced loadout)", "Choose items yourself"])
    while True:
        choice = input("Select an option: ").strip()
        if choice == "1":
            return quick_start_loadout(scenario, controller.rng)
        if choice == "2":
            return _prompt_manual_loadout(scenario)
        print("Invalid selection. Please enter 1 or 2.")


def _prompt_manual_loadout(scenario: Scenario) -> Tuple[Equipment, ...]:
    pool = scenario.available_equipment
    while True:
        render_heading(f"Available Equipment (backpack {scenario.backpack_capacity_liters:g} L)")
        for idx, item in enumerate(pool, start=1):
            print(f"{idx:2}. {item.name:<34} x{item.quantity}  {item.volume_liters or 0:.2f} L")
        raw = input("Choose items (comma-separated numbers): ").strip()
        parts = [part.strip() for part in raw.split(",") if part.strip()]
        try:
            indices = [int(part) - 1 for part in parts]
        except ValueError:
            print("Please enter numbers separated by commas.")
            continue
        if any(index < 0 or index >= len(pool) for index in indices):
            print("Invalid item selection.")
            continue
        try:
            chosen = select_loadout(scenario, [pool[index].name for index in indices])
        except LoadoutError as exc:
            print(exc)
            continue
        print(f"Packed {len(chosen)} items ({total_volume(chosen):.2f} L).")
        return chosen


def _run_turn_loop(controller: GameController, state: GameState) -> None:
    completed_tutorials: Set[str] = set()
    while state.is_active:
        _render_turn_header(state)
        tutorial = controller.pending_tutorial(state, completed_tutorials)
        if tutorial is not None:
            _render_tutorial(tutorial)
            completed_tutorials.add(tutorial.id)
        decisions = controller.get_available_decisions(state)
        if not decisions:
            print("There is nothing left you can do.")
            return
        render_heading("Decisions")
        for idx, decision in enumerate(decisions, start=1):
            hint = f" ({decision.environmental_hint})" if decision.environmental_hint else ""
            print(f"{idx}. {decision.text}{hint}")
            preview = preview_decision(decision, state)
            print(f"     {format_preview(preview)}")
            for warning in preview.warnings:
                print(f"     ! {warning}")
            if debug_enabled():
                print(
                    f"     [{decision.id}] energy {decision.energy_cost:g}, risk {decision.risk_level}, "
                    f"{decision.time_required:g} h"
                )
        index = _prompt_choice(len(decisions))
        state = controller.make_decision(state, decisions[index])
        if state.last_outcome is not None:
            _render_outcome(state.last_outcome)
    _render_debrief(state)


def _render_turn_header(state: GameState) -> None:
    render_heading(f"Turn {state.turn_number} - {state.current_time_of_day.title()} in the {state.current_environment}")
    render_paragraph(describe_situation(state))
    print()
    for line in format_metrics(state.metrics):
        print(line)
    rescue = calculate_rescue_status(state)
    print(
        f"Signals: {rescue.successful_signals}/{rescue.required_signals} successful "
        f"({rescue.signal_attempts} attempts). Rescue chance: "
        f"{describe_rescue_probability(rescue.rescue_probability)}"
    )
    if rescue.estimated_turns_to_rescue is not None:
        print(f"Estimated turns to rescue: {rescue.estimated_turns_to_rescue}")


def _render_tutorial(tutorial: TutorialTrigger) -> None:
    render_heading(f"Teaching Moment: {tutorial.title}")
    render_paragraph(tutorial.concept)


def _prompt_choice(choice_count: int) -> int:
    while True:
        raw = input("Select an option: ").strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")


def _render_outcome(outcome: DecisionOutcome) -> None:
    notification = build_notification(outcome)
    render_heading(f"{_SEVERITY_MARKERS[notification.severity]} {notification.title}")
    render_paragraph(notification.message)
    render_bullet_lines(notification.details)
    explanation = outcome.explanation
    if explanation is None:
        return
    print()
    render_paragraph(explanation.narrative)
    if explanation.recommendations:
        print("Next time:")
        render_bullet_lines(explanation.recommendations)


def _render_debrief(state: GameState) -> None:
    titles = {"survived": "You Survived", "barely_survived": "You Barely Survived", "died": "You Did Not Survive"}
    render_heading(titles.get(state.outcome, "Game Over"))
    print(f"Turns survived: {state.turn_number - 1}, hours elapsed: {state.hours_elapsed:g}")
    print(f"Principle alignment: {state.principle_alignment_score:g}/100")
    if state.lessons:
        render_heading("Lessons")
        render_bullet_lines(state.lessons)
    chain = state.causality_chain
    if chain is not None:
        render_heading("What Went Wrong")
        render_bullet_lines(
            f"Turn {step.turn}: {step.decision_text} ({step.change:+.1f}, {step.severity})" for step in chain.cascade
        )
    if state.key_moments:
        render_heading("Key Moments")
        render_bullet_lines(f"Turn {moment.turn}: {moment.description} ({moment.impact})" for moment in state.key_moments)
    if state.discovered_principles:
        render_heading("Principles Discovered")
        render_bullet_lines(sorted(state.discovered_principles))


def _render_knowledge_summary(tracker: KnowledgeTracker) -> None:
    stats = tracker.get_total_stats()
    render_heading("Knowledge Summary")
    print(f"Sessions completed: {stats.total_sessions}")
    print(f"Principles discovered: {stats.total_principles}")
    print(f"Survival rate: {stats.survival_rate:.0f}%")
    strengths = tracker.get_knowledge_strengths()
    _render_categories("Strongest categories", [f"{s.category} ({s.count})" for s in strengths.strongest])
    _render_categories("Needs practice", [f"{s.category} ({s.count})" for s in strengths.weakest])


def _render_categories(title: str, lines: Sequence[str]) -> None:
    if lines:
        print(f"{title}:")
        render_bullet_lines(lines)
