from __future__ import annotations

from ordeal.core.rng import RNG
from ordeal.core.types import ENVIRONMENTS
from ordeal.data.knowledge_store import InMemoryKnowledgeStore
from ordeal.services.knowledge_tracker import KnowledgeTracker
from ordeal.services.scenario_generator import (
    EQUIPMENT_POOL,
    ScenarioGenerator,
    WEATHER_BY_ENVIRONMENT,
    environment_weights,
    pick_weighted_environment,
    roll_available_equipment,
)
from tests.helpers.builders import FixedRNG


def test_same_seed_same_scenario() -> None:
    assert ScenarioGenerator(RNG(99)).generate() == ScenarioGenerator(RNG(99)).generate()


def test_generated_scenarios_are_consistent() -> None:
    generator = ScenarioGenerator(RNG(2024))
    for _ in range(25):
        scenario = generator.generate()
        assert scenario.weather in WEATHER_BY_ENVIRONMENT[scenario.environment]
        assert 3 <= scenario.terrain_difficulty <= 8
        assert scenario.wind_speed >= 0
        assert 10 <= len(scenario.available_equipment) <= 14
        assert 18 <= scenario.backpack_capacity_liters <= 65


def test_available_equipment_has_no_duplicates() -> None:
    names = [item.name for item in roll_available_equipment(RNG(5))]
    assert len(names) == len(set(names))
    assert set(names) <= set(EQUIPMENT_POOL)


def test_weak_categories_weight_environments() -> None:
    weights = environment_weights(["fire", "water"])
    assert weights["tundra"] == 5
    assert weights["urban-edge"] == 1
    assert set(weights) == set(ENVIRONMENTS)


def test_weighted_pick_respects_zero_weights() -> None:
    weights = {environment: 0 for environment in ENVIRONMENTS}
    weights["coast"] = 3
    assert pick_weighted_environment(weights, FixedRNG()) == "coast"


def test_no_adaptation_before_a_completed_session() -> None:
    tracker = KnowledgeTracker(InMemoryKnowledgeStore())
    generator = ScenarioGenerator(RNG(1), tracker)
    assert generator.weak_categories() == []

    tracker.start_session("game_1", "forest")
    tracker.record_principle_view("Build a fire early.", "fire")
    tracker.end_session("died")

    assert "fire" not in generator.weak_categories()
    assert len(generator.weak_categories()) == 3
