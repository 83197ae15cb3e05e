from __future__ import annotations

from pathlib import Path

import pytest

from ordeal.core.types import ENVIRONMENTS, PRINCIPLE_CATEGORIES
from ordeal.data import paths
from ordeal.data.json_loader import load_json
from ordeal.data.repositories import DecisionsRepository, PrinciplesRepository
from ordeal.services.outcomes import RESOLVERS


@pytest.fixture(scope="module")
def definitions_dir() -> Path:
    """Return the canonical definitions directory."""
    return paths.get_definitions_path()


@pytest.mark.parametrize("filename", ["decisions.json", "principles.json"])
def test_definition_files_are_valid_json(definitions_dir: Path, filename: str) -> None:
    data = load_json(definitions_dir / filename)
    assert isinstance(data, dict), f"{filename} must contain an object; found {type(data).__name__}"


def test_every_environment_has_a_shelter_option() -> None:
    repo = DecisionsRepository()
    for environment in ENVIRONMENTS:
        ids = [definition.id for definition in repo.environment_group(environment)]
        assert "shelter" in ids, f"{environment} has no shelter decision"


def test_every_decision_resolves() -> None:
    repo = DecisionsRepository()
    for definition in repo.all():
        assert definition.id in RESOLVERS, f"decision '{definition.id}' has no resolver"


def test_ids_are_unique_outside_environment_groups() -> None:
    repo = DecisionsRepository()
    seen: set[str] = set()
    for definition in repo.all():
        if definition.group == "environment":
            continue
        assert definition.id not in seen, f"duplicate decision id '{definition.id}'"
        seen.add(definition.id)


def test_every_category_has_principles() -> None:
    repo = PrinciplesRepository()
    for category in PRINCIPLE_CATEGORIES:
        assert repo.for_category(category), f"category '{category}' has no principles"


def test_mapped_decisions_exist() -> None:
    decision_ids = {definition.id for definition in DecisionsRepository().all()}
    for decision_id in PrinciplesRepository().mapped_decision_ids():
        assert decision_id in decision_ids, f"principle mapping names unknown decision '{decision_id}'"
