"""Repository for survival principles and the decision-to-category map."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from ordeal.core.types import PRINCIPLE_CATEGORIES, PrincipleCategory
from ordeal.data.errors import DataReferenceError, DataValidationError
from ordeal.data.repositories.base import RepositoryBase


@dataclass(frozen=True, slots=True)
class Principle:
    text: str
    category: PrincipleCategory

    @property
    def title(self) -> str:
        head, sep, _ = self.text.partition(":")
        return head.strip() if sep else self.text[:30]


class PrinciplesRepository(RepositoryBase[Tuple[Principle, ...]]):
    """Loads principles.json keyed by category."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("principles.json", base_path)
        self._decision_categories: Dict[str, Tuple[PrincipleCategory, ...]] = {}

    def _build(self, raw: dict[str, object]) -> Dict[str, Tuple[Principle, ...]]:
        by_category = self._require_mapping(raw.get("principles"), "principles.principles")
        principles: Dict[str, Tuple[Principle, ...]] = {}
        for category in PRINCIPLE_CATEGORIES:
            texts = self._require_str_list(by_category.get(category, []), f"principles.{category}")
            principles[category] = tuple(Principle(text=text, category=category) for text in texts)
        unknown = set(by_category) - set(PRINCIPLE_CATEGORIES)
        if unknown:
            raise DataReferenceError(f"principles: unknown categories {sorted(unknown)}")

        mapping = self._require_mapping(raw.get("decision_categories", {}), "principles.decision_categories")
        decision_categories: Dict[str, Tuple[PrincipleCategory, ...]] = {}
        for decision_id, categories in mapping.items():
            names = self._require_str_list(categories, f"principles.decision_categories.{decision_id}")
            for name in names:
                if name not in PRINCIPLE_CATEGORIES:
                    raise DataReferenceError(
                        f"principles.decision_categories.{decision_id}: unknown category '{name}'."
                    )
            if not names:
                raise DataValidationError(f"principles.decision_categories.{decision_id} must not be empty.")
            decision_categories[decision_id] = tuple(names)  # type: ignore[arg-type]
        self._decision_categories = decision_categories
        return principles

    def for_category(self, category: PrincipleCategory) -> Tuple[Principle, ...]:
        return self._ensure_loaded().get(category, ())

    def categories_for_decision(self, decision_id: str) -> Tuple[PrincipleCategory, ...]:
        self._ensure_loaded()
        return self._decision_categories.get(decision_id, ())

    def for_decision(self, decision_id: str, per_category: int = 3) -> List[Principle]:
        """First few principles of each category mapped to the decision."""
        result: List[Principle] = []
        for category in self.categories_for_decision(decision_id):
            result.extend(self.for_category(category)[:per_category])
        return result

    def all_principles(self) -> List[Principle]:
        definitions = self._ensure_loaded()
        return [principle for category in PRINCIPLE_CATEGORIES for principle in definitions.get(category, ())]

    def search(self, keywords: Iterable[str]) -> List[Principle]:
        """Principles whose text contains any keyword, in category order."""
        needles = [keyword.lower() for keyword in keywords if len(keyword) >= 4]
        if not needles:
            return []
        return [
            principle
            for principle in self.all_principles()
            if any(needle in principle.text.lower() for needle in needles)
        ]

    def mapped_decision_ids(self) -> List[str]:
        self._ensure_loaded()
        return sorted(self._decision_categories)
