"""Recipe manipulator.

Ingredients are unique by (type, name). Results permit duplicates. String
comparators match an entry's ``name``. Recipes can also edit which
technologies unlock them; those technology edits are published together with
the recipe on commit.

Usage:
    (
        Recipe.load(store, "electronic-circuit")
        .copy("electronic-circuit-with-solder")
        .add_ingredient({"type": "item", "name": "solder", "amount": 1})
        .add_unlock("electronics")
        .commit()
    )

    # Consolidate removed ingredients into one, reading the untouched original
    def consolidate(ingredient):
        original = store.get("recipe", "processor")
        extra = sum(
            i["amount"] * 2 for i in original["ingredients"] if i["name"] == "advanced-circuit"
        )
        return {**ingredient, "amount": ingredient["amount"] + extra}

    (
        Recipe.load(store, "processor")
        .remove_ingredient("advanced-circuit")
        .replace_ingredient("electronic-circuit", consolidate)
        .commit()
    )
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Self

from protoforge.config import ManipulatorSettings
from protoforge.core.compare import PredicateMatch, RawComparator
from protoforge.core.errors import InvalidArgumentError, NotFoundError
from protoforge.core.listops import MatchOptions
from protoforge.core.types import Record
from protoforge.manipulator.base import Manipulator, Origin
from protoforge.manipulator.fields import SubListField, validate_typed_entry
from protoforge.manipulator.technology import Technology
from protoforge.storage.protocol import PrototypeStore

Options = MatchOptions | Mapping[str, bool] | None


def _same_entry(entry: Any) -> PredicateMatch:
    def matches(existing: Any) -> bool:
        return (
            isinstance(existing, Mapping)
            and isinstance(entry, Mapping)
            and existing.get("type") == entry.get("type")
            and existing.get("name") == entry.get("name")
        )

    return PredicateMatch(matches)


class Recipe(Manipulator):
    """Manipulator for ``recipe`` records."""

    kind: ClassVar[str] = "recipe"

    INGREDIENTS: ClassVar[SubListField] = SubListField(
        path=("ingredients",),
        key="name",
        identity=_same_entry,
        validate=validate_typed_entry("ingredient"),
    )
    RESULTS: ClassVar[SubListField] = SubListField(
        path=("results",),
        key="name",
        validate=validate_typed_entry("result"),
    )

    def __init__(
        self,
        store: PrototypeStore,
        record: Record,
        origin: Origin,
        settings: ManipulatorSettings | None = None,
    ):
        super().__init__(store, record, origin, settings)
        self._modified_technologies: dict[str, Technology] = {}

    # Ingredients

    def get_ingredients(self) -> list[dict[str, Any]]:
        """Return a copy of all ingredients."""
        return self.INGREDIENTS.get(self)

    def set_ingredients(self, ingredients: Sequence[Mapping[str, Any]]) -> Self:
        self.INGREDIENTS.set(self, ingredients)
        return self

    def count_ingredients(self) -> int:
        return self.INGREDIENTS.count(self)

    def has_ingredient(self, compare: RawComparator) -> bool:
        """Check for an ingredient by name or predicate."""
        return self.INGREDIENTS.has(self, compare)

    def add_ingredient(self, ingredient: Mapping[str, Any]) -> Self:
        """Add an ingredient unless one with the same type and name is present.

        Raises:
            InvalidArgumentError: If the ingredient lacks type, name or amount.
        """
        self.INGREDIENTS.add(self, ingredient)
        return self

    def remove_ingredient(self, compare: RawComparator, options: Options = None) -> Self:
        self.INGREDIENTS.remove(self, compare, options)
        return self

    def replace_ingredient(
        self, compare: RawComparator, new_ingredient: Any, options: Options = None
    ) -> Self:
        """Replace matching ingredients.

        `new_ingredient` may be a mapping or a function receiving a copy of the
        matched ingredient and returning its replacement.
        """
        self.INGREDIENTS.replace(self, compare, new_ingredient, options)
        return self

    def clear_ingredients(self) -> Self:
        self.INGREDIENTS.clear(self)
        return self

    # Results

    def get_results(self) -> list[dict[str, Any]]:
        return self.RESULTS.get(self)

    def set_results(self, results: Sequence[Mapping[str, Any]]) -> Self:
        self.RESULTS.set(self, results)
        return self

    def count_results(self) -> int:
        return self.RESULTS.count(self)

    def has_result(self, compare: RawComparator) -> bool:
        return self.RESULTS.has(self, compare)

    def count_matching_results(self, compare: RawComparator) -> int:
        return self.RESULTS.count_matching(self, compare)

    def get_matching_results(self, compare: RawComparator) -> list[dict[str, Any]]:
        """Return copies of all results matching a name or predicate."""
        return self.RESULTS.select(self, compare)

    def add_result(self, result: Mapping[str, Any], compare: RawComparator | None = None) -> Self:
        """Append a result. Duplicates are kept unless `compare` matches an existing one."""
        self.RESULTS.add(self, result, compare=compare)
        return self

    def remove_result(self, compare: RawComparator, options: Options = None) -> Self:
        self.RESULTS.remove(self, compare, options)
        return self

    def replace_result(
        self, compare: RawComparator, new_result: Any, options: Options = None
    ) -> Self:
        self.RESULTS.replace(self, compare, new_result, options)
        return self

    def clear_results(self) -> Self:
        self.RESULTS.clear(self)
        return self

    # Technology unlocks

    @property
    def modified_technologies(self) -> frozenset[str]:
        """Names of technologies whose unlocks this recipe has edited."""
        return frozenset(self._modified_technologies)

    def _technology(self, technology: str) -> Technology:
        if not isinstance(technology, str):
            raise InvalidArgumentError(
                f"technology parameter: Expected string, got {type(technology).__name__}"
            )
        manipulator = self._modified_technologies.get(technology)
        if manipulator is None:
            if not Technology.exists(self._store, technology):
                raise NotFoundError(f"No such technology: {technology}")
            manipulator = Technology.load(self._store, technology, self._settings)
            self._modified_technologies[technology] = manipulator
        return manipulator

    def add_unlock(self, technology: str) -> Self:
        """Make `technology` unlock this recipe once this recipe is committed.

        Effects permit duplicates, so calling this twice adds two unlock effects.

        Raises:
            NotFoundError: If the technology does not exist.
        """
        self._require_pending()
        self._technology(technology).add_unlock_recipe(self.name)
        return self

    def remove_unlock(self, technology: str) -> Self:
        """Remove every unlock of this recipe from `technology` once committed.

        Raises:
            NotFoundError: If the technology does not exist.
        """
        self._require_pending()
        self._technology(technology).remove_unlock_recipe(self.name, MatchOptions(all=True))
        return self

    def _after_commit(self) -> None:
        for manipulator in self._modified_technologies.values():
            manipulator.commit()
