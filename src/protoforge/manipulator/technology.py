"""Technology manipulator.

Prerequisites are unique by name. Effects permit duplicates; unlock-recipe
effects get dedicated helpers. Science pack costs live under
``unit.ingredients`` as ``[name, amount]`` pairs and are unique by name.

Usage:
    (
        Technology.load(store, "electronics")
        .copy("electronics-with-solder")
        .add_prerequisite("solder-tech")
        .add_unlock_recipe("electronic-circuit-with-solder")
        .commit()
    )

    # Functional replacement keeping the original amount
    tech.replace_science_pack(
        "logistic-science-pack", lambda pack: ["chemical-science-pack", pack[1]]
    )
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Self

from protoforge.core.compare import PredicateMatch, RawComparator
from protoforge.core.errors import InvalidArgumentError
from protoforge.core.listops import AddOptions, MatchOptions
from protoforge.manipulator.base import Manipulator
from protoforge.manipulator.fields import (
    SubListField,
    validate_effect,
    validate_pack,
    validate_string,
)

UNLOCK_RECIPE = "unlock-recipe"

Options = MatchOptions | Mapping[str, bool] | None


def _unlocks(recipe: str) -> PredicateMatch:
    return PredicateMatch(
        lambda effect: isinstance(effect, Mapping)
        and effect.get("type") == UNLOCK_RECIPE
        and effect.get("recipe") == recipe
    )


def _require_recipe_name(parameter: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{parameter} parameter: Expected string, got {type(value).__name__}"
        )


def _pack_name(pack: Any) -> RawComparator:
    return PredicateMatch(
        lambda existing: isinstance(existing, list | tuple)
        and len(existing) > 0
        and isinstance(pack, list | tuple)
        and len(pack) > 0
        and existing[0] == pack[0]
    )


class Technology(Manipulator):
    """Manipulator for ``technology`` records."""

    kind: ClassVar[str] = "technology"

    PREREQUISITES: ClassVar[SubListField] = SubListField(
        path=("prerequisites",),
        identity=lambda prerequisite: prerequisite,
        validate=validate_string("prerequisite"),
    )
    EFFECTS: ClassVar[SubListField] = SubListField(
        path=("effects",),
        key="type",
        validate=validate_effect("effect"),
    )
    SCIENCE_PACKS: ClassVar[SubListField] = SubListField(
        path=("unit", "ingredients"),
        key=0,
        identity=_pack_name,
        validate=validate_pack("science_pack"),
    )

    # Prerequisites

    def get_prerequisites(self) -> list[str]:
        """Return a copy of the prerequisite names."""
        return self.PREREQUISITES.get(self)

    def set_prerequisites(self, prerequisites: Sequence[str]) -> Self:
        """Replace the whole prerequisite list."""
        self.PREREQUISITES.set(self, prerequisites)
        return self

    def count_prerequisites(self) -> int:
        return self.PREREQUISITES.count(self)

    def has_prerequisite(self, compare: RawComparator) -> bool:
        """Check for a prerequisite by name or predicate."""
        return self.PREREQUISITES.has(self, compare)

    def add_prerequisite(
        self, prerequisite: str, options: AddOptions | Mapping[str, bool] | None = None
    ) -> Self:
        """Add a prerequisite. Adding an existing name is a no-op."""
        self.PREREQUISITES.add(self, prerequisite, options)
        return self

    def remove_prerequisite(self, compare: RawComparator, options: Options = None) -> Self:
        """Remove the first (or, with ``all``, every) matching prerequisite."""
        self.PREREQUISITES.remove(self, compare, options)
        return self

    def replace_prerequisite(
        self, compare: RawComparator, new_prerequisite: Any, options: Options = None
    ) -> Self:
        """Replace matching prerequisites with a name or the result of a function."""
        self.PREREQUISITES.replace(self, compare, new_prerequisite, options)
        return self

    def clear_prerequisites(self) -> Self:
        self.PREREQUISITES.clear(self)
        return self

    # Effects

    def get_effects(self) -> list[dict[str, Any]]:
        """Return a copy of all effects."""
        return self.EFFECTS.get(self)

    def set_effects(self, effects: Sequence[Mapping[str, Any]]) -> Self:
        self.EFFECTS.set(self, effects)
        return self

    def count_effects(self) -> int:
        return self.EFFECTS.count(self)

    def has_effect(self, compare: RawComparator) -> bool:
        """Check for an effect by predicate, or by effect ``type`` for a string."""
        return self.EFFECTS.has(self, compare)

    def add_effect(
        self, effect: Mapping[str, Any], compare: RawComparator | None = None
    ) -> Self:
        """Append an effect.

        Duplicates are permitted unless `compare` is given, in which case the
        effect is only added when no existing effect matches it.
        """
        self.EFFECTS.add(self, effect, compare=compare)
        return self

    def remove_effect(self, compare: RawComparator, options: Options = None) -> Self:
        self.EFFECTS.remove(self, compare, options)
        return self

    def replace_effect(
        self, compare: RawComparator, new_effect: Any, options: Options = None
    ) -> Self:
        self.EFFECTS.replace(self, compare, new_effect, options)
        return self

    def clear_effects(self) -> Self:
        self.EFFECTS.clear(self)
        return self

    # Unlock-recipe effects

    def get_unlock_recipes(self) -> list[str]:
        """Names of recipes unlocked by this technology, in effect order."""
        return [
            effect["recipe"]
            for effect in self._iter_path(self.EFFECTS.path)
            if isinstance(effect, Mapping)
            and effect.get("type") == UNLOCK_RECIPE
            and effect.get("recipe")
        ]

    def count_unlock_recipes(self) -> int:
        return self.EFFECTS.count_matching(self, UNLOCK_RECIPE)

    def has_unlock_recipe(self, recipe: str) -> bool:
        _require_recipe_name("recipe", recipe)
        return self.EFFECTS.has(self, _unlocks(recipe))

    def add_unlock_recipe(self, recipe: str, modifier: Mapping[str, Any] | None = None) -> Self:
        """Add an unlock-recipe effect.

        Args:
            recipe: Recipe name to unlock.
            modifier: Extra effect fields (type and recipe are overwritten).

        Raises:
            InvalidArgumentError: If recipe is not a string or modifier not a mapping.
        """
        _require_recipe_name("recipe", recipe)
        if modifier is not None and not isinstance(modifier, Mapping):
            raise InvalidArgumentError(
                f"modifier parameter: Expected mapping or None, got {type(modifier).__name__}"
            )
        effect = {**(modifier or {}), "type": UNLOCK_RECIPE, "recipe": recipe}
        return self.add_effect(effect)

    def remove_unlock_recipe(self, recipe: str, options: Options = None) -> Self:
        _require_recipe_name("recipe", recipe)
        return self.remove_effect(_unlocks(recipe), options)

    def replace_unlock_recipe(
        self, old_recipe: str, new_recipe: str, options: Options = None
    ) -> Self:
        """Replace unlock effects for `old_recipe` with a plain unlock of `new_recipe`."""
        _require_recipe_name("old_recipe", old_recipe)
        _require_recipe_name("new_recipe", new_recipe)
        return self.replace_effect(
            _unlocks(old_recipe),
            {"type": UNLOCK_RECIPE, "recipe": new_recipe},
            options,
        )

    # Science packs

    def get_science_packs(self) -> list[list[Any]]:
        """Return a copy of the ``[name, amount]`` research cost entries."""
        return self.SCIENCE_PACKS.get(self)

    def set_science_packs(self, science_packs: Sequence[Sequence[Any]]) -> Self:
        self.SCIENCE_PACKS.set(self, science_packs)
        return self

    def count_science_packs(self) -> int:
        return self.SCIENCE_PACKS.count(self)

    def has_science_pack(self, compare: RawComparator) -> bool:
        return self.SCIENCE_PACKS.has(self, compare)

    def add_science_pack(
        self, science_pack: Sequence[Any], options: AddOptions | Mapping[str, bool] | None = None
    ) -> Self:
        """Add a ``[name, amount]`` entry. A pack already in the cost is left as is."""
        self.SCIENCE_PACKS.add(self, science_pack, options)
        return self

    def remove_science_pack(self, compare: RawComparator, options: Options = None) -> Self:
        self.SCIENCE_PACKS.remove(self, compare, options)
        return self

    def replace_science_pack(
        self, compare: RawComparator, new_science_pack: Any, options: Options = None
    ) -> Self:
        self.SCIENCE_PACKS.replace(self, compare, new_science_pack, options)
        return self

    def clear_science_packs(self) -> Self:
        self.SCIENCE_PACKS.clear(self)
        return self
