"""Typed dataclasses describing the example and category registries."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
from pathlib import Path


class RegistryError(ValueError):
    """Raised when the registry configuration is invalid or incomplete."""


class UnknownIdentifierError(LookupError):
    """Raised when an example or category id is not present in the registry.

    Attributes
    ----------
    kind : str
        Either ``"example"`` or ``"category"``.
    identifier : str
        The id that failed to resolve.
    available : tuple[str, ...]
        Known ids in registry order, used to guide the user.
    """

    def __init__(self, kind: str, identifier: str, available: cabc.Iterable[str]):
        self.kind = kind
        self.identifier = identifier
        self.available = tuple(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Unknown {kind} '{identifier}'. Known {kind}s: {known}")


class Difficulty(enum.StrEnum):
    """Display-only difficulty of an example."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def label(self) -> str:
        """Return the capitalised form used in rendered markdown."""
        return self.value.capitalize()


@dc.dataclass(frozen=True, slots=True)
class ExampleDescriptor:
    """Static metadata for one demonstrable example."""

    id: str
    title: str
    description: str
    concept: str
    learning_objectives: tuple[str, ...]
    features: tuple[str, ...]
    chapter: str
    difficulty: Difficulty
    contract_file: str
    test_file: str
    use_case: str


@dc.dataclass(frozen=True, slots=True)
class CategoryDescriptor:
    """Named, ordered group of example ids."""

    id: str
    title: str
    description: str
    overview: str
    examples: tuple[str, ...]
    difficulty: str


@dc.dataclass(frozen=True, slots=True)
class RegistrySettings:
    """Shared defaults applied across every generator."""

    template_dir: Path
    readme_template: str = "README.template.md"
    examples_root: Path = Path("examples")
    default_chapter: str = "general"
    code_sample_lines: int = 20
    common_mistakes: tuple[str, ...] = ()
    best_practices: tuple[str, ...] = ()
    next_examples: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Registry:
    """Read-only lookup tables for examples and categories.

    Both mappings keep declaration order so listings and generated indexes are
    stable between runs.
    """

    examples: cabc.Mapping[str, ExampleDescriptor]
    categories: cabc.Mapping[str, CategoryDescriptor]
    settings: RegistrySettings

    def get_example(self, example_id: str) -> ExampleDescriptor | None:
        """Return the example descriptor or ``None`` when the id is unknown."""
        return self.examples.get(example_id)

    def get_category(self, category_id: str) -> CategoryDescriptor | None:
        """Return the category descriptor or ``None`` when the id is unknown."""
        return self.categories.get(category_id)

    def require_example(self, example_id: str) -> ExampleDescriptor:
        """Return the example descriptor or raise :class:`UnknownIdentifierError`."""
        descriptor = self.get_example(example_id)
        if descriptor is None:
            raise UnknownIdentifierError("example", example_id, self.examples)
        return descriptor

    def require_category(self, category_id: str) -> CategoryDescriptor:
        """Return the category descriptor or raise :class:`UnknownIdentifierError`."""
        descriptor = self.get_category(category_id)
        if descriptor is None:
            raise UnknownIdentifierError("category", category_id, self.categories)
        return descriptor

    def members(self, category: CategoryDescriptor) -> list[ExampleDescriptor]:
        """Return the resolvable members of ``category``; unknown ids are skipped."""
        return [
            descriptor
            for example_id in category.examples
            if (descriptor := self.get_example(example_id)) is not None
        ]

    def chapters(self) -> dict[str, list[ExampleDescriptor]]:
        """Group examples by their declared chapter in first-seen order."""
        grouped: dict[str, list[ExampleDescriptor]] = {}
        for descriptor in self.examples.values():
            grouped.setdefault(descriptor.chapter, []).append(descriptor)
        return grouped


__all__ = [
    "CategoryDescriptor",
    "Difficulty",
    "ExampleDescriptor",
    "Registry",
    "RegistryError",
    "RegistrySettings",
    "UnknownIdentifierError",
]
