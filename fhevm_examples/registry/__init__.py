"""Load and query the example and category registries.

The registry is the single source of truth for which examples exist, how they
are grouped into categories, and which shared README boilerplate the
generators use. It is parsed from YAML once per run by :func:`load_registry`
and handed to each generator, so tests can swap in an alternate example set
without touching module state.

Examples
--------
>>> from fhevm_examples.registry import load_registry
>>> registry = load_registry()
>>> [member.id for member in registry.members(registry.require_category("basics"))]
['access-control', 'encrypted-arithmetic', 'encrypted-comparison']
>>> registry.get_example("missing") is None
True
"""

from .helpers import title_from_slug
from .loader import DEFAULT_REGISTRY_PATH, load_registry
from .models import (
    CategoryDescriptor,
    Difficulty,
    ExampleDescriptor,
    Registry,
    RegistryError,
    RegistrySettings,
    UnknownIdentifierError,
)

__all__ = [
    "DEFAULT_REGISTRY_PATH",
    "CategoryDescriptor",
    "Difficulty",
    "ExampleDescriptor",
    "Registry",
    "RegistryError",
    "RegistrySettings",
    "UnknownIdentifierError",
    "load_registry",
    "title_from_slug",
]
