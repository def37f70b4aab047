"""Load the example registry YAML into typed dataclasses."""

from __future__ import annotations

import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _mapping,
    _parse_difficulty,
    _positive_int,
    _required_text,
    _string_list,
    _text,
)
from .models import (
    CategoryDescriptor,
    ExampleDescriptor,
    Registry,
    RegistryError,
    RegistrySettings,
)

DEFAULT_REGISTRY_PATH = Path(__file__).resolve().parents[1] / "data" / "registry.yaml"


def load_registry(
    path: Path | None = None,
    *,
    template_dir: Path | None = None,
    examples_root: Path | None = None,
) -> Registry:
    """Load the YAML registry describing examples, categories, and defaults.

    Parameters
    ----------
    path : Path, optional
        Registry file to read. Defaults to the registry bundled with the
        package.
    template_dir : Path, optional
        Override for the base template directory configured in ``defaults``.
    examples_root : Path, optional
        Override for the directory holding per-example ``contracts/`` and
        ``test/`` sources.

    Returns
    -------
    Registry
        Immutable lookup tables in declaration order.

    Raises
    ------
    FileNotFoundError
        If the registry file does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    RegistryError
        If no examples are defined, a section or entry is not a mapping, an
        entry is incomplete, or ``code_sample_lines`` is not a positive
        integer.

    Examples
    --------
    >>> from fhevm_examples.registry import load_registry
    >>> registry = load_registry()
    >>> registry.require_example("access-control").difficulty.label
    'Beginner'
    """
    path = path or DEFAULT_REGISTRY_PATH
    if not path.exists():
        msg = f"Registry file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = _mapping(raw.get("defaults"), "Registry 'defaults'")

    settings = _build_settings(
        defaults,
        base_dir=path.resolve().parent,
        template_dir=template_dir,
        examples_root=examples_root,
    )

    examples: dict[str, ExampleDescriptor] = {}
    for key, payload in _mapping(raw.get("examples"), "Registry 'examples'").items():
        match payload:
            case dict():
                examples[str(key)] = _build_example(str(key), payload)
            case _:
                msg = f"Example '{key}' must be a mapping with 'title' and 'description'."
                raise RegistryError(msg)
    if not examples:
        msg = "No examples defined in registry."
        raise RegistryError(msg)

    categories: dict[str, CategoryDescriptor] = {}
    for key, payload in _mapping(raw.get("categories"), "Registry 'categories'").items():
        match payload:
            case dict():
                categories[str(key)] = _build_category(str(key), payload)
            case _:
                msg = f"Category '{key}' must be a mapping with a 'title'."
                raise RegistryError(msg)

    return Registry(
        examples=types.MappingProxyType(examples),
        categories=types.MappingProxyType(categories),
        settings=settings,
    )


def _resolve_path(value: object | None, base_dir: Path, fallback: Path) -> Path:
    """Resolve ``value`` relative to the registry file, or return ``fallback``."""
    text = _text(value)
    if not text:
        return fallback
    candidate = Path(text)
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _build_settings(
    defaults: typ.Mapping[str, typ.Any],
    *,
    base_dir: Path,
    template_dir: Path | None,
    examples_root: Path | None,
) -> RegistrySettings:
    """Build RegistrySettings from the ``defaults`` block and CLI overrides.

    Relative paths in ``defaults`` resolve against the registry file. When no
    ``examples_root`` is configured the relative ``examples`` directory is
    kept, so it resolves against the working directory at generation time.
    """
    bundled_template = Path(__file__).resolve().parents[1] / "templates" / "hardhat-base"
    readme = _mapping(defaults.get("readme"), "Registry 'defaults.readme'")
    return RegistrySettings(
        template_dir=template_dir
        or _resolve_path(defaults.get("template_dir"), base_dir, bundled_template),
        readme_template=_text(defaults.get("readme_template")) or "README.template.md",
        examples_root=examples_root
        or _resolve_path(defaults.get("examples_root"), base_dir, Path("examples")),
        default_chapter=_text(defaults.get("default_chapter")) or "general",
        code_sample_lines=_positive_int(
            defaults.get("code_sample_lines"), "Registry 'code_sample_lines'", 20
        ),
        common_mistakes=_string_list(readme.get("common_mistakes")),
        best_practices=_string_list(readme.get("best_practices")),
        next_examples=_string_list(readme.get("next_examples")),
    )


def _build_example(key: str, payload: typ.Mapping[str, typ.Any]) -> ExampleDescriptor:
    """Build an ExampleDescriptor for a single registry entry."""
    owner = f"Example '{key}'"
    return ExampleDescriptor(
        id=key,
        title=_required_text(payload, "title", owner),
        description=_required_text(payload, "description", owner),
        concept=_text(payload.get("concept")),
        learning_objectives=_string_list(payload.get("learning_objectives")),
        features=_string_list(payload.get("features")),
        chapter=_text(payload.get("chapter")) or key,
        difficulty=_parse_difficulty(payload.get("difficulty"), owner),
        contract_file=_text(payload.get("contract_file")),
        test_file=_text(payload.get("test_file")),
        use_case=_text(payload.get("use_case")),
    )


def _build_category(key: str, payload: typ.Mapping[str, typ.Any]) -> CategoryDescriptor:
    """Build a CategoryDescriptor; member ids are not checked here."""
    owner = f"Category '{key}'"
    return CategoryDescriptor(
        id=key,
        title=_required_text(payload, "title", owner),
        description=_text(payload.get("description")),
        overview=_text(payload.get("overview")),
        examples=_string_list(payload.get("examples")),
        difficulty=_text(payload.get("difficulty")) or "Mixed",
    )


__all__ = ["DEFAULT_REGISTRY_PATH", "load_registry"]
