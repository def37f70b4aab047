"""Cyclopts CLI entrypoints for scaffolding FHEVM examples and their docs.

Three commands are exposed, both as subcommands of ``fhevm-examples`` and as
standalone console scripts:

``create-example``
    Build one standalone Hardhat project from the base template.
``create-category``
    Build every example of a category under a shared directory.
``generate-docs``
    Extract annotated test blocks and write GitBook markdown.

Run ``create-example`` or ``create-category`` without an id to list what the
registry offers. Options can also be supplied as ``FHEVM_EXAMPLES_*``
environment variables.

Examples
--------
>>> from fhevm_examples.cli import app
>>> app(["create-example", "access-control", "out"])  # doctest: +SKIP
>>> app(["generate-docs", "docs"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import (
    DEFAULT_CATEGORIES_OUTPUT,
    DEFAULT_DOCS_OUTPUT,
    DEFAULT_EXAMPLES_OUTPUT,
)
from .category import CategoryScaffolder
from .docs import DocsBuilder
from .registry import UnknownIdentifierError, load_registry
from .scaffold import ExampleScaffolder

if typ.TYPE_CHECKING:
    from .registry import Registry


def _env_config() -> cyclopts.config.Env:
    return cyclopts.config.Env("FHEVM_EXAMPLES_", command=False)  # type: ignore[unknown-argument]


app = App(
    name="fhevm-examples",
    help="Scaffold standalone FHEVM example projects and their documentation.",
    config=_env_config(),
)
example_app = App(
    name="create-example",
    help="Generate a standalone example project.",
    config=_env_config(),
)
category_app = App(
    name="create-category",
    help="Generate every example of a category.",
    config=_env_config(),
)
docs_app = App(
    name="generate-docs",
    help="Generate GitBook documentation from annotated tests.",
    config=_env_config(),
)
app.command(example_app)
app.command(category_app)
app.command(docs_app)

RegistryOption = typ.Annotated[
    Path | None, Parameter(help="Path to registry YAML (defaults to the bundled one)")
]
ExamplesRootOption = typ.Annotated[
    Path | None,
    Parameter(help="Directory holding <id>/contracts and <id>/test sources"),
]
CleanOption = typ.Annotated[
    bool, Parameter(help="Remove existing example directories before copying")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def _load(registry: Path | None, examples_root: Path | None) -> Registry:
    _configure_logging()
    return load_registry(registry, examples_root=examples_root)


def _fail_unknown(error: UnknownIdentifierError) -> typ.NoReturn:
    """Print the unknown id and the valid choices, then exit non-zero."""
    print(f"Error: Unknown {error.kind} \"{error.identifier}\"", file=sys.stderr)
    print(f"\nAvailable {error.kind}s:", file=sys.stderr)
    for identifier in error.available:
        print(f"  - {identifier}", file=sys.stderr)
    raise SystemExit(1)


@example_app.default
def create_example(
    example_id: str | None = None,
    output_dir: Path | None = None,
    *,
    registry: RegistryOption = None,
    examples_root: ExamplesRootOption = None,
    clean: CleanOption = False,
) -> None:
    """Generate ``<output_dir>/example-<id>`` from the base template.

    Parameters
    ----------
    example_id : str or None, optional
        Registry id of the example. When omitted, usage and the list of
        available examples are printed instead.
    output_dir : Path or None, optional
        Parent directory for the generated project; defaults to
        ``generated-examples``.
    registry : Path or None, optional
        Alternate registry YAML file.
    examples_root : Path or None, optional
        Override for the example sources directory.
    clean : bool, optional
        Wipe an existing ``example-<id>`` directory first.

    Raises
    ------
    SystemExit
        With status 1 when ``example_id`` is not in the registry.
    """
    loaded = _load(registry, examples_root)
    if example_id is None:
        print("FHEVM Example Generator\n")
        print("Usage: create-example <example-id> [output-dir]\n")
        print("Available examples:")
        for key, example in loaded.examples.items():
            print(f"\n  {key} ({example.difficulty.value})")
            print(f"    {example.description}")
        print()
        return

    scaffolder = ExampleScaffolder(loaded, clean=clean)
    try:
        example_dir = scaffolder.run(example_id, output_dir or DEFAULT_EXAMPLES_OUTPUT)
    except UnknownIdentifierError as exc:
        _fail_unknown(exc)
    print(f"wrote {_format_path(example_dir)}")
    print("\nNext steps:")
    print(f"  cd {_format_path(example_dir)}")
    print("  npm install")
    print("  npm test")


@category_app.default
def create_category(
    category_id: str | None = None,
    output_dir: Path | None = None,
    *,
    registry: RegistryOption = None,
    examples_root: ExamplesRootOption = None,
    clean: CleanOption = False,
) -> None:
    """Generate ``<output_dir>/category-<id>`` with one project per member.

    Without ``category_id`` the available categories are listed. An unknown
    category or member id exits with status 1.
    """
    loaded = _load(registry, examples_root)
    if category_id is None:
        print("FHEVM Category Generator\n")
        print("Usage: create-category <category-id> [output-dir]\n")
        print("Available categories:")
        for key, category in loaded.categories.items():
            print(f"\n  {key} ({category.difficulty})")
            print(f"    {category.description}")
            print(f"    Examples: {len(category.examples)}")
        print()
        return

    scaffolder = CategoryScaffolder(
        loaded, example_scaffolder=ExampleScaffolder(loaded, clean=clean)
    )
    try:
        category_dir = scaffolder.run(
            category_id, output_dir or DEFAULT_CATEGORIES_OUTPUT
        )
    except UnknownIdentifierError as exc:
        _fail_unknown(exc)
    print(f"wrote {_format_path(category_dir)}")
    for child in sorted(category_dir.iterdir()):
        print(f"  {child.name}")


@docs_app.default
def generate_docs(
    output_dir: Path | None = None,
    *,
    registry: RegistryOption = None,
    examples_root: ExamplesRootOption = None,
) -> None:
    """Write README.md, SUMMARY.md, and one page per example into ``output_dir``."""
    loaded = _load(registry, examples_root)
    written = DocsBuilder(loaded).run(output_dir or DEFAULT_DOCS_OUTPUT)
    for path in written:
        print(f"wrote {_format_path(path)}")
    print(f"\nExamples documented: {len(loaded.examples)}")
    print(f"Categories: {len(loaded.categories)}")


def main() -> None:
    """Invoke the umbrella ``fhevm-examples`` application."""
    app()


def create_example_main() -> None:
    """Console script entry for ``create-example``."""
    example_app()


def create_category_main() -> None:
    """Console script entry for ``create-category``."""
    category_app()


def generate_docs_main() -> None:
    """Console script entry for ``generate-docs``."""
    docs_app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
