"""Generate a standalone example project from the base Hardhat template.

:class:`ExampleScaffolder` clones the template directory configured in the
registry into ``<output_dir>/example-<id>``, overlays the example's contract
and test sources, renders ``README.md`` from ``{{TOKEN}}`` placeholders, and
rewrites the ``package.json`` name and description.

Example
-------
>>> from pathlib import Path
>>> from fhevm_examples.registry import load_registry
>>> from fhevm_examples.scaffold import ExampleScaffolder
>>> scaffolder = ExampleScaffolder(load_registry())  # doctest: +SKIP
>>> scaffolder.run("access-control", Path("out"))  # doctest: +SKIP
PosixPath('/abs/out/example-access-control')

Unknown ids raise :class:`~fhevm_examples.registry.UnknownIdentifierError`
before anything is written. Missing contract or test sources only log a
warning. Filesystem errors propagate unchanged.
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import typing as typ
from pathlib import Path

from ._constants import (
    CONTRACTS_DIRNAME,
    DEFAULT_EXAMPLES_OUTPUT,
    EXAMPLE_DIR_TEMPLATE,
    MANIFEST_FILENAME,
    MANIFEST_NAME_TEMPLATE,
    README_FILENAME,
    TESTS_DIRNAME,
)

if typ.TYPE_CHECKING:
    from .registry import ExampleDescriptor, Registry, RegistrySettings

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\{\{([A-Z0-9_]+)\}\}")


class ExampleScaffolder:
    """Build one example project directory per call to :meth:`run`."""

    def __init__(self, registry: Registry, *, clean: bool = False) -> None:
        """Initialize the scaffolder.

        Parameters
        ----------
        registry : Registry
            Loaded registry providing descriptors and template locations.
        clean : bool, optional
            Remove an existing ``example-<id>`` directory before copying the
            template. Defaults to ``False``, in which case files left by an
            earlier run survive unless the new run overwrites them.
        """
        self.registry = registry
        self.settings = registry.settings
        self.clean = clean

    def run(self, example_id: str, output_dir: Path | None = None) -> Path:
        """Generate the example project and return its absolute path.

        Raises
        ------
        UnknownIdentifierError
            If ``example_id`` is not in the registry. Nothing is written.
        """
        descriptor = self.registry.require_example(example_id)
        base_dir = output_dir or DEFAULT_EXAMPLES_OUTPUT
        example_dir = (base_dir / EXAMPLE_DIR_TEMPLATE.format(key=descriptor.id)).resolve()
        logger.info("Creating example %s in %s", descriptor.title, example_dir)

        if self.clean and example_dir.exists():
            shutil.rmtree(example_dir)
        copy_tree(self.settings.template_dir, example_dir)

        source_dir = self.settings.examples_root / descriptor.id
        self._overlay(
            source_dir / CONTRACTS_DIRNAME / descriptor.contract_file,
            example_dir / CONTRACTS_DIRNAME,
            kind="Contract",
        )
        self._overlay(
            source_dir / TESTS_DIRNAME / descriptor.test_file,
            example_dir / TESTS_DIRNAME,
            kind="Test",
        )

        template_text = (self.settings.template_dir / self.settings.readme_template).read_text(
            encoding="utf-8"
        )
        readme = render_readme(template_text, descriptor, self.settings)
        (example_dir / README_FILENAME).write_text(readme, encoding="utf-8")

        update_manifest(example_dir / MANIFEST_FILENAME, descriptor)
        return example_dir

    @staticmethod
    def _overlay(source: Path, dest_dir: Path, *, kind: str) -> Path | None:
        """Copy ``source`` into ``dest_dir`` or warn and skip when it is missing."""
        if not source.is_file():
            logger.warning("%s file not found: %s", kind, source)
            return None
        dest_dir.mkdir(parents=True, exist_ok=True)
        target = dest_dir / source.name
        shutil.copy2(source, target)
        return target


def copy_tree(source: Path, dest: Path) -> None:
    """Recursively copy ``source`` into ``dest``, overwriting existing files.

    Every file is copied byte-for-byte, dotfiles included. Files already in
    ``dest`` that do not exist in ``source`` are left alone.
    """
    shutil.copytree(source, dest, dirs_exist_ok=True)


def _bullets(items: typ.Iterable[str], *, bold: bool = False) -> str:
    """Render ``items`` as newline-joined markdown bullets."""
    if bold:
        return "\n".join(f"- **{item}**" for item in items)
    return "\n".join(f"- {item}" for item in items)


def readme_replacements(
    descriptor: ExampleDescriptor, settings: RegistrySettings
) -> dict[str, str]:
    """Return the token-to-text mapping used for the example README."""
    objectives = _bullets(descriptor.learning_objectives)
    return {
        "EXAMPLE_TITLE": descriptor.title,
        "EXAMPLE_DESCRIPTION": descriptor.description,
        "CONCEPT_EXPLANATION": descriptor.concept,
        "LEARNING_OBJECTIVES": objectives,
        "CONTRACT_DESCRIPTION": (
            f"This example implements `{descriptor.contract_file}`, "
            f"demonstrating {descriptor.description.lower()}."
        ),
        "FHEVM_FEATURES": _bullets(descriptor.features, bold=True),
        "USAGE_EXAMPLE": (
            f"See `test/{descriptor.test_file}` for detailed usage examples "
            "with annotations."
        ),
        "TEST_COVERAGE_POINTS": objectives,
        "COMMON_MISTAKES": _bullets(settings.common_mistakes),
        "BEST_PRACTICES": _bullets(settings.best_practices),
        "USE_CASE": descriptor.use_case,
        "NEXT_EXAMPLES": _bullets(settings.next_examples),
        "CHAPTER_TAG": descriptor.chapter,
        "DIFFICULTY_LEVEL": descriptor.difficulty.label,
    }


def render_readme(
    template_text: str, descriptor: ExampleDescriptor, settings: RegistrySettings
) -> str:
    """Substitute every recognised ``{{TOKEN}}`` in ``template_text``.

    Tokens without a replacement are left exactly as written.

    Examples
    --------
    >>> from fhevm_examples.registry import load_registry
    >>> registry = load_registry()
    >>> descriptor = registry.require_example("access-control")
    >>> render_readme("# {{EXAMPLE_TITLE}} {{OTHER}}", descriptor, registry.settings)
    '# Access Control for Encrypted Data {{OTHER}}'
    """
    replacements = readme_replacements(descriptor, settings)

    def _repl(match: re.Match[str]) -> str:
        return replacements.get(match.group(1), match.group(0))

    return TOKEN_PATTERN.sub(_repl, template_text)


def update_manifest(manifest_path: Path, descriptor: ExampleDescriptor) -> None:
    """Rewrite ``name`` and ``description`` in ``package.json``.

    Other keys keep their values and order. Output uses two-space indentation
    and ends with a newline.
    """
    payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    payload["name"] = MANIFEST_NAME_TEMPLATE.format(key=descriptor.id)
    payload["description"] = descriptor.description
    manifest_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


__all__ = [
    "TOKEN_PATTERN",
    "ExampleScaffolder",
    "copy_tree",
    "readme_replacements",
    "render_readme",
    "update_manifest",
]
