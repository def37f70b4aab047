"""Generate every example in a category under one parent directory.

:class:`CategoryScaffolder` creates ``<output_dir>/category-<id>``, runs the
single-example scaffolder for each member in declared order, and renders a
category ``README.md`` from ``category_readme.md.jinja``.

Members are generated one after another. If a member fails, the examples
already generated stay on disk. When the README is rendered, member ids that
do not resolve in the registry are left out of the example list without a
warning.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import CATEGORY_DIR_TEMPLATE, DEFAULT_CATEGORIES_OUTPUT, README_FILENAME
from .scaffold import ExampleScaffolder

if typ.TYPE_CHECKING:
    from .registry import CategoryDescriptor, Registry

logger = logging.getLogger(__name__)


class CategoryScaffolder:
    """Render a category directory of example projects plus an index README."""

    def __init__(
        self,
        registry: Registry,
        *,
        example_scaffolder: ExampleScaffolder | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the scaffolder and Jinja environment.

        Parameters
        ----------
        registry : Registry
            Loaded registry supplying category and example descriptors.
        example_scaffolder : ExampleScaffolder, optional
            Generator used for each member; defaults to one built from
            ``registry``.
        templates_dir : Path, optional
            Directory containing ``category_readme.md.jinja``. Defaults to the
            ``fhevm_examples/templates`` directory.
        """
        self.registry = registry
        self.example_scaffolder = example_scaffolder or ExampleScaffolder(registry)
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template("category_readme.md.jinja")

    def run(self, category_id: str, output_dir: Path | None = None) -> Path:
        """Generate all member examples and the category README.

        Returns
        -------
        Path
            Absolute path to the ``category-<id>`` directory.

        Raises
        ------
        UnknownIdentifierError
            If ``category_id`` is unknown (nothing is written), or if a member
            id is unknown (earlier members remain on disk).
        """
        category = self.registry.require_category(category_id)
        base_dir = output_dir or DEFAULT_CATEGORIES_OUTPUT
        category_dir = (base_dir / CATEGORY_DIR_TEMPLATE.format(key=category.id)).resolve()
        logger.info("Creating category %s in %s", category.title, category_dir)
        category_dir.mkdir(parents=True, exist_ok=True)

        total = len(category.examples)
        for idx, example_id in enumerate(category.examples, start=1):
            logger.info("[%d/%d] Generating %s", idx, total, example_id)
            self.example_scaffolder.run(example_id, category_dir)

        readme_path = category_dir / README_FILENAME
        readme_path.write_text(self.render_readme(category), encoding="utf-8")
        return category_dir

    def render_readme(self, category: CategoryDescriptor) -> str:
        """Return the category README markdown for ``category``."""
        members = self.registry.members(category)
        learning_path = []
        for example_id in category.examples:
            descriptor = self.registry.get_example(example_id)
            learning_path.append(descriptor.title if descriptor else example_id)
        context = {
            "category": category,
            "members": members,
            "learning_path": learning_path,
            "first_member": members[0].id if members else None,
        }
        return self.template.render(**context)


__all__ = ["CategoryScaffolder"]
