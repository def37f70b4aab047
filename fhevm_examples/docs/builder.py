"""Write the full documentation tree for every registered example.

:class:`DocsBuilder` produces::

    <output_dir>/README.md
    <output_dir>/SUMMARY.md
    <output_dir>/examples/<id>.md

Reruns overwrite previous output without diffing.
"""

from __future__ import annotations

import logging
import typing as typ

from fhevm_examples._constants import (
    DEFAULT_DOCS_OUTPUT,
    README_FILENAME,
    SUMMARY_FILENAME,
    TESTS_DIRNAME,
)

from .extractor import extract_sections
from .renderer import DocsRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from fhevm_examples.registry import ExampleDescriptor, Registry

    from .extractor import DocSection

logger = logging.getLogger(__name__)


class DocsBuilder:
    """Extract annotated sections and emit GitBook markdown."""

    def __init__(self, registry: Registry, *, renderer: DocsRenderer | None = None) -> None:
        self.registry = registry
        self.settings = registry.settings
        self.renderer = renderer or DocsRenderer(registry)

    def extract(self, example: ExampleDescriptor) -> list[DocSection]:
        """Return the sections documented in ``example``'s test file."""
        if not example.test_file:
            return []
        test_path = self.settings.examples_root / example.id / TESTS_DIRNAME / example.test_file
        return extract_sections(
            test_path,
            default_chapter=self.settings.default_chapter,
            code_lines=self.settings.code_sample_lines,
        )

    def run(self, output_dir: Path | None = None) -> list[Path]:
        """Write every documentation file and return the written paths in order."""
        docs_dir = output_dir or DEFAULT_DOCS_OUTPUT
        examples_dir = docs_dir / "examples"
        examples_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        readme_path = docs_dir / README_FILENAME
        readme_path.write_text(self.renderer.render_readme(), encoding="utf-8")
        written.append(readme_path)

        summary_path = docs_dir / SUMMARY_FILENAME
        summary_path.write_text(self.renderer.render_summary(), encoding="utf-8")
        written.append(summary_path)

        for example_id, example in self.registry.examples.items():
            sections = self.extract(example)
            logger.info("Documenting %s (%d sections)", example.title, len(sections))
            doc_path = examples_dir / f"{example_id}.md"
            doc_path.write_text(
                self.renderer.render_example_doc(example, sections), encoding="utf-8"
            )
            written.append(doc_path)
        return written


__all__ = ["DocsBuilder"]
