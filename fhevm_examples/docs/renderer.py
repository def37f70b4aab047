"""Render GitBook-style markdown for examples, the summary, and the overview.

Every method here is a pure function of the registry and the sections passed
in; nothing touches the filesystem apart from loading templates.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from fhevm_examples.registry import Difficulty, title_from_slug

if typ.TYPE_CHECKING:
    from fhevm_examples.registry import ExampleDescriptor, Registry

    from .extractor import DocSection

LEARNING_PATH_HEADINGS: dict[Difficulty, tuple[str, str]] = {
    Difficulty.BEGINNER: ("Beginners", "Start with the basics:"),
    Difficulty.INTERMEDIATE: ("Intermediate", "Dive deeper into FHEVM:"),
    Difficulty.ADVANCED: ("Advanced", "Master complex patterns:"),
}


def code_language(filename: str) -> str:
    """Return the fence language for ``filename``, or ``"text"`` when unknown.

    Examples
    --------
    >>> code_language("AccessControl.test.ts")
    'typescript'
    >>> code_language("")
    'text'
    """
    if not filename:
        return "text"
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return "text"
    return lexer.aliases[0] if lexer.aliases else "text"


class DocsRenderer:
    """Render documentation pages from the markdown Jinja templates."""

    def __init__(
        self,
        registry: Registry,
        *,
        templates_dir: Path | None = None,
        source_root: str = "../examples",
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        registry : Registry
            Registry whose examples and categories are documented.
        templates_dir : Path, optional
            Directory holding the ``*.md.jinja`` templates; defaults to
            ``fhevm_examples/templates/docs``.
        source_root : str, optional
            Relative link prefix from ``examples/<id>.md`` to the example
            sources.
        """
        self.registry = registry
        self.source_root = source_root.rstrip("/")
        default_templates = Path(__file__).resolve().parents[1] / "templates" / "docs"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_example_doc(
        self, example: ExampleDescriptor, sections: typ.Sequence[DocSection]
    ) -> str:
        """Render ``examples/<id>.md`` for ``example``.

        Parameters
        ----------
        example : ExampleDescriptor
            Example being documented.
        sections : Sequence[DocSection]
            Sections extracted from the example's test file. When empty the
            page links to the test file instead of listing code examples.

        Returns
        -------
        str
            Markdown with a fixed section order: header, Overview, Concept,
            What You'll Learn, FHEVM Features, Code Examples, Use Case,
            Next Steps, and footer links.
        """
        template = self.env.get_template("example_doc.md.jinja")
        return template.render(
            example=example,
            sections=list(sections),
            code_language=code_language(example.test_file),
            source_root=self.source_root,
        )

    def render_summary(self) -> str:
        """Render the GitBook ``SUMMARY.md`` grouped by registry chapter."""
        chapters = [
            (title_from_slug(chapter), examples)
            for chapter, examples in self.registry.chapters().items()
        ]
        template = self.env.get_template("summary.md.jinja")
        return template.render(chapters=chapters)

    def render_readme(self) -> str:
        """Render the overview ``README.md`` for the documentation root."""
        categories = [
            (category, self.registry.members(category))
            for category in self.registry.categories.values()
        ]
        learning_path = []
        for level, (heading, lede) in LEARNING_PATH_HEADINGS.items():
            examples = [
                example
                for example in self.registry.examples.values()
                if example.difficulty is level
            ]
            if examples:
                learning_path.append((level.value, heading, lede, examples))
        quick_start_id = next(iter(self.registry.examples), None)
        template = self.env.get_template("docs_readme.md.jinja")
        return template.render(
            categories=categories,
            learning_path=learning_path,
            quick_start_id=quick_start_id,
        )


__all__ = ["LEARNING_PATH_HEADINGS", "DocsRenderer", "code_language"]
