r"""Extract titled documentation blocks from annotated test sources.

Test files document themselves with ``/** ... */`` comment blocks carrying
``@title`` and optional ``@chapter`` markers. Each block is paired with the
source that follows it, up to the next block or end of file, and the first
few lines of that source become the section's code sample.

Scanning is an explicit three-state machine: ``OUTSIDE`` a block, ``IN_BLOCK``
after an opening marker, and ``IN_TRAILING`` after a closing marker. A block
that never closes runs to the next opening marker or end of file and gets no
code sample. Nothing in here raises on malformed input.

Example
-------
>>> from fhevm_examples.docs.extractor import parse_sections
>>> sections = parse_sections("/**\n * @title Foo\n * Body\n */\nit('works');\n")
>>> (sections[0].title, sections[0].chapter, sections[0].code)
('Foo', 'general', "it('works');")
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

BLOCK_OPEN = "/**"
BLOCK_CLOSE = "*/"
GUTTER_PATTERN = re.compile(r"^\s*\*(?![*/]) ?")
MARKER_PATTERN = re.compile(r"^@(\w+)(?:\s+(.*))?$")
DEFAULT_CHAPTER = "general"
DEFAULT_CODE_LINES = 20


@dc.dataclass(slots=True)
class DocSection:
    """One titled unit of documentation taken from a comment block.

    Attributes
    ----------
    title : str
        Text following the ``@title`` marker.
    body : str
        Block prose with marker lines and the ``*`` gutter removed.
    code : str or None
        Leading lines of the source after the block, or ``None`` when the
        block is followed by nothing.
    chapter : str
        Text following ``@chapter``, or the default chapter.
    """

    title: str
    body: str
    code: str | None
    chapter: str


class _State(enum.Enum):
    OUTSIDE = enum.auto()
    IN_BLOCK = enum.auto()
    IN_TRAILING = enum.auto()


def _scan_blocks(text: str) -> list[tuple[str, str]]:
    """Return ``(comment, trailing)`` pairs in source order."""
    blocks: list[tuple[str, str]] = []
    state = _State.OUTSIDE
    pos = 0
    comment = ""
    while True:
        match state:
            case _State.OUTSIDE:
                start = text.find(BLOCK_OPEN, pos)
                if start < 0:
                    return blocks
                pos = start + len(BLOCK_OPEN)
                state = _State.IN_BLOCK
            case _State.IN_BLOCK:
                close = text.find(BLOCK_CLOSE, pos)
                reopen = text.find(BLOCK_OPEN, pos)
                if close >= 0 and (reopen < 0 or close < reopen):
                    comment = text[pos:close]
                    pos = close + len(BLOCK_CLOSE)
                    state = _State.IN_TRAILING
                    continue
                # Unclosed: the block runs to the next opener or EOF.
                end = reopen if reopen >= 0 else len(text)
                blocks.append((text[pos:end], ""))
                if reopen < 0:
                    return blocks
                pos = reopen
                state = _State.OUTSIDE
            case _State.IN_TRAILING:
                reopen = text.find(BLOCK_OPEN, pos)
                end = reopen if reopen >= 0 else len(text)
                blocks.append((comment, text[pos:end]))
                if reopen < 0:
                    return blocks
                pos = reopen
                state = _State.OUTSIDE


def _parse_block(
    comment: str, trailing: str, *, default_chapter: str, code_lines: int
) -> DocSection | None:
    """Build a DocSection from one block, or ``None`` when it has no title."""
    title: str | None = None
    chapter: str | None = None
    body_lines: list[str] = []
    for raw_line in comment.splitlines():
        line = GUTTER_PATTERN.sub("", raw_line, count=1)
        marker = MARKER_PATTERN.match(line.strip())
        if marker is None:
            body_lines.append(line.rstrip())
            continue
        name, value = marker.group(1), (marker.group(2) or "").strip()
        if name == "title" and value and title is None:
            title = value
        elif name == "chapter" and value and chapter is None:
            chapter = value

    if title is None:
        return None

    code = "\n".join(trailing.strip().splitlines()[:code_lines])
    return DocSection(
        title=title,
        body="\n".join(body_lines).strip(),
        code=code or None,
        chapter=chapter or default_chapter,
    )


def parse_sections(
    text: str,
    *,
    default_chapter: str = DEFAULT_CHAPTER,
    code_lines: int = DEFAULT_CODE_LINES,
) -> list[DocSection]:
    """Return the titled sections found in ``text`` in source order."""
    sections: list[DocSection] = []
    for comment, trailing in _scan_blocks(text):
        section = _parse_block(
            comment, trailing, default_chapter=default_chapter, code_lines=code_lines
        )
        if section is not None:
            sections.append(section)
    return sections


def extract_sections(
    test_file: Path,
    *,
    default_chapter: str = DEFAULT_CHAPTER,
    code_lines: int = DEFAULT_CODE_LINES,
) -> list[DocSection]:
    """Read ``test_file`` and return its sections; missing files yield ``[]``."""
    if not test_file.is_file():
        return []
    return parse_sections(
        test_file.read_text(encoding="utf-8"),
        default_chapter=default_chapter,
        code_lines=code_lines,
    )


__all__ = [
    "BLOCK_CLOSE",
    "BLOCK_OPEN",
    "DEFAULT_CHAPTER",
    "DEFAULT_CODE_LINES",
    "DocSection",
    "extract_sections",
    "parse_sections",
]
