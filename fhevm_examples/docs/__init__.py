"""Utilities for extracting, rendering, and writing example documentation."""

from .builder import DocsBuilder
from .extractor import DocSection, extract_sections, parse_sections
from .renderer import DocsRenderer, code_language

__all__ = [
    "DocSection",
    "DocsBuilder",
    "DocsRenderer",
    "code_language",
    "extract_sections",
    "parse_sections",
]
