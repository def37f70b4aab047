"""Scaffold standalone FHEVM example projects and generate their docs.

This package exposes the CLI entry points behind ``create-example``,
``create-category`` and ``generate-docs``, plus the generator classes they
wrap.

Exports
-------
- ``app``: Cyclopts application with all three subcommands.
- ``main``: Convenience function that invokes ``app``.

Examples
--------
>>> from fhevm_examples import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
