"""Common literal values used across fhevm_examples.

These constants keep directory names, manifest naming, and output defaults
centralized so generators, the CLI, and tests share the same values.

Examples
--------
>>> from fhevm_examples import _constants
>>> _constants.EXAMPLE_DIR_TEMPLATE.format(key="access-control")
'example-access-control'
>>> _constants.MANIFEST_NAME_TEMPLATE.format(key="access-control")
'fhevm-example-access-control'
"""

from pathlib import Path

EXAMPLE_DIR_TEMPLATE = "example-{key}"
CATEGORY_DIR_TEMPLATE = "category-{key}"
MANIFEST_NAME_TEMPLATE = "fhevm-example-{key}"
MANIFEST_FILENAME = "package.json"
README_FILENAME = "README.md"
SUMMARY_FILENAME = "SUMMARY.md"
CONTRACTS_DIRNAME = "contracts"
TESTS_DIRNAME = "test"

DEFAULT_EXAMPLES_OUTPUT = Path("generated-examples")
DEFAULT_CATEGORIES_OUTPUT = Path("generated-categories")
DEFAULT_DOCS_OUTPUT = Path("docs")
