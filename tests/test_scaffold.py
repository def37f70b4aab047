"""Unit tests for single-example scaffolding."""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import os
import typing as typ

import pytest

from fhevm_examples.registry import UnknownIdentifierError
from fhevm_examples.scaffold import (
    TOKEN_PATTERN,
    ExampleScaffolder,
    readme_replacements,
    render_readme,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from fhevm_examples.registry import Registry


def test_generates_project_from_template(registry: Registry, tmp_path: Path) -> None:
    """The template tree, overlays, README and manifest all land in place."""
    out = tmp_path / "out"
    example_dir = ExampleScaffolder(registry).run("access-control", out)

    assert example_dir == (out / "example-access-control").resolve()
    assert example_dir.is_absolute()
    for name in ("hardhat.config.ts", "tsconfig.json", ".gitignore", "README.md"):
        assert (example_dir / name).is_file(), f"expected {name} in generated project"
    contract = example_dir / "contracts" / "LendingAccessControl.sol"
    test_file = example_dir / "test" / "AccessControl.test.ts"
    assert contract.read_text(encoding="utf-8").endswith("contract LendingAccessControl {}\n")
    assert "@title Access Control Tests for FHEVM" in test_file.read_text(encoding="utf-8")


def test_readme_has_no_recognised_tokens(registry: Registry, tmp_path: Path) -> None:
    example_dir = ExampleScaffolder(registry).run("access-control", tmp_path)
    readme = (example_dir / "README.md").read_text(encoding="utf-8")
    assert "Access Control" in readme
    assert "{{" not in readme, "all template tokens should be substituted"
    assert "**Difficulty**: Beginner" in readme
    assert "- **FHE.allow() - Grant permission to specific address**" in readme
    assert "See `test/AccessControl.test.ts`" in readme


@pytest.mark.parametrize(
    "example_id",
    [
        "access-control",
        "encrypted-arithmetic",
        "encrypted-comparison",
        "user-decryption",
        "credit-scoring",
        "input-proofs",
    ],
)
def test_every_example_renders_cleanly(
    registry: Registry, tmp_path: Path, example_id: str
) -> None:
    """Each registry entry yields a README free of substitutable tokens."""
    example = registry.require_example(example_id)
    known = set(readme_replacements(example, registry.settings))
    example_dir = ExampleScaffolder(registry).run(example_id, tmp_path)
    readme = (example_dir / "README.md").read_text(encoding="utf-8")
    leftovers = {match.group(1) for match in TOKEN_PATTERN.finditer(readme)}
    assert not leftovers & known, f"unsubstituted tokens: {sorted(leftovers & known)}"
    assert example.title in readme


def test_manifest_name_and_description_rewritten(
    registry: Registry, tmp_path: Path
) -> None:
    example_dir = ExampleScaffolder(registry).run("access-control", tmp_path)
    manifest_text = (example_dir / "package.json").read_text(encoding="utf-8")
    manifest = json.loads(manifest_text)
    template_manifest = json.loads(
        (registry.settings.template_dir / "package.json").read_text(encoding="utf-8")
    )

    assert manifest["name"] == "fhevm-example-access-control"
    assert manifest["description"] == registry.require_example("access-control").description
    assert list(manifest) == list(template_manifest), "key order should be preserved"
    assert manifest["scripts"] == template_manifest["scripts"]
    assert manifest_text.startswith('{\n  "name"'), "expected two-space indentation"
    assert manifest_text.endswith("}\n")


def test_missing_overlays_warn_and_continue(
    registry: Registry, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing test source is logged while the rest of the project is built."""
    with caplog.at_level(logging.WARNING, logger="fhevm_examples.scaffold"):
        example_dir = ExampleScaffolder(registry).run("encrypted-arithmetic", tmp_path)

    assert (example_dir / "contracts" / "LendingArithmetic.sol").is_file()
    assert not (example_dir / "test" / "Arithmetic.test.ts").exists()
    assert (example_dir / "README.md").is_file()
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Test file not found") for message in messages)
    assert not any(message.startswith("Contract file not found") for message in messages)


def test_unknown_example_writes_nothing(registry: Registry, tmp_path: Path) -> None:
    out = tmp_path / "out"
    with pytest.raises(UnknownIdentifierError) as excinfo:
        ExampleScaffolder(registry).run("does-not-exist", out)
    assert "access-control" in excinfo.value.available
    assert not out.exists(), "no output should be created for unknown ids"


def test_regeneration_is_byte_identical(registry: Registry, tmp_path: Path) -> None:
    scaffolder = ExampleScaffolder(registry)
    first = scaffolder.run("access-control", tmp_path)
    readme = (first / "README.md").read_bytes()
    manifest = (first / "package.json").read_bytes()

    second = scaffolder.run("access-control", tmp_path)
    assert second == first
    assert (second / "README.md").read_bytes() == readme
    assert (second / "package.json").read_bytes() == manifest


def test_stale_files_survive_without_clean(registry: Registry, tmp_path: Path) -> None:
    example_dir = ExampleScaffolder(registry).run("access-control", tmp_path)
    stale = example_dir / "contracts" / "Stale.sol"
    stale.write_text("stale", encoding="utf-8")

    ExampleScaffolder(registry).run("access-control", tmp_path)
    assert stale.exists()


def test_clean_wipes_previous_output(registry: Registry, tmp_path: Path) -> None:
    example_dir = ExampleScaffolder(registry).run("access-control", tmp_path)
    stale = example_dir / "contracts" / "Stale.sol"
    stale.write_text("stale", encoding="utf-8")

    ExampleScaffolder(registry, clean=True).run("access-control", tmp_path)
    assert not stale.exists()
    assert (example_dir / "contracts" / "LendingAccessControl.sol").is_file()


def test_render_readme_leaves_unknown_tokens(registry: Registry) -> None:
    example = registry.require_example("credit-scoring")
    rendered = render_readme(
        "{{EXAMPLE_TITLE}} / {{EXAMPLE_TITLE}} / {{NOT_A_TOKEN}} / {{lower}}",
        example,
        registry.settings,
    )
    assert rendered == (
        "Privacy-Preserving Credit Scoring / Privacy-Preserving Credit Scoring"
        " / {{NOT_A_TOKEN}} / {{lower}}"
    )


def test_list_tokens_render_as_bullets(registry: Registry) -> None:
    example = registry.require_example("encrypted-comparison")
    replacements = readme_replacements(example, registry.settings)
    assert replacements["LEARNING_OBJECTIVES"].splitlines() == [
        f"- {objective}" for objective in example.learning_objectives
    ]
    assert replacements["TEST_COVERAGE_POINTS"] == replacements["LEARNING_OBJECTIVES"]
    assert replacements["DIFFICULTY_LEVEL"] == "Intermediate"
    assert replacements["CHAPTER_TAG"] == "comparison"
    assert replacements["COMMON_MISTAKES"].startswith(
        "- Missing FHE.allowThis() before operations"
    )
    assert replacements["CONTRACT_DESCRIPTION"] == (
        "This example implements `LendingComparison.sol`, demonstrating "
        "compare encrypted values and make decisions based on encrypted conditions."
    )


def test_missing_template_propagates(registry: Registry, tmp_path: Path) -> None:
    """Filesystem errors are not wrapped in a domain error."""
    broken = dc.replace(
        registry, settings=dc.replace(registry.settings, template_dir=tmp_path / "absent")
    )
    with pytest.raises(FileNotFoundError):
        ExampleScaffolder(broken).run("access-control", tmp_path / "out")


def test_overlays_keep_source_metadata(
    registry: Registry, examples_root: Path, tmp_path: Path
) -> None:
    """Overlaid sources are copied with their modification time."""
    source = examples_root / "access-control" / "contracts" / "LendingAccessControl.sol"
    os.utime(source, (1_600_000_000, 1_600_000_000))

    example_dir = ExampleScaffolder(registry).run("access-control", tmp_path / "out")
    copied = example_dir / "contracts" / "LendingAccessControl.sol"
    assert copied.stat().st_mtime == source.stat().st_mtime
