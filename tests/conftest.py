"""Shared fixtures for the fhevm_examples test suite.

The fixtures build a throwaway ``examples/`` source tree so generators can
overlay real files, and load the bundled registry pointed at that tree.
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from fhevm_examples.registry import Registry, load_registry

ACCESS_CONTROL_TEST = dedent(
    """
    import { expect } from "chai";

    /**
     * @title Access Control Tests for FHEVM
     * @chapter access-control
     *
     * Access Control Lists determine who can decrypt values.
     */
    describe("Lending Access Control", function () {
      let contract: LendingAccessControl;

      /**
       * @title Creating a Loan with Encrypted Amount
       *
       * FHE.allowThis and FHE.allow must both be granted.
       */
      describe("Creating loans", function () {
        it("creates a loan", async function () {});
      });

      /**
       * Helper without a title marker.
       */
      function helper() {}
    });
    """
).lstrip()

ACCESS_CONTROL_CONTRACT = "// SPDX-License-Identifier: BSD-3-Clause-Clear\ncontract LendingAccessControl {}\n"
ARITHMETIC_CONTRACT = "contract LendingArithmetic {}\n"


@pytest.fixture
def examples_root(tmp_path: Path) -> Path:
    """Create example sources for two registry entries.

    ``access-control`` gets both its contract and annotated test. Only the
    contract exists for ``encrypted-arithmetic`` so the missing-test path is
    exercised. Every other example has no sources at all.
    """
    root = tmp_path / "examples"
    access = root / "access-control"
    (access / "contracts").mkdir(parents=True)
    (access / "test").mkdir(parents=True)
    (access / "contracts" / "LendingAccessControl.sol").write_text(
        ACCESS_CONTROL_CONTRACT, encoding="utf-8"
    )
    (access / "test" / "AccessControl.test.ts").write_text(
        ACCESS_CONTROL_TEST, encoding="utf-8"
    )
    arithmetic = root / "encrypted-arithmetic" / "contracts"
    arithmetic.mkdir(parents=True)
    (arithmetic / "LendingArithmetic.sol").write_text(
        ARITHMETIC_CONTRACT, encoding="utf-8"
    )
    return root


@pytest.fixture
def registry(examples_root: Path) -> Registry:
    """Return the bundled registry reading sources from ``examples_root``."""
    return load_registry(examples_root=examples_root)
