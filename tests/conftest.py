"""Shared pytest fixtures for incremental-compile tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pants.engine.rules import QueryRule
from pants.testutil.option_util import create_subsystem
from pants.testutil.rule_runner import RuleRunner

from incremental_compile import rules as incremental_rules
from incremental_compile.options import DEFAULT, IncrementalOptions
from incremental_compile.rules import EncodedIncrementalOptions
from incremental_compile.subsystem import ClassfileManagerStrategy, IncrementalCompileSubsystem


def create_incremental_subsystem(**overrides: object) -> IncrementalCompileSubsystem:
    """Create an IncrementalCompileSubsystem whose unspecified options use the defaults."""
    options: dict[str, object] = {
        "transitive_step": DEFAULT.transitive_step,
        "recompile_all_fraction": DEFAULT.recompile_all_fraction,
        "relations_debug": DEFAULT.relations_debug,
        "api_debug": DEFAULT.api_debug,
        "api_diff_context_size": DEFAULT.api_diff_context_size,
        "api_dump_directory": None,
        "recompile_on_macro_def": DEFAULT.recompile_on_macro_def,
        "name_hashing": DEFAULT.name_hashing,
        "ant_style": DEFAULT.ant_style,
        "classfile_manager": ClassfileManagerStrategy.DELETE_IMMEDIATELY,
        "classfile_backup_dir": None,
    }
    options.update(overrides)
    return create_subsystem(IncrementalCompileSubsystem, **options)


@pytest.fixture
def incremental_subsystem() -> IncrementalCompileSubsystem:
    """Create an IncrementalCompileSubsystem with default option values."""
    return create_incremental_subsystem()


@pytest.fixture
def classes_dir(tmp_path: Path) -> Path:
    """Create an output directory holding a few compiled class files.

    A marker file at the root keeps the directory itself from being pruned
    when every class file beneath it is deleted.
    """
    root = tmp_path / "classes"
    (root / "pkg" / "sub").mkdir(parents=True)
    (root / ".keep").write_text("")
    (root / "pkg" / "A.class").write_bytes(b"A-v1")
    (root / "pkg" / "B.class").write_bytes(b"B-v1")
    (root / "pkg" / "sub" / "C.class").write_bytes(b"C-v1")
    return root


def create_incremental_rule_runner() -> RuleRunner:
    """Create a RuleRunner instance configured for incremental options rules."""
    return RuleRunner(
        rules=[
            *incremental_rules.rules(),
            QueryRule(IncrementalOptions, ()),
            QueryRule(EncodedIncrementalOptions, ()),
        ],
    )


@pytest.fixture
def incremental_rule_runner() -> RuleRunner:
    """Create a RuleRunner instance for incremental options testing."""
    return create_incremental_rule_runner()


@pytest.fixture
def make_incremental_subsystem() -> Callable[..., IncrementalCompileSubsystem]:
    """Return a factory for subsystems with selected options overridden."""
    return create_incremental_subsystem
