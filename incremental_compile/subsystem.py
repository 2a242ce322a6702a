"""Subsystem options controlling how aggressively the incremental compiler recompiles."""

from __future__ import annotations

from enum import Enum

from pants.option.option_types import BoolOption, EnumOption, FloatOption, IntOption, StrOption
from pants.option.subsystem import Subsystem

from incremental_compile.classfile_manager import ClassfileManagerFactory, delete_immediately, transactional
from incremental_compile.options import DEFAULT, IncrementalOptions


class ClassfileManagerStrategy(Enum):
    DELETE_IMMEDIATELY = "delete-immediately"
    TRANSACTIONAL = "transactional"


class IncrementalCompileSubsystem(Subsystem):
    options_scope = "incremental-compile"
    help = "Invalidation and debugging settings for incremental compilation."

    transitive_step = IntOption(
        default=DEFAULT.transitive_step,
        help="Invalidation step after which the whole transitive closure of changed sources is recompiled.",
    )
    recompile_all_fraction = FloatOption(
        default=DEFAULT.recompile_all_fraction,
        help="Fraction of invalidated sources above which everything is recompiled in a single step.",
    )
    relations_debug = BoolOption(
        default=DEFAULT.relations_debug,
        help="Print detailed information about relations, such as dependencies between source files.",
    )
    api_debug = BoolOption(default=DEFAULT.api_debug, help="Enable tools for debugging API changes.")
    api_diff_context_size = IntOption(
        default=DEFAULT.api_diff_context_size,
        help="Lines of context shown around textual API diffs. Only used with `--api-debug`.",
    )
    api_dump_directory = StrOption(
        default=None,
        help="Directory where textual API representations are dumped. Only used with `--api-debug`.",
    )
    recompile_on_macro_def = BoolOption(
        default=DEFAULT.recompile_on_macro_def,
        help="Recompile all dependents of a source file that contains a macro definition.",
    )
    name_hashing = BoolOption(
        default=DEFAULT.name_hashing,
        help="Use the name hashing invalidation algorithm instead of the legacy one.",
    )
    ant_style = BoolOption(
        default=DEFAULT.ant_style,
        advanced=True,
        help=(
            "Unsupported. Recompile only changed sources without invalidating dependencies. "
            "Requires `--no-name-hashing`."
        ),
    )
    classfile_manager = EnumOption(
        default=ClassfileManagerStrategy.DELETE_IMMEDIATELY,
        help="How class files are deleted and restored during a compilation run.",
    )
    classfile_backup_dir = StrOption(
        default=None,
        advanced=True,
        help="Parent directory for backups made by the `transactional` classfile manager.",
    )

    def classfile_manager_factory(self) -> ClassfileManagerFactory:
        if self.classfile_manager == ClassfileManagerStrategy.TRANSACTIONAL:
            return transactional(self.classfile_backup_dir)
        return delete_immediately

    def to_options(self) -> IncrementalOptions:
        return IncrementalOptions(
            transitive_step=self.transitive_step,
            recompile_all_fraction=self.recompile_all_fraction,
            relations_debug=self.relations_debug,
            api_debug=self.api_debug,
            api_diff_context_size=self.api_diff_context_size,
            api_dump_directory=self.api_dump_directory or None,
            new_classfile_manager=self.classfile_manager_factory(),
            recompile_on_macro_def=self.recompile_on_macro_def,
            name_hashing=self.name_hashing,
            ant_style=self.ant_style,
        )
