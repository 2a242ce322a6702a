"""Tunable parameters for the incremental compiler, independent of the language compiler it drives."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from incremental_compile.classfile_manager import ClassfileManagerFactory, delete_immediately
from incremental_compile.errors import InvalidConfigurationError


@dataclass(frozen=True)
class IncrementalOptions:
    """Immutable incremental compilation settings.

    Field defaults are the values of ``DEFAULT``. Use the ``with_*`` methods to
    derive modified copies; every copy is validated again.
    """

    # After this many steps invalidation includes the whole transitive closure.
    #   1. recompile changed sources
    #   2(3). recompile direct dependencies and transitive public inheritance
    #         dependencies of sources with API changes in 1(2)
    #   4. further changes invalidate all dependencies transitively
    transitive_step: int = 3
    # Above this fraction of invalidated sources everything is recompiled in one step.
    recompile_all_fraction: float = 0.5
    relations_debug: bool = False
    api_debug: bool = False
    # Only used when api_debug is set.
    api_diff_context_size: int = 5
    # Only used when api_debug is set.
    api_dump_directory: Path | None = None
    # Invoked once per incremental run.
    new_classfile_manager: ClassfileManagerFactory = delete_immediately
    recompile_on_macro_def: bool = True
    name_hashing: bool = True
    # Recompile only changed sources, no dependency invalidation. Unsupported.
    ant_style: bool = False

    def __post_init__(self) -> None:
        if self.api_dump_directory is not None and not isinstance(self.api_dump_directory, Path):
            object.__setattr__(self, "api_dump_directory", Path(self.api_dump_directory))
        if self.ant_style and self.name_hashing:
            raise InvalidConfigurationError("Name hashing and Ant-style cannot be enabled at the same time.")

    def with_transitive_step(self, transitive_step: int) -> IncrementalOptions:
        return replace(self, transitive_step=transitive_step)

    def with_recompile_all_fraction(self, recompile_all_fraction: float) -> IncrementalOptions:
        return replace(self, recompile_all_fraction=recompile_all_fraction)

    def with_relations_debug(self, relations_debug: bool) -> IncrementalOptions:
        return replace(self, relations_debug=relations_debug)

    def with_api_debug(self, api_debug: bool) -> IncrementalOptions:
        return replace(self, api_debug=api_debug)

    def with_api_diff_context_size(self, api_diff_context_size: int) -> IncrementalOptions:
        return replace(self, api_diff_context_size=api_diff_context_size)

    def with_api_dump_directory(self, api_dump_directory: Path | str | None) -> IncrementalOptions:
        return replace(self, api_dump_directory=api_dump_directory)

    def with_new_classfile_manager(self, new_classfile_manager: ClassfileManagerFactory) -> IncrementalOptions:
        return replace(self, new_classfile_manager=new_classfile_manager)

    def with_recompile_on_macro_def(self, recompile_on_macro_def: bool) -> IncrementalOptions:
        return replace(self, recompile_on_macro_def=recompile_on_macro_def)

    def with_name_hashing(self, name_hashing: bool) -> IncrementalOptions:
        return replace(self, name_hashing=name_hashing)

    def with_ant_style(self, ant_style: bool) -> IncrementalOptions:
        return replace(self, ant_style=ant_style)


DEFAULT = IncrementalOptions()
