"""String-map encoding of `IncrementalOptions` for handing options to another process.

The key names below are a stable wire contract. The classfile manager factory
has no textual form: it is never encoded, and decoding always installs
`delete_immediately`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
import re
from typing import TypeVar

from incremental_compile.classfile_manager import delete_immediately
from incremental_compile.errors import MalformedValueError
from incremental_compile.options import DEFAULT, IncrementalOptions

TRANSITIVE_STEP_KEY = "transitiveStep"
RECOMPILE_ALL_FRACTION_KEY = "recompileAllFraction"
RELATIONS_DEBUG_KEY = "relationsDebug"
API_DEBUG_KEY = "apiDebug"
API_DUMP_DIRECTORY_KEY = "apiDumpDirectory"
API_DIFF_CONTEXT_SIZE_KEY = "apiDiffContextSize"
RECOMPILE_ON_MACRO_DEF_KEY = "recompileOnMacroDef"
NAME_HASHING_KEY = "nameHashing"
ANT_STYLE_KEY = "antStyle"

STRING_MAP_KEYS = (
    TRANSITIVE_STEP_KEY,
    RECOMPILE_ALL_FRACTION_KEY,
    RELATIONS_DEBUG_KEY,
    API_DEBUG_KEY,
    API_DUMP_DIRECTORY_KEY,
    API_DIFF_CONTEXT_SIZE_KEY,
    RECOMPILE_ON_MACRO_DEF_KEY,
    NAME_HASHING_KEY,
    ANT_STYLE_KEY,
)

_T = TypeVar("_T")

# ASCII only: no whitespace, digit separators or non-ASCII digits.
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|(?i:nan|inf(?:inity)?))")


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise MalformedValueError(key, raw, "a boolean (`true` or `false`)")


def _parse_int(key: str, raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise MalformedValueError(key, raw, "an integer")
    return int(raw)


def _parse_float(key: str, raw: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(raw):
        raise MalformedValueError(key, raw, "a floating-point number")
    return float(raw)


def _lookup(mapping: Mapping[str, str], key: str, parse: Callable[[str, str], _T], default: _T) -> _T:
    if key in mapping:
        return parse(key, mapping[key])
    return default


def to_string_map(options: IncrementalOptions) -> dict[str, str]:
    """Encode every textual field; `apiDumpDirectory` only appears when it is set."""
    encoded = {
        TRANSITIVE_STEP_KEY: str(options.transitive_step),
        RECOMPILE_ALL_FRACTION_KEY: repr(float(options.recompile_all_fraction)),
        RELATIONS_DEBUG_KEY: _format_bool(options.relations_debug),
        API_DEBUG_KEY: _format_bool(options.api_debug),
        API_DIFF_CONTEXT_SIZE_KEY: str(options.api_diff_context_size),
        RECOMPILE_ON_MACRO_DEF_KEY: _format_bool(options.recompile_on_macro_def),
        NAME_HASHING_KEY: _format_bool(options.name_hashing),
        ANT_STYLE_KEY: _format_bool(options.ant_style),
    }
    if options.api_dump_directory is not None:
        encoded[API_DUMP_DIRECTORY_KEY] = str(options.api_dump_directory)
    return encoded


def from_string_map(mapping: Mapping[str, str]) -> IncrementalOptions:
    """Decode options, using `DEFAULT` for every absent key.

    Raises `MalformedValueError` for values that do not parse and
    `InvalidConfigurationError` when the decoded values are not a legal
    combination. Keys outside `STRING_MAP_KEYS` are ignored.
    """
    api_dump_directory = (
        Path(mapping[API_DUMP_DIRECTORY_KEY]) if API_DUMP_DIRECTORY_KEY in mapping else DEFAULT.api_dump_directory
    )
    return IncrementalOptions(
        transitive_step=_lookup(mapping, TRANSITIVE_STEP_KEY, _parse_int, DEFAULT.transitive_step),
        recompile_all_fraction=_lookup(
            mapping, RECOMPILE_ALL_FRACTION_KEY, _parse_float, DEFAULT.recompile_all_fraction
        ),
        relations_debug=_lookup(mapping, RELATIONS_DEBUG_KEY, _parse_bool, DEFAULT.relations_debug),
        api_debug=_lookup(mapping, API_DEBUG_KEY, _parse_bool, DEFAULT.api_debug),
        api_diff_context_size=_lookup(
            mapping, API_DIFF_CONTEXT_SIZE_KEY, _parse_int, DEFAULT.api_diff_context_size
        ),
        api_dump_directory=api_dump_directory,
        new_classfile_manager=delete_immediately,
        recompile_on_macro_def=_lookup(
            mapping, RECOMPILE_ON_MACRO_DEF_KEY, _parse_bool, DEFAULT.recompile_on_macro_def
        ),
        name_hashing=_lookup(mapping, NAME_HASHING_KEY, _parse_bool, DEFAULT.name_hashing),
        ant_style=_lookup(mapping, ANT_STYLE_KEY, _parse_bool, DEFAULT.ant_style),
    )
