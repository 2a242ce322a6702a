"""Rules exposing incremental compilation options to the rest of the build."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from pants.engine.rules import collect_rules, rule
from pants.util.frozendict import FrozenDict

from incremental_compile.codec import to_string_map
from incremental_compile.options import IncrementalOptions
from incremental_compile.subsystem import IncrementalCompileSubsystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedIncrementalOptions:
    """String-map form of the options, suitable for a compiler worker process."""

    values: FrozenDict[str, str]


@rule(desc="Resolve incremental compilation options")
async def resolve_incremental_options(
    incremental_compile: IncrementalCompileSubsystem,
) -> IncrementalOptions:
    options = incremental_compile.to_options()
    logger.debug("Resolved incremental compilation options: %s", options)
    return options


@rule(desc="Encode incremental compilation options")
async def encode_incremental_options(options: IncrementalOptions) -> EncodedIncrementalOptions:
    return EncodedIncrementalOptions(values=FrozenDict(to_string_map(options)))


def rules() -> list:
    return [
        *collect_rules(),
    ]
