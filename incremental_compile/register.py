"""Registration entrypoint for the incremental compilation options backend."""

from __future__ import annotations

from incremental_compile import rules as incremental_rules


def target_types() -> list[type]:
    return []


def rules() -> list:
    return [
        *incremental_rules.rules(),
    ]
