"""Errors raised while building or decoding incremental compilation options."""

from __future__ import annotations


class IncrementalOptionsError(ValueError):
    pass


class InvalidConfigurationError(IncrementalOptionsError):
    """The combination of option values is not allowed."""


class MalformedValueError(IncrementalOptionsError):
    """A textual option value could not be parsed into the field's type."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Option `{key}` expects {expected}, got {value!r}.")
