"""Errors raised by the typed option accessors."""

from enum import Enum
from typing import Any


class GenericOptionError(Exception):
    """Base class for all option errors."""


class BadTypeError(GenericOptionError):
    """Raised when an accessor does not match the type declared for a key."""

    def __init__(
        self,
        option_type: str,
        key: str | None,
        expected: tuple[Any, ...],
        declared: tuple[Any, ...],
    ):
        self.option_type = option_type
        self.key = key
        self.expected = expected
        self.declared = declared
        super().__init__(
            f"{option_type} - Option {key!r} is declared as {_describe(declared)}, "
            f"not {_describe(expected)}"
        )


class BadValueError(GenericOptionError):
    """Raised when a stored or default value cannot be decoded or encoded."""

    def __init__(self, option_type: str, key: str | None, raw: Any, reason: str):
        self.option_type = option_type
        self.key = key
        self.raw = raw
        self.reason = reason
        super().__init__(f"{option_type} - {reason} : {key} -> {raw}")


class NoSuchKeyError(GenericOptionError, LookupError):
    """Raised when a string matches neither an alias nor a member name."""

    def __init__(self, enum_type: type[Enum], text: str | None):
        self.enum_type = enum_type
        self.text = text
        super().__init__(f"No member of {enum_type.__qualname__} matches {text!r}")


def _describe(types: tuple[Any, ...]) -> str:
    return "[" + ", ".join(getattr(t, "__name__", str(t)) for t in types) + "]"
