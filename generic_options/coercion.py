"""String <-> value conversions for the supported option kinds."""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, Strict, TypeAdapter

from generic_options.constants import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    INTEGER_PATTERN,
)
from generic_options.declarations import OptionType

_INTEGER_RE = re.compile(INTEGER_PATTERN)

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
# JSON true/false only; "yes" or 1 in a stored list is malformed
StrictBool = Annotated[bool, Strict()]


def parse_string(text: str) -> str:
    return text


def parse_boolean(text: str) -> bool:
    """Only ``true`` (any case) is true; every other string is false."""
    return text.lower() == "true"


def _integer_parser(low: int, high: int) -> Callable[[str], int]:
    def _parse(text: str) -> int:
        if not _INTEGER_RE.fullmatch(text):
            raise ValueError(f"not a decimal integer: {text!r}")
        number = int(text)
        if not low <= number <= high:
            raise ValueError(f"{number} is out of range [{low}, {high}]")
        return number

    return _parse


def _integer_formatter(low: int, high: int) -> Callable[[Any], str]:
    def _format(value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an int, got {type(value).__name__}")
        if not low <= value <= high:
            raise ValueError(f"{value} is out of range [{low}, {high}]")
        return str(value)

    return _format


def format_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a str, got {type(value).__name__}")
    return value


def format_boolean(value: Any) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"expected a bool, got {type(value).__name__}")
    return "true" if value else "false"


@dataclass(frozen=True)
class ScalarKind:
    """Everything needed to read and write one scalar kind."""

    option_type: OptionType
    zero: Any
    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    element: Any
    # Only numeric parsing can fail
    fallible: bool = False


SCALARS: dict[OptionType, ScalarKind] = {
    OptionType.STRING: ScalarKind(OptionType.STRING, "", parse_string, format_string, str),
    OptionType.BOOLEAN: ScalarKind(
        OptionType.BOOLEAN, False, parse_boolean, format_boolean, StrictBool
    ),
    OptionType.INTEGER: ScalarKind(
        OptionType.INTEGER,
        0,
        _integer_parser(INT32_MIN, INT32_MAX),
        _integer_formatter(INT32_MIN, INT32_MAX),
        Int32,
        fallible=True,
    ),
    OptionType.LONG: ScalarKind(
        OptionType.LONG,
        0,
        _integer_parser(INT64_MIN, INT64_MAX),
        _integer_formatter(INT64_MIN, INT64_MAX),
        Int64,
        fallible=True,
    ),
}


def element_annotation(element: Any) -> Any:
    """Map a list element descriptor to the annotation pydantic validates."""
    if isinstance(element, OptionType):
        if element not in SCALARS:
            raise ValueError(f"{element} cannot be used as a list element")
        return SCALARS[element].element
    return element


@lru_cache(maxsize=None)
def list_adapter(element: Any) -> TypeAdapter:
    return TypeAdapter(list[element_annotation(element)])


def decode_list(element: Any, text: str) -> list[Any]:
    """Decode a JSON array.

    Raises:
        ValueError: If *text* is not a JSON array of valid elements.
    """
    return list_adapter(element).validate_json(text)


def encode_list(element: Any, values: Iterable[Any]) -> str:
    """Validate *values* strictly and serialize them as a JSON array.

    Raises:
        TypeError: If *values* is a string, bytes or a mapping.
        ValueError: If an element does not match *element*.
    """
    if isinstance(values, (str, bytes, bytearray, Mapping)):
        raise TypeError(f"expected a sequence of values, got {type(values).__name__}")
    adapter = list_adapter(element)
    validated = adapter.validate_python(list(values), strict=True)
    return adapter.dump_json(validated).decode()
