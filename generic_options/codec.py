"""Conversion between enum members and their persisted string form.

``str``-valued enums (``StrEnum``) persist their value, the same convention
SQLAlchemy's ``values_callable`` uses for enum columns. Any other enum
persists its member name. Decoding accepts either form so stored rows survive
a member rename as long as the value is kept.
"""

from enum import Enum
from typing import TypeVar

from generic_options.exceptions import NoSuchKeyError

E = TypeVar("E", bound=Enum)


def alias_of(member: Enum) -> str | None:
    """Return the declared alias of *member*, or ``None`` if it has none."""
    if isinstance(member, str):
        return member.value
    return None


def encode_key(member: Enum) -> str:
    """Encode *member* as its alias, falling back to its name."""
    alias = alias_of(member)
    return alias if alias is not None else member.name


def decode_key(enum_type: type[E], text: str | None) -> E:
    """Decode *text* into a member of *enum_type*.

    Raises:
        NoSuchKeyError: If *text* matches neither an alias nor a member name.
    """
    for member in enum_type:
        if alias_of(member) == text:
            return member
    try:
        return enum_type[text]
    except KeyError:
        raise NoSuchKeyError(enum_type, text) from None
