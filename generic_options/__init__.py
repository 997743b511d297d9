"""Enum-keyed, typed option records for SQLAlchemy models."""

from generic_options.codec import decode_key, encode_key
from generic_options.declarations import (
    DeclarationReader,
    DeclarationRegistry,
    OptionDefault,
    OptionType,
    option_defaults,
    registry,
)
from generic_options.exceptions import (
    BadTypeError,
    BadValueError,
    GenericOptionError,
    NoSuchKeyError,
)
from generic_options.finders import (
    AsyncEntityFinder,
    AsyncSessionEntityFinder,
    EntityFinder,
    SessionEntityFinder,
)
from generic_options.models.option import GenericOption

__all__ = [
    # Records
    "GenericOption",
    # Declarations
    "DeclarationReader",
    "DeclarationRegistry",
    "OptionDefault",
    "OptionType",
    "option_defaults",
    "registry",
    # Key codec
    "decode_key",
    "encode_key",
    # Entity lookup
    "AsyncEntityFinder",
    "AsyncSessionEntityFinder",
    "EntityFinder",
    "SessionEntityFinder",
    # Errors
    "BadTypeError",
    "BadValueError",
    "GenericOptionError",
    "NoSuchKeyError",
]
