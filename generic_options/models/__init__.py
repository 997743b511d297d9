"""Database models package."""

from generic_options.models.base import Base, IntegerIdMixin, TimestampMixin
from generic_options.models.option import GenericOption

__all__ = [
    # Base
    "Base",
    "IntegerIdMixin",
    "TimestampMixin",
    # Options
    "GenericOption",
]
