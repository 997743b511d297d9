"""Database repositories for option data access."""
from generic_options.repositories.option_repository import OptionRepository

__all__ = [
    "OptionRepository",
]
