"""Static per-key declarations: default values and expected types.

Declarations live in a companion table next to the enum they describe::

    @option_defaults(
        {
            "TITLE": OptionDefault("Untitled"),
            "PAGE_SIZE": OptionDefault("20", (OptionType.INTEGER,)),
            "TAGS": OptionDefault("[]", (OptionType.LIST, OptionType.STRING)),
        }
    )
    class ShopOption(StrEnum):
        TITLE = "title"
        PAGE_SIZE = "page_size"
        TAGS = "tags"
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, Protocol, TypeVar

E = TypeVar("E", bound=type[Enum])

TypeDescriptors = tuple[Any, ...]


class OptionType(StrEnum):
    """Type descriptors of the built-in value kinds."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    LONG = "long"
    LIST = "list"


@dataclass(frozen=True)
class OptionDefault:
    """Default value and expected type of one option key.

    ``types`` is compared elementwise with the descriptors of the accessor in
    use: ``(OptionType.INTEGER,)``, ``(OptionType.LIST, OptionType.LONG)``,
    ``(SomeEnum,)`` or ``(SomeModel,)``.
    """

    value: str = ""
    types: TypeDescriptors = (OptionType.STRING,)

    def __post_init__(self) -> None:
        # Accept a list for convenience, store an immutable tuple
        object.__setattr__(self, "types", tuple(self.types))


class DeclarationReader(Protocol):
    """Anything able to answer "what is declared for this key"."""

    def lookup(self, enum_type: type[Enum], member: Any) -> OptionDefault | None: ...


class DeclarationRegistry:
    """Explicit mapping from enum members to their declared defaults."""

    def __init__(self) -> None:
        self._declarations: dict[type[Enum], dict[Enum, OptionDefault]] = {}

    def register(
        self, enum_type: type[Enum], declarations: Mapping[Enum | str, OptionDefault]
    ) -> None:
        """Attach *declarations* to *enum_type*.

        Keys may be members or member names.

        Raises:
            ValueError: If a key is not a member of *enum_type*.
        """
        table = self._declarations.setdefault(enum_type, {})
        for name, declaration in declarations.items():
            if isinstance(name, enum_type):
                member = name
            elif isinstance(name, str) and name in enum_type.__members__:
                member = enum_type[name]
            else:
                raise ValueError(f"{enum_type.__qualname__} has no member {name!r}")
            table[member] = declaration

    def declare(self, declarations: Mapping[str, OptionDefault]) -> Callable[[E], E]:
        """Class decorator form of :meth:`register`."""

        def _decorate(enum_type: E) -> E:
            self.register(enum_type, declarations)
            return enum_type

        return _decorate

    def lookup(self, enum_type: type[Enum], member: Any) -> OptionDefault | None:
        if not isinstance(member, enum_type):
            return None
        return self._declarations.get(enum_type, {}).get(member)

    def clear(self, enum_type: type[Enum] | None = None) -> None:
        """Forget the declarations of *enum_type*, or all of them."""
        if enum_type is None:
            self._declarations.clear()
        else:
            self._declarations.pop(enum_type, None)


# Process-wide registry used by default by every option model
registry = DeclarationRegistry()
option_defaults = registry.declare
