"""Enum-keyed option records with typed accessors.

An option model mixes :class:`GenericOption` into a mapped class and names
the enum holding its keys::

    class ShopSetting(Base, IntegerIdMixin, GenericOption):
        __tablename__ = "shop_settings"
        __option_enum__ = ShopOption

        shop_id: Mapped[int] = mapped_column(ForeignKey("shops.id"))

Each row stores one key (``opt_key``) and the raw string of its value
(``opt_value``). Typed accessors decode the raw string, fall back to the
default declared for the key and refuse accessors that disagree with the
declared type.
"""

from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, ClassVar, Self, TypeVar

from sqlalchemy import Select, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from generic_options.codec import decode_key, encode_key
from generic_options.coercion import SCALARS, decode_list, encode_list
from generic_options.config import get_settings
from generic_options.constants import KEY_COLUMN, KEY_MAX_LENGTH, VALUE_COLUMN
from generic_options.declarations import (
    DeclarationReader,
    OptionDefault,
    OptionType,
    TypeDescriptors,
    registry,
)
from generic_options.exceptions import BadTypeError, BadValueError
from generic_options.finders import AsyncEntityFinder, EntityFinder, QueryFilter
from generic_options.utils.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)
M = TypeVar("M")
R = TypeVar("R")


class GenericOption:
    """Mixin for models storing one enum-keyed option per row."""

    # Enum whose members are the keys of this model
    __option_enum__: ClassVar[type[Enum]]
    # Where defaults and declared types are looked up
    __option_declarations__: ClassVar[DeclarationReader] = registry

    key: Mapped[str] = mapped_column(KEY_COLUMN, String(KEY_MAX_LENGTH), nullable=False)
    value: Mapped[str | None] = mapped_column(VALUE_COLUMN, Text, nullable=True)

    @classmethod
    def for_key(cls, key: Enum, **kwargs: Any) -> Self:
        """Build a new, unsaved record for *key*."""
        return cls(key=cls._encode_own_key(key), **kwargs)

    @classmethod
    def where_key(cls, query: Select, key: Enum) -> Select:
        """Narrow *query* to the rows holding *key*."""
        return query.where(cls.key == cls._encode_own_key(key))

    @classmethod
    def _encode_own_key(cls, key: Enum) -> str:
        if not isinstance(key, cls.__option_enum__):
            raise TypeError(
                f"{cls.__name__} keys are {cls.__option_enum__.__qualname__} members, "
                f"got {key!r}"
            )
        return encode_key(key)

    @validates("key")
    def _validate_key(self, _attr: str, key: str) -> str:
        if key is not None and len(key) > KEY_MAX_LENGTH:
            raise ValueError(f"Option key {key!r} is longer than {KEY_MAX_LENGTH} characters")
        return key

    # ------------------------------------------------------------------
    # Raw access, no checks
    # ------------------------------------------------------------------

    @property
    def raw_key(self) -> str:
        return self.key

    @raw_key.setter
    def raw_key(self, raw_key: str) -> None:
        self.key = raw_key

    @property
    def raw_value(self) -> str | None:
        return self.value

    @raw_value.setter
    def raw_value(self, raw_value: str | None) -> None:
        self.value = raw_value

    @property
    def key_enum(self) -> Enum:
        """The key as a member of ``__option_enum__``.

        Raises:
            NoSuchKeyError: If the stored key matches no member.
        """
        return decode_key(self.__option_enum__, self.key)

    @key_enum.setter
    def key_enum(self, key: Enum) -> None:
        self.key = self._encode_own_key(key)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def get_value_as_string(self) -> str:
        return self._get_scalar(OptionType.STRING)

    def set_value_as_string(self, value: str | None) -> None:
        self._set_scalar(OptionType.STRING, value)

    def get_value_as_boolean(self) -> bool:
        """Read the value as a boolean.

        Only ``"true"`` (in any case) reads as ``True``. Any other string,
        including ``"yes"`` or ``"1"``, reads as ``False``.
        """
        return self._get_scalar(OptionType.BOOLEAN)

    def set_value_as_boolean(self, value: bool | None) -> None:
        self._set_scalar(OptionType.BOOLEAN, value)

    def get_value_as_integer(self) -> int:
        return self._get_scalar(OptionType.INTEGER)

    def set_value_as_integer(self, value: int | None) -> None:
        self._set_scalar(OptionType.INTEGER, value)

    def get_value_as_long(self) -> int:
        return self._get_scalar(OptionType.LONG)

    def set_value_as_long(self, value: int | None) -> None:
        self._set_scalar(OptionType.LONG, value)

    def _get_scalar(self, option_type: OptionType) -> Any:
        kind = SCALARS[option_type]
        return self._guarded_get(
            lambda declaration: self._resolve(
                kind.parse, declaration, lambda: kind.zero, _label(option_type)
            ),
            option_type,
        )

    def _set_scalar(self, option_type: OptionType, value: Any) -> None:
        kind = SCALARS[option_type]
        self._guarded_set(
            lambda _declaration: self._store(kind.format, value, _label(option_type)),
            option_type,
        )

    # ------------------------------------------------------------------
    # Lists (JSON arrays)
    # ------------------------------------------------------------------

    def get_value_as_string_list(self) -> list[str]:
        return self.get_value_as_list(OptionType.STRING)

    def set_value_as_string_list(self, values: Iterable[str] | None) -> None:
        self.set_value_as_list(OptionType.STRING, values)

    def get_value_as_boolean_list(self) -> list[bool]:
        return self.get_value_as_list(OptionType.BOOLEAN)

    def set_value_as_boolean_list(self, values: Iterable[bool] | None) -> None:
        self.set_value_as_list(OptionType.BOOLEAN, values)

    def get_value_as_integer_list(self) -> list[int]:
        return self.get_value_as_list(OptionType.INTEGER)

    def set_value_as_integer_list(self, values: Iterable[int] | None) -> None:
        self.set_value_as_list(OptionType.INTEGER, values)

    def get_value_as_long_list(self) -> list[int]:
        return self.get_value_as_list(OptionType.LONG)

    def set_value_as_long_list(self, values: Iterable[int] | None) -> None:
        self.set_value_as_list(OptionType.LONG, values)

    def get_value_as_list(self, element: Any) -> list[Any]:
        """Decode the JSON array stored for this key.

        *element* is an ``OptionType`` scalar or any type pydantic can
        validate, such as a ``BaseModel`` subclass.
        """
        label = f"List<{_label(element)}>"
        return self._guarded_get(
            lambda declaration: self._resolve(
                lambda text: decode_list(element, text), declaration, list, label
            ),
            OptionType.LIST,
            element,
        )

    def set_value_as_list(self, element: Any, values: Iterable[Any] | None) -> None:
        label = f"List<{_label(element)}>"
        self._guarded_set(
            lambda _declaration: self._store(
                lambda items: encode_list(element, items), values, label
            ),
            OptionType.LIST,
            element,
        )

    # ------------------------------------------------------------------
    # Enums
    # ------------------------------------------------------------------

    def get_value_as_enum(self, enum_type: type[E]) -> E | None:
        """Decode the value as a member of *enum_type*.

        Raises:
            NoSuchKeyError: If the stored or default string names no member.
        """
        return self._guarded_get(
            lambda declaration: self._resolve(
                lambda text: decode_key(enum_type, text),
                declaration,
                lambda: None,
                enum_type.__name__,
            ),
            enum_type,
        )

    def set_value_as_enum(self, enum_type: type[E], value: E | None) -> None:
        def _format(member: Any) -> str:
            if not isinstance(member, enum_type):
                raise TypeError(f"expected a {enum_type.__name__}, got {member!r}")
            return encode_key(member)

        self._guarded_set(
            lambda _declaration: self._store(_format, value, enum_type.__name__),
            enum_type,
        )

    # ------------------------------------------------------------------
    # References to other stored entities
    # ------------------------------------------------------------------

    def get_value_as_model(
        self,
        entity_type: type[M],
        finder: EntityFinder,
        key_parser: Callable[[str], Any],
        id_field: str,
        extra_filter: QueryFilter | None = None,
    ) -> M | None:
        """Load the entity whose *id_field* equals the stored id.

        The stored value, or the declared default when the stored value is
        empty, is turned into an id by *key_parser*. An empty string or a
        ``None`` id resolves to ``None`` without querying.
        """

        def _decode(declaration: OptionDefault | None) -> M | None:
            entity_id = self._entity_id(declaration, key_parser)
            if entity_id is None:
                return None
            return finder.find_one(entity_type, id_field, entity_id, extra_filter)

        return self._guarded_get(_decode, entity_type)

    async def aget_value_as_model(
        self,
        entity_type: type[M],
        finder: AsyncEntityFinder,
        key_parser: Callable[[str], Any],
        id_field: str,
        extra_filter: QueryFilter | None = None,
    ) -> M | None:
        """Async variant of :meth:`get_value_as_model`."""
        entity_id = self._guarded_get(
            lambda declaration: self._entity_id(declaration, key_parser), entity_type
        )
        if entity_id is None:
            return None
        return await finder.find_one(entity_type, id_field, entity_id, extra_filter)

    def set_value_as_model(
        self, entity_type: type[M], entity: M | None, key_to_str: Callable[[M], str]
    ) -> None:
        def _format(item: Any) -> str:
            if not isinstance(item, entity_type):
                raise TypeError(f"expected a {entity_type.__name__}, got {item!r}")
            return key_to_str(item)

        self._guarded_set(
            lambda _declaration: self._store(_format, entity, entity_type.__name__),
            entity_type,
        )

    def _entity_id(
        self, declaration: OptionDefault | None, key_parser: Callable[[str], Any]
    ) -> Any:
        if self.value:
            lookup = self.value
        elif declaration is not None:
            lookup = declaration.value
        else:
            lookup = None
        if not lookup:
            return None
        return key_parser(lookup)

    # ------------------------------------------------------------------
    # Type gate and shared decode/encode policy
    # ------------------------------------------------------------------

    def _declaration(self) -> OptionDefault | None:
        return self.__option_declarations__.lookup(self.__option_enum__, self.key_enum)

    def _guarded_get(
        self, decode: Callable[[OptionDefault | None], R], *types: Any
    ) -> R:
        return decode(self._check_type(types))

    def _guarded_set(self, encode: Callable[[OptionDefault | None], None], *types: Any) -> None:
        encode(self._check_type(types))

    def _check_type(self, types: TypeDescriptors) -> OptionDefault | None:
        declaration = self._declaration()
        if declaration is not None and declaration.types != types:
            logger.debug(
                "option_type_rejected",
                option_type=self._option_type_name(),
                key=self.key,
                expected=[_label(t) for t in types],
                declared=[_label(t) for t in declaration.types],
            )
            raise BadTypeError(self._option_type_name(), self.key, types, declaration.types)
        return declaration

    def _resolve(
        self,
        parse: Callable[[str], R],
        declaration: OptionDefault | None,
        empty: Callable[[], R],
        label: str,
    ) -> R:
        """Parse the stored value, or the declared default in its place."""
        if self.value is not None:
            try:
                return parse(self.value)
            except ValueError as exc:
                if declaration is None:
                    raise BadValueError(
                        self._option_type_name(),
                        self.key,
                        self.value,
                        f"Error occurred while parsing a {label} option value",
                    ) from exc
                if get_settings().log_default_fallbacks:
                    logger.warning(
                        "option_value_replaced_by_default",
                        option_type=self._option_type_name(),
                        key=self.key,
                        value=self.value,
                        default=declaration.value,
                        error=str(exc),
                    )
        elif declaration is None:
            return empty()

        try:
            return parse(declaration.value)
        except ValueError as exc:
            logger.debug(
                "option_default_unparsable",
                option_type=self._option_type_name(),
                key=self.key,
                default=declaration.value,
            )
            raise BadValueError(
                self._option_type_name(),
                self.key,
                declaration.value,
                f"Error occurred while parsing a {label} default option value",
            ) from exc

    def _store(self, format_value: Callable[[Any], str], value: Any, label: str) -> None:
        """Encode *value* into the raw column; ``None`` clears it."""
        if value is None:
            self.value = None
            return
        try:
            self.value = format_value(value)
        except (TypeError, ValueError) as exc:
            raise BadValueError(
                self._option_type_name(),
                self.key,
                value,
                f"Error occurred while mapping {label} to a string",
            ) from exc

    @classmethod
    def _option_type_name(cls) -> str:
        enum_type = cls.__option_enum__
        return f"{enum_type.__module__}.{enum_type.__qualname__}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key}={self.value!r}>"


def _label(descriptor: Any) -> str:
    if isinstance(descriptor, OptionType):
        return descriptor.name.capitalize()
    return getattr(descriptor, "__name__", str(descriptor))
