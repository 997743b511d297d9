"""Unit tests for key declarations and their registry."""

from enum import Enum, StrEnum

import pytest

from generic_options.declarations import (
    DeclarationRegistry,
    OptionDefault,
    OptionType,
    registry,
)
from tests.helpers.sample_models import Color, KioskOption, ShopOption, kiosk_declarations


class Mode(StrEnum):
    FAST = "fast"
    SLOW = "slow"


@pytest.fixture()
def local_registry():
    return DeclarationRegistry()


class TestOptionDefault:
    """Tests for the OptionDefault record."""

    def test_defaults_to_empty_string(self):
        declaration = OptionDefault()
        assert declaration.value == ""
        assert declaration.types == (OptionType.STRING,)

    def test_types_are_stored_as_tuple(self):
        declaration = OptionDefault("[]", [OptionType.LIST, OptionType.LONG])
        assert declaration.types == (OptionType.LIST, OptionType.LONG)

    def test_is_immutable(self):
        declaration = OptionDefault("1")
        with pytest.raises(AttributeError):
            declaration.value = "2"


class TestDeclarationRegistry:
    """Tests for DeclarationRegistry."""

    def test_register_by_member(self, local_registry):
        local_registry.register(Mode, {Mode.FAST: OptionDefault("x")})
        assert local_registry.lookup(Mode, Mode.FAST) == OptionDefault("x")

    def test_register_by_name(self, local_registry):
        local_registry.register(Mode, {"SLOW": OptionDefault("y")})
        assert local_registry.lookup(Mode, Mode.SLOW) == OptionDefault("y")

    def test_unknown_name_rejected(self, local_registry):
        with pytest.raises(ValueError, match="MEDIUM"):
            local_registry.register(Mode, {"MEDIUM": OptionDefault()})

    def test_member_of_other_enum_rejected(self, local_registry):
        with pytest.raises(ValueError):
            local_registry.register(Mode, {Color.RED: OptionDefault()})

    def test_undeclared_member_is_absent(self, local_registry):
        local_registry.register(Mode, {Mode.FAST: OptionDefault()})
        assert local_registry.lookup(Mode, Mode.SLOW) is None

    def test_unknown_enum_is_absent(self, local_registry):
        assert local_registry.lookup(Mode, Mode.FAST) is None

    def test_foreign_member_is_absent(self, local_registry):
        local_registry.register(Mode, {Mode.FAST: OptionDefault()})
        assert local_registry.lookup(Mode, Color.RED) is None

    def test_decorator_returns_enum(self, local_registry):
        @local_registry.declare({"ON": OptionDefault("1", (OptionType.INTEGER,))})
        class Switch(Enum):
            ON = 1
            OFF = 0

        assert Switch.ON.value == 1
        assert local_registry.lookup(Switch, Switch.ON).types == (OptionType.INTEGER,)

    def test_clear_one_enum(self, local_registry):
        local_registry.register(Mode, {Mode.FAST: OptionDefault()})
        local_registry.clear(Mode)
        assert local_registry.lookup(Mode, Mode.FAST) is None

    def test_clear_all(self, local_registry):
        local_registry.register(Mode, {Mode.FAST: OptionDefault()})
        local_registry.clear()
        assert local_registry.lookup(Mode, Mode.FAST) is None


class TestModuleRegistry:
    """Declarations made with @option_defaults."""

    def test_shop_option_declarations(self):
        declaration = registry.lookup(ShopOption, ShopOption.PAGE_SIZE)
        assert declaration == OptionDefault("5", (OptionType.INTEGER,))

    def test_undeclared_shop_option(self):
        assert registry.lookup(ShopOption, ShopOption.FREEFORM) is None

    def test_private_registry_is_separate(self):
        assert registry.lookup(KioskOption, KioskOption.VOLUME) is None
        assert kiosk_declarations.lookup(KioskOption, KioskOption.VOLUME).value == "7"
