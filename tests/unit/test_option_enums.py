"""Unit tests for the enum accessors of GenericOption."""

import pytest

from generic_options.exceptions import BadTypeError, BadValueError, NoSuchKeyError
from tests.helpers.sample_models import Color, ShopOption, Size, make_option


class TestEnumAccessors:
    """get/set_value_as_enum."""

    def test_absent_uses_declared_default(self):
        assert make_option(ShopOption.THEME).get_value_as_enum(Color) is Color.GREEN

    def test_absent_without_declaration_is_none(self):
        assert make_option(ShopOption.FREEFORM).get_value_as_enum(Color) is None

    def test_stored_alias(self):
        assert make_option(ShopOption.THEME, "red").get_value_as_enum(Color) is Color.RED

    def test_stored_member_name(self):
        assert make_option(ShopOption.THEME, "BLUE").get_value_as_enum(Color) is Color.BLUE

    def test_unknown_stored_value_raises(self):
        with pytest.raises(NoSuchKeyError):
            make_option(ShopOption.THEME, "purple").get_value_as_enum(Color)

    def test_plain_enum_default_by_name(self):
        assert make_option(ShopOption.SIZE).get_value_as_enum(Size) is Size.LARGE

    def test_set_aliased(self):
        option = make_option(ShopOption.THEME)
        option.set_value_as_enum(Color, Color.RED)
        assert option.raw_value == "red"

    def test_set_plain(self):
        option = make_option(ShopOption.SIZE)
        option.set_value_as_enum(Size, Size.SMALL)
        assert option.raw_value == "SMALL"
        assert option.get_value_as_enum(Size) is Size.SMALL

    def test_set_none_clears(self):
        option = make_option(ShopOption.THEME, "red")
        option.set_value_as_enum(Color, None)
        assert option.raw_value is None

    def test_set_member_of_other_enum(self):
        with pytest.raises(BadValueError):
            make_option(ShopOption.FREEFORM).set_value_as_enum(Color, Size.SMALL)

    def test_type_gate(self):
        with pytest.raises(BadTypeError):
            make_option(ShopOption.THEME, "red").get_value_as_enum(Size)
        with pytest.raises(BadTypeError):
            make_option(ShopOption.THEME).set_value_as_enum(Size, Size.SMALL)
