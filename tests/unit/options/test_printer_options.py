"""Unit tests for the printer option dataclasses."""

import dataclasses
import logging

import pytest

from latexfmt.exceptions import ValidationError
from latexfmt.options import LayoutOptions, TokenPrinterOptions


@pytest.mark.unit
class TestTokenPrinterOptions:
    """Test TokenPrinterOptions defaults and validation."""

    def test_defaults(self):
        """Test the default widths."""
        options = TokenPrinterOptions()
        assert options.max_width == 60
        assert options.tab_width == 8

    @pytest.mark.parametrize("kwargs", [{"max_width": 0}, {"tab_width": -1}, {"max_width": "60"}, {"max_width": True}])
    def test_invalid_values(self, kwargs):
        """Test that non-positive or non-integer widths are rejected."""
        with pytest.raises(ValueError):
            TokenPrinterOptions(**kwargs)

    def test_frozen(self):
        """Test that options cannot be mutated."""
        options = TokenPrinterOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.max_width = 10

    def test_create_updated(self):
        """Test that create_updated returns a modified copy."""
        options = TokenPrinterOptions()
        updated = options.create_updated(max_width=40)
        assert updated.max_width == 40
        assert options.max_width == 60

    def test_create_updated_validates(self):
        """Test that an updated copy is validated too."""
        with pytest.raises(ValueError):
            TokenPrinterOptions().create_updated(tab_width=0)

    def test_field_help(self):
        """Test that every field carries help text."""
        help_text = TokenPrinterOptions.field_help()
        assert set(help_text) == {"max_width", "tab_width"}
        assert all(help_text.values())


@pytest.mark.unit
class TestLayoutOptions:
    """Test LayoutOptions defaults, validation and mapping conversion."""

    def test_defaults(self):
        """Test the default layout settings."""
        options = LayoutOptions()
        assert options.print_width == 80
        assert options.tab_width == 8
        assert options.use_tabs is True
        assert options.parser == "latex"

    def test_use_tabs_must_be_bool(self):
        """Test that use_tabs only accepts booleans."""
        with pytest.raises(ValueError):
            LayoutOptions(use_tabs="yes")

    def test_from_camel_case_mapping(self):
        """Test the camelCase option names."""
        options = LayoutOptions.from_mapping({"printWidth": 40, "tabWidth": 2, "useTabs": False})
        assert options == LayoutOptions(print_width=40, tab_width=2, use_tabs=False)

    def test_from_snake_case_mapping(self):
        """Test that snake_case names are accepted as well."""
        assert LayoutOptions.from_mapping({"print_width": 40}).print_width == 40

    def test_unknown_key_warns(self, caplog):
        """Test that unknown keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="latexfmt.options.printers"):
            options = LayoutOptions.from_mapping({"semi": True})
        assert options == LayoutOptions()
        assert "semi" in caplog.text

    def test_invalid_value(self):
        """Test that a bad value raises ValidationError with the mapping attached."""
        with pytest.raises(ValidationError) as exc_info:
            LayoutOptions.from_mapping({"printWidth": 0})
        assert exc_info.value.parameter_value == {"printWidth": 0}
        assert isinstance(exc_info.value.original_error, ValueError)
