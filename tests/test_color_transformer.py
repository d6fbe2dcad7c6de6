"""
Tests for ColorTransformer.to_rgba and selection color derivation
"""

import math

import pytest

from managers.color_manager import ColorManager
from models.color import RGBA, ColorSpec
from models.errors import ConfigError, InvalidColorSpec, InvalidOpacity
from services.color_transformer import DEFAULT_OPACITY, validate_opacity


class TestToRgba:

    def test_hex_with_opacity(self, transformer):
        rgba = transformer.to_rgba("#ffffff", 0.7)

        assert rgba == RGBA(255, 255, 255, 0.7)
        assert rgba.to_css() == "rgba(255, 255, 255, 0.7)"

    def test_named_color_full_opacity(self, transformer):
        rgba = transformer.to_rgba("black", 1.0)

        assert rgba == RGBA(0, 0, 0, 1.0)
        assert rgba.to_css() == "rgba(0, 0, 0, 1)"

    def test_default_opacity(self, transformer):
        assert DEFAULT_OPACITY == 0.7
        assert transformer.to_rgba("white").a == 0.7

    def test_names_are_case_insensitive(self, transformer):
        assert transformer.to_rgba("RebeccaPurple", 0.5).rgb == (102, 51, 153)
        assert transformer.to_rgba("  DodgerBlue ", 0.5).rgb == (30, 144, 255)

    def test_transparent_resolves_to_black(self, transformer):
        assert transformer.to_rgba("transparent", 0.3) == RGBA(0, 0, 0, 0.3)

    def test_functional_and_triples(self, transformer):
        assert transformer.to_rgba("rgb(30, 144, 255)", 1.0).rgb == (30, 144, 255)
        assert transformer.to_rgba("hsl(0, 100%, 50%)", 1.0).rgb == (255, 0, 0)
        assert transformer.to_rgba((30, 144, 255), 0.2) == RGBA(30, 144, 255, 0.2)
        assert transformer.to_rgba([0, 0, 0], 0.0) == RGBA(0, 0, 0, 0.0)

    def test_rgba_input_takes_new_opacity(self, transformer):
        assert transformer.to_rgba(RGBA(1, 2, 3, 0.2), 0.9) == RGBA(1, 2, 3, 0.9)

    @pytest.mark.parametrize("color", [RGBA(300, -5, 0), RGBA(0, 0, 256, 1.0)])
    def test_out_of_range_rgba_input_rejected(self, transformer, color):
        with pytest.raises(InvalidColorSpec):
            transformer.to_rgba(color, 0.5)

    def test_hex_alpha_is_ignored(self, transformer):
        assert transformer.to_rgba("#ff000000", 0.7) == RGBA(255, 0, 0, 0.7)

    @pytest.mark.parametrize("opacity", [0, 0.0, 1, 1.0])
    def test_opacity_bounds_accepted(self, transformer, opacity):
        assert transformer.to_rgba("red", opacity).a == float(opacity)

    @pytest.mark.parametrize("opacity", [-0.1, 1.5, math.nan, math.inf, True, "0.5", None])
    def test_invalid_opacity(self, transformer, opacity):
        with pytest.raises(InvalidOpacity):
            transformer.to_rgba("red", opacity)

    @pytest.mark.parametrize("color", ["notacolor", "", "   ", "#12", 42, None, (1, 2), {"r": 1}])
    def test_invalid_color(self, transformer, color):
        with pytest.raises(InvalidColorSpec) as info:
            transformer.to_rgba(color, 0.5)
        assert info.value.code == "INVALID_COLOR_SPEC"

    def test_opacity_checked_before_color(self, transformer):
        with pytest.raises(InvalidOpacity):
            transformer.to_rgba("notacolor", 2.0)

    def test_invalid_opacity_is_value_error(self):
        with pytest.raises(ValueError):
            validate_opacity(3)

    def test_pure_and_deterministic(self, transformer):
        triple = [10, 20, 30]

        first = transformer.to_rgba(triple, 0.4)
        second = transformer.to_rgba(triple, 0.4)

        assert first == second
        assert hash(first) == hash(second)
        assert triple == [10, 20, 30]

    def test_transform_color_spec(self, transformer):
        assert transformer.transform(ColorSpec("red")) == RGBA(255, 0, 0, 0.7)
        assert transformer.transform(ColorSpec("#00f", 0.25)) == RGBA(0, 0, 255, 0.25)


class TestSelectionColors:

    def test_inverted_pair(self, transformer):
        selection = transformer.selection_colors("black", "white")

        assert selection.background == RGBA(0, 0, 0, 0.7)
        assert selection.foreground == RGBA(255, 255, 255, 1.0)

    def test_css_rule(self, transformer):
        selection = transformer.selection_colors("#1e90ff", "white")

        assert selection.to_css_rule() == (
            ".inverted-selection::selection {\n"
            "  background: rgba(30, 144, 255, 0.7) !important;\n"
            "  color: rgba(255, 255, 255, 1) !important;\n"
            "}"
        )

    def test_invalid_theme_color(self, transformer):
        with pytest.raises(InvalidColorSpec):
            transformer.selection_colors("notacolor", "white")


class TestColorManager:

    def test_full_css_table(self, color_manager):
        assert len(color_manager.named_colors) == 149
        assert color_manager.get_named_rgb("Gold") == (255, 215, 0)

    def test_unknown_name(self, color_manager):
        assert not color_manager.has_name("blurple")
        with pytest.raises(KeyError):
            color_manager.get_named_rgb("blurple")

    @pytest.mark.parametrize("rgb", [[0, 0], [0, 0, 300], "red", [0.5, 0, 0]])
    def test_rejects_bad_table(self, rgb):
        with pytest.raises(ConfigError):
            ColorManager({"named": {"bad": rgb}})
