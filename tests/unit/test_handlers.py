"""Tests for the built-in token type handlers.

Each handler is exercised through the registry the way parsers use it:
detect a type from a value and path, parse it, render it back to text.
"""

import pytest

from token_normalizer.registry.base import CompactContext, TextOptions
from token_normalizer.registry.handlers.animation import parse_animation, parse_keyframes
from token_normalizer.registry.handlers.border import parse_border
from token_normalizer.registry.handlers.dimension import parse_dimension
from token_normalizer.registry.handlers.font import (
    parse_font_weight,
    split_font_family,
)
from token_normalizer.registry.handlers.gradient import parse_figma_gradient, parse_gradient
from token_normalizer.registry.handlers.pseudo_constructor import (
    constructor_body,
    parse_pairs,
    split_constructors,
)
from token_normalizer.registry.handlers.shadow import parse_effect_string, parse_shadow
from token_normalizer.registry.handlers.timing import parse_duration, parse_transition
from token_normalizer.registry.handlers.typography import parse_font_string
from token_normalizer.schema.tokens import (
    Color,
    CubicBezier,
    Dimension,
    Duration,
    Shadow,
)


def detect(registry, path: str, value: str) -> str:
    return registry.detect_compact(CompactContext(path=path, value=value))


class TestCompactDetection:
    """Detection precedence for bare strings."""

    def test_weight_with_typography_hint(self, registry):
        """A bare 700 is a font weight under a typography path."""
        assert detect(registry, "Typography/Heading/Font Weight", "700") == "fontWeight"

    def test_weight_without_hint_is_number(self, registry):
        """The same 700 elsewhere is a plain number."""
        assert detect(registry, "Misc/Count", "700") == "number"

    def test_bare_number_with_size_hint_is_dimension(self, registry):
        assert detect(registry, "Spacing/Gap/Small", "8") == "dimension"
        assert detect(registry, "Radius/Medium", "4") == "dimension"

    def test_line_height_stays_unitless(self, registry):
        assert detect(registry, "Typography/Line-Height/Body", "1.5") != "dimension"

    def test_number_with_unit_is_dimension_anywhere(self, registry):
        assert detect(registry, "Misc/Offset", "1.5rem") == "dimension"

    def test_colors(self, registry):
        assert detect(registry, "Colors/Primary", "#3880f6") == "color"
        assert detect(registry, "Colors/Overlay", "rgba(0, 0, 0, 0.5)") == "color"

    def test_named_color_under_font_path_is_not_a_color(self, registry):
        """"black" is also a weight keyword."""
        assert detect(registry, "Typography/Heading/Weight", "black") == "fontWeight"
        assert detect(registry, "Colors/Text", "black") == "color"

    def test_constructors(self, registry):
        assert detect(registry, "Typography/Body", 'Font(family: "Inter", size: 16)') == "typography"
        assert detect(registry, "Effects/Card", "Effect(type: DROP_SHADOW, radius: 2)") == "shadow"

    def test_gradient_over_shadow_path(self, registry):
        value = "linear-gradient(90deg, #fff 0%, #000 100%)"
        assert detect(registry, "Elevation/Fade", value) == "gradient"

    def test_timing_values(self, registry):
        assert detect(registry, "Motion/Fast", "150ms") == "duration"
        assert detect(registry, "Motion/Ease", "cubic-bezier(0.4, 0, 0.2, 1)") == "cubicBezier"
        assert detect(registry, "Transition/Fade", "opacity 200ms ease-in") == "transition"

    def test_border_and_boolean(self, registry):
        assert detect(registry, "Border/Default", "1px solid #e5e7eb") == "border"
        assert detect(registry, "Border/Style", "solid") == "string"
        assert detect(registry, "Flags/Enabled", "true") == "boolean"

    def test_font_family(self, registry):
        assert detect(registry, "Font/Family/Sans", "Inter") == "fontFamily"


class TestScalarParsing:
    """Tests for the scalar parse helpers."""

    def test_dimension(self):
        assert parse_dimension("16px") == Dimension(16.0, "px")
        assert parse_dimension("1.5rem") == Dimension(1.5, "rem")
        assert parse_dimension("16") == Dimension(16.0, "px")
        assert parse_dimension("50%") == Dimension(50.0, "%")
        assert parse_dimension("3ch") is None

    def test_duration(self):
        assert parse_duration("200ms") == Duration(200.0, "ms")
        assert parse_duration("0.3s") == Duration(0.3, "s")
        assert parse_duration("fast") is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("700", 700),
            ("bold", 700),
            ("Semi Bold", 600),
            ("extra-light", 200),
            (450, 400),
            ("heavy", 900),
        ],
    )
    def test_font_weight(self, raw, expected):
        assert parse_font_weight(raw) == expected

    def test_font_weight_rejects_garbage(self):
        assert parse_font_weight("chunky") is None
        assert parse_font_weight(True) is None

    def test_font_family_stack(self):
        families = split_font_family('"Inter", system-ui, sans-serif')
        assert families == ("Inter", "system-ui", "sans-serif")

    def test_font_family_handler_renders_quoted_names(self, registry):
        handler = registry.get("fontFamily")
        text = handler.to_text(("DM Sans", "sans-serif"))
        assert "DM Sans" in text
        assert text.endswith("sans-serif")


class TestPseudoConstructors:
    """Tests for the Font(...) / Effect(...) tokenizer."""

    def test_body_and_pairs(self):
        body = constructor_body('Font(family: "DM Sans", size: 56)', "Font")
        assert body == 'family: "DM Sans", size: 56'
        assert parse_pairs(body) == {"family": "DM Sans", "size": 56.0}

    def test_wrong_constructor(self):
        assert constructor_body("Effect(radius: 2)", "Font") is None

    def test_split_constructors(self):
        raw = "Effect(type: DROP_SHADOW, radius: 2), Effect(type: INNER_SHADOW, radius: 4)"
        assert len(split_constructors(raw, "Effect")) == 2


class TestCompositeParsing:
    """Tests for typography, shadow, gradient, border and motion values."""

    def test_font_string(self):
        typography = parse_font_string(
            'Font(family: "DM Sans", size: 56, weight: 700, lineHeight: 64)'
        )
        assert typography.font_family == ("DM Sans",)
        assert typography.font_size == Dimension(56.0, "px")
        assert typography.font_weight == 700
        assert typography.line_height == Dimension(64.0, "px")

    def test_font_string_defaults(self):
        typography = parse_font_string("Font(size: 14)")
        assert typography.font_family == ("sans-serif",)
        assert typography.font_weight == 400
        assert typography.line_height == 1.5

    def test_font_string_bad_size(self):
        assert parse_font_string("Font(size: huge)") is None

    def test_effect_string(self):
        shadow = parse_effect_string(
            "Effect(type: DROP_SHADOW, color: #1D293D05, offset: (0, 1), radius: 2)"
        )
        assert shadow.offset_x == Dimension(0.0, "px")
        assert shadow.offset_y == Dimension(1.0, "px")
        assert shadow.blur == Dimension(2.0, "px")
        assert shadow.color.a == pytest.approx(5 / 255)
        assert shadow.inset is False

    def test_inner_shadow_and_default_color(self):
        shadow = parse_effect_string("Effect(type: INNER_SHADOW, radius: 4)")
        assert shadow.inset is True
        assert shadow.color == Color(0.0, 0.0, 0.0, 0.1)

    def test_css_box_shadow_layers(self):
        shadows = parse_shadow("0 1px 2px rgba(0, 0, 0, 0.05), inset 0 0 0 1px #000")
        assert isinstance(shadows, tuple)
        assert len(shadows) == 2
        assert shadows[1].inset is True
        assert shadows[1].spread == Dimension(1.0, "px")

    def test_single_css_shadow(self):
        shadow = parse_shadow("0 4px 6px red")
        assert isinstance(shadow, Shadow)
        assert shadow.color == Color(1.0, 0.0, 0.0, 1.0)

    def test_linear_gradient(self):
        gradient = parse_gradient("linear-gradient(90deg, #ffffff 0%, #000000 100%)")
        assert gradient.type == "linear"
        assert gradient.angle == 90.0
        assert [stop.position for stop in gradient.stops] == [0.0, 1.0]

    def test_gradient_direction_keyword(self):
        gradient = parse_gradient("linear-gradient(to right, red, blue)")
        assert gradient.angle == 90.0
        assert [stop.position for stop in gradient.stops] == [0.0, 1.0]

    def test_gradient_skips_malformed_stop(self):
        gradient = parse_gradient("linear-gradient(90deg, hsl(1.2.3, 50%, 50%) 0%, #fff 100%)")
        assert [stop.position for stop in gradient.stops] == [1.0]
        assert gradient.stops[0].color == Color(1.0, 1.0, 1.0, 1.0)

    def test_figma_gradient(self):
        gradient = parse_figma_gradient(
            {
                "type": "GRADIENT_LINEAR",
                "gradientStops": [
                    {"color": {"r": 1, "g": 1, "b": 1, "a": 1}, "position": 0},
                    {"color": {"r": 0, "g": 0, "b": 0, "a": 1}, "position": 1},
                ],
            }
        )
        assert gradient.type == "linear"
        assert len(gradient.stops) == 2

    def test_border(self):
        border = parse_border("1px solid #e5e7eb")
        assert border.width == Dimension(1.0, "px")
        assert border.style == "solid"
        assert parse_border("1px solid notacolor") is None

    def test_transition(self):
        transition = parse_transition("opacity 200ms cubic-bezier(0.4, 0, 0.2, 1) 50ms")
        assert transition.duration == Duration(200.0, "ms")
        assert transition.timing_function == CubicBezier(0.4, 0.0, 0.2, 1.0)
        assert transition.delay == Duration(50.0, "ms")

    def test_animation(self):
        animation = parse_animation("fade-in 300ms ease-in-out 100ms infinite alternate both")
        assert animation.name == "fade-in"
        assert animation.duration == Duration(300.0, "ms")
        assert animation.delay == Duration(100.0, "ms")
        assert animation.timing_function == "ease-in-out"
        assert animation.iteration_count == "infinite"
        assert animation.direction == "alternate"
        assert animation.fill_mode == "both"

    def test_keyframes(self):
        keyframes = parse_keyframes("from: opacity 0; to: opacity 1")
        assert [step.selector for step in keyframes.steps] == ["from", "to"]
        assert keyframes.steps[1].properties == (("opacity", 1.0),)


class TestToText:
    """Tests for rendering values as CSS text."""

    def test_dimension_and_duration(self, registry):
        assert registry.to_text("dimension", Dimension(16.0, "px")) == "16px"
        assert registry.to_text("duration", Duration(0.5, "s")) == "0.5s"

    def test_shadow(self, registry):
        shadow = parse_shadow("0 4px 6px red")
        assert registry.to_text("shadow", shadow) == "0px 4px 6px rgb(255, 0, 0)"

    def test_typography_dialects(self, registry):
        typography = parse_font_string("Font(family: Inter, size: 16, weight: 400)")
        css = registry.to_text("typography", typography)
        scss = registry.to_text("typography", typography, TextOptions(dialect="scss"))
        assert "font-size: 16px" in css
        assert scss.startswith("(") and scss.endswith(")")

    def test_boolean_and_number(self, registry):
        assert registry.to_text("boolean", True) == "true"
        assert registry.to_text("number", 2.0) == "2"


class TestNativeParsing:
    """Tests for Figma variable values that are not well formed."""

    @pytest.mark.parametrize(
        "value",
        [
            {"r": "x", "g": 0, "b": 0},
            {"r": None, "g": 0, "b": 0},
            {"r": 1, "g": 0, "b": 0, "a": [1]},
        ],
    )
    def test_bad_color_channels(self, registry, value):
        assert registry.parse_native("color", value) is None

    def test_numeric_strings_are_accepted(self, registry):
        assert registry.parse_native("color", {"r": "1", "g": 0, "b": 0}) == Color(1.0, 0.0, 0.0, 1.0)
