"""Composite typography handler for compact Font(...) strings."""

from typing import Any

from ...schema.tokens import Dimension, Typography
from ..base import CompactContext, TextOptions, TokenTypeHandler
from .font import format_font_family, parse_font_weight
from .pseudo_constructor import constructor_body, parse_pairs

DEFAULT_FAMILY = ("sans-serif",)
DEFAULT_SIZE = 16.0
DEFAULT_WEIGHT = 400
DEFAULT_LINE_HEIGHT = 1.5


def _length(value: str | float | None) -> float | None:
    if value is None:
        return None
    if isinstance(value, float):
        return value
    raise ValueError(f"Expected a number, got {value!r}")


def parse_font_string(raw: str) -> Typography | None:
    """Parse `Font(family: "DM Sans", size: 56, weight: 700, lineHeight: 64)`.

    Missing keys fall back to sans-serif, 16px, 400 and a unitless 1.5 line
    height. A present but non-numeric size, line height or letter spacing
    makes the whole string unparseable.
    """
    body = constructor_body(raw, "Font")
    if body is None:
        return None
    pairs = parse_pairs(body)

    try:
        size = _length(pairs.get("size"))
        line_height = _length(pairs.get("lineHeight"))
        letter_spacing = _length(pairs.get("letterSpacing"))
    except ValueError:
        return None

    weight = DEFAULT_WEIGHT
    if "weight" in pairs:
        parsed = parse_font_weight(pairs["weight"])
        if parsed is None:
            return None
        weight = parsed

    family = pairs.get("family")
    return Typography(
        font_family=(str(family),) if family is not None else DEFAULT_FAMILY,
        font_size=Dimension(size if size is not None else DEFAULT_SIZE, "px"),
        font_weight=weight,
        line_height=(
            Dimension(line_height, "px")
            if line_height is not None
            else DEFAULT_LINE_HEIGHT
        ),
        letter_spacing=(
            Dimension(letter_spacing, "px") if letter_spacing is not None else None
        ),
    )


class TypographyHandler(TokenTypeHandler):
    """Typography styles; Figma exports these only in the compact format."""

    @property
    def type_tag(self) -> str:
        return "typography"

    @property
    def name(self) -> str:
        return "Typography"

    @property
    def priority(self) -> int:
        return 90

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        return context.stripped.startswith("Font(")

    def parse_compact(self, raw: str) -> Typography | None:
        return parse_font_string(raw)

    def to_text(self, value: Typography, options: TextOptions | None = None) -> str:
        options = options or TextOptions()
        line_height = value.line_height
        if not isinstance(line_height, Dimension):
            line_height = f"{line_height:g}"
        parts = [
            f"font-family: {format_font_family(value.font_family)}",
            f"font-size: {value.font_size}",
            f"font-weight: {value.font_weight}",
            f"line-height: {line_height}",
        ]
        if value.letter_spacing is not None:
            parts.append(f"letter-spacing: {value.letter_spacing}")

        if options.dialect == "scss":
            return f"({', '.join(parts)})"
        return "; ".join(parts)

    def value_from_dict(self, data: Any) -> Typography:
        return Typography.from_dict(data)
