"""Shadow handler for compact Effect(...) strings and CSS box-shadow text."""

import re
from typing import Any

from ...colors import parse_color, parse_hex, to_rgb
from ...schema.tokens import Color, Dimension, Shadow
from ..base import CompactContext, TextOptions, TokenTypeHandler
from .dimension import is_number, parse_dimension
from .pseudo_constructor import (
    constructor_body,
    parse_pairs,
    split_constructors,
)

DEFAULT_EFFECT_COLOR = Color(0.0, 0.0, 0.0, 0.1)
OFFSET_PATTERN = re.compile(r"offset:\s*\(([^)]+)\)")
COLOR_PATTERN = re.compile(r"color:\s*(#[A-Fa-f0-9]+)")
CSS_COLOR_PATTERN = re.compile(
    r"(#[0-9a-fA-F]{3,8}\b|(?:rgba?|hsla?|oklch)\([^)]*\)|[a-zA-Z]+)"
)


def _px(value: float) -> Dimension:
    return Dimension(value, "px")


def parse_effect_string(raw: str) -> Shadow | None:
    """Parse `Effect(type: DROP_SHADOW, color: #1D293D05, offset: (0, 1), radius: 2)`.

    INNER_SHADOW effects become inset shadows; a missing color defaults to
    black at 10% opacity.
    """
    body = constructor_body(raw, "Effect")
    if body is None:
        return None
    pairs = parse_pairs(body)

    color = DEFAULT_EFFECT_COLOR
    color_match = COLOR_PATTERN.search(body)
    if color_match:
        color = parse_hex(color_match.group(1)) or DEFAULT_EFFECT_COLOR

    offset_x = offset_y = 0.0
    offset_match = OFFSET_PATTERN.search(body)
    if offset_match:
        parts = [p.strip() for p in offset_match.group(1).split(",")]
        try:
            offset_x = float(parts[0]) if parts and parts[0] else 0.0
            offset_y = float(parts[1]) if len(parts) > 1 and parts[1] else 0.0
        except ValueError:
            return None

    blur = pairs.get("radius", 0.0)
    spread = pairs.get("spread")
    if not isinstance(blur, float) or (spread is not None and not isinstance(spread, float)):
        return None

    return Shadow(
        offset_x=_px(offset_x),
        offset_y=_px(offset_y),
        blur=_px(blur),
        color=color,
        spread=_px(spread) if spread is not None else None,
        inset=pairs.get("type") == "INNER_SHADOW",
    )


def _split_layers(raw: str) -> list[str]:
    layers: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(raw):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            layers.append(raw[start:index].strip())
            start = index + 1
    layers.append(raw[start:].strip())
    return [layer for layer in layers if layer]


def parse_css_shadow_layer(raw: str) -> Shadow | None:
    """Parse one box-shadow layer: `[inset] x y [blur [spread]] [color]`."""
    text = raw.strip()
    inset = False
    if re.search(r"\binset\b", text):
        inset = True
        text = re.sub(r"\binset\b", "", text).strip()

    color = Color(0.0, 0.0, 0.0, 1.0)
    lengths_text = text
    for match in CSS_COLOR_PATTERN.finditer(text):
        candidate = parse_color(match.group(1))
        if candidate is not None:
            color = candidate
            lengths_text = (text[: match.start()] + text[match.end() :]).strip()
            break

    lengths = []
    for part in lengths_text.split():
        dimension = parse_dimension(part)
        if dimension is None:
            return None
        lengths.append(dimension)
    if not 2 <= len(lengths) <= 4:
        return None

    return Shadow(
        offset_x=lengths[0],
        offset_y=lengths[1],
        blur=lengths[2] if len(lengths) > 2 else _px(0.0),
        color=color,
        spread=lengths[3] if len(lengths) > 3 else None,
        inset=inset,
    )


def parse_shadow(raw: str) -> Shadow | tuple[Shadow, ...] | None:
    """Parse one or more Effect(...) strings or a CSS box-shadow list.

    Returns:
        A single Shadow, a tuple for multiple layers, or None.
    """
    raw = raw.strip()
    if raw.startswith("Effect("):
        shadows = [parse_effect_string(part) for part in split_constructors(raw, "Effect")]
    else:
        shadows = [parse_css_shadow_layer(layer) for layer in _split_layers(raw)]

    if not shadows or any(shadow is None for shadow in shadows):
        return None
    if len(shadows) == 1:
        return shadows[0]
    return tuple(shadows)


def shadow_to_text(shadow: Shadow) -> str:
    """Render one layer as `[inset] x y blur [spread] rgb(...)`."""
    parts = []
    if shadow.inset:
        parts.append("inset")
    parts.extend([str(shadow.offset_x), str(shadow.offset_y), str(shadow.blur)])
    if shadow.spread is not None:
        parts.append(str(shadow.spread))
    parts.append(to_rgb(shadow.color))
    return " ".join(parts)


class ShadowHandler(TokenTypeHandler):
    """Drop and inner shadows, single or layered."""

    @property
    def type_tag(self) -> str:
        return "shadow"

    @property
    def name(self) -> str:
        return "Shadow"

    @property
    def priority(self) -> int:
        return 85

    @property
    def default_namespace(self) -> str | None:
        return "shadow"

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        value = context.stripped
        if value.startswith("Effect("):
            return True
        if not context.path_has("shadow", "elevation"):
            return False
        # Scalars under a shadow path (opacity, a hex color) keep their own type
        return not (is_number(value) or value.startswith("#"))

    def parse_compact(self, raw: str) -> Shadow | tuple[Shadow, ...] | None:
        return parse_shadow(raw)

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        if isinstance(value, tuple | list):
            return ", ".join(shadow_to_text(shadow) for shadow in value)
        return shadow_to_text(value)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("shadows", "shadow", "elevation"):
            return "shadow"
        return None

    def value_to_dict(self, value: Any) -> Any:
        if isinstance(value, tuple | list):
            return [shadow.to_dict() for shadow in value]
        return value.to_dict()

    def value_from_dict(self, data: Any) -> Shadow | tuple[Shadow, ...]:
        if isinstance(data, list):
            return tuple(Shadow.from_dict(item) for item in data)
        return Shadow.from_dict(data)
