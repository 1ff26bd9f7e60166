"""Color token handler."""

from typing import Any

from ...colors import COLOR_KEYWORDS, NAMED_COLORS, color_to_text, parse_color
from ...schema.tokens import Color
from ..base import CompactContext, NativeContext, TextOptions, TokenTypeHandler


class ColorHandler(TokenTypeHandler):
    """Colors from Figma RGBA objects or CSS color strings."""

    @property
    def type_tag(self) -> str:
        return "color"

    @property
    def name(self) -> str:
        return "Color"

    @property
    def priority(self) -> int:
        return 100

    @property
    def default_namespace(self) -> str | None:
        return "color"

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "COLOR"

    def detect_compact(self, context: CompactContext) -> bool:
        value = context.stripped.lower()
        if value.startswith("#"):
            return "gradient" not in value and parse_color(value) is not None
        if value.startswith(("rgb", "hsl", "oklch")):
            return parse_color(value) is not None
        if value in NAMED_COLORS or value in COLOR_KEYWORDS:
            # "black" is also a font weight keyword
            return not context.path_has("weight", "font")
        return False

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> Color | None:
        if not isinstance(value, dict) or not {"r", "g", "b"} <= value.keys():
            return None
        try:
            return Color(
                r=float(value["r"]),
                g=float(value["g"]),
                b=float(value["b"]),
                a=float(value.get("a", 1.0)),
            )
        except (TypeError, ValueError):
            return None

    def parse_compact(self, raw: str) -> Color | None:
        return parse_color(raw)

    def to_text(self, value: Color, options: TextOptions | None = None) -> str:
        options = options or TextOptions()
        return color_to_text(value, options.color_format)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("colors", "color"):
            return "color"
        return None

    def value_from_dict(self, data: Any) -> Color:
        return Color.from_dict(data)
