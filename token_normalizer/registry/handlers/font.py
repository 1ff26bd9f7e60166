"""Font family and font weight handlers."""

import re
from typing import Any

from ...schema.tokens import FONT_WEIGHTS
from ..base import CompactContext, NativeContext, TextOptions, TokenTypeHandler
from .dimension import is_number

WEIGHT_MAP: dict[str, int] = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "ultralight": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

GENERIC_FAMILIES = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-sans-serif",
        "ui-serif",
        "ui-monospace",
    }
)


def nearest_font_weight(weight: float) -> int:
    """Snap a numeric weight to the closest of 100..900 (ties go lower)."""
    return min(FONT_WEIGHTS, key=lambda w: (abs(w - weight), w))


def parse_font_weight(raw: Any) -> int | None:
    """Parse a numeric or keyword font weight into 100..900.

    Args:
        raw: Number, numeric string, or keyword such as "semibold".

    Returns:
        Weight snapped to the nearest valid value, or None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return nearest_font_weight(raw)
    text = str(raw).strip().lower().replace("-", "").replace(" ", "")
    if is_number(text):
        return nearest_font_weight(float(text))
    return WEIGHT_MAP.get(text)


def is_font_weight_text(text: str) -> bool:
    """Whether text is an exact weight (700) or a weight keyword (bold)."""
    text = text.strip().lower()
    if text.isdigit():
        return int(text) in FONT_WEIGHTS
    return text.replace("-", "") in WEIGHT_MAP


def split_font_family(raw: str) -> tuple[str, ...]:
    """Split a font stack on commas and strip surrounding quotes."""
    families = []
    for part in raw.split(","):
        name = part.strip().strip("\"'").strip()
        if name:
            families.append(name)
    return tuple(families)


def format_font_family(families: tuple[str, ...] | list[str]) -> str:
    """Join a font stack, quoting names that contain spaces."""
    return ", ".join(
        f'"{family}"' if " " in family and family not in GENERIC_FAMILIES else family
        for family in families
    )


class FontFamilyHandler(TokenTypeHandler):
    """Font stacks."""

    @property
    def type_tag(self) -> str:
        return "fontFamily"

    @property
    def name(self) -> str:
        return "Font Family"

    @property
    def priority(self) -> int:
        return 70

    @property
    def default_namespace(self) -> str | None:
        return "font-family"

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "STRING" and context.has_scope("FONT_FAMILY")

    def detect_compact(self, context: CompactContext) -> bool:
        if context.path_has("family"):
            return context.path_has("font")
        value = context.stripped
        if value.startswith(("Font(", "Effect(", "#")):
            return False
        if re.match(r"^\d+(?:\.\d+)?(px)?$", value):
            return False
        return context.path_has("font")

    def parse_native(
        self, value: Any, scopes: tuple[str, ...] = ()
    ) -> tuple[str, ...] | None:
        if not isinstance(value, str):
            return None
        return self.parse_compact(value)

    def parse_compact(self, raw: str) -> tuple[str, ...] | None:
        families = split_font_family(raw)
        return families or None

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        if isinstance(value, str):
            value = (value,)
        return format_font_family(value)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        return "font-family"

    def value_to_dict(self, value: Any) -> Any:
        return list(value)

    def value_from_dict(self, data: Any) -> tuple[str, ...]:
        if isinstance(data, str):
            return split_font_family(data)
        return tuple(data)


class FontWeightHandler(TokenTypeHandler):
    """Font weights 100..900; keywords are converted to numbers on parse."""

    @property
    def type_tag(self) -> str:
        return "fontWeight"

    @property
    def name(self) -> str:
        return "Font Weight"

    @property
    def priority(self) -> int:
        return 75

    @property
    def default_namespace(self) -> str | None:
        return "font-weight"

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "FLOAT" and context.has_scope("FONT_WEIGHT")

    def detect_compact(self, context: CompactContext) -> bool:
        # "700" alone is a plain number
        if not context.path_has("weight", "typography", "font", "text"):
            return False
        return is_font_weight_text(context.value)

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> int | None:
        return parse_font_weight(value)

    def parse_compact(self, raw: str) -> int | None:
        return parse_font_weight(raw)

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        if isinstance(value, int | float):
            return str(int(value))
        return str(WEIGHT_MAP.get(str(value).lower(), 400))

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        return "font-weight"
