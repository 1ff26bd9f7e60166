"""Dimension token handler and shared length parsing."""

import re
from typing import Any

from ...schema.tokens import DIMENSION_UNITS, Dimension
from ..base import (
    DIMENSION_SCOPES,
    CompactContext,
    NativeContext,
    TextOptions,
    TokenTypeHandler,
)

NUMBER_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?$|^-?\.\d+$")
DIMENSION_PATTERN = re.compile(
    r"^(-?(?:\d+(?:\.\d+)?|\.\d+))\s*(px|rem|em|%|vw|vh|dvh|svh|lvh)?$",
    re.IGNORECASE,
)
# Path fragments that make a bare number a length
_PATH_HINTS = ("spacing", "radius", "gap", "size", "width", "height")


def parse_dimension(text: str, default_unit: str = "px") -> Dimension | None:
    """Parse "16", "16px", "1.5rem" or "50%".

    Args:
        text: Length text.
        default_unit: Unit assumed for a bare number.

    Returns:
        Dimension, or None if the text is not a supported length.
    """
    match = DIMENSION_PATTERN.match(text.strip())
    if not match:
        return None
    unit = (match.group(2) or default_unit).lower()
    return Dimension(value=float(match.group(1)), unit=unit)


def is_number(text: str) -> bool:
    """Whether text is a bare decimal number."""
    return bool(NUMBER_PATTERN.match(text.strip()))


class DimensionHandler(TokenTypeHandler):
    """Lengths: Figma FLOATs with a size-like scope, or number+unit strings."""

    @property
    def type_tag(self) -> str:
        return "dimension"

    @property
    def name(self) -> str:
        return "Dimension"

    @property
    def priority(self) -> int:
        return 80

    @property
    def default_namespace(self) -> str | None:
        return "spacing"

    def detect_native(self, context: NativeContext) -> bool:
        if context.resolved_type != "FLOAT":
            return False
        return any(scope in DIMENSION_SCOPES for scope in context.scopes)

    def detect_compact(self, context: CompactContext) -> bool:
        value = context.stripped
        if is_number(value):
            # A bare number needs a size-like path; line heights stay unitless
            if context.path_has("lineheight", "line-height"):
                return False
            return context.path_has(*_PATH_HINTS)
        match = DIMENSION_PATTERN.match(value)
        return bool(match and match.group(2))

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> Dimension | None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return Dimension(value=float(value), unit="px")

    def parse_compact(self, raw: str) -> Dimension | None:
        return parse_dimension(raw)

    def to_text(self, value: Dimension, options: TextOptions | None = None) -> str:
        return str(value)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if not path:
            return None
        hint = path[0].lower()
        if hint in ("spacing", "space"):
            return "spacing"
        if hint in ("radius", "border-radius", "radii"):
            return "radius"
        if hint in ("font", "typography"):
            lowered = [segment.lower() for segment in path]
            if any("size" in segment for segment in lowered):
                return "font-size"
            if any("height" in s or "leading" in s for s in lowered):
                return "line-height"
            if any("spacing" in s or "tracking" in s for s in lowered):
                return "letter-spacing"
        return None

    def value_from_dict(self, data: Any) -> Dimension:
        return Dimension.from_dict(data)


__all__ = ["DIMENSION_UNITS", "DimensionHandler", "is_number", "parse_dimension"]
