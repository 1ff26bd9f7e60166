"""Composite border handler."""

import re
from typing import Any

from ...colors import parse_color, to_rgb
from ...schema.tokens import BORDER_STYLES, Border, Dimension
from ..base import CompactContext, TextOptions, TokenTypeHandler

_STYLES = "|".join(BORDER_STYLES)
BORDER_PATTERN = re.compile(
    rf"^(\d+(?:\.\d+)?)(px|rem|em)?\s+({_STYLES})\s+"
    r"(#[A-Fa-f0-9]+|(?:rgba?|hsla?|oklch)\([^)]+\)|[a-zA-Z]+)$",
    re.IGNORECASE,
)
BORDER_PREFIX = re.compile(rf"^\d+(?:\.\d+)?(px|rem|em)?\s+({_STYLES})\s+", re.IGNORECASE)


def parse_border(raw: str) -> Border | None:
    """Parse `1px solid #e5e7eb`; the color must be parseable."""
    match = BORDER_PATTERN.match(raw.strip())
    if not match:
        return None
    color = parse_color(match.group(4))
    if color is None:
        return None
    return Border(
        width=Dimension(float(match.group(1)), (match.group(2) or "px").lower()),
        style=match.group(3).lower(),
        color=color,
    )


class BorderHandler(TokenTypeHandler):
    """Borders written as `<width> <style> <color>`."""

    @property
    def type_tag(self) -> str:
        return "border"

    @property
    def name(self) -> str:
        return "Border"

    @property
    def priority(self) -> int:
        return 65

    @property
    def default_namespace(self) -> str | None:
        return "border"

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        # A path hint alone is not enough: border/style/solid is a string
        return bool(BORDER_PREFIX.match(context.stripped))

    def parse_compact(self, raw: str) -> Border | None:
        return parse_border(raw)

    def to_text(self, value: Border, options: TextOptions | None = None) -> str:
        return f"{value.width} {value.style} {to_rgb(value.color)}"

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("border", "borders"):
            return "border"
        return None

    def value_from_dict(self, data: Any) -> Border:
        return Border.from_dict(data)
