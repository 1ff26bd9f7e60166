"""Gradient handler for CSS gradient functions and Figma paint objects."""

import math
import re
from typing import Any

from ...colors import parse_color, to_rgb
from ...schema.tokens import Color, Gradient, GradientStop
from ..base import CompactContext, TextOptions, TokenTypeHandler

GRADIENT_PATTERN = re.compile(r"^(linear|radial|conic)-gradient\s*\(", re.IGNORECASE)
ANGLE_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)(deg|turn|rad|grad)?\s*,\s*")
DIRECTION_PATTERN = re.compile(r"^to\s+([a-z ]+?)\s*,\s*")
STOP_PATTERN = re.compile(
    r"(#[A-Fa-f0-9]+|(?:rgba?|hsla?|oklch)\([^)]+\)|[a-z]+)\s*(\d+(?:\.\d+)?%)?",
    re.IGNORECASE,
)

DIRECTION_ANGLES = {
    "top": 0.0,
    "top right": 45.0,
    "right top": 45.0,
    "right": 90.0,
    "bottom right": 135.0,
    "right bottom": 135.0,
    "bottom": 180.0,
    "bottom left": 225.0,
    "left bottom": 225.0,
    "left": 270.0,
    "top left": 315.0,
    "left top": 315.0,
}

FIGMA_GRADIENT_TYPES = {
    "GRADIENT_LINEAR": "linear",
    "GRADIENT_RADIAL": "radial",
    "GRADIENT_ANGULAR": "conic",
}


def _to_degrees(value: float, unit: str) -> float:
    if unit == "turn":
        return value * 360
    if unit == "rad":
        return math.degrees(value)
    if unit == "grad":
        return value * 0.9
    return value


def parse_gradient(raw: str) -> Gradient | None:
    """Parse `linear-gradient(90deg, #fff 0%, rgb(0, 0, 0) 100%)`.

    Stops without a position sit at 0 when first and 1 otherwise. Words that
    are not colors ("circle", "at") are ignored.
    """
    raw = raw.strip()
    match = GRADIENT_PATTERN.match(raw)
    if not match or not raw.endswith(")"):
        return None

    gradient_type = match.group(1).lower()
    content = raw[match.end() : -1].strip()
    angle: float | None = None

    if gradient_type == "linear":
        angle_match = ANGLE_PATTERN.match(content)
        direction_match = DIRECTION_PATTERN.match(content)
        if angle_match:
            angle = _to_degrees(float(angle_match.group(1)), angle_match.group(2) or "deg")
            content = content[angle_match.end() :]
        elif direction_match and direction_match.group(1) in DIRECTION_ANGLES:
            angle = DIRECTION_ANGLES[direction_match.group(1)]
            content = content[direction_match.end() :]

    stops: list[GradientStop] = []
    for stop_match in STOP_PATTERN.finditer(content):
        color = parse_color(stop_match.group(1))
        if color is None:
            continue
        position_text = stop_match.group(2)
        if position_text:
            position = float(position_text[:-1]) / 100
        else:
            position = 0.0 if not stops else 1.0
        stops.append(GradientStop(color=color, position=position))

    if not stops:
        return None
    return Gradient(type=gradient_type, stops=tuple(stops), angle=angle)


def parse_figma_gradient(value: Any) -> Gradient | None:
    """Convert a Figma gradient paint (gradientStops + handle positions)."""
    if not isinstance(value, dict) or not value.get("gradientStops"):
        return None

    gradient_type = FIGMA_GRADIENT_TYPES.get(value.get("type", ""), "linear")
    angle: float | None = None
    handles = value.get("gradientHandlePositions") or []
    if gradient_type == "linear" and len(handles) >= 2:
        start, end = handles[0], handles[1]
        radians = math.atan2(end["y"] - start["y"], end["x"] - start["x"])
        # CSS measures from "to top"
        angle = (math.degrees(radians) + 90) % 360

    stops = tuple(
        GradientStop(
            color=Color(
                stop["color"]["r"],
                stop["color"]["g"],
                stop["color"]["b"],
                stop["color"].get("a", 1.0),
            ),
            position=stop["position"],
        )
        for stop in value["gradientStops"]
    )
    return Gradient(type=gradient_type, stops=stops, angle=angle)


class GradientHandler(TokenTypeHandler):
    """Linear, radial and conic gradients."""

    @property
    def type_tag(self) -> str:
        return "gradient"

    @property
    def name(self) -> str:
        return "Gradient"

    @property
    def priority(self) -> int:
        # Above shadow so a gradient under an elevation path stays a gradient
        return 86

    @property
    def default_namespace(self) -> str | None:
        return "gradient"

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        return bool(GRADIENT_PATTERN.match(context.stripped))

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> Gradient | None:
        return parse_figma_gradient(value)

    def parse_compact(self, raw: str) -> Gradient | None:
        return parse_gradient(raw)

    def to_text(self, value: Gradient, options: TextOptions | None = None) -> str:
        stops = ", ".join(
            f"{to_rgb(stop.color)} {stop.position * 100:.1f}%" for stop in value.stops
        )
        if value.type == "linear":
            return f"linear-gradient({value.angle or 0:g}deg, {stops})"
        return f"{value.type}-gradient({stops})"

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("gradient", "gradients"):
            return "gradient"
        return None

    def value_from_dict(self, data: Any) -> Gradient:
        return Gradient.from_dict(data)
