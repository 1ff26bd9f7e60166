"""Duration, cubic-bezier and transition handlers."""

import re
from typing import Any

from ...schema.tokens import TIMING_KEYWORDS, CubicBezier, Duration, Transition
from ..base import CompactContext, NativeContext, TextOptions, TokenTypeHandler

DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(ms|s)?$")
EXPLICIT_DURATION_PATTERN = re.compile(r"^\d+(?:\.\d+)?(ms|s)$")
BEZIER_PATTERN = re.compile(
    r"cubic-bezier\s*\(\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*\)"
)


def parse_duration(raw: str) -> Duration | None:
    """Parse "200ms", "0.3s" or a bare number of milliseconds."""
    match = DURATION_PATTERN.match(raw.strip())
    if not match:
        return None
    return Duration(value=float(match.group(1)), unit=match.group(2) or "ms")


def parse_cubic_bezier(raw: str) -> CubicBezier | None:
    """Parse `cubic-bezier(x1, y1, x2, y2)`."""
    match = BEZIER_PATTERN.search(raw)
    if not match:
        return None
    try:
        x1, y1, x2, y2 = (float(match.group(i)) for i in range(1, 5))
    except ValueError:
        return None
    return CubicBezier(x1, y1, x2, y2)


def parse_timing_function(raw: str) -> CubicBezier | str | None:
    """Parse a keyword easing or a cubic-bezier() curve."""
    raw = raw.strip()
    if raw in TIMING_KEYWORDS:
        return raw
    return parse_cubic_bezier(raw)


def timing_to_text(timing: CubicBezier | str) -> str:
    return timing if isinstance(timing, str) else str(timing)


class DurationHandler(TokenTypeHandler):
    """Durations in ms or s."""

    @property
    def type_tag(self) -> str:
        return "duration"

    @property
    def name(self) -> str:
        return "Duration"

    @property
    def priority(self) -> int:
        return 60

    @property
    def default_namespace(self) -> str | None:
        return "transition-duration"

    def detect_compact(self, context: CompactContext) -> bool:
        return bool(EXPLICIT_DURATION_PATTERN.match(context.stripped))

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> Duration | None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return Duration(value=float(value), unit="ms")

    def parse_compact(self, raw: str) -> Duration | None:
        return parse_duration(raw)

    def to_text(self, value: Duration, options: TextOptions | None = None) -> str:
        return str(value)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("duration", "timing", "animation"):
            return "transition-duration"
        return None

    def value_from_dict(self, data: Any) -> Duration:
        return Duration.from_dict(data)


class CubicBezierHandler(TokenTypeHandler):
    """Easing curves."""

    @property
    def type_tag(self) -> str:
        return "cubicBezier"

    @property
    def name(self) -> str:
        return "Cubic Bezier"

    @property
    def priority(self) -> int:
        return 55

    @property
    def default_namespace(self) -> str | None:
        return "transition-timing-function"

    def detect_compact(self, context: CompactContext) -> bool:
        return context.stripped.startswith("cubic-bezier(")

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> CubicBezier | None:
        if not isinstance(value, list | tuple):
            return None
        points = list(value) + [0, 0, 1, 1][len(value) :]
        return CubicBezier(*(float(p) for p in points[:4]))

    def parse_compact(self, raw: str) -> CubicBezier | None:
        return parse_cubic_bezier(raw)

    def to_text(self, value: CubicBezier, options: TextOptions | None = None) -> str:
        return str(value)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        if path and path[0].lower() in ("easing", "timing", "animation"):
            return "transition-timing-function"
        return None

    def value_from_dict(self, data: Any) -> CubicBezier:
        return CubicBezier.from_dict(data)


def parse_transition(raw: str) -> Transition | None:
    """Parse `<duration> [<timing-function>] [<delay>]`.

    A leading property name (`opacity 200ms ease`) is ignored.
    """
    text = raw.strip()
    bezier = BEZIER_PATTERN.search(text)
    timing: CubicBezier | str | None = None
    if bezier:
        timing = parse_cubic_bezier(bezier.group(0))
        text = (text[: bezier.start()] + " " + text[bezier.end() :]).strip()

    durations: list[Duration] = []
    for part in text.split():
        if part in TIMING_KEYWORDS and timing is None:
            timing = part
            continue
        if EXPLICIT_DURATION_PATTERN.match(part):
            duration = parse_duration(part)
            if duration is not None:
                durations.append(duration)

    if not durations:
        return None
    return Transition(
        duration=durations[0],
        timing_function=timing or "ease",
        delay=durations[1] if len(durations) > 1 else None,
    )


class TransitionHandler(TokenTypeHandler):
    """Transition shorthands under a transition path."""

    @property
    def type_tag(self) -> str:
        return "transition"

    @property
    def name(self) -> str:
        return "Transition"

    @property
    def priority(self) -> int:
        return 50

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        if not context.path_has("transition"):
            return False
        return any(
            EXPLICIT_DURATION_PATTERN.match(part) for part in context.stripped.split()
        )

    def parse_compact(self, raw: str) -> Transition | None:
        return parse_transition(raw)

    def to_text(self, value: Transition, options: TextOptions | None = None) -> str:
        parts = [str(value.duration), timing_to_text(value.timing_function)]
        if value.delay is not None:
            parts.append(str(value.delay))
        return " ".join(parts)

    def value_from_dict(self, data: Any) -> Transition:
        return Transition.from_dict(data)
