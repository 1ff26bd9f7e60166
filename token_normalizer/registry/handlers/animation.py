"""Keyframes and animation shorthand handlers."""

from typing import Any

from ...schema.tokens import (
    ANIMATION_DIRECTIONS,
    ANIMATION_FILL_MODES,
    ANIMATION_PLAY_STATES,
    TIMING_KEYWORDS,
    Animation,
    Duration,
    KeyframeStep,
    Keyframes,
)
from ..base import CompactContext, TextOptions, TokenTypeHandler
from .dimension import is_number
from .timing import (
    BEZIER_PATTERN,
    EXPLICIT_DURATION_PATTERN,
    parse_cubic_bezier,
    parse_duration,
    timing_to_text,
)

_ANIMATION_HINTS = ("ms", "s", "ease", "linear", "infinite")


def parse_keyframes(raw: str) -> Keyframes | None:
    """Parse `0%: opacity 0; 100%: opacity 1` or `from: ...; to: ...`.

    Properties are space separated name/value pairs; numeric values become
    floats.
    """
    steps: list[KeyframeStep] = []
    for part in raw.split(";"):
        part = part.strip()
        selector, sep, props_text = part.partition(":")
        if not sep:
            continue

        tokens = props_text.split()
        properties: list[tuple[str, str | float]] = []
        for index in range(0, len(tokens) - 1, 2):
            name, value = tokens[index], tokens[index + 1]
            properties.append((name, float(value) if is_number(value) else value))

        if properties:
            steps.append(
                KeyframeStep(selector=selector.strip(), properties=tuple(properties))
            )

    if not steps:
        return None
    return Keyframes(steps=tuple(steps))


def parse_animation(raw: str) -> Animation | None:
    """Parse `fade-in 300ms ease-in-out 100ms infinite alternate both`.

    The first time is the duration and the second the delay. The first
    token that matches no other slot is the animation name.
    """
    text = raw.strip()
    timing: Any = None
    bezier = BEZIER_PATTERN.search(text)
    if bezier:
        timing = parse_cubic_bezier(bezier.group(0))
        text = (text[: bezier.start()] + " " + text[bezier.end() :]).strip()

    name = ""
    durations: list[Duration] = []
    fields: dict[str, Any] = {}

    for part in text.split():
        if EXPLICIT_DURATION_PATTERN.match(part):
            duration = parse_duration(part)
            if duration is not None:
                durations.append(duration)
        elif part in TIMING_KEYWORDS and timing is None:
            timing = part
        elif part == "infinite":
            fields["iteration_count"] = "infinite"
        elif part.isdigit():
            fields["iteration_count"] = int(part)
        elif part in ANIMATION_DIRECTIONS:
            fields["direction"] = part
        elif part in ANIMATION_FILL_MODES:
            fields["fill_mode"] = part
        elif part in ANIMATION_PLAY_STATES:
            fields["play_state"] = part
        elif not name:
            name = part

    if not name:
        return None
    return Animation(
        name=name,
        duration=durations[0] if durations else Duration(0.0, "ms"),
        timing_function=timing,
        delay=durations[1] if len(durations) > 1 else None,
        **fields,
    )


class KeyframesHandler(TokenTypeHandler):
    """Keyframe step definitions."""

    @property
    def type_tag(self) -> str:
        return "keyframes"

    @property
    def name(self) -> str:
        return "Keyframes"

    @property
    def priority(self) -> int:
        # Above animation so "animation/fade: 0%: ..." becomes keyframes
        return 49

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        if context.path_has("keyframe"):
            return True
        return context.path_has("animation") and "%" in context.value and ":" in context.value

    def parse_compact(self, raw: str) -> Keyframes | None:
        return parse_keyframes(raw)

    def to_text(self, value: Keyframes, options: TextOptions | None = None) -> str:
        rendered = []
        for step in value.steps:
            props = "; ".join(f"{name}: {_format(val)}" for name, val in step.properties)
            rendered.append(f"{step.selector} {{ {props} }}")
        return " ".join(rendered)

    def value_from_dict(self, data: Any) -> Keyframes:
        return Keyframes.from_dict(data)


class AnimationHandler(TokenTypeHandler):
    """Animation shorthands under an animation path."""

    @property
    def type_tag(self) -> str:
        return "animation"

    @property
    def name(self) -> str:
        return "Animation"

    @property
    def priority(self) -> int:
        return 48

    @property
    def default_namespace(self) -> str | None:
        return "animation"

    @property
    def is_composite(self) -> bool:
        return True

    def detect_compact(self, context: CompactContext) -> bool:
        if not context.path_has("animation") or context.path_has("keyframe"):
            return False
        value = context.stripped.lower()
        return any(hint in value for hint in _ANIMATION_HINTS)

    def parse_compact(self, raw: str) -> Animation | None:
        return parse_animation(raw)

    def to_text(self, value: Animation, options: TextOptions | None = None) -> str:
        parts = [value.name, str(value.duration)]
        if value.timing_function is not None:
            parts.append(timing_to_text(value.timing_function))
        if value.delay is not None:
            parts.append(str(value.delay))
        if value.iteration_count is not None:
            parts.append(str(value.iteration_count))
        for extra in (value.direction, value.fill_mode, value.play_state):
            if extra is not None:
                parts.append(extra)
        return " ".join(parts)

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        return "animation"

    def value_from_dict(self, data: Any) -> Animation:
        return Animation.from_dict(data)


def _format(value: str | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
