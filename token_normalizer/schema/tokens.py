"""Canonical design token data model.

Tokens are produced once by a parser and then shared read-only between the
reference system, the linter and any downstream generator, so every type in
this module is a frozen dataclass. A token tree is an explicit union of
Token and TokenGroup; consumers match on the two classes instead of probing
dict shapes.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

DIMENSION_UNITS = ("px", "rem", "em", "%", "vw", "vh", "dvh", "svh", "lvh")
DURATION_UNITS = ("ms", "s")
FONT_WEIGHTS = (100, 200, 300, 400, 500, 600, 700, 800, 900)
FONT_WEIGHT_KEYWORDS = (
    "thin",
    "hairline",
    "extralight",
    "ultralight",
    "light",
    "normal",
    "regular",
    "medium",
    "semibold",
    "demibold",
    "bold",
    "extrabold",
    "ultrabold",
    "black",
    "heavy",
)
BORDER_STYLES = (
    "solid",
    "dashed",
    "dotted",
    "double",
    "groove",
    "ridge",
    "inset",
    "outset",
    "none",
)
GRADIENT_TYPES = ("linear", "radial", "conic")
TIMING_KEYWORDS = ("linear", "ease", "ease-in", "ease-out", "ease-in-out")
ANIMATION_DIRECTIONS = ("normal", "reverse", "alternate", "alternate-reverse")
ANIMATION_FILL_MODES = ("none", "forwards", "backwards", "both")
ANIMATION_PLAY_STATES = ("running", "paused")

FontWeight = Union[int, str]


@dataclass(frozen=True)
class Color:
    """An sRGB color with every channel in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Color:
        """Create from dictionary."""
        return cls(
            r=data["r"],
            g=data["g"],
            b=data["b"],
            a=data.get("a", 1.0),
        )


@dataclass(frozen=True)
class Dimension:
    """A length with an explicit unit."""

    value: float
    unit: str = "px"  # One of DIMENSION_UNITS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dimension:
        """Create from dictionary."""
        return cls(value=data["value"], unit=data.get("unit", "px"))

    def __str__(self) -> str:
        return f"{_format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class Duration:
    """A time span in milliseconds or seconds."""

    value: float
    unit: str = "ms"  # "ms" or "s"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Duration:
        """Create from dictionary."""
        return cls(value=data["value"], unit=data.get("unit", "ms"))

    def __str__(self) -> str:
        return f"{_format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class CubicBezier:
    """Easing curve control points; x1 and x2 must lie in [0, 1]."""

    x1: float
    y1: float
    x2: float
    y2: float

    def to_dict(self) -> list[float]:
        """Convert to the four-number array used on the wire."""
        return [self.x1, self.y1, self.x2, self.y2]

    @classmethod
    def from_dict(cls, data: Any) -> CubicBezier:
        """Create from a four-number array or an x1/y1/x2/y2 mapping."""
        if isinstance(data, dict):
            return cls(x1=data["x1"], y1=data["y1"], x2=data["x2"], y2=data["y2"])
        x1, y1, x2, y2 = data
        return cls(x1=x1, y1=y1, x2=x2, y2=y2)

    def __str__(self) -> str:
        points = ", ".join(
            _format_number(v) for v in (self.x1, self.y1, self.x2, self.y2)
        )
        return f"cubic-bezier({points})"


@dataclass(frozen=True)
class Typography:
    """Composite text style."""

    font_family: tuple[str, ...]
    font_size: Dimension
    font_weight: FontWeight = 400
    line_height: float | Dimension = 1.5  # Unitless ratio or a length
    letter_spacing: Dimension | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "fontFamily": list(self.font_family),
            "fontSize": self.font_size.to_dict(),
            "fontWeight": self.font_weight,
            "lineHeight": (
                self.line_height.to_dict()
                if isinstance(self.line_height, Dimension)
                else self.line_height
            ),
        }
        if self.letter_spacing is not None:
            data["letterSpacing"] = self.letter_spacing.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Typography:
        """Create from dictionary."""
        family = data.get("fontFamily", ["sans-serif"])
        if isinstance(family, str):
            family = [family]
        line_height = data.get("lineHeight", 1.5)
        if isinstance(line_height, dict):
            line_height = Dimension.from_dict(line_height)
        letter_spacing = data.get("letterSpacing")
        return cls(
            font_family=tuple(family),
            font_size=Dimension.from_dict(data["fontSize"]),
            font_weight=data.get("fontWeight", 400),
            line_height=line_height,
            letter_spacing=(
                Dimension.from_dict(letter_spacing) if letter_spacing else None
            ),
        )


@dataclass(frozen=True)
class Shadow:
    """One drop or inner shadow layer."""

    offset_x: Dimension
    offset_y: Dimension
    blur: Dimension
    color: Color
    spread: Dimension | None = None
    inset: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "offsetX": self.offset_x.to_dict(),
            "offsetY": self.offset_y.to_dict(),
            "blur": self.blur.to_dict(),
            "color": self.color.to_dict(),
        }
        if self.spread is not None:
            data["spread"] = self.spread.to_dict()
        if self.inset:
            data["inset"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Shadow:
        """Create from dictionary."""
        spread = data.get("spread")
        return cls(
            offset_x=Dimension.from_dict(data["offsetX"]),
            offset_y=Dimension.from_dict(data["offsetY"]),
            blur=Dimension.from_dict(data["blur"]),
            color=Color.from_dict(data["color"]),
            spread=Dimension.from_dict(spread) if spread else None,
            inset=data.get("inset", False),
        )


@dataclass(frozen=True)
class Border:
    """Composite border: width, line style and color."""

    width: Dimension
    style: str  # One of BORDER_STYLES
    color: Color

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "width": self.width.to_dict(),
            "style": self.style,
            "color": self.color.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Border:
        """Create from dictionary."""
        return cls(
            width=Dimension.from_dict(data["width"]),
            style=data.get("style", "solid"),
            color=Color.from_dict(data["color"]),
        )


@dataclass(frozen=True)
class GradientStop:
    """A color at a position in [0, 1] along the gradient line."""

    color: Color
    position: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"color": self.color.to_dict(), "position": self.position}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GradientStop:
        """Create from dictionary."""
        return cls(color=Color.from_dict(data["color"]), position=data["position"])


@dataclass(frozen=True)
class Gradient:
    """Linear, radial or conic gradient."""

    type: str  # One of GRADIENT_TYPES
    stops: tuple[GradientStop, ...]
    angle: float | None = None  # Degrees, linear and conic only

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "type": self.type,
            "stops": [stop.to_dict() for stop in self.stops],
        }
        if self.angle is not None:
            data["angle"] = self.angle
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Gradient:
        """Create from dictionary."""
        return cls(
            type=data.get("type", "linear"),
            stops=tuple(GradientStop.from_dict(s) for s in data.get("stops", [])),
            angle=data.get("angle"),
        )


def _timing_to_dict(timing: CubicBezier | str) -> Any:
    return timing.to_dict() if isinstance(timing, CubicBezier) else timing


def _timing_from_dict(data: Any) -> CubicBezier | str:
    return data if isinstance(data, str) else CubicBezier.from_dict(data)


@dataclass(frozen=True)
class Transition:
    """Composite transition: duration, easing and optional delay."""

    duration: Duration
    timing_function: CubicBezier | str = "ease"
    delay: Duration | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "duration": self.duration.to_dict(),
            "timingFunction": _timing_to_dict(self.timing_function),
        }
        if self.delay is not None:
            data["delay"] = self.delay.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transition:
        """Create from dictionary."""
        delay = data.get("delay")
        return cls(
            duration=Duration.from_dict(data["duration"]),
            timing_function=_timing_from_dict(data.get("timingFunction", "ease")),
            delay=Duration.from_dict(delay) if delay else None,
        )


@dataclass(frozen=True)
class Animation:
    """CSS animation shorthand broken into its parts."""

    name: str
    duration: Duration
    timing_function: CubicBezier | str | None = None
    delay: Duration | None = None
    iteration_count: int | str | None = None  # Positive int or "infinite"
    direction: str | None = None
    fill_mode: str | None = None
    play_state: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "duration": self.duration.to_dict(),
        }
        if self.timing_function is not None:
            data["timingFunction"] = _timing_to_dict(self.timing_function)
        if self.delay is not None:
            data["delay"] = self.delay.to_dict()
        if self.iteration_count is not None:
            data["iterationCount"] = self.iteration_count
        if self.direction is not None:
            data["direction"] = self.direction
        if self.fill_mode is not None:
            data["fillMode"] = self.fill_mode
        if self.play_state is not None:
            data["playState"] = self.play_state
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Animation:
        """Create from dictionary."""
        timing = data.get("timingFunction")
        delay = data.get("delay")
        return cls(
            name=data["name"],
            duration=Duration.from_dict(data["duration"]),
            timing_function=_timing_from_dict(timing) if timing else None,
            delay=Duration.from_dict(delay) if delay else None,
            iteration_count=data.get("iterationCount"),
            direction=data.get("direction"),
            fill_mode=data.get("fillMode"),
            play_state=data.get("playState"),
        )


@dataclass(frozen=True)
class KeyframeStep:
    """Property values at one keyframe selector ("0%", "from", ...)."""

    selector: str
    properties: tuple[tuple[str, str | float], ...]


@dataclass(frozen=True)
class Keyframes:
    """Ordered keyframe steps of an animation."""

    steps: tuple[KeyframeStep, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the selector-keyed mapping used on the wire."""
        return {step.selector: dict(step.properties) for step in self.steps}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Keyframes:
        """Create from a selector-keyed mapping."""
        return cls(
            steps=tuple(
                KeyframeStep(selector=selector, properties=tuple(props.items()))
                for selector, props in data.items()
            )
        )


@dataclass(frozen=True)
class Reference:
    """A token value that points at another token's dot-separated path."""

    ref: str

    def __post_init__(self) -> None:
        # "{color.primary}" and "color.primary" name the same target
        if self.ref.startswith("{") and self.ref.endswith("}"):
            object.__setattr__(self, "ref", self.ref[1:-1])

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments of the target."""
        return tuple(self.ref.split("."))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"$ref": self.ref}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reference:
        """Create from dictionary."""
        return cls(ref=data["$ref"])


@dataclass(frozen=True)
class Token:
    """One design value with a declared type tag."""

    type: str  # Registry type tag, e.g. "color" or "dimension"
    value: Any  # Canonical value for the type, or a Reference
    description: str | None = None
    extensions: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.extensions is not None:
            object.__setattr__(self, "extensions", MappingProxyType(dict(self.extensions)))

    @property
    def is_reference(self) -> bool:
        """Whether the value points at another token."""
        return isinstance(self.value, Reference)


@dataclass(frozen=True)
class TokenGroup:
    """Ordered, string-keyed container of tokens and nested groups."""

    children: Mapping[str, TokenNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __getitem__(self, key: str) -> TokenNode:
        return self.children[key]

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __len__(self) -> int:
        return len(self.children)

    def items(self) -> Iterator[tuple[str, TokenNode]]:
        """Iterate over (name, member) pairs in insertion order."""
        return iter(self.children.items())

    def get(self, path: str | tuple[str, ...] | list[str]) -> TokenNode | None:
        """Get the member at a dot-separated or segmented path.

        Args:
            path: Path relative to this group.

        Returns:
            The Token or TokenGroup at the path, or None if absent.
        """
        segments = path.split(".") if isinstance(path, str) else list(path)
        node: TokenNode = self
        for segment in segments:
            if not isinstance(node, TokenGroup) or segment not in node.children:
                return None
            node = node.children[segment]
        return node

    def walk(
        self, prefix: tuple[str, ...] = ()
    ) -> Iterator[tuple[tuple[str, ...], Token]]:
        """Yield (path, token) for every token, depth first.

        Args:
            prefix: Path segments prepended to every yielded path.
        """
        for name, member in self.children.items():
            path = prefix + (name,)
            if isinstance(member, Token):
                yield path, member
            elif isinstance(member, TokenGroup):
                yield from member.walk(path)
            else:
                raise TypeError(
                    f"Unexpected member {type(member).__name__} at {'.'.join(path)}"
                )

    def token_count(self) -> int:
        """Number of tokens in this group and all nested groups."""
        return sum(1 for _ in self.walk())


TokenNode = Union[Token, TokenGroup]


@dataclass(frozen=True)
class TokenCollection:
    """Named set of modes sharing one token structure."""

    name: str
    modes: tuple[str, ...]
    default_mode: str
    tokens: Mapping[str, TokenGroup]  # Mode name -> token tree
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    def mode_tokens(self, mode: str | None = None) -> TokenGroup:
        """Get the tree for a mode, the default mode when omitted."""
        return self.tokens.get(mode or self.default_mode, TokenGroup())


@dataclass(frozen=True)
class ThemeMeta:
    """Provenance information attached to a theme."""

    source: str = "manual"  # figma-api, figma-mcp, css, manual
    figma_file_key: str | None = None
    last_synced: str | None = None
    version: str = "1.0.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"source": self.source, "version": self.version}
        if self.figma_file_key:
            data["figmaFileKey"] = self.figma_file_key
        if self.last_synced:
            data["lastSynced"] = self.last_synced
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThemeMeta:
        """Create from dictionary."""
        return cls(
            source=data.get("source", "manual"),
            figma_file_key=data.get("figmaFileKey"),
            last_synced=data.get("lastSynced"),
            version=data.get("version", "1.0.0"),
        )


@dataclass(frozen=True)
class ThemeFile:
    """Root of the canonical token tree."""

    name: str
    collections: tuple[TokenCollection, ...] = ()
    meta: ThemeMeta | None = None
    description: str | None = None

    def get_collection(self, name: str) -> TokenCollection | None:
        """Find a collection by name."""
        for collection in self.collections:
            if collection.name == name:
                return collection
        return None


def _format_number(value: float) -> str:
    """Render 16.0 as "16" and 0.5 as "0.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
