"""Handler contract for the token type registry.

A handler owns everything the pipeline knows about one token type: how to
recognize it in Figma variable metadata or in a bare string, how to parse
either form into a canonical value, how to render it back to text and which
output namespace it belongs to. Parsers, the codec and the linter dispatch
through the registry, so adding a type means writing one handler and
registering it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# Figma variable scopes that mark a FLOAT as a length
DIMENSION_SCOPES = frozenset(
    {
        "CORNER_RADIUS",
        "WIDTH_HEIGHT",
        "GAP",
        "STROKE_FLOAT",
        "FONT_SIZE",
        "LINE_HEIGHT",
        "LETTER_SPACING",
        "PARAGRAPH_SPACING",
        "PARAGRAPH_INDENT",
    }
)

# Output buckets a token type can map into
NAMESPACES = (
    "color",
    "spacing",
    "radius",
    "font-size",
    "line-height",
    "letter-spacing",
    "font-weight",
    "font-family",
    "shadow",
    "border",
    "gradient",
    "transition-duration",
    "transition-timing-function",
    "animation",
)


@dataclass(frozen=True)
class NativeContext:
    """Figma variable metadata used for native detection."""

    resolved_type: str  # COLOR, BOOLEAN, STRING or FLOAT
    scopes: tuple[str, ...] = ()
    name: str = ""  # Slash-delimited variable name

    def has_scope(self, *scopes: str) -> bool:
        """Whether any of the given scopes is present."""
        return any(scope in self.scopes for scope in scopes)


@dataclass(frozen=True)
class CompactContext:
    """A bare string value plus the path it was found under."""

    path: str  # Slash-delimited path, used as a type hint
    value: str

    @property
    def lower_path(self) -> str:
        return self.path.lower()

    @property
    def stripped(self) -> str:
        return self.value.strip()

    def path_has(self, *hints: str) -> bool:
        """Whether the lowercased path contains any of the hints."""
        lower = self.lower_path
        return any(hint in lower for hint in hints)


@dataclass(frozen=True)
class TextOptions:
    """Options for rendering a value as text."""

    color_format: str = "hex"  # hex, rgb, hsl or oklch
    dialect: str = "css"  # css or scss; only references render differently
    prefix: str = ""  # Prepended to referenced variable names
    extra: dict[str, Any] = field(default_factory=dict)


class TokenTypeHandler(ABC):
    """Abstract base class for token type handlers.

    Subclasses must provide the type tag, a display name and to_text().
    Detection and parsing default to "not mine"; a handler that never sees
    Figma-native input can leave the native hooks alone.
    """

    @property
    @abstractmethod
    def type_tag(self) -> str:
        """Type tag stored on tokens, e.g. 'color'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable handler name."""

    @property
    def priority(self) -> int:
        """Detection order; higher runs first."""
        return 0

    @property
    def default_namespace(self) -> str | None:
        """Namespace used when get_namespace() has no path-specific answer."""
        return None

    @property
    def is_composite(self) -> bool:
        """Composite values are skipped, not degraded, when unparseable."""
        return False

    def detect_native(self, context: NativeContext) -> bool:
        """Whether a Figma variable holds this type."""
        return False

    def detect_compact(self, context: CompactContext) -> bool:
        """Whether a bare string under a path holds this type."""
        return False

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> Any:
        """Convert a Figma-native value; None when it does not fit."""
        return None

    def parse_compact(self, raw: str) -> Any:
        """Convert a string value; None when it does not fit."""
        return None

    @abstractmethod
    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        """Render a canonical value as CSS text."""

    def get_namespace(self, path: tuple[str, ...]) -> str | None:
        """Path-specific namespace, or None to use default_namespace."""
        return None

    def value_to_dict(self, value: Any) -> Any:
        """Convert a canonical value to its JSON form."""
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return value

    def value_from_dict(self, data: Any) -> Any:
        """Rebuild a canonical value from its JSON form."""
        return data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type_tag} priority={self.priority}>"
