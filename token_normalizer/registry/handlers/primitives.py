"""Number, boolean and string handlers; string is the detection fallback."""

from typing import Any

from ..base import CompactContext, NativeContext, TextOptions, TokenTypeHandler
from .dimension import is_number


class NumberHandler(TokenTypeHandler):
    """Unitless numbers."""

    @property
    def type_tag(self) -> str:
        return "number"

    @property
    def name(self) -> str:
        return "Number"

    @property
    def priority(self) -> int:
        return 20

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "FLOAT"

    def detect_compact(self, context: CompactContext) -> bool:
        return is_number(context.value)

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> float | None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return float(value)

    def parse_compact(self, raw: str) -> float | None:
        return float(raw.strip()) if is_number(raw) else None

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


class BooleanHandler(TokenTypeHandler):
    """True/false flags."""

    @property
    def type_tag(self) -> str:
        return "boolean"

    @property
    def name(self) -> str:
        return "Boolean"

    @property
    def priority(self) -> int:
        return 50

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "BOOLEAN"

    def detect_compact(self, context: CompactContext) -> bool:
        return context.stripped.lower() in ("true", "false")

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> bool | None:
        return value if isinstance(value, bool) else None

    def parse_compact(self, raw: str) -> bool | None:
        lowered = raw.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        return None

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        return "true" if value else "false"


class StringHandler(TokenTypeHandler):
    """Anything else; never rejects a value."""

    @property
    def type_tag(self) -> str:
        return "string"

    @property
    def name(self) -> str:
        return "String"

    @property
    def priority(self) -> int:
        return 10

    def detect_native(self, context: NativeContext) -> bool:
        return context.resolved_type == "STRING"

    def detect_compact(self, context: CompactContext) -> bool:
        return True

    def parse_native(self, value: Any, scopes: tuple[str, ...] = ()) -> str:
        return str(value)

    def parse_compact(self, raw: str) -> str:
        return raw

    def to_text(self, value: Any, options: TextOptions | None = None) -> str:
        return str(value)
