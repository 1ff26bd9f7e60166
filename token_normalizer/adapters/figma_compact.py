"""Parser for the Figma compact export: a flat map of path -> string.

Keys are slash-delimited variable names ("Colors/Brand/Primary"). Values
are plain scalars, comma-separated per-mode scalars ("#ffffff,#000000"),
or the Font(...) / Effect(...) pseudo-constructors. Every top-level segment
becomes a collection with a single "Default" mode.
"""

from dataclasses import dataclass
from typing import Any

from ..normalizer_logging import LogCategory, get_category_logger
from ..registry.base import CompactContext
from ..registry.handlers.dimension import DIMENSION_PATTERN
from ..schema.tokens import ThemeFile, ThemeMeta, Token
from ..tree import build_collection
from .base import InputAdapter, ValidationResult

logger = get_category_logger(LogCategory.PARSER)

DEFAULT_MODE = "Default"


@dataclass
class CompactOptions:
    """Options for the compact parser."""

    theme_name: str = "Untitled"
    figma_file_key: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CompactOptions":
        data = data or {}
        return cls(
            theme_name=data.get("theme_name", data.get("fileName", "Untitled")),
            figma_file_key=data.get("figma_file_key", data.get("fileKey")),
        )


def normalize_segment(segment: str) -> str:
    """Lowercase and replace whitespace runs with hyphens."""
    return "-".join(segment.strip().lower().split())


def split_top_level(value: str) -> list[str]:
    """Split on commas that are not inside parentheses."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(value):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == "," and depth == 0:
            parts.append(value[start:index].strip())
            start = index + 1
    parts.append(value[start:].strip())
    return parts


def _is_mode_scalar(part: str) -> bool:
    if part.startswith("#"):
        return True
    if part.lower() in ("true", "false"):
        return True
    return bool(DIMENSION_PATTERN.match(part))


def primary_value(raw: str) -> str:
    """Value for the default mode.

    Only comma lists whose every part is a scalar (hex color, number,
    length, boolean) are treated as per-mode values; the first one is used.
    Font stacks, gradients and constructors are kept whole.
    """
    raw = raw.strip()
    if raw.startswith(("Font(", "Effect(")):
        return raw
    parts = split_top_level(raw)
    if len(parts) > 1 and all(part and _is_mode_scalar(part) for part in parts):
        return parts[0]
    return raw


class FigmaCompactAdapter(InputAdapter):
    """Parses the compact path -> string map into a ThemeFile."""

    @property
    def source_name(self) -> str:
        return "figma-compact"

    def validate(self, source: Any) -> ValidationResult:
        errors: list[str] = []
        if not isinstance(source, dict):
            errors.append("Variable defs must be an object mapping paths to values")
            return ValidationResult.from_errors(errors)
        if not source:
            errors.append("Variable defs object is empty")
        for key, value in source.items():
            if not isinstance(key, str) or not key.strip():
                errors.append(f"Invalid variable path: {key!r}")
            elif not isinstance(value, str):
                errors.append(f"Value for {key} must be a string")
        return ValidationResult.from_errors(errors)

    def parse_token(self, full_path: str, raw: str) -> Token | None:
        """Detect, parse and wrap one entry; None when it must be skipped."""
        value = primary_value(raw)
        type_tag = self.registry.detect_compact(CompactContext(path=full_path, value=value))
        handler = self.registry.get(type_tag)
        parsed = handler.parse_compact(value)

        if parsed is None:
            if handler.is_composite:
                logger.debug(
                    "Skipping unparseable %s token %s",
                    type_tag,
                    full_path,
                    extra={"token_path": full_path},
                )
                return None
            type_tag, parsed = "string", value

        return Token(
            type=type_tag,
            value=parsed,
            extensions={"com.figma": {"codeSyntax": {"web": full_path}}},
        )

    def _parse(self, source: dict[str, str], options: Any) -> ThemeFile:
        if not isinstance(options, CompactOptions):
            options = CompactOptions.from_dict(options)

        grouped: dict[str, list[tuple[tuple[str, ...], Token]]] = {}
        for full_path, raw in source.items():
            segments = full_path.split("/")
            category = segments[0] or "Variables"
            path = tuple(normalize_segment(s) for s in segments[1:-1])
            name = normalize_segment(segments[-1]) if segments[-1] else full_path

            token = self.parse_token(full_path, raw)
            entries = grouped.setdefault(category, [])
            if token is not None:
                entries.append((path + (name,), token))

        collections = tuple(
            build_collection(
                name=category,
                entries_by_mode={DEFAULT_MODE: entries},
                default_mode=DEFAULT_MODE,
                description=f"Design tokens from {category}",
            )
            for category, entries in grouped.items()
        )
        return ThemeFile(
            name=options.theme_name,
            collections=collections,
            meta=ThemeMeta(source="figma-mcp-defs", figma_file_key=options.figma_file_key),
        )


def parse_compact(
    source: dict[str, str], options: CompactOptions | dict[str, Any] | None = None
) -> ThemeFile:
    """Parse a compact export with the default registry."""
    return FigmaCompactAdapter().parse(source, options)
