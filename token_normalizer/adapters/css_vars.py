"""Parser for CSS custom properties.

Extracts `--name: value;` declarations from the blocks that carry theme
variables:

- Light (default mode): `:root {}` and Tailwind v4 `@theme {}`
- Dark (`dark` mode): `.dark {}`, `[data-theme="dark"] {}` and
  `@media (prefers-color-scheme: dark) { :root {} }`

Other at-rules (`@layer`, `@supports`, `@media` for anything but dark) are
transparent: the blocks inside them are scanned as if they were top-level.
This is not a general CSS parser; anything that is not a custom property in
one of the blocks above is ignored.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..colors import is_color_text
from ..normalizer_logging import LogCategory, get_category_logger
from ..registry.handlers.dimension import DIMENSION_PATTERN, is_number
from ..registry.handlers.font import is_font_weight_text
from ..registry.handlers.timing import EXPLICIT_DURATION_PATTERN
from ..schema.tokens import Reference, ThemeFile, ThemeMeta, Token
from ..tree import build_collection
from .base import InputAdapter, ValidationResult

logger = get_category_logger(LogCategory.PARSER)

LIGHT = "light"
DARK = "dark"

COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
DECLARATION_PATTERN = re.compile(r"(?<![\w-])--([\w-]+)\s*:\s*([^;{}]+?)\s*(?:;|$)")
VAR_PATTERN = re.compile(r"^var\(\s*--([\w-]+)\s*(?:,\s*(.*))?\)$", re.DOTALL)
DARK_CLASS_PATTERN = re.compile(r"\.dark(?![\w-])")
DARK_ATTRIBUTE_PATTERN = re.compile(r"\[data-theme=[\"']?dark[\"']?\]")
DARK_MEDIA_PATTERN = re.compile(r"prefers-color-scheme\s*:\s*dark", re.IGNORECASE)

# Multi-word Tailwind prefixes kept together as one camelCase segment
COMPOUND_PREFIXES = (
    ("font-family", "fontFamily"),
    ("font-size", "fontSize"),
    ("font-weight", "fontWeight"),
    ("line-height", "lineHeight"),
    ("letter-spacing", "letterSpacing"),
)

# Name fragments that let a bare 100..900 count as a font weight
_WEIGHT_HINTS = ("font", "weight")


@dataclass
class CSSOptions:
    """Options for the CSS parser."""

    collection_name: str = "tokens"
    default_mode: str = "default"
    strip_prefix: str | None = None  # "ion-" maps --ion-color-primary to color.primary
    parse_theme_block: bool = True  # Tailwind v4 @theme
    parse_root: bool = True
    parse_dark_mode: bool = True
    file_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CSSOptions":
        data = data or {}
        return cls(
            collection_name=data.get("collection_name", data.get("collectionName", "tokens")),
            default_mode=data.get("default_mode", data.get("defaultMode", "default")),
            strip_prefix=data.get("strip_prefix", data.get("stripPrefix")),
            parse_theme_block=data.get(
                "parse_theme_block", data.get("parseTailwindTheme", True)
            ),
            parse_root=data.get("parse_root", data.get("parseRootVariables", True)),
            parse_dark_mode=data.get("parse_dark_mode", data.get("parseDarkMode", True)),
            file_name=data.get("file_name", data.get("fileName")),
        )


@dataclass(frozen=True)
class CSSVariable:
    """One custom property declaration found in a theme block."""

    name: str  # Without the leading "--"
    value: str
    line: int  # 1-based line of the declaration
    context: str  # ":root", "@theme", ".dark", ...

    @property
    def scheme(self) -> str:
        return DARK if self.context in DARK_CONTEXTS else LIGHT


DARK_CONTEXTS = frozenset(
    {".dark", '[data-theme="dark"]', "@media (prefers-color-scheme: dark)"}
)


def _blank_comments(css: str) -> str:
    """Remove comments, keeping their newlines so line numbers stay valid."""
    return COMMENT_PATTERN.sub(lambda m: "\n" * m.group(0).count("\n"), css)


def _matching_brace(css: str, open_index: int) -> int:
    """Index of the brace closing the one at open_index, or len(css)."""
    depth = 0
    for index in range(open_index, len(css)):
        char = css[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return len(css)


def _classify(prelude: str, in_dark_media: bool, options: CSSOptions) -> str | None:
    """Context name for a block's selector, or None if it is not scanned."""
    if prelude.startswith("@theme"):
        return "@theme" if options.parse_theme_block else None
    if DARK_CLASS_PATTERN.search(prelude):
        return ".dark" if options.parse_dark_mode else None
    if DARK_ATTRIBUTE_PATTERN.search(prelude):
        return '[data-theme="dark"]' if options.parse_dark_mode else None
    if ":root" in prelude:
        if in_dark_media:
            # Only the dark mode, never the default one
            if not options.parse_dark_mode:
                return None
            return "@media (prefers-color-scheme: dark)"
        return ":root" if options.parse_root else None
    return None


def _scan(
    css: str,
    start: int,
    end: int,
    in_dark_media: bool,
    options: CSSOptions,
    found: list[CSSVariable],
) -> None:
    cursor = start
    while cursor < end:
        open_index = css.find("{", cursor, end)
        if open_index == -1:
            return
        close_index = min(_matching_brace(css, open_index), end)
        prelude_start = max(
            css.rfind("}", cursor, open_index), css.rfind(";", cursor, open_index), cursor - 1
        )
        prelude = css[prelude_start + 1:open_index].strip()

        if prelude.startswith("@") and not prelude.startswith("@theme"):
            dark_media = in_dark_media or (
                prelude.lower().startswith("@media")
                and bool(DARK_MEDIA_PATTERN.search(prelude))
            )
            _scan(css, open_index + 1, close_index, dark_media, options, found)
        else:
            context = _classify(prelude, in_dark_media, options)
            if context is not None:
                found.extend(_declarations(css, open_index + 1, close_index, context))
        cursor = close_index + 1


def _declarations(css: str, start: int, end: int, context: str) -> list[CSSVariable]:
    body = css[start:end]
    line_offset = css.count("\n", 0, start)
    return [
        CSSVariable(
            name=match.group(1),
            value=match.group(2).strip(),
            line=line_offset + body.count("\n", 0, match.start(1)) + 1,
            context=context,
        )
        for match in DECLARATION_PATTERN.finditer(body)
    ]


def extract_variables(css: str, options: CSSOptions | None = None) -> list[CSSVariable]:
    """Find every custom property in a recognized theme block.

    Args:
        css: Stylesheet text.
        options: Which block kinds to scan.

    Returns:
        Declarations in document order.
    """
    options = options or CSSOptions()
    css = _blank_comments(css)
    found: list[CSSVariable] = []
    _scan(css, 0, len(css), False, options, found)
    return found


def variable_to_path(name: str, strip_prefix: str | None = None) -> tuple[str, ...]:
    """Convert a variable name to a token path.

    `font-family-sans` becomes ("fontFamily", "sans") and
    `color-primary-500` becomes ("color", "primary", "500").
    """
    name = name.lstrip("-")
    if strip_prefix:
        prefix = strip_prefix.lstrip("-")
        if prefix and name.startswith(prefix):
            name = name[len(prefix):]

    head: tuple[str, ...] = ()
    for compound, segment in COMPOUND_PREFIXES:
        if name == compound or name.startswith(compound + "-"):
            head = (segment,)
            name = name[len(compound) + 1:]
            break
    return head + tuple(part for part in name.split("-") if part)


def _is_font_family(value: str) -> bool:
    if value[:1] in ("'", '"'):
        return True
    return "," in value and "(" not in value and not is_color_text(value)


def detect_css_type(name: str, value: str) -> str:
    """Classify a raw custom property value.

    Precedence is fixed: color, dimension, duration, font family, font
    weight, number, string. A bare 100..900 only counts as a font weight
    when the variable name mentions font or weight.
    """
    value = value.strip()
    if is_color_text(value):
        return "color"
    match = DIMENSION_PATTERN.match(value)
    if match and match.group(2):
        return "dimension"
    if EXPLICIT_DURATION_PATTERN.match(value):
        return "duration"
    if _is_font_family(value):
        return "fontFamily"
    if is_font_weight_text(value):
        lowered = name.lower()
        if not is_number(value) or any(hint in lowered for hint in _WEIGHT_HINTS):
            return "fontWeight"
    if is_number(value):
        return "number"
    return "string"


class CSSVariablesAdapter(InputAdapter):
    """Parses CSS custom properties into a single-collection ThemeFile.

    Source is either the stylesheet text or a dict with `css` and, optionally,
    `fileName` and `options`.
    """

    @property
    def source_name(self) -> str:
        return "css"

    def read_file(self, file_path: Path) -> dict[str, Any]:
        return {"css": file_path.read_text(encoding="utf-8"), "fileName": file_path.stem}

    def validate(self, source: Any) -> ValidationResult:
        css = source.get("css") if isinstance(source, dict) else source
        errors: list[str] = []
        if css is None:
            errors.append("CSS content is required")
        elif not isinstance(css, str):
            errors.append("CSS content must be a string")
        elif not css.strip():
            errors.append("CSS content is empty")
        return ValidationResult.from_errors(errors)

    def _types_by_name(self, variables: list[CSSVariable]) -> dict[str, str]:
        """Detected type per variable name, following var() chains."""
        raw = {}
        for variable in variables:
            raw.setdefault(variable.name, variable.value)

        types: dict[str, str] = {}
        for name in raw:
            seen = {name}
            current = raw[name]
            match = VAR_PATTERN.match(current)
            while match and match.group(1) in raw and match.group(1) not in seen:
                seen.add(match.group(1))
                current = raw[match.group(1)]
                match = VAR_PATTERN.match(current)
            types[name] = "string" if match else detect_css_type(name, current)
        return types

    def parse_variable(
        self,
        variable: CSSVariable,
        types_by_name: dict[str, str],
        strip_prefix: str | None = None,
    ) -> Token:
        """Turn one declaration into a token; never fails."""
        match = VAR_PATTERN.match(variable.value)
        if match:
            target = match.group(1)
            return Token(
                type=types_by_name.get(target, "string"),
                value=Reference(".".join(variable_to_path(target, strip_prefix))),
            )

        type_tag = detect_css_type(variable.name, variable.value)
        parsed = self.registry.get(type_tag).parse_compact(variable.value)
        if parsed is None:
            logger.debug(
                "Keeping %s value of --%s as a string",
                type_tag,
                variable.name,
                extra={"token_path": variable.name},
            )
            type_tag, parsed = "string", variable.value
        return Token(type=type_tag, value=parsed)

    def _parse(self, source: Any, options: Any) -> ThemeFile:
        if isinstance(source, dict):
            options = options if options is not None else source.get("options")
            css = source["css"]
            file_name = source.get("fileName")
        else:
            css, file_name = source, None
        if not isinstance(options, CSSOptions):
            options = CSSOptions.from_dict(options)

        variables = extract_variables(css, options)
        types_by_name = self._types_by_name(variables)

        light = []
        dark = []
        for variable in variables:
            entry = (
                variable_to_path(variable.name, options.strip_prefix),
                self.parse_variable(variable, types_by_name, options.strip_prefix),
            )
            if not entry[0]:
                logger.debug("Skipping --%s: empty path after prefix", variable.name)
                continue
            (dark if variable.scheme == DARK else light).append(entry)

        entries_by_mode = {options.default_mode: light}
        if dark:
            entries_by_mode[DARK] = dark

        logger.debug(
            "Parsed %d light and %d dark variables",
            len(light),
            len(dark),
            extra={"source": self.source_name},
        )
        return ThemeFile(
            name=options.file_name or file_name or "CSS Theme",
            collections=(
                build_collection(
                    name=options.collection_name,
                    entries_by_mode=entries_by_mode,
                    default_mode=options.default_mode,
                ),
            ),
            meta=ThemeMeta(source="css"),
            description="Design tokens parsed from CSS",
        )


def parse_css(
    source: str | dict[str, Any], options: CSSOptions | dict[str, Any] | None = None
) -> ThemeFile:
    """Parse CSS custom properties with the default registry."""
    return CSSVariablesAdapter().parse(source, options)
