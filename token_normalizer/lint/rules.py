"""Built-in lint rules.

Rules fall into four groups: naming and structure, value validity per
token type, references, and modes. Value rules share ValueRule, which
walks every token of the handled types and reports each problem found in
its value; references are never checked by value rules.
"""

import json
import math
import re
from collections.abc import Iterable
from typing import Any

from ..references import find_broken_references, find_reference_cycles
from ..schema.tokens import (
    BORDER_STYLES,
    DIMENSION_UNITS,
    DURATION_UNITS,
    FONT_WEIGHT_KEYWORDS,
    FONT_WEIGHTS,
    GRADIENT_TYPES,
    Animation,
    Border,
    Color,
    CubicBezier,
    Dimension,
    Duration,
    Gradient,
    Reference,
    Shadow,
    ThemeFile,
    TokenCollection,
    Transition,
    Typography,
)
from ..tree import path_key, walk_tokens
from .base import LintRule, LintRuleContext, Severity

MAX_DEPTH = 4

CONVENTION_PATTERNS = (
    ("kebab", re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")),
    ("camel", re.compile(r"^[a-z][a-zA-Z0-9]*$")),
    ("pascal", re.compile(r"^[A-Z][a-zA-Z0-9]*$")),
    ("snake", re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")),
)
INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


def detect_naming_convention(name: str) -> str | None:
    """kebab, camel, pascal or snake; None for anything else."""
    for convention, pattern in CONVENTION_PATTERNS:
        if pattern.match(name):
            return convention
    return None


def to_kebab_case(text: str) -> str:
    text = re.sub(r"([a-z])([A-Z])", r"\1-\2", text)
    return re.sub(r"[_\s]+", "-", text).lower()


def mode_label(collection: TokenCollection, mode: str) -> str:
    return f"{collection.name}/{mode}"


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and math.isfinite(value)


def color_problems(color: Any, label: str = "color") -> list[str]:
    """Problems with a color value; empty when valid."""
    if not isinstance(color, Color):
        return [f"Invalid {label}: expected an RGBA color"]
    problems = []
    if not all(_is_number(c) and 0 <= c <= 1 for c in (color.r, color.g, color.b)):
        problems.append(f"Invalid {label} value: RGB values must be between 0 and 1")
    if not (_is_number(color.a) and 0 <= color.a <= 1):
        problems.append(f"Invalid {label} alpha value: must be between 0 and 1")
    return problems


def dimension_problems(
    dimension: Any, label: str = "dimension", allow_negative: bool = True
) -> list[str]:
    """Problems with a length value; empty when valid."""
    if not isinstance(dimension, Dimension):
        return [f"Invalid {label}: expected a value with a unit"]
    problems = []
    if not _is_number(dimension.value):
        problems.append(f"Invalid {label}: value must be a finite number")
    elif not allow_negative and dimension.value < 0:
        problems.append(f"Invalid {label}: value must not be negative")
    if dimension.unit not in DIMENSION_UNITS:
        problems.append(
            f"Invalid {label} unit \"{dimension.unit}\": "
            f"expected one of {', '.join(DIMENSION_UNITS)}"
        )
    return problems


def bezier_problems(curve: Any) -> list[str]:
    if not isinstance(curve, CubicBezier):
        return ["Invalid cubic bezier: expected four control point coordinates"]
    points = (curve.x1, curve.y1, curve.x2, curve.y2)
    if not all(_is_number(p) for p in points):
        return ["Invalid cubic bezier: control points must be finite numbers"]
    if not (0 <= curve.x1 <= 1 and 0 <= curve.x2 <= 1):
        return ["Invalid cubic bezier: x1 and x2 must be between 0 and 1"]
    return []


# ---------------------------------------------------------------------------
# Naming and structure
# ---------------------------------------------------------------------------


class InconsistentNamingRule(LintRule):
    """Mixed naming conventions inside one collection."""

    @property
    def rule_id(self) -> str:
        return "inconsistent-naming"

    @property
    def name(self) -> str:
        return "Inconsistent Naming"

    @property
    def description(self) -> str:
        return "Checks for mixed naming conventions (kebab-case, camelCase, etc.)"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection in theme.collections:
            conventions: dict[str, list[str]] = {}
            for group in collection.tokens.values():
                for path, _ in group.walk():
                    for segment in path:
                        convention = detect_naming_convention(segment)
                        if convention is None:
                            continue
                        examples = conventions.setdefault(convention, [])
                        if segment not in examples:
                            examples.append(segment)

            if len(conventions) > 1:
                summary = "; ".join(
                    f"{convention}: {', '.join(examples[:3])}"
                    for convention, examples in conventions.items()
                )
                context.report(
                    f'Mixed naming conventions in collection "{collection.name}": {summary}',
                    collection=collection.name,
                    suggestion="Use consistent kebab-case naming throughout",
                )


class InvalidTokenNameRule(LintRule):
    """Segments that cannot become CSS custom property names."""

    @property
    def rule_id(self) -> str:
        return "invalid-token-name"

    @property
    def name(self) -> str:
        return "Invalid Token Name"

    @property
    def description(self) -> str:
        return "Checks for token names with invalid characters or patterns"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection, mode, path, _ in walk_tokens(theme):
            for segment in path:
                if segment[:1].isdigit():
                    context.report(
                        f'Token name "{segment}" starts with a number',
                        path=path_key(path),
                        collection=mode_label(collection, mode),
                        suggestion=f'Prefix with a letter: "{to_kebab_case("n" + segment)}"',
                    )
                if INVALID_NAME_CHARS.search(segment):
                    context.report(
                        f'Token name "{segment}" contains invalid characters',
                        path=path_key(path),
                        collection=mode_label(collection, mode),
                        suggestion="Use only letters, numbers, hyphens, and underscores",
                    )


class DeepNestingRule(LintRule):
    """Token paths deeper than MAX_DEPTH segments."""

    @property
    def rule_id(self) -> str:
        return "deep-nesting"

    @property
    def name(self) -> str:
        return "Deep Nesting"

    @property
    def description(self) -> str:
        return f"Warns when token paths are deeply nested (>{MAX_DEPTH} levels)"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection, mode, path, _ in walk_tokens(theme):
            if len(path) > MAX_DEPTH:
                context.report(
                    f"Token path too deep ({len(path)} levels): {path_key(path)}",
                    path=path_key(path),
                    collection=mode_label(collection, mode),
                    suggestion=(
                        f"Consider flattening to {MAX_DEPTH} levels or less "
                        "for easier maintenance"
                    ),
                )


class EmptyCollectionRule(LintRule):
    @property
    def rule_id(self) -> str:
        return "empty-collection"

    @property
    def name(self) -> str:
        return "Empty Collection"

    @property
    def description(self) -> str:
        return "Warns about collections with no tokens"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection in theme.collections:
            if not any(group.token_count() for group in collection.tokens.values()):
                context.report(
                    f'Collection "{collection.name}" has no tokens',
                    collection=collection.name,
                    suggestion="Remove empty collections or add tokens",
                )


class MissingDescriptionRule(LintRule):
    @property
    def rule_id(self) -> str:
        return "missing-description"

    @property
    def name(self) -> str:
        return "Missing Description"

    @property
    def description(self) -> str:
        return "Checks for tokens that lack descriptions"

    @property
    def default_severity(self) -> Severity:
        return Severity.INFO

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection, mode, path, token in walk_tokens(theme):
            if not token.description:
                context.report(
                    "Token missing description",
                    path=path_key(path),
                    collection=mode_label(collection, mode),
                    suggestion="Add a $description field to document the token's purpose",
                )


# ---------------------------------------------------------------------------
# Value validity
# ---------------------------------------------------------------------------


class ValueRule(LintRule):
    """Base for rules that validate the values of some token types."""

    type_tags: tuple[str, ...] = ()
    suggestion: str | None = None

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    def problems(self, value: Any) -> Iterable[str]:
        """Problems with one non-reference value; empty when valid."""
        raise NotImplementedError

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection, mode, path, token in walk_tokens(theme):
            if token.type not in self.type_tags or isinstance(token.value, Reference):
                continue
            for problem in self.problems(token.value):
                context.report(
                    problem,
                    path=path_key(path),
                    collection=mode_label(collection, mode),
                    suggestion=self.suggestion,
                )


class InvalidColorValueRule(ValueRule):
    type_tags = ("color",)

    @property
    def rule_id(self) -> str:
        return "invalid-color-value"

    @property
    def name(self) -> str:
        return "Invalid Color Value"

    @property
    def description(self) -> str:
        return "Checks for color tokens with invalid RGBA values"

    def problems(self, value: Any) -> list[str]:
        return color_problems(value)


class InvalidDimensionValueRule(ValueRule):
    type_tags = ("dimension",)
    suggestion = f"Use a finite number with one of: {', '.join(DIMENSION_UNITS)}"

    @property
    def rule_id(self) -> str:
        return "invalid-dimension-value"

    @property
    def name(self) -> str:
        return "Invalid Dimension Value"

    @property
    def description(self) -> str:
        return "Checks for dimension tokens with a bad number or unit"

    def problems(self, value: Any) -> list[str]:
        return dimension_problems(value)


class InvalidDurationValueRule(ValueRule):
    type_tags = ("duration",)

    @property
    def rule_id(self) -> str:
        return "invalid-duration-value"

    @property
    def name(self) -> str:
        return "Invalid Duration Value"

    @property
    def description(self) -> str:
        return "Checks for negative durations or unknown time units"

    def problems(self, value: Any) -> list[str]:
        if not isinstance(value, Duration):
            return ["Invalid duration: expected a value with a ms or s unit"]
        problems = []
        if not _is_number(value.value) or value.value < 0:
            problems.append("Invalid duration: value must be a non-negative number")
        if value.unit not in DURATION_UNITS:
            problems.append(f'Invalid duration unit "{value.unit}": expected ms or s')
        return problems


class InvalidFontWeightRule(ValueRule):
    type_tags = ("fontWeight",)
    suggestion = "Use a multiple of 100 between 100 and 900"

    @property
    def rule_id(self) -> str:
        return "invalid-font-weight"

    @property
    def name(self) -> str:
        return "Invalid Font Weight"

    @property
    def description(self) -> str:
        return "Checks that font weights are 100..900 or a known keyword"

    def problems(self, value: Any) -> list[str]:
        if isinstance(value, str) and value.lower() in FONT_WEIGHT_KEYWORDS:
            return []
        if _is_number(value) and value in FONT_WEIGHTS:
            return []
        return [f"Invalid font weight: {value!r}"]


class InvalidTypographyValueRule(ValueRule):
    type_tags = ("typography",)

    @property
    def rule_id(self) -> str:
        return "invalid-typography-value"

    @property
    def name(self) -> str:
        return "Invalid Typography Value"

    @property
    def description(self) -> str:
        return "Checks typography tokens for missing families and bad sizes"

    def problems(self, value: Any) -> list[str]:
        if not isinstance(value, Typography):
            return ["Invalid typography: expected a typography object"]
        problems = []
        if not value.font_family:
            problems.append("Invalid typography: font family is empty")
        problems.extend(dimension_problems(value.font_size, "font size", allow_negative=False))
        if value.font_weight not in FONT_WEIGHTS:
            problems.append(f"Invalid typography: font weight {value.font_weight!r}")
        if isinstance(value.line_height, Dimension):
            problems.extend(
                dimension_problems(value.line_height, "line height", allow_negative=False)
            )
        elif not (_is_number(value.line_height) and value.line_height > 0):
            problems.append("Invalid typography: line height must be positive")
        if value.letter_spacing is not None:
            problems.extend(dimension_problems(value.letter_spacing, "letter spacing"))
        return problems


class InvalidShadowValueRule(ValueRule):
    type_tags = ("shadow",)

    @property
    def rule_id(self) -> str:
        return "invalid-shadow-value"

    @property
    def name(self) -> str:
        return "Invalid Shadow Value"

    @property
    def description(self) -> str:
        return "Checks shadow layers for bad offsets, blur and colors"

    def problems(self, value: Any) -> list[str]:
        layers = value if isinstance(value, tuple | list) else (value,)
        if not layers:
            return ["Invalid shadow: no layers"]
        problems = []
        for layer in layers:
            if not isinstance(layer, Shadow):
                problems.append("Invalid shadow: expected a shadow object")
                continue
            problems.extend(dimension_problems(layer.offset_x, "shadow offset"))
            problems.extend(dimension_problems(layer.offset_y, "shadow offset"))
            problems.extend(dimension_problems(layer.blur, "shadow blur", allow_negative=False))
            if layer.spread is not None:
                problems.extend(dimension_problems(layer.spread, "shadow spread"))
            problems.extend(color_problems(layer.color, "shadow color"))
        return problems


class InvalidGradientValueRule(ValueRule):
    type_tags = ("gradient",)

    @property
    def rule_id(self) -> str:
        return "invalid-gradient-value"

    @property
    def name(self) -> str:
        return "Invalid Gradient Value"

    @property
    def description(self) -> str:
        return "Checks gradient type, stop count, stop positions and colors"

    def problems(self, value: Any) -> list[str]:
        if not isinstance(value, Gradient):
            return ["Invalid gradient: expected a gradient object"]
        problems = []
        if value.type not in GRADIENT_TYPES:
            problems.append(f'Invalid gradient type "{value.type}"')
        if len(value.stops) < 2:
            problems.append("Invalid gradient: at least two color stops are required")
        for stop in value.stops:
            if not (_is_number(stop.position) and 0 <= stop.position <= 1):
                problems.append("Invalid gradient stop position: must be between 0 and 1")
            problems.extend(color_problems(stop.color, "gradient stop color"))
        return problems


class InvalidBorderValueRule(ValueRule):
    type_tags = ("border",)

    @property
    def rule_id(self) -> str:
        return "invalid-border-value"

    @property
    def name(self) -> str:
        return "Invalid Border Value"

    @property
    def description(self) -> str:
        return "Checks border width, style and color"

    def problems(self, value: Any) -> list[str]:
        if not isinstance(value, Border):
            return ["Invalid border: expected a border object"]
        problems = dimension_problems(value.width, "border width", allow_negative=False)
        if value.style not in BORDER_STYLES:
            problems.append(f'Invalid border style "{value.style}"')
        problems.extend(color_problems(value.color, "border color"))
        return problems


class InvalidCubicBezierRule(ValueRule):
    type_tags = ("cubicBezier", "transition", "animation")
    suggestion = "Keep the x coordinates of both control points between 0 and 1"

    @property
    def rule_id(self) -> str:
        return "invalid-cubic-bezier"

    @property
    def name(self) -> str:
        return "Invalid Cubic Bezier"

    @property
    def description(self) -> str:
        return "Checks easing curves, including those inside transitions and animations"

    def problems(self, value: Any) -> list[str]:
        if isinstance(value, Transition | Animation):
            timing = value.timing_function
            return bezier_problems(timing) if isinstance(timing, CubicBezier) else []
        return bezier_problems(value)


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


class BrokenReferenceRule(LintRule):
    @property
    def rule_id(self) -> str:
        return "broken-reference"

    @property
    def name(self) -> str:
        return "Broken Reference"

    @property
    def description(self) -> str:
        return "Checks for token references that point to non-existent tokens"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for broken in find_broken_references(theme):
            context.report(
                f'Broken reference: "{broken.ref}" not found',
                path=broken.path,
                collection=f"{broken.collection}/{broken.mode}",
            )


class CircularReferenceRule(LintRule):
    """One message per reference cycle, naming every member."""

    @property
    def rule_id(self) -> str:
        return "circular-reference"

    @property
    def name(self) -> str:
        return "Circular Reference"

    @property
    def description(self) -> str:
        return "Checks for reference chains that loop back on themselves"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for cycle in find_reference_cycles(theme):
            context.report(
                f"Circular reference: {' -> '.join(cycle + [cycle[0]])}",
                path=cycle[0],
                suggestion="Point one of the tokens at a concrete value",
            )


class DuplicateValuesRule(LintRule):
    @property
    def rule_id(self) -> str:
        return "duplicate-values"

    @property
    def name(self) -> str:
        return "Duplicate Values"

    @property
    def description(self) -> str:
        return "Checks for tokens with identical values that could be consolidated"

    @property
    def default_severity(self) -> Severity:
        return Severity.INFO

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection in theme.collections:
            for mode, group in collection.tokens.items():
                by_value: dict[str, list[str]] = {}
                for path, token in group.walk():
                    if isinstance(token.value, Reference):
                        continue
                    key = json.dumps(
                        [token.type, context.registry.value_to_dict(token.type, token.value)],
                        sort_keys=True,
                        default=str,
                    )
                    by_value.setdefault(key, []).append(path_key(path))

                for paths in by_value.values():
                    if len(paths) > 1:
                        context.report(
                            f"Duplicate values found: {', '.join(paths)}",
                            collection=mode_label(collection, mode),
                            suggestion="Consider using token references to avoid duplication",
                        )


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


class ModeConsistencyRule(LintRule):
    """Every token path should exist in every mode of its collection."""

    @property
    def rule_id(self) -> str:
        return "mode-consistency"

    @property
    def name(self) -> str:
        return "Mode Consistency"

    @property
    def description(self) -> str:
        return "Checks that every mode of a collection defines the same token paths"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection in theme.collections:
            if len(collection.modes) < 2:
                continue
            paths_by_mode = {
                mode: [path_key(path) for path, _ in collection.mode_tokens(mode).walk()]
                for mode in collection.modes
            }
            all_paths: list[str] = []
            for paths in paths_by_mode.values():
                all_paths.extend(p for p in paths if p not in all_paths)

            for mode, paths in paths_by_mode.items():
                present = set(paths)
                for path in all_paths:
                    if path not in present:
                        context.report(
                            f'Token "{path}" is missing in mode "{mode}"',
                            path=path,
                            collection=mode_label(collection, mode),
                            suggestion=f'Define "{path}" in mode "{mode}" or remove it elsewhere',
                        )


class MissingDefaultModeRule(LintRule):
    @property
    def rule_id(self) -> str:
        return "missing-default-mode"

    @property
    def name(self) -> str:
        return "Missing Default Mode"

    @property
    def description(self) -> str:
        return "Checks that each collection's default mode exists and has a token tree"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        for collection in theme.collections:
            default = collection.default_mode
            if not default or default not in collection.modes or default not in collection.tokens:
                context.report(
                    f'Collection "{collection.name}" has no tokens for its default '
                    f'mode "{default}"',
                    collection=collection.name,
                    suggestion=f"Set defaultMode to one of: {', '.join(collection.modes)}",
                )


class HiddenFromPublishingRule(LintRule):
    """Figma variables marked hidden still end up in the theme."""

    @property
    def rule_id(self) -> str:
        return "hidden-from-publishing"

    @property
    def name(self) -> str:
        return "Hidden From Publishing"

    @property
    def description(self) -> str:
        return "Reports tokens whose Figma variable is hidden from publishing"

    @property
    def default_severity(self) -> Severity:
        return Severity.INFO

    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        seen: set[tuple[str, str]] = set()
        for collection, _, path, token in walk_tokens(theme):
            figma = (token.extensions or {}).get("com.figma") or {}
            key = (collection.name, path_key(path))
            if figma.get("hiddenFromPublishing") and key not in seen:
                seen.add(key)
                context.report(
                    "Token is hidden from publishing in Figma",
                    path=path_key(path),
                    collection=collection.name,
                    suggestion="Remove it from the theme or publish the variable",
                )


def builtin_rules() -> list[LintRule]:
    """Fresh instances of every built-in rule."""
    return [
        InconsistentNamingRule(),
        InvalidTokenNameRule(),
        DeepNestingRule(),
        EmptyCollectionRule(),
        MissingDescriptionRule(),
        InvalidColorValueRule(),
        InvalidDimensionValueRule(),
        InvalidDurationValueRule(),
        InvalidFontWeightRule(),
        InvalidTypographyValueRule(),
        InvalidShadowValueRule(),
        InvalidGradientValueRule(),
        InvalidBorderValueRule(),
        InvalidCubicBezierRule(),
        BrokenReferenceRule(),
        CircularReferenceRule(),
        DuplicateValuesRule(),
        ModeConsistencyRule(),
        MissingDefaultModeRule(),
        HiddenFromPublishingRule(),
    ]
