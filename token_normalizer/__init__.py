"""Design token normalization for Figma and CSS sources.

This package parses design tokens from heterogeneous sources into one
canonical, immutable tree and checks that tree.

Main components:
- schema: Token value types, the token tree and its JSON wire format
- registry: Per-type detection, parsing and rendering dispatch
- adapters: Parsers for Figma native variables, the Figma compact export
  and CSS custom properties
- references: Reference resolution and cycle detection
- lint: Rule engine, built-in rules and configuration
"""

from .adapters import (
    CSSVariablesAdapter,
    FigmaCompactAdapter,
    FigmaNativeAdapter,
    parse_compact,
    parse_css,
    parse_native,
)
from .errors import (
    CircularReferenceError,
    ConfigurationError,
    InvalidSourceError,
    TokenNormalizerError,
    UnknownTokenTypeError,
)
from .lint import LintConfig, LintResult, TokenLinter, lint_theme
from .references import (
    find_broken_references,
    find_cycles,
    find_reference_cycles,
    resolve_value,
)
from .registry import TokenTypeRegistry, create_registry, get_default_registry
from .schema import Reference, ThemeFile, Token, TokenCollection, TokenGroup
from .schema.codec import theme_from_dict, theme_to_dict

__version__ = "0.1.0"

__all__ = [
    "CSSVariablesAdapter",
    "CircularReferenceError",
    "ConfigurationError",
    "FigmaCompactAdapter",
    "FigmaNativeAdapter",
    "InvalidSourceError",
    "LintConfig",
    "LintResult",
    "Reference",
    "ThemeFile",
    "Token",
    "TokenCollection",
    "TokenGroup",
    "TokenLinter",
    "TokenNormalizerError",
    "TokenTypeRegistry",
    "UnknownTokenTypeError",
    "create_registry",
    "find_broken_references",
    "find_cycles",
    "find_reference_cycles",
    "get_default_registry",
    "lint_theme",
    "parse_compact",
    "parse_css",
    "parse_native",
    "resolve_value",
    "theme_from_dict",
    "theme_to_dict",
]
