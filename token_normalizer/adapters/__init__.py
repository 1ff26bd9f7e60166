"""Input adapters: Figma native variables, Figma compact export, CSS."""

from .base import InputAdapter, ValidationResult
from .css_vars import CSSOptions, CSSVariable, CSSVariablesAdapter, extract_variables, parse_css
from .figma_compact import CompactOptions, FigmaCompactAdapter, parse_compact
from .figma_native import FigmaNativeAdapter, NativeOptions, parse_native

ADAPTERS: dict[str, type[InputAdapter]] = {
    "css": CSSVariablesAdapter,
    "compact": FigmaCompactAdapter,
    "native": FigmaNativeAdapter,
}

__all__ = [
    "ADAPTERS",
    "CSSOptions",
    "CSSVariable",
    "CSSVariablesAdapter",
    "CompactOptions",
    "FigmaCompactAdapter",
    "FigmaNativeAdapter",
    "InputAdapter",
    "NativeOptions",
    "ValidationResult",
    "extract_variables",
    "parse_compact",
    "parse_css",
    "parse_native",
]
