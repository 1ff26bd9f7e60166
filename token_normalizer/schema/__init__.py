"""Canonical token tree and its wire format."""

from .tokens import (
    BORDER_STYLES,
    DIMENSION_UNITS,
    DURATION_UNITS,
    FONT_WEIGHT_KEYWORDS,
    FONT_WEIGHTS,
    GRADIENT_TYPES,
    TIMING_KEYWORDS,
    Animation,
    Border,
    Color,
    CubicBezier,
    Dimension,
    Duration,
    Gradient,
    GradientStop,
    KeyframeStep,
    Keyframes,
    Reference,
    Shadow,
    ThemeFile,
    ThemeMeta,
    Token,
    TokenCollection,
    TokenGroup,
    TokenNode,
    Transition,
    Typography,
)

__all__ = [
    "BORDER_STYLES",
    "DIMENSION_UNITS",
    "DURATION_UNITS",
    "FONT_WEIGHT_KEYWORDS",
    "FONT_WEIGHTS",
    "GRADIENT_TYPES",
    "TIMING_KEYWORDS",
    "Animation",
    "Border",
    "Color",
    "CubicBezier",
    "Dimension",
    "Duration",
    "Gradient",
    "GradientStop",
    "KeyframeStep",
    "Keyframes",
    "Reference",
    "Shadow",
    "ThemeFile",
    "ThemeMeta",
    "Token",
    "TokenCollection",
    "TokenGroup",
    "TokenNode",
    "Transition",
    "Typography",
]
