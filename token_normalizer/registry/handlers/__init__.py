"""Built-in token type handlers."""

from ..base import TokenTypeHandler
from .animation import AnimationHandler, KeyframesHandler
from .border import BorderHandler
from .color import ColorHandler
from .dimension import DimensionHandler
from .font import FontFamilyHandler, FontWeightHandler
from .gradient import GradientHandler
from .primitives import BooleanHandler, NumberHandler, StringHandler
from .shadow import ShadowHandler
from .timing import CubicBezierHandler, DurationHandler, TransitionHandler
from .typography import TypographyHandler


def builtin_handlers() -> list[TokenTypeHandler]:
    """Fresh instances of every built-in handler."""
    return [
        ColorHandler(),
        TypographyHandler(),
        GradientHandler(),
        ShadowHandler(),
        DimensionHandler(),
        FontWeightHandler(),
        FontFamilyHandler(),
        BorderHandler(),
        DurationHandler(),
        CubicBezierHandler(),
        BooleanHandler(),
        TransitionHandler(),
        KeyframesHandler(),
        AnimationHandler(),
        NumberHandler(),
        StringHandler(),
    ]


__all__ = [
    "AnimationHandler",
    "BooleanHandler",
    "BorderHandler",
    "ColorHandler",
    "CubicBezierHandler",
    "DimensionHandler",
    "DurationHandler",
    "FontFamilyHandler",
    "FontWeightHandler",
    "GradientHandler",
    "KeyframesHandler",
    "NumberHandler",
    "ShadowHandler",
    "StringHandler",
    "TransitionHandler",
    "TypographyHandler",
    "builtin_handlers",
]
