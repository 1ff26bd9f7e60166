"""Color-space conversion between canonical RGBA and CSS color text.

Canonical colors are sRGB with channels in [0, 1]. Conversion to OKLCH runs
the full sRGB -> linear -> XYZ -> LMS -> Oklab -> OKLCH pipeline. Parsing an
oklch() string back is an approximate hue-rotated cosine reconstruction and
is not the inverse of the forward pipeline; round trips through OKLCH are
expected to drift.
"""

import math
import re

from .schema.tokens import Color

NAMED_COLORS: dict[str, Color] = {
    "black": Color(0.0, 0.0, 0.0, 1.0),
    "white": Color(1.0, 1.0, 1.0, 1.0),
    "transparent": Color(0.0, 0.0, 0.0, 0.0),
    "red": Color(1.0, 0.0, 0.0, 1.0),
    "green": Color(0.0, 0.502, 0.0, 1.0),
    "blue": Color(0.0, 0.0, 1.0, 1.0),
}

# Keywords that are colors but carry no concrete value
COLOR_KEYWORDS = ("currentcolor", "inherit")

HEX_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_NUM = r"(-?(?:\d+(?:\.\d*)?|\.\d+)(?:e-?\d+)?)"
RGB_PATTERN = re.compile(
    rf"^rgba?\(\s*{_NUM}(%?)\s*[,\s]\s*{_NUM}(%?)\s*[,\s]\s*{_NUM}(%?)"
    rf"\s*(?:[,/]\s*{_NUM}(%?))?\s*\)$",
    re.IGNORECASE,
)
HSL_PATTERN = re.compile(
    rf"^hsla?\(\s*{_NUM}(?:deg)?\s*[,\s]\s*{_NUM}%\s*[,\s]\s*{_NUM}%"
    rf"\s*(?:[,/]\s*{_NUM}(%?))?\s*\)$",
    re.IGNORECASE,
)
OKLCH_PATTERN = re.compile(
    rf"^oklch\(\s*{_NUM}(%?)\s+{_NUM}\s+{_NUM}(?:deg)?\s*(?:/\s*{_NUM}(%?))?\s*\)$",
    re.IGNORECASE,
)

# sRGB (D65) linear -> CIE XYZ
_RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)
# CIE XYZ -> LMS cone response
_XYZ_TO_LMS = (
    (0.8189330101, 0.3618667424, -0.1288597137),
    (0.0329845436, 0.9293118715, 0.0361456387),
    (0.0482003018, 0.2643662691, 0.6338517070),
)
# Nonlinear LMS -> Oklab
_LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _multiply(
    matrix: tuple[tuple[float, float, float], ...], vector: tuple[float, ...]
) -> tuple[float, float, float]:
    return tuple(  # type: ignore[return-value]
        row[0] * vector[0] + row[1] * vector[1] + row[2] * vector[2]
        for row in matrix
    )


def _byte(channel: float) -> int:
    return int(round(channel * 255))


def _alpha(value: str, percent: str) -> float:
    alpha = float(value)
    return _clamp(alpha / 100 if percent else alpha)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_hex(text: str) -> Color | None:
    """Parse #rgb, #rgba, #rrggbb or #rrggbbaa.

    Args:
        text: Hex color string including the leading '#'.

    Returns:
        Color, or None if the string is not a hex color.
    """
    text = text.strip()
    if not HEX_PATTERN.match(text):
        return None

    digits = text[1:]
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)

    r = int(digits[0:2], 16) / 255
    g = int(digits[2:4], 16) / 255
    b = int(digits[4:6], 16) / 255
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return Color(r, g, b, a)


def parse_rgb(text: str) -> Color | None:
    """Parse rgb()/rgba() with comma or space separators.

    Channels may be 0-255 numbers or percentages; alpha may follow a comma
    or a slash and may itself be a percentage.
    """
    match = RGB_PATTERN.match(text.strip())
    if not match:
        return None

    channels = []
    for index in range(3):
        raw, percent = match.group(index * 2 + 1), match.group(index * 2 + 2)
        value = float(raw) / 100 if percent else float(raw) / 255
        channels.append(_clamp(value))

    a = _alpha(match.group(7), match.group(8)) if match.group(7) else 1.0
    return Color(channels[0], channels[1], channels[2], a)


def hsl_to_color(hue: float, sat: float, light: float, alpha: float = 1.0) -> Color:
    """Convert HSL components to a Color.

    Args:
        hue: Hue in degrees.
        sat: Saturation in [0, 1].
        light: Lightness in [0, 1].
        alpha: Alpha in [0, 1].
    """
    hue = hue % 360
    c = (1 - abs(2 * light - 1)) * sat
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = light - c / 2

    if hue < 60:
        r1, g1, b1 = c, x, 0.0
    elif hue < 120:
        r1, g1, b1 = x, c, 0.0
    elif hue < 180:
        r1, g1, b1 = 0.0, c, x
    elif hue < 240:
        r1, g1, b1 = 0.0, x, c
    elif hue < 300:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x

    return Color(_clamp(r1 + m), _clamp(g1 + m), _clamp(b1 + m), _clamp(alpha))


def parse_hsl(text: str) -> Color | None:
    """Parse hsl()/hsla()."""
    match = HSL_PATTERN.match(text.strip())
    if not match:
        return None

    hue = float(match.group(1))
    sat = _clamp(float(match.group(2)) / 100)
    light = _clamp(float(match.group(3)) / 100)
    a = _alpha(match.group(4), match.group(5)) if match.group(4) else 1.0
    return hsl_to_color(hue, sat, light, a)


def parse_oklch(text: str) -> Color | None:
    """Parse oklch() with the approximate cosine reconstruction.

    The result is close to, but not the same as, the color that to_oklch()
    started from.
    """
    match = OKLCH_PATTERN.match(text.strip())
    if not match:
        return None

    lightness = float(match.group(1))
    if match.group(2):
        lightness /= 100
    chroma = float(match.group(3))
    hue = math.radians(float(match.group(4)))
    a = _alpha(match.group(5), match.group(6)) if match.group(5) else 1.0

    r = _clamp(lightness + chroma * math.cos(hue))
    g = _clamp(lightness + chroma * math.cos(hue - 2.094))
    b = _clamp(lightness + chroma * math.cos(hue + 2.094))
    return Color(r, g, b, a)


def parse_named(text: str) -> Color | None:
    """Look up one of the supported CSS color keywords."""
    return NAMED_COLORS.get(text.strip().lower())


def is_color_text(text: str) -> bool:
    """Whether a string is written in a recognized color syntax."""
    lowered = text.strip().lower()
    if lowered in COLOR_KEYWORDS:
        return True
    return parse_color(lowered) is not None


def parse_color(text: str) -> Color | None:
    """Parse any supported color syntax.

    Args:
        text: Hex, rgb(), hsl(), oklch() or named color.

    Returns:
        Color, or None if the text is not a parseable color.
    """
    text = text.strip()
    if not text:
        return None
    if text.startswith("#"):
        return parse_hex(text)

    lowered = text.lower()
    if lowered.startswith("rgb"):
        return parse_rgb(lowered)
    if lowered.startswith("hsl"):
        return parse_hsl(lowered)
    if lowered.startswith("oklch"):
        return parse_oklch(lowered)
    return parse_named(lowered)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def to_hex(color: Color) -> str:
    """Format as #rrggbb, or #rrggbbaa when alpha is below 1."""
    channels = [_byte(color.r), _byte(color.g), _byte(color.b)]
    if color.a < 1:
        channels.append(_byte(color.a))
    return "#" + "".join(f"{c:02x}" for c in channels)


def to_rgb(color: Color) -> str:
    """Format as rgb(), or rgba() when alpha is below 1."""
    r, g, b = _byte(color.r), _byte(color.g), _byte(color.b)
    if color.a < 1:
        return f"rgba({r}, {g}, {b}, {color.a:.2f})"
    return f"rgb({r}, {g}, {b})"


def to_hsl(color: Color) -> str:
    """Format as hsl(), or hsla() when alpha is below 1."""
    r, g, b = color.r, color.g, color.b
    high = max(r, g, b)
    low = min(r, g, b)
    h = 0.0
    s = 0.0
    light = (high + low) / 2

    if high != low:
        d = high - low
        s = d / (2 - high - low) if light > 0.5 else d / (high + low)
        if high == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    hue = int(round(h * 360))
    sat = int(round(s * 100))
    lum = int(round(light * 100))
    if color.a < 1:
        return f"hsla({hue}, {sat}%, {lum}%, {color.a:.2f})"
    return f"hsl({hue}, {sat}%, {lum}%)"


def _to_linear(channel: float) -> float:
    if channel <= 0.04045:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def to_oklab(color: Color) -> tuple[float, float, float]:
    """Convert to Oklab (L, a, b) through linear sRGB, XYZ and LMS."""
    linear = (_to_linear(color.r), _to_linear(color.g), _to_linear(color.b))
    xyz = _multiply(_RGB_TO_XYZ, linear)
    lms = _multiply(_XYZ_TO_LMS, xyz)
    lms_root = tuple(math.copysign(abs(v) ** (1 / 3), v) for v in lms)
    return _multiply(_LMS_TO_OKLAB, lms_root)


def to_oklch_components(color: Color) -> tuple[float, float, float]:
    """Convert to (lightness 0-1, chroma, hue degrees)."""
    lightness, a, b = to_oklab(color)
    chroma = math.sqrt(a * a + b * b)
    hue = math.degrees(math.atan2(b, a))
    if hue < 0:
        hue += 360
    return lightness, chroma, hue


def to_oklch(color: Color) -> str:
    """Format as oklch(L% C H[ / a])."""
    lightness, chroma, hue = to_oklch_components(color)
    body = f"{lightness * 100:.2f}% {chroma:.4f} {hue:.2f}"
    if color.a < 1:
        return f"oklch({body} / {color.a:.2f})"
    return f"oklch({body})"


COLOR_FORMATTERS = {
    "hex": to_hex,
    "rgb": to_rgb,
    "hsl": to_hsl,
    "oklch": to_oklch,
}


def color_to_text(color: Color, color_format: str = "hex") -> str:
    """Format a color in one of: hex, rgb, hsl, oklch.

    Raises:
        ValueError: If the format is not supported.
    """
    try:
        formatter = COLOR_FORMATTERS[color_format]
    except KeyError:
        raise ValueError(f"Unsupported color format: {color_format}") from None
    return formatter(color)
