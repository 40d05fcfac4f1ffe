"""
HueForge Color Space Math

Pure conversions between RGB, HSL and hex, plus the WCAG luminance/contrast
helpers and the weighted perceptual distance used by the scoring engine.
All hue, saturation and lightness values live in [0, 1].
"""

import math
import re
from typing import Optional, Sequence, Tuple, Union

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]
ColorLike = Union[str, Sequence[int]]

HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})$")

WHITE = "#FFFFFF"
BLACK = "#000000"

QUANTIZE_LEVELS = 16
QUANTIZE_STEP = 255 / (QUANTIZE_LEVELS - 1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB to HSL.

    Args:
        r, g, b: Channels in [0, 255]

    Returns:
        Tuple of (H, S, L), each in [0, 1]. Achromatic input gives H = S = 0.
    """
    r /= 255
    g /= 255
    b /= 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    l = (max_c + min_c) / 2

    if max_c == min_c:
        return 0.0, 0.0, l

    d = max_c - min_c
    s = d / (2 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)

    if max_c == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif max_c == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4

    return h / 6, s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL back to 8-bit RGB.

    Args:
        h: Hue [0, 1]
        s: Saturation [0, 1]
        l: Lightness [0, 1]

    Returns:
        Tuple of (R, G, B) integers in [0, 255]
    """
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format RGB as an uppercase ``#RRGGBB`` string, clamping each channel."""
    r_int = max(0, min(255, int(r)))
    g_int = max(0, min(255, int(g)))
    b_int = max(0, min(255, int(b)))
    return f"#{r_int:02X}{g_int:02X}{b_int:02X}"


def hex_to_rgb(hex_color: Optional[str]) -> Optional[RGB]:
    """
    Parse a 6-digit hex color (leading ``#`` optional, any case).

    Returns:
        (R, G, B) tuple, or None when the input is not a valid hex color
    """
    if not isinstance(hex_color, str):
        return None
    match = HEX_RE.match(hex_color.strip())
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(hex_color: Optional[str]) -> Optional[HSL]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hsl(*rgb)


def normalize_hex(hex_color: Optional[str]) -> Optional[str]:
    """Return the canonical ``#RRGGBB`` form of a hex color, or None."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hex(*rgb)


def _as_rgb(color: ColorLike) -> Optional[RGB]:
    if isinstance(color, str):
        return hex_to_rgb(color)
    if color is None or len(color) < 3:
        return None
    return int(color[0]), int(color[1]), int(color[2])


def _linearize(channel: float) -> float:
    value = channel / 255
    if value <= 0.03928:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: Sequence[int]) -> float:
    """
    WCAG relative luminance of an sRGB color.

    Args:
        rgb: (R, G, B) in [0, 255]

    Returns:
        Luminance in [0, 1]
    """
    r, g, b = (_linearize(c) for c in rgb[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: ColorLike, color2: ColorLike) -> Optional[float]:
    """
    WCAG contrast ratio between two colors given as hex strings or RGB triples.

    Returns:
        Ratio in [1, 21], or None if either color cannot be parsed
    """
    rgb1 = _as_rgb(color1)
    rgb2 = _as_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return None

    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def perceptual_distance(rgb1: Sequence[int], rgb2: Sequence[int]) -> float:
    """
    Red-mean weighted Euclidean distance, normalized to [0, 1].

    This is a cheap approximation of perceptual non-uniformity, not CIEDE2000.
    Scores and rankings depend on it, so the weights must stay as they are.
    """
    r1, g1, b1 = rgb1[:3]
    r2, g2, b2 = rgb2[:3]

    r_mean = (r1 + r2) / 2
    r_weight = 2 + r_mean / 256
    g_weight = 4.0
    b_weight = 2 + (255 - r_mean) / 256

    distance = math.sqrt(
        r_weight * (r1 - r2) ** 2
        + g_weight * (g1 - g2) ** 2
        + b_weight * (b1 - b2) ** 2
    )
    max_distance = math.sqrt(r_weight * 65025 + g_weight * 65025 + b_weight * 65025)
    return distance / max_distance


def quantize_channel(value: int) -> int:
    # 255 / 15 == 17 exactly, so no .5 ties can occur here
    return int(round(value / QUANTIZE_STEP) * QUANTIZE_STEP)


def quantize_color(r: int, g: int, b: int) -> str:
    """Snap each channel to one of 16 levels and return the hex key."""
    return rgb_to_hex(quantize_channel(r), quantize_channel(g), quantize_channel(b))
