"""
HueForge Palette Generator

Expands one dominant color into a full palette: lightness/saturation
accents, contrast-safe foreground colors, hue-rotation harmonies and
classification flags.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .conversions import (
    BLACK, HSL, WHITE, clamp, hex_to_rgb, hsl_to_hex,
    relative_luminance, rgb_to_hsl,
)
from .options import PRESET_DEFAULTS, ExtractorOptions
from .text_contrast import ImageForeColor, TextArea, determine_text_color, shadow_rgba

EXTREME_LIGHT = 0.9
EXTREME_DARK = 0.1
ADJUSTED_LIGHT = 0.85
ADJUSTED_DARK = 0.15
SATURATION_FLOOR = 0.3


@dataclass(frozen=True)
class ColorPair:
    color1: str
    color2: str

    def to_dict(self) -> Dict[str, str]:
        return {"color1": self.color1, "color2": self.color2}


@dataclass(frozen=True)
class ContrastRatios:
    with_white: float
    with_black: float


@dataclass(frozen=True)
class Palette:
    """A complete palette derived from one dominant color."""
    dominant: str
    accent1: str   # 20% lighter
    accent2: str   # 20% darker
    accent3: str   # 40% lighter
    accent4: str   # 40% darker
    standard: str  # 20% less saturated
    fore_color: str
    alt_fore_color: str
    image_fore_color: ImageForeColor
    complementary: str
    analogous: ColorPair
    split_complementary: ColorPair
    triadic: ColorPair
    is_light: bool
    is_dark: bool
    is_extreme: bool
    contrast_ratios: ContrastRatios
    text_area: Optional[TextArea] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "dominant": self.dominant,
            "accent1": self.accent1,
            "accent2": self.accent2,
            "accent3": self.accent3,
            "accent4": self.accent4,
            "standard": self.standard,
            "fore_color": self.fore_color,
            "alt_fore_color": self.alt_fore_color,
            "image_fore_color": self.image_fore_color.to_dict(),
            "complementary": self.complementary,
            "analogous": self.analogous.to_dict(),
            "split_complementary": self.split_complementary.to_dict(),
            "triadic": self.triadic.to_dict(),
            "is_light": self.is_light,
            "is_dark": self.is_dark,
            "is_extreme": self.is_extreme,
            "contrast_ratios": {
                "with_white": self.contrast_ratios.with_white,
                "with_black": self.contrast_ratios.with_black,
            },
            "text_area": None if self.text_area is None else {
                "x": self.text_area.x,
                "y": self.text_area.y,
                "width": self.text_area.width,
                "height": self.text_area.height,
            },
        }


def adjust_color(rgb: Sequence[int], lightness: float = 0.0, saturation: float = 0.0) -> str:
    """
    Shift a color in HSL space.

    Args:
        rgb: Source color
        lightness: Additive lightness delta, result clamped to [0, 1]
        saturation: Relative saturation change (``s *= 1 + saturation``),
            result clamped to [0, 1]

    Returns:
        Adjusted color as hex
    """
    h, s, l = rgb_to_hsl(*rgb)
    if saturation != 0:
        s = clamp(s * (1 + saturation))
    if lightness != 0:
        l = clamp(l + lightness)
    return hsl_to_hex(h, s, l)


def adjust_for_harmony(h: float, s: float, l: float) -> HSL:
    """Pull near-white and near-black colors back so harmonies stay visible."""
    if l > EXTREME_LIGHT:
        return h, max(s, SATURATION_FLOOR), ADJUSTED_LIGHT
    if l < EXTREME_DARK:
        return h, max(s, SATURATION_FLOOR), ADJUSTED_DARK
    return h, s, l


def generate_complementary(h: float, s: float, l: float,
                           harmony_saturation: float, harmony_lightness: Optional[float]) -> str:
    lightness = l if harmony_lightness is None else harmony_lightness
    return hsl_to_hex((h + 0.5) % 1, max(s, harmony_saturation), lightness)


def _harmony_pair(h: float, offsets: Tuple[float, float], l: float,
                  harmony_saturation: float, harmony_lightness: Optional[float]) -> ColorPair:
    lightness = l if harmony_lightness is None else harmony_lightness
    first, second = ((h + offset) % 1 for offset in offsets)
    return ColorPair(
        color1=hsl_to_hex(first, harmony_saturation, lightness),
        color2=hsl_to_hex(second, harmony_saturation, lightness),
    )


def generate_analogous(h: float, l: float, harmony_saturation: float,
                       harmony_lightness: Optional[float]) -> ColorPair:
    return _harmony_pair(h, (1 / 12, -1 / 12), l, harmony_saturation, harmony_lightness)


def generate_split_complementary(h: float, l: float, harmony_saturation: float,
                                 harmony_lightness: Optional[float]) -> ColorPair:
    return _harmony_pair(h, (0.42, 0.58), l, harmony_saturation, harmony_lightness)


def generate_triadic(h: float, l: float, harmony_saturation: float,
                     harmony_lightness: Optional[float]) -> ColorPair:
    return _harmony_pair(h, (1 / 3, 2 / 3), l, harmony_saturation, harmony_lightness)


def default_image_fore_color(fore_color: str, contrast: float) -> ImageForeColor:
    """Image text color mirroring the plain foreground choice, shadow advised."""
    return ImageForeColor(
        color=fore_color,
        shadow_color=shadow_rgba(fore_color == WHITE, 0.5),
        needs_text_shadow=True,
        contrast=contrast,
    )


def generate_palette(dominant: Optional[str],
                     options: ExtractorOptions = PRESET_DEFAULTS,
                     text_area_colors: Optional[Sequence[Sequence[int]]] = None) -> Optional[Palette]:
    """
    Build a palette around a dominant color.

    Args:
        dominant: Dominant color as hex
        options: Supplies harmony saturation/lightness
        text_area_colors: Optional RGB samples from the region behind overlaid
            text; when given, image_fore_color is computed from them

    Returns:
        Palette, or None when ``dominant`` is missing or not a valid hex color
    """
    rgb = hex_to_rgb(dominant)
    if rgb is None:
        return None

    h, s, l = rgb_to_hsl(*rgb)
    adj_h, adj_s, adj_l = adjust_for_harmony(h, s, l)

    color_luminance = relative_luminance(rgb)
    white_contrast = (relative_luminance((255, 255, 255)) + 0.05) / (color_luminance + 0.05)
    black_contrast = (color_luminance + 0.05) / (relative_luminance((0, 0, 0)) + 0.05)

    white_wins = white_contrast >= black_contrast
    fore_color = WHITE if white_wins else BLACK
    alt_fore_color = BLACK if white_wins else WHITE

    if text_area_colors is not None:
        image_fore_color = determine_text_color(text_area_colors)
    else:
        image_fore_color = default_image_fore_color(fore_color, max(white_contrast, black_contrast))

    sat = options.harmony_saturation
    light = options.harmony_lightness

    return Palette(
        dominant=dominant,
        accent1=adjust_color(rgb, lightness=0.2),
        accent2=adjust_color(rgb, lightness=-0.2),
        accent3=adjust_color(rgb, lightness=0.4),
        accent4=adjust_color(rgb, lightness=-0.4),
        standard=adjust_color(rgb, saturation=-0.2),
        fore_color=fore_color,
        alt_fore_color=alt_fore_color,
        image_fore_color=image_fore_color,
        complementary=generate_complementary(adj_h, adj_s, adj_l, sat, light),
        analogous=generate_analogous(adj_h, adj_l, sat, light),
        split_complementary=generate_split_complementary(adj_h, adj_l, sat, light),
        triadic=generate_triadic(adj_h, adj_l, sat, light),
        is_light=l > 0.5,
        is_dark=l <= 0.5,
        is_extreme=l > EXTREME_LIGHT or l < EXTREME_DARK,
        contrast_ratios=ContrastRatios(with_white=white_contrast, with_black=black_contrast),
    )
