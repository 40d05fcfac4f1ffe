"""
HueForge Text-Area Contrast Resolution

Chooses a text color (and shadow) for copy laid over a specific region of an
image, using the luminance statistics of the pixels behind the text.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .conversions import BLACK, RGB, WHITE, relative_luminance

WCAG_AA_CONTRAST = 4.5
NOISE_VARIANCE_THRESHOLD = 0.1
MIN_OPAQUE_ALPHA = 128


@dataclass(frozen=True)
class TextArea:
    """Rectangle expressed in percentages (0-100) of the image size."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageForeColor:
    """Text color to use over the image, with shadow advice."""
    color: str
    shadow_color: str
    needs_text_shadow: bool
    contrast: Optional[float]

    def to_dict(self) -> dict:
        return {
            "color": self.color,
            "shadow_color": self.shadow_color,
            "needs_text_shadow": self.needs_text_shadow,
            "contrast": self.contrast,
        }


def shadow_rgba(light_background: bool, alpha: float) -> str:
    if light_background:
        return f"rgba(0,0,0,{alpha})"
    return f"rgba(255,255,255,{alpha})"


def sample_area_colors(rgba: np.ndarray, area: TextArea, sample_rate: int = 4) -> List[RGB]:
    """
    Sample opaque pixels from a percentage-based region of a decoded image.

    Args:
        rgba: Image array of shape (H, W, 4) or (H, W, 3); 3-channel input is
            treated as fully opaque
        area: Region in percentages of the image dimensions
        sample_rate: Keep every n-th pixel of the region in row-major order

    Returns:
        List of (R, G, B) tuples; pixels with alpha < 128 are skipped
    """
    height, width = rgba.shape[:2]
    x = int(np.floor(area.x * width / 100))
    y = int(np.floor(area.y * height / 100))
    w = int(np.floor(area.width * width / 100))
    h = int(np.floor(area.height * height / 100))

    region = rgba[max(y, 0):max(y, 0) + max(h, 0), max(x, 0):max(x, 0) + max(w, 0)]
    flat = region.reshape(-1, region.shape[-1])[::max(1, sample_rate)]

    if flat.shape[1] >= 4:
        flat = flat[flat[:, 3] >= MIN_OPAQUE_ALPHA]

    return [(int(r), int(g), int(b)) for r, g, b in flat[:, :3]]


def determine_text_color(colors: Sequence[Sequence[int]]) -> ImageForeColor:
    """
    Pick white or black text for a sampled background region.

    White wins when only white reaches 4.5:1, black symmetrically; otherwise
    the mean luminance decides (above 0.5 means black). A shadow is advised
    when the background is noisy (luminance variance > 0.1) or when the
    fallback choice still misses 4.5:1. The shadow is plain black or white
    rgba rather than the literal inverse of the background.
    """
    if len(colors) == 0:
        return ImageForeColor(
            color=WHITE,
            shadow_color=shadow_rgba(True, 0.5),
            needs_text_shadow=True,
            contrast=None,
        )

    luminances = [relative_luminance(c) for c in colors]
    average_luminance = sum(luminances) / len(luminances)
    variance = sum((lum - average_luminance) ** 2 for lum in luminances) / len(luminances)
    is_noisy = variance > NOISE_VARIANCE_THRESHOLD

    white_contrast = 1.05 / (average_luminance + 0.05)
    black_contrast = (average_luminance + 0.05) / 0.05

    shadow = shadow_rgba(average_luminance > 0.5, 0.7 if is_noisy else 0.5)

    if white_contrast >= WCAG_AA_CONTRAST and black_contrast < WCAG_AA_CONTRAST:
        return ImageForeColor(WHITE, shadow, is_noisy, white_contrast)
    if black_contrast >= WCAG_AA_CONTRAST and white_contrast < WCAG_AA_CONTRAST:
        return ImageForeColor(BLACK, shadow, is_noisy, black_contrast)

    color = BLACK if average_luminance > 0.5 else WHITE
    needs_shadow = is_noisy or min(white_contrast, black_contrast) < WCAG_AA_CONTRAST
    contrast = white_contrast if color == WHITE else black_contrast
    return ImageForeColor(color, shadow, needs_shadow, contrast)
