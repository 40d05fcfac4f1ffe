"""
HueForge Accessibility Checks

Contrast auditing of a generated palette and dichromacy simulation.
Both are read-only: the palette is never modified.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .conversions import BLACK, WHITE, contrast_ratio, hex_to_rgb, rgb_to_hex, round_half_up
from .palette import Palette
from .reference import COLORBLIND_MATRICES


@dataclass(frozen=True)
class ContrastIssue:
    """A background/text pair that misses the required contrast."""
    background: str
    text: str
    contrast: float
    required: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "background": self.background,
            "text": self.text,
            "contrast": self.contrast,
            "required": self.required,
        }


def validate_accessibility(palette: Palette, minimum_contrast: float = 4.5) -> List[ContrastIssue]:
    """
    Audit every background/text combination of a palette.

    Backgrounds are dominant, accent1 and accent2; text colors are white,
    black, accent3 and accent4.

    Args:
        palette: Palette to audit
        minimum_contrast: Required WCAG contrast ratio

    Returns:
        Issues for every pair below ``minimum_contrast``, in audit order
    """
    backgrounds = [palette.dominant, palette.accent1, palette.accent2]
    texts = [WHITE, BLACK, palette.accent3, palette.accent4]
    return audit_contrast(backgrounds, texts, minimum_contrast)


def audit_contrast(backgrounds: Sequence[str], texts: Sequence[str],
                   minimum_contrast: float = 4.5) -> List[ContrastIssue]:
    """Check every background x text pair; unparseable colors are skipped."""
    issues = []
    for background in backgrounds:
        for text in texts:
            contrast = contrast_ratio(background, text)
            if contrast is not None and contrast < minimum_contrast:
                issues.append(ContrastIssue(background, text, contrast, minimum_contrast))
    return issues


def simulate_color_blindness(color: str, kind: str) -> Optional[str]:
    """
    Approximate how a color looks under a dichromacy.

    Args:
        color: Hex color
        kind: PROTANOPIA, DEUTERANOPIA or TRITANOPIA

    Returns:
        Simulated hex color; the input unchanged for an unknown ``kind``;
        None when ``color`` is not a valid hex color
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        return None

    matrix = COLORBLIND_MATRICES.get(str(kind).upper())
    if matrix is None:
        return color

    r, g, b = (channel / 255 for channel in rgb)
    simulated = [r * row[0] + g * row[1] + b * row[2] for row in matrix[:3]]
    return rgb_to_hex(*(round_half_up(value * 255) for value in simulated))


def simulate_palette(palette: Palette, kind: str) -> Dict[str, Optional[str]]:
    """Simulate every color role of a palette under one dichromacy."""
    roles = {
        "dominant": palette.dominant,
        "accent1": palette.accent1,
        "accent2": palette.accent2,
        "accent3": palette.accent3,
        "accent4": palette.accent4,
        "standard": palette.standard,
        "complementary": palette.complementary,
        "analogous1": palette.analogous.color1,
        "analogous2": palette.analogous.color2,
        "split_complementary1": palette.split_complementary.color1,
        "split_complementary2": palette.split_complementary.color2,
        "triadic1": palette.triadic.color1,
        "triadic2": palette.triadic.color2,
    }
    return {role: simulate_color_blindness(color, kind) for role, color in roles.items()}
