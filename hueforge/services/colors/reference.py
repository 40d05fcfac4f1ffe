"""
HueForge Reference Tables

Process-wide constant tables shared by filtering and scoring: the twelve
tertiary reference colors, context weights, scheme presets, hue presets and
the color-blindness simulation matrices. Everything here is immutable and is
passed around by reference, never copied or mutated.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from .conversions import RGB


@dataclass(frozen=True)
class TertiaryColor:
    """A canonical hue family used as a scoring anchor."""
    name: str
    hue: int  # degrees
    psychology: str
    weight: float  # base psychological weight [0, 1.2]
    rgb: RGB


TERTIARY_COLORS: Tuple[TertiaryColor, ...] = (
    TertiaryColor("red", 0, "excitement", 1.0, (255, 0, 0)),
    TertiaryColor("redOrange", 30, "energy", 0.9, (255, 63, 0)),
    TertiaryColor("orange", 60, "creativity", 0.85, (255, 127, 0)),
    TertiaryColor("yellowOrange", 90, "optimism", 0.8, (255, 191, 0)),
    TertiaryColor("yellow", 120, "positivity", 0.75, (255, 255, 0)),
    TertiaryColor("yellowGreen", 150, "growth", 0.8, (191, 255, 0)),
    TertiaryColor("green", 180, "health", 0.9, (0, 255, 0)),
    TertiaryColor("blueGreen", 210, "calm", 0.85, (0, 255, 191)),
    TertiaryColor("blue", 240, "trust", 1.0, (0, 0, 255)),
    TertiaryColor("bluePurple", 270, "wisdom", 0.9, (63, 0, 255)),
    TertiaryColor("purple", 300, "luxury", 0.85, (127, 0, 255)),
    TertiaryColor("redPurple", 330, "passion", 0.8, (191, 0, 255)),
)


class ColorContext(str, Enum):
    """Semantic contexts that reweight psychological scoring."""
    TECH = "TECH"
    NATURE = "NATURE"
    ENERGY = "ENERGY"
    LUXURY = "LUXURY"


CONTEXT_WEIGHTS: Mapping[str, Mapping[str, float]] = MappingProxyType({
    ColorContext.TECH.value: MappingProxyType({
        "blue": 1.2,       # trust, stability
        "blueGreen": 1.1,  # innovation
        "purple": 1.1,     # creativity
    }),
    ColorContext.NATURE.value: MappingProxyType({
        "green": 1.2,
        "yellowGreen": 1.1,
        "blueGreen": 1.0,
    }),
    ColorContext.ENERGY.value: MappingProxyType({
        "red": 1.2,
        "orange": 1.1,
        "yellow": 1.0,
    }),
    ColorContext.LUXURY.value: MappingProxyType({
        "purple": 1.2,
        "redPurple": 1.1,
        "blue": 1.0,
    }),
})


def context_multiplier(context: str, color_name: str,
                       weights: Mapping[str, Mapping[str, float]] = CONTEXT_WEIGHTS) -> float:
    """Multiplier for a tertiary color under a context; 1.0 when unlisted."""
    return weights.get(context, {}).get(color_name, 1.0)


class ColorScheme(str, Enum):
    VIBRANT = "VIBRANT"
    PASTEL = "PASTEL"
    DARK = "DARK"


@dataclass(frozen=True)
class SchemePreset:
    saturation_range: Tuple[float, float]
    tint_range: Tuple[float, float]


SCHEME_PRESETS: Mapping[str, SchemePreset] = MappingProxyType({
    ColorScheme.VIBRANT.value: SchemePreset((0.5, 1.0), (0.3, 0.7)),
    ColorScheme.PASTEL.value: SchemePreset((0.2, 0.6), (0.6, 0.9)),
    ColorScheme.DARK.value: SchemePreset((0.3, 0.8), (0.1, 0.5)),
})


@dataclass(frozen=True)
class HueRange:
    """
    Inclusive hue interval in degrees.

    The comparison is linear (``min <= h <= max``). A range meant to wrap
    through 0/360 degrees, such as reds at 345-15, never matches and must be
    split into two ranges by the caller.
    """
    min: float
    max: float


EXCLUDED_HUES: Tuple[HueRange, ...] = (
    HueRange(15, 40),  # brown
    HueRange(50, 60),  # muddy yellow
)

HUE_FAMILIES: Mapping[str, HueRange] = MappingProxyType({
    "REDS": HueRange(345, 15),
    "ORANGES": HueRange(15, 45),
    "YELLOWS": HueRange(45, 75),
    "GREENS": HueRange(75, 165),
    "CYANS": HueRange(165, 195),
    "BLUES": HueRange(195, 255),
    "PURPLES": HueRange(255, 285),
    "MAGENTAS": HueRange(285, 345),
})

DEFAULT_INCLUDED_HUES: Tuple[HueRange, ...] = (
    HUE_FAMILIES["REDS"],
    HUE_FAMILIES["BLUES"],
    HUE_FAMILIES["GREENS"],
)


class ColorBlindness(str, Enum):
    PROTANOPIA = "PROTANOPIA"
    DEUTERANOPIA = "DEUTERANOPIA"
    TRITANOPIA = "TRITANOPIA"


# 4x4 homogeneous form; only the upper-left 3x3 block is applied
COLORBLIND_MATRICES: Mapping[str, Tuple[Tuple[float, ...], ...]] = MappingProxyType({
    ColorBlindness.PROTANOPIA.value: (
        (0.567, 0.433, 0, 0),
        (0.558, 0.442, 0, 0),
        (0, 0.242, 0.758, 0),
        (0, 0, 0, 1),
    ),
    ColorBlindness.DEUTERANOPIA.value: (
        (0.625, 0.375, 0, 0),
        (0.7, 0.3, 0, 0),
        (0, 0.3, 0.7, 0),
        (0, 0, 0, 1),
    ),
    ColorBlindness.TRITANOPIA.value: (
        (0.95, 0.05, 0, 0),
        (0, 0.433, 0.567, 0),
        (0, 0.475, 0.525, 0),
        (0, 0, 0, 1),
    ),
})
