"""
HueForge Candidate Filtering

Reduces raw image pixels to a small set of candidate colors:
validity filtering (tonal ranges, hue policy, neutrals, skin tones),
16-level quantization and relative-frequency aggregation.

The whole-image path treats every pixel as opaque; alpha, when present, is
ignored here (unlike text-area sampling, which skips transparent pixels).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from .conversions import QUANTIZE_STEP, RGB, rgb_to_hex
from .options import PRESET_DEFAULTS, ExtractorOptions, HueFilter, HueFilterMode


@dataclass(frozen=True)
class CandidateColor:
    """A quantized color observed in an image."""
    hex: str
    rgb: RGB
    frequency: float  # relative to pixels retained after filtering


@dataclass(frozen=True)
class ColorFrequencies:
    """Raw pixel counts per quantized color, in first-encounter order."""
    counts: Dict[str, int]
    total_pixels: int


def as_rgb_pixels(pixels: Any) -> np.ndarray:
    """
    Normalize a pixel source to an (N, 3) int64 array.

    Accepts (N, 3), (N, 4), (H, W, 3) or (H, W, 4) arrays, or a sequence of
    RGB(A) tuples. Any alpha channel is dropped.
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    channels = arr.shape[-1]
    if channels < 3:
        raise ValueError(f"Expected at least 3 channels per pixel, got {channels}")
    return arr.reshape(-1, channels)[:, :3].astype(np.int64)


def rgb_to_hsl_arrays(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized rgb_to_hsl over an (N, 3) array; same formulas, same floats."""
    rgb = pixels.astype(np.float64) / 255
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    max_c = rgb.max(axis=1)
    min_c = rgb.min(axis=1)
    l = (max_c + min_c) / 2
    d = max_c - min_c
    chromatic = d > 0

    s = np.zeros_like(l)
    denom = np.where(l > 0.5, 2 - max_c - min_c, max_c + min_c)
    np.divide(d, denom, out=s, where=chromatic)

    safe_d = np.where(chromatic, d, 1.0)
    h_r = (g - b) / safe_d + np.where(g < b, 6.0, 0.0)
    h_g = (b - r) / safe_d + 2
    h_b = (r - g) / safe_d + 4
    h = np.select([max_c == r, max_c == g], [h_r, h_g], default=h_b) / 6
    h = np.where(chromatic, h, 0.0)

    return h, s, l


def hue_mask(hue_degrees: np.ndarray, hue_filter: HueFilter) -> np.ndarray:
    """Boolean mask of hues that pass the configured hue-filter policy."""
    keep = np.ones(hue_degrees.shape, dtype=bool)

    if hue_filter.mode in (HueFilterMode.EXCLUDE, HueFilterMode.BOTH):
        for hue_range in hue_filter.exclude_ranges:
            keep &= ~((hue_degrees >= hue_range.min) & (hue_degrees <= hue_range.max))

    if hue_filter.mode in (HueFilterMode.INCLUDE, HueFilterMode.BOTH):
        included = np.zeros(hue_degrees.shape, dtype=bool)
        for hue_range in hue_filter.include_ranges:
            included |= (hue_degrees >= hue_range.min) & (hue_degrees <= hue_range.max)
        keep &= included

    return keep


def neutral_mask(pixels: np.ndarray) -> np.ndarray:
    """
    Grays and browns: low deviation from the channel mean with a mild warm
    skew (red above blue by less than half the range).
    """
    rgb = pixels.astype(np.float64)
    avg = rgb.sum(axis=1) / 3
    deviation = np.sqrt(((rgb - avg[:, None]) ** 2).sum(axis=1)) / 255
    warmth = (rgb[:, 0] - rgb[:, 2]) / 255
    return (deviation < 0.2) & (warmth > 0) & (warmth < 0.5)


def skin_tone_mask(pixels: np.ndarray) -> np.ndarray:
    r, g, b = pixels[:, 0], pixels[:, 1], pixels[:, 2]
    return (
        (r > 150) & (r < 255)
        & (g > 100) & (g < 200)
        & (b > 80) & (b < 170)
        & (r > g) & (g > b)
        & ((r - g) < 60)
    )


def valid_pixel_mask(pixels: np.ndarray, options: ExtractorOptions = PRESET_DEFAULTS) -> np.ndarray:
    """Apply the full validity predicate to an (N, 3) pixel array."""
    h, s, l = rgb_to_hsl_arrays(pixels)
    tint_low, tint_high = options.tint_range
    sat_low, sat_high = options.saturation_range

    keep = (l >= tint_low) & (l <= tint_high)
    keep &= (s >= sat_low) & (s <= sat_high)
    keep &= hue_mask(h * 360, options.hue_filter)
    keep &= ~neutral_mask(pixels)
    keep &= ~skin_tone_mask(pixels)
    return keep


def is_valid_hue(hue: float, hue_filter: HueFilter) -> bool:
    """Check a single hue given in [0, 1] against the hue-filter policy."""
    return bool(hue_mask(np.array([hue * 360]), hue_filter)[0])


def is_neutral_color(r: int, g: int, b: int) -> bool:
    return bool(neutral_mask(np.array([[r, g, b]], dtype=np.int64))[0])


def is_likely_skin_tone(r: int, g: int, b: int) -> bool:
    return bool(skin_tone_mask(np.array([[r, g, b]], dtype=np.int64))[0])


def is_valid_color(r: int, g: int, b: int, options: ExtractorOptions = PRESET_DEFAULTS) -> bool:
    return bool(valid_pixel_mask(np.array([[r, g, b]], dtype=np.int64), options)[0])


def quantize_pixels(pixels: np.ndarray) -> np.ndarray:
    """Snap each channel of an (N, 3) array to one of 16 evenly spaced levels."""
    return (np.round(pixels / QUANTIZE_STEP) * QUANTIZE_STEP).astype(np.int64)


def count_color_frequencies(pixels: Any, options: ExtractorOptions = PRESET_DEFAULTS) -> ColorFrequencies:
    """
    Filter pixels and count them per quantized color.

    Args:
        pixels: Any pixel source accepted by as_rgb_pixels
        options: Extractor options holding the filter configuration

    Returns:
        ColorFrequencies with counts keyed by hex, in first-encounter order
    """
    rgb = as_rgb_pixels(pixels)
    if len(rgb) == 0:
        return ColorFrequencies(counts={}, total_pixels=0)

    kept = rgb[valid_pixel_mask(rgb, options)]
    if len(kept) == 0:
        return ColorFrequencies(counts={}, total_pixels=0)

    quantized = quantize_pixels(kept)
    keys = quantized[:, 0] * 65536 + quantized[:, 1] * 256 + quantized[:, 2]
    unique_keys, first_index, counts = np.unique(keys, return_index=True, return_counts=True)

    ordered = {}
    for i in np.argsort(first_index, kind="stable"):
        key = int(unique_keys[i])
        ordered[rgb_to_hex(key >> 16, (key >> 8) & 0xFF, key & 0xFF)] = int(counts[i])

    return ColorFrequencies(counts=ordered, total_pixels=int(len(kept)))


def filter_viable_colors(frequencies: ColorFrequencies, min_frequency: float) -> List[CandidateColor]:
    """Keep colors whose relative frequency reaches ``min_frequency``."""
    if frequencies.total_pixels == 0:
        return []

    viable = []
    for hex_color, count in frequencies.counts.items():
        relative = count / frequencies.total_pixels
        if relative >= min_frequency:
            rgb = (int(hex_color[1:3], 16), int(hex_color[3:5], 16), int(hex_color[5:7], 16))
            viable.append(CandidateColor(hex=hex_color, rgb=rgb, frequency=relative))
    return viable


def extract_candidates(pixels: Any, options: ExtractorOptions = PRESET_DEFAULTS) -> List[CandidateColor]:
    """Full filtering stage: validity, quantization, frequency, viability."""
    frequencies = count_color_frequencies(pixels, options)
    return filter_viable_colors(frequencies, options.min_frequency)
