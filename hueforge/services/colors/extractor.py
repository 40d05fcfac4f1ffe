"""
HueForge Color Theory Extractor

Caller-facing wrapper around the pure color engine. It owns one immutable
ExtractorOptions and turns raw pixels (or an explicit color) into a palette,
making the fallback decisions the scoring engine deliberately leaves open:

    resolved top candidate -> top candidate below threshold -> fallback color
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .accessibility import ContrastIssue, simulate_palette, validate_accessibility
from .filtering import extract_candidates
from .options import ExtractorOptions, build_options
from .palette import Palette, generate_palette
from .scoring import ScoredCandidate, Selection, SelectionStatus, select_dominant
from .text_contrast import sample_area_colors


class DominantSource(str, Enum):
    OVERRIDE = "override"      # options.color was set
    SCORED = "scored"          # top candidate cleared minimum_score
    TOP_RANKED = "top_ranked"  # top candidate used despite missing the threshold
    FALLBACK = "fallback"      # no candidates, options.fallback_color used


@dataclass(frozen=True)
class ExtractionResult:
    palette: Optional[Palette]
    source: DominantSource
    scores: Tuple[ScoredCandidate, ...] = ()
    accessibility_issues: Tuple[ContrastIssue, ...] = ()
    color_blind_simulation: Optional[Dict[str, Optional[str]]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "palette": None if self.palette is None else self.palette.to_dict(),
            "source": self.source.value,
            "scores": [score.to_dict() for score in self.scores],
            "accessibility_issues": [issue.to_dict() for issue in self.accessibility_issues],
            "color_blind_simulation": self.color_blind_simulation,
        }


def resolve_dominant(selection: Selection, fallback_color: str) -> Tuple[str, DominantSource]:
    """Apply the fallback chain to a selection outcome."""
    if selection.status is SelectionStatus.RESOLVED:
        return selection.color, DominantSource.SCORED

    if selection.status is SelectionStatus.BELOW_THRESHOLD:
        top = selection.top
        logger.warning(f"No color met criteria, using highest scoring color {top.color} "
                       f"(score={top.total_score:.3f})")
        return top.color, DominantSource.TOP_RANKED

    logger.warning(f"No viable colors found, using fallback color {fallback_color}")
    return fallback_color, DominantSource.FALLBACK


class ColorTheoryExtractor:
    """
    Extract a dominant color from pixels and expand it into a palette.

    Options are merged once at construction (defaults, scheme preset,
    ``options``, ``attributes``) and never change afterwards, so one
    instance can serve concurrent extractions.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None,
                 attributes: Optional[Mapping[str, str]] = None):
        self.options: ExtractorOptions = build_options(options, attributes)
        logger.debug(f"Extractor configured: context={self.options.context} "
                     f"scheme={self.options.scheme} tint={self.options.tint_range} "
                     f"saturation={self.options.saturation_range}")

    def select(self, pixels: Any) -> Selection:
        """Run filtering and scoring only."""
        candidates = extract_candidates(pixels, self.options)
        logger.debug(f"{len(candidates)} viable candidate colors")
        return select_dominant(candidates, self.options)

    def extract_palette(self, pixels: Any,
                        text_area_colors: Optional[Sequence[Sequence[int]]] = None) -> ExtractionResult:
        """
        Extract a palette from raw pixels.

        Args:
            pixels: Pixel source (see filtering.as_rgb_pixels); alpha ignored
            text_area_colors: Optional samples behind overlaid text

        Returns:
            ExtractionResult with the palette, where the dominant color came
            from, the ranked scores and any accessibility issues
        """
        if self.options.color:
            return self.palette_for_color(self.options.color, text_area_colors)

        selection = self.select(pixels)
        dominant, source = resolve_dominant(selection, self.options.fallback_color)
        return self._finish(dominant, source, selection.ranked, text_area_colors)

    def extract_palette_from_rgba(self, rgba: np.ndarray) -> ExtractionResult:
        """
        Extract a palette from a decoded (H, W, 3|4) image, sampling the
        configured text area for the image text color.
        """
        area = self.options.text_area
        text_area_colors = None
        if area is not None:
            text_area_colors = sample_area_colors(rgba, area, self.options.text_area_sample_rate)
            logger.debug(f"Sampled {len(text_area_colors)} text-area pixels")

        result = self.extract_palette(rgba, text_area_colors)
        if area is not None and result.palette is not None:
            result = replace(result, palette=replace(result.palette, text_area=area))
        return result

    def palette_for_color(self, color: str,
                          text_area_colors: Optional[Sequence[Sequence[int]]] = None) -> ExtractionResult:
        """Build a palette for an explicit color, skipping extraction."""
        return self._finish(color, DominantSource.OVERRIDE, (), text_area_colors)

    def _finish(self, dominant: str, source: DominantSource,
                scores: Tuple[ScoredCandidate, ...],
                text_area_colors: Optional[Sequence[Sequence[int]]]) -> ExtractionResult:
        palette = generate_palette(dominant, self.options, text_area_colors)
        if palette is None:
            logger.error(f"Cannot build a palette from dominant color {dominant!r}")
            return ExtractionResult(palette=None, source=source, scores=scores)

        issues: Tuple[ContrastIssue, ...] = ()
        if self.options.accessibility_checks:
            issues = tuple(validate_accessibility(palette, self.options.minimum_contrast))
            if issues and self.options.debug:
                logger.warning(f"Accessibility issues for {palette.dominant}: {len(issues)} "
                               f"pairs below {self.options.minimum_contrast}")

        simulation = None
        if self.options.simulate_color_blindness:
            simulation = simulate_palette(palette, self.options.color_blindness_type)

        logger.info(f"Palette generated from {palette.dominant} ({source.value})")
        return ExtractionResult(
            palette=palette,
            source=source,
            scores=scores,
            accessibility_issues=issues,
            color_blind_simulation=simulation,
        )
