"""
HueForge Scoring Engine

Ranks candidate colors by a weighted mix of three sub-scores:

    total = proximity * proximity_weight
          + psychology * psychology_weight
          + frequency * frequency_weight

proximity rewards closeness to any tertiary reference color, psychology
additionally weighs that closeness by the reference's base weight and the
active context multiplier, and frequency is the candidate's relative share
of the filtered image. The engine only ranks and flags; it never picks a
fallback color itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .conversions import perceptual_distance
from .filtering import CandidateColor
from .options import PRESET_DEFAULTS, ExtractorOptions
from .reference import CONTEXT_WEIGHTS, TERTIARY_COLORS, TertiaryColor, context_multiplier


@dataclass(frozen=True)
class ScoredCandidate:
    color: str
    frequency: float
    proximity_score: float
    psychology_score: float
    frequency_score: float
    total_score: float
    weighted_proximity: float
    weighted_psychology: float
    weighted_frequency: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "color": self.color,
            "proximity_score": self.proximity_score,
            "psychology_score": self.psychology_score,
            "frequency_score": self.frequency_score,
            "total_score": self.total_score,
            "breakdown": {
                "proximity": self.weighted_proximity,
                "psychology": self.weighted_psychology,
                "frequency": self.weighted_frequency,
            },
        }


class SelectionStatus(str, Enum):
    RESOLVED = "resolved"                # top candidate cleared minimum_score
    BELOW_THRESHOLD = "below_threshold"  # candidates exist, none cleared it
    NO_CANDIDATES = "no_candidates"


@dataclass(frozen=True)
class Selection:
    """Outcome of dominant-color selection, with the full ranking attached."""
    status: SelectionStatus
    color: Optional[str]
    ranked: Tuple[ScoredCandidate, ...]

    @property
    def top(self) -> Optional[ScoredCandidate]:
        return self.ranked[0] if self.ranked else None


def proximity_score(rgb: Sequence[int],
                    references: Iterable[TertiaryColor] = TERTIARY_COLORS) -> float:
    best = 0.0
    for reference in references:
        best = max(best, 1 - perceptual_distance(rgb, reference.rgb))
    return best


def psychology_score(rgb: Sequence[int], context: str,
                     references: Iterable[TertiaryColor] = TERTIARY_COLORS,
                     context_weights: Mapping[str, Mapping[str, float]] = CONTEXT_WEIGHTS) -> float:
    best = 0.0
    for reference in references:
        closeness = 1 - perceptual_distance(rgb, reference.rgb)
        multiplier = context_multiplier(context, reference.name, context_weights)
        best = max(best, closeness * reference.weight * multiplier)
    return best


def score_candidate(candidate: CandidateColor,
                    options: ExtractorOptions = PRESET_DEFAULTS) -> ScoredCandidate:
    proximity = proximity_score(candidate.rgb)
    psychology = psychology_score(candidate.rgb, options.context)
    frequency = candidate.frequency

    weighted_proximity = proximity * options.proximity_weight
    weighted_psychology = psychology * options.psychology_weight
    weighted_frequency = frequency * options.frequency_weight

    return ScoredCandidate(
        color=candidate.hex,
        frequency=candidate.frequency,
        proximity_score=proximity,
        psychology_score=psychology,
        frequency_score=frequency,
        total_score=weighted_proximity + weighted_psychology + weighted_frequency,
        weighted_proximity=weighted_proximity,
        weighted_psychology=weighted_psychology,
        weighted_frequency=weighted_frequency,
    )


def score_candidates(candidates: Iterable[CandidateColor],
                     options: ExtractorOptions = PRESET_DEFAULTS) -> Tuple[ScoredCandidate, ...]:
    """
    Score every candidate and rank them.

    Returns:
        Candidates sorted by total score, highest first. The sort is stable,
        so ties keep their encounter order.
    """
    scored = [score_candidate(candidate, options) for candidate in candidates]
    return tuple(sorted(scored, key=lambda item: item.total_score, reverse=True))


def select_dominant(candidates: Iterable[CandidateColor],
                    options: ExtractorOptions = PRESET_DEFAULTS) -> Selection:
    """
    Rank candidates and decide whether the best one qualifies.

    The caller decides what to do with BELOW_THRESHOLD and NO_CANDIDATES
    (promote the top candidate, use the configured fallback, ...).
    """
    ranked = score_candidates(candidates, options)
    if not ranked:
        return Selection(SelectionStatus.NO_CANDIDATES, None, ranked)

    threshold = options.minimum_score or 0
    if ranked[0].total_score >= threshold:
        return Selection(SelectionStatus.RESOLVED, ranked[0].color, ranked)
    return Selection(SelectionStatus.BELOW_THRESHOLD, None, ranked)
