"""
Unit tests for the scoring engine.
"""
from dataclasses import replace

import pytest

from hueforge.services.colors.conversions import perceptual_distance
from hueforge.services.colors.filtering import CandidateColor
from hueforge.services.colors.options import DEFAULT_OPTIONS
from hueforge.services.colors.reference import TERTIARY_COLORS
from hueforge.services.colors.scoring import (
    SelectionStatus, proximity_score, psychology_score, score_candidate,
    score_candidates, select_dominant,
)


def candidate(hex_color, rgb, frequency=0.5):
    return CandidateColor(hex=hex_color, rgb=rgb, frequency=frequency)


class TestProximity:
    """Closeness to the tertiary reference colors"""

    def test_reference_colors_score_one(self):
        for reference in TERTIARY_COLORS:
            assert proximity_score(reference.rgb) == pytest.approx(1.0), reference.name

    def test_off_reference_scores_lower(self):
        assert proximity_score((200, 30, 30)) < proximity_score((255, 0, 0))

    def test_score_bounds(self):
        for rgb in [(0, 0, 0), (255, 255, 255), (128, 128, 128), (12, 200, 77)]:
            assert 0.0 <= proximity_score(rgb) <= 1.0

    def test_matches_nearest_reference_distance(self):
        for rgb in [(12, 200, 77), (59, 130, 246), (250, 128, 114)]:
            nearest = min(perceptual_distance(rgb, ref.rgb) for ref in TERTIARY_COLORS)
            assert proximity_score(rgb) == pytest.approx(1 - nearest)

    def test_monotonic_in_distance(self):
        """Moving away from a reference lowers the score"""
        scores = [proximity_score((0, 0, b)) for b in (255, 230, 200, 160)]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)


class TestPsychology:
    """Context-weighted psychology scores"""

    def test_tech_boosts_blue(self):
        assert psychology_score((0, 0, 255), "TECH") == pytest.approx(1.2)

    def test_neutral_context_for_blue(self):
        assert psychology_score((0, 0, 255), "NATURE") == pytest.approx(1.0)

    def test_unknown_context_uses_unit_multiplier(self):
        assert psychology_score((0, 0, 255), "UNKNOWN") == pytest.approx(1.0)


class TestScoreCandidate:
    """Weighted total and breakdown"""

    def test_total_is_weighted_sum(self):
        scored = score_candidate(candidate("#0000FF", (0, 0, 255), 0.4), DEFAULT_OPTIONS)
        expected = (scored.proximity_score * DEFAULT_OPTIONS.proximity_weight
                    + scored.psychology_score * DEFAULT_OPTIONS.psychology_weight
                    + 0.4 * DEFAULT_OPTIONS.frequency_weight)
        assert scored.total_score == pytest.approx(expected)
        assert scored.frequency_score == 0.4

    def test_breakdown_in_dict(self):
        data = score_candidate(candidate("#0000FF", (0, 0, 255)), DEFAULT_OPTIONS).to_dict()
        assert data["color"] == "#0000FF"
        assert set(data["breakdown"]) == {"proximity", "psychology", "frequency"}
        assert sum(data["breakdown"].values()) == pytest.approx(data["total_score"])


class TestRanking:
    """Ranking and dominant selection"""

    def test_sorted_highest_first(self):
        ranked = score_candidates([
            candidate("#888888", (136, 136, 136), 0.1),
            candidate("#0000FF", (0, 0, 255), 0.9),
        ], DEFAULT_OPTIONS)
        assert [r.color for r in ranked] == ["#0000FF", "#888888"]

    def test_ties_keep_encounter_order(self):
        ranked = score_candidates([
            candidate("first", (0, 0, 255)),
            candidate("second", (0, 0, 255)),
            candidate("third", (0, 0, 255)),
        ], DEFAULT_OPTIONS)
        assert [r.color for r in ranked] == ["first", "second", "third"]

    def test_frequency_weight_never_demotes_frequent_color(self):
        """Raising frequency_weight can only move the more frequent color up"""
        candidates = [
            candidate("#0000FF", (0, 0, 255), 0.1),
            candidate("#00AA00", (0, 170, 0), 0.6),
        ]
        positions = []
        for weight in (0.0, 0.3, 0.6, 1.0, 3.0):
            options = replace(DEFAULT_OPTIONS, frequency_weight=weight)
            ranked = [r.color for r in score_candidates(candidates, options)]
            positions.append(ranked.index("#00AA00"))
        assert positions == sorted(positions, reverse=True)
        assert positions[-1] == 0

    def test_no_candidates(self):
        selection = select_dominant([], DEFAULT_OPTIONS)
        assert selection.status is SelectionStatus.NO_CANDIDATES
        assert selection.color is None
        assert selection.top is None

    def test_resolved(self):
        selection = select_dominant([candidate("#0000FF", (0, 0, 255))], DEFAULT_OPTIONS)
        assert selection.status is SelectionStatus.RESOLVED
        assert selection.color == "#0000FF"

    def test_below_threshold_keeps_ranking(self):
        options = replace(DEFAULT_OPTIONS, minimum_score=10.0)
        selection = select_dominant([candidate("#0000FF", (0, 0, 255))], options)
        assert selection.status is SelectionStatus.BELOW_THRESHOLD
        assert selection.color is None
        assert selection.top.color == "#0000FF"
