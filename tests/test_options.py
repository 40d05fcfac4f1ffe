"""
Unit tests for extractor option layering.
"""
from dataclasses import FrozenInstanceError

import pytest

from hueforge.services.colors.options import (
    DEFAULT_OPTIONS, HueFilterMode, build_options, parse_attributes,
)
from hueforge.services.colors.reference import EXCLUDED_HUES, HueRange
from hueforge.services.colors.text_contrast import TextArea


class TestSchemePresets:
    """Scheme preset ranges sit between defaults and explicit options"""

    def test_default_scheme_applies_vibrant(self):
        options = build_options()
        assert options.scheme == "VIBRANT"
        assert options.tint_range == (0.3, 0.7)
        assert options.saturation_range == (0.5, 1.0)

    def test_no_scheme_keeps_defaults(self):
        options = build_options({"scheme": None})
        assert options.tint_range == DEFAULT_OPTIONS.tint_range
        assert options.saturation_range == DEFAULT_OPTIONS.saturation_range

    def test_pastel(self):
        options = build_options({"scheme": "pastel"})
        assert options.scheme == "PASTEL"
        assert options.tint_range == (0.6, 0.9)
        assert options.saturation_range == (0.2, 0.6)

    def test_explicit_range_beats_preset(self):
        options = build_options({"scheme": "DARK", "tint_range": [0.1, 0.3]})
        assert options.tint_range == (0.1, 0.3)
        assert options.saturation_range == (0.3, 0.8)

    def test_attribute_scheme_wins(self):
        options = build_options({"scheme": "VIBRANT"}, {"data-scheme": "dark"})
        assert options.scheme == "DARK"
        assert options.tint_range == (0.1, 0.5)


class TestCallerOptions:
    """Snake_case caller options"""

    def test_unknown_keys_ignored(self):
        options = build_options({"nonsense": 1, "min_frequency": "0.1"})
        assert options.min_frequency == 0.1

    def test_context_uppercased(self):
        assert build_options({"context": "luxury"}).context == "LUXURY"

    def test_hue_filter_mapping(self):
        options = build_options({"hue_filter": {
            "mode": "include",
            "include_ranges": [{"min": 195, "max": 255}],
        }})
        assert options.hue_filter.mode is HueFilterMode.INCLUDE
        assert options.hue_filter.include_ranges == (HueRange(195, 255),)
        assert options.hue_filter.exclude_ranges == EXCLUDED_HUES

    def test_null_ranges_keep_defaults(self):
        options = build_options({"hue_filter": {"mode": "BOTH", "exclude_ranges": None}})
        assert options.hue_filter.exclude_ranges == EXCLUDED_HUES

    def test_text_area_mapping(self):
        options = build_options({"text_area": {"x": 10, "y": 20, "width": 30, "height": 40}})
        assert options.text_area == TextArea(10.0, 20.0, 30.0, 40.0)

    def test_harmony_lightness_may_be_none(self):
        assert build_options({"harmony_lightness": None}).harmony_lightness is None

    def test_boolean_strings_parsed(self):
        """The string 'false' must switch a flag off, not read as truthy"""
        assert build_options({"accessibility_checks": "false"}).accessibility_checks is False
        assert build_options({"simulate_color_blindness": "True"}).simulate_color_blindness is True
        assert build_options({"debug": 0}).debug is False
        assert build_options({"debug": True}).debug is True

    def test_bad_boolean(self):
        with pytest.raises(ValueError):
            build_options({"accessibility_checks": "off"})
        with pytest.raises(ValueError):
            build_options({"debug": 2})

    def test_bad_range(self):
        with pytest.raises(ValueError):
            build_options({"tint_range": [0.1]})

    def test_options_are_frozen(self):
        options = build_options()
        with pytest.raises(FrozenInstanceError):
            options.min_frequency = 0.5


class TestAttributes:
    """Declarative string attributes"""

    def test_range_bounds(self):
        options = build_options(attributes={"data-shade": "0.25", "tint": "0.75",
                                            "desat": "0.1", "data-sat": "0.9"})
        assert options.tint_range == (0.25, 0.75)
        assert options.saturation_range == (0.1, 0.9)

    def test_single_bound_keeps_other(self):
        options = build_options(attributes={"tint": "0.6"})
        assert options.tint_range == (0.3, 0.6)

    def test_numbers_and_strings(self):
        options = build_options(attributes={"data-weight": "0.5", "data-frequency": "0.02",
                                            "data-context": "nature"})
        assert options.psychology_weight == 0.5
        assert options.min_frequency == 0.02
        assert options.context == "NATURE"

    def test_debug_is_literal_true(self):
        assert build_options(attributes={"debug": "true"}).debug is True
        assert build_options(attributes={"debug": "yes"}).debug is False

    def test_attributes_beat_options(self):
        options = build_options({"psychology_weight": 0.9}, {"weight": "0.2"})
        assert options.psychology_weight == 0.2

    def test_bad_number(self):
        with pytest.raises(ValueError):
            build_options(attributes={"data-weight": "heavy"})

    def test_unknown_attributes_ignored(self):
        assert parse_attributes({"data-foo": "1", "class": "hero"}) == []
