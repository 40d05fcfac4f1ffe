"""
HueForge Extractor Options

Immutable configuration for a color extractor and the builder that merges
its layers: built-in defaults, the scheme preset ranges, caller options and
finally declarative per-instance attributes (the ``data-*`` style strings a
markup layer would carry).

Weights are expected to sum to 1.0 but this is not enforced; other sums
simply scale total scores outside [0, 1]. An INCLUDE hue filter with no
include ranges rejects every pixel. Both are left to the caller.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .reference import (
    DEFAULT_INCLUDED_HUES, EXCLUDED_HUES, SCHEME_PRESETS,
    ColorBlindness, ColorContext, ColorScheme, HueRange,
)
from .text_contrast import TextArea


class HueFilterMode(str, Enum):
    EXCLUDE = "EXCLUDE"  # reject hues inside any exclude range
    INCLUDE = "INCLUDE"  # reject hues outside every include range
    BOTH = "BOTH"        # must pass both tests


@dataclass(frozen=True)
class HueFilter:
    mode: HueFilterMode = HueFilterMode.EXCLUDE
    exclude_ranges: Tuple[HueRange, ...] = EXCLUDED_HUES
    include_ranges: Tuple[HueRange, ...] = DEFAULT_INCLUDED_HUES


@dataclass(frozen=True)
class ExtractorOptions:
    """All tunable parameters of one extractor instance."""

    # Skip extraction and use this color as the dominant one
    color: Optional[str] = None

    # Candidate filtering
    min_frequency: float = 0.05
    tint_range: Tuple[float, float] = (0.2, 0.8)
    saturation_range: Tuple[float, float] = (0.3, 1.0)
    hue_filter: HueFilter = field(default_factory=HueFilter)
    max_dimension: int = 400

    # Scoring
    psychology_weight: float = 0.4
    frequency_weight: float = 0.3
    proximity_weight: float = 0.3
    minimum_score: float = 0.0
    fallback_color: str = "#3B82F6"
    context: str = ColorContext.TECH.value
    scheme: Optional[str] = ColorScheme.VIBRANT.value

    # Harmonies; a None lightness means "use the adjusted dominant lightness"
    harmony_saturation: float = 0.85
    harmony_lightness: Optional[float] = 0.25

    # Text over image
    text_area: Optional[TextArea] = None
    text_area_sample_rate: int = 4

    # Accessibility
    accessibility_checks: bool = True
    minimum_contrast: float = 4.5
    simulate_color_blindness: bool = False
    color_blindness_type: str = ColorBlindness.DEUTERANOPIA.value

    debug: bool = False


# Base layer, before any scheme preset is applied; see PRESET_DEFAULTS
DEFAULT_OPTIONS = ExtractorOptions()

OPTION_FIELDS = frozenset(f.name for f in fields(ExtractorOptions))


@dataclass(frozen=True)
class AttributeRule:
    """How one declarative attribute maps onto an options field."""
    field: str
    kind: str  # "string", "number" or "boolean"
    index: Optional[int] = None  # bound of a (low, high) range field
    upper: bool = False


ATTRIBUTE_RULES: Mapping[str, AttributeRule] = MappingProxyType({
    "context": AttributeRule("context", "string", upper=True),
    "scheme": AttributeRule("scheme", "string", upper=True),
    "weight": AttributeRule("psychology_weight", "number"),
    "frequency": AttributeRule("min_frequency", "number"),
    "shade": AttributeRule("tint_range", "number", index=0),
    "tint": AttributeRule("tint_range", "number", index=1),
    "desat": AttributeRule("saturation_range", "number", index=0),
    "sat": AttributeRule("saturation_range", "number", index=1),
    "debug": AttributeRule("debug", "boolean"),
})

RANGE_FIELDS = ("tint_range", "saturation_range")


def _coerce_range(value: Any, name: str) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{name} must be a [low, high] pair, got {value!r}")
    return float(value[0]), float(value[1])


def _coerce_hue_range(value: Any) -> HueRange:
    if isinstance(value, HueRange):
        return value
    if isinstance(value, Mapping):
        return HueRange(float(value["min"]), float(value["max"]))
    low, high = _coerce_range(value, "hue range")
    return HueRange(low, high)


def _coerce_hue_filter(value: Any, base: HueFilter) -> HueFilter:
    if isinstance(value, HueFilter):
        return value
    if not isinstance(value, Mapping):
        raise ValueError(f"hue_filter must be a mapping, got {value!r}")

    mode = HueFilterMode(str(value.get("mode", base.mode.value)).upper())
    exclude = base.exclude_ranges
    include = base.include_ranges
    if value.get("exclude_ranges") is not None:
        exclude = tuple(_coerce_hue_range(r) for r in value["exclude_ranges"])
    if value.get("include_ranges") is not None:
        include = tuple(_coerce_hue_range(r) for r in value["include_ranges"])
    return HueFilter(mode=mode, exclude_ranges=exclude, include_ranges=include)


def _coerce_text_area(value: Any) -> Optional[TextArea]:
    if value is None or isinstance(value, TextArea):
        return value
    return TextArea(
        x=float(value["x"]), y=float(value["y"]),
        width=float(value["width"]), height=float(value["height"]),
    )


def _coerce_upper(value: Any) -> Optional[str]:
    return None if value is None else str(value).upper()


def _coerce_bool(value: Any) -> bool:
    """Booleans as-is; strings must read 'true' or 'false'; 0 and 1 allowed."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"Expected a boolean, got {value!r}")


def _coerce_optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


_COERCERS = {
    "min_frequency": float,
    "psychology_weight": float,
    "frequency_weight": float,
    "proximity_weight": float,
    "minimum_score": float,
    "harmony_saturation": float,
    "harmony_lightness": _coerce_optional_float,
    "minimum_contrast": float,
    "max_dimension": int,
    "text_area_sample_rate": int,
    "accessibility_checks": _coerce_bool,
    "simulate_color_blindness": _coerce_bool,
    "debug": _coerce_bool,
    "context": _coerce_upper,
    "scheme": _coerce_upper,
    "color_blindness_type": _coerce_upper,
    "text_area": _coerce_text_area,
}


def _coerce_options(options: Mapping[str, Any], base: ExtractorOptions) -> Dict[str, Any]:
    """Coerce known option keys; unknown keys are ignored."""
    coerced = {}
    for key, value in options.items():
        if key not in OPTION_FIELDS:
            continue
        if key in RANGE_FIELDS:
            coerced[key] = _coerce_range(value, key)
        elif key == "hue_filter":
            coerced[key] = _coerce_hue_filter(value, base.hue_filter)
        elif key in _COERCERS:
            coerced[key] = _COERCERS[key](value)
        else:
            coerced[key] = value
    return coerced


def _parse_attribute(name: str, rule: AttributeRule, raw: str) -> Any:
    if rule.kind == "number":
        try:
            return float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Attribute '{name}' expects a number, got {raw!r}")
    if rule.kind == "boolean":
        return str(raw) == "true"
    return str(raw).upper() if rule.upper else str(raw)


def parse_attributes(attributes: Mapping[str, str]) -> List[Tuple[AttributeRule, Any]]:
    """
    Translate declarative attributes into (rule, value) overrides.

    Keys may carry a ``data-`` prefix. Unknown attributes are ignored.

    Raises:
        ValueError: If a numeric attribute cannot be parsed
    """
    parsed = []
    for key, raw in attributes.items():
        name = key[5:] if key.startswith("data-") else key
        rule = ATTRIBUTE_RULES.get(name)
        if rule is None:
            continue
        parsed.append((rule, _parse_attribute(name, rule, raw)))
    return parsed


def _replace_bound(current: Sequence[float], index: int, value: float) -> Tuple[float, float]:
    if index not in (0, 1):
        raise ValueError(f"Range index must be 0 or 1, got {index}")
    bounds = list(current)
    bounds[index] = value
    return bounds[0], bounds[1]


def build_options(options: Optional[Mapping[str, Any]] = None,
                  attributes: Optional[Mapping[str, str]] = None,
                  defaults: ExtractorOptions = DEFAULT_OPTIONS) -> ExtractorOptions:
    """
    Merge option layers into one immutable ExtractorOptions.

    Layers, later ones winning:
        1. ``defaults``
        2. tint/saturation ranges of the active scheme preset
        3. ``options`` (snake_case field names)
        4. ``attributes`` (declarative string overrides, see ATTRIBUTE_RULES)

    The active scheme is taken from the highest layer that names one, so an
    explicit range in layers 3 or 4 always beats the preset.
    """
    values = {f.name: getattr(defaults, f.name) for f in fields(ExtractorOptions)}
    option_values = _coerce_options(options or {}, defaults)
    attribute_values = parse_attributes(attributes or {})

    scheme = option_values.get("scheme", values["scheme"])
    for rule, value in attribute_values:
        if rule.field == "scheme":
            scheme = value

    preset = SCHEME_PRESETS.get(scheme) if scheme else None
    if preset is not None:
        values["tint_range"] = preset.tint_range
        values["saturation_range"] = preset.saturation_range

    values.update(option_values)

    for rule, value in attribute_values:
        if rule.index is None:
            values[rule.field] = value
        else:
            values[rule.field] = _replace_bound(values[rule.field], rule.index, value)

    return ExtractorOptions(**values)


# What an unconfigured extractor runs with: DEFAULT_OPTIONS plus the ranges of
# its default scheme. Engine functions use this as their default argument.
PRESET_DEFAULTS = build_options()
