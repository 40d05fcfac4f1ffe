"""
HueForge API Schemas
Pydantic models for palette extraction request/response validation.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

HEX_PATTERN = r"^#?[0-9A-Fa-f]{6}$"


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class HueRangeModel(BaseModel):
    """Hue interval in degrees; wrapping ranges must be split by the caller."""
    min: float = Field(..., ge=0.0, le=360.0)
    max: float = Field(..., ge=0.0, le=360.0)


class HueFilterModel(BaseModel):
    """Hue filtering policy."""
    mode: str = Field("EXCLUDE", pattern="^(EXCLUDE|INCLUDE|BOTH)$")
    exclude_ranges: Optional[List[HueRangeModel]] = None
    include_ranges: Optional[List[HueRangeModel]] = None


class TextAreaModel(BaseModel):
    """Region behind overlaid text, in percentages of the image size."""
    x: float = Field(..., ge=0.0, le=100.0)
    y: float = Field(..., ge=0.0, le=100.0)
    width: float = Field(..., ge=0.0, le=100.0)
    height: float = Field(..., ge=0.0, le=100.0)


class ExtractorOptionsModel(BaseModel):
    """
    Caller options for one extraction. Every field is optional; unset fields
    keep the extractor defaults.
    """
    color: Optional[str] = Field(None, pattern=HEX_PATTERN, description="Skip extraction and use this color")
    min_frequency: Optional[float] = Field(None, ge=0.0, le=1.0)
    psychology_weight: Optional[float] = None
    frequency_weight: Optional[float] = None
    proximity_weight: Optional[float] = None
    tint_range: Optional[List[float]] = Field(None, min_length=2, max_length=2)
    saturation_range: Optional[List[float]] = Field(None, min_length=2, max_length=2)
    minimum_score: Optional[float] = None
    fallback_color: Optional[str] = Field(None, pattern=HEX_PATTERN)
    context: Optional[str] = Field(None, description="TECH, NATURE, ENERGY or LUXURY")
    scheme: Optional[str] = Field(None, description="VIBRANT, PASTEL or DARK")
    harmony_saturation: Optional[float] = Field(None, ge=0.0, le=1.0)
    harmony_lightness: Optional[float] = Field(None, ge=0.0, le=1.0)
    max_dimension: Optional[int] = Field(None, ge=16, le=4096)
    hue_filter: Optional[HueFilterModel] = None
    text_area: Optional[TextAreaModel] = None
    text_area_sample_rate: Optional[int] = Field(None, ge=1, le=64)
    accessibility_checks: Optional[bool] = None
    minimum_contrast: Optional[float] = Field(None, ge=1.0, le=21.0)
    simulate_color_blindness: Optional[bool] = None
    color_blindness_type: Optional[str] = None
    debug: Optional[bool] = None


class PaletteRequest(BaseModel):
    """Build a palette directly from a color."""
    color: str = Field(..., pattern=HEX_PATTERN, description="Dominant color in format #RRGGBB")
    options: Optional[ExtractorOptionsModel] = None


class ExtractRequest(BaseModel):
    """Extract a palette from an encoded image."""
    image_b64: str = Field(..., min_length=1, description="Base64-encoded PNG/JPEG/WEBP/GIF image")
    options: Optional[ExtractorOptionsModel] = None
    attributes: Optional[Dict[str, str]] = Field(
        None,
        description="Declarative overrides (context, scheme, weight, frequency, shade, tint, desat, sat, debug)"
    )


class AccessibilityRequest(BaseModel):
    """Audit explicit palette colors."""
    dominant: str = Field(..., pattern=HEX_PATTERN)
    accent1: str = Field(..., pattern=HEX_PATTERN)
    accent2: str = Field(..., pattern=HEX_PATTERN)
    accent3: str = Field(..., pattern=HEX_PATTERN)
    accent4: str = Field(..., pattern=HEX_PATTERN)
    minimum_contrast: float = Field(4.5, ge=1.0, le=21.0)


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ColorPairModel(BaseModel):
    color1: str
    color2: str


class ImageForeColorModel(BaseModel):
    color: str
    shadow_color: str
    needs_text_shadow: bool
    contrast: Optional[float] = None


class ContrastRatiosModel(BaseModel):
    with_white: float
    with_black: float


class PaletteModel(BaseModel):
    """Full palette derived from one dominant color."""
    dominant: str
    accent1: str
    accent2: str
    accent3: str
    accent4: str
    standard: str
    fore_color: str
    alt_fore_color: str
    image_fore_color: ImageForeColorModel
    complementary: str
    analogous: ColorPairModel
    split_complementary: ColorPairModel
    triadic: ColorPairModel
    is_light: bool
    is_dark: bool
    is_extreme: bool
    contrast_ratios: ContrastRatiosModel
    text_area: Optional[TextAreaModel] = None


class ScoreBreakdownModel(BaseModel):
    proximity: float
    psychology: float
    frequency: float


class ScoredCandidateModel(BaseModel):
    color: str
    proximity_score: float
    psychology_score: float
    frequency_score: float
    total_score: float
    breakdown: ScoreBreakdownModel


class ContrastIssueModel(BaseModel):
    background: str
    text: str
    contrast: float
    required: float


class PaletteResponse(BaseModel):
    """Palette extraction response."""
    request_id: str
    source: str = Field(..., description="override, scored, top_ranked or fallback")
    palette: PaletteModel
    scores: List[ScoredCandidateModel] = Field(default_factory=list, description="Ranked candidates, best first")
    accessibility_issues: List[ContrastIssueModel] = Field(default_factory=list)
    color_blind_simulation: Optional[Dict[str, Optional[str]]] = None
    width: Optional[int] = Field(None, description="Sampled image width in pixels")
    height: Optional[int] = Field(None, description="Sampled image height in pixels")


class AccessibilityResponse(BaseModel):
    issues: List[ContrastIssueModel]
    minimum_contrast: float


class SimulationResponse(BaseModel):
    color: str
    type: str
    simulated: str


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("hueforge", description="Service name")
