"""
HueForge v1 API Routes
Palette extraction, direct palette generation, contrast audits and
color-blindness simulation.
"""
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query

from hueforge.config import config
from hueforge.schemas import (
    AccessibilityRequest, AccessibilityResponse, ExtractorOptionsModel,
    ExtractRequest, PaletteRequest, PaletteResponse, SimulationResponse,
)
from hueforge.services.colors.accessibility import audit_contrast, simulate_color_blindness
from hueforge.services.colors.conversions import BLACK, WHITE, hex_to_rgb
from hueforge.services.colors.extractor import ColorTheoryExtractor, ExtractionResult
from hueforge.services.colors.reference import ColorBlindness
from hueforge.services.imaging import decode_base64_image, load_rgba
from hueforge.utils.ids import generate_request_id
from hueforge.utils.logging import get_logger

router = APIRouter(prefix="/v1", tags=["Palettes"])
log = get_logger()

# Options where an explicit null means something (e.g. no scheme preset)
NULLABLE_OPTIONS = {"scheme", "harmony_lightness", "color", "text_area"}


def _options_dict(options: Optional[ExtractorOptionsModel]) -> Dict[str, Any]:
    """Service defaults overlaid with the caller's explicitly set options."""
    merged: Dict[str, Any] = {
        "context": config.DEFAULT_CONTEXT,
        "scheme": config.DEFAULT_SCHEME,
        "fallback_color": config.FALLBACK_COLOR,
        "max_dimension": config.MAX_DIMENSION,
    }
    if options is not None:
        for key, value in options.model_dump(exclude_unset=True).items():
            if value is None and key not in NULLABLE_OPTIONS:
                continue
            merged[key] = value
    return merged


def _build_extractor(options: Optional[ExtractorOptionsModel],
                     attributes: Optional[Dict[str, str]] = None) -> ColorTheoryExtractor:
    option_values = _options_dict(options)
    if not config.validate_context(str(option_values["context"])):
        raise HTTPException(status_code=400, detail=f"Unknown context: {option_values['context']}")
    if not config.validate_scheme(option_values.get("scheme")):
        raise HTTPException(status_code=400, detail=f"Unknown scheme: {option_values['scheme']}")
    if not config.validate_max_dimension(int(option_values["max_dimension"])):
        raise HTTPException(status_code=400, detail=f"max_dimension out of range: {option_values['max_dimension']}")
    try:
        return ColorTheoryExtractor(option_values, attributes)
    except (ValueError, KeyError, TypeError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid extractor options: {str(e)}")


def _to_response(request_id: str, result: ExtractionResult, **extra) -> PaletteResponse:
    if result.palette is None:
        raise HTTPException(status_code=400, detail="Could not build a palette from the dominant color")
    return PaletteResponse(request_id=request_id, **result.to_dict(), **extra)


@router.post("/palette",
             response_model=PaletteResponse,
             summary="Palette from color",
             description="Expand an explicit dominant color into a full palette")
def create_palette(body: PaletteRequest) -> PaletteResponse:
    request_id = generate_request_id("pal")
    with log.request_context(request_id):
        extractor = _build_extractor(body.options)
        result = extractor.palette_for_color(body.color)
        log.info("Palette generated", extra={"dominant": body.color})
    return _to_response(request_id, result)


@router.post("/extract",
             response_model=PaletteResponse,
             summary="Palette from image",
             description="Pick a dominant color from an image and expand it into a palette")
def extract_palette(body: ExtractRequest) -> PaletteResponse:
    request_id = generate_request_id("ext")
    start_time = time.time()

    with log.request_context(request_id):
        extractor = _build_extractor(body.options, body.attributes)
        image_bytes = decode_base64_image(body.image_b64)
        rgba = load_rgba(image_bytes, extractor.options.max_dimension)
        height, width = rgba.shape[:2]

        result = extractor.extract_palette_from_rgba(rgba)

        log.info("Palette extracted", extra={
            "source": result.source.value,
            "candidates": len(result.scores),
            "ms_total": round((time.time() - start_time) * 1000, 2),
        })
    return _to_response(request_id, result, width=width, height=height)


@router.post("/accessibility",
             response_model=AccessibilityResponse,
             summary="Contrast audit",
             description="Report background/text pairs below the required contrast")
def audit_palette(body: AccessibilityRequest) -> AccessibilityResponse:
    backgrounds = [body.dominant, body.accent1, body.accent2]
    texts = [WHITE, BLACK, body.accent3, body.accent4]
    issues = audit_contrast(backgrounds, texts, body.minimum_contrast)
    return AccessibilityResponse(
        issues=[issue.to_dict() for issue in issues],
        minimum_contrast=body.minimum_contrast,
    )


@router.get("/simulate",
            response_model=SimulationResponse,
            summary="Color-blindness simulation")
def simulate(
    color: str = Query(..., description="Color in format #RRGGBB"),
    type: str = Query(ColorBlindness.DEUTERANOPIA.value, description="PROTANOPIA, DEUTERANOPIA or TRITANOPIA"),
) -> SimulationResponse:
    if hex_to_rgb(color) is None:
        raise HTTPException(status_code=400, detail=f"Invalid hex color: {color}")
    simulated = simulate_color_blindness(color, type)
    return SimulationResponse(color=color, type=type.upper(), simulated=simulated)
