"""
HueForge API
Extracts psychology-weighted color palettes from images.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hueforge import __version__
from hueforge.api.v1 import router as v1_router
from hueforge.config import config
from hueforge.schemas import HealthResponse
from hueforge.utils.logging import get_logger

log = get_logger()

app = FastAPI(
    title="HueForge",
    description="Color-theory palette extraction and accessibility checks",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__)


log.info("HueForge API ready", extra={"version": __version__, "log_level": config.LOG_LEVEL})
