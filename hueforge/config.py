"""
HueForge Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from hueforge.services.colors.reference import ColorContext, ColorScheme

load_dotenv()


class Config:
    """Configuration class for HueForge services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("HUEFORGE_LOG_LEVEL", "INFO")

    # Image input limits
    MAX_FILE_MB: int = int(os.environ.get("HUEFORGE_MAX_FILE_MB", "10"))
    MAX_DIMENSION: int = int(os.environ.get("HUEFORGE_MAX_DIMENSION", "400"))

    # Extractor defaults applied beneath caller options
    DEFAULT_CONTEXT: str = os.environ.get("HUEFORGE_DEFAULT_CONTEXT", "TECH").upper()
    DEFAULT_SCHEME: str = os.environ.get("HUEFORGE_DEFAULT_SCHEME", "VIBRANT").upper()
    FALLBACK_COLOR: str = os.environ.get("HUEFORGE_FALLBACK_COLOR", "#3B82F6")

    # CORS
    ALLOWED_ORIGINS: str = os.environ.get("HUEFORGE_ALLOWED_ORIGINS", "http://localhost:3000")

    # Accepted image formats, matched against the sniffed magic bytes
    SUPPORTED_MIME_TYPES: list = [
        mime.strip() for mime in os.environ.get(
            "HUEFORGE_SUPPORTED_MIME_TYPES", "image/jpeg,image/png,image/webp,image/gif"
        ).split(",") if mime.strip()
    ]

    @classmethod
    def validate_context(cls, context: str) -> bool:
        """Validate a scoring context name."""
        return context.upper() in ColorContext.__members__

    @classmethod
    def validate_scheme(cls, scheme: Optional[str]) -> bool:
        """Validate a scheme preset name (None disables presets)."""
        return scheme is None or scheme.upper() in ColorScheme.__members__

    @classmethod
    def validate_max_dimension(cls, max_dimension: int) -> bool:
        """Validate the sampling canvas size."""
        return 16 <= max_dimension <= 4096

    @classmethod
    def allowed_origins(cls) -> list:
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
