"""
Test configuration and fixtures for HueForge tests.
"""
import base64
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hueforge.main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


def make_image(width, height, color=(255, 0, 0, 255), fmt="PNG"):
    """Encode a solid-color image and return its bytes."""
    image = Image.new("RGBA", (width, height), color)
    if fmt != "PNG":
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def red_png_b64():
    """Base64-encoded 40x30 pure red PNG."""
    return base64.b64encode(make_image(40, 30)).decode("ascii")


@pytest.fixture
def gray_pixels():
    """100 mid-gray pixels; no chroma, so nothing survives filtering."""
    return np.full((10, 10, 3), 128, dtype=np.uint8)


@pytest.fixture
def red_blue_pixels():
    """30 pure red, 10 pure blue and 60 gray pixels, red encountered first."""
    red = [(255, 0, 0)] * 30
    blue = [(0, 0, 255)] * 10
    gray = [(128, 128, 128)] * 60
    return np.array(red + blue + gray, dtype=np.uint8)
