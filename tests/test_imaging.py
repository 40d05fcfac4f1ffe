"""
Tests for image decoding and resizing.
"""
import base64

import numpy as np
import pytest
from fastapi import HTTPException

from hueforge.config import config
from hueforge.services.imaging import decode_base64_image, load_rgba, validate_magic_bytes
from tests.conftest import make_image


class TestMagicBytes:
    """File type sniffing"""

    def test_png(self):
        assert validate_magic_bytes(make_image(4, 4)) == "image/png"

    def test_jpeg(self):
        assert validate_magic_bytes(make_image(4, 4, fmt="JPEG")) == "image/jpeg"

    def test_too_small(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_magic_bytes(b"short")
        assert exc_info.value.status_code == 400

    def test_unknown_format(self):
        with pytest.raises(HTTPException):
            validate_magic_bytes(b"x" * 32)


class TestDecodeBase64:
    """Base64 payload decoding"""

    def test_data_url_prefix(self):
        png = make_image(4, 4)
        payload = "data:image/png;base64," + base64.b64encode(png).decode("ascii")
        assert decode_base64_image(payload) == png

    def test_invalid_payload(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_base64_image("!!not base64!!")
        assert exc_info.value.status_code == 400


class TestLoadRgba:
    """Decoding into RGBA arrays"""

    def test_shape_and_dtype(self):
        rgba = load_rgba(make_image(40, 30, (10, 20, 30, 255)), max_dimension=400)
        assert rgba.shape == (30, 40, 4)
        assert rgba.dtype == np.uint8
        assert tuple(rgba[0, 0]) == (10, 20, 30, 255)

    def test_long_edge_downscaled(self):
        rgba = load_rgba(make_image(800, 200), max_dimension=400)
        assert rgba.shape == (100, 400, 4)

    def test_never_upscaled(self):
        rgba = load_rgba(make_image(10, 5), max_dimension=400)
        assert rgba.shape == (5, 10, 4)

    def test_jpeg_becomes_opaque_rgba(self):
        rgba = load_rgba(make_image(8, 8, fmt="JPEG"), max_dimension=400)
        assert rgba.shape == (8, 8, 4)
        assert (rgba[..., 3] == 255).all()

    def test_sniffed_type_must_be_supported(self, monkeypatch):
        monkeypatch.setattr(config, "SUPPORTED_MIME_TYPES", ["image/png"])
        assert load_rgba(make_image(4, 4), max_dimension=400).shape == (4, 4, 4)
        with pytest.raises(HTTPException) as exc_info:
            load_rgba(make_image(4, 4, fmt="JPEG"), max_dimension=400)
        assert exc_info.value.status_code == 400
        assert "image/jpeg" in exc_info.value.detail
