"""
Tests for service settings and request IDs.
"""
from hueforge.config import Config
from hueforge.utils.ids import extract_timestamp_from_request_id, generate_request_id


class TestConfig:
    """Settings validation helpers"""

    def test_validate_context(self):
        assert Config.validate_context("tech") is True
        assert Config.validate_context("SPACE") is False

    def test_validate_scheme(self):
        assert Config.validate_scheme("pastel") is True
        assert Config.validate_scheme(None) is True
        assert Config.validate_scheme("NEON") is False

    def test_validate_max_dimension(self):
        assert Config.validate_max_dimension(400) is True
        assert Config.validate_max_dimension(8) is False
        assert Config.validate_max_dimension(10000) is False

    def test_default_mime_types(self):
        assert set(Config.SUPPORTED_MIME_TYPES) == {"image/jpeg", "image/png", "image/webp", "image/gif"}


class TestRequestIds:
    """Request ID generation"""

    def test_format(self):
        request_id = generate_request_id("ext")
        assert request_id.startswith("ext-")
        assert len(extract_timestamp_from_request_id(request_id)) == 14

    def test_unique(self):
        assert generate_request_id() != generate_request_id()

    def test_malformed_id(self):
        assert extract_timestamp_from_request_id("nope") == ""
