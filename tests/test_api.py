"""
API tests for the HueForge v1 endpoints.
"""
import base64

from hueforge.config import config
from tests.conftest import make_image


def test_health_check(test_client):
    """Test health endpoint."""
    response = test_client.get("/healthz")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["service"] == "hueforge"
    assert "version" in data


class TestPaletteEndpoint:
    """POST /v1/palette"""

    def test_palette_from_color(self, test_client):
        response = test_client.post("/v1/palette", json={"color": "#3B82F6"})
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "override"
        assert data["request_id"].startswith("pal-")
        assert data["palette"]["dominant"] == "#3B82F6"
        assert data["palette"]["fore_color"] == "#000000"
        assert data["scores"] == []

    def test_options_forwarded(self, test_client):
        response = test_client.post("/v1/palette", json={
            "color": "#FFFFFF",
            "options": {"harmony_lightness": None, "simulate_color_blindness": True},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["palette"]["complementary"] == "#B8F9F9"
        assert data["color_blind_simulation"]["dominant"] == "#FFFFFF"

    def test_invalid_color_rejected(self, test_client):
        response = test_client.post("/v1/palette", json={"color": "blue"})
        assert response.status_code == 422

    def test_configured_max_dimension_out_of_range(self, test_client, monkeypatch):
        monkeypatch.setattr(config, "MAX_DIMENSION", 8)
        response = test_client.post("/v1/palette", json={"color": "#3B82F6"})
        assert response.status_code == 400
        assert "max_dimension" in response.json()["detail"]

    def test_unknown_context(self, test_client):
        response = test_client.post("/v1/palette", json={"color": "#3B82F6",
                                                         "options": {"context": "SPACE"}})
        assert response.status_code == 400


class TestExtractEndpoint:
    """POST /v1/extract"""

    def test_extract_red_image(self, test_client, red_png_b64):
        response = test_client.post("/v1/extract", json={"image_b64": red_png_b64})
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "scored"
        assert data["palette"]["dominant"] == "#FF0000"
        assert data["width"] == 40
        assert data["height"] == 30
        assert data["scores"][0]["color"] == "#FF0000"

    def test_gray_image_falls_back(self, test_client):
        gray = base64.b64encode(make_image(20, 20, (128, 128, 128, 255))).decode("ascii")
        response = test_client.post("/v1/extract", json={
            "image_b64": gray,
            "options": {"fallback_color": "#10B981"},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "fallback"
        assert data["palette"]["dominant"] == "#10B981"

    def test_text_area(self, test_client, red_png_b64):
        response = test_client.post("/v1/extract", json={
            "image_b64": red_png_b64,
            "options": {"text_area": {"x": 0, "y": 0, "width": 100, "height": 50}},
        })
        assert response.status_code == 200
        palette = response.json()["palette"]
        assert palette["text_area"]["height"] == 50
        assert palette["image_fore_color"]["color"] == "#000000"

    def test_bad_attribute_number(self, test_client, red_png_b64):
        response = test_client.post("/v1/extract", json={
            "image_b64": red_png_b64,
            "attributes": {"data-minimum": "ignored", "data-weight": "not-a-number"},
        })
        assert response.status_code == 400

    def test_invalid_base64(self, test_client):
        response = test_client.post("/v1/extract", json={"image_b64": "%%%"})
        assert response.status_code == 400

    def test_not_an_image(self, test_client):
        payload = base64.b64encode(b"plain text, definitely not an image").decode("ascii")
        response = test_client.post("/v1/extract", json={"image_b64": payload})
        assert response.status_code == 400


class TestAccessibilityEndpoint:
    """POST /v1/accessibility"""

    def test_reports_issues(self, test_client):
        response = test_client.post("/v1/accessibility", json={
            "dominant": "#CCCCCC",
            "accent1": "#FFFFFF",
            "accent2": "#999999",
            "accent3": "#EEEEEE",
            "accent4": "#333333",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["minimum_contrast"] == 4.5
        assert any(i["background"] == "#CCCCCC" and i["text"] == "#FFFFFF" for i in data["issues"])


class TestSimulateEndpoint:
    """GET /v1/simulate"""

    def test_simulate(self, test_client):
        response = test_client.get("/v1/simulate", params={"color": "#FF0000", "type": "protanopia"})
        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "PROTANOPIA"
        assert data["simulated"] == "#918E00"

    def test_invalid_color(self, test_client):
        response = test_client.get("/v1/simulate", params={"color": "nope"})
        assert response.status_code == 400
