"""
Tests for the API endpoints.

Runs against the app in-process with FastAPI's TestClient; OCR is
monkeypatched so Tesseract is not needed.
"""

import logging
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from receiptscan.main import app
from receiptscan.services.ocr import OCRService

RECEIPT_TEXT = "WALMART\n123 Main St\n05/02/24\nSUBTOTAL 18.50\nTAX 1.50\nTOTAL 20.00\nTHANK YOU"


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root(client):
    assert client.get("/").json()["status"] == "running"


class TestScanText:
    """POST /scan/text"""

    def test_success(self, client):
        response = client.post("/scan/text", json={"text": RECEIPT_TEXT})

        assert response.status_code == 200
        body = response.json()
        assert body["merchant_name"] == "WALMART"
        assert body["date"] == "2024-02-05"
        assert Decimal(str(body["total_amount"])) == Decimal("20.00")
        assert body["formatted_date"] == "5 Feb 2024"

    def test_out_of_date_range(self, client):
        response = client.post("/scan/text", json={"text": RECEIPT_TEXT, "valid_from": "2024-06-01"})

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "out_of_date_range"

    def test_blank_text(self, client):
        response = client.post("/scan/text", json={"text": "   "})

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "no_text_found"

    def test_no_amount(self, client):
        response = client.post("/scan/text", json={"text": "WALMART\nTHANK YOU"})

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "no_amount_found"


class TestScanImage:
    """POST /scan"""

    def test_rejects_non_image(self, client):
        response = client.post("/scan", files={"file": ("receipt.txt", b"hello", "text/plain")})
        assert response.status_code == 400

    def test_success(self, client, monkeypatch):
        monkeypatch.setattr(OCRService, "recognize_lines", lambda self, data: RECEIPT_TEXT.split("\n"))

        response = client.post(
            "/scan",
            files={"file": ("receipt.png", b"fake-png", "image/png")},
            data={"valid_from": "2024-01-01"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["merchant_name"] == "WALMART"
        assert body["formatted_amount"] == "£20.00"

    def test_success_with_info_logging(self, client, monkeypatch, caplog):
        """Upload logging at INFO must not break the request."""
        caplog.set_level(logging.INFO)
        monkeypatch.setattr(OCRService, "recognize_lines", lambda self, data: RECEIPT_TEXT.split("\n"))

        response = client.post("/scan", files={"file": ("receipt.png", b"fake-png", "image/png")})

        assert response.status_code == 200
        assert any(getattr(r, "upload_name", None) == "receipt.png" for r in caplog.records)

    def test_no_results(self, client, monkeypatch):
        monkeypatch.setattr(OCRService, "recognize_lines", lambda self, data: [])

        response = client.post("/scan", files={"file": ("receipt.png", b"fake-png", "image/png")})

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "no_results"

    def test_invalid_image(self, client):
        response = client.post("/scan", files={"file": ("receipt.png", b"not an image", "image/png")})

        assert response.status_code == 422
        assert response.json()["detail"] == {
            "error": "invalid_image",
            "message": "Photo quality is too poor. Please try taking a clearer picture.",
        }
