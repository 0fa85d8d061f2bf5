import hashlib

from fastapi.testclient import TestClient

from finsync.runtime.config import OcrConfig
from finsync.runtime.receipt_server import create_app


def _client(**overrides) -> TestClient:
    return TestClient(create_app(OcrConfig(simulated_delay_seconds=0, **overrides)))


def test_upload_receipt_returns_extracted_data() -> None:
    image = b"fake receipt image"

    response = _client().post("/ocr", files={"file": ("receipt.jpg", image, "image/jpeg")})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "success"
    assert payload["image_sha256"] == hashlib.sha256(image).hexdigest()
    assert payload["size_bytes"] == len(image)
    assert payload["result"]["ocr_method"] == "simulation"
    assert payload["result"]["extracted_data"]["merchant_name"]
    assert payload["result"]["validation"]["is_valid"] is True


def test_upload_without_file_is_rejected() -> None:
    response = _client().post("/ocr", data={"note": "no image"})

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_empty_upload_is_rejected() -> None:
    response = _client().post("/ocr", files={"file": ("receipt.jpg", b"", "image/jpeg")})

    assert response.status_code == 400


def test_upload_without_any_backend_is_unprocessable() -> None:
    response = _client(simulation_enabled=False).post(
        "/ocr", files={"file": ("receipt.jpg", b"image", "image/jpeg")}
    )

    assert response.status_code == 422
    assert response.json()["message"] == "No text could be extracted from the receipt image"


def test_status_reports_configuration() -> None:
    payload = _client().get("/status").json()

    assert payload["supported_methods"] == ["simulation"]
    assert payload["configuration_valid"] is False
    assert payload["configuration_issues"] == ["Google Vision API not configured"]


def test_health() -> None:
    assert _client().get("/health").json() == {"status": "ok"}
