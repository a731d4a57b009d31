"""Tests for the HTTP API."""

import base64

from fastapi.testclient import TestClient

from label_scoring.api.app import ANALYSIS_FAILED_MESSAGE, create_app
from label_scoring.config import Settings
from label_scoring.containers import AppContainer
from tests.conftest import (
    FailingExtractionClient,
    FakeExtractionClient,
    make_container,
    sample_extraction,
)

JPEG_B64 = base64.b64encode(b"\xff\xd8\xff" + b"label").decode("utf-8")


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_score_endpoint_returns_analysis(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/score", json=sample_extraction())

    assert response.status_code == 200
    body = response.json()
    assert body["product_name"] == "Choco Cream Biscuits"
    assert body["scores"]["grade"] == "E"
    assert body["scores"]["grade_reason"] is None
    assert body["scores"]["health_score"] == 21
    assert body["sugar_teaspoons"] == 2.0
    assert body["sugar_teaspoons_source"] == "derived"
    assert body["ingredients"][2]["risk_level"] == "avoid"
    assert body["claims"][0]["verdict"] == "misleading"


def test_score_endpoint_handles_empty_record(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/score", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["scores"]["grade"] is None
    assert body["scores"]["grade_reason"]
    assert body["ingredients"] == []
    assert body["claims"] == []


def test_score_endpoint_rejects_invalid_record(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/score", json={"sugarPerServingGrams": "lots"})

    assert response.status_code == 422


def test_analyze_endpoint_runs_extraction_and_scoring(
    container: AppContainer, extraction_client: FakeExtractionClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/analyze",
        json={
            "backImages": [f"data:image/jpeg;base64,{JPEG_B64}"],
            "frontImages": [JPEG_B64],
            "language": "Tamil",
        },
    )

    assert response.status_code == 200
    assert response.json()["scores"]["health_score"] == 21
    call = extraction_client.calls[0]
    assert len(call["image_data_urls"]) == 2  # type: ignore[arg-type]
    assert "Tamil" in str(call["prompt"])


def test_analyze_endpoint_uses_default_language(
    container: AppContainer, extraction_client: FakeExtractionClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"backImages": [JPEG_B64]})

    assert response.status_code == 200
    assert "English" in str(extraction_client.calls[0]["prompt"])


def test_analyze_endpoint_requires_back_image(
    container: AppContainer, extraction_client: FakeExtractionClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"backImages": []})

    assert response.status_code == 400
    assert extraction_client.calls == []


def test_analyze_endpoint_rejects_bad_base64(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"backImages": ["not base64!"]})

    assert response.status_code == 400


def test_analyze_endpoint_reports_extraction_failure(settings: Settings) -> None:
    container = make_container(settings, FailingExtractionClient())
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"backImages": [JPEG_B64]})

    assert response.status_code == 502
    assert response.json() == {"detail": ANALYSIS_FAILED_MESSAGE}


def test_analyze_endpoint_rejects_empty_image(
    container: AppContainer, extraction_client: FakeExtractionClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/analyze",
        json={"backImages": [""], "frontImages": ["data:image/jpeg;base64,"]},
    )

    assert response.status_code == 400
    assert extraction_client.calls == []


def test_analyze_endpoint_reports_malformed_extraction(settings: Settings) -> None:
    client_payload = FakeExtractionClient(payload={"sugarPerServingGrams": "lots"})
    container = make_container(settings, client_payload)
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"backImages": [JPEG_B64]})

    assert response.status_code == 502


def test_score_endpoint_serializes_non_finite_values_as_null(
    container: AppContainer,
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/score",
        content='{"sugarPerServingGrams": 1e999}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["sugar_per_serving_g"] is None
    assert body["sugar_teaspoons"] is None
    assert body["scores"]["health_score"] == 0


def test_analyze_endpoint_requires_back_images_field(
    container: AppContainer, extraction_client: FakeExtractionClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/analyze", json={"frontImages": [JPEG_B64]})

    assert response.status_code == 400
    assert extraction_client.calls == []
