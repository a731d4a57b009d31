"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field

import pytest

from label_scoring.config import Settings
from label_scoring.containers import AppContainer
from label_scoring.services.analysis import AnalysisService
from label_scoring.services.extraction import ExtractionClient, ExtractionService
from label_scoring.services.pipeline import ScoringPipeline


def sample_extraction() -> dict[str, object]:
    """Extraction payload for a sugary biscuit, in the collaborator's wire format."""
    return {
        "productName": "Choco Cream Biscuits",
        "servingSize": "3 biscuits (30 g)",
        "sugarPerServingGrams": 8.4,
        "summary": "Mostly refined flour and sugar.",
        "macros": {"carbs": 20.1, "protein": 2.0, "fat": 6.5},
        "nutritionPer100g": {
            "energyKJ": 2050,
            "sugarGrams": 28,
            "satFatGrams": 9.5,
            "sodiumMg": 310,
            "fiberGrams": 1.2,
            "proteinGrams": 6.7,
            "fruitVegPercent": 0,
        },
        "ingredients": [
            {
                "originalName": "Refined Wheat Flour (Maida)",
                "translatedName": "Refined Wheat Flour",
                "description": "Highly processed flour.",
                "riskLevel": "caution",
                "bannedIn": [],
            },
            {
                "originalName": "Sugar",
                "translatedName": "Sugar",
                "description": "Added sugar.",
                "riskLevel": "caution",
                "bannedIn": [],
            },
            {
                "originalName": "INS 319",
                "translatedName": "TBHQ",
                "description": "Synthetic antioxidant.",
                "riskLevel": "avoid",
                "bannedIn": ["Japan"],
            },
        ],
        "claims": [
            {
                "claim": "Made with real cocoa",
                "reality": "Cocoa solids are 2% of the biscuit.",
                "verdict": "misleading",
            }
        ],
        "healthScore": 87,
        "nutriScore": "A",
    }


@dataclass
class FakeExtractionClient(ExtractionClient):
    """Fake extraction client that records requests."""

    payload: dict[str, object] = field(default_factory=sample_extraction)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_urls: list[str],
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "image_data_urls": image_data_urls,
                "schema": schema,
                "prompt": prompt,
            }
        )
        return self.payload


@dataclass
class FailingExtractionClient(ExtractionClient):
    """Extraction client that always fails."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_urls: list[str],
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        raise RuntimeError("OpenAI returned an empty response")


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def extraction_client() -> FakeExtractionClient:
    return FakeExtractionClient()


def make_container(settings: Settings, client: ExtractionClient) -> AppContainer:
    pipeline = ScoringPipeline(teaspoon_grams=settings.sugar_teaspoon_grams)
    extraction_service = ExtractionService(
        client=client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        scoring_pipeline=pipeline,
        extraction_service=extraction_service,
        analysis_service=AnalysisService(extraction_service, pipeline),
        close_resources=close_resources,
    )


@pytest.fixture
def container(
    settings: Settings, extraction_client: FakeExtractionClient
) -> AppContainer:
    return make_container(settings, extraction_client)


@pytest.fixture
def package_logs(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch):
    """Capture package logs even after configure_logging disabled propagation."""
    monkeypatch.setattr(logging.getLogger("label_scoring"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="label_scoring")
    return caplog
