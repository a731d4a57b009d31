"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from label_scoring.adapters.openai_extraction_client import OpenAIExtractionClient
from label_scoring.config import Settings
from label_scoring.services.analysis import AnalysisService
from label_scoring.services.extraction import ExtractionService
from label_scoring.services.grading import GradeCalculator
from label_scoring.services.health_score import HealthScoreCalculator
from label_scoring.services.pipeline import ScoringPipeline


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    scoring_pipeline: ScoringPipeline
    extraction_service: ExtractionService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    scoring_pipeline = ScoringPipeline(
        grade_calculator=GradeCalculator(),
        health_score_calculator=HealthScoreCalculator(),
        teaspoon_grams=resolved_settings.sugar_teaspoon_grams,
    )
    openai_client = OpenAIExtractionClient.create(resolved_settings.openai_api_key)
    extraction_service = ExtractionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    analysis_service = AnalysisService(
        extraction_service=extraction_service,
        pipeline=scoring_pipeline,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        scoring_pipeline=scoring_pipeline,
        extraction_service=extraction_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
