"""FastAPI application factory."""

import base64
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from label_scoring.api.models import AnalyzeRequest
from label_scoring.app_logging import configure_logging
from label_scoring.containers import AppContainer
from label_scoring.domain.analysis import AnalysisRecord
from label_scoring.domain.extraction import ExtractionRecord

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze product. Please try again with a clearer photo."
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/score")
    async def score(record: ExtractionRecord, request: Request) -> dict[str, object]:
        """Score an already extracted label record.

        Non-finite numbers are scored as-is but serialize as JSON null.
        """
        state_container: AppContainer = request.app.state.container
        return _record_payload(state_container.scoring_pipeline.run(record))

    @app.post("/analyze")
    async def analyze(payload: AnalyzeRequest, request: Request) -> dict[str, object]:
        """Extract a record from label photos and score it.

        Non-finite numbers read from the label are scored as-is but serialize
        as JSON null.
        """
        state_container: AppContainer = request.app.state.container
        if not payload.back_images:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="At least one back-of-pack image is required.",
            )
        try:
            back_images = [_decode_image(image) for image in payload.back_images]
            front_images = [_decode_image(image) for image in payload.front_images]
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Images must be non-empty base64 strings.",
            ) from exc

        language = payload.language or state_container.settings.default_language
        try:
            result = await state_container.analysis_service.analyze(
                back_images, front_images, language
            )
        except Exception as exc:
            logger.exception(
                "Label analysis failed",
                extra={"image_count": len(back_images) + len(front_images)},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=ANALYSIS_FAILED_MESSAGE,
            ) from exc
        return _record_payload(result)

    return app


def _decode_image(encoded: str) -> bytes:
    """Decode a base64 string, accepting an optional data URL prefix."""
    _, _, data = encoded.rpartition(",")
    image = base64.b64decode(data, validate=True)
    if not image:
        raise ValueError("Empty image")
    return image


def _record_payload(record: AnalysisRecord) -> dict[str, object]:
    """Convert an analysis record into a JSON-ready dict."""
    return asdict(record)
