"""End-to-end label analysis: extraction followed by scoring."""

import logging
from dataclasses import dataclass

from label_scoring.domain.analysis import AnalysisRecord
from label_scoring.domain.extraction import Language
from label_scoring.services.extraction import ExtractionService
from label_scoring.services.pipeline import ScoringPipeline

_logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """Extract a record from label photos and score it."""

    extraction_service: ExtractionService
    pipeline: ScoringPipeline

    async def analyze(
        self,
        back_images: list[bytes],
        front_images: list[bytes] | None = None,
        language: Language = Language.ENGLISH,
    ) -> AnalysisRecord:
        """Run extraction, then the scoring pipeline, on one set of photos."""
        record = await self.extraction_service.extract(
            back_images, front_images, language
        )
        result = self.pipeline.run(record)
        _logger.info(
            "Analyzed label: product=%s grade=%s health_score=%s",
            result.product_name,
            result.scores.grade.value if result.scores.grade else None,
            result.scores.health_score,
        )
        return result
