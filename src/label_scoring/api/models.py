"""Request models for the label scoring API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from label_scoring.domain.extraction import Language


class AnalyzeRequest(BaseModel):
    """Label photos to analyze, as base64 strings or data URLs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    back_images: list[str] = Field(default_factory=list)
    front_images: list[str] = Field(default_factory=list)
    language: Language | None = None
