"""Label extraction service using LLM vision models."""

import base64
from dataclasses import dataclass
from typing import Protocol

from label_scoring.domain.extraction import ExtractionRecord, Language


def _nullable(schema: dict[str, object]) -> dict[str, object]:
    return {"anyOf": [schema, {"type": "null"}]}


def _strict_object(properties: dict[str, object]) -> dict[str, object]:
    """Object schema with every property required, as strict outputs demand."""
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


_NUMBER: dict[str, object] = {"type": "number"}
_STRING: dict[str, object] = {"type": "string"}

EXTRACTION_SCHEMA: dict[str, object] = _strict_object(
    {
        "productName": _nullable(_STRING),
        "servingSize": _nullable(_STRING),
        "sugarPerServingGrams": _nullable(_NUMBER),
        "sugarTeaspoons": _nullable(_NUMBER),
        "summary": _nullable(_STRING),
        "macros": _nullable(
            _strict_object(
                {
                    "carbs": _nullable(_NUMBER),
                    "protein": _nullable(_NUMBER),
                    "fat": _nullable(_NUMBER),
                }
            )
        ),
        "nutritionPer100g": _nullable(
            _strict_object(
                {
                    "energyKJ": _nullable(_NUMBER),
                    "sugarGrams": _nullable(_NUMBER),
                    "satFatGrams": _nullable(_NUMBER),
                    "sodiumMg": _nullable(_NUMBER),
                    "fiberGrams": _nullable(_NUMBER),
                    "proteinGrams": _nullable(_NUMBER),
                    "fruitVegPercent": _nullable(_NUMBER),
                }
            )
        ),
        "ingredients": {
            "type": "array",
            "items": _strict_object(
                {
                    "originalName": _STRING,
                    "translatedName": _STRING,
                    "description": _STRING,
                    "riskLevel": {
                        "type": "string",
                        "enum": ["safe", "caution", "avoid"],
                    },
                    "bannedIn": {"type": "array", "items": _STRING},
                }
            ),
        },
        "claims": {
            "type": "array",
            "items": _strict_object(
                {
                    "claim": _STRING,
                    "reality": _STRING,
                    "verdict": {
                        "type": "string",
                        "enum": ["verified", "misleading", "unknown"],
                    },
                }
            ),
        },
    }
)

_SYSTEM_PROMPT = (
    "You are a truthful nutritionist and food scientist decoding packaged food "
    "labels. The images show the back of the pack (nutrition panel and "
    "ingredients) and optionally the front of the pack.\n"
    "1. Identify the product name and the serving size.\n"
    "2. Extract sugar per serving. If it is not stated per serving, estimate it "
    "from a typical serving size for this product type.\n"
    "3. Convert sugar grams to teaspoons (divide by 4.2).\n"
    "4. List every ingredient in label order. Give each a short description "
    "and a risk level of safe, caution or avoid.\n"
    "5. For each ingredient, list regions (EU, UK, Canada, Japan, California) "
    "where it is banned or strictly regulated.\n"
    "6. Compare front-of-pack claims with the ingredient list and mark each "
    "as verified, misleading or unknown.\n"
    "7. Extract carbs, protein and fat per serving.\n"
    "8. Extract the per 100g (or 100ml) values: energy in kJ, sugars, "
    "saturated fat, sodium in mg, fibre, protein and percent of fruit, "
    "vegetables and nuts. Use null for any value the label does not show and "
    "null for the whole panel if there is no per 100g table.\n"
    "Do not compute any score or grade. Return JSON matching the schema."
)


def build_prompt(language: Language) -> str:
    """Build the extraction prompt for the requested output language."""
    prompt = (
        f"{_SYSTEM_PROMPT}\n"
        f"The user speaks {language.value}. Write translatedName in "
        f"{language.value}."
    )
    if language is Language.ENGLISH:
        prompt += " All translatedName values must be English; no other scripts."
    return prompt


class ExtractionClient(Protocol):
    """Interface for LLM label extraction."""

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
        """Return structured label extraction data."""


@dataclass
class ExtractionService:
    """Service that prepares extraction prompts and validates results."""

    client: ExtractionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def extract(
        self,
        back_images: list[bytes],
        front_images: list[bytes] | None = None,
        language: Language = Language.ENGLISH,
    ) -> ExtractionRecord:
        """Extract a label record from pack photos via the configured client."""
        if not back_images:
            raise ValueError("At least one back-of-pack image is required")
        data_urls = [_to_data_url(image) for image in back_images]
        data_urls.extend(_to_data_url(image) for image in front_images or [])
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_urls=data_urls,
            schema=EXTRACTION_SCHEMA,
            prompt=build_prompt(language),
        )
        return ExtractionRecord.model_validate(raw)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
