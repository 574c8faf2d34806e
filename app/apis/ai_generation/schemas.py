from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.modules.ai_generation.models import (
    MAX_GENERATED_CARDS,
    GeneratedCard,
    GenerationErrorKind,
)

LanguageCode = Literal["en", "fr", "es", "de", "it", "pt", "ja", "zh", "ko", "ru"]


class GenerateCardsRequest(BaseModel):
    count: int = Field(..., ge=1, le=MAX_GENERATED_CARDS)
    language: LanguageCode = "en"


class GenerateCardsResponse(BaseModel):
    success: bool
    cards: list[GeneratedCard] = Field(default_factory=list)
    error: str | None = None
    error_kind: GenerationErrorKind | None = None
    message: str | None = None
