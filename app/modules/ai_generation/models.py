"""Pydantic models exchanged with the card generation pipeline."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

MAX_GENERATED_CARDS = 50

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ja": "Japanese",
    "zh": "Chinese",
    "ko": "Korean",
    "ru": "Russian",
}


def language_label(code: str) -> str:
    """Human name for a language code; unknown values pass through."""
    return SUPPORTED_LANGUAGES.get(code.lower(), code)


class GeneratedCard(BaseModel):
    """A front/back pair proposed by the model, not yet persisted."""

    front: str
    back: str


class ExistingCard(BaseModel):
    front: str
    back: str


class GenerationRequest(BaseModel):
    deck_title: str
    deck_description: str = ""
    existing_cards: list[ExistingCard] = Field(default_factory=list)
    count: int = Field(..., ge=1, le=MAX_GENERATED_CARDS)
    language: str = "en"


class GenerationErrorKind(str, enum.Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_RESPONSE = "malformed_response"
    NO_VALID_CARDS = "no_valid_cards"
    NOT_IMPLEMENTED = "not_implemented"
    GENERATION_ERROR = "generation_error"


class GenerationResult(BaseModel):
    success: bool
    cards: list[GeneratedCard] = Field(default_factory=list)
    error: str | None = None
    error_kind: GenerationErrorKind | None = None

    @classmethod
    def ok(cls, cards: list[GeneratedCard]) -> "GenerationResult":
        return cls(success=True, cards=cards)

    @classmethod
    def failure(cls, kind: GenerationErrorKind, message: str) -> "GenerationResult":
        return cls(success=False, error=message, error_kind=kind)
