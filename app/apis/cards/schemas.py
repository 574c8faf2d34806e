from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.core.db.schemas.decks import CARD_TEXT_MAX_LENGTH
from app.modules.ai_generation.models import MAX_GENERATED_CARDS


class CardCreate(BaseModel):
    front: str = Field(..., min_length=1, max_length=CARD_TEXT_MAX_LENGTH)
    back: str = Field(..., min_length=1, max_length=CARD_TEXT_MAX_LENGTH)


class CardUpdate(BaseModel):
    front: str = Field(..., min_length=1, max_length=CARD_TEXT_MAX_LENGTH)
    back: str = Field(..., min_length=1, max_length=CARD_TEXT_MAX_LENGTH)


class BulkCardCreate(BaseModel):
    cards: list[CardCreate] = Field(..., min_length=1, max_length=MAX_GENERATED_CARDS)


class CardRead(BaseModel):
    public_id: str
    deck_id: int
    front: str
    back: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkCardCreateResponse(BaseModel):
    cards: list[CardRead]
    message: str
