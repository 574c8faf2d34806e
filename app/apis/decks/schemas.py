from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.apis.cards.schemas import CardRead
from app.core.db.schemas.decks import (
    DECK_DESCRIPTION_MAX_LENGTH,
    DECK_TITLE_MAX_LENGTH,
)


class DeckCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=DECK_TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DECK_DESCRIPTION_MAX_LENGTH)


class DeckUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=DECK_TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DECK_DESCRIPTION_MAX_LENGTH)


class DeckRead(BaseModel):
    id: int
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    card_count: int = 0

    model_config = {"from_attributes": True}


class DeckWithCards(DeckRead):
    cards: list[CardRead] = Field(default_factory=list)


class SampleDataLoaded(BaseModel):
    decks_created: int
    cards_created: int
    message: str
