from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from app.apis.deps import CurrentUser, DBSession, OwnedDeck
from app.core.config import settings
from app.core.db.schemas.decks import Card
from app.core.db_services import CardService
from app.core.logging import get_logger
from app.modules.ai_generation.models import GeneratedCard
from .schemas import (
    BulkCardCreate,
    BulkCardCreateResponse,
    CardCreate,
    CardRead,
    CardUpdate,
)


router = APIRouter()
logger = get_logger(__name__)


async def _owned_card(public_id: str, user: CurrentUser, session: DBSession) -> Card:
    card = await CardService(session).get_owned_card(public_id, user.id)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


@router.get(
    f"/{settings.app.version}/decks/{{deck_id}}/cards",
    response_model=list[CardRead],
    tags=["cards"],
)
async def list_cards(deck: OwnedDeck, session: DBSession) -> list[CardRead]:
    cards = await CardService(session).list_cards(deck.id)
    return [CardRead.model_validate(c) for c in cards]


@router.post(
    f"/{settings.app.version}/decks/{{deck_id}}/cards",
    response_model=CardRead,
    status_code=status.HTTP_201_CREATED,
    tags=["cards"],
)
async def create_card(deck: OwnedDeck, req: CardCreate, session: DBSession) -> CardRead:
    deck_id = deck.id
    card = await CardService(session).create_card(deck_id, req.front, req.back)
    logger.info("Created card %s", card.public_id, extra={"deck_id": deck_id})
    return CardRead.model_validate(card)


@router.post(
    f"/{settings.app.version}/decks/{{deck_id}}/cards/bulk",
    response_model=BulkCardCreateResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["cards"],
)
async def bulk_create_cards(
    deck: OwnedDeck, req: BulkCardCreate, session: DBSession
) -> BulkCardCreateResponse:
    """Persist many cards at once, e.g. the ones accepted from a generation preview."""
    deck_id = deck.id
    cards = await CardService(session).create_cards(
        deck_id, [GeneratedCard(front=c.front, back=c.back) for c in req.cards]
    )
    logger.info("Bulk created %d cards", len(cards), extra={"deck_id": deck_id})
    return BulkCardCreateResponse(
        cards=[CardRead.model_validate(c) for c in cards],
        message=f"{len(cards)} cards created successfully",
    )


@router.get(
    f"/{settings.app.version}/cards/{{public_id}}",
    response_model=CardRead,
    tags=["cards"],
)
async def get_card(public_id: str, user: CurrentUser, session: DBSession) -> CardRead:
    card = await _owned_card(public_id, user, session)
    return CardRead.model_validate(card)


@router.put(
    f"/{settings.app.version}/cards/{{public_id}}",
    response_model=CardRead,
    tags=["cards"],
)
async def update_card(
    public_id: str, req: CardUpdate, user: CurrentUser, session: DBSession
) -> CardRead:
    card = await _owned_card(public_id, user, session)
    card = await CardService(session).update_card(card, front=req.front, back=req.back)
    return CardRead.model_validate(card)


@router.delete(
    f"/{settings.app.version}/cards/{{public_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["cards"],
)
async def delete_card(public_id: str, user: CurrentUser, session: DBSession) -> Response:
    card = await _owned_card(public_id, user, session)
    await CardService(session).delete_card(card)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
