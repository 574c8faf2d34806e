from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from app.apis.cards.schemas import CardRead
from app.apis.deps import CurrentUser, DBSession, OwnedDeck
from app.core.config import settings
from app.core.db_services import DeckService
from app.core.logging import get_logger
from .schemas import (
    DeckCreate,
    DeckRead,
    DeckUpdate,
    DeckWithCards,
    SampleDataLoaded,
)


router = APIRouter()
logger = get_logger(__name__)


@router.get(
    f"/{settings.app.version}/decks",
    response_model=list[DeckRead],
    tags=["decks"],
)
async def list_decks(
    user: CurrentUser,
    session: DBSession,
    q: str | None = Query(default=None, max_length=100),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> list[DeckRead]:
    """Decks of the current user, most recently updated first."""
    svc = DeckService(session)
    decks = await svc.list_decks(user.id, search=q, limit=limit)
    counts = await svc.card_counts(d.id for d in decks)
    return [
        DeckRead.model_validate(d).model_copy(update={"card_count": counts.get(d.id, 0)})
        for d in decks
    ]


@router.post(
    f"/{settings.app.version}/decks",
    response_model=DeckRead,
    status_code=status.HTTP_201_CREATED,
    tags=["decks"],
)
async def create_deck(
    req: DeckCreate, user: CurrentUser, session: DBSession
) -> DeckRead:
    deck = await DeckService(session).create_deck(user.id, req.title, req.description)
    logger.info("Deck created", extra={"user_id": user.id, "deck_id": deck.id})
    return DeckRead.model_validate(deck)


@router.get(
    f"/{settings.app.version}/decks/{{deck_id}}",
    response_model=DeckWithCards,
    tags=["decks"],
)
async def get_deck(deck_id: int, user: CurrentUser, session: DBSession) -> DeckWithCards:
    full = await DeckService(session).get_deck_with_cards(deck_id, user.id)
    if not full:
        raise HTTPException(status_code=404, detail="Deck not found or unauthorized")
    cards = [CardRead.model_validate(c) for c in full.cards]
    return DeckWithCards(
        id=full.id,
        title=full.title,
        description=full.description,
        created_at=full.created_at,
        updated_at=full.updated_at,
        card_count=len(cards),
        cards=cards,
    )


@router.put(
    f"/{settings.app.version}/decks/{{deck_id}}",
    response_model=DeckRead,
    tags=["decks"],
)
async def update_deck(deck: OwnedDeck, req: DeckUpdate, session: DBSession) -> DeckRead:
    svc = DeckService(session)
    deck = await svc.update_deck(deck, title=req.title, description=req.description)
    counts = await svc.card_counts([deck.id])
    return DeckRead.model_validate(deck).model_copy(
        update={"card_count": counts.get(deck.id, 0)}
    )


@router.delete(
    f"/{settings.app.version}/decks/{{deck_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["decks"],
)
async def delete_deck(deck: OwnedDeck, session: DBSession) -> Response:
    deck_id = deck.id
    await DeckService(session).delete_deck(deck)
    logger.info("Deck deleted", extra={"deck_id": deck_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    f"/{settings.app.version}/decks/test-data",
    response_model=SampleDataLoaded,
    status_code=status.HTTP_201_CREATED,
    tags=["decks"],
)
async def load_test_data(user: CurrentUser, session: DBSession) -> SampleDataLoaded:
    """Delete every deck of the current user and load the demo decks instead."""
    user_id = user.id
    decks, cards_created = await DeckService(session).load_sample_data(user_id)
    logger.info(
        "Loaded %d demo decks with %d cards",
        len(decks),
        cards_created,
        extra={"user_id": user_id},
    )
    return SampleDataLoaded(
        decks_created=len(decks),
        cards_created=cards_created,
        message=f"Loaded {len(decks)} decks with {cards_created} cards",
    )
