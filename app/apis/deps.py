from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.base import get_session
from app.core.db.schemas.auth import User
from app.core.db.schemas.decks import Deck
from app.core.db_services import DeckService
from app.modules.auth import current_active_user

CurrentUser = Annotated[User, Depends(current_active_user)]
DBSession = Annotated[AsyncSession, Depends(get_session)]


async def get_owned_deck(deck_id: int, user: CurrentUser, session: DBSession) -> Deck:
    """Resolve ``deck_id`` from the path, 404 when missing or not owned."""
    deck = await DeckService(session).get_deck(deck_id, user.id)
    if not deck:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Deck not found or unauthorized",
        )
    return deck


OwnedDeck = Annotated[Deck, Depends(get_owned_deck)]
