"""Database service classes for decks and cards."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import selectinload

from app.core.db.schemas.decks import Card, Deck
from app.modules.ai_generation.models import GeneratedCard
from app.modules.cards.public_id import (
    create_batch_with_unique_ids,
    create_with_unique_id,
)
from app.modules.decks.sample_data import SAMPLE_DECKS, SampleDeck


class DeckService:
    """Service for deck ownership checks and CRUD."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_decks(
        self,
        user_id: int,
        *,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Deck]:
        """Decks owned by the user, most recently updated first."""
        query = select(Deck).where(Deck.user_id == user_id)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(Deck.title.ilike(pattern), Deck.description.ilike(pattern))
            )
        query = query.order_by(Deck.updated_at.desc(), Deck.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_deck(self, deck_id: int, user_id: int) -> Optional[Deck]:
        """Return the deck only when it belongs to ``user_id``."""
        result = await self.session.execute(
            select(Deck).where(Deck.id == deck_id, Deck.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_deck_with_cards(self, deck_id: int, user_id: int) -> Optional[Deck]:
        result = await self.session.execute(
            select(Deck)
            .options(selectinload(Deck.cards))
            .where(Deck.id == deck_id, Deck.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def card_counts(self, deck_ids: Iterable[int]) -> dict[int, int]:
        ids = list(deck_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(Card.deck_id, func.count(Card.id))
            .where(Card.deck_id.in_(ids))
            .group_by(Card.deck_id)
        )
        return {deck_id: count for deck_id, count in result.all()}

    async def create_deck(
        self, user_id: int, title: str, description: Optional[str] = None
    ) -> Deck:
        deck = Deck(user_id=user_id, title=title, description=description or "")
        self.session.add(deck)
        await self.session.commit()
        await self.session.refresh(deck)
        return deck

    async def update_deck(
        self,
        deck: Deck,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Deck:
        if title is not None:
            deck.title = title
        if description is not None:
            deck.description = description
        deck.updated_at = func.now()
        await self.session.commit()
        await self.session.refresh(deck)
        return deck

    async def delete_deck(self, deck: Deck) -> None:
        # The FK cascade covers PostgreSQL; SQLite ships with FKs disabled
        await self.session.execute(delete(Card).where(Card.deck_id == deck.id))
        await self.session.delete(deck)
        await self.session.commit()

    async def delete_all_for_user(self, user_id: int) -> None:
        deck_ids = select(Deck.id).where(Deck.user_id == user_id)
        await self.session.execute(delete(Card).where(Card.deck_id.in_(deck_ids)))
        await self.session.execute(delete(Deck).where(Deck.user_id == user_id))
        await self.session.commit()

    async def load_sample_data(
        self, user_id: int, datasets: Sequence[SampleDeck] = SAMPLE_DECKS
    ) -> tuple[list[Deck], int]:
        """Replace all of the user's decks with the demo datasets.

        Returns the created decks and the number of cards inserted.
        """
        await self.delete_all_for_user(user_id)

        cards = CardService(self.session)
        decks: list[Deck] = []
        total_cards = 0
        for dataset in datasets:
            deck = await self.create_deck(user_id, dataset.title, dataset.description)
            deck_id = deck.id
            created = await cards.create_cards(deck_id, dataset.cards)
            total_cards += len(created)
            decks.append(deck)
        return decks, total_cards


class CardService:
    """Service for card storage; new cards get a unique public id."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_cards(self, deck_id: int) -> Sequence[Card]:
        result = await self.session.execute(
            select(Card).where(Card.deck_id == deck_id).order_by(Card.id.asc())
        )
        return result.scalars().all()

    async def get_owned_card(self, public_id: str, user_id: int) -> Optional[Card]:
        """Look a card up by public id, scoped to decks owned by ``user_id``."""
        result = await self.session.execute(
            select(Card)
            .join(Deck, Deck.id == Card.deck_id)
            .where(Card.public_id == public_id, Deck.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _touch_deck(self, deck_id: int) -> None:
        await self.session.execute(
            update(Deck).where(Deck.id == deck_id).values(updated_at=func.now())
        )

    async def _insert_cards(self, deck_id: int, cards: list[Card]) -> None:
        self.session.add_all(cards)
        try:
            await self.session.flush()
            await self._touch_deck(deck_id)
            await self.session.commit()
        except IntegrityError:
            # Leave the session usable for the next allocation attempt
            await self.session.rollback()
            raise

    async def create_card(self, deck_id: int, front: str, back: str) -> Card:
        async def insert(public_id: str) -> Card:
            card = Card(deck_id=deck_id, public_id=public_id, front=front, back=back)
            await self._insert_cards(deck_id, [card])
            await self.session.refresh(card)
            return card

        return await create_with_unique_id(insert)

    async def create_cards(
        self, deck_id: int, cards: Sequence[GeneratedCard]
    ) -> list[Card]:
        """Insert all cards in one transaction; returned in input order."""
        if not cards:
            return []

        async def insert(public_ids: list[str]) -> list[Card]:
            await self._insert_cards(
                deck_id,
                [
                    Card(
                        deck_id=deck_id,
                        public_id=public_id,
                        front=card.front,
                        back=card.back,
                    )
                    for public_id, card in zip(public_ids, cards)
                ],
            )

            result = await self.session.execute(
                select(Card)
                .where(Card.public_id.in_(public_ids))
                .order_by(Card.id.asc())
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

        return await create_batch_with_unique_ids(len(cards), insert)

    async def update_card(
        self,
        card: Card,
        *,
        front: Optional[str] = None,
        back: Optional[str] = None,
    ) -> Card:
        if front is not None:
            card.front = front
        if back is not None:
            card.back = back
        await self._touch_deck(card.deck_id)
        await self.session.commit()
        await self.session.refresh(card)
        return card

    async def delete_card(self, card: Card) -> None:
        deck_id = card.deck_id
        await self.session.delete(card)
        await self._touch_deck(deck_id)
        await self.session.commit()
