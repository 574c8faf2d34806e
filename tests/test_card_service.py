"""Tests for the deck and card database services."""

import pytest
from sqlalchemy import func, select

from app.core.db.schemas import Card, Deck
from app.core.db.schemas.decks import DECK_TITLE_MAX_LENGTH
from app.core.db_services import CardService, DeckService
from app.modules.ai_generation.models import GeneratedCard
from app.modules.cards import public_id
from app.modules.cards.public_id import PublicIdExhaustedError
from app.modules.decks import ENGLISH_SPANISH, FRENCH_HISTORY, SAMPLE_DECKS


class TestCardService:
    @pytest.mark.asyncio
    async def test_create_card_assigns_public_id(self, session, user, make_deck) -> None:
        deck = await make_deck(user)
        service = CardService(session)

        card = await service.create_card(deck.id, "Dog", "Perro")

        assert len(card.public_id) == 10
        assert card.public_id.isalnum()
        assert card.deck_id == deck.id
        assert (card.front, card.back) == ("Dog", "Perro")

    @pytest.mark.asyncio
    async def test_collision_retries_with_new_id(
        self, session, user, make_deck, monkeypatch
    ) -> None:
        deck = await make_deck(user)
        service = CardService(session)
        existing = await service.create_card(deck.id, "Cat", "Gato")
        taken = existing.public_id

        draws = iter([taken, taken, "Fresh00001"])
        monkeypatch.setattr(public_id, "generate_id", lambda length=10: next(draws))

        card = await service.create_card(deck.id, "Dog", "Perro")

        assert card.public_id == "Fresh00001"
        total = await session.scalar(select(func.count(Card.id)))
        assert total == 2

    @pytest.mark.asyncio
    async def test_persistent_collision_exhausts(
        self, session, user, make_deck, monkeypatch
    ) -> None:
        deck = await make_deck(user)
        service = CardService(session)
        existing = await service.create_card(deck.id, "Cat", "Gato")
        taken = existing.public_id
        draws = 0

        def always_taken(length: int = 10) -> str:
            nonlocal draws
            draws += 1
            return taken

        monkeypatch.setattr(public_id, "generate_id", always_taken)

        with pytest.raises(PublicIdExhaustedError):
            await service.create_card(deck.id, "Dog", "Perro")

        assert draws == 5
        total = await session.scalar(select(func.count(Card.id)))
        assert total == 1

    @pytest.mark.asyncio
    async def test_create_cards_keeps_input_order(self, session, user, make_deck) -> None:
        deck = await make_deck(user)
        service = CardService(session)
        generated = [GeneratedCard(front=f"Q{i}", back=f"A{i}") for i in range(5)]

        cards = await service.create_cards(deck.id, generated)

        assert [c.front for c in cards] == ["Q0", "Q1", "Q2", "Q3", "Q4"]
        assert len({c.public_id for c in cards}) == 5

    @pytest.mark.asyncio
    async def test_create_cards_empty_input(self, session, user, make_deck) -> None:
        deck = await make_deck(user)
        assert await CardService(session).create_cards(deck.id, []) == []

    @pytest.mark.asyncio
    async def test_batch_collision_regenerates_all_ids(
        self, session, user, make_deck, monkeypatch
    ) -> None:
        deck = await make_deck(user)
        service = CardService(session)
        existing = await service.create_card(deck.id, "Cat", "Gato")

        draws = iter([existing.public_id, "Batch00001", "Batch00002", "Batch00003"])
        monkeypatch.setattr(public_id, "generate_id", lambda length=10: next(draws))

        cards = await service.create_cards(
            deck.id,
            [GeneratedCard(front="Dog", back="Perro"), GeneratedCard(front="Sun", back="Sol")],
        )

        assert [c.public_id for c in cards] == ["Batch00002", "Batch00003"]
        listed = await service.list_cards(deck.id)
        assert [c.front for c in listed] == ["Cat", "Dog", "Sun"]

    @pytest.mark.asyncio
    async def test_get_owned_card_scoped_to_owner(
        self, session, user, other_user, make_deck
    ) -> None:
        deck = await make_deck(user, cards=[("Dog", "Perro")])
        service = CardService(session)
        (card,) = await service.list_cards(deck.id)

        assert (await service.get_owned_card(card.public_id, user.id)).id == card.id
        assert await service.get_owned_card(card.public_id, other_user.id) is None
        assert await service.get_owned_card("missing000", user.id) is None

    @pytest.mark.asyncio
    async def test_update_and_delete_card(self, session, user, make_deck) -> None:
        deck = await make_deck(user, cards=[("Dog", "Perro")])
        service = CardService(session)
        (card,) = await service.list_cards(deck.id)

        updated = await service.update_card(card, back="El perro")
        assert (updated.front, updated.back) == ("Dog", "El perro")

        await service.delete_card(updated)
        assert await service.list_cards(deck.id) == []


class TestDeckService:
    @pytest.mark.asyncio
    async def test_list_decks_only_returns_owned(
        self, session, user, other_user, make_deck
    ) -> None:
        mine = await make_deck(user, title="Mine")
        await make_deck(other_user, title="Theirs")

        decks = await DeckService(session).list_decks(user.id)

        assert [d.id for d in decks] == [mine.id]

    @pytest.mark.asyncio
    async def test_search_matches_title_and_description(
        self, session, user, make_deck
    ) -> None:
        await make_deck(user, title="Spanish verbs")
        await make_deck(user, title="Capitals", description="European geography")
        await make_deck(user, title="Chemistry")
        service = DeckService(session)

        assert [d.title for d in await service.list_decks(user.id, search="spanish")] == [
            "Spanish verbs"
        ]
        assert [d.title for d in await service.list_decks(user.id, search="EUROPE")] == [
            "Capitals"
        ]

    @pytest.mark.asyncio
    async def test_card_counts(self, session, user, make_deck) -> None:
        full = await make_deck(user, cards=[("a", "b"), ("c", "d")])
        empty = await make_deck(user)

        counts = await DeckService(session).card_counts([full.id, empty.id])

        assert counts == {full.id: 2}

    @pytest.mark.asyncio
    async def test_get_deck_with_cards(self, session, user, other_user, make_deck) -> None:
        deck = await make_deck(user, cards=[("one", "1"), ("two", "2")])
        service = DeckService(session)

        loaded = await service.get_deck_with_cards(deck.id, user.id)
        assert [c.front for c in loaded.cards] == ["one", "two"]
        assert await service.get_deck_with_cards(deck.id, other_user.id) is None

    @pytest.mark.asyncio
    async def test_update_and_delete_deck(self, session, user, make_deck) -> None:
        deck = await make_deck(user, cards=[("one", "1")])
        service = DeckService(session)
        loaded = await service.get_deck(deck.id, user.id)

        updated = await service.update_deck(loaded, title="Renamed")
        assert updated.title == "Renamed"

        await service.delete_deck(updated)
        assert await service.get_deck(deck.id, user.id) is None
        remaining = await session.scalar(select(func.count(Card.id)))
        assert remaining == 0


class TestSampleData:
    @pytest.mark.asyncio
    async def test_replaces_user_decks_with_demo_data(
        self, session, user, other_user, make_deck
    ) -> None:
        await make_deck(user, title="Old deck", cards=[("old", "card")])
        theirs = await make_deck(other_user, title="Untouched", cards=[("keep", "me")])
        service = DeckService(session)

        decks, cards_created = await service.load_sample_data(user.id)

        assert len(decks) == len(SAMPLE_DECKS) == 2
        assert cards_created == sum(len(d.cards) for d in SAMPLE_DECKS) == 40

        titles = {d.title for d in await service.list_decks(user.id)}
        assert titles == {ENGLISH_SPANISH.title, FRENCH_HISTORY.title}
        assert [d.id for d in await service.list_decks(other_user.id)] == [theirs.id]

        public_ids = (await session.execute(select(Card.public_id))).scalars().all()
        assert len(public_ids) == 41
        assert len(set(public_ids)) == 41

    @pytest.mark.asyncio
    async def test_loading_twice_does_not_duplicate(self, session, user) -> None:
        service = DeckService(session)

        await service.load_sample_data(user.id)
        await service.load_sample_data(user.id)

        assert len(await service.list_decks(user.id)) == 2
        total = await session.scalar(select(func.count(Card.id)))
        assert total == 40

    @pytest.mark.asyncio
    async def test_demo_cards_keep_dataset_order(self, session, user) -> None:
        decks, _ = await DeckService(session).load_sample_data(
            user.id, datasets=[ENGLISH_SPANISH]
        )
        (deck,) = decks

        cards = await CardService(session).list_cards(deck.id)

        assert [c.front for c in cards][:3] == ["Hello", "Goodbye", "Please"]


class TestDeckColumns:
    def test_title_column_matches_title_limit(self) -> None:
        assert Deck.__table__.c.title.type.length == DECK_TITLE_MAX_LENGTH
