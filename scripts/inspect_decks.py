"""Quick DB inspector for decks and cards.

Prints deck/card totals, the most recently updated decks with their card
counts, and a few sample cards with their public ids.

Usage:
  uv run scripts/inspect_decks.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path so `app` package imports resolve
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy import select, func

from app.core.db.base import get_session
from app.core.db.schemas.decks import Card, Deck
from app.core.db_services import DeckService


async def main() -> int:
    async for session in get_session():  # get_session is an async generator
        total_decks = (await session.execute(select(func.count(Deck.id)))).scalar() or 0
        total_cards = (await session.execute(select(func.count(Card.id)))).scalar() or 0

        print("Decks DB summary:")
        print(f"- Decks: {total_decks}")
        print(f"- Cards: {total_cards}")

        recent = (
            (
                await session.execute(
                    select(Deck).order_by(Deck.updated_at.desc()).limit(5)
                )
            )
            .scalars()
            .all()
        )
        if not recent:
            print("- No decks found.")
            return 0

        counts = await DeckService(session).card_counts(d.id for d in recent)
        print("\nRecently updated decks:")
        for d in recent:
            print(
                f"  • ID {d.id} | user={d.user_id} | title={d.title!r} | "
                f"cards={counts.get(d.id, 0)} | updated={d.updated_at:%Y-%m-%d %H:%M}"
            )

        print("\nSample cards (first recent deck):")
        sample = (
            (
                await session.execute(
                    select(Card)
                    .where(Card.deck_id == recent[0].id)
                    .order_by(Card.id)
                    .limit(3)
                )
            )
            .scalars()
            .all()
        )
        for c in sample:
            print(f"  - [{c.public_id}] F: {c.front[:100]!r}")
            print(f"    B: {c.back[:120]!r}")

        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
