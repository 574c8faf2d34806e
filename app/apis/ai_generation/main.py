from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.apis.deps import DBSession, OwnedDeck
from app.core.config import settings
from app.core.db_services import CardService
from app.core.logging import get_logger
from app.modules.ai_generation import (
    ExistingCard,
    GenerationRequest,
    ProviderConfigurationError,
    get_llm_service,
)
from .schemas import GenerateCardsRequest, GenerateCardsResponse


router = APIRouter()
logger = get_logger(__name__)


@router.post(
    f"/{settings.app.version}/decks/{{deck_id}}/cards/generate",
    response_model=GenerateCardsResponse,
    status_code=status.HTTP_200_OK,
    tags=["ai-generation"],
)
async def generate_cards(
    deck: OwnedDeck,
    req: GenerateCardsRequest,
    session: DBSession,
) -> GenerateCardsResponse:
    """Generate cards for a deck preview; nothing is persisted here.

    Accepted cards are saved afterwards through the bulk create endpoint.
    """
    existing = await CardService(session).list_cards(deck.id)

    try:
        llm = get_llm_service()
    except ProviderConfigurationError as e:
        logger.error("Card generation unavailable: %s", e, extra={"deck_id": deck.id})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    result = await llm.generate_cards(
        GenerationRequest(
            deck_title=deck.title,
            deck_description=deck.description or "",
            existing_cards=[ExistingCard(front=c.front, back=c.back) for c in existing],
            count=req.count,
            language=req.language,
        )
    )

    if not result.success:
        logger.warning(
            "Card generation failed (%s)",
            result.error_kind.value if result.error_kind else "unknown",
            extra={"deck_id": deck.id},
        )
        return GenerateCardsResponse(
            success=False,
            error=result.error or "Failed to generate cards",
            error_kind=result.error_kind,
        )

    return GenerateCardsResponse(
        success=True,
        cards=result.cards,
        message=f"Generated {len(result.cards)} cards",
    )
