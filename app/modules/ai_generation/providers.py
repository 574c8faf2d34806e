"""Card generation backends built on pydantic-ai.

Every backend exposes the same small capability: given a
``GenerationRequest``, return a ``GenerationResult``. Prompt building and
response parsing live in their own modules so a new backend only has to
supply a model. Model/provider imports are kept lazy to avoid import-time
errors when credentials or optional SDKs are missing.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic_ai import Agent

from app.core.config import settings
from app.core.logging import get_logger
from app.modules.ai_generation.errors import (
    CardGenerationError,
    MalformedResponseError,
    NoValidCardsError,
    ProviderConfigurationError,
    ProviderNotImplementedError,
    classify_provider_error,
)
from app.modules.ai_generation.models import GenerationRequest, GenerationResult
from app.modules.ai_generation.parser import parse_response
from app.modules.ai_generation.prompts import build_prompt

logger = get_logger(__name__)

UNIMPLEMENTED_PROVIDERS = {
    "openai": "OpenAI",
    "claude": "Claude",
    "custom": "Custom",
}
SUPPORTED_PROVIDERS = ("gemini", "openrouter", *UNIMPLEMENTED_PROVIDERS)


@runtime_checkable
class CardGenerationService(Protocol):
    provider_name: str

    async def generate_cards(self, request: GenerationRequest) -> GenerationResult:
        ...


def _failure(error: CardGenerationError) -> GenerationResult:
    return GenerationResult.failure(error.kind, error.message)


class PydanticAICardGenerator:
    """Generates cards with any pydantic-ai model returning plain text."""

    def __init__(self, model: Any, *, provider_name: str) -> None:
        self.model = model
        self.provider_name = provider_name

    async def complete(self, prompt: str) -> str:
        agent: Agent[None, str] = Agent[None, str](model=self.model, output_type=str)
        res = await agent.run(prompt)
        return res.output

    async def generate_cards(self, request: GenerationRequest) -> GenerationResult:
        prompt = build_prompt(request)
        logger.info(
            "Requesting %d cards from %s for deck %r",
            request.count,
            self.provider_name,
            request.deck_title,
        )

        try:
            text = await self.complete(prompt)
        except Exception as e:
            error = classify_provider_error(e, provider=self.provider_name)
            logger.warning(
                "%s card generation failed (%s): %s",
                self.provider_name,
                error.kind.value,
                e,
            )
            return _failure(error)

        try:
            cards = parse_response(text)
        except MalformedResponseError as e:
            logger.warning(
                "Failed to parse %s response: %r", self.provider_name, text[:500]
            )
            return _failure(e)

        if not cards:
            return _failure(NoValidCardsError())

        # The model may over-produce; never return more than requested
        limited = cards[: request.count]
        logger.info(
            "%s produced %d valid cards, returning %d",
            self.provider_name,
            len(cards),
            len(limited),
        )
        return GenerationResult.ok(limited)


class UnavailableCardGenerator:
    """Placeholder for providers without a backend yet."""

    def __init__(self, provider_name: str) -> None:
        self.provider_name = provider_name

    async def generate_cards(self, request: GenerationRequest) -> GenerationResult:
        return _failure(ProviderNotImplementedError(self.provider_name))


def _build_google_model(model_name: str):
    """Build the Google Gemini model provider (lazy import)."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    if not settings.gemini_api_key:
        raise ProviderConfigurationError(
            "GEMINI_API_KEY environment variable is not set. "
            "Please configure your Gemini API key."
        )
    provider = GoogleProvider(api_key=settings.gemini_api_key)
    return GoogleModel(model_name, provider=provider)


def _build_openrouter_model():
    """Build OpenRouter model via OpenAI-compatible provider (lazy import)."""
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    if not settings.openrouter_api_key:
        raise ProviderConfigurationError(
            "OpenRouter API key not configured. Set OPENROUTER_API_KEY in your environment."
        )

    provider = OpenAIProvider(
        api_key=settings.openrouter_api_key,
        base_url="https://openrouter.ai/api/v1",
    )
    return OpenAIChatModel(settings.openrouter_model, provider=provider)


def get_llm_service(provider: str | None = None) -> CardGenerationService:
    """Return the card generation backend selected by ``MODEL_PROVIDER``."""
    name = (provider or settings.model_provider or "gemini").strip().lower()

    if name in ("gemini", "google"):
        return PydanticAICardGenerator(
            _build_google_model(settings.gemini_model), provider_name="Gemini"
        )
    if name == "openrouter":
        return PydanticAICardGenerator(
            _build_openrouter_model(), provider_name="OpenRouter"
        )
    if name in UNIMPLEMENTED_PROVIDERS:
        return UnavailableCardGenerator(UNIMPLEMENTED_PROVIDERS[name])

    raise ProviderConfigurationError(
        f"Unknown LLM provider: {name}. "
        f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}."
    )
