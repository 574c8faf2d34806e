"""Error taxonomy for card generation and provider failure classification."""

from __future__ import annotations

from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior

from app.modules.ai_generation.models import GenerationErrorKind


class CardGenerationError(Exception):
    """Base class; ``kind`` is surfaced to callers next to the message."""

    kind = GenerationErrorKind.GENERATION_ERROR
    default_message = "Failed to generate cards. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentialsError(CardGenerationError):
    kind = GenerationErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid API key. Please check your LLM provider configuration."


class QuotaExceededError(CardGenerationError):
    kind = GenerationErrorKind.QUOTA_EXCEEDED
    default_message = "API quota exceeded. Please try again later."


class MalformedResponseError(CardGenerationError):
    kind = GenerationErrorKind.MALFORMED_RESPONSE
    default_message = "Failed to parse AI response. The response format was invalid."


class NoValidCardsError(CardGenerationError):
    kind = GenerationErrorKind.NO_VALID_CARDS
    default_message = "No valid cards were generated. Please try again."


class ProviderNotImplementedError(CardGenerationError):
    kind = GenerationErrorKind.NOT_IMPLEMENTED

    def __init__(self, provider: str) -> None:
        super().__init__(
            f"{provider} provider is not yet implemented. "
            "Set MODEL_PROVIDER=gemini in your environment."
        )


class ProviderConfigurationError(RuntimeError):
    """The configured provider is unknown or lacks credentials."""


def classify_provider_error(
    exc: BaseException, *, provider: str = "LLM"
) -> CardGenerationError:
    """Map a failure from the model call onto the generation error taxonomy."""
    if isinstance(exc, CardGenerationError):
        return exc

    if isinstance(exc, ModelHTTPError):
        if exc.status_code in (401, 403):
            return InvalidCredentialsError(
                f"Invalid API key. Please check your {provider} API configuration."
            )
        if exc.status_code == 429:
            return QuotaExceededError()

    if isinstance(exc, UnexpectedModelBehavior):
        return MalformedResponseError()

    # Some SDK errors only carry the cause in their message
    message = str(exc)
    lowered = message.lower()
    if "api key" in lowered or "api_key" in lowered:
        return InvalidCredentialsError(
            f"Invalid API key. Please check your {provider} API configuration."
        )
    if "quota" in lowered or "resource_exhausted" in lowered:
        return QuotaExceededError()
    return CardGenerationError(f"Generation error: {message}")
