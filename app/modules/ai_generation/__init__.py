"""AI card generation exports."""

from .errors import CardGenerationError, ProviderConfigurationError
from .models import (
    ExistingCard,
    GeneratedCard,
    GenerationErrorKind,
    GenerationRequest,
    GenerationResult,
)
from .parser import parse_response
from .prompts import build_prompt
from .providers import (
    CardGenerationService,
    PydanticAICardGenerator,
    UnavailableCardGenerator,
    get_llm_service,
)

__all__ = [
    "CardGenerationError",
    "ProviderConfigurationError",
    "ExistingCard",
    "GeneratedCard",
    "GenerationErrorKind",
    "GenerationRequest",
    "GenerationResult",
    "parse_response",
    "build_prompt",
    "CardGenerationService",
    "PydanticAICardGenerator",
    "UnavailableCardGenerator",
    "get_llm_service",
]
