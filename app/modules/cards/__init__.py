"""Card identifier helpers."""

from .public_id import (
    ALPHABET,
    MAX_ATTEMPTS,
    PUBLIC_ID_LENGTH,
    PublicIdExhaustedError,
    create_batch_with_unique_ids,
    create_with_unique_id,
    generate_id,
    generate_unique_batch,
    is_unique_violation,
    rejection_threshold,
)

__all__ = [
    "ALPHABET",
    "MAX_ATTEMPTS",
    "PUBLIC_ID_LENGTH",
    "PublicIdExhaustedError",
    "create_batch_with_unique_ids",
    "create_with_unique_id",
    "generate_id",
    "generate_unique_batch",
    "is_unique_violation",
    "rejection_threshold",
]
