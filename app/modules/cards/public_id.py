"""Public card identifiers.

Cards are addressed externally by a short random string instead of their
sequential primary key. Identifiers are drawn from a 62-symbol alphabet with
rejection sampling over CSPRNG bytes so every symbol is equally likely.

Uniqueness is enforced by the ``cards.public_id`` unique index; the helpers
below only retry the insert when that index reports a collision.
"""

from __future__ import annotations

import secrets
from typing import Awaitable, Callable, TypeVar

from app.core.logging import get_logger

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
PUBLIC_ID_LENGTH = 10
MAX_ATTEMPTS = 5

UNIQUE_VIOLATION_SQLSTATE = "23505"
_UNIQUE_VIOLATION_MARKERS = ("duplicate key value", "unique constraint failed")

T = TypeVar("T")

logger = get_logger(__name__)


class PublicIdExhaustedError(RuntimeError):
    """Every allocation attempt collided with an existing identifier."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"Failed to allocate a unique card public id after {attempts} attempts"
        )


def rejection_threshold(alphabet_size: int) -> int:
    """Largest multiple of ``alphabet_size`` that fits in a single byte."""
    if not 1 <= alphabet_size <= 256:
        raise ValueError(f"alphabet size must be within 1..256, got {alphabet_size}")
    return (256 // alphabet_size) * alphabet_size


def generate_id(length: int = PUBLIC_ID_LENGTH, alphabet: str = ALPHABET) -> str:
    """Return ``length`` symbols chosen uniformly from ``alphabet``."""
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")

    size = len(alphabet)
    threshold = rejection_threshold(size)
    out: list[str] = []

    while len(out) < length:
        for byte in secrets.token_bytes(length):
            if byte >= threshold:
                continue
            out.append(alphabet[byte % size])
            if len(out) == length:
                break

    return "".join(out)


def generate_unique_batch(count: int, length: int = PUBLIC_ID_LENGTH) -> list[str]:
    """Return ``count`` identifiers that are pairwise distinct."""
    used: set[str] = set()
    ids: list[str] = []
    for _ in range(count):
        candidate = generate_id(length)
        while candidate in used:
            candidate = generate_id(length)
        used.add(candidate)
        ids.append(candidate)
    return ids


def is_unique_violation(exc: BaseException) -> bool:
    """Tell a unique-index collision apart from any other insert failure.

    Checks the SQLSTATE exposed by the asyncpg adapter first, then falls back
    to the messages emitted by PostgreSQL and SQLite.
    """
    for candidate in (exc, getattr(exc, "orig", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(
            candidate, "pgcode", None
        )
        if code == UNIQUE_VIOLATION_SQLSTATE:
            return True

    message = str(exc).lower()
    return any(marker in message for marker in _UNIQUE_VIOLATION_MARKERS)


async def create_with_unique_id(
    insert: Callable[[str], Awaitable[T]],
    *,
    length: int = PUBLIC_ID_LENGTH,
    max_attempts: int = MAX_ATTEMPTS,
) -> T:
    """Run ``insert`` with fresh identifiers until one is accepted.

    Only uniqueness violations are retried; other errors propagate at once.
    Raises ``PublicIdExhaustedError`` once ``max_attempts`` inserts collided.
    """
    last_error: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        public_id = generate_id(length)
        try:
            return await insert(public_id)
        except Exception as e:
            if not is_unique_violation(e):
                raise
            last_error = e
            logger.warning(
                "Card public id collision (attempt %d/%d)", attempt, max_attempts
            )

    logger.error("Card public id allocation exhausted after %d attempts", max_attempts)
    raise PublicIdExhaustedError(max_attempts) from last_error


async def create_batch_with_unique_ids(
    count: int,
    insert: Callable[[list[str]], Awaitable[T]],
    *,
    length: int = PUBLIC_ID_LENGTH,
    max_attempts: int = MAX_ATTEMPTS,
) -> T:
    """Batch flavour of :func:`create_with_unique_id`.

    Each attempt regenerates the whole batch, so a single collision never
    leaves part of the batch persisted under stale identifiers.
    """
    last_error: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        public_ids = generate_unique_batch(count, length)
        try:
            return await insert(public_ids)
        except Exception as e:
            if not is_unique_violation(e):
                raise
            last_error = e
            logger.warning(
                "Card public id collision in batch of %d (attempt %d/%d)",
                count,
                attempt,
                max_attempts,
            )

    logger.error(
        "Card public id allocation exhausted for batch of %d after %d attempts",
        count,
        max_attempts,
    )
    raise PublicIdExhaustedError(max_attempts) from last_error
