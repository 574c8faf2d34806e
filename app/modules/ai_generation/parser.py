"""Turn raw model text into validated generated cards."""

from __future__ import annotations

import json
import re
from typing import Any

from app.modules.ai_generation.errors import MalformedResponseError
from app.modules.ai_generation.models import GeneratedCard

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")


def strip_code_fence(text: str) -> str:
    """Drop one leading ```lang marker and one trailing ``` marker."""
    cleaned = text.strip()
    cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def is_valid_card(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    front = item.get("front")
    back = item.get("back")
    return (
        isinstance(front, str)
        and isinstance(back, str)
        and bool(front.strip())
        and bool(back.strip())
    )


def parse_response(text: str) -> list[GeneratedCard]:
    """Parse the model output; invalid entries are dropped, not fatal.

    Raises ``MalformedResponseError`` when the text is not a JSON array.
    """
    cleaned = strip_code_fence(text)
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        # Pathologically nested replies exhaust the decoder's recursion limit
        raise MalformedResponseError() from e

    if not isinstance(parsed, list):
        raise MalformedResponseError()

    return [
        GeneratedCard(front=item["front"].strip(), back=item["back"].strip())
        for item in parsed
        if is_valid_card(item)
    ]
