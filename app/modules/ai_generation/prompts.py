"""Prompt construction for deck-aware card generation."""

from __future__ import annotations

from app.modules.ai_generation.models import GenerationRequest, language_label


FORMAT_INSTRUCTIONS = (
    "Return your response as a valid JSON array with this exact structure:\n"
    "[\n"
    "  {\n"
    '    "front": "Question or term here",\n'
    '    "back": "Answer or definition here"\n'
    "  }\n"
    "]\n\n"
    "CRITICAL: Return ONLY the JSON array, no additional text, explanations, "
    "or markdown formatting. Do not wrap it in code fences."
)


def _existing_cards_section(request: GenerationRequest) -> str:
    lines = [
        f"The deck already has {len(request.existing_cards)} cards. Here they are:"
    ]
    for index, card in enumerate(request.existing_cards, start=1):
        lines.append(f'{index}. Front: "{card.front}" | Back: "{card.back}"')
    lines.append("")
    lines.append(
        "IMPORTANT: Generate NEW cards that are DIFFERENT from the existing ones. "
        "Avoid duplicates and maintain consistency with the existing cards' "
        "style and difficulty level."
    )
    return "\n".join(lines)


def _rules(count: int) -> str:
    return (
        "Instructions:\n"
        '1. Each card should have a "front" (question/term) and "back" (answer/definition)\n'
        "2. Cards should be educational and appropriate for studying\n"
        "3. Vary the difficulty and coverage of topics\n"
        "4. Maintain consistency with the deck's theme\n"
        "5. Ensure cards are clear, concise, and useful for learning\n"
        f"6. Generate exactly {count} cards"
    )


def build_prompt(request: GenerationRequest) -> str:
    """Build the full completion prompt for ``request``."""
    sections = [
        "You are a flashcard generation assistant. "
        f"Generate {request.count} high-quality flashcards for a deck titled "
        f'"{request.deck_title}".'
    ]

    description = request.deck_description.strip()
    if description:
        sections.append(f"Deck description: {description}")

    sections.append(
        f"Language: Generate all cards in {language_label(request.language)}."
    )

    if request.existing_cards:
        sections.append(_existing_cards_section(request))

    sections.append(_rules(request.count))
    sections.append(FORMAT_INSTRUCTIONS)
    return "\n\n".join(sections)
