from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from app.modules.ai_generation.errors import ProviderConfigurationError
from app.modules.ai_generation.models import (
    MAX_GENERATED_CARDS,
    SUPPORTED_LANGUAGES,
    ExistingCard,
    GenerationRequest,
)
from app.modules.ai_generation.providers import get_llm_service
from app.modules.cards.public_id import PUBLIC_ID_LENGTH, generate_unique_batch


def _load_existing(path: str | None) -> list[ExistingCard]:
    if not path:
        return []
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise SystemExit("--existing-file must contain a JSON array of {front, back}")
    return [ExistingCard.model_validate(item) for item in data]


def _count(value: str) -> int:
    n = int(value)
    if not 1 <= n <= MAX_GENERATED_CARDS:
        raise argparse.ArgumentTypeError(
            f"count must be between 1 and {MAX_GENERATED_CARDS}"
        )
    return n


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cards-gen", description="Deck card generator CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate cards for a deck (not persisted)")
    g.add_argument("--title", "-t", required=True, help="Deck title")
    g.add_argument("--description", "-d", default="", help="Deck description")
    g.add_argument("--count", "-n", type=_count, default=10, help="Cards to generate")
    g.add_argument(
        "--language",
        "-l",
        default="en",
        choices=sorted(SUPPORTED_LANGUAGES),
        help="Target language code",
    )
    g.add_argument(
        "--existing-file",
        help="JSON file with existing cards [{front, back}] to avoid duplicating",
    )
    g.add_argument("--provider", help="Override MODEL_PROVIDER")

    p = sub.add_parser("public-id", help="Print fresh card public ids")
    p.add_argument("--length", type=int, default=PUBLIC_ID_LENGTH)
    p.add_argument("--count", type=int, default=1)

    args = parser.parse_args(argv)
    if args.cmd == "generate":
        request = GenerationRequest(
            deck_title=args.title,
            deck_description=args.description,
            existing_cards=_load_existing(args.existing_file),
            count=args.count,
            language=args.language,
        )
        try:
            svc = get_llm_service(args.provider)
        except ProviderConfigurationError as e:
            raise SystemExit(str(e))
        result = asyncio.run(svc.generate_cards(request))
        print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return 0 if result.success else 1
    if args.cmd == "public-id":
        for public_id in generate_unique_batch(max(1, args.count), args.length):
            print(public_id)
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
