# interlinear/cli.py
"""
Command line entry point.

    interlinear verse jo 3 16
    interlinear define H430 --translate
    interlinear translate-pending --batch-size 50 --chunk-size 10
    interlinear export-translations out.json --seed previous.json

Every command prints JSON on stdout; logs go to stderr.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from interlinear.shared.config import settings
from interlinear.shared.container import Container, close_resources
from interlinear.shared.logging_config import configure_logging
from interlinear.shared.telemetry import setup_telemetry

logger = structlog.get_logger()


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _seed(container: Container, seed_path: str) -> int:
    with open(seed_path, "r", encoding="utf-8") as f:
        document = json.load(f)
    return container.translation_memo().seed(document)


async def run_command(args: argparse.Namespace, container: Container) -> int:
    service = container.interlinear_service()

    try:
        if getattr(args, "seed", None):
            _seed(container, args.seed)

        if args.command == "verse":
            if args.words:
                verse = await service.get_interlinear_verse(args.book, args.chapter, args.verse)
                _emit(verse.model_dump() if verse else None)
                return 0 if verse else 1
            text = await service.get_verse_with_tags(args.book, args.chapter, args.verse)
            _emit({"book": args.book, "chapter": args.chapter, "verse": args.verse, "text": text})
            return 0 if text is not None else 1

        if args.command == "define":
            definition = await service.get_definition(args.strongs_id)
            if definition is not None and args.translate:
                definition = await service.translate_definition(definition)
            _emit(definition.model_dump() if definition else None)
            return 0 if definition else 1

        if args.command == "translate-pending":
            use_case = container.translate_pending()
            added = await use_case.translate_pending(
                batch_size=args.batch_size,
                chunk_size=args.chunk_size,
                delay_sec=args.delay,
            )
            stats = await use_case.stats()
            _emit({"translated": added, "stats": stats.model_dump()})
            if args.output:
                Path(args.output).write_text(
                    json.dumps(container.translation_memo().export(), ensure_ascii=False, indent=2),
                    encoding="utf-8",
                )
            return 0

        if args.command == "export-translations":
            exported = container.translation_memo().export()
            Path(args.output).write_text(json.dumps(exported, ensure_ascii=False, indent=2), encoding="utf-8")
            _emit({"exported": len(exported), "output": args.output})
            return 0

        return 2
    finally:
        await close_resources(container)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="interlinear", description="Interlinear lexicon & translation engine")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    verse_parser = subparsers.add_parser("verse", help="Print the Strong's-tagged text of a verse")
    verse_parser.add_argument("book", help="Reading-corpus book code (e.g. 'jo', 'gn')")
    verse_parser.add_argument("chapter", type=int)
    verse_parser.add_argument("verse", type=int)
    verse_parser.add_argument("--words", action="store_true", help="Tokenize and resolve every identifier")

    define_parser = subparsers.add_parser("define", help="Resolve a Strong's number")
    define_parser.add_argument("strongs_id")
    define_parser.add_argument("--translate", action="store_true", help="Translate fields missing in Portuguese")
    define_parser.add_argument("--seed", help="Translation export to preload")

    pending_parser = subparsers.add_parser("translate-pending", help="Translate lexicon entries with no translation yet")
    pending_parser.add_argument("--batch-size", type=int, default=settings.TRANSLATION_BATCH_SIZE)
    pending_parser.add_argument("--chunk-size", type=int, default=settings.TRANSLATION_CHUNK_SIZE)
    pending_parser.add_argument("--delay", type=float, default=settings.TRANSLATION_CHUNK_DELAY_SEC)
    pending_parser.add_argument("--seed", help="Translation export to preload (skips those ids)")
    pending_parser.add_argument("--output", help="Write the resulting translation export here")

    export_parser = subparsers.add_parser("export-translations", help="Write cached translations as JSON")
    export_parser.add_argument("output")
    export_parser.add_argument("--seed", help="Translation export to merge in first")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to help
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(stream=sys.stderr)
    setup_telemetry(settings.OTEL_SERVICE_NAME)
    return asyncio.run(run_command(args, Container()))


if __name__ == "__main__":
    sys.exit(main())
