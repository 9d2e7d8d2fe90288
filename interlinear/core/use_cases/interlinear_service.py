# interlinear/core/use_cases/interlinear_service.py
import asyncio
from typing import Dict, List, Optional

import structlog

from interlinear.core.domain.books import to_tagged_code
from interlinear.core.domain.models import (
    Definition,
    DefinitionOrigin,
    InterlinearVerse,
    InterlinearWord,
    TranslatedFields,
)
from interlinear.core.domain.strongs import normalize_strongs_id
from interlinear.core.domain.verse_parser import parse_tagged_text
from interlinear.core.use_cases.resolve_definition import DefinitionResolver
from interlinear.services.tagged_book_store import TaggedBookStore
from interlinear.services.translation_memo import TranslationMemoizer
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

_TRANSLATABLE_FIELDS = ("word", "definition", "usage")


class InterlinearService:
    """
    Use Case: The interlinear query API.

    Every lookup absorbs resource failures: a missing book, verse or
    identifier yields None (or an empty result), never an exception.
    """

    def __init__(
        self,
        resolver: DefinitionResolver,
        books: TaggedBookStore,
        memo: TranslationMemoizer,
    ):
        self.resolver = resolver
        self.books = books
        self.memo = memo

    # --- Definitions ---

    async def get_definition(self, strongs_id: str) -> Optional[Definition]:
        return await self.resolver.resolve_loaded(strongs_id)

    # --- Tagged Text ---

    async def get_verse_with_tags(self, reading_code: str, chapter: int, verse: int) -> Optional[str]:
        tagged_code = to_tagged_code(reading_code)
        if tagged_code is None:
            logger.info("book_unmapped", book=reading_code)
            return None
        return await self.books.get_verse_text(tagged_code, chapter, verse)

    async def get_chapter_with_tags(self, reading_code: str, chapter: int) -> Dict[int, str]:
        tagged_code = to_tagged_code(reading_code)
        if tagged_code is None:
            logger.info("book_unmapped", book=reading_code)
            return {}
        return await self.books.get_chapter_verses(tagged_code, chapter)

    async def get_interlinear_verse(self, reading_code: str, chapter: int, verse: int) -> Optional[InterlinearVerse]:
        """Tokenizes a verse and attaches the resolved definition of every identifier."""
        tagged_code = to_tagged_code(reading_code)
        if tagged_code is None:
            logger.info("book_unmapped", book=reading_code)
            return None

        with tracer.start_as_current_span("interlinear.verse") as span:
            span.set_attribute("verse.ref", f"{tagged_code} {chapter}:{verse}")
            text = await self.books.get_verse_text(tagged_code, chapter, verse)
            if text is None:
                return None

            tokens = parse_tagged_text(text)
            await self.resolver.ensure_loaded()
            resolved: Dict[str, Optional[Definition]] = {}
            for token in tokens:
                for strongs_id in token.strongs_ids:
                    if strongs_id not in resolved:
                        resolved[strongs_id] = self.resolver.resolve(strongs_id)

            words = [
                InterlinearWord(
                    token=token,
                    definitions=[resolved[i] for i in token.strongs_ids if resolved[i] is not None],
                )
                for token in tokens
            ]
            return InterlinearVerse(
                reading_code=reading_code.strip().lower(),
                tagged_code=tagged_code,
                chapter=chapter,
                verse=verse,
                text=text,
                words=words,
            )

    # --- Translation ---

    async def translate_definition_fields(
        self, strongs_id: str, word: str = "", definition: str = "", usage: str = ""
    ) -> TranslatedFields:
        key = normalize_strongs_id(strongs_id, self.resolver.pad_width).short
        return await self.memo.translate(key, word, definition, usage)

    async def translate_definition(self, definition: Definition) -> Definition:
        """
        Fills `translated_*` for the fields that still come from the lexicon.
        Definitions fully covered by the dictionary are returned unchanged.
        """
        pending = [f for f in _TRANSLATABLE_FIELDS if f in definition.fallback_fields]
        if not pending:
            return definition

        translated = await self.translate_definition_fields(
            definition.strongs_id, definition.word, definition.definition, definition.usage
        )

        updates = {}
        for field in pending:
            value = getattr(translated, field)
            if value and value != getattr(definition, field):
                updates[f"translated_{field}"] = value
        if not updates:
            return definition

        updates["origin"] = DefinitionOrigin.PARTIALLY_TRANSLATED
        return definition.model_copy(update=updates)

    async def translate_chapter_definitions(self, reading_code: str, chapter: int) -> Dict[str, TranslatedFields]:
        """
        Translates every identifier of a chapter that still has lexicon fields.
        Results are keyed by identifier in order of first appearance.
        """
        verses = await self.get_chapter_with_tags(reading_code, chapter)

        ordered_ids: List[str] = []
        for text in verses.values():
            for token in parse_tagged_text(text):
                for strongs_id in token.strongs_ids:
                    if strongs_id not in ordered_ids:
                        ordered_ids.append(strongs_id)

        if ordered_ids:
            await self.resolver.ensure_loaded()
        definitions = []
        for strongs_id in ordered_ids:
            definition = self.resolver.resolve(strongs_id)
            if definition is not None and definition.fallback_fields:
                definitions.append(definition)

        results = await asyncio.gather(*(
            self.translate_definition_fields(d.strongs_id, d.word, d.definition, d.usage)
            for d in definitions
        ))
        logger.info("chapter_translated", book=reading_code, chapter=chapter, identifiers=len(definitions))
        return {d.strongs_id: fields for d, fields in zip(definitions, results)}

    # --- Lifecycle ---

    async def warmup(self) -> Dict[str, bool]:
        """Loads the lexicon and dictionary concurrently."""
        lexicon, dictionary = await asyncio.gather(
            self.resolver.lexicon.load(),
            self.resolver.dictionary.load(),
        )
        status = {"lexicon": lexicon is not None, "dictionary": bool(dictionary)}
        logger.info("warmup_complete", **status)
        return status
