# interlinear/services/tagged_book_store.py
from typing import Any, Dict, List, Optional

import structlog

from interlinear.core.domain.exceptions import MalformedResourceError, ResourceUnavailableError
from interlinear.core.domain.models import TaggedBook
from interlinear.core.ports.resource_fetcher import IResourceFetcher
from interlinear.services.single_flight import SingleFlight
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


def _last_number(composite_key: str, expected_parts: int) -> Optional[int]:
    """'Jhn|3|16' -> 16 (when it has `expected_parts` parts)."""
    parts = str(composite_key).split("|")
    if len(parts) != expected_parts:
        return None
    try:
        return int(parts[-1])
    except ValueError:
        return None


def build_tagged_book(code: str, document: Any, language: str = "en", path: str = "") -> TaggedBook:
    """
    Converts the pipe-keyed corpus document

        {"Jhn": {"Jhn|3": {"Jhn|3|16": {"en": "For[G1063] God[G2316] ..."}}}}

    into a TaggedBook of chapter -> verse -> text. Unparseable keys and
    verses without text in `language` are skipped.
    """
    if not isinstance(document, dict):
        raise MalformedResourceError(path or code, "document is not a JSON object")

    book_data = document.get(code)
    if book_data is None and len(document) == 1:
        # Some exports key the root by a differently-cased code
        book_data = next(iter(document.values()))
    if not isinstance(book_data, dict):
        raise MalformedResourceError(path or code, f"no book object for '{code}'")

    chapters: Dict[int, Dict[int, str]] = {}
    for chapter_key, chapter_data in book_data.items():
        chapter = _last_number(chapter_key, 2)
        if chapter is None or not isinstance(chapter_data, dict):
            continue
        verses: Dict[int, str] = {}
        for verse_key, verse_data in chapter_data.items():
            verse = _last_number(verse_key, 3)
            if verse is None or not isinstance(verse_data, dict):
                continue
            text = verse_data.get(language)
            if isinstance(text, str) and text.strip():
                verses[verse] = text
        if verses:
            chapters[chapter] = dict(sorted(verses.items()))

    return TaggedBook(code=code, chapters=dict(sorted(chapters.items())))


class TaggedBookStore:
    """
    Per-book lazy cache of the Strong's-tagged corpus.

    A book is fetched on first access to any of its verses and kept for the
    life of the store. Failed fetches are not cached, so the next access
    tries again.
    """

    def __init__(self, fetcher: IResourceFetcher, path_template: str, language: str = "en"):
        self._fetcher = fetcher
        self.path_template = path_template
        self.language = language
        self._books: Dict[str, TaggedBook] = {}
        self._flight = SingleFlight()

    async def load_book(self, tagged_code: str) -> Optional[TaggedBook]:
        book = self._books.get(tagged_code)
        if book is not None:
            return book
        return await self._flight.run(tagged_code, lambda: self._load(tagged_code))

    async def _load(self, tagged_code: str) -> Optional[TaggedBook]:
        path = self.path_template.format(code=tagged_code)
        with tracer.start_as_current_span("tagged_book_store.load") as span:
            span.set_attribute("resource.path", path)
            try:
                document = await self._fetcher.fetch_json(path)
                book = build_tagged_book(tagged_code, document, self.language, path)
            except ResourceUnavailableError as e:
                logger.warning("tagged_book_unavailable", book=tagged_code, path=path, error=e.reason)
                return None

            book = self._books.setdefault(tagged_code, book)
            logger.info("tagged_book_ready", book=tagged_code, chapters=len(book.chapters))
            return book

    async def get_verse_text(self, tagged_code: str, chapter: int, verse: int) -> Optional[str]:
        book = await self.load_book(tagged_code)
        if book is None:
            return None
        return book.chapters.get(chapter, {}).get(verse)

    async def get_chapter_verses(self, tagged_code: str, chapter: int) -> Dict[int, str]:
        """Every verse present in the chapter; numbering may have gaps."""
        book = await self.load_book(tagged_code)
        if book is None:
            return {}
        return dict(book.chapters.get(chapter, {}))

    def cached_codes(self) -> List[str]:
        return sorted(self._books)

    def clear(self) -> None:
        self._books.clear()
