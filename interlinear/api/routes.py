# interlinear/api/routes.py
from typing import Any, Dict

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from interlinear.core.domain.models import (
    Definition,
    InterlinearVerse,
    TranslatedFields,
    TranslationRequest,
    TranslationStats,
)
from interlinear.core.use_cases.interlinear_service import InterlinearService
from interlinear.core.use_cases.translate_pending import TranslatePending
from interlinear.shared.container import Container

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["Interlinear"])


def _not_available(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not available")


@router.get("/health")
@inject
async def health(
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
) -> Dict[str, Any]:
    """Liveness plus the load state of the caches."""
    return {
        "status": "ok",
        "lexicon_loaded": service.resolver.lexicon.is_loaded,
        "dictionary_loaded": service.resolver.dictionary.is_loaded,
        "cached_books": service.books.cached_codes(),
        "cached_translations": len(service.memo),
    }


@router.get("/definitions/{strongs_id}", response_model=Definition)
@inject
async def get_definition(
    strongs_id: str = Path(..., description="Strong's number, e.g. 'H430' or 'G0026'"),
    translate: bool = Query(False, description="Machine-translate fields missing in Portuguese"),
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
):
    definition = await service.get_definition(strongs_id)
    if definition is None:
        raise _not_available(f"Definition for '{strongs_id}'")
    if translate:
        definition = await service.translate_definition(definition)
    return definition


@router.get("/verses/{book}/{chapter}/{verse}")
@inject
async def get_verse(
    book: str,
    chapter: int = Path(..., ge=1),
    verse: int = Path(..., ge=1),
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
) -> Dict[str, Any]:
    text = await service.get_verse_with_tags(book, chapter, verse)
    if text is None:
        raise _not_available(f"Interlinear text for {book} {chapter}:{verse}")
    return {"book": book, "chapter": chapter, "verse": verse, "text": text}


@router.get("/verses/{book}/{chapter}/{verse}/interlinear", response_model=InterlinearVerse)
@inject
async def get_interlinear_verse(
    book: str,
    chapter: int = Path(..., ge=1),
    verse: int = Path(..., ge=1),
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
):
    result = await service.get_interlinear_verse(book, chapter, verse)
    if result is None:
        raise _not_available(f"Interlinear text for {book} {chapter}:{verse}")
    return result


@router.get("/chapters/{book}/{chapter}")
@inject
async def get_chapter(
    book: str,
    chapter: int = Path(..., ge=1),
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
) -> Dict[str, Any]:
    verses = await service.get_chapter_with_tags(book, chapter)
    if not verses:
        raise _not_available(f"Interlinear text for {book} {chapter}")
    return {"book": book, "chapter": chapter, "verses": verses}


@router.get("/translations/stats", response_model=TranslationStats)
@inject
async def translation_stats(
    use_case: TranslatePending = Depends(Provide[Container.translate_pending]),
):
    return await use_case.stats()


@router.post("/translations/{strongs_id}", response_model=TranslatedFields)
@inject
async def translate_fields(
    request: TranslationRequest,
    strongs_id: str = Path(...),
    service: InterlinearService = Depends(Provide[Container.interlinear_service]),
):
    """Returns the cached translation, or the source fields when the translator is unavailable."""
    logger.info("translation_requested", strongs_id=strongs_id)
    return await service.translate_definition_fields(
        strongs_id, request.word, request.definition, request.usage
    )
