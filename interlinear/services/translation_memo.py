# interlinear/services/translation_memo.py
import asyncio
from typing import Any, Dict, Mapping, Optional

import structlog

from interlinear.core.domain.models import TranslatedFields, TranslationRequest
from interlinear.core.domain.strongs import DEFAULT_PAD_WIDTH, normalize_strongs_id
from interlinear.core.ports.translator import ITranslator
from interlinear.services.single_flight import SingleFlight
from interlinear.shared.resilience import CircuitBreakerOpenError
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class TranslationMemoizer:
    """
    Write-once cache of machine translations, keyed by Strong's number.

    Per identifier the state moves absent -> in-flight -> cached (or back to
    absent on failure). Concurrent requests for the same identifier share
    one external call; a cached value is never re-requested or overwritten.
    """

    def __init__(self, translator: ITranslator, timeout: float = 20.0, pad_width: int = DEFAULT_PAD_WIDTH):
        self._translator = translator
        self.timeout = timeout
        self.pad_width = pad_width
        self._cache: Dict[str, TranslatedFields] = {}
        self._flight = SingleFlight()

    def _key(self, strongs_id: str) -> str:
        return normalize_strongs_id(strongs_id, self.pad_width).short

    async def translate(self, strongs_id: str, word: str = "", definition: str = "", usage: str = "") -> TranslatedFields:
        """
        Returns the cached translation, or requests one.
        On failure the source fields are returned unchanged and nothing is cached.
        """
        key = self._key(strongs_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        source = TranslatedFields(word=word, definition=definition, usage=usage)
        result = await self._flight.run(key, lambda: self._resolve(key, source))
        return result if result is not None else source

    async def _resolve(self, key: str, source: TranslatedFields) -> Optional[TranslatedFields]:
        with tracer.start_as_current_span("translation_memo.translate") as span:
            span.set_attribute("strongs.id", key)
            request = TranslationRequest(word=source.word, definition=source.definition, usage=source.usage)

            try:
                response = await asyncio.wait_for(
                    self._translator.translate(key, request),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError:
                logger.warning("translation_timeout", strongs_id=key, timeout=self.timeout)
                return None
            except CircuitBreakerOpenError as e:
                logger.warning("translation_circuit_open", strongs_id=key, error=str(e))
                return None
            except Exception as e:
                logger.error("translation_failed", strongs_id=key, error=str(e))
                span.record_exception(e)
                return None

            if response is None or (
                response.word is None and response.definition is None and response.usage is None
            ):
                logger.warning("translation_empty", strongs_id=key)
                return None

            translated = TranslatedFields(
                word=response.word if response.word is not None else source.word,
                definition=response.definition if response.definition is not None else source.definition,
                usage=response.usage if response.usage is not None else source.usage,
            )
            stored = self._cache.setdefault(key, translated)
            logger.info("translation_cached", strongs_id=key, cached=len(self._cache))
            return stored

    def get(self, strongs_id: str) -> Optional[TranslatedFields]:
        return self._cache.get(self._key(strongs_id))

    def __contains__(self, strongs_id: str) -> bool:
        return self._key(strongs_id) in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def in_flight_count(self) -> int:
        return len(self._flight)

    def seed(self, mapping: Mapping[str, Any]) -> int:
        """
        Preloads translations from an export document
        ({"H430": {"word": ..., "definition": ..., "usage": ...}}).
        Existing entries are kept. Returns the number of entries added.
        """
        added = 0
        for strongs_id, fields in mapping.items():
            if not isinstance(fields, dict):
                continue
            key = self._key(strongs_id)
            if key in self._cache:
                continue
            self._cache[key] = TranslatedFields(
                word=str(fields.get("word") or ""),
                definition=str(fields.get("definition") or ""),
                usage=str(fields.get("usage") or ""),
            )
            added += 1
        logger.info("translation_cache_seeded", added=added, cached=len(self._cache))
        return added

    def export(self) -> Dict[str, Dict[str, str]]:
        """The cache in export-document shape, ordered by identifier."""
        return {key: self._cache[key].model_dump() for key in sorted(self._cache)}
