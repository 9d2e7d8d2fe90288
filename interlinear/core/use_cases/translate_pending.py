# interlinear/core/use_cases/translate_pending.py
import asyncio
from typing import List

import structlog

from interlinear.core.domain.models import TranslationStats
from interlinear.core.domain.strongs import DEFAULT_PAD_WIDTH, normalize_strongs_id
from interlinear.services.lexicon_store import LexiconStore
from interlinear.services.translation_memo import TranslationMemoizer

logger = structlog.get_logger()


class TranslatePending:
    """
    Use Case: Batch translation of lexicon entries that have no cached translation yet.

    Chunks run concurrently inside and are separated by a pause so the
    external service is not flooded.
    """

    def __init__(self, lexicon: LexiconStore, memo: TranslationMemoizer, pad_width: int = DEFAULT_PAD_WIDTH):
        self.lexicon = lexicon
        self.memo = memo
        self.pad_width = pad_width

    async def _pending_ids(self) -> List[str]:
        if await self.lexicon.load() is None:
            return []
        seen = set()
        pending = []
        for strongs_id in self.lexicon.ids():
            short = normalize_strongs_id(strongs_id, self.pad_width).short
            if short in seen or short in self.memo:
                continue
            seen.add(short)
            pending.append(strongs_id)
        return pending

    async def stats(self) -> TranslationStats:
        if await self.lexicon.load() is None:
            return TranslationStats()
        total = len({normalize_strongs_id(i, self.pad_width).short for i in self.lexicon.ids()})
        pending = len(await self._pending_ids())
        translated = total - pending
        percentage = round(translated * 100 / total) if total else 0
        return TranslationStats(total=total, translated=translated, pending=pending, percentage=percentage)

    async def translate_pending(self, batch_size: int = 50, chunk_size: int = 10, delay_sec: float = 1.0) -> int:
        """Returns the number of identifiers newly cached."""
        batch = (await self._pending_ids())[:max(batch_size, 0)]
        if not batch:
            logger.info("translation_batch_empty")
            return 0

        chunk_size = max(chunk_size, 1)
        before = len(self.memo)
        logger.info("translation_batch_started", size=len(batch), chunk_size=chunk_size)

        for start in range(0, len(batch), chunk_size):
            if start:
                await asyncio.sleep(delay_sec)
            chunk = batch[start:start + chunk_size]
            await asyncio.gather(*(self._translate_one(strongs_id) for strongs_id in chunk))
            logger.info("translation_chunk_done", done=min(start + chunk_size, len(batch)), total=len(batch))

        added = len(self.memo) - before
        logger.info("translation_batch_finished", translated=added, failed=len(batch) - added)
        return added

    async def _translate_one(self, strongs_id: str) -> None:
        entry = self.lexicon.get(strongs_id)
        if entry is None:
            return
        await self.memo.translate(strongs_id, entry.word, entry.definition, entry.usage)
