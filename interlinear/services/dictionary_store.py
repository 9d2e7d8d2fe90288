# interlinear/services/dictionary_store.py
from typing import Any, Dict, List, Optional, Tuple

import structlog

from interlinear.core.domain.exceptions import ResourceUnavailableError
from interlinear.core.domain.models import DictionaryEntry
from interlinear.core.domain.strongs import (
    DEFAULT_PAD_WIDTH,
    language_from_tag,
    normalize_strongs_id,
    strongs_key_for,
)
from interlinear.core.domain.text import clean_definition
from interlinear.core.ports.resource_fetcher import IResourceFetcher
from interlinear.services.single_flight import SingleFlight
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


def split_definition_fragments(fragments: Any, definition_fragments: int) -> Tuple[str, str]:
    """
    The first `definition_fragments` non-empty fragments form the definition,
    the remainder forms the usage. Both are '; '-joined.
    """
    if isinstance(fragments, str):
        fragments = [fragments]
    if not isinstance(fragments, list):
        return "", ""
    cleaned: List[str] = [clean_definition(str(f)) for f in fragments if f is not None]
    cleaned = [f for f in cleaned if f]
    return "; ".join(cleaned[:definition_fragments]), "; ".join(cleaned[definition_fragments:])


class DictionaryStore:
    """
    In-Memory Cache for the target-language (Portuguese) Strong's dictionary.

    Records carry a bare number plus a language tag. At load time every
    record is stored under both its unpadded ('H430') and padded ('H0430')
    key, so either spelling hits the same entry.
    """

    def __init__(
        self,
        fetcher: IResourceFetcher,
        path: str,
        pad_width: int = DEFAULT_PAD_WIDTH,
        definition_fragments: int = 3,
    ):
        self._fetcher = fetcher
        self.path = path
        self.pad_width = pad_width
        self.definition_fragments = definition_fragments
        self._entries: Optional[Dict[str, DictionaryEntry]] = None
        self._distinct = 0
        self._flight = SingleFlight()
        self.last_error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    async def load(self) -> bool:
        """True once the dictionary is available; False if the fetch failed."""
        if self._entries is not None:
            return True
        return await self._flight.run("dictionary", self._load)

    async def _load(self) -> bool:
        with tracer.start_as_current_span("dictionary_store.load") as span:
            span.set_attribute("resource.path", self.path)
            logger.info("dictionary_hydrating", path=self.path)

            try:
                document = await self._fetcher.fetch_json(self.path)
            except ResourceUnavailableError as e:
                self.last_error = e.reason
                logger.error("dictionary_unavailable", path=self.path, error=e.reason)
                return False

            records = document.get("entries") if isinstance(document, dict) else None
            if not isinstance(records, list):
                self.last_error = "missing 'entries' list"
                logger.error("dictionary_malformed", path=self.path, error=self.last_error)
                return False

            entries: Dict[str, DictionaryEntry] = {}
            distinct = 0
            skipped = 0
            for record in records:
                built = self._build_entry(record)
                if built is None:
                    skipped += 1
                    continue
                keys, entry = built
                if keys.short in entries:
                    # First record for a number wins
                    continue
                entries[keys.short] = entry
                entries.setdefault(keys.padded, entry)
                distinct += 1

            metadata = document.get("metadata")
            declared = metadata.get("entry_count") if isinstance(metadata, dict) else None
            if isinstance(declared, int) and declared != len(records):
                logger.warning("dictionary_entry_count_mismatch", declared=declared, found=len(records))
            if skipped:
                logger.warning("dictionary_records_skipped", skipped=skipped)

            self._entries = entries
            self._distinct = distinct
            self.last_error = None
            span.set_attribute("dictionary.entries", distinct)
            logger.info("dictionary_ready", entries=distinct, keys=len(entries))
            return True

    def _build_entry(self, record: Any):
        if not isinstance(record, dict):
            return None
        language_tag = str(record.get("language_tag") or "")
        keys = strongs_key_for(str(record.get("identifier") or ""), language_tag, self.pad_width)
        if keys is None:
            return None

        definition, usage = split_definition_fragments(record.get("definitions"), self.definition_fragments)
        entry = DictionaryEntry(
            word=str(record.get("term") or "").strip(),
            definition=definition,
            usage=usage,
            transliteration=str(record.get("transliteration") or "").strip(),
            part_of_speech=str(record.get("part_of_speech") or "").strip(),
            language=language_from_tag(language_tag),
        )
        return keys, entry

    def get(self, key: str) -> Optional[DictionaryEntry]:
        """Exact key lookup."""
        if self._entries is None:
            return None
        return self._entries.get(key)

    def lookup(self, strongs_id: str) -> Optional[DictionaryEntry]:
        """Probes the short form, then the padded form."""
        keys = normalize_strongs_id(strongs_id, self.pad_width)
        return self.get(keys.short) or self.get(keys.padded)

    def reset(self) -> None:
        self._entries = None
        self._distinct = 0

    def __len__(self) -> int:
        return self._distinct
