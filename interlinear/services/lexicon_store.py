# interlinear/services/lexicon_store.py
import re
from typing import Dict, List, Optional

import structlog
from pydantic import ValidationError

from interlinear.core.domain.exceptions import ResourceUnavailableError
from interlinear.core.domain.models import LexiconEntry
from interlinear.core.ports.resource_fetcher import IResourceFetcher
from interlinear.services.single_flight import SingleFlight
from interlinear.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

_DIGITS_RE = re.compile(r"\d+")


def _numeric_order(strongs_id: str):
    match = _DIGITS_RE.search(strongs_id)
    return (strongs_id[:1], int(match.group()) if match else 0, strongs_id)


class LexiconStore:
    """
    In-Memory Cache for the source-language Strong's lexicon.

    The whole document is fetched once; concurrent load() calls share the
    same fetch. A failed load leaves the store empty so a later call retries.
    Lookups are exact-key: callers normalize identifiers first.
    """

    def __init__(self, fetcher: IResourceFetcher, path: str):
        self._fetcher = fetcher
        self.path = path
        self._entries: Optional[Dict[str, LexiconEntry]] = None
        self._flight = SingleFlight()
        self.last_error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    async def load(self) -> Optional[Dict[str, LexiconEntry]]:
        """
        Returns the identifier -> entry map, fetching it on first use.
        None means the lexicon is currently unavailable.
        """
        if self._entries is not None:
            return self._entries
        return await self._flight.run("lexicon", self._load)

    async def _load(self) -> Optional[Dict[str, LexiconEntry]]:
        with tracer.start_as_current_span("lexicon_store.load") as span:
            span.set_attribute("resource.path", self.path)
            logger.info("lexicon_hydrating", path=self.path)

            try:
                document = await self._fetcher.fetch_json(self.path)
            except ResourceUnavailableError as e:
                self.last_error = e.reason
                logger.error("lexicon_unavailable", path=self.path, error=e.reason)
                return None

            if not isinstance(document, dict):
                self.last_error = "document is not a JSON object"
                logger.error("lexicon_malformed", path=self.path, error=self.last_error)
                return None

            entries: Dict[str, LexiconEntry] = {}
            skipped = 0
            for key, record in document.items():
                if not isinstance(record, dict):
                    skipped += 1
                    continue
                try:
                    entries[str(key).strip()] = LexiconEntry.model_validate(record)
                except ValidationError:
                    skipped += 1

            if skipped:
                logger.warning("lexicon_records_skipped", skipped=skipped)

            self._entries = entries
            self.last_error = None
            span.set_attribute("lexicon.entries", len(entries))
            logger.info("lexicon_ready", entries=len(entries))
            return entries

    def get(self, strongs_id: str) -> Optional[LexiconEntry]:
        if self._entries is None:
            return None
        return self._entries.get(strongs_id)

    def ids(self) -> List[str]:
        """Identifiers in numeric order (H1, H2, ... H10)."""
        if not self._entries:
            return []
        return sorted(self._entries, key=_numeric_order)

    def reset(self) -> None:
        """Drops the loaded lexicon; the next load() fetches again."""
        self._entries = None

    def __len__(self) -> int:
        return len(self._entries) if self._entries else 0
