# interlinear/core/use_cases/resolve_definition.py
from typing import Optional

import structlog

from interlinear.core.domain.models import Definition, DefinitionOrigin
from interlinear.core.domain.strongs import DEFAULT_PAD_WIDTH, normalize_strongs_id, strongs_key_variants
from interlinear.services.dictionary_store import DictionaryStore
from interlinear.services.lexicon_store import LexiconStore

logger = structlog.get_logger()

# Fields merged primary-first, in this order
_MERGED_FIELDS = ("word", "transliteration", "part_of_speech", "definition", "usage")


class DefinitionResolver:
    """
    Use Case: Resolves one Strong's identifier to a Definition.

    The target-language dictionary is primary and the source-language
    lexicon is the fallback, field by field: a non-empty dictionary value
    wins, then a non-empty lexicon value, then "".
    """

    def __init__(self, dictionary: DictionaryStore, lexicon: LexiconStore, pad_width: int = DEFAULT_PAD_WIDTH):
        self.dictionary = dictionary
        self.lexicon = lexicon
        self.pad_width = pad_width

    def resolve(self, strongs_id: str) -> Optional[Definition]:
        """
        Merges whatever the loaded stores hold for `strongs_id`.
        Returns None when neither store has the identifier.
        """
        keys = normalize_strongs_id(strongs_id, self.pad_width)

        primary = self.dictionary.get(keys.short) or self.dictionary.get(keys.padded)

        secondary = None
        for candidate in strongs_key_variants(strongs_id, self.pad_width):
            secondary = self.lexicon.get(candidate)
            if secondary is not None:
                break

        if primary is None and secondary is None:
            logger.debug("definition_not_found", strongs_id=keys.short)
            return None

        values = {}
        fallback_fields = []
        for field in _MERGED_FIELDS:
            primary_value = getattr(primary, field, "") if primary is not None else ""
            secondary_value = getattr(secondary, field, "") if secondary is not None else ""
            if primary_value:
                values[field] = primary_value
            elif secondary_value:
                values[field] = secondary_value
                fallback_fields.append(field)
            else:
                values[field] = ""

        return Definition(
            strongs_id=keys.short,
            original_word=secondary.word if secondary is not None else "",
            fallback_fields=fallback_fields,
            origin=DefinitionOrigin.DICTIONARY if primary is not None else DefinitionOrigin.LEXICON_FALLBACK,
            **values,
        )

    async def ensure_loaded(self) -> None:
        """
        One load attempt per unloaded store. A failed load just leaves that side
        empty; callers resolving many identifiers await this once, then use resolve().
        """
        if not self.dictionary.is_loaded:
            await self.dictionary.load()
        if not self.lexicon.is_loaded:
            await self.lexicon.load()

    async def resolve_loaded(self, strongs_id: str) -> Optional[Definition]:
        await self.ensure_loaded()
        return self.resolve(strongs_id)
