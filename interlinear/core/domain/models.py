# interlinear/core/domain/models.py
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from interlinear.core.domain.text import clean_definition

# --- Enums ---

class SourceLanguage(str, Enum):
    """Original-language family of a Strong's number."""
    HEBREW = "hebrew"  # H prefix
    GREEK = "greek"    # G prefix

class DefinitionOrigin(str, Enum):
    """Where the fields of a resolved Definition came from."""
    DICTIONARY = "dictionary"                      # Target dictionary entry (possibly lexicon-filled)
    LEXICON_FALLBACK = "lexicon_fallback"          # Base lexicon only
    PARTIALLY_TRANSLATED = "partially_translated"  # Lexicon fields machine-translated

# --- Keys ---

class StrongsKey(BaseModel):
    """The two textual encodings of one Strong's number."""
    model_config = ConfigDict(frozen=True)

    short: str   # 'H1'
    padded: str  # 'H0001'

# --- Source Records ---

class LexiconEntry(BaseModel):
    """
    One record of the source-language base lexicon (strongs-lexicon.json).
    Field aliases follow the published document; the original-script word
    is published as either `Gk_word` or `Hb_word`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    word: str = ""
    transliteration: str = ""
    part_of_speech: str = ""
    definition: str = Field("", alias="strongs_def")
    usage: str = Field("", alias="outline_usage")
    root_word: str = ""
    occurrences: str = ""

    @model_validator(mode="before")
    @classmethod
    def _pick_original_word(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("word"):
            data = dict(data)
            data["word"] = data.get("Gk_word") or data.get("Hb_word") or ""
        return data

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("definition", "usage")
    @classmethod
    def _clean(cls, value: str) -> str:
        return clean_definition(value)

class DictionaryEntry(BaseModel):
    """
    One record of the target-language (Portuguese) dictionary.
    `word` is the translated term; definition/usage are split from the
    record's definition fragments.
    """
    model_config = ConfigDict(frozen=True)

    word: str = ""
    definition: str = ""
    usage: str = ""
    transliteration: str = ""
    part_of_speech: str = ""
    language: SourceLanguage

class TaggedBook(BaseModel):
    """
    A book of the Strong's-tagged corpus.
    chapters: chapter number -> verse number -> tagged text
    """
    model_config = ConfigDict(frozen=True)

    code: str
    chapters: Dict[int, Dict[int, str]] = Field(default_factory=dict)

# --- Derived Values ---

class WordToken(BaseModel):
    """A surface word of a tagged verse with the Strong's numbers attached to it."""
    model_config = ConfigDict(frozen=True)

    text: str
    strongs_ids: List[str] = Field(default_factory=list)
    is_italic: bool = False  # Supplied by the translators, no source word

class Definition(BaseModel):
    """
    A dictionary entry merged with its lexicon counterpart.
    `fallback_fields` names the fields that still come from the source-language lexicon.
    """
    strongs_id: str
    word: str = ""
    transliteration: str = ""
    part_of_speech: str = ""
    definition: str = ""
    usage: str = ""
    original_word: str = ""
    fallback_fields: List[str] = Field(default_factory=list)

    translated_word: Optional[str] = None
    translated_definition: Optional[str] = None
    translated_usage: Optional[str] = None

    origin: DefinitionOrigin = DefinitionOrigin.DICTIONARY

class TranslatedFields(BaseModel):
    """A cached translation of one identifier's word/definition/usage."""
    model_config = ConfigDict(frozen=True)

    word: str = ""
    definition: str = ""
    usage: str = ""

class TranslationRequest(BaseModel):
    word: str = ""
    definition: str = ""
    usage: str = ""

class TranslationResponse(BaseModel):
    """Any field may be absent, meaning 'keep the source text'."""
    word: Optional[str] = None
    definition: Optional[str] = None
    usage: Optional[str] = None

class TranslationStats(BaseModel):
    total: int = 0
    translated: int = 0
    pending: int = 0
    percentage: int = 0

class InterlinearWord(BaseModel):
    token: WordToken
    definitions: List[Definition] = Field(default_factory=list)

class InterlinearVerse(BaseModel):
    reading_code: str
    tagged_code: str
    chapter: int
    verse: int
    text: str
    words: List[InterlinearWord] = Field(default_factory=list)
