# interlinear/services/__init__.py
"""
Process-wide caches.

Each store owns its cache as instance state; the DI container builds one
instance per process (tests build their own isolated instances).
"""

from .lexicon_store import LexiconStore
from .dictionary_store import DictionaryStore
from .tagged_book_store import TaggedBookStore
from .translation_memo import TranslationMemoizer

__all__ = ["LexiconStore", "DictionaryStore", "TaggedBookStore", "TranslationMemoizer"]
