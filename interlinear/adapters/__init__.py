# interlinear/adapters/__init__.py
"""
Driven Adapters.

Concrete implementations of the core ports: static document fetchers
(HTTP, local filesystem) and machine translators (HTTP gateway, Gemini).
"""

from .http_fetcher import HttpResourceFetcher
from .filesystem_fetcher import FileSystemResourceFetcher
from .http_translator import HttpTranslator
from .gemini_translator import GeminiTranslator

__all__ = [
    "HttpResourceFetcher",
    "FileSystemResourceFetcher",
    "HttpTranslator",
    "GeminiTranslator",
]
