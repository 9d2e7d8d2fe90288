# interlinear/core/ports/__init__.py
"""
Core Ports (Interfaces).

Protocols the infrastructure adapters implement so the core can fetch
static documents and call the translation service without knowing how.
"""

from .resource_fetcher import IResourceFetcher
from .translator import ITranslator
