# interlinear/__init__.py
"""
Interlinear - Strong's lexicon resolution and translation caching engine.

Given a verse reference in the reading corpus, this package locates the
matching verse in the Strong's-tagged corpus, tokenizes it, resolves every
tag against the target-language dictionary (with the base lexicon as
fallback) and memoizes machine translations of whatever is still missing.

Layout follows Ports & Adapters:
- core/      pure domain logic and use cases
- services/  process-wide caches (lexicon, dictionary, books, translations)
- adapters/  HTTP / filesystem / LLM implementations of the core ports
- shared/    configuration, logging, telemetry, resilience, DI wiring
"""

__version__ = "1.0.0"
