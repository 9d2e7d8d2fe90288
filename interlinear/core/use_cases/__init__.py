# interlinear/core/use_cases/__init__.py
"""
Core Use Cases (Application Logic).

These orchestrate the caches in `interlinear.services` into the query API:
definition resolution, verse/chapter lookup with Strong's tags, and
memoized translation of fields still in the source language.
"""

from .resolve_definition import DefinitionResolver
from .interlinear_service import InterlinearService
from .translate_pending import TranslatePending

__all__ = [
    "DefinitionResolver",
    "InterlinearService",
    "TranslatePending",
]
