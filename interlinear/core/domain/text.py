# interlinear/core/domain/text.py
"""
Text cleanup for the published Bible/lexicon documents.

The KJV+Strong's corpus and the lexicon were exported with a few
broken HTML entity spellings (a '-' where the ';' should be).
"""

from __future__ import annotations

import re

__all__ = ["decode_corpus_entities", "clean_definition"]

# Order matters: the malformed '-' spellings must be replaced before the
# well-formed ones so '&#8212-' does not leave a dangling '-'.
_ENTITY_REPLACEMENTS = (
    ("&#8212-", "—"),
    ("&#8212;", "—"),
    ("&#8212", "—"),
    ("&quot-", '"'),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)

_NULL_RE = re.compile(r"\bnull\b")
_WHITESPACE_RE = re.compile(r"\s+")


def decode_corpus_entities(text: str) -> str:
    for entity, replacement in _ENTITY_REPLACEMENTS:
        if entity in text:
            text = text.replace(entity, replacement)
    return text


def clean_definition(text: str) -> str:
    """
    Normalize a lexicon definition/usage string.

    Decodes entities, drops literal 'null' placeholders left by the export
    and collapses whitespace.
    """
    if not text:
        return ""
    cleaned = decode_corpus_entities(text)
    cleaned = _NULL_RE.sub("", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()
