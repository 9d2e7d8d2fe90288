# interlinear/core/domain/verse_parser.py
"""
Tokenizer for Strong's-tagged verse text.

Input looks like:

    For[G1063] God[G2316] so loved[G25] the world[G2889], that he gave[G1325]
    his[G846] only begotten[G3439] Son[G5207], ... <em>was</em> ...

Each surface word is followed by zero or more bracketed Strong's numbers;
<em>...</em> marks words supplied by the translators with no source word.
Parsing is pure: equal input always yields equal output.
"""

from __future__ import annotations

import re
from typing import List, Optional

from interlinear.core.domain.models import WordToken
from interlinear.core.domain.text import decode_corpus_entities

__all__ = ["parse_tagged_text", "visible_text"]

_SEGMENT_RE = re.compile(
    r"(?P<italic><em>(?P<italic_text>.*?)</em>)"
    r"|(?P<tag>\[(?P<strongs>[HGhg]\d+[A-Za-z]?)\])"
    r"|(?P<word>[^\s\[<]+)",
    re.DOTALL,
)


def parse_tagged_text(text: str) -> List[WordToken]:
    """
    Split tagged verse text into ordered WordTokens.

    Identifiers attach to the closest preceding word (several may attach
    to one word); identifiers before the first word are dropped.
    """
    if not text:
        return []

    tokens: List[WordToken] = []
    current_text: Optional[str] = None
    current_ids: List[str] = []
    current_italic = False

    def flush() -> None:
        if current_text is not None:
            tokens.append(WordToken(text=current_text, strongs_ids=list(current_ids), is_italic=current_italic))

    for match in _SEGMENT_RE.finditer(decode_corpus_entities(text)):
        if match.group("tag"):
            if current_text is not None:
                current_ids.append(match.group("strongs").upper())
            continue

        if match.group("italic"):
            segment = match.group("italic_text").strip()
            italic = True
        else:
            segment = match.group("word")
            italic = False
        if not segment:
            continue

        flush()
        current_text, current_ids, current_italic = segment, [], italic

    flush()
    return tokens


def visible_text(tokens: List[WordToken]) -> str:
    """
    The verse as a reader sees it: token texts joined by single spaces.
    Punctuation written after a tag ("world[G2889], that") is its own token,
    so it comes out space-separated ("world , that").
    """
    return " ".join(token.text for token in tokens)
