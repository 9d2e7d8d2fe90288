# interlinear/core/domain/strongs.py
"""
Strong's number normalization.

Source documents disagree on how a Strong's number is written: the tagged
corpus uses 'H430', the target dictionary stores bare numbers plus a
language tag, and older exports zero-pad to four digits ('H0430').
Every key is reduced to a short and a padded form; callers probe both.
"""

from __future__ import annotations

import re
from typing import List, Optional

from interlinear.core.domain.models import SourceLanguage, StrongsKey

__all__ = [
    "DEFAULT_PAD_WIDTH",
    "normalize_strongs_id",
    "strongs_key_variants",
    "strongs_key_for",
    "language_from_tag",
    "prefix_for",
]

DEFAULT_PAD_WIDTH = 4

# digits with an optional one-letter homograph suffix ('1121a')
_BODY_RE = re.compile(r"^(\d+)([A-Za-z]?)$")

_LANGUAGE_TAGS = {
    "hebrew": SourceLanguage.HEBREW,
    "heb": SourceLanguage.HEBREW,
    "he": SourceLanguage.HEBREW,
    "hbo": SourceLanguage.HEBREW,
    "h": SourceLanguage.HEBREW,
    "greek": SourceLanguage.GREEK,
    "grc": SourceLanguage.GREEK,
    "gr": SourceLanguage.GREEK,
    "el": SourceLanguage.GREEK,
    "g": SourceLanguage.GREEK,
}

_PREFIXES = {
    SourceLanguage.HEBREW: "H",
    SourceLanguage.GREEK: "G",
}


def _split(raw: str) -> tuple[str, str]:
    text = (raw or "").strip().strip("[]").strip()
    if not text:
        return "", ""
    if text[0].isdigit():
        return "", text
    return text[0].upper(), text[1:].strip()


def normalize_strongs_id(raw: str, width: int = DEFAULT_PAD_WIDTH) -> StrongsKey:
    """
    Return the unpadded ('H1') and zero-padded ('H0001') forms of an identifier.

    Leading zeros are stripped, then the number is re-padded to `width`.
    Numbers longer than `width` are kept whole, so both forms are equal.
    Malformed input is returned best-effort instead of raising.
    """
    prefix, body = _split(raw)
    match = _BODY_RE.match(body)
    if not match:
        key = prefix + body
        return StrongsKey(short=key, padded=key)

    digits, suffix = match.groups()
    number = digits.lstrip("0") or "0"
    return StrongsKey(
        short=f"{prefix}{number}{suffix}",
        padded=f"{prefix}{number.zfill(width)}{suffix}",
    )


def strongs_key_variants(raw: str, width: int = DEFAULT_PAD_WIDTH) -> List[str]:
    """Distinct probe keys in priority order: as given, short, padded."""
    key = normalize_strongs_id(raw, width)
    variants: List[str] = []
    for candidate in ((raw or "").strip(), key.short, key.padded):
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


def language_from_tag(tag: str) -> Optional[SourceLanguage]:
    return _LANGUAGE_TAGS.get((tag or "").strip().casefold())


def prefix_for(language: SourceLanguage) -> str:
    return _PREFIXES[language]


def strongs_key_for(number: str, language_tag: str, width: int = DEFAULT_PAD_WIDTH) -> Optional[StrongsKey]:
    """
    Build both keys for a bare dictionary number ('430') and its language tag.
    Returns None when the tag is unknown or the number is not numeric.
    """
    language = language_from_tag(language_tag)
    if language is None:
        return None
    _, body = _split(str(number))
    if not _BODY_RE.match(body):
        return None
    return normalize_strongs_id(prefix_for(language) + body, width)
