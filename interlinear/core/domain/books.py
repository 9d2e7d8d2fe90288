# interlinear/core/domain/books.py
# =========================================================================
# BOOK MAPPING: reading corpus -> Strong's-tagged corpus
#
# The reading corpus uses Portuguese abbreviations ('gn', 'jo', 'ap');
# the KJV+Strong's corpus names its files with three-character codes
# ('Gen', 'Jhn', 'Rev'). Both cover the same 66-book canon.
# =========================================================================

from typing import Dict, List, Optional

# --- 1. CORE DATA MAPPING ---
# Structure: { reading_code : tagged_code }, canonical order
READING_TO_TAGGED: Dict[str, str] = {
    # --- Old Testament ---
    "gn": "Gen", "ex": "Exo", "lv": "Lev", "nm": "Num", "dt": "Deu",
    "js": "Jos", "jz": "Jdg", "rt": "Rth", "1sm": "1Sa", "2sm": "2Sa",
    "1rs": "1Ki", "2rs": "2Ki", "1cr": "1Ch", "2cr": "2Ch", "ed": "Ezr",
    "ne": "Neh", "et": "Est", "jó": "Job", "sl": "Psa", "pv": "Pro",
    "ec": "Ecc", "ct": "Sng", "is": "Isa", "jr": "Jer", "lm": "Lam",
    "ez": "Eze", "dn": "Dan", "os": "Hos", "jl": "Joe", "am": "Amo",
    "ob": "Oba", "jn": "Jon", "mq": "Mic", "na": "Nah", "hc": "Hab",
    "sf": "Zep", "ag": "Hag", "zc": "Zec", "ml": "Mal",
    # --- New Testament ---
    "mt": "Mat", "mc": "Mar", "lc": "Luk", "jo": "Jhn", "at": "Act",
    "rm": "Rom", "1co": "1Co", "2co": "2Co", "gl": "Gal", "ef": "Eph",
    "fp": "Phl", "cl": "Col", "1ts": "1Th", "2ts": "2Th", "1tm": "1Ti",
    "2tm": "2Ti", "tt": "Tit", "fm": "Phm", "hb": "Heb", "tg": "Jas",
    "1pe": "1Pe", "2pe": "2Pe", "1jo": "1Jo", "2jo": "2Jo", "3jo": "3Jo",
    "jd": "Jde", "ap": "Rev",
}

# --- 2. DERIVED LOOKUPS ---
TAGGED_CODES: List[str] = list(READING_TO_TAGGED.values())
OLD_TESTAMENT: frozenset = frozenset(TAGGED_CODES[:39])
NEW_TESTAMENT: frozenset = frozenset(TAGGED_CODES[39:])


# --- 3. HELPER FUNCTIONS ---

def to_tagged_code(reading_code: str) -> Optional[str]:
    """
    Converts a reading-corpus book code into the tagged-corpus code.
    Returns None when the tagged corpus has no equivalent book
    (interlinear unavailable, not an error).
    """
    if not reading_code:
        return None
    return READING_TO_TAGGED.get(reading_code.strip().lower())


def testament_of(tagged_code: str) -> Optional[str]:
    """'OT' / 'NT' for a tagged-corpus code, None if unknown."""
    if tagged_code in OLD_TESTAMENT:
        return "OT"
    if tagged_code in NEW_TESTAMENT:
        return "NT"
    return None


def strongs_prefix_for(tagged_code: str) -> Optional[str]:
    """Hebrew numbers ('H') tag the Old Testament, Greek ('G') the New."""
    testament = testament_of(tagged_code)
    if testament is None:
        return None
    return "H" if testament == "OT" else "G"
