"""Static book and translation lookup tables."""

from types import MappingProxyType
from typing import Optional

from .errors import UnknownBookError, UnknownTranslationError


# =============================================================================
# Books
# =============================================================================

BOOK_ID_MAPPING = MappingProxyType({
    # Old Testament
    "Genesis": "GEN", "Exodus": "EXO", "Leviticus": "LEV", "Numbers": "NUM",
    "Deuteronomy": "DEU", "Joshua": "JOS", "Judges": "JDG", "Ruth": "RUT",
    "1 Samuel": "1SA", "2 Samuel": "2SA", "1 Kings": "1KI", "2 Kings": "2KI",
    "1 Chronicles": "1CH", "2 Chronicles": "2CH", "Ezra": "EZR",
    "Nehemiah": "NEH", "Esther": "EST", "Job": "JOB", "Psalms": "PSA",
    "Proverbs": "PRO", "Ecclesiastes": "ECC", "Song of Solomon": "SNG",
    "Isaiah": "ISA", "Jeremiah": "JER", "Lamentations": "LAM",
    "Ezekiel": "EZK", "Daniel": "DAN", "Hosea": "HOS", "Joel": "JOL",
    "Amos": "AMO", "Obadiah": "OBA", "Jonah": "JON", "Micah": "MIC",
    "Nahum": "NAM", "Habakkuk": "HAB", "Zephaniah": "ZEP", "Haggai": "HAG",
    "Zechariah": "ZEC", "Malachi": "MAL",
    # New Testament
    "Matthew": "MAT", "Mark": "MRK", "Luke": "LUK", "John": "JHN",
    "Acts": "ACT", "Romans": "ROM", "1 Corinthians": "1CO",
    "2 Corinthians": "2CO", "Galatians": "GAL", "Ephesians": "EPH",
    "Philippians": "PHP", "Colossians": "COL", "1 Thessalonians": "1TH",
    "2 Thessalonians": "2TH", "1 Timothy": "1TI", "2 Timothy": "2TI",
    "Titus": "TIT", "Philemon": "PHM", "Hebrews": "HEB", "James": "JAS",
    "1 Peter": "1PE", "2 Peter": "2PE", "1 John": "1JN", "2 John": "2JN",
    "3 John": "3JN", "Jude": "JUD", "Revelation": "REV",
})

BIBLE_BOOKS = tuple(BOOK_ID_MAPPING)


# =============================================================================
# Translations
# =============================================================================

DEFAULT_TRANSLATION = "web"

# api_bible_id is None where the primary provider has no matching Bible;
# those translations are always served by bible-api.com.
TRANSLATIONS = MappingProxyType({
    "web": MappingProxyType({
        "name": "World English Bible",
        "api_bible_id": "9879dbb7cfe39e4d-04",
        "bible_api_code": "web",
    }),
    "kjv": MappingProxyType({
        "name": "King James Version",
        "api_bible_id": "de4e12af7f28f599-02",
        "bible_api_code": "kjv",
    }),
    "lsg": MappingProxyType({
        "name": "Louis Segond 1910",
        "api_bible_id": None,
        "bible_api_code": "lsg",
    }),
})


def book_code(book: str) -> str:
    """Return the 3-letter provider code for a canonical book name."""
    try:
        return BOOK_ID_MAPPING[book]
    except KeyError:
        raise UnknownBookError(book) from None


def check_translation(translation: str) -> None:
    if translation not in TRANSLATIONS:
        raise UnknownTranslationError(translation)


def bible_id(translation: str) -> Optional[str]:
    """Return the primary provider Bible ID, or None if it has none."""
    entry = TRANSLATIONS.get(translation)
    return entry["api_bible_id"] if entry else None


def secondary_translation(translation: str) -> str:
    """Return the bible-api.com translation code, defaulting to WEB."""
    entry = TRANSLATIONS.get(translation)
    return entry["bible_api_code"] if entry else DEFAULT_TRANSLATION
