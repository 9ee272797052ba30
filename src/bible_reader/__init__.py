"""
Bible Reader - Fetches Bible chapters as ordered verse text, parsing api.bible
HTML and falling back to bible-api.com.
"""

from .models import VerseRecord, ChapterResult, ProviderContext, Bible, Book, Chapter, VerseRef, SearchHit, PassageVerse
from .errors import BibleReaderError, ProviderError, UnknownBookError, UnknownTranslationError
from .books import BIBLE_BOOKS, BOOK_ID_MAPPING, TRANSLATIONS, DEFAULT_TRANSLATION
from .extractor import extract_verses
from .normalizer import normalize_verses
from .clients import ApiBibleClient, BibleApiClient
from .service import ChapterService, get_chapter, get_chapter_async

__all__ = [
    "VerseRecord",
    "ChapterResult",
    "ProviderContext",
    "Bible",
    "Book",
    "Chapter",
    "VerseRef",
    "SearchHit",
    "PassageVerse",
    "BibleReaderError",
    "ProviderError",
    "UnknownBookError",
    "UnknownTranslationError",
    "BIBLE_BOOKS",
    "BOOK_ID_MAPPING",
    "TRANSLATIONS",
    "DEFAULT_TRANSLATION",
    "extract_verses",
    "normalize_verses",
    "ApiBibleClient",
    "BibleApiClient",
    "ChapterService",
    "get_chapter",
    "get_chapter_async",
]

__version__ = "0.1.0"
