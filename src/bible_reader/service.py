"""
Chapter retrieval with provider fallback.

A chapter is first requested from api.bible as HTML and run through the
verse extractor and normalizer. If that provider is disabled, has no Bible
for the translation, fails, or yields no verses, the same chapter is
requested from bible-api.com. Expected failures never raise: the caller
gets an empty ChapterResult instead.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Optional

from .books import DEFAULT_TRANSLATION, bible_id, book_code, check_translation, secondary_translation
from .clients import API_BIBLE, BIBLE_API, ApiBibleClient, BibleApiClient, build_session
from .config import load_settings
from .errors import ProviderError
from .extractor import extract_verses
from .models import ChapterResult, ProviderContext, VerseRecord
from .normalizer import normalize_verses

logger = logging.getLogger(__name__)


def build_context(book: str, chapter: int, translation: str) -> ProviderContext:
    """
    Resolve a request against the static tables.

    Raises:
        UnknownBookError: book is not one of the 66 canonical names
        UnknownTranslationError: translation is not supported
        ValueError: chapter is not a positive integer
    """
    if isinstance(chapter, bool) or not isinstance(chapter, int) or chapter < 1:
        raise ValueError(f"Chapter must be a positive integer, got {chapter!r}")
    check_translation(translation)

    return ProviderContext(
        book=book,
        book_code=book_code(book),
        chapter=chapter,
        translation=translation,
        bible_id=bible_id(translation),
        secondary_translation=secondary_translation(translation),
    )


class ChapterService:
    """Fetches chapters from api.bible, falling back to bible-api.com."""

    def __init__(
        self,
        primary: Optional[ApiBibleClient] = None,
        secondary: Optional[BibleApiClient] = None,
        use_primary: bool = True,
    ):
        self.primary = primary
        self.secondary = secondary or BibleApiClient()
        self.use_primary = use_primary

    @classmethod
    def from_env(cls, environ=None) -> "ChapterService":
        """Build a service from API_BIBLE_KEY and related environment variables."""
        settings = load_settings(environ)
        session = build_session()

        primary = None
        if settings.api_key:
            primary = ApiBibleClient(
                settings.api_key, settings.api_bible_base, session, settings.timeout
            )
        elif settings.use_primary:
            logger.warning("API_BIBLE_KEY not set; chapters will come from bible-api.com only")

        secondary = BibleApiClient(
            base_url=settings.bible_api_base, session=session, timeout=settings.timeout
        )
        return cls(primary, secondary, use_primary=settings.use_primary)

    def _from_primary(self, context: ProviderContext, use_primary: bool) -> list[VerseRecord]:
        if not use_primary or self.primary is None:
            return []

        if context.bible_id is None:
            logger.warning(
                "No api.bible ID for translation %s, falling back to bible-api.com",
                context.translation,
            )
            return []

        try:
            content = self.primary.get_chapter_content(context.bible_id, context.chapter_id)
        except ProviderError as e:
            logger.warning("Error fetching %s from api.bible, falling back: %s", context.chapter_id, e)
            return []

        if not content.strip():
            logger.warning("No content returned from api.bible for %s, falling back", context.chapter_id)
            return []

        verses = normalize_verses(extract_verses(content))
        if not verses:
            logger.warning("No verses parsed from api.bible content for %s, falling back", context.chapter_id)
        return verses

    def get_chapter(
        self,
        book: str,
        chapter: int,
        translation: str = DEFAULT_TRANSLATION,
        use_primary: Optional[bool] = None,
    ) -> ChapterResult:
        """
        Get one chapter's verses.

        Args:
            book: Canonical book name (e.g., 'John', '1 Peter')
            chapter: Chapter number
            translation: Supported translation code (e.g., 'web')
            use_primary: Overrides the service's use_primary for this call only

        Returns:
            ChapterResult, empty if neither provider had the chapter
        """
        context = build_context(book, chapter, translation)

        if use_primary is None:
            use_primary = self.use_primary

        verses = self._from_primary(context, use_primary)
        if verses:
            return ChapterResult(book, chapter, translation, source=API_BIBLE, verses=verses)

        verses = self.secondary.get_chapter(context.book, context.chapter, context.secondary_translation)
        if not verses:
            logger.warning("No verses found for %s %s (%s)", book, chapter, translation)
            return ChapterResult(book, chapter, translation)

        return ChapterResult(book, chapter, translation, source=BIBLE_API, verses=verses)

    async def get_chapter_async(
        self,
        book: str,
        chapter: int,
        translation: str = DEFAULT_TRANSLATION,
        use_primary: Optional[bool] = None,
    ) -> ChapterResult:
        """Coroutine form of get_chapter; the blocking requests run in a worker thread."""
        return await asyncio.to_thread(self.get_chapter, book, chapter, translation, use_primary)


@lru_cache(maxsize=None)
def default_service() -> ChapterService:
    return ChapterService.from_env()


def get_chapter(book: str, chapter: int, translation: str = DEFAULT_TRANSLATION) -> ChapterResult:
    """Fetch a chapter with the environment-configured default service."""
    return default_service().get_chapter(book, chapter, translation)


async def get_chapter_async(
    book: str, chapter: int, translation: str = DEFAULT_TRANSLATION
) -> ChapterResult:
    return await default_service().get_chapter_async(book, chapter, translation)
