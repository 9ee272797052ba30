"""
Tests for chapter retrieval and provider fallback.

Covers:
- primary success path (extraction + normalization)
- fallback on empty content, provider errors and unparseable content
- translations without a primary Bible and the use_primary switch
- total failure resolving to an empty result
- configuration errors that are allowed to raise
"""

import unittest
from unittest.mock import MagicMock

from bible_reader.clients import ApiBibleClient, BibleApiClient
from bible_reader.errors import ProviderError, UnknownBookError, UnknownTranslationError
from bible_reader.models import ChapterResult, VerseRecord
from bible_reader.service import ChapterService, build_context

from tests import fixtures

WEB_BIBLE_ID = "9879dbb7cfe39e4d-04"


# ============================================================================
# MOCK FIXTURES
# ============================================================================

def create_service(content="", primary_error=None, fallback=None, use_primary=True):
    """Create a ChapterService over mock provider clients.

    Args:
        content: HTML returned by the primary provider
        primary_error: Exception raised by the primary provider instead
        fallback: VerseRecords returned by the secondary provider
    """
    primary = MagicMock(spec=ApiBibleClient)
    if primary_error is not None:
        primary.get_chapter_content.side_effect = primary_error
    else:
        primary.get_chapter_content.return_value = content

    secondary = MagicMock(spec=BibleApiClient)
    secondary.get_chapter.return_value = fallback or []

    return ChapterService(primary, secondary, use_primary=use_primary), primary, secondary


FALLBACK = [
    VerseRecord(verse=1, text="There was a man of the Pharisees named Nicodemus."),
    VerseRecord(verse=2, text="He came to Jesus by night."),
]


# ============================================================================
# Context
# ============================================================================

class TestBuildContext(unittest.TestCase):

    def test_resolves_codes(self):
        context = build_context("Song of Solomon", 2, "kjv")
        self.assertEqual(context.chapter_id, "SNG.2")
        self.assertEqual(context.bible_id, "de4e12af7f28f599-02")
        self.assertEqual(context.secondary_translation, "kjv")

    def test_translation_without_primary_bible(self):
        self.assertIsNone(build_context("Genesis", 1, "lsg").bible_id)

    def test_unknown_book(self):
        with self.assertRaises(UnknownBookError):
            build_context("Hezekiah", 1, "web")

    def test_unknown_translation(self):
        with self.assertRaises(UnknownTranslationError):
            build_context("John", 3, "niv")

    def test_invalid_chapter(self):
        for chapter in (0, -3, True, "3"):
            with self.assertRaises(ValueError):
                build_context("John", chapter, "web")


# ============================================================================
# Primary provider
# ============================================================================

class TestPrimaryProvider(unittest.TestCase):

    def test_full_success(self):
        service, primary, secondary = create_service(content=fixtures.JOHN_3_16)

        result = service.get_chapter("John", 3, "web")

        self.assertEqual(result.verses, [VerseRecord(verse=16, text="For God so loved the world...")])
        self.assertEqual(result.source, "api.bible")
        primary.get_chapter_content.assert_called_once_with(WEB_BIBLE_ID, "JHN.3")
        secondary.get_chapter.assert_not_called()

    def test_result_is_sorted_and_unique(self):
        service, _, _ = create_service(content=fixtures.PSALM_23)

        result = service.get_chapter("Psalms", 23)

        self.assertEqual([v.verse for v in result], [1, 2, 3])
        self.assertEqual(result.verses[0].text, "Yahweh is my shepherd; I shall lack nothing.")

    def test_fragmented_spans_use_paragraph_text(self):
        service, _, _ = create_service(content=fixtures.SPLIT_SPANS)

        result = service.get_chapter("Psalms", 23)

        self.assertEqual(result.verses[1], VerseRecord(verse=2, text="He makes me lie down in green pastures."))


# ============================================================================
# Fallback
# ============================================================================

class TestFallback(unittest.TestCase):

    def test_empty_content_uses_secondary(self):
        service, primary, secondary = create_service(content="", fallback=FALLBACK)

        result = service.get_chapter("John", 3, "web")

        primary.get_chapter_content.assert_called_once()
        secondary.get_chapter.assert_called_once_with("John", 3, "web")
        self.assertEqual(result.verses, FALLBACK)
        self.assertEqual(result.source, "bible-api.com")

    def test_provider_error_uses_secondary(self):
        error = ProviderError("api.bible", "Unauthorized", 401)
        service, _, secondary = create_service(primary_error=error, fallback=FALLBACK)

        result = service.get_chapter("John", 3)

        secondary.get_chapter.assert_called_once()
        self.assertEqual(result.verses, FALLBACK)

    def test_unparseable_content_uses_secondary(self):
        service, _, secondary = create_service(content=fixtures.NO_VERSES, fallback=FALLBACK)

        result = service.get_chapter("John", 3)

        secondary.get_chapter.assert_called_once()
        self.assertEqual(result.source, "bible-api.com")

    def test_translation_without_primary_bible_skips_primary(self):
        service, primary, secondary = create_service(fallback=FALLBACK)

        result = service.get_chapter("John", 3, "lsg")

        primary.get_chapter_content.assert_not_called()
        secondary.get_chapter.assert_called_once_with("John", 3, "lsg")
        self.assertEqual(result.translation, "lsg")

    def test_disabled_primary_skips_primary(self):
        service, primary, secondary = create_service(
            content=fixtures.JOHN_3_16, fallback=FALLBACK, use_primary=False
        )

        result = service.get_chapter("John", 3)

        primary.get_chapter_content.assert_not_called()
        self.assertEqual(result.verses, FALLBACK)

    def test_per_call_override_leaves_service_unchanged(self):
        service, primary, secondary = create_service(content=fixtures.JOHN_3_16, fallback=FALLBACK)

        result = service.get_chapter("John", 3, use_primary=False)

        primary.get_chapter_content.assert_not_called()
        self.assertEqual(result.verses, FALLBACK)
        self.assertTrue(service.use_primary)
        self.assertEqual(service.get_chapter("John", 3).source, "api.bible")

    def test_non_ascii_marker_falls_back_instead_of_raising(self):
        html = '<p class="p"><span class="v">²</span>Some verse text here.</p>'
        service, _, secondary = create_service(content=html, fallback=FALLBACK)

        result = service.get_chapter("John", 3)

        secondary.get_chapter.assert_called_once()
        self.assertEqual(result.verses, FALLBACK)

    def test_verse_zero_is_dropped_from_primary_result(self):
        html = (
            '<span class="verse-span" data-verse-id="JHN.3.0">Zero numbered verse text.</span>'
            '<span class="verse-span" data-verse-id="JHN.3.16">For God so loved the world...</span>'
        )
        service, _, _ = create_service(content=html)

        result = service.get_chapter("John", 3)

        self.assertEqual([v.verse for v in result], [16])

    def test_no_primary_client_configured(self):
        secondary = MagicMock(spec=BibleApiClient)
        secondary.get_chapter.return_value = FALLBACK

        result = ChapterService(None, secondary).get_chapter("John", 3)

        self.assertEqual(result.verses, FALLBACK)

    def test_both_empty_returns_empty_result(self):
        service, _, _ = create_service(content="")

        result = service.get_chapter("John", 3)

        self.assertIsInstance(result, ChapterResult)
        self.assertEqual(result.verses, [])
        self.assertIsNone(result.source)
        self.assertFalse(result)

    def test_unknown_book_raises_before_any_request(self):
        service, primary, secondary = create_service(content=fixtures.JOHN_3_16)

        with self.assertRaises(UnknownBookError):
            service.get_chapter("Hezekiah", 1)

        primary.get_chapter_content.assert_not_called()
        secondary.get_chapter.assert_not_called()


# ============================================================================
# Real clients over a failing session
# ============================================================================

def failing_session(status=503):
    response = MagicMock()
    response.ok = False
    response.status_code = status
    response.reason = "Service Unavailable"
    response.text = "down"
    session = MagicMock()
    session.get.return_value = response
    return session


class TestTotalFailure(unittest.TestCase):

    def test_both_providers_non_2xx(self):
        session = failing_session()
        service = ChapterService(
            ApiBibleClient("key", session=session),
            BibleApiClient(session=session),
        )

        result = service.get_chapter("John", 3, "web")

        self.assertEqual(result.verses, [])
        self.assertEqual(session.get.call_count, 2)


# ============================================================================
# Async and construction
# ============================================================================

class TestAsync(unittest.IsolatedAsyncioTestCase):

    async def test_get_chapter_async(self):
        service, _, _ = create_service(content=fixtures.JOHN_3_16)

        result = await service.get_chapter_async("John", 3, "web")

        self.assertEqual(result.verses, [VerseRecord(verse=16, text="For God so loved the world...")])

    async def test_async_failure_resolves_empty(self):
        service, _, _ = create_service(primary_error=ProviderError("api.bible", "boom"))

        result = await service.get_chapter_async("John", 3)

        self.assertEqual(result.verses, [])


class TestFromEnv(unittest.TestCase):

    def test_with_key(self):
        service = ChapterService.from_env({"API_BIBLE_KEY": "secret"})
        self.assertIsInstance(service.primary, ApiBibleClient)
        self.assertEqual(service.primary.api_key, "secret")
        self.assertTrue(service.use_primary)

    def test_without_key(self):
        service = ChapterService.from_env({})
        self.assertIsNone(service.primary)
        self.assertIsInstance(service.secondary, BibleApiClient)

    def test_primary_disabled(self):
        service = ChapterService.from_env({"API_BIBLE_KEY": "secret", "BIBLE_READER_USE_PRIMARY": "false"})
        self.assertFalse(service.use_primary)

    def test_base_url_override(self):
        service = ChapterService.from_env({"BIBLE_API_BASE_URL": "http://localhost:8080/"})
        self.assertEqual(service.secondary.base_url, "http://localhost:8080")


if __name__ == "__main__":
    unittest.main()
