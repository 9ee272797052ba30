"""HTTP clients for the two Scripture content providers."""

import logging
from typing import Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import API_BIBLE_BASE, BIBLE_API_BASE, DEFAULT_RETRIES, DEFAULT_TIMEOUT, USER_AGENT
from .errors import ProviderError
from .extractor import clean_text
from .models import Bible, Book, Chapter, PassageVerse, SearchHit, VerseRecord, VerseRef

logger = logging.getLogger(__name__)

API_BIBLE = "api.bible"
BIBLE_API = "bible-api.com"


def build_session(retries: int = DEFAULT_RETRIES) -> requests.Session:
    """Create a keep-alive session that retries transient failures."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    })
    adapter = HTTPAdapter(
        max_retries=Retry(
            total=retries,
            backoff_factor=0.1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _content_params(
    content_type: str,
    include_verse_numbers: bool,
    include_verse_spans: bool,
    include_notes: Optional[bool],
    include_titles: Optional[bool],
    include_chapter_numbers: Optional[bool],
) -> dict:
    """Query parameters shared by the chapter and verse content endpoints."""
    params = {
        "content-type": content_type,
        "include-verse-numbers": _flag(include_verse_numbers),
        "include-verse-spans": _flag(include_verse_spans),
    }
    optional = {
        "include-notes": include_notes,
        "include-titles": include_titles,
        "include-chapter-numbers": include_chapter_numbers,
    }
    for key, value in optional.items():
        if value is not None:
            params[key] = _flag(value)
    return params


def _bible(item: dict) -> Bible:
    return Bible(
        id=item.get("id", ""),
        name=item.get("name", ""),
        abbreviation=item.get("abbreviation", ""),
        language=(item.get("language") or {}).get("name", ""),
    )


def _book(item: dict, bible_id: str) -> Book:
    return Book(
        id=item.get("id", ""),
        bible_id=item.get("bibleId", bible_id),
        abbreviation=item.get("abbreviation", ""),
        name=item.get("name", ""),
        name_long=item.get("nameLong", ""),
    )


def _chapter(item: dict, bible_id: str, book_id: str) -> Chapter:
    return Chapter(
        id=item.get("id", ""),
        bible_id=item.get("bibleId", bible_id),
        book_id=item.get("bookId", book_id),
        number=str(item.get("number", "")),
        reference=item.get("reference", ""),
    )


# =============================================================================
# api.bible (primary, HTML chapters)
# =============================================================================

class ApiBibleClient:
    """Client for the api.bible REST API. Every request needs an API key."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = API_BIBLE_BASE,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.timeout = timeout
        if not self.api_key:
            logger.warning("api.bible key not set; requests will be rejected")

    def _get(self, endpoint: str, params: Optional[dict] = None):
        """GET an endpoint and return the ``data`` member of its envelope."""
        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s %s", url, params or {})

        try:
            response = self.session.get(
                url,
                params=params,
                headers={"api-key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(API_BIBLE, str(e)) from e

        if not response.ok:
            logger.error("api.bible error (%s): %s", response.status_code, response.text[:200])
            raise ProviderError(API_BIBLE, response.reason or "request failed", response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(API_BIBLE, "response is not valid JSON") from e

        if not isinstance(payload, dict) or "data" not in payload:
            raise ProviderError(API_BIBLE, "response has no data envelope")
        return payload["data"]

    def _content(self, endpoint: str, params: dict, what: str) -> str:
        data = self._get(endpoint, params)
        if not isinstance(data, dict):
            raise ProviderError(API_BIBLE, f"{what} data is not an object")

        content = data.get("content") or ""
        if not isinstance(content, str):
            raise ProviderError(API_BIBLE, f"{what} content is not a string")
        return content

    def get_chapter_content(
        self,
        bible_id: str,
        chapter_id: str,
        content_type: str = "html",
        include_verse_numbers: bool = True,
        include_verse_spans: bool = True,
        include_notes: Optional[bool] = None,
        include_titles: Optional[bool] = None,
        include_chapter_numbers: Optional[bool] = None,
    ) -> str:
        """
        Fetch the rendered content of one chapter.

        Args:
            bible_id: api.bible Bible ID
            chapter_id: Chapter ID such as "JHN.3"

        Returns:
            The chapter's ``content`` string, possibly empty
        """
        params = _content_params(
            content_type, include_verse_numbers, include_verse_spans,
            include_notes, include_titles, include_chapter_numbers,
        )
        return self._content(f"/bibles/{bible_id}/chapters/{chapter_id}", params, "chapter")

    def get_verse(
        self,
        bible_id: str,
        verse_id: str,
        content_type: str = "html",
        include_verse_numbers: bool = True,
        include_verse_spans: bool = True,
        include_notes: Optional[bool] = None,
        include_titles: Optional[bool] = None,
        include_chapter_numbers: Optional[bool] = None,
    ) -> str:
        """Fetch the rendered content of one verse, e.g. "JHN.3.16"."""
        params = _content_params(
            content_type, include_verse_numbers, include_verse_spans,
            include_notes, include_titles, include_chapter_numbers,
        )
        return self._content(f"/bibles/{bible_id}/verses/{verse_id}", params, "verse")

    def get_bibles(self, language: Optional[str] = None) -> list[Bible]:
        params = {"language": language} if language else None
        return [_bible(item) for item in self._get("/bibles", params) or []]

    def get_bible(self, bible_id: str) -> Bible:
        data = self._get(f"/bibles/{bible_id}")
        if not isinstance(data, dict):
            raise ProviderError(API_BIBLE, "bible data is not an object")
        return _bible(data)

    def get_books(self, bible_id: str, include_chapters: bool = False) -> list[Book]:
        params = {"include-chapters": "true"} if include_chapters else None
        return [
            _book(item, bible_id)
            for item in self._get(f"/bibles/{bible_id}/books", params) or []
        ]

    def get_book(self, bible_id: str, book_id: str, include_chapters: bool = False) -> Book:
        params = {"include-chapters": "true"} if include_chapters else None
        data = self._get(f"/bibles/{bible_id}/books/{book_id}", params)
        if not isinstance(data, dict):
            raise ProviderError(API_BIBLE, "book data is not an object")
        return _book(data, bible_id)

    def get_chapters(self, bible_id: str, book_id: str) -> list[Chapter]:
        """List a book's chapters, including any "intro" pseudo-chapter."""
        return [
            _chapter(item, bible_id, book_id)
            for item in self._get(f"/bibles/{bible_id}/books/{book_id}/chapters") or []
        ]

    def get_verses(self, bible_id: str, chapter_id: str) -> list[VerseRef]:
        """List the verse IDs of one chapter. Use get_verse for their content."""
        return [
            VerseRef(
                id=item.get("id", ""),
                chapter_id=item.get("chapterId", chapter_id),
                reference=item.get("reference", ""),
            )
            for item in self._get(f"/bibles/{bible_id}/chapters/{chapter_id}/verses") or []
        ]

    def search(
        self,
        bible_id: str,
        query: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[SearchHit]:
        """Full-text search within one Bible."""
        params = {"query": query}
        if limit is not None:
            params["limit"] = str(limit)
        if offset is not None:
            params["offset"] = str(offset)

        data = self._get(f"/bibles/{bible_id}/search", params) or {}
        return [
            SearchHit(
                id=item.get("id", ""),
                reference=item.get("reference", ""),
                text=clean_text(item.get("text", "")),
            )
            for item in data.get("verses") or []
        ]

    def find_bible(self, language: str, name_pattern: Optional[str] = None) -> Optional[Bible]:
        """Find a Bible by language and, optionally, part of its name."""
        try:
            bibles = self.get_bibles(language)
        except ProviderError as e:
            logger.error("Error finding Bible: %s", e)
            return None

        if not name_pattern:
            return bibles[0] if bibles else None

        pattern = name_pattern.lower()
        for bible in bibles:
            if pattern in bible.name.lower() or pattern in bible.abbreviation.lower():
                return bible
        return None

    def find_book_id(self, bible_id: str, book_name: str) -> Optional[str]:
        """Look up a book's ID by its name, long name or abbreviation."""
        try:
            books = self.get_books(bible_id)
        except ProviderError as e:
            logger.error("Error finding book: %s", e)
            return None

        wanted = book_name.lower()
        for book in books:
            if wanted in (book.name.lower(), book.name_long.lower(), book.abbreviation.lower()):
                return book.id
        return None


# =============================================================================
# bible-api.com (secondary, JSON verses)
# =============================================================================

class BibleApiClient:
    """Client for bible-api.com. No key needed; failures come back empty."""

    def __init__(
        self,
        translation: str = "web",
        base_url: str = BIBLE_API_BASE,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.translation = translation
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.timeout = timeout

    def _get(self, path: str, translation: Optional[str] = None) -> Optional[dict]:
        url = f"{self.base_url}/{path}"
        params = {"translation": translation or self.translation}
        logger.debug("GET %s %s", url, params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("bible-api.com request failed for %s: %s", path, e)
            return None

        if not response.ok:
            logger.error("bible-api.com error (%s) for %s: %s", response.status_code, path, response.text[:200])
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.error("bible-api.com returned invalid JSON for %s", path)
            return None

        return payload if isinstance(payload, dict) else None

    def get_chapter(self, book: str, chapter: int, translation: Optional[str] = None) -> list[VerseRecord]:
        """
        Fetch a whole chapter as "Book+Chapter" (e.g., "Genesis+1").

        Returns:
            VerseRecords in ascending verse order, or [] on any failure
        """
        data = self._get(quote(f"{book}+{chapter}", safe="+"), translation)
        if data is None:
            return []

        verses = data.get("verses")
        if not isinstance(verses, list):
            logger.warning("bible-api.com response for %s %s has no verses", book, chapter)
            return []

        records: dict[int, VerseRecord] = {}
        for item in verses:
            if not isinstance(item, dict):
                continue
            try:
                number = int(item.get("verse"))
            except (TypeError, ValueError):
                continue
            text = clean_text(str(item.get("text") or ""))
            if number > 0 and text and number not in records:
                records[number] = VerseRecord(verse=number, text=text)

        return [records[n] for n in sorted(records)]

    def _passage_verse(self, data: dict, verse: dict, text: str, reference: str) -> PassageVerse:
        return PassageVerse(
            reference=reference,
            book_name=verse.get("book_name") or verse.get("book", ""),
            chapter=int(verse.get("chapter", 0)),
            verse=int(verse.get("verse", 0)),
            text=clean_text(text),
            translation_id=data.get("translation_id", self.translation),
        )

    def get_verse(self, reference: str) -> Optional[PassageVerse]:
        """Look up a single reference such as "John 3:16"."""
        data = self._get(quote(reference))
        if not data or not data.get("verses"):
            return None

        first = data["verses"][0]
        return self._passage_verse(
            data, first, data.get("text", first.get("text", "")), data.get("reference", reference)
        )

    def get_verses(self, references: list[str]) -> list[PassageVerse]:
        """Look up several references, skipping any that fail."""
        verses = (self.get_verse(reference) for reference in references)
        return [verse for verse in verses if verse is not None]

    def get_random_verse(self, book_ids: Optional[str] = None) -> Optional[PassageVerse]:
        """
        Fetch a random verse, optionally limited to comma-separated book IDs
        (e.g., "JHN,ROM").
        """
        path = f"data/{self.translation}/random"
        if book_ids:
            path = f"{path}/{quote(book_ids, safe=',')}"

        data = self._get(path)
        if not data:
            return None

        verse = data.get("random_verse")
        if not verse and data.get("verses"):
            verse = data["verses"][0]
        if not verse:
            return None

        reference = data.get("reference") or f"{verse.get('book', '')} {verse.get('chapter')}:{verse.get('verse')}"
        translation = data.get("translation")
        if isinstance(translation, dict) and translation.get("identifier"):
            data = {**data, "translation_id": translation["identifier"]}
        return self._passage_verse(data, verse, verse.get("text", ""), reference)
