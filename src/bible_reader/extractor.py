"""
Verse extraction from api.bible chapter HTML.

Chapter markup is semi-structured: verse numbers are rendered as
``<span class="v">N</span>`` markers, and when verse spans are requested
each verse's content is wrapped in ``<span class="verse-span"
data-verse-id="BOOK.CH.N">``. The provider's renderer sometimes splits one
verse across several spans, and some chapters come back without spans at
all, so extraction is tried in tiers:

    1. verse-spans  - one entry per verse-span element
    2. paragraphs   - text between consecutive markers inside ``p.p`` blocks
    3. plain-text   - "N text N text ..." scan over the tag-stripped chapter

Each tier is a complete pass over the whole chapter. The first tier whose
output passes its acceptance check wins; the rest are not run.

Entities are decoded once, by the HTML parser. ``&amp;nbsp;`` therefore
comes out as the literal text ``&nbsp;`` and is not decoded a second time.
"""

import logging
import re
from typing import Callable, NamedTuple, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from .models import VerseRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

VERSE_ID_RE = re.compile(r"\.\d+\.(\d+)$", re.ASCII)
PLAIN_VERSE_RE = re.compile(r"(\d+)\s+([^0-9]+?)(?=\s+\d+\s+|$)", re.ASCII)
LEADING_DIGIT_RE = re.compile(r"^\d", re.ASCII)
MARKER_NUMBER_RE = re.compile(r"[0-9]+")
WHITESPACE_RE = re.compile(r"\s+")

# Verse-span output containing a shorter entry is treated as fragmented
MIN_SPAN_TEXT = 10
# Shortest text each tier will keep (exclusive)
MIN_SPAN_FRAGMENT = 1
MIN_PARAGRAPH_TEXT = 3
MIN_PLAIN_TEXT = 5


# =============================================================================
# Helpers
# =============================================================================

def clean_text(text: str) -> str:
    """Collapse all whitespace (including no-break spaces) and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def _parse(html: str) -> Optional[BeautifulSoup]:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning("Chapter markup rejected by parser: %s", e)
        return None


def _is_verse_marker(tag: Tag) -> bool:
    """True for ``<span class="v">N</span>`` where N is a verse number."""
    return (
        tag.name == "span"
        and "v" in tag.get("class", [])
        and MARKER_NUMBER_RE.fullmatch(tag.get_text(strip=True)) is not None
    )


def _within_marker(node: NavigableString, root: Tag) -> bool:
    for parent in node.parents:
        if parent is root:
            return False
        if _is_verse_marker(parent):
            return True
    return False


def _text_without_markers(tag: Tag) -> str:
    parts = []
    for node in tag.descendants:
        if not isinstance(node, NavigableString) or isinstance(node, Comment):
            continue
        if _within_marker(node, tag):
            continue
        parts.append(str(node))
    return "".join(parts)


# =============================================================================
# Tiers
# =============================================================================

def extract_verse_spans(html: str) -> list[VerseRecord]:
    """Tier 1: read each ``span.verse-span`` carrying a verse ID."""
    soup = _parse(html)
    if soup is None:
        return []

    verses: list[VerseRecord] = []
    seen: dict[int, VerseRecord] = {}

    for span in soup.find_all("span", class_="verse-span"):
        match = VERSE_ID_RE.search(span.get("data-verse-id", ""))
        if not match:
            continue

        number = int(match.group(1))
        text = clean_text(_text_without_markers(span))
        if len(text) <= MIN_SPAN_FRAGMENT:
            continue

        existing = seen.get(number)
        if existing is None:
            record = VerseRecord(verse=number, text=text)
            seen[number] = record
            verses.append(record)
        elif not LEADING_DIGIT_RE.match(text):
            # A continuation of a verse split across spans. Fragments that
            # start with a digit are a re-captured marker and are dropped.
            existing.text = f"{existing.text} {text}"

    return verses


def extract_paragraphs(html: str) -> list[VerseRecord]:
    """Tier 2: split ``p.p`` paragraphs on their verse-number markers."""
    soup = _parse(html)
    if soup is None:
        return []

    verses = []

    for paragraph in soup.find_all("p", class_="p"):
        for number, raw in _split_on_markers(paragraph):
            text = clean_text(raw)
            if len(text) > MIN_PARAGRAPH_TEXT:
                verses.append(VerseRecord(verse=number, text=text))

    return verses


def _split_on_markers(paragraph: Tag) -> list[tuple[int, str]]:
    """Pair each marker's number with the text up to the next marker."""
    segments: list[tuple[int, list[str]]] = []

    for node in paragraph.descendants:
        if isinstance(node, Tag):
            if _is_verse_marker(node):
                segments.append((int(node.get_text(strip=True)), []))
            continue
        # Text before the first marker belongs to no verse
        if not segments or isinstance(node, Comment):
            continue
        if _within_marker(node, paragraph):
            continue
        segments[-1][1].append(str(node))

    return [(number, "".join(parts)) for number, parts in segments]


def extract_plain_text(html: str) -> list[VerseRecord]:
    """Tier 3: scan the tag-stripped chapter for "number text" runs."""
    soup = _parse(html)
    if soup is None:
        return []

    content = clean_text(soup.get_text(" "))
    verses = []

    for match in PLAIN_VERSE_RE.finditer(content):
        text = match.group(2).strip()
        if len(text) > MIN_PLAIN_TEXT:
            verses.append(VerseRecord(verse=int(match.group(1)), text=text))

    return verses


def _spans_usable(verses: list[VerseRecord]) -> bool:
    return bool(verses) and all(len(v.text) >= MIN_SPAN_TEXT for v in verses)


class Tier(NamedTuple):
    name: str
    extract: Callable[[str], list[VerseRecord]]
    accept: Callable[[list[VerseRecord]], bool]


TIERS = (
    Tier("verse-spans", extract_verse_spans, _spans_usable),
    Tier("paragraphs", extract_paragraphs, bool),
    Tier("plain-text", extract_plain_text, bool),
)


# =============================================================================
# Public API
# =============================================================================

def extract_verses(html: str, tiers=TIERS) -> list[VerseRecord]:
    """
    Extract verse entries from one chapter's HTML.

    Args:
        html: Chapter markup as returned by api.bible
        tiers: Extraction strategies, tried in order

    Returns:
        Entries from the first tier that accepted its own output. Entries
        are unsorted and may repeat a verse number; an empty list means no
        tier found anything usable.
    """
    if not html or not html.strip():
        return []

    for tier in tiers:
        verses = tier.extract(html)
        if tier.accept(verses):
            logger.debug("Extracted %d verse entries with %s tier", len(verses), tier.name)
            return verses
        logger.debug("%s tier rejected (%d entries)", tier.name, len(verses))

    return []
