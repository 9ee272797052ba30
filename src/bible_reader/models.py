"""Data models for chapter retrieval."""

import json
from dataclasses import dataclass, field, asdict
from typing import Iterator, Optional


@dataclass
class VerseRecord:
    """A single verse of a chapter as plain text."""

    verse: int  # Verse number, unique within a chapter
    text: str  # Plain text, no markup, whitespace collapsed

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ChapterResult:
    """Ordered verses of one chapter plus where they came from."""

    book: str  # e.g., "John"
    chapter: int
    translation: str  # e.g., "web"
    source: Optional[str] = None  # "api.bible", "bible-api.com" or None if nothing was found
    verses: list[VerseRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.verses)

    def __iter__(self) -> Iterator[VerseRecord]:
        return iter(self.verses)

    def __bool__(self) -> bool:
        return bool(self.verses)

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass(frozen=True)
class ProviderContext:
    """Everything needed to request one chapter, rebuilt on every call."""

    book: str  # Canonical book name, e.g., "Song of Solomon"
    book_code: str  # Primary provider code, e.g., "SNG"
    chapter: int
    translation: str  # Supported translation code, e.g., "web"
    bible_id: Optional[str]  # Primary provider Bible ID, None if unavailable
    secondary_translation: str  # Translation code understood by bible-api.com

    @property
    def chapter_id(self) -> str:
        return f"{self.book_code}.{self.chapter}"


@dataclass
class Bible:
    """A Bible version published by the primary provider."""

    id: str
    name: str
    abbreviation: str
    language: str  # Language name, e.g., "English"


@dataclass
class Book:
    """A book within one of the primary provider's Bibles."""

    id: str  # e.g., "JHN"
    bible_id: str
    abbreviation: str
    name: str
    name_long: str


@dataclass
class Chapter:
    """A chapter listed for one of the primary provider's books."""

    id: str  # e.g., "JHN.3"
    bible_id: str
    book_id: str
    number: str  # "intro" for introductions, so not an int
    reference: str  # e.g., "John 3"


@dataclass
class VerseRef:
    """A verse listed for one of the primary provider's chapters, without text."""

    id: str  # e.g., "JHN.3.16"
    chapter_id: str
    reference: str


@dataclass
class SearchHit:
    """A verse returned by a primary provider text search."""

    id: str  # e.g., "JHN.3.16"
    reference: str  # e.g., "John 3:16"
    text: str


@dataclass
class PassageVerse:
    """A verse looked up by reference on the secondary provider."""

    reference: str  # e.g., "John 3:16"
    book_name: str
    chapter: int
    verse: int
    text: str
    translation_id: str

    def to_dict(self) -> dict:
        return asdict(self)
