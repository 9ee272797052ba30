"""Exceptions raised by the chapter retrieval pipeline."""

from typing import Optional


class BibleReaderError(Exception):
    """Base class for all bible_reader errors."""


class ProviderError(BibleReaderError):
    """A content provider could not be reached or returned something unusable."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.status_code = status_code
        detail = f"{provider}: {message}"
        if status_code is not None:
            detail = f"{detail} (HTTP {status_code})"
        super().__init__(detail)


class UnknownBookError(BibleReaderError, KeyError):
    """A book name has no entry in the static book code table."""

    def __init__(self, book: str):
        self.book = book
        super().__init__(f"Unknown book: {book}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownTranslationError(BibleReaderError, ValueError):
    """A translation code is not one of the supported translations."""

    def __init__(self, translation: str):
        self.translation = translation
        super().__init__(f"Unknown translation: {translation}")
