"""Reduce extracted verse entries to one record per verse number."""

import re
from typing import Iterable

from .models import VerseRecord

LEADING_NUMBER_RE = re.compile(r"^\d+\s*")


def strip_leading_number(text: str) -> str:
    """Remove a stray verse number captured at the start of the text."""
    return LEADING_NUMBER_RE.sub("", text).strip()


def normalize_verses(entries: Iterable[VerseRecord]) -> list[VerseRecord]:
    """
    Merge duplicate verse numbers and sort.

    Candidates numbered below 1 are discarded. Each remaining candidate has
    any leading number stripped, and empty candidates are discarded. For a
    repeated verse number the longest cleaned text wins, and the earlier
    candidate wins a tie.

    Returns:
        New VerseRecords, ascending by verse number, no duplicates
    """
    best: dict[int, str] = {}

    for entry in entries:
        if entry.verse < 1:
            continue
        text = strip_leading_number(entry.text)
        if not text:
            continue
        if len(text) > len(best.get(entry.verse, "")):
            best[entry.verse] = text

    return [VerseRecord(verse=number, text=best[number]) for number in sorted(best)]
