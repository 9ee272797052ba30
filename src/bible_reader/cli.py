#!/usr/bin/env python3
"""
CLI for Bible Reader - Prints one chapter, from api.bible or bible-api.com.

Usage:
    python -m bible_reader John 3                  # World English Bible
    python -m bible_reader "1 Peter" 1 -t kjv      # Another translation
    python -m bible_reader Psalms 23 --json        # JSON output
    python -m bible_reader Genesis 1 --no-primary  # bible-api.com only
"""

import argparse
import logging
import sys

from .books import BIBLE_BOOKS, DEFAULT_TRANSLATION, TRANSLATIONS
from .errors import UnknownBookError, UnknownTranslationError
from .models import ChapterResult
from .service import ChapterService


# =============================================================================
# Configuration
# =============================================================================

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = 2


# =============================================================================
# Output
# =============================================================================

def print_chapter(result: ChapterResult) -> None:
    """Print a chapter as numbered verse lines."""
    print(f"📖 {result.reference} ({result.translation.upper()}, via {result.source})")
    print("=" * 60)
    for verse in result:
        print(f"{verse.verse:>3}  {verse.text}")


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print a Bible chapter from api.bible, falling back to bible-api.com."
    )
    parser.add_argument("book", help="Book name (e.g., 'John', '1 Peter')")
    parser.add_argument("chapter", type=int, help="Chapter number")
    parser.add_argument(
        "--translation", "-t",
        default=DEFAULT_TRANSLATION,
        help=f"Translation code: {', '.join(TRANSLATIONS)} (default: {DEFAULT_TRANSLATION})"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the chapter as JSON"
    )
    parser.add_argument(
        "--no-primary",
        action="store_true",
        help="Skip api.bible and use bible-api.com only"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log provider requests and fallback decisions"
    )
    return parser


def main(argv=None, service=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if service is None:
        service = ChapterService.from_env()
    options = {"use_primary": False} if args.no_primary else {}

    try:
        result = service.get_chapter(args.book, args.chapter, args.translation, **options)
    except UnknownBookError as e:
        print(f"❌ {e}", file=sys.stderr)
        print(f"   Valid books: {', '.join(BIBLE_BOOKS[:5])}...", file=sys.stderr)
        return EXIT_BAD_INPUT
    except (UnknownTranslationError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if not result:
        print(f"No verses found for {result.reference} ({args.translation})")
        return EXIT_NOT_FOUND

    if args.json:
        print(result.to_json())
    else:
        print_chapter(result)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
