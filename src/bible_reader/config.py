"""Provider endpoints and environment-driven settings."""

import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Configuration
# =============================================================================

API_BIBLE_BASE = "https://api.scripture.api.bible/v1"
BIBLE_API_BASE = "https://bible-api.com"
DEFAULT_TIMEOUT = 10
DEFAULT_RETRIES = 2
USER_AGENT = "bible-reader/0.1"

API_KEY_ENV = "API_BIBLE_KEY"
USE_PRIMARY_ENV = "BIBLE_READER_USE_PRIMARY"
API_BIBLE_BASE_ENV = "API_BIBLE_BASE_URL"
BIBLE_API_BASE_ENV = "BIBLE_API_BASE_URL"

FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the chapter service."""

    api_key: Optional[str]
    use_primary: bool = True
    api_bible_base: str = API_BIBLE_BASE
    bible_api_base: str = BIBLE_API_BASE
    timeout: float = DEFAULT_TIMEOUT


def load_settings(environ=None) -> Settings:
    """Read settings from the environment (os.environ by default)."""
    env = os.environ if environ is None else environ
    use_primary = env.get(USE_PRIMARY_ENV, "1").strip().lower() not in FALSE_VALUES

    return Settings(
        api_key=env.get(API_KEY_ENV) or None,
        use_primary=use_primary,
        api_bible_base=env.get(API_BIBLE_BASE_ENV, API_BIBLE_BASE).rstrip("/"),
        bible_api_base=env.get(BIBLE_API_BASE_ENV, BIBLE_API_BASE).rstrip("/"),
    )
