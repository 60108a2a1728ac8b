"""Configuration management via environment variables and .env file."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36"
)


class Config(BaseModel):
    """Application configuration loaded from environment."""

    # Network timeouts (seconds)
    resolver_timeout: float = 5.0
    analysis_timeout: float = 10.0
    team_page_timeout: float = 8.0
    contact_page_timeout: float = 5.0

    # Batch throttling
    batch_delay: float = 2.0  # Between chunks
    max_concurrent: int = 3

    # Contacts
    max_contacts: int = 5

    # Cache (in-memory, process lifetime)
    cache_ttl_hours: float = 24.0

    # HTTP
    user_agent: str = DEFAULT_USER_AGENT
    max_redirects: int = 5

    log_level: str = "WARNING"


def load_config() -> Config:
    """Load configuration from .env file and environment variables.

    Environment variables override .env values. Nothing is mandatory:
    research runs entirely against public websites.
    """
    load_dotenv()

    return Config(
        resolver_timeout=_env_float("RESOLVER_TIMEOUT", 5.0),
        analysis_timeout=_env_float("RESEARCH_TIMEOUT", 10.0),
        team_page_timeout=_env_float("TEAM_PAGE_TIMEOUT", 8.0),
        contact_page_timeout=_env_float("CONTACT_PAGE_TIMEOUT", 5.0),
        batch_delay=_env_float("RATE_LIMIT_DELAY", 2.0),
        max_concurrent=_env_int("MAX_CONCURRENT", 3),
        max_contacts=_env_int("MAX_CONTACTS", 5),
        cache_ttl_hours=_env_float("CACHE_TTL_HOURS", 24.0),
        user_agent=os.getenv("RESEARCH_USER_AGENT", DEFAULT_USER_AGENT),
        max_redirects=_env_int("MAX_REDIRECTS", 5),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
