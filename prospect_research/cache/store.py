"""In-memory, TTL-bound cache of research results keyed by company name."""

from __future__ import annotations

import logging
import time
from typing import Callable

from prospect_research.models import ResearchResult

logger = logging.getLogger(__name__)


class ResearchCache:
    """Process-lifetime cache: nothing is written to disk.

    Keys are the stripped, lower-cased company name, so "Acme" and
    " ACME " share an entry.
    """

    def __init__(
        self,
        ttl_hours: float = 24.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_hours * 3600
        self._clock = clock
        self._entries: dict[str, tuple[float, ResearchResult]] = {}

    def get_company(self, company_name: str) -> ResearchResult | None:
        """Return the cached result, or None if missing or expired."""
        key = _key(company_name)
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, result = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return result

    def set_company(self, company_name: str, result: ResearchResult) -> None:
        self._entries[_key(company_name)] = (self._clock(), result)

    def clear_company(self, company_name: str) -> None:
        """Remove a specific company from cache."""
        self._entries.pop(_key(company_name), None)

    def clear_all(self) -> None:
        self._entries.clear()

    def stats(self) -> dict:
        """Return live/expired entry counts."""
        now = self._clock()
        live = sum(
            1 for stored_at, _ in self._entries.values()
            if now - stored_at < self.ttl_seconds
        )
        return {
            "companies": live,
            "expired": len(self._entries) - live,
            "ttl_hours": self.ttl_seconds / 3600,
        }

    def __len__(self) -> int:
        return len(self._entries)


def _key(company_name: str) -> str:
    return company_name.strip().lower()
