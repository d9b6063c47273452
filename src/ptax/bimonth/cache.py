"""
Rate Cache - Single-slot, period-keyed TTL cache

A closed bimonth's quotation never changes, so the TTL is long. The period
key, not elapsed time, is what invalidates the slot when a new bimonth starts.
"""

import time
from collections.abc import Callable

from ptax.models import CacheEntry, ResolvedRate


class RateCache:
    """Holds at most one resolved rate, for exactly one period."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entry: CacheEntry | None = None

    def get(self, period_key: str) -> CacheEntry | None:
        """Return the entry only if it belongs to period_key and has not expired."""
        entry = self._entry
        if entry is None:
            return None
        if entry.period_key != period_key or self._clock() >= entry.expires_at:
            return None
        return entry

    def put(self, period_key: str, payload: ResolvedRate, ttl: float) -> CacheEntry:
        """Overwrite the slot; ttl is in seconds."""
        self._entry = CacheEntry(
            payload=payload,
            period_key=period_key,
            expires_at=self._clock() + ttl,
        )
        return self._entry

    def clear(self) -> None:
        """Empty the slot."""
        self._entry = None

    @property
    def period_key(self) -> str | None:
        """Key of the stored entry, stale or not."""
        return self._entry.period_key if self._entry else None
