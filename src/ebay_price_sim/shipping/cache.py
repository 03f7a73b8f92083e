"""Short-lived in-memory cache for per-destination rate results."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RatesResult

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60.0


def _format_number(value: float) -> str:
    # 500 and 500.0 must share a key
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_cache_key(
    destination: str,
    weight: float,
    width: float,
    height: float,
    depth: float,
    postal: str,
) -> str:
    """Fingerprint of one rate request.

    Postal codes are compared case- and whitespace-insensitively; every
    other component is taken as-is.
    """
    parts = [
        destination,
        _format_number(weight),
        _format_number(width),
        _format_number(height),
        _format_number(depth),
        postal.strip().upper(),
    ]
    return ":".join(parts)


@dataclass(frozen=True)
class CacheEntry:
    value: RatesResult
    expires_at: float


class RateCache:
    """Process-local TTL cache keyed by :func:`build_cache_key`.

    Expired entries are only removed lazily, by ``prune`` before each
    lookup. All methods are synchronous, so concurrent tasks on the same
    event loop never observe a half-written entry.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> RatesResult | None:
        now = self._clock()
        self.prune(now)
        entry = self._entries.get(key)
        if entry is not None and now < entry.expires_at:
            return entry.value
        return None

    def put(self, key: str, result: RatesResult) -> None:
        self._entries[key] = CacheEntry(value=result, expires_at=self._clock() + self._ttl)

    def prune(self, now: float | None = None) -> int:
        """Drop entries whose expiry is at or before ``now``. Returns the count removed."""
        if now is None:
            now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Pruned %d expired rate cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
