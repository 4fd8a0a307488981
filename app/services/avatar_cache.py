"""In-memory TTL cache for Telegram avatar URLs.

Keyed by Telegram user id. A cached ``None`` is a confirmed absence
(the user has no profile photo) and is served like any other hit.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from loguru import logger


@dataclass(frozen=True)
class CacheEntry:
    url: Optional[str]
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class AvatarCache:
    """Owned TTL map ``telegram_id -> CacheEntry``.

    Entries are replaced whole, so a reader never sees a half-written
    entry. When ``max_size`` is reached the entry closest to expiry is
    evicted to make room.
    """

    def __init__(
        self,
        default_ttl_seconds: float = 3600,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_seconds = default_ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, telegram_id: str) -> CacheEntry | None:
        """Return the live entry for ``telegram_id`` or None on a miss.

        Expired entries count as a miss and are dropped.
        """
        entry = self._entries.get(telegram_id)
        if entry is None:
            return None

        if not entry.is_valid(self._clock()):
            self._entries.pop(telegram_id, None)
            return None

        return entry

    def put(self, telegram_id: str, url: Optional[str], ttl_seconds: float | None = None) -> CacheEntry:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        entry = CacheEntry(url=url, expires_at=self._clock() + ttl)

        if (
            self.max_size
            and telegram_id not in self._entries
            and len(self._entries) >= self.max_size
        ):
            self._evict_one()

        self._entries[telegram_id] = entry
        return entry

    def _evict_one(self) -> None:
        victim = min(self._entries, key=lambda k: self._entries[k].expires_at)
        self._entries.pop(victim, None)
        logger.debug(f"Avatar cache full, evicted {victim}")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
