"""Telegram avatar resolution behind a TTL cache.

``lookup`` returns an explicit :class:`AvatarLookup` so callers and tests
can tell a confirmed absence from a failed call. ``resolve`` collapses
that to ``url | None`` and never raises.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from loguru import logger

from app.services.avatar_cache import AvatarCache
from app.services.telegram import TelegramClient, TelegramError


class LookupStatus(str, Enum):
    found = "found"
    absent = "absent"
    failed = "failed"


@dataclass(frozen=True)
class AvatarLookup:
    status: LookupStatus
    url: Optional[str] = None
    error: Optional[Exception] = None
    from_cache: bool = False

    @classmethod
    def found(cls, url: str, from_cache: bool = False) -> "AvatarLookup":
        return cls(LookupStatus.found, url=url, from_cache=from_cache)

    @classmethod
    def absent(cls, from_cache: bool = False) -> "AvatarLookup":
        return cls(LookupStatus.absent, from_cache=from_cache)

    @classmethod
    def failed(cls, error: Exception) -> "AvatarLookup":
        return cls(LookupStatus.failed, error=error)


class AvatarResolver:
    def __init__(self, client: TelegramClient, cache: AvatarCache) -> None:
        self.client = client
        self.cache = cache
        self._inflight: Dict[str, asyncio.Future] = {}

    async def resolve(self, telegram_id: str) -> Optional[str]:
        result = await self.lookup(telegram_id)
        return result.url if result.status is LookupStatus.found else None

    async def lookup(self, telegram_id: str) -> AvatarLookup:
        entry = self.cache.get(telegram_id)
        if entry is not None:
            logger.debug(f"Avatar cache hit | user={telegram_id}")
            if entry.url is None:
                return AvatarLookup.absent(from_cache=True)
            return AvatarLookup.found(entry.url, from_cache=True)

        # one Bot API round trip per user at a time
        task = self._inflight.get(telegram_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(telegram_id))
            self._inflight[telegram_id] = task

        return await asyncio.shield(task)

    async def _fetch(self, telegram_id: str) -> AvatarLookup:
        try:
            file_id = await self.client.get_latest_photo_file_id(telegram_id)
            if not file_id:
                logger.debug(f"No Telegram profile photo | user={telegram_id}")
                self.cache.put(telegram_id, None)
                return AvatarLookup.absent()

            file_path = await self.client.get_file_path(file_id)
            if not file_path:
                logger.debug(f"Telegram file has no path | user={telegram_id}")
                self.cache.put(telegram_id, None)
                return AvatarLookup.absent()

            url = self.client.file_url(file_path)
            self.cache.put(telegram_id, url)
            return AvatarLookup.found(url)

        except TelegramError as e:
            logger.warning(f"Avatar lookup failed | user={telegram_id} | {e}")
            return AvatarLookup.failed(e)
        except Exception as e:
            logger.exception(f"Unexpected avatar lookup error | user={telegram_id}")
            return AvatarLookup.failed(e)
        finally:
            # cleared before the result is handed out
            self._inflight.pop(telegram_id, None)
