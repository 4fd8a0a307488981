from __future__ import annotations

from typing import List

from loguru import logger
from starlette.concurrency import run_in_threadpool

from app.schemas.profile import ProfileOut, ProfileUpdateRequest
from app.services.avatar_resolver import AvatarResolver
from app.services.profile_repository import ProfileRepository
from app.services.proximity import ProximityMatcher


class ProfileService:
    """Write path (resolve avatar, upsert) and read path (nearby query)."""

    def __init__(
        self,
        repository: ProfileRepository,
        resolver: AvatarResolver,
        matcher: ProximityMatcher,
    ) -> None:
        self.repository = repository
        self.resolver = resolver
        self.matcher = matcher

    async def save_profile(self, payload: ProfileUpdateRequest) -> None:
        avatar_url = await self.resolver.resolve(payload.telegram_id)

        await run_in_threadpool(self.repository.upsert_profile, payload, avatar_url)
        logger.info(f"Profile saved | user={payload.telegram_id} | avatar={'yes' if avatar_url else 'no'}")

    async def nearby(self, telegram_id: str) -> List[ProfileOut]:
        me = await run_in_threadpool(self.repository.get_profile, telegram_id)
        if me is None:
            logger.info(f"Nearby for unknown user={telegram_id}")
            return []

        others = await run_in_threadpool(self.repository.list_other_profiles, telegram_id)
        return await self.matcher.find_nearby(me, others)
