from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from loguru import logger

from app.schemas.profile import ProfileOut
from app.services.avatar_resolver import AvatarResolver
from app.services.geo import haversine_m, has_location, within_radius


class ProximityMatcher:
    """Filters candidates to a fixed radius around the requester and
    refreshes avatars for the ones that survive."""

    def __init__(self, resolver: AvatarResolver, radius_meters: float = 2000) -> None:
        self.resolver = resolver
        self.radius_meters = radius_meters

    def admitted(self, me: ProfileOut, others: Iterable[ProfileOut]) -> List[ProfileOut]:
        if not has_location(me.latitude, me.longitude):
            return []

        out: List[ProfileOut] = []
        for u in others:
            if u.telegram_id == me.telegram_id:
                continue
            if not has_location(u.latitude, u.longitude):
                continue

            distance = haversine_m(me.latitude, me.longitude, u.latitude, u.longitude)
            if within_radius(distance, self.radius_meters):
                out.append(u)

        return out

    async def find_nearby(
        self,
        me: Optional[ProfileOut],
        others: Iterable[ProfileOut],
    ) -> List[ProfileOut]:
        if me is None:
            return []

        candidates = self.admitted(me, others)

        # fan out, join before building the response
        fresh = await asyncio.gather(
            *(self.resolver.resolve(u.telegram_id) for u in candidates)
        )

        nearby = [
            u.model_copy(update={"avatar_url": url}) if url else u
            for u, url in zip(candidates, fresh)
        ]

        logger.info(f"Nearby | user={me.telegram_id} | admitted={len(nearby)}")
        return nearby
