from __future__ import annotations

from typing import List, Optional

from loguru import logger
from sqlalchemy import JSON, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.models.profile import User
from app.schemas.profile import ProfileOut, ProfileUpdateRequest


class ProfileStoreError(Exception):
    """The profile store could not complete a read or write."""


# avatar_url keeps the stored value when the new lookup came back empty
UPSERT_PROFILE_SQL = text(
    """
    INSERT INTO users (
        telegram_id,
        name,
        interests,
        bio,
        avatar_url,
        latitude,
        longitude,
        last_seen
    )
    VALUES (
        :telegram_id,
        :name,
        :interests,
        :bio,
        :avatar_url,
        :latitude,
        :longitude,
        CURRENT_TIMESTAMP
    )
    ON CONFLICT (telegram_id) DO UPDATE SET
        name = excluded.name,
        interests = excluded.interests,
        bio = excluded.bio,
        avatar_url = COALESCE(excluded.avatar_url, users.avatar_url),
        latitude = excluded.latitude,
        longitude = excluded.longitude,
        last_seen = CURRENT_TIMESTAMP
    """
).bindparams(bindparam("interests", type_=JSON))


class ProfileRepository:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def upsert_profile(self, payload: ProfileUpdateRequest, avatar_url: Optional[str]) -> None:
        params = payload.model_dump()
        params["avatar_url"] = avatar_url

        with self._session_factory() as db:
            try:
                db.execute(UPSERT_PROFILE_SQL, params)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Profile upsert failed | user={payload.telegram_id} | {e}")
                raise ProfileStoreError("Failed to save profile") from e

    def get_profile(self, telegram_id: str) -> Optional[ProfileOut]:
        with self._session_factory() as db:
            try:
                user = db.get(User, telegram_id)
            except SQLAlchemyError as e:
                logger.error(f"Profile read failed | user={telegram_id} | {e}")
                raise ProfileStoreError("Failed to load profile") from e

            return ProfileOut.model_validate(user) if user else None

    def list_other_profiles(self, exclude_telegram_id: str) -> List[ProfileOut]:
        with self._session_factory() as db:
            try:
                users = (
                    db.query(User)
                    .filter(User.telegram_id != exclude_telegram_id)
                    .all()
                )
            except SQLAlchemyError as e:
                logger.error(f"Profile list failed | exclude={exclude_telegram_id} | {e}")
                raise ProfileStoreError("Failed to load profiles") from e

            return [ProfileOut.model_validate(u) for u in users]
