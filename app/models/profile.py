from sqlalchemy import Column, String, Float, DateTime, JSON, Index
from sqlalchemy.sql import func

from app.core.db import Base


class User(Base):
    __tablename__ = "users"

    # Telegram user id
    telegram_id = Column(String, primary_key=True)

    name = Column(String, nullable=True)
    bio = Column(String, nullable=True)

    # tags like ["hiking","coffee"]
    interests = Column(JSON, nullable=True)

    # last successfully resolved Telegram avatar, never reset to NULL
    avatar_url = Column(String, nullable=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    last_seen = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_users_location", "latitude", "longitude"),
    )
