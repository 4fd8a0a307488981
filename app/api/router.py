from fastapi import APIRouter

from app.api.routes import nearby
from app.api.routes import profile

api_router = APIRouter(prefix="/api")

api_router.include_router(profile.router, tags=["profile"])
api_router.include_router(nearby.router, tags=["nearby"])
