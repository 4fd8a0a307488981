from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_profile_service
from app.schemas.profile import ProfileOut
from app.services.profile_repository import ProfileStoreError
from app.services.profile_service import ProfileService

router = APIRouter()


# ----------------------------
# NEARBY (hard radius, no ranking)
# ----------------------------
@router.get("/nearby/{telegram_id}", response_model=List[ProfileOut])
async def nearby(
    telegram_id: str,
    service: ProfileService = Depends(get_profile_service),
):
    # avatar failures never fail this call; an unreachable store is a 500
    try:
        return await service.nearby(telegram_id)
    except ProfileStoreError:
        raise HTTPException(status_code=500, detail="Failed to load nearby profiles")
