from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from app.api.deps import get_profile_service
from app.schemas.profile import ProfileSaveResponse, ProfileUpdateRequest
from app.services.profile_repository import ProfileStoreError
from app.services.profile_service import ProfileService

router = APIRouter()


# ----------------------------
# SAVE / UPDATE PROFILE
# ----------------------------
@router.post("/profile", response_model=ProfileSaveResponse)
async def save_profile(
    payload: ProfileUpdateRequest,
    service: ProfileService = Depends(get_profile_service),
):
    logger.info(f"Profile update | user={payload.telegram_id}")

    try:
        await service.save_profile(payload)
    except ProfileStoreError:
        raise HTTPException(status_code=500, detail="Failed to save profile")

    return {"status": "ok"}
