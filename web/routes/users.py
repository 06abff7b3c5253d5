"""
사용자 라우트

프로필 / 환경설정
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import PreferencesUpdateRequest, ProfileUpdateRequest
from web.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/profile")
async def get_profile(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """내 프로필 조회"""
    service = UserService(db)

    return {"data": await service.get_profile(user.user_id)}


@router.put("/profile")
async def update_profile(
    request: ProfileUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """프로필 수정"""
    service = UserService(db)

    data = await service.update_profile(user.user_id, request)

    return {"data": data, "message": "Profile updated successfully"}


@router.put("/preferences")
async def update_preferences(
    request: PreferencesUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """환경설정 수정"""
    service = UserService(db)

    data = await service.update_preferences(user.user_id, request)

    return {"data": data, "message": "Preferences updated successfully"}
