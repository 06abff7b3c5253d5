"""
인증 라우트

가입, 로그인, 토큰 갱신, 로그아웃
"""

import logging

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from web.dependencies import (
    CurrentUser,
    get_app_settings,
    get_current_user,
    get_db,
    get_db_write,
)
from web.models.requests import LoginRequest, RefreshTokenRequest, RegisterRequest
from web.models.responses import MessageResponse
from web.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=201)
async def register(
    request: RegisterRequest,
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
):
    """회원 가입 (기본 카테고리 생성 + 토큰 발급)"""
    service = AuthService(db, settings.auth)

    data = await service.register(request)

    return {"data": data, "message": "Registration successful"}


@router.post("/login")
async def login(
    request: LoginRequest,
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
):
    """로그인"""
    service = AuthService(db, settings.auth)

    data = await service.login(request.email, request.password)

    return {"data": data, "message": "Login successful"}


@router.post("/refresh")
async def refresh_token(
    request: RefreshTokenRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """refresh 토큰으로 새 토큰 쌍 발급"""
    service = AuthService(db, settings.auth)

    tokens = await service.refresh(request.refresh_token)

    return {"data": {"tokens": tokens}, "message": "Token refreshed successfully"}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: CurrentUser = Depends(get_current_user),
) -> MessageResponse:
    """로그아웃

    서버에 세션 상태가 없으므로 토큰 검증만 하고 성공 응답.
    """
    logger.info(f"User logged out: {user.user_id}")
    return MessageResponse(message="Logout successful")
